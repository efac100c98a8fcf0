"""Push gateway registry.

Provides singleton access to the push gateway adapter. The fake gateway is
used by default; a real provider adapter implements ``PushGatewayPort`` and
is installed with ``set_gateway`` at process start.
"""

from pushnotify.gateway.push_port import PushGatewayPort

_gateway: PushGatewayPort | None = None


def get_gateway() -> PushGatewayPort:
    """Return the configured push gateway (created lazily)."""
    global _gateway
    if _gateway is None:
        from pushnotify.gateway.fake_push import FakePushGateway

        _gateway = FakePushGateway()
    return _gateway


def set_gateway(gateway: PushGatewayPort) -> None:
    global _gateway
    _gateway = gateway


def reset_gateway():
    """Drop the gateway singleton (useful for testing)."""
    global _gateway
    _gateway = None
