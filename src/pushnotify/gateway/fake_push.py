"""Fake push gateway — records multicast sends in memory for testing."""

from uuid import uuid4

from pushnotify.errors import GatewayFault
from pushnotify.gateway.push_port import (
    MulticastMessage,
    MulticastResult,
    PushGatewayPort,
    SendResponse,
)


class FakePushGateway(PushGatewayPort):
    """Gateway that delivers nowhere; every send is kept for test assertions."""

    def __init__(self):
        self.sent_messages: list[MulticastMessage] = []
        self.failing_tokens: set[str] = set()
        self.fault: str | None = None

    def configure(self, failing_tokens=(), fault: str | None = None):
        """Make given tokens fail individually, or make the whole call raise ``fault``."""
        self.failing_tokens = set(failing_tokens)
        self.fault = fault

    def send_multicast(self, message: MulticastMessage) -> MulticastResult:
        if self.fault is not None:
            raise GatewayFault(self.fault)

        self.sent_messages.append(message)

        responses = []
        for token in message.tokens:
            if token in self.failing_tokens:
                responses.append(
                    SendResponse(token=token, success=False, error="Requested entity was not found.")
                )
            else:
                responses.append(
                    SendResponse(token=token, success=True, message_id=f"push-{uuid4().hex[:12]}")
                )
        return MulticastResult.from_responses(responses)

    @property
    def sent_tokens(self) -> list[str]:
        return [token for message in self.sent_messages for token in message.tokens]

    def reset(self):
        """Clear sent messages and failure configuration (useful between tests)."""
        self.sent_messages.clear()
        self.failing_tokens = set()
        self.fault = None
