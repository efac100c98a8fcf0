"""Tests for the push gateway port, the fake adapter and the registry."""

import pytest
from pushnotify.errors import GatewayFault
from pushnotify.gateway import get_gateway, reset_gateway, set_gateway
from pushnotify.gateway.fake_push import FakePushGateway
from pushnotify.gateway.push_port import MulticastMessage, MulticastResult, SendResponse


def _message(tokens=("TOK1",)):
    return MulticastMessage(
        title="new join request",
        body="Kim has requested to join.",
        data={"type": "PENDING_APPROVAL", "groupId": "g1", "userId": ""},
        tokens=list(tokens),
    )


class TestFakePushGateway:
    def setup_method(self):
        self.gateway = FakePushGateway()

    def test_send_records_message(self):
        result = self.gateway.send_multicast(_message())
        assert result.success_count == 1
        assert result.failure_count == 0
        assert len(self.gateway.sent_messages) == 1
        assert self.gateway.sent_tokens == ["TOK1"]

    def test_each_token_gets_a_response(self):
        result = self.gateway.send_multicast(_message(tokens=("A", "B", "C")))
        assert [r.token for r in result.responses] == ["A", "B", "C"]
        assert all(r.message_id.startswith("push-") for r in result.responses)

    def test_failing_tokens_are_tallied_not_raised(self):
        self.gateway.configure(failing_tokens={"B"})
        result = self.gateway.send_multicast(_message(tokens=("A", "B")))
        assert result.success_count == 1
        assert result.failure_count == 1
        failed = [r for r in result.responses if not r.success]
        assert failed[0].token == "B"
        assert failed[0].error is not None

    def test_fault_raises_and_records_nothing(self):
        self.gateway.configure(fault="messaging/server-unavailable")
        with pytest.raises(GatewayFault, match="server-unavailable"):
            self.gateway.send_multicast(_message())
        assert self.gateway.sent_messages == []

    def test_reset(self):
        self.gateway.send_multicast(_message())
        self.gateway.configure(failing_tokens={"TOK1"}, fault="boom")
        self.gateway.reset()
        assert self.gateway.sent_messages == []
        assert self.gateway.failing_tokens == set()
        assert self.gateway.fault is None


class TestMulticastResult:
    def test_from_responses_counts(self):
        result = MulticastResult.from_responses(
            [
                SendResponse(token="a", success=True),
                SendResponse(token="b", success=False, error="unregistered"),
                SendResponse(token="c", success=True),
            ]
        )
        assert result.success_count == 2
        assert result.failure_count == 1

    def test_from_no_responses(self):
        result = MulticastResult.from_responses([])
        assert (result.success_count, result.failure_count) == (0, 0)


class TestGatewayRegistry:
    def setup_method(self):
        reset_gateway()

    def teardown_method(self):
        reset_gateway()

    def test_default_is_fake(self):
        assert isinstance(get_gateway(), FakePushGateway)

    def test_singleton(self):
        assert get_gateway() is get_gateway()

    def test_set_gateway_overrides(self):
        custom = FakePushGateway()
        set_gateway(custom)
        assert get_gateway() is custom

    def test_reset_creates_fresh_instance(self):
        first = get_gateway()
        reset_gateway()
        assert get_gateway() is not first
