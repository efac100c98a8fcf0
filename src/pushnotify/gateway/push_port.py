"""Push gateway port — abstract interface for multicast push delivery."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class MulticastMessage:
    """One push addressed to several device tokens at once."""

    title: str
    body: str
    data: dict[str, str]
    tokens: list[str]


@dataclass(frozen=True)
class SendResponse:
    """Outcome of delivering the message to a single token."""

    token: str
    success: bool
    message_id: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class MulticastResult:
    success_count: int
    failure_count: int
    responses: list[SendResponse] = field(default_factory=list)

    @classmethod
    def from_responses(cls, responses: list[SendResponse]) -> "MulticastResult":
        successes = sum(1 for r in responses if r.success)
        return cls(
            success_count=successes,
            failure_count=len(responses) - successes,
            responses=list(responses),
        )


class PushGatewayPort(ABC):
    """Abstract interface for multicast push gateway adapters."""

    @abstractmethod
    def send_multicast(self, message: MulticastMessage) -> MulticastResult:
        """Send ``message`` to every token in it.

        Per-token failures are tallied in the result and do not raise.
        Raises:
            GatewayFault (or any exception) when the call itself fails.
        """
        ...
