"""Faults raised while dispatching a notification record.

Resolution and gateway faults are recorded on the record's ``error`` field
and never escape ``DispatchEngine.dispatch``. A write-back fault is the
only one that propagates, so the event can be redelivered.
"""

NO_TOKENS_ERROR = "No tokens found"


class DispatchFault(Exception):
    """Base class for dispatch pipeline faults."""


class ResolutionFault(DispatchFault):
    """Reading groups/users from the store failed while locating tokens."""


class GatewayFault(DispatchFault):
    """The multicast send call itself failed (not a per-token failure)."""


class WriteBackFault(DispatchFault):
    """Committing the outcome onto the notification record failed."""

    def __init__(self, notification_id: str, reason: str):
        self.notification_id = notification_id
        self.reason = reason
        super().__init__(f"Failed to commit notification {notification_id}: {reason}")
