"""NotificationRecord aggregate — one pending push-notification intent.

Records are written by an external producer into the ``notifications``
collection and are mutated exactly once, by the dispatch engine, when the
delivery attempt is committed:

    unprocessed → processed (terminal)

The retention sweep deletes records by age regardless of this state.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Integer, String

from pushnotify.domain import pushnotify
from pushnotify.notification.events import (
    NotificationRecordCreated,
    NotificationRecordProcessed,
)

ERROR_MAX_LENGTH = 1000


class NotificationType(Enum):
    PENDING_APPROVAL = "PENDING_APPROVAL"
    APPROVAL_GRANTED = "APPROVAL_GRANTED"


@pushnotify.aggregate
class NotificationRecord:
    """A notification awaiting (or done with) push delivery.

    ``notification_type`` is kept as a plain string: producers may write
    variants this service does not know yet, and those resolve to zero
    recipients instead of failing validation.
    """

    notification_type: String(required=True, max_length=50)

    # Variant payload
    group_id: String(max_length=255)
    user_id: String(max_length=255)
    user_name: String(max_length=255)
    group_name: String(max_length=255)

    # Idempotency guard and outcome
    processed: Boolean(default=False)
    processed_at: DateTime()
    success_count: Integer(min_value=0)
    failure_count: Integer(min_value=0)
    error: String(max_length=ERROR_MAX_LENGTH)

    created_at: DateTime(required=True)

    @classmethod
    def create(
        cls,
        notification_type,
        group_id=None,
        user_id=None,
        user_name=None,
        group_name=None,
        created_at=None,
    ):
        """Create an unprocessed record, stamped with the creation time."""
        now = created_at or datetime.now(UTC)

        record = cls(
            notification_type=notification_type,
            group_id=group_id,
            user_id=user_id,
            user_name=user_name,
            group_name=group_name,
            processed=False,
            created_at=now,
        )

        record.raise_(
            NotificationRecordCreated(
                notification_id=str(record.id),
                notification_type=notification_type,
                group_id=group_id,
                user_id=user_id,
                created_at=now,
            )
        )

        return record

    @property
    def variant(self):
        """The known variant for this record, or None for unrecognized types."""
        try:
            return NotificationType(self.notification_type)
        except ValueError:
            return None

    def mark_processed(self, success_count=0, failure_count=0, error=None, processed_at=None):
        """Record the delivery outcome. Allowed exactly once per record."""
        if self.processed:
            raise ValidationError({"processed": ["Notification has already been processed"]})
        if success_count < 0 or failure_count < 0:
            raise ValidationError({"success_count": ["Delivery counts cannot be negative"]})

        if error and len(error) > ERROR_MAX_LENGTH:
            error = error[: ERROR_MAX_LENGTH - 3] + "..."

        now = processed_at or datetime.now(UTC)
        self.processed = True
        self.processed_at = now
        self.success_count = success_count
        self.failure_count = failure_count
        self.error = error

        self.raise_(
            NotificationRecordProcessed(
                notification_id=str(self.id),
                notification_type=self.notification_type,
                success_count=success_count,
                failure_count=failure_count,
                error=error,
                processed_at=now,
            )
        )
