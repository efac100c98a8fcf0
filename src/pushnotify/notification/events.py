"""Domain events for the NotificationRecord aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from pushnotify.domain import pushnotify


@pushnotify.event(part_of="NotificationRecord")
class NotificationRecordCreated:
    """A notification record was written to the store and awaits dispatch."""

    __version__ = 1

    notification_id: Identifier(required=True)
    notification_type: String(required=True)
    group_id: String()
    user_id: String()
    created_at: DateTime(required=True)


@pushnotify.event(part_of="NotificationRecord")
class NotificationRecordProcessed:
    """A delivery attempt finished and the record reached its terminal state."""

    __version__ = 1

    notification_id: Identifier(required=True)
    notification_type: String(required=True)
    success_count: Integer(default=0)
    failure_count: Integer(default=0)
    error: String(max_length=1000)
    processed_at: DateTime(required=True)
