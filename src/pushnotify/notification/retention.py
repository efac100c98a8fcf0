"""Retention sweep: delete notification records past the retention window.

Age alone decides: processed and unprocessed records are both deleted once
``created_at`` falls before ``now - retention``. Re-running the sweep is
harmless; it only finds records that aged in since the last run.

``PurgeExpiredNotifications`` is submitted once a day by the scheduler
(see ``src/scheduler.py``) or any cron-like caller.
"""

from datetime import UTC, datetime, timedelta

import structlog
from protean import UnitOfWork
from protean.fields import DateTime
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from pushnotify.domain import pushnotify
from pushnotify.notification.notification import NotificationRecord

logger = structlog.get_logger(__name__)

RETENTION_WINDOW = timedelta(days=7)


class RetentionSweeper:
    page_size = 500

    def __init__(self, notifications, retention: timedelta = RETENTION_WINDOW):
        self.notifications = notifications
        self.retention = retention

    def cutoff(self, now: datetime | None = None) -> datetime:
        return (now or datetime.now(UTC)) - self.retention

    def expired(self, cutoff: datetime) -> list:
        """Collect every record created before ``cutoff``."""
        records = []
        offset = 0
        while True:
            page = (
                self.notifications._dao.query.filter(created_at__lt=cutoff)
                .offset(offset)
                .limit(self.page_size)
                .all()
            )
            records.extend(page.items)
            if len(page.items) < self.page_size:
                return records
            offset += self.page_size

    def sweep(self, now: datetime | None = None) -> int:
        """Delete all expired records as one batch and return how many went."""
        cutoff = self.cutoff(now)
        expired = self.expired(cutoff)

        # Query completes before any delete, so paging is not disturbed.
        # All deletes commit together or not at all.
        with UnitOfWork():
            for record in expired:
                self.notifications._dao.delete(record)

        logger.info(
            "Deleted old notifications",
            deleted=len(expired),
            cutoff=cutoff.isoformat(),
        )
        return len(expired)


@pushnotify.command(part_of="NotificationRecord")
class PurgeExpiredNotifications:
    """Request to delete notification records older than the retention window."""

    as_of: DateTime()  # Optional: sweep as of this time (defaults to now)


@pushnotify.command_handler(part_of=NotificationRecord)
class PurgeExpiredNotificationsHandler:
    @handle(PurgeExpiredNotifications)
    def purge_expired(self, command: PurgeExpiredNotifications) -> int:
        sweeper = RetentionSweeper(current_domain.repository_for(NotificationRecord))
        return sweeper.sweep(now=command.as_of)
