"""Notification dispatch — resolve recipients, send the push, commit the outcome.

``NotificationDispatcher`` reacts to NotificationRecordCreated events and
hands the record to a ``DispatchEngine``. Events may be delivered more than
once; the engine's commit is conditional on the stored ``processed`` flag,
so only the first invocation to commit leaves its outcome on the record.
"""

from dataclasses import dataclass, replace

import structlog
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from pushnotify.directory.group import Group
from pushnotify.directory.user import User
from pushnotify.domain import pushnotify
from pushnotify.errors import NO_TOKENS_ERROR, ResolutionFault, WriteBackFault
from pushnotify.gateway import get_gateway
from pushnotify.gateway.push_port import MulticastMessage
from pushnotify.notification.events import NotificationRecordCreated
from pushnotify.notification.notification import NotificationRecord
from pushnotify.notification.recipients import RecipientResolver, Recipients
from pushnotify.utils.logging import bind_notification, clear_context

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DispatchOutcome:
    success_count: int = 0
    failure_count: int = 0
    error: str | None = None
    committed: bool = False


def build_message(record, recipients: Recipients) -> MulticastMessage:
    """Build the multicast request; absent ids travel as empty strings."""
    return MulticastMessage(
        title=recipients.title,
        body=recipients.body,
        data={
            "type": record.notification_type,
            "groupId": record.group_id or "",
            "userId": record.user_id or "",
        },
        tokens=sorted(recipients.tokens),
    )


class DispatchEngine:
    """Runs one delivery attempt for a notification record.

    Steps are strictly sequential: resolve → send → commit. Resolution and
    gateway faults end up in the record's ``error`` field; only a failed
    commit raises (``WriteBackFault``).
    """

    def __init__(self, notifications, users, groups, gateway):
        self.notifications = notifications
        self.gateway = gateway
        self.resolver = RecipientResolver(users=users, groups=groups)

    @classmethod
    def from_domain(cls, domain):
        """Wire the engine to a domain's repositories and the registered gateway."""
        return cls(
            notifications=domain.repository_for(NotificationRecord),
            users=domain.repository_for(User),
            groups=domain.repository_for(Group),
            gateway=get_gateway(),
        )

    def dispatch(self, record) -> DispatchOutcome | None:
        """Deliver ``record`` and commit the outcome.

        Returns None when the record was already processed, otherwise the
        outcome (``committed`` is False if another invocation won the commit).
        """
        notification_id = str(record.id)

        if record.processed:
            logger.info("Notification already processed", notification_id=notification_id)
            return None

        try:
            recipients = self.resolver.resolve(record)
        except ResolutionFault as exc:
            logger.error(
                "Recipient resolution failed",
                notification_id=notification_id,
                error=str(exc),
            )
            return self._commit(record, DispatchOutcome(error=str(exc)))

        if recipients.is_empty:
            logger.info("No FCM tokens found", notification_id=notification_id)
            return self._commit(record, DispatchOutcome(error=NO_TOKENS_ERROR))

        return self._commit(record, self._send(record, recipients))

    def _send(self, record, recipients: Recipients) -> DispatchOutcome:
        message = build_message(record, recipients)

        try:
            result = self.gateway.send_multicast(message)
        except Exception as exc:
            logger.error(
                "Push gateway call failed",
                notification_id=str(record.id),
                token_count=len(message.tokens),
                error=str(exc),
            )
            return DispatchOutcome(error=str(exc))

        # A gateway may not report more outcomes than tokens it was given
        token_count = len(message.tokens)
        success_count = max(0, min(result.success_count, token_count))
        failure_count = max(0, min(result.failure_count, token_count - success_count))

        logger.info(
            "Sent push notifications",
            notification_id=str(record.id),
            success_count=success_count,
            failure_count=failure_count,
        )
        return DispatchOutcome(success_count=success_count, failure_count=failure_count)

    def _commit(self, record, outcome: DispatchOutcome) -> DispatchOutcome:
        """Write the outcome only if the stored record is still unprocessed."""
        notification_id = str(record.id)

        try:
            stored = self.notifications.get(notification_id)
        except Exception as exc:
            raise WriteBackFault(notification_id, str(exc)) from exc

        if stored.processed:
            logger.warning(
                "Notification committed by a concurrent dispatch, discarding outcome",
                notification_id=notification_id,
            )
            return replace(outcome, committed=False)

        try:
            stored.mark_processed(
                success_count=outcome.success_count,
                failure_count=outcome.failure_count,
                error=outcome.error,
            )
            self.notifications.add(stored)
        except ExpectedVersionError:
            logger.warning(
                "Notification changed while committing, discarding outcome",
                notification_id=notification_id,
            )
            return replace(outcome, committed=False)
        except Exception as exc:
            raise WriteBackFault(notification_id, str(exc)) from exc

        return replace(outcome, committed=True)


@pushnotify.event_handler(part_of=NotificationRecord)
class NotificationDispatcher:
    """Dispatches notification records when they are created."""

    @handle(NotificationRecordCreated)
    def on_notification_created(self, event: NotificationRecordCreated) -> None:
        notification_id = str(event.notification_id)
        bind_notification(notification_id, notification_type=event.notification_type)
        try:
            repo = current_domain.repository_for(NotificationRecord)
            try:
                record = repo.get(notification_id)
            except ObjectNotFoundError:
                logger.warning("Notification not found for dispatch", notification_id=notification_id)
                return

            DispatchEngine.from_domain(current_domain).dispatch(record)
        finally:
            clear_context()
