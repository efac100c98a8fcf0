"""Recipient resolution — which device tokens a notification record targets.

Each known variant has its own lookup against the ``groups``/``users``
collections:

    PENDING_APPROVAL  → the group's admin
    APPROVAL_GRANTED  → the approved user

Unknown variants resolve to nobody. Resolution only reads from the store.
"""

from dataclasses import dataclass, field

import structlog
from protean.exceptions import ObjectNotFoundError

from pushnotify.errors import ResolutionFault
from pushnotify.notification.notification import NotificationType
from pushnotify.templates import render_for

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Recipients:
    """Resolved destination tokens plus the rendered push content."""

    tokens: frozenset[str] = field(default_factory=frozenset)
    title: str = ""
    body: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.tokens


class RecipientResolver:
    def __init__(self, users, groups):
        self.users = users
        self.groups = groups
        self._lookups = {
            NotificationType.PENDING_APPROVAL: self._group_admin_tokens,
            NotificationType.APPROVAL_GRANTED: self._approved_user_tokens,
        }

    def resolve(self, record) -> Recipients:
        """Resolve tokens and content for ``record``.

        Raises:
            ResolutionFault: a store read failed for a reason other than
                the document not existing.
        """
        variant = record.variant
        if variant is None:
            logger.info(
                "Unknown notification variant, no recipients",
                notification_id=str(record.id),
                notification_type=record.notification_type,
            )
            return Recipients()

        try:
            tokens = self._lookups[variant](record)
        except ResolutionFault:
            raise
        except Exception as exc:
            raise ResolutionFault(str(exc)) from exc

        rendered = render_for(record)
        return Recipients(tokens=frozenset(tokens), title=rendered["title"], body=rendered["body"])

    # -------------------------------------------------------------------
    # Variant lookups
    # -------------------------------------------------------------------
    def _group_admin_tokens(self, record) -> set[str]:
        group = _get_or_none(self.groups, record.group_id)
        if group is None or not group.admin_id:
            return set()
        return _token_of(_get_or_none(self.users, group.admin_id))

    def _approved_user_tokens(self, record) -> set[str]:
        return _token_of(_get_or_none(self.users, record.user_id))


def _get_or_none(repo, identifier):
    """Point read that maps a missing id or missing document to None."""
    if not identifier:
        return None
    try:
        return repo.get(str(identifier))
    except ObjectNotFoundError:
        return None


def _token_of(user) -> set[str]:
    if user is None or user.push_token is None:
        return set()
    return {user.push_token}
