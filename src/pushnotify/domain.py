"""Pushnotify bounded context — push notification dispatch over a document store.

Reacts to notification records created in the ``notifications`` collection,
resolves the destination device tokens from the ``groups`` and ``users``
collections, sends a multicast push and records the outcome on the record.
A daily retention sweep removes records older than the retention window.
"""

from protean.domain import Domain

from pushnotify.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

pushnotify = Domain(name="pushnotify")
