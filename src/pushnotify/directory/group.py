"""Group aggregate: the ``groups`` collection, read-only to this service."""

from protean.fields import Identifier

from pushnotify.domain import pushnotify


@pushnotify.aggregate
class Group:
    group_id: Identifier(identifier=True, required=True)
    admin_id: Identifier()
