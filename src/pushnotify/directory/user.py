"""User aggregate: the ``users`` collection, read-only to this service."""

from protean.fields import Identifier, String

from pushnotify.domain import pushnotify


@pushnotify.aggregate
class User:
    user_id: Identifier(identifier=True, required=True)
    fcm_token: String(max_length=4096)  # Device push token; None until the app registers one

    @property
    def push_token(self):
        """The device token, or None when the user has no usable token."""
        return self.fcm_token or None
