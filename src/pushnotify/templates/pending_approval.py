"""Pending approval template — sent to a group admin when someone asks to join."""

from pushnotify.notification.notification import NotificationType


class PendingApprovalTemplate:
    notification_type = NotificationType.PENDING_APPROVAL.value

    @staticmethod
    def render(context: dict) -> dict:
        user_name = context.get("user_name") or "Someone"
        return {
            "title": "new join request",
            "body": f"{user_name} has requested to join.",
        }
