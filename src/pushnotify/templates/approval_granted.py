"""Approval granted template — sent to the member whose join request was approved."""

from pushnotify.notification.notification import NotificationType


class ApprovalGrantedTemplate:
    notification_type = NotificationType.APPROVAL_GRANTED.value

    @staticmethod
    def render(context: dict) -> dict:
        group_name = context.get("group_name") or "the group"
        return {
            "title": "approval complete",
            "body": f"Your request to join {group_name} has been approved.",
        }
