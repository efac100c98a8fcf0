"""Template registry: maps NotificationType to push message templates.

Each template renders the push title and body from the notification
record's payload fields.
"""

from pushnotify.notification.notification import NotificationType
from pushnotify.templates.approval_granted import ApprovalGrantedTemplate
from pushnotify.templates.pending_approval import PendingApprovalTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    NotificationType.PENDING_APPROVAL.value: PendingApprovalTemplate,
    NotificationType.APPROVAL_GRANTED.value: ApprovalGrantedTemplate,
}


def get_template(notification_type: str):
    """Look up a template class by notification type string."""
    template_cls = TEMPLATE_REGISTRY.get(notification_type)
    if template_cls is None:
        raise ValueError(f"No template registered for notification type: {notification_type}")
    return template_cls


def render_for(record) -> dict:
    """Render title/body for a record; unknown types render empty strings."""
    try:
        template_cls = get_template(record.notification_type)
    except ValueError:
        return {"title": "", "body": ""}
    return template_cls.render(
        {
            "user_name": record.user_name,
            "group_name": record.group_name,
        }
    )
