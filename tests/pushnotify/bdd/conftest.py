"""Shared BDD fixtures and step definitions for the pushnotify domain."""

from protean import current_domain
from pushnotify.directory.group import Group
from pushnotify.directory.user import User
from pushnotify.gateway import get_gateway
from pushnotify.notification.notification import NotificationRecord
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Given steps — directory
# ---------------------------------------------------------------------------
@given(parsers.cfparse('group "{group_id}" administered by user "{admin_id}"'))
def group_with_admin(group_id, admin_id):
    current_domain.repository_for(Group).add(Group(group_id=group_id, admin_id=admin_id))


@given(parsers.cfparse('user "{user_id}" has device token "{token}"'))
def user_with_token(user_id, token):
    current_domain.repository_for(User).add(User(user_id=user_id, fcm_token=token))


@given(parsers.cfparse('user "{user_id}" has no device token'))
def user_without_token(user_id):
    current_domain.repository_for(User).add(User(user_id=user_id))


@given(parsers.cfparse('the push gateway is down with "{fault}"'))
def gateway_down(fault):
    get_gateway().configure(fault=fault)


# ---------------------------------------------------------------------------
# Then steps — gateway & record state
# ---------------------------------------------------------------------------
@then(parsers.cfparse('a push titled "{title}" is sent to "{token}"'))
def push_sent(title, token):
    messages = get_gateway().sent_messages
    assert len(messages) == 1
    assert messages[0].title == title
    assert messages[0].tokens == [token]


@then("no push is sent")
def no_push_sent():
    assert get_gateway().sent_messages == []


@then(parsers.cfparse("the notification is processed with {count:d} success"))
def processed_with_success(notification_id, count):
    stored = current_domain.repository_for(NotificationRecord).get(notification_id)
    assert stored.processed is True
    assert stored.success_count == count


@then(parsers.cfparse('the notification is processed with error "{error}"'))
def processed_with_error(notification_id, error):
    stored = current_domain.repository_for(NotificationRecord).get(notification_id)
    assert stored.processed is True
    assert stored.error == error
