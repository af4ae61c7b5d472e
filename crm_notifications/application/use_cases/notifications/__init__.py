"""Inbox operations and the notification retention sweep."""

from .cleanup import READ_MAX_AGE, UNREAD_MAX_AGE, run_notification_cleanup
from .email_delivery import send_notification_emails
from .inbox import (
    NotificationPage,
    create_notification,
    delete_notification,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)

__all__ = [
    "NotificationPage",
    "READ_MAX_AGE",
    "UNREAD_MAX_AGE",
    "create_notification",
    "delete_notification",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "run_notification_cleanup",
    "send_notification_emails",
]
