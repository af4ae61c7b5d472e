from .cron import CleanupRunRead, ReminderRunRead
from .email import (
    EmailErrorRead,
    EmailRecipientIn,
    EmailResultRead,
    NotificationEmailRequest,
    NotificationEmailResponse,
    NotificationEmailType,
)
from .notification import (
    MarkAllReadResponse,
    NotificationCreate,
    NotificationPageRead,
    NotificationRead,
    NotificationType,
    NotificationUpdate,
)

__all__ = [
    "CleanupRunRead",
    "ReminderRunRead",
    "EmailErrorRead",
    "EmailRecipientIn",
    "EmailResultRead",
    "NotificationEmailRequest",
    "NotificationEmailResponse",
    "NotificationEmailType",
    "MarkAllReadResponse",
    "NotificationCreate",
    "NotificationPageRead",
    "NotificationRead",
    "NotificationType",
    "NotificationUpdate",
]
