"""Domain entities exposed by the application."""

from .due_date_record import (
    APPOINTMENT_STATUS_SCHEDULED,
    APPOINTMENT_TYPE_DEADLINE,
    ClientSummary,
    DueDateRecord,
    ProfileSummary,
)
from .email_delivery import (
    EMAIL_TYPE_APPOINTMENT,
    EMAIL_TYPE_DEADLINE,
    EMAIL_TYPE_NOTIFICATION,
    EMAIL_TYPES,
    EmailDeliveryReport,
    EmailDeliveryResult,
    EmailRecipient,
)
from .notification import (
    NOTIFICATION_TYPE_ERROR,
    NOTIFICATION_TYPE_INFO,
    NOTIFICATION_TYPE_SUCCESS,
    NOTIFICATION_TYPE_WARNING,
    NOTIFICATION_TYPES,
    Notification,
)
from .reminder import (
    CLASSIFICATION_INELIGIBLE,
    CLASSIFICATION_NO_THRESHOLD,
    SKIP_ALREADY_NOTIFIED,
    SKIP_NO_ASSIGNED_AGENT,
    THRESHOLD_24_HOURS,
    THRESHOLD_7_DAYS,
    EligibleReminder,
    ReminderDispatchOutcome,
    ReminderRunOutcome,
)
from .run_summary import (
    RUN_STATUS_FAILED,
    RUN_STATUS_OK,
    RUN_STATUS_UNAUTHORIZED,
    CleanupSummary,
    ReminderRunSummary,
)

__all__ = [
    "APPOINTMENT_STATUS_SCHEDULED",
    "APPOINTMENT_TYPE_DEADLINE",
    "ClientSummary",
    "DueDateRecord",
    "ProfileSummary",
    "EMAIL_TYPES",
    "EMAIL_TYPE_APPOINTMENT",
    "EMAIL_TYPE_DEADLINE",
    "EMAIL_TYPE_NOTIFICATION",
    "EmailDeliveryReport",
    "EmailDeliveryResult",
    "EmailRecipient",
    "Notification",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_INFO",
    "NOTIFICATION_TYPE_WARNING",
    "NOTIFICATION_TYPE_ERROR",
    "NOTIFICATION_TYPE_SUCCESS",
    "CLASSIFICATION_INELIGIBLE",
    "CLASSIFICATION_NO_THRESHOLD",
    "SKIP_ALREADY_NOTIFIED",
    "SKIP_NO_ASSIGNED_AGENT",
    "THRESHOLD_24_HOURS",
    "THRESHOLD_7_DAYS",
    "EligibleReminder",
    "ReminderDispatchOutcome",
    "ReminderRunOutcome",
    "RUN_STATUS_FAILED",
    "RUN_STATUS_OK",
    "RUN_STATUS_UNAUTHORIZED",
    "CleanupSummary",
    "ReminderRunSummary",
]
