"""ORM models used by the application infrastructure."""

from .profile import ProfileModel
from .client import ClientModel
from .appointment import AppointmentModel
from .notification import NotificationModel
from .reminder_ledger import ReminderLedgerModel

__all__ = [
    "AppointmentModel",
    "ClientModel",
    "NotificationModel",
    "ProfileModel",
    "ReminderLedgerModel",
]
