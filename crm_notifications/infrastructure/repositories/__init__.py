"""Repository implementations for infrastructure layer."""

from .appointment_repository import AppointmentRepository
from .notification_repository import NotificationRepository, SweepResult
from .profile_repository import ProfileRepository
from .reminder_ledger_repository import ReminderLedgerRepository

__all__ = [
    "AppointmentRepository",
    "NotificationRepository",
    "ProfileRepository",
    "ReminderLedgerRepository",
    "SweepResult",
]
