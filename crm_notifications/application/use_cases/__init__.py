"""Aggregate application use cases."""

from .notifications import run_notification_cleanup
from .reminders import run_deadline_reminders

__all__ = [
    "run_deadline_reminders",
    "run_notification_cleanup",
]
