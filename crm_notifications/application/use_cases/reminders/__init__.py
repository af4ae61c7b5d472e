"""Deadline reminder scheduling and dispatch."""

from .deadline_reminders import run_deadline_reminders
from .dispatch import build_reminder_notification, dispatch_reminders
from .thresholds import REMINDER_WINDOW, classify, hours_until

__all__ = [
    "REMINDER_WINDOW",
    "build_reminder_notification",
    "classify",
    "dispatch_reminders",
    "hours_until",
    "run_deadline_reminders",
]
