"""Decide which reminder threshold, if any, a due date currently crosses."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from crm_notifications.domain.entities import (
    APPOINTMENT_STATUS_SCHEDULED,
    APPOINTMENT_TYPE_DEADLINE,
    CLASSIFICATION_INELIGIBLE,
    CLASSIFICATION_NO_THRESHOLD,
    THRESHOLD_24_HOURS,
    THRESHOLD_7_DAYS,
    DueDateRecord,
)
from crm_notifications.utils import ensure_app_timezone

REMINDER_WINDOW = timedelta(days=7)

_ONE_HOUR_SECONDS = 3600
_SHORT_THRESHOLD_HOURS = 24
# One-hour capture window ending exactly seven days out. Assumes the scheduler
# runs at most once per hour; slower cadences can skip the 7-day reminder.
_WEEK_WINDOW_START_HOURS = 167
_WEEK_WINDOW_END_HOURS = 168


def _as_utc(value: datetime) -> datetime:
    # Aware datetimes sharing one tzinfo subtract by wall clock, so compare in UTC.
    return ensure_app_timezone(value).astimezone(timezone.utc)


def hours_until(now: datetime, scheduled_at: datetime) -> float:
    """Return the fractional number of elapsed hours from ``now`` to ``scheduled_at``."""

    delta = _as_utc(scheduled_at) - _as_utc(now)
    return delta.total_seconds() / _ONE_HOUR_SECONDS


def classify(now: datetime, record: DueDateRecord) -> str:
    """Classify ``record`` relative to ``now``.

    Returns :data:`CLASSIFICATION_INELIGIBLE` for anything that is not a
    scheduled deadline inside ``[now, now + 7 days]``, otherwise the crossed
    threshold (:data:`THRESHOLD_24_HOURS` or :data:`THRESHOLD_7_DAYS`) or
    :data:`CLASSIFICATION_NO_THRESHOLD`.
    """

    if record.type != APPOINTMENT_TYPE_DEADLINE:
        return CLASSIFICATION_INELIGIBLE
    if record.status != APPOINTMENT_STATUS_SCHEDULED:
        return CLASSIFICATION_INELIGIBLE

    now = _as_utc(now)
    scheduled_at = _as_utc(record.scheduled_at)
    if scheduled_at < now or scheduled_at > now + REMINDER_WINDOW:
        return CLASSIFICATION_INELIGIBLE

    remaining = hours_until(now, scheduled_at)
    if remaining <= _SHORT_THRESHOLD_HOURS:
        return THRESHOLD_24_HOURS
    if _WEEK_WINDOW_START_HOURS <= remaining <= _WEEK_WINDOW_END_HOURS:
        return THRESHOLD_7_DAYS
    return CLASSIFICATION_NO_THRESHOLD


__all__ = ["REMINDER_WINDOW", "classify", "hours_until"]
