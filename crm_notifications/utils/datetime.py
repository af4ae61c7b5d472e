"""Timezone handling for stored and displayed timestamps.

Timestamps are persisted as naive values expressed in ``APP_TIMEZONE`` and
handled as aware datetimes everywhere else.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from crm_notifications.config import get_settings

_FIXED_OFFSET = re.compile(r"^(?:UTC|GMT)([+-])(\d{1,2})(?::?(\d{2}))?$", re.IGNORECASE)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the ``APP_TIMEZONE`` zone.

    IANA names and fixed offsets such as ``UTC-05:00`` are accepted; anything
    else resolves to UTC.
    """

    name = (get_settings().app_timezone or "").strip()
    return _zone_for(name) if name else timezone.utc


def now_in_app_timezone() -> datetime:
    return datetime.now(get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Column default for creation timestamps."""

    return now_in_app_timezone().replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Return ``value`` as an aware datetime in the app timezone.

    Naive values are taken to be in the app timezone already, which is how
    they come back from the database.
    """

    if value is None:
        return None
    zone = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=zone)
    return value.astimezone(zone)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Inverse of :func:`ensure_app_timezone`, applied before writing to the database."""

    if value is None:
        return None
    return ensure_app_timezone(value).replace(tzinfo=None)


def format_due_date(value: datetime) -> str:
    """Render ``value`` as ``M/D/YYYY`` in the application timezone."""

    localized = ensure_app_timezone(value)
    return f"{localized.month}/{localized.day}/{localized.year}"


def format_due_time(value: datetime) -> str:
    """Render the clock time of ``value`` as ``H:MM AM/PM``."""

    localized = ensure_app_timezone(value)
    hour = localized.hour % 12 or 12
    meridiem = "AM" if localized.hour < 12 else "PM"
    return f"{hour}:{localized.minute:02d} {meridiem}"


def _zone_for(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        pass

    match = _FIXED_OFFSET.match(name)
    if match is None:
        return timezone.utc
    sign, hours, minutes = match.groups()
    offset = timedelta(hours=int(hours), minutes=int(minutes or 0))
    return timezone(-offset if sign == "-" else offset)
