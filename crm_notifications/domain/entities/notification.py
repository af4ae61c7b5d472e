"""Domain entity representing an inbox notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

NOTIFICATION_TYPE_INFO = "info"
NOTIFICATION_TYPE_WARNING = "warning"
NOTIFICATION_TYPE_ERROR = "error"
NOTIFICATION_TYPE_SUCCESS = "success"

NOTIFICATION_TYPES = (
    NOTIFICATION_TYPE_INFO,
    NOTIFICATION_TYPE_WARNING,
    NOTIFICATION_TYPE_ERROR,
    NOTIFICATION_TYPE_SUCCESS,
)


@dataclass
class Notification:
    """Message delivered to the inbox of a specific user.

    ``user_id`` and ``created_at`` never change once the notification is
    stored, and ``read`` only ever moves from ``False`` to ``True``.
    """

    id: int | None
    user_id: int
    title: str
    message: str
    type: str = NOTIFICATION_TYPE_INFO
    action_url: str | None = None
    read: bool = False
    created_at: datetime | None = None


__all__ = [
    "Notification",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_INFO",
    "NOTIFICATION_TYPE_WARNING",
    "NOTIFICATION_TYPE_ERROR",
    "NOTIFICATION_TYPE_SUCCESS",
]
