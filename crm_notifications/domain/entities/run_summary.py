"""Summaries returned to the caller of a scheduled task."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

RUN_STATUS_OK = "ok"
RUN_STATUS_UNAUTHORIZED = "unauthorized"
RUN_STATUS_FAILED = "failed"


@dataclass(frozen=True)
class ReminderRunSummary:
    """Result of one deadline reminder scan."""

    status: str
    timestamp: datetime
    deadlines_checked: int = 0
    notifications_sent: int = 0
    emails_sent: int = 0
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.status == RUN_STATUS_OK


@dataclass(frozen=True)
class CleanupSummary:
    """Result of one notification retention sweep."""

    status: str
    timestamp: datetime
    deleted_read: int = 0
    deleted_unread: int = 0
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.status == RUN_STATUS_OK

    @property
    def total_deleted(self) -> int:
        return self.deleted_read + self.deleted_unread


__all__ = [
    "CleanupSummary",
    "ReminderRunSummary",
    "RUN_STATUS_FAILED",
    "RUN_STATUS_OK",
    "RUN_STATUS_UNAUTHORIZED",
]
