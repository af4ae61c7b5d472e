"""Pydantic models describing scheduled task summaries."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ReminderRunRead(BaseModel):
    """JSON summary returned by the deadline reminder trigger."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    timestamp: datetime
    deadlines_checked: int = Field(default=0, alias="deadlinesChecked")
    notifications_sent: int = Field(default=0, alias="notificationsSent")
    emails_sent: int = Field(default=0, alias="emailsSent")
    error: str | None = None


class CleanupRunRead(BaseModel):
    """JSON summary returned by the notification cleanup trigger."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    timestamp: datetime
    deleted_read: int = Field(default=0, alias="deletedReadNotifications")
    deleted_unread: int = Field(default=0, alias="deletedUnreadNotifications")
    total_deleted: int = Field(default=0, alias="totalDeleted")
    error: str | None = None


__all__ = ["CleanupRunRead", "ReminderRunRead"]
