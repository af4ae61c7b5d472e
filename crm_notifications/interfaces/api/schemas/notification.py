"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

NotificationType = Literal["info", "warning", "error", "success"]


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    message: str
    type: NotificationType
    action_url: str | None = None
    read: bool
    created_at: datetime


class NotificationCreate(BaseModel):
    """Payload used to create a notification for yourself or, as admin, another user."""

    title: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)
    type: NotificationType = "info"
    action_url: str | None = Field(default=None, max_length=500)
    user_id: int | None = Field(
        default=None, description="Recipient; defaults to the authenticated user"
    )


class NotificationUpdate(BaseModel):
    """Payload used to mark a single notification as read."""

    read: bool


class NotificationPageRead(BaseModel):
    """A page of notifications plus pagination metadata."""

    model_config = ConfigDict(populate_by_name=True)

    data: list[NotificationRead]
    count: int
    page: int
    limit: int
    total_pages: int = Field(alias="totalPages")


class MarkAllReadResponse(BaseModel):
    """Outcome of marking every unread notification as read."""

    count: int
    message: str


__all__ = [
    "MarkAllReadResponse",
    "NotificationCreate",
    "NotificationPageRead",
    "NotificationRead",
    "NotificationType",
    "NotificationUpdate",
]
