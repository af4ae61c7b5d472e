"""Pydantic models for the notification email endpoint."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from crm_notifications.interfaces.api.schemas.notification import NotificationType

NotificationEmailType = Literal["notification", "deadline", "appointment"]


class EmailRecipientIn(BaseModel):
    """Addressee plus the per-recipient template fields."""

    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    name: str | None = None
    notification_type: NotificationType | None = Field(
        default=None, alias="notificationType"
    )
    client_name: str | None = Field(default=None, alias="clientName")
    deadline: str | None = None
    appointment_time: str | None = Field(default=None, alias="appointmentTime")
    location: str | None = None


class NotificationEmailRequest(BaseModel):
    """Payload for sending one email template to one or more recipients."""

    model_config = ConfigDict(populate_by_name=True)

    type: NotificationEmailType
    recipients: list[EmailRecipientIn] = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    action_url: str | None = Field(default=None, alias="actionUrl")

    @field_validator("recipients", mode="before")
    @classmethod
    def _wrap_single_recipient(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return [value]
        return value


class EmailResultRead(BaseModel):
    email: str
    success: bool = True


class EmailErrorRead(BaseModel):
    email: str
    error: str


class NotificationEmailResponse(BaseModel):
    """Aggregate outcome; ``errors`` is omitted when every send succeeded."""

    success: bool
    sent: int
    failed: int
    results: list[EmailResultRead]
    errors: list[EmailErrorRead] | None = None


__all__ = [
    "EmailErrorRead",
    "EmailRecipientIn",
    "EmailResultRead",
    "NotificationEmailRequest",
    "NotificationEmailResponse",
    "NotificationEmailType",
]
