"""Entities describing an ad-hoc notification email batch."""

from __future__ import annotations

from dataclasses import dataclass, field

EMAIL_TYPE_NOTIFICATION = "notification"
EMAIL_TYPE_DEADLINE = "deadline"
EMAIL_TYPE_APPOINTMENT = "appointment"

EMAIL_TYPES = (EMAIL_TYPE_NOTIFICATION, EMAIL_TYPE_DEADLINE, EMAIL_TYPE_APPOINTMENT)


@dataclass(frozen=True)
class EmailRecipient:
    """One addressee of a notification email and the fields its template uses."""

    email: str
    name: str | None = None
    notification_type: str | None = None
    client_name: str | None = None
    deadline: str | None = None
    appointment_time: str | None = None
    location: str | None = None


@dataclass(frozen=True)
class EmailDeliveryResult:
    email: str
    success: bool
    error: str | None = None


@dataclass
class EmailDeliveryReport:
    """Per-recipient results of one batch; a failure never stops the batch."""

    results: list[EmailDeliveryResult] = field(default_factory=list)

    @property
    def sent(self) -> int:
        return sum(1 for result in self.results if result.success)

    @property
    def failed(self) -> int:
        return len(self.results) - self.sent

    @property
    def success(self) -> bool:
        return self.failed == 0


__all__ = [
    "EMAIL_TYPES",
    "EMAIL_TYPE_APPOINTMENT",
    "EMAIL_TYPE_DEADLINE",
    "EMAIL_TYPE_NOTIFICATION",
    "EmailDeliveryReport",
    "EmailDeliveryResult",
    "EmailRecipient",
]
