"""Read-only projection of appointments that carry a due date."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

APPOINTMENT_TYPE_DEADLINE = "Deadline"
APPOINTMENT_STATUS_SCHEDULED = "Scheduled"


@dataclass(frozen=True)
class ClientSummary:
    """Client fields joined onto a due-date record."""

    id: int
    name: str
    email: str | None
    assigned_agent_id: int | None


@dataclass(frozen=True)
class ProfileSummary:
    """Responsible profile fields joined onto a due-date record."""

    id: int
    name: str
    email: str | None


@dataclass(frozen=True)
class DueDateRecord:
    """An appointment or deadline as seen by the reminder engine."""

    id: int
    title: str
    scheduled_at: datetime
    type: str | None
    status: str | None
    client: ClientSummary | None = None
    profile: ProfileSummary | None = None


__all__ = [
    "APPOINTMENT_STATUS_SCHEDULED",
    "APPOINTMENT_TYPE_DEADLINE",
    "ClientSummary",
    "DueDateRecord",
    "ProfileSummary",
]
