"""Value objects produced while dispatching deadline reminders."""

from __future__ import annotations

from dataclasses import dataclass, field

from crm_notifications.domain.entities.due_date_record import DueDateRecord

THRESHOLD_24_HOURS = "24h"
THRESHOLD_7_DAYS = "7d"
CLASSIFICATION_INELIGIBLE = "ineligible"
CLASSIFICATION_NO_THRESHOLD = "none"

SKIP_NO_ASSIGNED_AGENT = "no_assigned_agent"
SKIP_ALREADY_NOTIFIED = "already_notified"


@dataclass(frozen=True)
class EligibleReminder:
    """A due-date record paired with the threshold it currently crosses."""

    record: DueDateRecord
    threshold: str


@dataclass
class ReminderDispatchOutcome:
    """What happened to one record during one scheduler invocation."""

    record_id: int
    threshold: str
    notification_created: bool = False
    email_attempted: bool = False
    email_sent: bool = False
    skipped_reason: str | None = None
    error: str | None = None
    email_error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.email_error is None


@dataclass
class ReminderRunOutcome:
    """Aggregated counters for a dispatch pass."""

    notifications_sent: int = 0
    emails_sent: int = 0
    notification_failures: int = 0
    email_failures: int = 0
    outcomes: list[ReminderDispatchOutcome] = field(default_factory=list)

    def add(self, outcome: ReminderDispatchOutcome) -> None:
        self.outcomes.append(outcome)
        if outcome.notification_created:
            self.notifications_sent += 1
        elif outcome.skipped_reason is None:
            self.notification_failures += 1
        if outcome.email_sent:
            self.emails_sent += 1
        elif outcome.email_attempted:
            self.email_failures += 1


__all__ = [
    "CLASSIFICATION_INELIGIBLE",
    "CLASSIFICATION_NO_THRESHOLD",
    "EligibleReminder",
    "ReminderDispatchOutcome",
    "ReminderRunOutcome",
    "SKIP_ALREADY_NOTIFIED",
    "SKIP_NO_ASSIGNED_AGENT",
    "THRESHOLD_24_HOURS",
    "THRESHOLD_7_DAYS",
]
