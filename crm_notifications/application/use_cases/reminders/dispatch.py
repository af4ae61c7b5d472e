"""Fan deadline reminders out to the in-app inbox and email."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from crm_notifications.config import get_settings
from crm_notifications.domain.entities import (
    NOTIFICATION_TYPE_INFO,
    NOTIFICATION_TYPE_WARNING,
    SKIP_ALREADY_NOTIFIED,
    SKIP_NO_ASSIGNED_AGENT,
    THRESHOLD_24_HOURS,
    EligibleReminder,
    Notification,
    ReminderDispatchOutcome,
    ReminderRunOutcome,
)
from crm_notifications.infrastructure.email import (
    TEMPLATE_DEADLINE_REMINDER,
    send_template_email,
)
from crm_notifications.infrastructure.repositories import (
    NotificationRepository,
    ReminderLedgerRepository,
)
from crm_notifications.utils import format_due_date, format_due_time

logger = logging.getLogger(__name__)

EmailSender = Callable[[str, str, str, Mapping[str, Any]], bool]


def build_reminder_notification(reminder: EligibleReminder) -> Notification:
    """Return the unsaved inbox entry for ``reminder``'s assigned agent."""

    record = reminder.record
    client = record.client
    notification_type = (
        NOTIFICATION_TYPE_WARNING
        if reminder.threshold == THRESHOLD_24_HOURS
        else NOTIFICATION_TYPE_INFO
    )
    return Notification(
        id=None,
        user_id=client.assigned_agent_id,
        title=f"Deadline Reminder: {record.title}",
        message=(
            f"Deadline for {client.name} is approaching on "
            f"{format_due_date(record.scheduled_at)}"
        ),
        type=notification_type,
        action_url=f"/clients/{client.id}",
    )


def _email_payload(reminder: EligibleReminder, base_url: str) -> dict[str, Any]:
    record = reminder.record
    return {
        "agentName": record.profile.name,
        "clientName": record.client.name,
        "deadlineTitle": record.title,
        "deadlineDate": format_due_date(record.scheduled_at),
        "deadlineTime": format_due_time(record.scheduled_at),
        "clientUrl": f"{base_url.rstrip('/')}/clients/{record.client.id}",
    }


class _ReminderDispatcher:
    """Process reminders one at a time, isolating each record's failures."""

    def __init__(
        self,
        session: Session,
        *,
        now: datetime,
        send_email: EmailSender,
        ledger_enabled: bool,
        base_url: str,
    ) -> None:
        self.session = session
        self.now = now
        self.send_email = send_email
        self.base_url = base_url
        self.notifications = NotificationRepository(session)
        self.ledger = ReminderLedgerRepository(session) if ledger_enabled else None

    def dispatch(self, reminder: EligibleReminder) -> ReminderDispatchOutcome:
        outcome = ReminderDispatchOutcome(
            record_id=reminder.record.id, threshold=reminder.threshold
        )
        try:
            self._dispatch(reminder, outcome)
        except Exception as exc:
            self.session.rollback()
            logger.exception(
                "Unexpected error dispatching reminder for deadline %s", outcome.record_id
            )
            outcome.error = outcome.error or str(exc)
        return outcome

    def _dispatch(
        self, reminder: EligibleReminder, outcome: ReminderDispatchOutcome
    ) -> None:
        record = reminder.record
        if record.client is None or not record.client.assigned_agent_id:
            outcome.skipped_reason = SKIP_NO_ASSIGNED_AGENT
            return

        if self.ledger is not None and self.ledger.has_entry(record.id, reminder.threshold):
            logger.info(
                "Deadline %s already reminded at threshold %s; skipping",
                record.id,
                reminder.threshold,
            )
            outcome.skipped_reason = SKIP_ALREADY_NOTIFIED
            return

        self._create_in_app(reminder, outcome)

        if reminder.threshold == THRESHOLD_24_HOURS and record.profile and record.profile.email:
            self._send_email(reminder, outcome)

    def _create_in_app(
        self, reminder: EligibleReminder, outcome: ReminderDispatchOutcome
    ) -> None:
        try:
            self.notifications.create(build_reminder_notification(reminder))
        except Exception as exc:
            self.session.rollback()
            logger.error(
                "Failed to create reminder notification for deadline %s: %s",
                outcome.record_id,
                exc,
            )
            outcome.error = str(exc)
            return

        outcome.notification_created = True
        if self.ledger is None:
            return
        try:
            self.ledger.record(outcome.record_id, reminder.threshold, self.now)
        except Exception as exc:
            self.session.rollback()
            logger.warning(
                "Could not record reminder ledger entry for deadline %s: %s",
                outcome.record_id,
                exc,
            )

    def _send_email(
        self, reminder: EligibleReminder, outcome: ReminderDispatchOutcome
    ) -> None:
        record = reminder.record
        outcome.email_attempted = True
        try:
            delivered = self.send_email(
                record.profile.email,
                f"Urgent: Deadline Tomorrow - {record.title}",
                TEMPLATE_DEADLINE_REMINDER,
                _email_payload(reminder, self.base_url),
            )
        except Exception as exc:
            logger.error(
                "Failed to send deadline email for deadline %s: %s", record.id, exc
            )
            outcome.email_error = str(exc)
            return

        if delivered:
            outcome.email_sent = True
        else:
            logger.warning(
                "Email transport rejected deadline email for deadline %s", record.id
            )
            outcome.email_error = "Email transport reported a failed delivery"


def dispatch_reminders(
    session: Session,
    now: datetime,
    reminders: Iterable[EligibleReminder],
    *,
    send_email: EmailSender | None = None,
    ledger_enabled: bool | None = None,
) -> ReminderRunOutcome:
    """Create inbox notifications and send emails for ``reminders``.

    Each reminder is handled independently: a failed in-app write or email
    is recorded on that reminder's outcome and never stops the others. The
    two channels are not coupled, so an email failure leaves the notification
    in place and a failed notification does not prevent the email attempt.
    """

    settings = get_settings()
    if ledger_enabled is None:
        ledger_enabled = settings.reminder_ledger_enabled

    dispatcher = _ReminderDispatcher(
        session,
        now=now,
        send_email=send_email or send_template_email,
        ledger_enabled=ledger_enabled,
        base_url=settings.app_base_url,
    )
    run = ReminderRunOutcome()
    for reminder in reminders:
        run.add(dispatcher.dispatch(reminder))
    return run


__all__ = ["EmailSender", "build_reminder_notification", "dispatch_reminders"]
