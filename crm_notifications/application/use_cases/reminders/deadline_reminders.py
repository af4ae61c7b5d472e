"""Use case for the scheduled deadline reminder scan."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from crm_notifications.application.use_cases.reminders.dispatch import (
    EmailSender,
    dispatch_reminders,
)
from crm_notifications.application.use_cases.reminders.thresholds import (
    REMINDER_WINDOW,
    classify,
)
from crm_notifications.domain.entities import (
    RUN_STATUS_FAILED,
    RUN_STATUS_OK,
    RUN_STATUS_UNAUTHORIZED,
    THRESHOLD_24_HOURS,
    THRESHOLD_7_DAYS,
    EligibleReminder,
    ReminderRunSummary,
)
from crm_notifications.domain.errors import RecordFetchError
from crm_notifications.infrastructure.repositories import AppointmentRepository
from crm_notifications.infrastructure.security import verify_trigger_credential
from crm_notifications.utils import ensure_app_timezone, now_in_app_timezone

logger = logging.getLogger(__name__)

_CROSSED_THRESHOLDS = (THRESHOLD_24_HOURS, THRESHOLD_7_DAYS)


def run_deadline_reminders(
    session: Session,
    *,
    credential: str | None,
    now: datetime | None = None,
    send_email: EmailSender | None = None,
) -> ReminderRunSummary:
    """Scan upcoming deadlines and dispatch the reminders that are due.

    A single pass: authenticate the trigger, fetch the deadlines scheduled in
    the next seven days, classify each one and hand every crossed threshold
    to the dispatcher in one call. Nothing is remembered between runs, so
    callers must not invoke this concurrently.
    """

    now = ensure_app_timezone(now) if now is not None else now_in_app_timezone()

    if not verify_trigger_credential(credential):
        logger.warning("Rejected deadline reminder trigger with invalid credentials")
        return ReminderRunSummary(status=RUN_STATUS_UNAUTHORIZED, timestamp=now)

    try:
        records = AppointmentRepository(session).list_upcoming_deadlines(
            now, now.astimezone(timezone.utc) + REMINDER_WINDOW
        )
    except RecordFetchError as exc:
        logger.error("Deadline reminders failed: %s", exc)
        return ReminderRunSummary(
            status=RUN_STATUS_FAILED,
            timestamp=now_in_app_timezone(),
            error=str(exc),
        )

    eligible: list[EligibleReminder] = []
    for record in records:
        classification = classify(now, record)
        if classification in _CROSSED_THRESHOLDS:
            eligible.append(EligibleReminder(record=record, threshold=classification))

    outcome = dispatch_reminders(session, now, eligible, send_email=send_email)

    summary = ReminderRunSummary(
        status=RUN_STATUS_OK,
        timestamp=now_in_app_timezone(),
        deadlines_checked=len(records),
        notifications_sent=outcome.notifications_sent,
        emails_sent=outcome.emails_sent,
    )
    logger.info(
        "Deadline reminders completed: checked=%s eligible=%s notifications=%s "
        "emails=%s notification_failures=%s email_failures=%s",
        summary.deadlines_checked,
        len(eligible),
        summary.notifications_sent,
        summary.emails_sent,
        outcome.notification_failures,
        outcome.email_failures,
    )
    return summary


__all__ = ["run_deadline_reminders"]
