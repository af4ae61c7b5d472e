from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from crm_notifications.application.use_cases.reminders import run_deadline_reminders
from crm_notifications.infrastructure.models import NotificationModel

CRON_AUTHORIZATION = "Bearer test-cron-secret"
NOW = datetime(2024, 1, 15, 0, 0, tzinfo=timezone.utc)


def _sender(calls, result=True):
    def _send(recipient, subject, template, data):
        calls.append((recipient, subject))
        return result

    return _send


def test_deadline_within_24_hours_notifies_and_emails(db_session, seed_deadline):
    seeded = seed_deadline(start_time=NOW + timedelta(hours=20))
    calls = []

    summary = run_deadline_reminders(
        db_session, credential=CRON_AUTHORIZATION, now=NOW, send_email=_sender(calls)
    )

    assert summary.success is True
    assert summary.deadlines_checked == 1
    assert summary.notifications_sent == 1
    assert summary.emails_sent == 1
    assert calls == [(seeded.creator_email, "Urgent: Deadline Tomorrow - Closing documents")]

    notification = db_session.query(NotificationModel).one()
    assert notification.user_id == seeded.agent_id
    assert notification.type == "warning"
    assert notification.read is False
    assert notification.action_url == f"/clients/{seeded.client_id}"
    assert notification.message == "Deadline for Acme Holdings is approaching on 1/15/2024"


def test_deadline_exactly_seven_days_out_notifies_without_email(db_session, seed_deadline):
    seed_deadline(start_time=NOW + timedelta(hours=168))
    calls = []

    summary = run_deadline_reminders(
        db_session, credential=CRON_AUTHORIZATION, now=NOW, send_email=_sender(calls)
    )

    assert summary.notifications_sent == 1
    assert summary.emails_sent == 0
    assert calls == []
    assert db_session.query(NotificationModel).one().type == "info"


def test_deadline_between_thresholds_is_checked_but_not_notified(db_session, seed_deadline):
    seed_deadline(start_time=NOW + timedelta(hours=120))
    calls = []

    summary = run_deadline_reminders(
        db_session, credential=CRON_AUTHORIZATION, now=NOW, send_email=_sender(calls)
    )

    assert summary.success is True
    assert summary.deadlines_checked == 1
    assert summary.notifications_sent == 0
    assert summary.emails_sent == 0
    assert db_session.query(NotificationModel).count() == 0


def test_only_scheduled_deadlines_in_window_are_checked(db_session, seed_deadline):
    seed_deadline(start_time=NOW + timedelta(hours=3), appointment_type="Meeting")
    seed_deadline(start_time=NOW + timedelta(hours=3), status="Completed")
    seed_deadline(start_time=NOW - timedelta(hours=1))
    seed_deadline(start_time=NOW + timedelta(days=8))
    seed_deadline(start_time=NOW + timedelta(hours=3), title="Counted")

    summary = run_deadline_reminders(
        db_session, credential=CRON_AUTHORIZATION, now=NOW, send_email=_sender([])
    )

    assert summary.deadlines_checked == 1
    assert summary.notifications_sent == 1


def test_email_failure_is_not_counted(db_session, seed_deadline):
    seed_deadline(start_time=NOW + timedelta(hours=2))

    summary = run_deadline_reminders(
        db_session,
        credential=CRON_AUTHORIZATION,
        now=NOW,
        send_email=_sender([], result=False),
    )

    assert summary.success is True
    assert summary.notifications_sent == 1
    assert summary.emails_sent == 0


@pytest.mark.parametrize("credential", [None, "", "Bearer wrong", "test-cron-secret"])
def test_rejected_credentials_have_no_side_effects(db_session, seed_deadline, credential):
    seed_deadline(start_time=NOW + timedelta(hours=20))
    calls = []

    summary = run_deadline_reminders(
        db_session, credential=credential, now=NOW, send_email=_sender(calls)
    )

    assert summary.status == "unauthorized"
    assert summary.success is False
    assert calls == []
    assert db_session.query(NotificationModel).count() == 0


def test_record_store_failure_reports_failed_run(
    db_session, seed_deadline, monkeypatch: pytest.MonkeyPatch
):
    seed_deadline(start_time=NOW + timedelta(hours=20))

    def broken_query(*args, **kwargs):
        raise OperationalError("SELECT appointment", {}, Exception("no such table"))

    monkeypatch.setattr(db_session, "query", broken_query)
    calls = []

    summary = run_deadline_reminders(
        db_session, credential=CRON_AUTHORIZATION, now=NOW, send_email=_sender(calls)
    )

    assert summary.status == "failed"
    assert summary.error.startswith("Failed to fetch upcoming deadlines")
    assert summary.notifications_sent == 0
    assert calls == []
