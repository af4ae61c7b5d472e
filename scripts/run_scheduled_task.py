"""Run a scheduled notification task without going through HTTP.

Useful for system cron or container schedulers that can execute a command
but cannot issue authenticated requests. The configured ``CRON_SECRET`` is
presented as the trigger credential, so the task is refused when it is unset.
"""

from __future__ import annotations

import argparse

from crm_notifications.application.use_cases import (
    run_deadline_reminders,
    run_notification_cleanup,
)
from crm_notifications.config import get_settings
from crm_notifications.infrastructure.database import SessionLocal, initialize_database
from crm_notifications.interfaces.api.schemas import CleanupRunRead, ReminderRunRead

TASKS = ("deadline-reminders", "cleanup-notifications")


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the scheduled task runner."""

    parser = argparse.ArgumentParser(
        description="Run one of the CRM notification engine's scheduled tasks.",
    )
    parser.add_argument("task", choices=TASKS, help="Task to execute")
    return parser.parse_args()


def main() -> None:
    """Execute the requested task and print its summary as JSON."""

    args = parse_args()
    secret = get_settings().cron_secret
    if not secret:
        raise SystemExit("CRON_SECRET is not configured; refusing to run.")
    credential = f"Bearer {secret}"

    initialize_database()

    session = SessionLocal()
    try:
        if args.task == "deadline-reminders":
            summary = run_deadline_reminders(session, credential=credential)
            body = ReminderRunRead(
                success=summary.success,
                timestamp=summary.timestamp,
                deadlines_checked=summary.deadlines_checked,
                notifications_sent=summary.notifications_sent,
                emails_sent=summary.emails_sent,
                error=summary.error,
            )
        else:
            summary = run_notification_cleanup(session, credential=credential)
            body = CleanupRunRead(
                success=summary.success,
                timestamp=summary.timestamp,
                deleted_read=summary.deleted_read,
                deleted_unread=summary.deleted_unread,
                total_deleted=summary.total_deleted,
                error=summary.error,
            )
    finally:
        session.close()

    print(body.model_dump_json(indent=2, by_alias=True, exclude_none=True))
    if not summary.success:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
