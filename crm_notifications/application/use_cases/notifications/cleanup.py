"""Use case for the scheduled notification retention sweep."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from crm_notifications.domain.entities import (
    RUN_STATUS_FAILED,
    RUN_STATUS_OK,
    RUN_STATUS_UNAUTHORIZED,
    CleanupSummary,
)
from crm_notifications.domain.errors import NotificationSweepError
from crm_notifications.infrastructure.repositories import NotificationRepository
from crm_notifications.infrastructure.security import verify_trigger_credential
from crm_notifications.utils import ensure_app_timezone, now_in_app_timezone

logger = logging.getLogger(__name__)

READ_MAX_AGE = timedelta(days=30)
UNREAD_MAX_AGE = timedelta(days=90)


def run_notification_cleanup(
    session: Session,
    *,
    credential: str | None,
    now: datetime | None = None,
) -> CleanupSummary:
    """Delete read notifications older than 30 days and any older than 90."""

    now = ensure_app_timezone(now) if now is not None else now_in_app_timezone()

    if not verify_trigger_credential(credential):
        logger.warning("Rejected notification cleanup trigger with invalid credentials")
        return CleanupSummary(status=RUN_STATUS_UNAUTHORIZED, timestamp=now)

    try:
        result = NotificationRepository(session).sweep_expired(
            now, READ_MAX_AGE, UNREAD_MAX_AGE
        )
    except NotificationSweepError as exc:
        logger.error(
            "Notification cleanup failed after deleting %s read notifications: %s",
            exc.deleted_read,
            exc,
        )
        return CleanupSummary(
            status=RUN_STATUS_FAILED,
            timestamp=now_in_app_timezone(),
            deleted_read=exc.deleted_read,
            deleted_unread=exc.deleted_unread,
            error=str(exc),
        )

    summary = CleanupSummary(
        status=RUN_STATUS_OK,
        timestamp=now_in_app_timezone(),
        deleted_read=result.deleted_read,
        deleted_unread=result.deleted_unread,
    )
    logger.info(
        "Notification cleanup completed: read=%s unread=%s total=%s",
        summary.deleted_read,
        summary.deleted_unread,
        summary.total_deleted,
    )
    return summary


__all__ = ["READ_MAX_AGE", "UNREAD_MAX_AGE", "run_notification_cleanup"]
