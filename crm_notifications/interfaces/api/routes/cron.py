"""Endpoints invoked by the external scheduler with the shared cron secret."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from crm_notifications.application.use_cases.notifications import (
    run_notification_cleanup,
)
from crm_notifications.application.use_cases.reminders import run_deadline_reminders
from crm_notifications.domain.entities import (
    RUN_STATUS_OK,
    RUN_STATUS_UNAUTHORIZED,
    CleanupSummary,
    ReminderRunSummary,
)
from crm_notifications.infrastructure.database import get_db
from crm_notifications.interfaces.api.schemas import CleanupRunRead, ReminderRunRead

router = APIRouter(prefix="/cron", tags=["cron"])

_UNAUTHORIZED_BODY = {"error": "Unauthorized"}


def _status_code_for(run_status: str) -> int:
    if run_status == RUN_STATUS_OK:
        return status.HTTP_200_OK
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _reminder_response(summary: ReminderRunSummary) -> JSONResponse:
    if summary.status == RUN_STATUS_UNAUTHORIZED:
        return JSONResponse(_UNAUTHORIZED_BODY, status_code=status.HTTP_401_UNAUTHORIZED)
    body = ReminderRunRead(
        success=summary.success,
        timestamp=summary.timestamp,
        deadlines_checked=summary.deadlines_checked,
        notifications_sent=summary.notifications_sent,
        emails_sent=summary.emails_sent,
        error=summary.error,
    )
    return JSONResponse(
        body.model_dump(mode="json", by_alias=True, exclude_none=True),
        status_code=_status_code_for(summary.status),
    )


def _cleanup_response(summary: CleanupSummary) -> JSONResponse:
    if summary.status == RUN_STATUS_UNAUTHORIZED:
        return JSONResponse(_UNAUTHORIZED_BODY, status_code=status.HTTP_401_UNAUTHORIZED)
    body = CleanupRunRead(
        success=summary.success,
        timestamp=summary.timestamp,
        deleted_read=summary.deleted_read,
        deleted_unread=summary.deleted_unread,
        total_deleted=summary.total_deleted,
        error=summary.error,
    )
    return JSONResponse(
        body.model_dump(mode="json", by_alias=True, exclude_none=True),
        status_code=_status_code_for(summary.status),
    )


@router.api_route("/deadline-reminders", methods=["GET", "POST"])
def deadline_reminders(
    authorization: str | None = Header(default=None),
    db: Session = Depends(get_db),
) -> JSONResponse:
    """Send reminders for deadlines crossing the 24-hour or 7-day threshold."""

    return _reminder_response(run_deadline_reminders(db, credential=authorization))


@router.api_route("/cleanup-notifications", methods=["GET", "POST"])
def cleanup_notifications(
    authorization: str | None = Header(default=None),
    db: Session = Depends(get_db),
) -> JSONResponse:
    """Apply the notification retention policy."""

    return _cleanup_response(run_notification_cleanup(db, credential=authorization))
