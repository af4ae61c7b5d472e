"""Endpoints for reading and managing the notification inbox."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from crm_notifications.application.use_cases.notifications import (
    create_notification as create_notification_uc,
    delete_notification as delete_notification_uc,
    list_notifications as list_notifications_uc,
    mark_all_notifications_read as mark_all_notifications_read_uc,
    mark_notification_read as mark_notification_read_uc,
    send_notification_emails as send_notification_emails_uc,
)
from crm_notifications.domain.entities import EmailRecipient, Notification
from crm_notifications.domain.errors import (
    NotificationAccessError,
    NotificationNotFoundError,
)
from crm_notifications.infrastructure.database import get_db
from crm_notifications.interfaces.api.dependencies import (
    AuthenticatedUser,
    get_current_user,
)
from crm_notifications.interfaces.api.schemas import (
    EmailErrorRead,
    EmailResultRead,
    MarkAllReadResponse,
    NotificationCreate,
    NotificationEmailRequest,
    NotificationEmailResponse,
    NotificationPageRead,
    NotificationRead,
    NotificationType,
    NotificationUpdate,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _to_read_model(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)


@router.get("/", response_model=NotificationPageRead)
def list_notifications(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    unread: bool = Query(False, description="Only return unread notifications"),
    notification_type: NotificationType | None = Query(None, alias="type"),
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> NotificationPageRead:
    """Return a page of the authenticated user's notifications, newest first."""

    result = list_notifications_uc(
        db,
        user_id=current_user.id,
        page=page,
        limit=limit,
        unread_only=unread,
        notification_type=notification_type,
    )
    return NotificationPageRead(
        data=[_to_read_model(item) for item in result.items],
        count=result.count,
        page=result.page,
        limit=result.limit,
        total_pages=result.total_pages,
    )


@router.post("/", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
def create_notification(
    payload: NotificationCreate,
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> NotificationRead:
    """Create a notification; only administrators may target other users."""

    target_user_id = payload.user_id or current_user.id
    if target_user_id != current_user.id and not current_user.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions"
        )

    try:
        notification = create_notification_uc(
            db,
            user_id=target_user_id,
            title=payload.title,
            message=payload.message,
            notification_type=payload.type,
            action_url=payload.action_url,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_read_model(notification)


@router.post("/email", response_model=NotificationEmailResponse)
def send_notification_email(
    payload: NotificationEmailRequest,
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> JSONResponse:
    """Email each recipient; answers 207 when only some deliveries succeeded."""

    recipients = [
        EmailRecipient(
            email=item.email,
            name=item.name,
            notification_type=item.notification_type,
            client_name=item.client_name,
            deadline=item.deadline,
            appointment_time=item.appointment_time,
            location=item.location,
        )
        for item in payload.recipients
    ]
    try:
        report = send_notification_emails_uc(
            db,
            user_id=current_user.id,
            is_admin=current_user.is_admin(),
            email_type=payload.type,
            recipients=recipients,
            title=payload.title,
            message=payload.message,
            action_url=payload.action_url,
        )
    except NotificationAccessError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    body = NotificationEmailResponse(
        success=report.success,
        sent=report.sent,
        failed=report.failed,
        results=[
            EmailResultRead(email=result.email)
            for result in report.results
            if result.success
        ],
        errors=[
            EmailErrorRead(email=result.email, error=result.error or "Unknown error")
            for result in report.results
            if not result.success
        ]
        or None,
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if report.success else status.HTTP_207_MULTI_STATUS,
        content=body.model_dump(exclude_none=True),
    )


@router.patch("/mark-all-read", response_model=MarkAllReadResponse)
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> MarkAllReadResponse:
    """Mark every unread notification of the authenticated user as read."""

    count = mark_all_notifications_read_uc(db, user_id=current_user.id)
    return MarkAllReadResponse(
        count=count, message=f"Marked {count} notifications as read"
    )


@router.patch("/{notification_id}", response_model=NotificationRead)
def update_notification(
    notification_id: int,
    payload: NotificationUpdate,
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> NotificationRead:
    """Mark a single notification as read."""

    if not payload.read:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Notifications cannot be marked as unread",
        )
    try:
        notification = mark_notification_read_uc(
            db, notification_id=notification_id, user_id=current_user.id
        )
    except NotificationNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except NotificationAccessError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized") from exc
    return _to_read_model(notification)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> None:
    """Delete one of the authenticated user's notifications."""

    try:
        delete_notification_uc(
            db, notification_id=notification_id, user_id=current_user.id
        )
    except NotificationNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except NotificationAccessError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized") from exc
