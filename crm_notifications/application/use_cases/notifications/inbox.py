"""Use cases for a user's notification inbox."""

from __future__ import annotations

import math
from dataclasses import dataclass

from sqlalchemy.orm import Session

from crm_notifications.domain.entities import NOTIFICATION_TYPES, Notification
from crm_notifications.domain.errors import (
    NotificationAccessError,
    NotificationNotFoundError,
)
from crm_notifications.infrastructure.repositories import NotificationRepository


@dataclass(frozen=True)
class NotificationPage:
    """One page of a user's inbox."""

    items: list[Notification]
    count: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.count / self.limit) if self.limit else 0


def list_notifications(
    session: Session,
    *,
    user_id: int,
    page: int = 1,
    limit: int = 20,
    unread_only: bool = False,
    notification_type: str | None = None,
) -> NotificationPage:
    """Return the requested page of ``user_id``'s notifications, newest first."""

    items, total = NotificationRepository(session).list_for_user(
        user_id,
        page=page,
        limit=limit,
        unread_only=unread_only,
        notification_type=notification_type,
    )
    return NotificationPage(items=items, count=total, page=page, limit=limit)


def create_notification(
    session: Session,
    *,
    user_id: int,
    title: str,
    message: str,
    notification_type: str,
    action_url: str | None = None,
) -> Notification:
    """Store a new unread notification for ``user_id``."""

    if notification_type not in NOTIFICATION_TYPES:
        raise ValueError(f"Invalid notification type: {notification_type}")

    notification = Notification(
        id=None,
        user_id=user_id,
        title=title,
        message=message,
        type=notification_type,
        action_url=action_url,
    )
    return NotificationRepository(session).create(notification)


def _get_owned(
    repository: NotificationRepository, notification_id: int, user_id: int
) -> Notification:
    notification = repository.get(notification_id)
    if notification is None:
        raise NotificationNotFoundError("Notification not found")
    if notification.user_id != user_id:
        raise NotificationAccessError("Notification belongs to another user")
    return notification


def mark_notification_read(
    session: Session, *, notification_id: int, user_id: int
) -> Notification:
    """Mark one of ``user_id``'s notifications as read."""

    repository = NotificationRepository(session)
    _get_owned(repository, notification_id, user_id)
    updated = repository.mark_as_read(notification_id)
    if updated is None:
        raise NotificationNotFoundError("Notification not found")
    return updated


def mark_all_notifications_read(session: Session, *, user_id: int) -> int:
    """Mark every unread notification of ``user_id`` as read and return the count."""

    return NotificationRepository(session).mark_all_read(user_id)


def delete_notification(
    session: Session, *, notification_id: int, user_id: int
) -> None:
    """Remove one of ``user_id``'s notifications."""

    repository = NotificationRepository(session)
    _get_owned(repository, notification_id, user_id)
    if not repository.delete(notification_id):
        raise NotificationNotFoundError("Notification not found")


__all__ = [
    "NotificationPage",
    "create_notification",
    "delete_notification",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
]
