"""Persistence helpers for notification entities."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from crm_notifications.domain.entities import NOTIFICATION_TYPE_INFO, Notification
from crm_notifications.domain.errors import NotificationSweepError
from crm_notifications.infrastructure.models import NotificationModel
from crm_notifications.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_naive_datetime,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SweepResult:
    """Rows removed by each retention phase."""

    deleted_read: int
    deleted_unread: int

    @property
    def total_deleted(self) -> int:
        return self.deleted_read + self.deleted_unread


class NotificationRepository:
    """Own the lifecycle of :class:`Notification` records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, notification: Notification) -> Notification:
        """Persist ``notification`` as a new unread inbox entry stamped with the current time."""

        model = NotificationModel(
            user_id=notification.user_id,
            title=notification.title,
            message=notification.message,
            type=notification.type or NOTIFICATION_TYPE_INFO,
            action_url=notification.action_url,
            read=False,
            created_at=now_in_app_naive_datetime(),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            return None
        return self._to_entity(model)

    def list_for_user(
        self,
        user_id: int,
        *,
        page: int = 1,
        limit: int = 20,
        unread_only: bool = False,
        notification_type: str | None = None,
    ) -> tuple[list[Notification], int]:
        """Return one page of the user's notifications, newest first, and the total."""

        query = self.session.query(NotificationModel).filter(
            NotificationModel.user_id == user_id
        )
        if unread_only:
            query = query.filter(NotificationModel.read.is_(False))
        if notification_type:
            query = query.filter(NotificationModel.type == notification_type)

        total = query.count()
        models = (
            query.order_by(
                NotificationModel.created_at.desc(), NotificationModel.id.desc()
            )
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return [self._to_entity(model) for model in models], total

    def mark_as_read(self, notification_id: int) -> Notification | None:
        """Flag a single notification as read; reading twice is harmless."""

        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            return None
        if not model.read:
            model.read = True
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def mark_all_read(self, user_id: int) -> int:
        """Mark every unread notification of ``user_id`` as read.

        Returns the number of rows that changed; ``0`` when nothing was unread.
        """

        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.user_id == user_id,
                NotificationModel.read.is_(False),
            )
            .update({NotificationModel.read: True}, synchronize_session=False)
        )
        self.session.commit()
        return int(updated or 0)

    def delete(self, notification_id: int) -> bool:
        """Delete a notification by id.

        Returns ``True`` when a record was removed and ``False`` when the
        requested notification was not found.
        """

        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            return False

        self.session.delete(model)
        self.session.commit()
        return True

    def sweep_expired(
        self,
        now: datetime,
        read_max_age: timedelta,
        unread_max_age: timedelta,
    ) -> SweepResult:
        """Apply the two-tier retention policy.

        Phase one removes read notifications older than ``read_max_age``.
        Phase two removes every notification older than ``unread_max_age``,
        read or not. Each phase commits on its own, so a failure in phase two
        leaves phase one's deletions in place; the raised
        :class:`NotificationSweepError` reports how many rows were removed.
        """

        read_cutoff = ensure_app_naive_datetime(now - read_max_age)
        unread_cutoff = ensure_app_naive_datetime(now - unread_max_age)

        try:
            deleted_read = (
                self.session.query(NotificationModel)
                .filter(
                    NotificationModel.read.is_(True),
                    NotificationModel.created_at < read_cutoff,
                )
                .delete(synchronize_session=False)
            )
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise NotificationSweepError(
                f"Failed to delete old notifications: {exc}"
            ) from exc

        try:
            deleted_unread = (
                self.session.query(NotificationModel)
                .filter(NotificationModel.created_at < unread_cutoff)
                .delete(synchronize_session=False)
            )
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise NotificationSweepError(
                f"Failed to delete old unread notifications: {exc}",
                deleted_read=int(deleted_read or 0),
            ) from exc

        logger.debug(
            "Retention sweep removed %s read and %s stale notifications",
            deleted_read,
            deleted_unread,
        )
        return SweepResult(
            deleted_read=int(deleted_read or 0),
            deleted_unread=int(deleted_unread or 0),
        )

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            message=model.message,
            type=model.type,
            action_url=model.action_url,
            read=bool(model.read),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository", "SweepResult"]
