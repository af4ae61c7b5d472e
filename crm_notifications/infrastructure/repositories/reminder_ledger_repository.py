"""Persistence for the reminder idempotency ledger."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from crm_notifications.infrastructure.models import ReminderLedgerModel
from crm_notifications.utils import ensure_app_naive_datetime


class ReminderLedgerRepository:
    """Track which (record, threshold) pairs already produced a reminder."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def has_entry(self, record_id: int, threshold: str) -> bool:
        query = self.session.query(ReminderLedgerModel.id).filter(
            ReminderLedgerModel.record_id == record_id,
            ReminderLedgerModel.threshold == threshold,
        )
        return query.first() is not None

    def record(self, record_id: int, threshold: str, notified_at: datetime) -> None:
        model = ReminderLedgerModel(
            record_id=record_id,
            threshold=threshold,
            notified_at=ensure_app_naive_datetime(notified_at),
        )
        self.session.add(model)
        self.session.commit()


__all__ = ["ReminderLedgerRepository"]
