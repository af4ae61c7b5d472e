"""SQLAlchemy model for dispatched reminder keys."""

from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint

from crm_notifications.infrastructure.database import Base
from crm_notifications.utils import now_in_app_naive_datetime


class ReminderLedgerModel(Base):
    """One row per (appointment, threshold) that already produced a reminder."""

    __tablename__ = "reminder_ledger"
    __table_args__ = (
        UniqueConstraint("record_id", "threshold", name="uq_reminder_ledger_key"),
    )

    id = Column(Integer, primary_key=True, index=True)
    record_id = Column(Integer, nullable=False, index=True)
    threshold = Column(String(10), nullable=False)
    notified_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["ReminderLedgerModel"]
