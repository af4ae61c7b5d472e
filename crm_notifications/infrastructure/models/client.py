"""SQLAlchemy model for CRM clients."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func

from crm_notifications.infrastructure.database import Base


class ClientModel(Base):
    """Client record; only the fields reminders need are mapped."""

    __tablename__ = "client"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    email = Column(String(120), nullable=True)
    assigned_agent = Column(Integer, ForeignKey("profile.id"), nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["ClientModel"]
