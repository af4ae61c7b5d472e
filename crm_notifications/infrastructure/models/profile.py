"""SQLAlchemy model for CRM user profiles."""

from sqlalchemy import Column, DateTime, Integer, String, func

from crm_notifications.infrastructure.database import Base


class ProfileModel(Base):
    """Agents and staff members of the CRM."""

    __tablename__ = "profile"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    email = Column(String(120), nullable=False, index=True)
    role = Column(String(20), nullable=False, default="Assistant")
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["ProfileModel"]
