"""SQLAlchemy model for client appointments and deadlines."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from crm_notifications.infrastructure.database import Base


class AppointmentModel(Base):
    """Calendar entry tied to a client; ``type == "Deadline"`` marks due dates."""

    __tablename__ = "appointment"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    client_id = Column(Integer, ForeignKey("client.id"), nullable=True, index=True)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=True)
    type = Column(String(20), nullable=True)
    status = Column(String(20), nullable=False, default="Scheduled")
    created_by = Column(Integer, ForeignKey("profile.id"), nullable=True)

    client = relationship("ClientModel", lazy="joined")
    creator = relationship("ProfileModel", lazy="joined")


__all__ = ["AppointmentModel"]
