"""Read access to CRM profiles."""

from __future__ import annotations

from sqlalchemy.orm import Session

from crm_notifications.domain.entities import ProfileSummary
from crm_notifications.infrastructure.models import ProfileModel


class ProfileRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, profile_id: int) -> ProfileSummary | None:
        model = self.session.get(ProfileModel, profile_id)
        if model is None:
            return None
        return ProfileSummary(id=model.id, name=model.name, email=model.email)


__all__ = ["ProfileRepository"]
