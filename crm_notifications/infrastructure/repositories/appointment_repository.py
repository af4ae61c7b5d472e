"""Read-only access to appointments that carry reminder-worthy due dates."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from crm_notifications.domain.entities import (
    APPOINTMENT_STATUS_SCHEDULED,
    APPOINTMENT_TYPE_DEADLINE,
    ClientSummary,
    DueDateRecord,
    ProfileSummary,
)
from crm_notifications.domain.errors import RecordFetchError
from crm_notifications.infrastructure.models import AppointmentModel
from crm_notifications.utils import ensure_app_naive_datetime, ensure_app_timezone


class AppointmentRepository:
    """Query the record store for :class:`DueDateRecord` projections."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_upcoming_deadlines(
        self, start: datetime, end: datetime
    ) -> list[DueDateRecord]:
        """Return scheduled deadlines whose start time lies in ``[start, end]``.

        Any database error is surfaced as a single :class:`RecordFetchError`;
        callers never receive a partial list.
        """

        try:
            models = (
                self.session.query(AppointmentModel)
                .filter(AppointmentModel.type == APPOINTMENT_TYPE_DEADLINE)
                .filter(AppointmentModel.status == APPOINTMENT_STATUS_SCHEDULED)
                .filter(AppointmentModel.start_time >= ensure_app_naive_datetime(start))
                .filter(AppointmentModel.start_time <= ensure_app_naive_datetime(end))
                .order_by(AppointmentModel.start_time, AppointmentModel.id)
                .all()
            )
            return [self._to_record(model) for model in models]
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise RecordFetchError(
                f"Failed to fetch upcoming deadlines: {exc}"
            ) from exc

    @staticmethod
    def _to_record(model: AppointmentModel) -> DueDateRecord:
        client = None
        if model.client is not None:
            client = ClientSummary(
                id=model.client.id,
                name=model.client.name,
                email=model.client.email,
                assigned_agent_id=model.client.assigned_agent,
            )
        profile = None
        if model.creator is not None:
            profile = ProfileSummary(
                id=model.creator.id,
                name=model.creator.name,
                email=model.creator.email,
            )
        return DueDateRecord(
            id=model.id,
            title=model.title,
            scheduled_at=ensure_app_timezone(model.start_time),
            type=model.type,
            status=model.status,
            client=client,
            profile=profile,
        )


__all__ = ["AppointmentRepository"]
