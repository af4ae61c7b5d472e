"""Shared fixtures: a throwaway SQLite database and seed helpers."""

from __future__ import annotations

import os
import sys
import tempfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import pytest

# Ensure the project root (which contains ``crm_notifications`` and ``main``) is importable
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "crm_notifications_test.db"

CRON_SECRET = "test-cron-secret"
CRON_AUTHORIZATION = f"Bearer {CRON_SECRET}"

os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["CRON_SECRET"] = CRON_SECRET
os.environ["APP_TIMEZONE"] = "UTC"
os.environ["APP_BASE_URL"] = "https://crm.example.com"
os.environ["REMINDER_LEDGER_ENABLED"] = "false"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from crm_notifications.config import get_settings  # noqa: E402

get_settings.cache_clear()

from crm_notifications.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from crm_notifications.infrastructure.models import (  # noqa: E402
    AppointmentModel,
    ClientModel,
    ProfileModel,
)
from crm_notifications.utils import ensure_app_naive_datetime  # noqa: E402


@dataclass(frozen=True)
class SeededDeadline:
    appointment_id: int
    client_id: int
    agent_id: int | None
    creator_id: int
    creator_email: str


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def create_profile(db_session):
    def _create(name: str = "Avery Agent", email: str = "agent@example.com", role: str = "Agent") -> int:
        profile = ProfileModel(name=name, email=email, role=role)
        db_session.add(profile)
        db_session.commit()
        return profile.id

    return _create


@pytest.fixture
def seed_deadline(db_session):
    """Insert an appointment with its client, assigned agent and creator."""

    def _seed(
        *,
        start_time: datetime,
        title: str = "Closing documents",
        appointment_type: str = "Deadline",
        status: str = "Scheduled",
        client_name: str = "Acme Holdings",
        with_agent: bool = True,
        creator_email: str = "creator@example.com",
    ) -> SeededDeadline:
        creator = ProfileModel(name="Casey Creator", email=creator_email, role="Agent")
        db_session.add(creator)
        agent = None
        if with_agent:
            agent = ProfileModel(name="Avery Agent", email="agent@example.com", role="Agent")
            db_session.add(agent)
        db_session.flush()

        client = ClientModel(
            name=client_name,
            email="client@example.com",
            assigned_agent=agent.id if agent is not None else None,
        )
        db_session.add(client)
        db_session.flush()

        appointment = AppointmentModel(
            title=title,
            client_id=client.id,
            start_time=ensure_app_naive_datetime(start_time),
            type=appointment_type,
            status=status,
            created_by=creator.id,
        )
        db_session.add(appointment)
        db_session.flush()

        seeded = SeededDeadline(
            appointment_id=appointment.id,
            client_id=client.id,
            agent_id=agent.id if agent is not None else None,
            creator_id=creator.id,
            creator_email=creator_email,
        )
        db_session.commit()
        return seeded

    return _seed
