from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from crm_notifications.domain.entities import Notification
from crm_notifications.domain.errors import NotificationSweepError
from crm_notifications.infrastructure.database import SessionLocal
from crm_notifications.infrastructure.models import NotificationModel
from crm_notifications.infrastructure.repositories import NotificationRepository
from crm_notifications.utils import ensure_app_naive_datetime

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
READ_MAX_AGE = timedelta(days=30)
UNREAD_MAX_AGE = timedelta(days=90)


def _store(repository, user_id, *, title, age=timedelta(0), read=False, notification_type="info"):
    model = NotificationModel(
        user_id=user_id,
        title=title,
        message=f"{title} message",
        type=notification_type,
        read=read,
        created_at=ensure_app_naive_datetime(NOW - age),
    )
    repository.session.add(model)
    repository.session.commit()
    return model.id


def _remaining_titles():
    with SessionLocal() as session:
        return sorted(row.title for row in session.query(NotificationModel).all())


def test_create_always_stores_unread(db_session, create_profile):
    user_id = create_profile()
    repository = NotificationRepository(db_session)

    created = repository.create(
        Notification(id=None, user_id=user_id, title="Hello", message="World", read=True)
    )

    assert created.id is not None
    assert created.read is False
    assert created.type == "info"
    assert created.created_at is not None


def test_create_stamps_current_time_over_supplied_timestamp(db_session, create_profile):
    user_id = create_profile()
    repository = NotificationRepository(db_session)
    before = datetime.now(timezone.utc)

    created = repository.create(
        Notification(
            id=None,
            user_id=user_id,
            title="Backdated",
            message="Should not keep the old timestamp",
            created_at=NOW - timedelta(days=365),
        )
    )

    assert created.created_at >= before - timedelta(seconds=1)
    assert created.created_at <= datetime.now(timezone.utc) + timedelta(seconds=1)


def test_list_for_user_pages_newest_first_and_filters(db_session, create_profile):
    user_id = create_profile()
    other_id = create_profile(name="Other", email="other@example.com")
    repository = NotificationRepository(db_session)

    for index in range(5):
        _store(repository, user_id, title=f"n{index}", age=timedelta(hours=5 - index))
    _store(repository, user_id, title="warned", notification_type="warning", read=True)
    _store(repository, other_id, title="not mine")

    first_page, total = repository.list_for_user(user_id, page=1, limit=4)
    assert total == 6
    assert [item.title for item in first_page] == ["warned", "n4", "n3", "n2"]

    second_page, _ = repository.list_for_user(user_id, page=2, limit=4)
    assert [item.title for item in second_page] == ["n1", "n0"]

    unread, unread_total = repository.list_for_user(user_id, unread_only=True)
    assert unread_total == 5
    assert all(not item.read for item in unread)

    warnings, warning_total = repository.list_for_user(user_id, notification_type="warning")
    assert warning_total == 1
    assert warnings[0].title == "warned"


def test_mark_all_read_is_idempotent(db_session, create_profile):
    user_id = create_profile()
    other_id = create_profile(name="Other", email="other@example.com")
    repository = NotificationRepository(db_session)
    for index in range(3):
        _store(repository, user_id, title=f"n{index}")
    _store(repository, user_id, title="already", read=True)
    _store(repository, other_id, title="someone else")

    assert repository.mark_all_read(user_id) == 3
    assert repository.mark_all_read(user_id) == 0

    items, _ = repository.list_for_user(user_id)
    assert all(item.read for item in items)
    others, _ = repository.list_for_user(other_id, unread_only=True)
    assert len(others) == 1


def test_delete_reports_missing_rows(db_session, create_profile):
    user_id = create_profile()
    repository = NotificationRepository(db_session)
    notification_id = _store(repository, user_id, title="bye")

    assert repository.delete(notification_id) is True
    assert repository.delete(notification_id) is False
    assert repository.get(notification_id) is None


def test_sweep_expired_applies_both_retention_tiers(db_session, create_profile):
    user_id = create_profile()
    repository = NotificationRepository(db_session)
    _store(repository, user_id, title="read-31d", age=timedelta(days=31), read=True)
    _store(repository, user_id, title="read-29d", age=timedelta(days=29), read=True)
    _store(repository, user_id, title="unread-91d", age=timedelta(days=91))
    _store(repository, user_id, title="unread-89d", age=timedelta(days=89))
    _store(repository, user_id, title="unread-10d", age=timedelta(days=10))

    result = repository.sweep_expired(NOW, READ_MAX_AGE, UNREAD_MAX_AGE)

    assert result.deleted_read == 1
    assert result.deleted_unread == 1
    assert result.total_deleted == 2
    assert _remaining_titles() == ["read-29d", "unread-10d", "unread-89d"]


def test_sweep_expired_keeps_first_phase_when_second_fails(
    db_session, create_profile, monkeypatch: pytest.MonkeyPatch
):
    user_id = create_profile()
    repository = NotificationRepository(db_session)
    _store(repository, user_id, title="read-31d", age=timedelta(days=31), read=True)
    _store(repository, user_id, title="unread-91d", age=timedelta(days=91))

    original_query = db_session.query
    calls = {"count": 0}

    def flaky_query(*args, **kwargs):
        calls["count"] += 1
        if calls["count"] == 2:
            raise OperationalError("DELETE FROM notification", {}, Exception("database is locked"))
        return original_query(*args, **kwargs)

    monkeypatch.setattr(db_session, "query", flaky_query)

    with pytest.raises(NotificationSweepError) as exc_info:
        repository.sweep_expired(NOW, READ_MAX_AGE, UNREAD_MAX_AGE)

    assert exc_info.value.deleted_read == 1
    assert exc_info.value.deleted_unread == 0
    assert str(exc_info.value).startswith("Failed to delete old unread notifications")
    assert _remaining_titles() == ["unread-91d"]
