"""Tests for the notification inbox endpoints."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from crm_notifications.infrastructure.database import SessionLocal
from crm_notifications.infrastructure.models import NotificationModel
from crm_notifications.infrastructure.security import create_access_token
from crm_notifications.utils import ensure_app_naive_datetime
from main import create_app


@pytest.fixture
def client():
    with TestClient(create_app()) as test_client:
        yield test_client


def _auth_headers(user_id: int, role: str | None = None) -> dict[str, str]:
    claims = {"sub": str(user_id)}
    if role:
        claims["role"] = role
    return {"Authorization": f"Bearer {create_access_token(claims)}"}


def _seed_notification(
    user_id: int,
    title: str,
    *,
    notification_type: str = "info",
    read: bool = False,
    minutes_ago: int = 0,
) -> int:
    created_at = datetime.now(timezone.utc) - timedelta(minutes=minutes_ago)
    with SessionLocal() as session:
        model = NotificationModel(
            user_id=user_id,
            title=title,
            message=f"{title} body",
            type=notification_type,
            read=read,
            created_at=ensure_app_naive_datetime(created_at),
        )
        session.add(model)
        session.commit()
        return model.id


def test_requests_without_token_are_rejected(client):
    assert client.get("/notifications/").status_code == 401
    assert (
        client.get(
            "/notifications/", headers={"Authorization": "Bearer not-a-token"}
        ).status_code
        == 401
    )


def test_list_notifications_paginates_newest_first(client, create_profile):
    user_id = create_profile()
    other_id = create_profile(name="Other", email="other@example.com")
    for index in range(5):
        _seed_notification(user_id, f"n{index}", minutes_ago=10 - index)
    _seed_notification(other_id, "not mine")

    response = client.get(
        "/notifications/", params={"page": 2, "limit": 2}, headers=_auth_headers(user_id)
    )

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 5
    assert body["page"] == 2
    assert body["limit"] == 2
    assert body["totalPages"] == 3
    assert [item["title"] for item in body["data"]] == ["n2", "n1"]


def test_list_notifications_filters_unread_and_type(client, create_profile):
    user_id = create_profile()
    _seed_notification(user_id, "read warning", notification_type="warning", read=True)
    _seed_notification(user_id, "unread warning", notification_type="warning")
    _seed_notification(user_id, "unread info")

    unread = client.get(
        "/notifications/", params={"unread": "true"}, headers=_auth_headers(user_id)
    ).json()
    assert sorted(item["title"] for item in unread["data"]) == ["unread info", "unread warning"]

    warnings = client.get(
        "/notifications/", params={"type": "warning"}, headers=_auth_headers(user_id)
    ).json()
    assert warnings["count"] == 2
    assert {item["type"] for item in warnings["data"]} == {"warning"}


def test_create_notification_for_self(client, create_profile):
    user_id = create_profile()

    response = client.post(
        "/notifications/",
        json={"title": "Call back", "message": "Ring the client", "type": "success"},
        headers=_auth_headers(user_id),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["user_id"] == user_id
    assert body["read"] is False
    assert body["type"] == "success"


def test_create_notification_for_other_user_requires_admin(client, create_profile):
    user_id = create_profile()
    other_id = create_profile(name="Other", email="other@example.com")
    payload = {"title": "Heads up", "message": "Check the file", "user_id": other_id}

    forbidden = client.post("/notifications/", json=payload, headers=_auth_headers(user_id))
    assert forbidden.status_code == 403

    allowed = client.post(
        "/notifications/", json=payload, headers=_auth_headers(user_id, role="Admin")
    )
    assert allowed.status_code == 201
    assert allowed.json()["user_id"] == other_id


def test_create_notification_rejects_unknown_type(client, create_profile):
    user_id = create_profile()

    response = client.post(
        "/notifications/",
        json={"title": "Hi", "message": "There", "type": "urgent"},
        headers=_auth_headers(user_id),
    )

    assert response.status_code == 422


def test_mark_single_notification_read(client, create_profile):
    user_id = create_profile()
    other_id = create_profile(name="Other", email="other@example.com")
    notification_id = _seed_notification(user_id, "hello")

    assert (
        client.patch(
            f"/notifications/{notification_id}",
            json={"read": True},
            headers=_auth_headers(other_id),
        ).status_code
        == 403
    )
    assert (
        client.patch(
            "/notifications/9999", json={"read": True}, headers=_auth_headers(user_id)
        ).status_code
        == 404
    )
    assert (
        client.patch(
            f"/notifications/{notification_id}",
            json={"read": False},
            headers=_auth_headers(user_id),
        ).status_code
        == 400
    )

    response = client.patch(
        f"/notifications/{notification_id}",
        json={"read": True},
        headers=_auth_headers(user_id),
    )
    assert response.status_code == 200
    assert response.json()["read"] is True


def test_delete_notification(client, create_profile):
    user_id = create_profile()
    other_id = create_profile(name="Other", email="other@example.com")
    notification_id = _seed_notification(user_id, "bye")

    assert (
        client.delete(
            f"/notifications/{notification_id}", headers=_auth_headers(other_id)
        ).status_code
        == 403
    )
    assert (
        client.delete(
            f"/notifications/{notification_id}", headers=_auth_headers(user_id)
        ).status_code
        == 204
    )
    assert (
        client.delete(
            f"/notifications/{notification_id}", headers=_auth_headers(user_id)
        ).status_code
        == 404
    )


def test_mark_all_read_reports_count(client, create_profile):
    user_id = create_profile()
    for index in range(3):
        _seed_notification(user_id, f"n{index}")
    _seed_notification(user_id, "done", read=True)

    first = client.patch("/notifications/mark-all-read", headers=_auth_headers(user_id))
    assert first.status_code == 200
    assert first.json() == {"count": 3, "message": "Marked 3 notifications as read"}

    second = client.patch("/notifications/mark-all-read", headers=_auth_headers(user_id))
    assert second.json()["count"] == 0

    unread = client.get(
        "/notifications/", params={"unread": "true"}, headers=_auth_headers(user_id)
    ).json()
    assert unread["count"] == 0
