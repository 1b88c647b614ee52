# backend/tests/test_scheduling_router.py

import threading
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from helpers import FakeClock, RecordingSleep
from reminder.main import create_app
from reminder.notifications.service import CompositeNotificationService, EventBroadcaster
from reminder.scheduling import state
from reminder.scheduling.scheduler import NotificationScheduler
from reminder.scheduling.schemas import NOTIFICATION_EVENT

NOW = datetime(2025, 6, 1, 14, 0)


@pytest.fixture
def broadcaster() -> EventBroadcaster:
    return EventBroadcaster()


def _install_scheduler(monkeypatch, broadcaster: EventBroadcaster, sleep=None) -> NotificationScheduler:
    """共有スケジューラを、時刻固定のテスト用インスタンスに差し替える。"""
    scheduler = NotificationScheduler(
        CompositeNotificationService([broadcaster]),
        clock=FakeClock(NOW),
        sleep=sleep,
    )
    monkeypatch.setattr(state, "_scheduler", scheduler)
    return scheduler


def test_schedule_list_and_cancel(monkeypatch, broadcaster) -> None:
    # sleep 未指定 = 実際の asyncio.sleep（1時間待つのでテスト中には発火しない）
    scheduler = _install_scheduler(monkeypatch, broadcaster)

    with TestClient(create_app()) as client:
        resp = client.post(
            "/notifications/schedule",
            json={"id": 1, "time": "2025-06-01T15:00", "message": "meeting"},
        )
        assert resp.status_code == 200
        assert resp.json() == {"id": 1, "status": "scheduled"}

        resp = client.get("/notifications/pending")
        assert resp.status_code == 200
        body = resp.json()
        assert len(body) == 1
        assert body[0]["id"] == 1
        assert body[0]["time"] == "2025-06-01T15:00"
        assert body[0]["message"] == "meeting"

        resp = client.delete("/notifications/1")
        assert resp.status_code == 200
        assert resp.json() == {"id": 1, "status": "cancelled"}

        assert client.get("/notifications/pending").json() == []

    assert scheduler.pending_count == 0


def test_cancel_unknown_id_succeeds(monkeypatch, broadcaster) -> None:
    _install_scheduler(monkeypatch, broadcaster)

    with TestClient(create_app()) as client:
        resp = client.delete("/notifications/424242")

    assert resp.status_code == 200
    assert resp.json()["status"] == "cancelled"


def test_schedule_with_malformed_time_returns_400(monkeypatch, broadcaster) -> None:
    scheduler = _install_scheduler(monkeypatch, broadcaster)

    with TestClient(create_app()) as client:
        resp = client.post(
            "/notifications/schedule",
            json={"id": 2, "time": "not-a-date", "message": "x"},
        )

    assert resp.status_code == 400
    assert "Invalid time format" in resp.json()["detail"]
    assert scheduler.pending_count == 0


def test_schedule_with_past_time_is_dropped(monkeypatch, broadcaster) -> None:
    scheduler = _install_scheduler(monkeypatch, broadcaster)

    with TestClient(create_app()) as client:
        resp = client.post(
            "/notifications/schedule",
            json={"id": 1, "time": "2000-01-01T00:00", "message": "x"},
        )

    assert resp.status_code == 200
    assert resp.json() == {"id": 1, "status": "dropped"}
    assert scheduler.pending_count == 0


def test_schedule_with_missing_fields_returns_422(monkeypatch, broadcaster) -> None:
    _install_scheduler(monkeypatch, broadcaster)

    with TestClient(create_app()) as client:
        resp = client.post("/notifications/schedule", json={"id": 1})

    assert resp.status_code == 422


def test_due_notification_is_broadcast_to_listeners(monkeypatch, broadcaster) -> None:
    scheduler = _install_scheduler(monkeypatch, broadcaster, sleep=RecordingSleep())

    received = []
    delivered = threading.Event()

    def listener(event_name, payload) -> None:
        received.append((event_name, payload))
        delivered.set()

    broadcaster.subscribe(listener)

    with TestClient(create_app()) as client:
        resp = client.post(
            "/notifications/schedule",
            json={"id": 7, "time": "2025-06-01T14:01", "message": "tea"},
        )
        assert resp.status_code == 200
        assert delivered.wait(timeout=5)

    assert received == [
        (NOTIFICATION_EVENT, {"id": 7, "time": "2025-06-01T14:01", "message": "tea"})
    ]
    assert scheduler.pending_count == 0


def test_health_reports_pending_count(monkeypatch, broadcaster) -> None:
    _install_scheduler(monkeypatch, broadcaster)

    with TestClient(create_app()) as client:
        client.post(
            "/notifications/schedule",
            json={"id": 1, "time": "2025-06-01T18:00", "message": "x"},
        )
        resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "pending": 1}
