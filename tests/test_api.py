"""Tests for the HTTP API."""

import inspect

from fastapi.routing import APIRoute
from fastapi.testclient import TestClient

from hydration_tracker.api.app import create_app
from hydration_tracker.containers import AppContainer
from tests.conftest import FixedClock


def _client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


def test_health(container: AppContainer) -> None:
    response = _client(container).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_add_intake_and_read_today(container: AppContainer) -> None:
    client = _client(container)
    client.put("/settings/goal", json={"goal": 2000})

    response = client.post("/intake", json={"amount": 500})

    assert response.status_code == 200
    data = response.json()
    assert data["date_key"] == "2024-01-01"
    assert data["today_intake"] == 500
    assert data["progress"] == 0.25
    assert data["remaining"] == 1500
    assert data["goal_reached"] is False
    assert data["morning_intake"] == 500
    assert len(data["entries"]) == 1
    assert client.get("/today").json()["today_intake"] == 500


def test_non_positive_intake_is_rejected(container: AppContainer) -> None:
    client = _client(container)

    response = client.post("/intake", json={"amount": 0})

    assert response.status_code == 422
    assert container.tracking_service.entries == []


def test_undo_and_reset(container: AppContainer) -> None:
    client = _client(container)
    client.post("/intake", json={"amount": 200})
    client.post("/intake", json={"amount": 300})

    undone = client.post("/intake/undo").json()
    reset = client.post("/today/reset").json()

    assert undone["today_intake"] == 200
    assert reset["today_intake"] == 0
    assert reset["entries"] == []


def test_requests_roll_over_to_new_day(
    container: AppContainer, clock: FixedClock
) -> None:
    client = _client(container)
    client.put("/settings/goal", json={"goal": 1000})
    client.post("/intake", json={"amount": 1200})
    clock.advance(days=1)

    today = client.get("/today").json()
    history = client.get("/history").json()

    assert today["date_key"] == "2024-01-02"
    assert today["today_intake"] == 0
    assert today["current_streak"] == 1
    assert history["records"] == [
        {
            "date_key": "2024-01-01",
            "total_intake": 1200,
            "goal": 1000,
            "unit": "ml",
            "progress": 1.0,
            "goal_met": True,
        }
    ]


def test_archive_today(container: AppContainer) -> None:
    client = _client(container)

    empty = client.post("/today/archive").json()
    client.post("/intake", json={"amount": 250})
    archived = client.post("/today/archive").json()

    assert empty == {"record": None}
    assert archived["record"]["date_key"] == "2024-01-01"
    assert archived["record"]["total_intake"] == 250


def test_unit_and_bottle_settings(container: AppContainer) -> None:
    client = _client(container)

    client.put("/settings/unit", json={"unit": "bottle"})
    data = client.put("/settings/bottle-size", json={"size": 800}).json()

    assert data["unit"] == "bottle"
    assert data["display_unit"] == "bottles"
    assert data["quick_add_amounts"] == [200, 400, 600, 800]
    assert client.put("/settings/unit", json={"unit": "cup"}).status_code == 422


def test_preferences(container: AppContainer) -> None:
    client = _client(container)

    before = client.get("/settings/preferences").json()
    after = client.put(
        "/settings/preferences", json={"is_dark_mode": True, "app_language": "es"}
    ).json()

    assert before == {
        "is_dark_mode": False,
        "is_dark_mode_set": False,
        "app_language": "device",
    }
    assert after == {
        "is_dark_mode": True,
        "is_dark_mode_set": True,
        "app_language": "es",
    }


def test_charts(container: AppContainer) -> None:
    client = _client(container)
    client.put("/settings/goal", json={"goal": 1000})
    client.post("/intake", json={"amount": 400})

    data = client.get("/charts", params={"last_days": 3}).json()

    assert [point["date_key"] for point in data["points"]] == [
        "2023-12-30",
        "2023-12-31",
        "2024-01-01",
    ]
    assert data["points"][-1] == {"date_key": "2024-01-01", "intake": 400, "goal": 1000}
    assert data["average_intake"] == 400 / 3
    assert data["days_goal_met"] == 0
    assert len(client.get("/charts").json()["points"]) == 7
    assert client.get("/charts", params={"last_days": 0}).status_code == 422


def test_month_calendar(container: AppContainer) -> None:
    client = _client(container)
    client.post("/intake", json={"amount": 300})

    data = client.get("/history/2024/1").json()

    assert len(data["days"]) == 31
    assert data["days"][0]["is_today"] is True
    assert data["days"][0]["intake"] == 300
    assert client.get("/history/2024/13").status_code == 422


def test_storage_handlers_run_in_threadpool(container: AppContainer) -> None:
    app = create_app(container)
    routes = [
        route
        for route in app.routes
        if isinstance(route, APIRoute) and route.path != "/health"
    ]

    assert routes
    for route in routes:
        assert not inspect.iscoroutinefunction(route.endpoint), route.path
