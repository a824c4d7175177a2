"""Tests for the session and scenario API routes."""

import pytest
from fastapi.testclient import TestClient

from airshed.scenarios.registry import get_scenario
from api.main import app
from api.routes import sessions


@pytest.fixture
def client():
    sessions.sessions.clear()
    yield TestClient(app)
    sessions.sessions.clear()


def _create(client, scenario_id="business_as_usual") -> dict:
    response = client.post("/api/sessions", json={"scenario_id": scenario_id})
    assert response.status_code == 200
    return response.json()


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_predefined_scenarios(client):
    response = client.get("/api/scenarios/predefined")
    assert response.status_code == 200
    ids = {s["id"] for s in response.json()}
    assert ids == {"business_as_usual", "early_action", "late_response"}


def test_create_session(client):
    view = _create(client)

    assert view["day"] == 0
    assert view["finished"] is False
    assert view["current_day"]["index"] == 0
    assert view["current_day"]["environment"]["mixing_height"] == 180.0
    assert view["sliders"] == {"traffic": 60.0, "kilns": 70.0, "burning": 55.0, "dust": 50.0}
    assert view["report"]["pm"] == 60
    assert view["insight"] is None
    assert view["evaluation"] is None


def test_unknown_scenario(client):
    response = client.post("/api/sessions", json={"scenario_id": "nope"})
    assert response.status_code == 404


def test_unknown_session(client):
    assert client.get("/api/sessions/missing").status_code == 404
    assert client.post("/api/sessions/missing/advance").status_code == 404


def test_advance_and_nudge(client):
    session_id = _create(client)["session_id"]

    view = client.post(f"/api/sessions/{session_id}/advance").json()
    assert view["day"] == 1
    assert view["report"]["day"] == 1
    assert view["insight"].startswith("Dominant today:")

    view = client.post(f"/api/sessions/{session_id}/advance").json()
    assert view["current_day"]["index"] == 2
    assert view["sliders"]["kilns"] == 80.0


def test_set_controls(client):
    session_id = _create(client)["session_id"]

    response = client.put(
        f"/api/sessions/{session_id}/controls",
        json={"traffic": 10, "kilns": 0, "burning": 0, "dust": 25},
    )
    assert response.status_code == 200
    assert response.json()["sliders"]["traffic"] == 10.0

    response = client.put(
        f"/api/sessions/{session_id}/controls",
        json={"traffic": 150, "kilns": 0, "burning": 0, "dust": 25},
    )
    assert response.status_code == 422


def test_apply_policy_twice(client):
    session_id = _create(client)["session_id"]

    first = client.post(f"/api/sessions/{session_id}/policies/kiln_ban").json()
    assert first["applied"] is True
    assert "econ:8" in first["tradeoff_line"]

    second = client.post(f"/api/sessions/{session_id}/policies/kiln_ban").json()
    assert second["already_applied"] is True
    assert "econ:8" in second["tradeoff_line"]

    response = client.post(f"/api/sessions/{session_id}/policies/congestion_charge")
    assert response.status_code == 422


def test_scheduled_policies_applied_on_create(client):
    view = _create(client, "early_action")
    assert view["flags"]["kiln_ban"] is True
    assert view["flags"]["burning_crackdown"] is True


def test_full_episode_then_finished(client):
    session_id = _create(client)["session_id"]
    for _ in range(7):
        view = client.post(f"/api/sessions/{session_id}/advance").json()

    assert view["finished"] is True
    assert view["current_day"] is None
    assert view["evaluation"]["days"] == 7
    assert view["evaluation"]["tier"] in {"brutal", "improved", "strong"}

    response = client.post(f"/api/sessions/{session_id}/advance")
    assert response.status_code == 409

    series = client.get(f"/api/sessions/{session_id}/timeseries").json()
    assert series["days"] == list(range(8))


def test_reset(client):
    session_id = _create(client)["session_id"]
    client.post(f"/api/sessions/{session_id}/policies/odd_even")
    client.post(f"/api/sessions/{session_id}/advance")

    view = client.post(f"/api/sessions/{session_id}/reset").json()
    assert view["day"] == 0
    assert view["flags"]["odd_even"] is False
    assert view["report"]["pm"] == 60


def test_busy_session_rejected(client):
    session_id = _create(client)["session_id"]
    lock = sessions.sessions[session_id].lock
    lock.acquire()
    try:
        response = client.post(f"/api/sessions/{session_id}/advance")
    finally:
        lock.release()

    assert response.status_code == 409
    assert client.get(f"/api/sessions/{session_id}").json()["day"] == 0


def test_delete_session(client):
    session_id = _create(client)["session_id"]
    assert client.delete(f"/api/sessions/{session_id}").status_code == 200
    assert client.get(f"/api/sessions/{session_id}").status_code == 404


def test_scenario_with_unknown_policy_rejected(client, monkeypatch):
    config = get_scenario("business_as_usual")
    config.policy_schedule = {3: ["congestion_charge"]}
    monkeypatch.setattr(sessions, "get_scenario", lambda scenario_id: config)

    response = client.post("/api/sessions", json={"scenario_id": "business_as_usual"})

    assert response.status_code == 422
    assert "congestion_charge" in response.json()["detail"]
    assert sessions.sessions == {}
