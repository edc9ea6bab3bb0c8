"""Tests for the read-only HTTP endpoints."""

import pytest


@pytest.fixture
def http(app_bundle):
    app, _, _ = app_bundle
    return app.test_client()


def test_health(http):
    response = http.get("/api/health")

    assert response.status_code == 200
    body = response.get_json()
    assert body["status"] == "healthy"
    assert body["lobby"]["max_inspectors"] == 2


def test_lobby_snapshot(app_bundle, http):
    _, _, coordinator = app_bundle
    coordinator.join(0, "Alpha")
    coordinator.join(1, "Watcher", "inspector")

    body = http.get("/api/lobby").get_json()

    assert body["player_count"] == 2
    assert body["player_count_text"] == "Players: 2/4"
    assert [p["display_name"] for p in body["participants"]] == ["Alpha", "Watcher"]


def test_participant_lookup(app_bundle, http):
    _, _, coordinator = app_bundle
    coordinator.join(3, "Alpha")

    found = http.get("/api/lobby/participants/3")
    missing = http.get("/api/lobby/participants/4")

    assert found.status_code == 200
    assert found.get_json()["player"]["role"] == "TeamA"
    assert missing.status_code == 404


def test_unknown_route_returns_json_404(http):
    response = http.get("/api/nope")

    assert response.status_code == 404
    assert response.get_json() == {"error": "Not found"}
