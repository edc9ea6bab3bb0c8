"""Shared fixtures for lobby tests."""

import pytest

from config.settings import LobbySettings
from lobby import LobbyCoordinator


@pytest.fixture
def lobby_settings():
    return LobbySettings(
        max_players=4,
        max_inspectors=2,
        max_connections=4,
        default_player_name="Player",
        min_name_length=3,
        max_name_length=20,
    )


@pytest.fixture
def coordinator(lobby_settings):
    return LobbyCoordinator(lobby_settings)


@pytest.fixture
def app_bundle(lobby_settings):
    from app import create_app

    app, socketio, coordinator = create_app(lobby_settings)
    app.config["TESTING"] = True
    return app, socketio, coordinator


@pytest.fixture
def connect(app_bundle):
    """Open Socket.IO test clients and close them after the test."""
    app, socketio, _ = app_bundle
    clients = []

    def _connect():
        client = socketio.test_client(app)
        clients.append(client)
        return client

    yield _connect

    for client in clients:
        if client.is_connected():
            client.disconnect()
