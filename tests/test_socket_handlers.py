"""End-to-end tests of the Socket.IO lobby events using the test client."""


def events(client, name):
    return [e["args"][0] for e in client.get_received() if e["name"] == name]


def received_by_name(client):
    grouped = {}
    for event in client.get_received():
        grouped.setdefault(event["name"], []).append(event["args"][0])
    return grouped


def test_connect_assigns_connection_id(connect):
    client = connect()

    assert client.is_connected()
    connected = events(client, "connected")
    assert connected[0]["connection_id"] == 0


def test_admission_refuses_when_full(connect):
    clients = [connect() for _ in range(4)]
    assert all(c.is_connected() for c in clients)

    refused = connect()

    assert not refused.is_connected()


def test_join_broadcasts_roster_to_everyone(connect):
    first = connect()
    second = connect()
    first.get_received()
    second.get_received()

    first.emit("join_lobby", {"name": "Alpha", "role": "team"})

    mine = received_by_name(first)
    theirs = received_by_name(second)
    assert mine["joined_lobby"][0]["player"]["role"] == "TeamA"
    assert theirs["roster_updated"][-1]["participants"][0]["display_name"] == "Alpha"
    assert theirs["game_ready_status"][-1] == {"can_start": False}
    assert "joined_lobby" not in theirs


def test_inspector_downgrade_notice_goes_only_to_joiner(app_bundle, connect):
    _, _, coordinator = app_bundle
    watchers = [connect() for _ in range(3)]
    for index, client in enumerate(watchers):
        client.emit("join_lobby", {"name": f"Watcher {index}", "role": "inspector"})

    third = received_by_name(watchers[2])
    first = received_by_name(watchers[0])
    assert third["joined_lobby"][0]["player"]["role"] == "TeamA"
    assert third["lobby_notice"][0]["success"] is False
    assert "lobby_notice" not in first
    assert coordinator.inspector_count() == 2


def test_team_change_flow(connect):
    client = connect()
    client.emit("join_lobby", {"name": "Alpha"})
    client.get_received()

    client.emit("change_team", {"team": "team_b"})
    result = received_by_name(client)
    assert result["lobby_notice"][0]["success"] is True
    assert result["roster_updated"][-1]["participants"][0]["role"] == "TeamB"

    client.emit("change_team", {"team": "team_b"})
    result = received_by_name(client)
    assert result["lobby_notice"][0]["success"] is False
    assert "roster_updated" not in result


def test_ready_and_host_start(connect):
    host = connect()
    guest = connect()
    host.emit("host_lobby", {"name": "HostName"})
    guest.emit("join_lobby", {"name": "Guest"})

    host.emit("set_ready", {"ready": True})
    guest.get_received()
    guest.emit("set_ready", {"ready": True})
    assert events(guest, "game_ready_status")[-1] == {"can_start": True}

    guest.emit("start_game")
    assert events(guest, "lobby_notice")[0]["success"] is False

    host.get_received()
    host.emit("start_game")
    result = received_by_name(host)
    assert result["match_starting"][0]["match_started"] is True

    host.emit("start_game")
    result = received_by_name(host)
    assert "match_starting" not in result
    assert result["lobby_notice"][0]["success"] is False


def test_set_ready_requires_boolean(connect):
    client = connect()
    client.emit("join_lobby", {"name": "Alpha"})
    client.get_received()

    client.emit("set_ready", {"ready": "yes"})

    assert events(client, "error")[0]["message"] == "Missing ready flag"


def test_disconnect_removes_participant_and_recomputes(app_bundle, connect):
    _, _, coordinator = app_bundle
    first = connect()
    second = connect()
    first.emit("join_lobby", {"name": "Alpha"})
    second.emit("join_lobby", {"name": "Bravo"})
    first.emit("set_ready", {"ready": True})
    second.emit("set_ready", {"ready": True})
    assert coordinator.can_start()
    second.get_received()

    first.disconnect()

    result = received_by_name(second)
    snapshot = result["roster_updated"][-1]
    assert snapshot["player_count"] == 1
    assert snapshot["can_start"] is False
    assert result["game_ready_status"][-1] == {"can_start": False}


def test_get_lobby_replies_to_requester(connect):
    client = connect()
    client.get_received()

    client.emit("get_lobby")

    snapshot = events(client, "roster_updated")[0]
    assert snapshot["participants"] == []
    assert snapshot["max_players"] == 4


def test_events_are_dispatched_in_arrival_order(app_bundle):
    _, socketio, _ = app_bundle
    assert socketio.server.async_handlers is False
