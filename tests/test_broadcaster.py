"""Tests for LobbyBroadcaster and the Socket.IO subscriber."""

from unittest.mock import MagicMock

from lobby import LobbyBroadcaster, SocketIOSubscriber, ConnectionManager


def test_publish_reaches_subscribers_until_unsubscribed(coordinator):
    broadcaster = LobbyBroadcaster()
    received = []
    subscriber = broadcaster.subscribe(received.append)

    broadcaster.publish(coordinator.join(1, "Alpha"))
    assert len(received) == 1

    assert broadcaster.unsubscribe(subscriber)
    assert not broadcaster.unsubscribe(subscriber)
    broadcaster.publish(coordinator.join(2, "Bravo"))
    assert len(received) == 1


def test_unchanged_update_without_notices_is_not_published(coordinator):
    broadcaster = LobbyBroadcaster()
    received = []
    broadcaster.subscribe(received.append)

    broadcaster.publish(coordinator.leave(123))

    assert received == []


def test_rejection_notice_is_published(coordinator):
    broadcaster = LobbyBroadcaster()
    received = []
    broadcaster.subscribe(received.append)
    coordinator.join(1, "Alpha")

    broadcaster.publish(coordinator.request_team_change(1, "team_a"))

    assert len(received) == 1
    assert not received[0].changed


def test_failing_subscriber_does_not_block_others(coordinator):
    broadcaster = LobbyBroadcaster()
    received = []

    def broken(update):
        raise RuntimeError("boom")

    broadcaster.subscribe(broken)
    broadcaster.subscribe(received.append)

    broadcaster.publish(coordinator.join(1, "Alpha"))

    assert len(received) == 1
    assert broadcaster.subscriber_count == 2


def test_socketio_subscriber_emits_snapshot_and_targets_notices(coordinator):
    socketio = MagicMock()
    connections = ConnectionManager()
    connections.register_connection("sid-a")
    connections.register_connection("sid-b")
    subscriber = SocketIOSubscriber(socketio, connections)

    coordinator.join(0, "Alpha")
    subscriber(coordinator.request_team_change(0, "team_b"))

    event_names = [c.args[0] for c in socketio.emit.call_args_list]
    assert event_names == ["roster_updated", "game_ready_status", "lobby_notice"]
    notice_call = socketio.emit.call_args_list[-1]
    assert notice_call.kwargs["to"] == "sid-a"
    assert notice_call.args[1]["success"] is True


def test_socketio_subscriber_drops_notices_for_departed_peers(coordinator):
    socketio = MagicMock()
    subscriber = SocketIOSubscriber(socketio, ConnectionManager())

    coordinator.join(5, "Alpha")
    subscriber(coordinator.request_team_change(5, "team_a"))

    socketio.emit.assert_not_called()
