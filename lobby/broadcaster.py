"""
Lobby broadcaster.

Publishes coordinator results to an explicit list of subscribers.
The Socket.IO subscriber pushes snapshots to every peer and notices
to the peer they concern; tests and presentation code can subscribe
their own callbacks.
"""

import logging
from typing import Callable, List

from utils.constants import SERVER_EVENTS
from .models import LobbyUpdate

logger = logging.getLogger(__name__)

Subscriber = Callable[[LobbyUpdate], None]

class LobbyBroadcaster:
    """Fan-out of lobby updates to subscribers."""

    def __init__(self):
        self._subscribers: List[Subscriber] = []

    def subscribe(self, subscriber: Subscriber) -> Subscriber:
        """Register a subscriber; returns it so it can be unsubscribed later."""
        if subscriber not in self._subscribers:
            self._subscribers.append(subscriber)
        return subscriber

    def unsubscribe(self, subscriber: Subscriber) -> bool:
        """Remove a subscriber. Returns False if it was not registered."""
        try:
            self._subscribers.remove(subscriber)
            return True
        except ValueError:
            return False

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def publish(self, update: LobbyUpdate) -> None:
        """
        Deliver an update to every subscriber.

        Fire-and-forget: a failing subscriber is logged and skipped so the
        remaining ones still receive the update.
        """
        if not update.changed and not update.notices:
            return

        for subscriber in list(self._subscribers):
            try:
                subscriber(update)
            except Exception as e:
                logger.error(f"Error publishing lobby update to {subscriber!r}: {e}")

class SocketIOSubscriber:
    """
    Pushes lobby updates to peers over Socket.IO.

    Args:
        socketio: SocketIO instance
        connection_manager: Resolves connection ids to socket ids
    """

    def __init__(self, socketio, connection_manager):
        self.socketio = socketio
        self.connection_manager = connection_manager

    def __call__(self, update: LobbyUpdate) -> None:
        if update.changed:
            snapshot = update.snapshot.to_dict()
            self.socketio.emit(SERVER_EVENTS['ROSTER_UPDATED'], snapshot)
            self.socketio.emit(SERVER_EVENTS['GAME_READY_STATUS'], {'can_start': update.can_start})
            if update.match_starting:
                self.socketio.emit(SERVER_EVENTS['MATCH_STARTING'], snapshot)

        for notice in update.notices:
            socket_id = self.connection_manager.get_socket_id(notice.participant_id)
            if socket_id is None:
                logger.debug(f"Dropping notice for departed participant {notice.participant_id}")
                continue
            self.socketio.emit(SERVER_EVENTS['LOBBY_NOTICE'], notice.to_dict(), to=socket_id)
