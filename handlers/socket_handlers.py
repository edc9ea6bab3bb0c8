"""
Socket.IO Event Handlers for the volleyball lobby.

Pure routing layer that delegates to the lobby coordinator.
Contains no business logic - only event routing and response formatting.
"""

import logging
from flask import request
from flask_socketio import emit, ConnectionRefusedError

from utils.constants import SERVER_EVENTS

logger = logging.getLogger(__name__)

def register_socket_handlers(socketio, coordinator, connection_manager, broadcaster):
    """
    Register all Socket.IO event handlers.

    Args:
        socketio: SocketIO instance
        coordinator: Lobby coordinator instance
        connection_manager: Connection tracking instance
        broadcaster: Lobby broadcaster instance
    """

    def current_connection_id():
        connection_id = connection_manager.get_connection_id(request.sid)
        if connection_id is None:
            emit(SERVER_EVENTS['ERROR'], {'message': 'Not connected to the lobby'})
        else:
            connection_manager.update_activity(request.sid)
        return connection_id

    def handle_join(data, as_host):
        data = data or {}
        connection_id = current_connection_id()
        if connection_id is None:
            return

        update = coordinator.join(
            connection_id,
            data.get('name', coordinator.settings.default_player_name),
            data.get('role', 'team'),
            as_host=as_host
        )
        broadcaster.publish(update)

        participant = update.snapshot.get(connection_id)
        emit('joined_lobby', {
            'success': participant is not None,
            'player': participant.to_dict() if participant else None,
            'lobby': update.snapshot.to_dict()
        })

    @socketio.on('connect')
    def handle_connect():
        """Handle client connection, running the admission check."""
        success, message, connection_id = connection_manager.register_connection(
            request.sid, ip_address=request.remote_addr
        )
        if not success:
            logger.info(f"Refused connection {request.sid}: {message}")
            raise ConnectionRefusedError(message)

        logger.info(f"Client connected: {request.sid} as {connection_id}")
        emit(SERVER_EVENTS['CONNECTED'], {
            'connection_id': connection_id,
            'message': 'Connected to server successfully'
        })

    @socketio.on('disconnect')
    def handle_disconnect(reason=None):
        """Handle client disconnection."""
        logger.info(f"Client disconnected: {request.sid}")

        try:
            success, _, connection_id = connection_manager.unregister_connection(request.sid)
            if success:
                broadcaster.publish(coordinator.leave(connection_id))

        except Exception as e:
            logger.error(f"Error handling disconnect: {e}")

    @socketio.on('join_lobby')
    def handle_join_lobby(data=None):
        """Handle a peer completing its join handshake."""
        try:
            handle_join(data, as_host=False)
        except Exception as e:
            logger.error(f"Error joining lobby: {e}")
            emit(SERVER_EVENTS['ERROR'], {'message': 'Failed to join lobby'})

    @socketio.on('host_lobby')
    def handle_host_lobby(data=None):
        """Handle a peer joining as the match host."""
        try:
            handle_join(data, as_host=True)
        except Exception as e:
            logger.error(f"Error hosting lobby: {e}")
            emit(SERVER_EVENTS['ERROR'], {'message': 'Failed to host lobby'})

    @socketio.on('change_team')
    def handle_change_team(data=None):
        """Handle a team change request."""
        try:
            data = data or {}
            connection_id = current_connection_id()
            if connection_id is None:
                return

            broadcaster.publish(coordinator.request_team_change(connection_id, data.get('team')))

        except Exception as e:
            logger.error(f"Error changing team: {e}")
            emit(SERVER_EVENTS['ERROR'], {'message': 'Failed to change team'})

    @socketio.on('set_ready')
    def handle_set_ready(data=None):
        """Handle a ready status change."""
        try:
            data = data or {}
            connection_id = current_connection_id()
            if connection_id is None:
                return

            ready = data.get('ready')
            if not isinstance(ready, bool):
                emit(SERVER_EVENTS['ERROR'], {'message': 'Missing ready flag'})
                return

            broadcaster.publish(coordinator.request_ready(connection_id, ready))

        except Exception as e:
            logger.error(f"Error setting ready status: {e}")
            emit(SERVER_EVENTS['ERROR'], {'message': 'Failed to set ready status'})

    @socketio.on('start_game')
    def handle_start_game(data=None):
        """Handle the host starting the match."""
        try:
            connection_id = current_connection_id()
            if connection_id is None:
                return

            broadcaster.publish(coordinator.start_match(connection_id))

        except Exception as e:
            logger.error(f"Error starting game: {e}")
            emit(SERVER_EVENTS['ERROR'], {'message': 'Failed to start game'})

    @socketio.on('get_lobby')
    def handle_get_lobby(data=None):
        """Send the current roster snapshot to the requester only."""
        try:
            emit(SERVER_EVENTS['ROSTER_UPDATED'], coordinator.snapshot().to_dict())
        except Exception as e:
            logger.error(f"Error getting lobby: {e}")
            emit(SERVER_EVENTS['ERROR'], {'message': 'Failed to get lobby'})

    logger.info("Socket handlers registered successfully")
