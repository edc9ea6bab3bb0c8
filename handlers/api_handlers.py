"""
API Route Handlers for the volleyball lobby.

Pure routing layer that delegates to the lobby coordinator.
Contains no business logic - only request/response handling.
"""

import logging
from flask import jsonify

from utils.helpers import format_player_count

logger = logging.getLogger(__name__)

def register_api_handlers(app, coordinator, connection_manager):
    """
    Register all API route handlers.

    Args:
        app: Flask application instance
        coordinator: Lobby coordinator instance
        connection_manager: Connection tracking instance
    """

    @app.route('/api/health')
    def health_check():
        """Health check endpoint."""
        return jsonify({
            'status': 'healthy',
            'message': 'The volleyball lobby server is running',
            'lobby': coordinator.get_status(),
            'connections': connection_manager.get_status()
        })

    @app.route('/api/lobby')
    def get_lobby():
        """Current roster snapshot."""
        try:
            snapshot = coordinator.snapshot()
            payload = snapshot.to_dict()
            payload['player_count_text'] = format_player_count(snapshot.size, snapshot.max_players)
            return jsonify(payload)

        except Exception as e:
            logger.error(f"Error getting lobby: {e}")
            return jsonify({'error': 'Failed to get lobby'}), 500

    @app.route('/api/lobby/participants/<int:participant_id>')
    def get_participant(participant_id):
        """Look up a single participant."""
        participant = coordinator.get_participant(participant_id)
        if participant is None:
            return jsonify({'error': 'Participant not found'}), 404
        return jsonify({'player': participant.to_dict()})

    # Error handlers
    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        return jsonify({'error': 'Internal server error'}), 500

    logger.info("API handlers registered successfully")
