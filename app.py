"""
Volleyball Lobby Server

Flask-SocketIO backend that is the single authority for a VR volleyball
lobby. Peers connect, pick a team or the inspector role, mark themselves
ready, and the host starts the match once everyone is ready.
"""

import logging
from typing import Optional
from flask import Flask
from flask_socketio import SocketIO
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from config import settings
from config.settings import LobbySettings
from lobby import LobbyCoordinator, ConnectionManager, LobbyBroadcaster, SocketIOSubscriber
from handlers import register_socket_handlers, register_api_handlers

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

def create_app(lobby_settings: Optional[LobbySettings] = None):
    """
    Application factory that creates and configures the Flask app.

    Args:
        lobby_settings: Lobby configuration, defaults to environment settings

    Returns:
        Tuple of (app, socketio, coordinator)
    """
    lobby_settings = lobby_settings or LobbySettings()

    # Flask configuration
    app = Flask(__name__)
    app.config['SECRET_KEY'] = settings.SECRET_KEY

    # CORS configuration for browser tools
    CORS(app, origins=settings.CORS_ORIGINS.split(','))

    # ProxyFix for deployment behind reverse proxy
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1)

    # SocketIO configuration
    socketio = SocketIO(
        app,
        cors_allowed_origins=settings.CORS_ORIGINS.split(','),
        async_mode=settings.ASYNC_MODE,
        ping_timeout=60,
        ping_interval=25,
        # One client's events are handled in arrival order
        async_handlers=False
    )

    # Lobby authority, wired explicitly
    logger.info("Initializing lobby coordinator...")
    coordinator = LobbyCoordinator(lobby_settings)
    connection_manager = ConnectionManager(max_connections=lobby_settings.max_connections)
    broadcaster = LobbyBroadcaster()
    broadcaster.subscribe(SocketIOSubscriber(socketio, connection_manager))

    # Register handlers (pure routing layer)
    logger.info("Registering handlers...")
    register_socket_handlers(socketio, coordinator, connection_manager, broadcaster)
    register_api_handlers(app, coordinator, connection_manager)

    logger.info("Application initialization complete")

    return app, socketio, coordinator

def main():
    """Main entry point for development server."""

    app, socketio, coordinator = create_app()

    logger.info(f"Starting volleyball lobby server on port {settings.PORT}")
    logger.info(f"Debug mode: {settings.DEBUG}")
    logger.info(f"CORS origins: {settings.CORS_ORIGINS}")

    run_options = {}
    if settings.ASYNC_MODE == 'threading':
        # Werkzeug dev server refuses to start outside debug otherwise
        run_options['allow_unsafe_werkzeug'] = True

    try:
        socketio.run(app, debug=settings.DEBUG, port=settings.PORT, host='0.0.0.0', **run_options)
    finally:
        coordinator.shutdown()

if __name__ == '__main__':
    main()
