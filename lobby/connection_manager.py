"""
Connection Manager for the volleyball lobby.

Handles connection admission, disconnections, and session tracking.
Maps transport session ids to the stable connection ids the lobby uses.
Contains no lobby logic - purely connection and session management.
"""

import logging
import threading
from typing import Dict, Optional, Tuple, Any
from dataclasses import dataclass
from datetime import datetime

from utils.constants import STATUS_MESSAGES, LobbyIssue

logger = logging.getLogger(__name__)

@dataclass
class PeerSession:
    """Information about a connected peer."""
    connection_id: int
    socket_id: str
    connection_time: datetime
    last_activity: datetime
    ip_address: Optional[str] = None

class ConnectionManager:
    """
    Manages peer connections for the lobby authority.

    Connection ids are assigned in connect order starting at 0 and are
    never reused while the server runs.
    """

    def __init__(self, max_connections: int = 6):
        """
        Initialize connection manager.

        Args:
            max_connections: Maximum simultaneous connections admitted
        """
        self.sessions: Dict[str, PeerSession] = {}  # socket_id -> PeerSession
        self.id_to_socket: Dict[int, str] = {}  # connection_id -> socket_id
        self.max_connections = max_connections
        self._next_id = 0
        self._lock = threading.Lock()
        logger.debug("Connection manager initialized")

    def approve(self, current_connections: Optional[int] = None) -> Tuple[bool, Optional[str]]:
        """
        Connection-admission hook, run before a peer may join.

        Args:
            current_connections: Current connection count, defaults to tracked sessions

        Returns:
            Tuple of (approved, rejection_reason)
        """
        if current_connections is None:
            current_connections = len(self.sessions)

        if current_connections >= self.max_connections:
            logger.info(f"Connection rejected: Server full ({current_connections}/{self.max_connections})")
            return False, STATUS_MESSAGES[LobbyIssue.LOBBY_FULL]

        logger.debug(f"Connection approved. Total players will be: "
                     f"{current_connections + 1}/{self.max_connections}")
        return True, None

    def register_connection(self, socket_id: str,
                            ip_address: Optional[str] = None) -> Tuple[bool, str, Optional[int]]:
        """
        Admit and register a new peer connection.

        Args:
            socket_id: Unique socket connection ID
            ip_address: Client IP address (optional)

        Returns:
            Tuple of (success, message, connection_id)
        """
        with self._lock:
            existing = self.sessions.get(socket_id)
            if existing:
                return True, "Already connected", existing.connection_id

            approved, reason = self.approve()
            if not approved:
                return False, reason, None

            connection_id = self._next_id
            self._next_id += 1

            now = datetime.now()
            self.sessions[socket_id] = PeerSession(
                connection_id=connection_id,
                socket_id=socket_id,
                connection_time=now,
                last_activity=now,
                ip_address=ip_address
            )
            self.id_to_socket[connection_id] = socket_id

            logger.info(f"Registered connection {connection_id} ({socket_id})")
            return True, "Connected", connection_id

    def unregister_connection(self, socket_id: str) -> Tuple[bool, str, Optional[int]]:
        """
        Unregister a peer connection.

        Args:
            socket_id: Socket connection ID to unregister

        Returns:
            Tuple of (success, message, connection_id)
        """
        with self._lock:
            session = self.sessions.pop(socket_id, None)
            if session is None:
                return False, "Connection not found", None

            self.id_to_socket.pop(session.connection_id, None)

            logger.info(f"Unregistered connection {session.connection_id} ({socket_id})")
            return True, f"Connection {session.connection_id} closed", session.connection_id

    def update_activity(self, socket_id: str) -> bool:
        """Update last activity time for a session."""
        session = self.sessions.get(socket_id)
        if session:
            session.last_activity = datetime.now()
            return True
        return False

    def get_connection_id(self, socket_id: str) -> Optional[int]:
        """Get the connection id for a socket, or None if not registered."""
        session = self.sessions.get(socket_id)
        return session.connection_id if session else None

    def get_socket_id(self, connection_id: int) -> Optional[str]:
        """Get the socket id for a connection id."""
        return self.id_to_socket.get(connection_id)

    def connection_count(self) -> int:
        return len(self.sessions)

    def get_status(self) -> Dict[str, Any]:
        """
        Get current status of the connection manager.

        Returns:
            Status information dictionary
        """
        return {
            'connected_sessions': len(self.sessions),
            'max_connections': self.max_connections,
            'next_connection_id': self._next_id
        }
