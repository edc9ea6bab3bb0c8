"""
Lobby Module for the volleyball lobby server.

Contains all lobby management logic and components.
Handles the authoritative roster, connection tracking, and broadcasting.
"""

from .models import ParticipantRole, ParticipantRecord, RosterSnapshot, LobbyNotice, LobbyUpdate
from .roster import LobbyRoster
from .coordinator import LobbyCoordinator
from .connection_manager import ConnectionManager, PeerSession
from .broadcaster import LobbyBroadcaster, SocketIOSubscriber

__all__ = [
    # Data models
    'ParticipantRole',
    'ParticipantRecord',
    'RosterSnapshot',
    'LobbyNotice',
    'LobbyUpdate',
    'PeerSession',

    # Managers
    'LobbyRoster',
    'LobbyCoordinator',
    'ConnectionManager',
    'LobbyBroadcaster',
    'SocketIOSubscriber'
]
