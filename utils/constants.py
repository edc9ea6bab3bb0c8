"""
Lobby constants for the volleyball lobby server.

This module contains all constant values used throughout the lobby,
including role names, socket event names, issue codes and status messages.
"""

from enum import Enum

# Role identifier a client sends to join as a spectator
INSPECTOR_ROLE_REQUEST = 'inspector'

# Team identifiers accepted by the change_team event
TEAM_REQUESTS = {
    'team_a': 'TeamA',
    'team_b': 'TeamB',
    'teama': 'TeamA',
    'teamb': 'TeamB',
    '0': 'TeamA',
    '1': 'TeamB'
}

# Socket.IO events emitted by the server
SERVER_EVENTS = {
    'CONNECTED': 'connected',
    'ROSTER_UPDATED': 'roster_updated',
    'GAME_READY_STATUS': 'game_ready_status',
    'LOBBY_NOTICE': 'lobby_notice',
    'MATCH_STARTING': 'match_starting',
    'ERROR': 'error'
}

# Prefix for generated placeholder names
PLACEHOLDER_NAME_PREFIX = 'Player_'

# Minimum roster size before a match may start
MIN_PARTICIPANTS_TO_START = 2


class LobbyIssue(Enum):
    """Soft failures recovered locally by the lobby authority."""
    INVALID_NAME = 'invalid_name'
    DUPLICATE_JOIN = 'duplicate_join'
    INSPECTOR_CAP_EXCEEDED = 'inspector_cap_exceeded'
    FORBIDDEN_TEAM_CHANGE = 'forbidden_team_change'
    NOOP_TEAM_CHANGE = 'noop_team_change'
    INVALID_TEAM = 'invalid_team'
    UNKNOWN_PARTICIPANT = 'unknown_participant'
    HOST_TAKEN = 'host_taken'
    NOT_HOST = 'not_host'
    NOT_READY = 'not_ready'
    LOBBY_FULL = 'lobby_full'
    MATCH_ALREADY_STARTED = 'match_already_started'


# Human-readable messages delivered to peers
STATUS_MESSAGES = {
    LobbyIssue.INSPECTOR_CAP_EXCEEDED: 'Inspector limit reached! You joined as a regular player.',
    LobbyIssue.FORBIDDEN_TEAM_CHANGE: 'Inspectors cannot change teams!',
    LobbyIssue.NOOP_TEAM_CHANGE: 'You are already in {team}!',
    LobbyIssue.INVALID_TEAM: 'Unknown team: {team}',
    LobbyIssue.HOST_TAKEN: 'This lobby already has a host. You joined as a regular player.',
    LobbyIssue.NOT_HOST: 'Only the host can start the match.',
    LobbyIssue.NOT_READY: 'Not every player is ready yet.',
    LobbyIssue.LOBBY_FULL: 'Server is full!',
    LobbyIssue.MATCH_ALREADY_STARTED: 'The match has already started.',
    'TEAM_CHANGED': 'Switched to {team}!',
    'MATCH_STARTING': 'Starting the match...'
}
