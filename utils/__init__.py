"""
Utilities module for the volleyball lobby server.

This module contains constants and helper functions
used throughout the application.
"""

from .constants import LobbyIssue, STATUS_MESSAGES, SERVER_EVENTS, INSPECTOR_ROLE_REQUEST
from .helpers import (
    placeholder_name, validate_display_name, sanitize_display_name,
    parse_team_request, is_inspector_request, format_player_count
)

__all__ = [
    'LobbyIssue',
    'STATUS_MESSAGES',
    'SERVER_EVENTS',
    'INSPECTOR_ROLE_REQUEST',
    'placeholder_name',
    'validate_display_name',
    'sanitize_display_name',
    'parse_team_request',
    'is_inspector_request',
    'format_player_count'
]
