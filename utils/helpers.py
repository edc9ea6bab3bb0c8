"""
Helper utilities for the volleyball lobby server.

This module contains utility functions used throughout the application
for name validation and request parsing.
"""

import re
from typing import Any, Optional, Tuple
from .constants import PLACEHOLDER_NAME_PREFIX, TEAM_REQUESTS, INSPECTOR_ROLE_REQUEST

def placeholder_name(connection_id: int) -> str:
    """Generate the placeholder display name for a connection."""
    return f"{PLACEHOLDER_NAME_PREFIX}{connection_id}"

def validate_display_name(name: Optional[str], min_length: int = 3,
                          max_length: int = 20) -> Tuple[bool, Optional[str]]:
    """
    Validate a display name for the lobby.

    Args:
        name: Raw name supplied by the client
        min_length: Minimum length after trimming
        max_length: Maximum length after trimming

    Returns:
        tuple: (is_valid, error_message)
    """
    if not isinstance(name, str):
        return False, "Name must be text"

    name = name.strip()
    if not name:
        return False, "Name cannot be empty"

    if len(name) < min_length:
        return False, f"Name must be at least {min_length} characters"

    if len(name) > max_length:
        return False, f"Name must be {max_length} characters or less"

    return True, None

def sanitize_display_name(name: Optional[str], connection_id: int,
                          min_length: int = 3, max_length: int = 20) -> Tuple[str, bool]:
    """
    Trim a display name, substituting a placeholder when it is invalid.

    Args:
        name: Raw name supplied by the client
        connection_id: Connection the name belongs to
        min_length: Minimum length after trimming
        max_length: Maximum length after trimming

    Returns:
        tuple: (display_name, was_substituted)
    """
    is_valid, _ = validate_display_name(name, min_length, max_length)
    if not is_valid:
        return placeholder_name(connection_id), True

    # Collapse internal whitespace runs
    return re.sub(r'\s+', ' ', name.strip()), False

def parse_team_request(value: Any) -> Optional[str]:
    """
    Normalize a team identifier sent by a client.

    Accepts 'team_a'/'team_b', 'TeamA'/'TeamB' and the legacy 0/1 team ids.

    Returns:
        'TeamA', 'TeamB' or None if the value names no team
    """
    if value is None or isinstance(value, bool):
        return None
    key = str(value).strip().lower()
    return TEAM_REQUESTS.get(key)

def is_inspector_request(value: Any) -> bool:
    """Check whether a join request asks for the inspector role."""
    if isinstance(value, bool):
        return value
    return str(value or '').strip().lower() == INSPECTOR_ROLE_REQUEST

def format_player_count(count: int, max_players: int) -> str:
    """Format the roster size against the capacity hint."""
    return f"Players: {count}/{max_players}"
