"""
Data models for lobby management.

These are pure data structures used to pass information between
the lobby coordinator, the broadcaster, and handlers.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import List, Optional, Dict, Any, Tuple
from utils.constants import LobbyIssue

class ParticipantRole(Enum):
    """Role a participant holds in the lobby."""
    TEAM_A = 'TeamA'
    TEAM_B = 'TeamB'
    INSPECTOR = 'Inspector'

    @property
    def is_team(self) -> bool:
        return self is not ParticipantRole.INSPECTOR

    @property
    def legacy_team_id(self) -> int:
        """Team id used by older clients: 0, 1, or -1 for inspectors."""
        return {
            ParticipantRole.TEAM_A: 0,
            ParticipantRole.TEAM_B: 1,
            ParticipantRole.INSPECTOR: -1
        }[self]

TEAM_ROLES = (ParticipantRole.TEAM_A, ParticipantRole.TEAM_B)

@dataclass(frozen=True)
class ParticipantRecord:
    """Represents one connected peer in the lobby."""
    id: int
    display_name: str
    role: ParticipantRole
    ready: bool = False
    is_host: bool = False
    joined_at: Optional[datetime] = None

    @property
    def is_inspector(self) -> bool:
        return self.role is ParticipantRole.INSPECTOR

    def with_changes(self, **changes) -> 'ParticipantRecord':
        """Return a copy of this record with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'display_name': self.display_name,
            'role': self.role.value,
            'team_id': self.role.legacy_team_id,
            'is_inspector': self.is_inspector,
            'ready': self.ready,
            'is_host': self.is_host,
            'joined_at': self.joined_at.isoformat() if self.joined_at else None
        }

@dataclass(frozen=True)
class RosterSnapshot:
    """Immutable view of the roster broadcast to replicas."""
    version: int
    participants: Tuple[ParticipantRecord, ...]
    can_start: bool
    max_players: int
    match_started: bool = False

    @property
    def size(self) -> int:
        return len(self.participants)

    @property
    def inspector_count(self) -> int:
        return len([p for p in self.participants if p.is_inspector])

    @property
    def team_counts(self) -> Dict[str, int]:
        """Number of members per team, inspectors excluded."""
        counts = {role.value: 0 for role in TEAM_ROLES}
        for participant in self.participants:
            if not participant.is_inspector:
                counts[participant.role.value] += 1
        return counts

    def get(self, participant_id: int) -> Optional[ParticipantRecord]:
        """Find participant by id."""
        for participant in self.participants:
            if participant.id == participant_id:
                return participant
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'version': self.version,
            'participants': [p.to_dict() for p in self.participants],
            'player_count': self.size,
            'max_players': self.max_players,
            'inspector_count': self.inspector_count,
            'team_counts': self.team_counts,
            'can_start': self.can_start,
            'match_started': self.match_started
        }

@dataclass(frozen=True)
class LobbyNotice:
    """A status message addressed to a single peer."""
    participant_id: int
    success: bool
    message: str
    issue: Optional[LobbyIssue] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'success': self.success,
            'message': self.message
        }

@dataclass
class LobbyUpdate:
    """
    Result of one coordinator operation.

    `changed` tells the caller whether the roster was mutated and a
    snapshot should be broadcast; notices are always delivered.
    """
    snapshot: RosterSnapshot
    changed: bool = False
    notices: List[LobbyNotice] = field(default_factory=list)
    match_starting: bool = False

    @property
    def can_start(self) -> bool:
        return self.snapshot.can_start

    def notices_for(self, participant_id: int) -> List[LobbyNotice]:
        """Get all notices addressed to a participant."""
        return [n for n in self.notices if n.participant_id == participant_id]
