"""
Lobby roster for the volleyball lobby server.

Holds the canonical collection of participants keyed by connection id.
Only the coordinator mutates it; everything else sees snapshots.
"""

import logging
from typing import Dict, List, Optional

from .models import ParticipantRecord, ParticipantRole, TEAM_ROLES

logger = logging.getLogger(__name__)

class LobbyRoster:
    """
    Server-owned collection of participants.

    Records are kept in insertion order. Every mutation bumps `version`
    so replicas can discard stale snapshots.
    """

    def __init__(self):
        """Initialize an empty roster."""
        self.participants: Dict[int, ParticipantRecord] = {}  # id -> ParticipantRecord
        self.version = 0
        logger.debug("Lobby roster initialized")

    def __len__(self) -> int:
        return len(self.participants)

    def __contains__(self, participant_id: int) -> bool:
        return participant_id in self.participants

    def add(self, record: ParticipantRecord) -> bool:
        """
        Add a participant to the roster.

        Args:
            record: Participant to add

        Returns:
            True if added, False if the id is already present
        """
        if record.id in self.participants:
            logger.warning(f"Participant {record.id} already in lobby")
            return False

        self.participants[record.id] = record
        self.version += 1
        logger.info(f"Added participant {record.display_name} ({record.id}) as {record.role.value}")
        return True

    def remove(self, participant_id: int) -> Optional[ParticipantRecord]:
        """
        Remove a participant from the roster.

        Args:
            participant_id: Connection id of the participant

        Returns:
            The removed record, or None if not found
        """
        record = self.participants.pop(participant_id, None)
        if record is None:
            logger.debug(f"Participant {participant_id} not in lobby")
            return None

        self.version += 1
        logger.info(f"Removed participant {record.display_name} ({participant_id}) from lobby")
        return record

    def replace(self, record: ParticipantRecord) -> bool:
        """Swap in an updated record for an existing id."""
        if record.id not in self.participants:
            return False
        if self.participants[record.id] == record:
            return False

        self.participants[record.id] = record
        self.version += 1
        return True

    def get(self, participant_id: int) -> Optional[ParticipantRecord]:
        """Get participant by id."""
        return self.participants.get(participant_id)

    def get_all(self) -> List[ParticipantRecord]:
        """Get all participants in insertion order."""
        return list(self.participants.values())

    def get_host(self) -> Optional[ParticipantRecord]:
        """Get the hosting participant, if any."""
        for record in self.participants.values():
            if record.is_host:
                return record
        return None

    def inspector_count(self) -> int:
        """Number of participants holding the inspector role."""
        return len([p for p in self.participants.values() if p.is_inspector])

    def team_count(self, role: ParticipantRole) -> int:
        """Number of non-inspector members on a team."""
        return len([p for p in self.participants.values()
                    if not p.is_inspector and p.role is role])

    def balanced_team(self) -> ParticipantRole:
        """Team with fewer members; ties go to the first team."""
        team_a, team_b = TEAM_ROLES
        if self.team_count(team_a) <= self.team_count(team_b):
            return team_a
        return team_b

    def all_ready(self) -> bool:
        return all(p.ready for p in self.participants.values())

    def clear(self) -> None:
        """Drop every participant (server shutdown)."""
        if self.participants:
            self.participants.clear()
            self.version += 1
