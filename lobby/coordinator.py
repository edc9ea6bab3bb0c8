"""
Lobby session coordinator.

The single authority over the lobby roster. Validates join, leave,
team-change and ready requests, arbitrates the host slot and derives
the start-readiness signal. Every operation returns a LobbyUpdate;
broadcasting it is left to the caller.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Set, Union

from config.settings import LobbySettings
from utils.constants import LobbyIssue, STATUS_MESSAGES, MIN_PARTICIPANTS_TO_START
from utils.helpers import sanitize_display_name, parse_team_request, is_inspector_request
from .models import (
    ParticipantRecord, ParticipantRole, RosterSnapshot, LobbyNotice, LobbyUpdate
)
from .roster import LobbyRoster

logger = logging.getLogger(__name__)

class LobbyCoordinator:
    """
    Authoritative lobby state machine.

    Mutations are serialized by a re-entrant lock, so handlers running
    on different worker threads are processed one at a time.
    """

    def __init__(self, settings: Optional[LobbySettings] = None):
        """
        Initialize the coordinator.

        Args:
            settings: Lobby configuration, defaults to environment settings
        """
        self.settings = settings or LobbySettings()
        self.roster = LobbyRoster()
        self.match_started = False
        self.departed: Set[int] = set()  # ids that disconnected, never rejoin
        self._lock = threading.RLock()
        logger.debug(f"Lobby coordinator initialized (max inspectors: {self.settings.max_inspectors})")

    # Operations

    def join(self, participant_id: int, name: Optional[str], role: Union[str, bool, None] = 'team',
             as_host: bool = False) -> LobbyUpdate:
        """
        Add a participant once their join handshake completes.

        Args:
            participant_id: Connection id assigned by the transport
            name: Requested display name
            role: 'team' or 'inspector'
            as_host: Whether the participant asks to host the match

        Returns:
            LobbyUpdate with the new snapshot and any notices for the joiner
        """
        with self._lock:
            if participant_id in self.roster:
                logger.warning(f"Duplicate join from {participant_id} ignored ({LobbyIssue.DUPLICATE_JOIN.value})")
                return self._update(changed=False)

            if participant_id in self.departed:
                logger.warning(f"Join from departed connection {participant_id} ignored "
                               f"({LobbyIssue.UNKNOWN_PARTICIPANT.value})")
                return self._update(changed=False)

            notices = []
            display_name, substituted = sanitize_display_name(
                name, participant_id,
                self.settings.min_name_length, self.settings.max_name_length
            )
            if substituted:
                logger.info(f"Invalid name from {participant_id} replaced with {display_name} "
                            f"({LobbyIssue.INVALID_NAME.value})")

            wants_inspector = is_inspector_request(role)

            is_host = False
            if as_host:
                host = self.roster.get_host()
                if host is None:
                    # Hosts always play on a team
                    is_host = True
                    wants_inspector = False
                else:
                    logger.info(f"Host request from {participant_id} refused, {host.id} is hosting")
                    notices.append(self._notice(participant_id, False, LobbyIssue.HOST_TAKEN))

            if wants_inspector and self.roster.inspector_count() >= self.settings.max_inspectors:
                logger.info(f"Inspector cap reached, {participant_id} joins a team instead")
                notices.append(self._notice(participant_id, False, LobbyIssue.INSPECTOR_CAP_EXCEEDED))
                wants_inspector = False

            if wants_inspector:
                assigned_role = ParticipantRole.INSPECTOR
            else:
                assigned_role = self.roster.balanced_team()

            record = ParticipantRecord(
                id=participant_id,
                display_name=display_name,
                role=assigned_role,
                ready=False,
                is_host=is_host,
                joined_at=datetime.now(timezone.utc)
            )
            self.roster.add(record)

            logger.info(f"Player {display_name} (ID: {participant_id}) joined as {assigned_role.value}"
                        f"{' (Host)' if is_host else ''}")
            return self._update(changed=True, notices=notices)

    def leave(self, participant_id: int) -> LobbyUpdate:
        """
        Remove a participant after a transport-level disconnect.

        Disconnect is final: later joins for the same id are ignored.
        The start-readiness signal is recomputed as part of the snapshot.
        """
        with self._lock:
            self.departed.add(participant_id)
            removed = self.roster.remove(participant_id)
            if removed is None:
                return self._update(changed=False)

            if removed.is_host:
                logger.info(f"Host {removed.display_name} left, host slot is free")
            return self._update(changed=True)

    def request_team_change(self, participant_id: int,
                            target: Union[ParticipantRole, str, int, None]) -> LobbyUpdate:
        """
        Move a participant to another team.

        Args:
            participant_id: Connection id of the requester
            target: Target team as a role, 'team_a'/'team_b' or 0/1

        Returns:
            LobbyUpdate with a notice describing the outcome
        """
        with self._lock:
            record = self.roster.get(participant_id)
            if record is None:
                logger.debug(f"Team change from unknown participant {participant_id} ignored "
                             f"({LobbyIssue.UNKNOWN_PARTICIPANT.value})")
                return self._update(changed=False)

            if record.is_inspector:
                return self._reject(participant_id, LobbyIssue.FORBIDDEN_TEAM_CHANGE)

            target_role = self._resolve_team(target)
            if target_role is None:
                return self._reject(participant_id, LobbyIssue.INVALID_TEAM, team=getattr(target, "value", target))

            if record.role is target_role:
                return self._reject(participant_id, LobbyIssue.NOOP_TEAM_CHANGE, team=target_role.value)

            self.roster.replace(record.with_changes(role=target_role))
            logger.info(f"Player {participant_id} changed to {target_role.value}")

            notice = LobbyNotice(
                participant_id=participant_id,
                success=True,
                message=STATUS_MESSAGES['TEAM_CHANGED'].format(team=target_role.value)
            )
            return self._update(changed=True, notices=[notice])

    def request_ready(self, participant_id: int, ready: bool) -> LobbyUpdate:
        """
        Set the ready flag of the requesting participant.

        Only the sender's own record is touched, so no peer can ready
        up another.
        """
        with self._lock:
            record = self.roster.get(participant_id)
            if record is None:
                logger.debug(f"Ready request from unknown participant {participant_id} ignored "
                             f"({LobbyIssue.UNKNOWN_PARTICIPANT.value})")
                return self._update(changed=False)

            self.roster.replace(record.with_changes(ready=bool(ready)))
            update = self._update(changed=True)
            logger.info(f"Player {participant_id} ready status: {bool(ready)} (can start: {update.can_start})")
            return update

    def start_match(self, participant_id: int) -> LobbyUpdate:
        """
        Start the match on behalf of the host.

        Rejected unless the requester is the host and the start-readiness
        signal holds.
        """
        with self._lock:
            record = self.roster.get(participant_id)
            if record is None:
                return self._update(changed=False)

            if not record.is_host:
                return self._reject(participant_id, LobbyIssue.NOT_HOST)

            if self.match_started:
                return self._reject(participant_id, LobbyIssue.MATCH_ALREADY_STARTED)

            if not self._compute_can_start():
                return self._reject(participant_id, LobbyIssue.NOT_READY)

            self.match_started = True
            logger.info(f"Match started by host {record.display_name}")
            notice = LobbyNotice(participant_id, True, STATUS_MESSAGES['MATCH_STARTING'])
            update = self._update(changed=True, notices=[notice])
            update.match_starting = True
            return update

    def shutdown(self) -> None:
        """Discard the roster at server shutdown."""
        with self._lock:
            self.roster.clear()
            self.departed.clear()
            self.match_started = False
            logger.info("Lobby roster discarded")

    # Queries

    def snapshot(self) -> RosterSnapshot:
        """Take an immutable snapshot of the current roster."""
        with self._lock:
            return RosterSnapshot(
                version=self.roster.version,
                participants=tuple(self.roster.get_all()),
                can_start=self._compute_can_start(),
                max_players=self.settings.max_players,
                match_started=self.match_started
            )

    def can_start(self) -> bool:
        with self._lock:
            return self._compute_can_start()

    def get_participant(self, participant_id: int) -> Optional[ParticipantRecord]:
        with self._lock:
            return self.roster.get(participant_id)

    def inspector_count(self) -> int:
        with self._lock:
            return self.roster.inspector_count()

    def team_counts(self) -> Dict[str, int]:
        return self.snapshot().team_counts

    def get_status(self) -> Dict[str, Any]:
        """Get current status of the coordinator."""
        snapshot = self.snapshot()
        return {
            'participants': snapshot.size,
            'max_players': self.settings.max_players,
            'max_inspectors': self.settings.max_inspectors,
            'inspectors': snapshot.inspector_count,
            'can_start': snapshot.can_start,
            'match_started': snapshot.match_started,
            'version': snapshot.version
        }

    # Internals

    def _compute_can_start(self) -> bool:
        # Inspectors count toward "everyone ready"
        return len(self.roster) >= MIN_PARTICIPANTS_TO_START and self.roster.all_ready()

    @staticmethod
    def _resolve_team(target) -> Optional[ParticipantRole]:
        if isinstance(target, ParticipantRole):
            return target if target.is_team else None
        value = parse_team_request(target)
        return ParticipantRole(value) if value else None

    def _notice(self, participant_id: int, success: bool, issue: LobbyIssue, **fmt) -> LobbyNotice:
        return LobbyNotice(
            participant_id=participant_id,
            success=success,
            message=STATUS_MESSAGES[issue].format(**fmt),
            issue=issue
        )

    def _reject(self, participant_id: int, issue: LobbyIssue, **fmt) -> LobbyUpdate:
        logger.info(f"Request from {participant_id} rejected: {issue.value}")
        return self._update(changed=False, notices=[self._notice(participant_id, False, issue, **fmt)])

    def _update(self, changed: bool, notices=None) -> LobbyUpdate:
        return LobbyUpdate(snapshot=self.snapshot(), changed=changed, notices=notices or [])
