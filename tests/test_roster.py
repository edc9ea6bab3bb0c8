"""Tests for LobbyRoster."""

from lobby.models import ParticipantRecord, ParticipantRole
from lobby.roster import LobbyRoster


def make_record(participant_id, role=ParticipantRole.TEAM_A, ready=False, is_host=False):
    return ParticipantRecord(
        id=participant_id,
        display_name=f"Player {participant_id}",
        role=role,
        ready=ready,
        is_host=is_host,
    )


def test_add_rejects_duplicate_id():
    roster = LobbyRoster()

    assert roster.add(make_record(1))
    assert not roster.add(make_record(1, role=ParticipantRole.TEAM_B))

    assert len(roster) == 1
    assert roster.get(1).role is ParticipantRole.TEAM_A


def test_version_bumps_only_on_mutation():
    roster = LobbyRoster()
    roster.add(make_record(1))
    assert roster.version == 1

    roster.add(make_record(1))
    assert roster.version == 1

    assert roster.replace(make_record(1, ready=True))
    assert roster.version == 2

    # Same record again is not a change
    assert not roster.replace(make_record(1, ready=True))
    assert roster.version == 2

    assert roster.remove(1) is not None
    assert roster.version == 3
    assert roster.remove(1) is None
    assert roster.version == 3


def test_replace_unknown_id_is_ignored():
    roster = LobbyRoster()
    assert not roster.replace(make_record(9))
    assert 9 not in roster


def test_insertion_order_is_preserved():
    roster = LobbyRoster()
    for participant_id in (3, 1, 2):
        roster.add(make_record(participant_id))

    assert [p.id for p in roster.get_all()] == [3, 1, 2]


def test_counts_exclude_inspectors_from_teams():
    roster = LobbyRoster()
    roster.add(make_record(1, ParticipantRole.TEAM_A))
    roster.add(make_record(2, ParticipantRole.INSPECTOR))
    roster.add(make_record(3, ParticipantRole.INSPECTOR))

    assert roster.inspector_count() == 2
    assert roster.team_count(ParticipantRole.TEAM_A) == 1
    assert roster.team_count(ParticipantRole.TEAM_B) == 0
    assert roster.balanced_team() is ParticipantRole.TEAM_B


def test_balanced_team_ties_go_to_team_a():
    roster = LobbyRoster()
    assert roster.balanced_team() is ParticipantRole.TEAM_A

    roster.add(make_record(1, ParticipantRole.TEAM_A))
    roster.add(make_record(2, ParticipantRole.TEAM_B))
    assert roster.balanced_team() is ParticipantRole.TEAM_A


def test_get_host_and_all_ready():
    roster = LobbyRoster()
    roster.add(make_record(1, ready=True, is_host=True))
    roster.add(make_record(2, ready=False))

    assert roster.get_host().id == 1
    assert not roster.all_ready()


def test_clear_empties_roster():
    roster = LobbyRoster()
    roster.add(make_record(1))
    roster.clear()

    assert len(roster) == 0
    assert roster.version == 2
