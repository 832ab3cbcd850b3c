import itertools
import random

import pytest

from helpers import assert_simple, assert_symmetric

from matchwheel.exceptions import (
    InsufficientParticipantsException,
    InvalidConfigurationException,
    ParticipantNotFoundException,
    TournamentStateException,
)
from matchwheel.models.tournament_config import TournamentConfig
from matchwheel.storage.base import InMemoryTournamentStore
from matchwheel.tournament.session import TournamentSession
from matchwheel.tournament.summary import build_summary

NAMES = ["Ann", "Bob", "Cid", "Dee"]


@pytest.fixture
def store():
    return InMemoryTournamentStore()


@pytest.fixture
def session(store):
    session = TournamentSession(
        TournamentConfig(name="Office Cup", max_participants=8),
        tournament_id="cup",
        store=store,
        rng=random.Random(42),
    )
    for name in NAMES:
        session.register(name)
    return session


def _play_everything(session, outcome_for_first):
    for a, b in itertools.combinations(NAMES, 2):
        session.record_result(a, b, "1-0", outcome_for_first(a, b))


def test_status_moves_through_lifecycle(session):
    assert session.status == "registration"
    assert session.standings() == []

    session.generate_matchups()
    assert session.status == "in_progress"

    _play_everything(session, lambda a, b: "win")
    assert session.status == "completed"


def test_generate_needs_four_participants(store):
    session = TournamentSession(TournamentConfig(name="Tiny"), store=store)
    for name in NAMES[:3]:
        session.register(name)
    with pytest.raises(InsufficientParticipantsException):
        session.generate_matchups()
    assert not session.has_matchups


def test_every_change_is_saved(session, store):
    session.generate_matchups()
    session.record_result("Ann", "Bob", "3-2", "win")

    saved = store.load("cup")
    assert saved["status"] == "in_progress"
    ann = next(m for m in saved["matchups"] if m["participant"]["name"] == "Ann")
    vs_bob = next(m for m in ann["matches"] if m["opponent"]["name"] == "Bob")
    assert vs_bob == {
        "opponent": {"name": "Bob"},
        "completed": True,
        "score": "3-2",
        "result": "win",
    }


def test_removal_only_before_matchups(session):
    session.remove_participant("Dee")
    assert [p.name for p in session.participants] == NAMES[:3]

    with pytest.raises(ParticipantNotFoundException):
        session.remove_participant("Zed")

    session.register("Dee")
    session.generate_matchups()
    with pytest.raises(TournamentStateException):
        session.remove_participant("Ann")


def test_results_need_matchups(session):
    with pytest.raises(TournamentStateException):
        session.record_result("Ann", "Bob", "1-0", "win")
    with pytest.raises(TournamentStateException):
        session.clear_results()


def test_late_registration_extends_matchups(session):
    session.generate_matchups()
    session.record_result("Ann", "Bob", "1-0", "win")

    session.register("Eve", email="eve@example.com")

    assert len(session.assignment.get_matchup("Eve").matches) == 3
    assert session.assignment.find_match("Ann", "Bob").result == "win"
    assert_simple(session.assignment)
    assert_symmetric(session.assignment)
    assert session.participants[-1].email == "eve@example.com"


def test_tiebreaker_spin_picks_from_tied_group(session):
    session.generate_matchups()
    # Ann beats all, Bob beats Cid and Dee, Cid and Dee draw
    _play_everything(session, lambda a, b: "draw" if {a, b} == {"Cid", "Dee"} else "win")

    (group,) = session.tie_groups()
    assert sorted(p.name for p in group.participants) == ["Cid", "Dee"]

    spin = session.spin_tiebreaker(group)
    assert spin.winner.name in {"Cid", "Dee"}
    assert session.wheel_rotation == spin.rotation


def test_spin_wheel_defaults_to_everyone(session):
    spin = session.spin_wheel()
    assert spin.winner in session.participants


def test_clear_results_resets_leaderboard(session):
    session.generate_matchups()
    _play_everything(session, lambda a, b: "win")

    session.clear_results()

    assert session.status == "in_progress"
    assert all(e.completed_count == 0 and e.wins == 0 for e in session.standings())


def test_round_trip_through_store(session, store):
    session.generate_matchups()
    session.record_result("Cid", "Dee", "2-2", "draw")

    loaded = TournamentSession.load(store, "cup")

    assert loaded.to_dict() == session.to_dict()
    assert loaded.name == "Office Cup"
    assert loaded.store is store


def test_snapshot_shape(session):
    session.generate_matchups()
    data = session.to_dict()

    assert set(data) == {
        "id",
        "name",
        "status",
        "max_participants",
        "matches_per_participant",
        "pairing_strategy",
        "registration_open_at",
        "registration_close_at",
        "tournament_start_at",
        "reminders_sent",
        "wheel_rotation",
        "participants",
        "matchups",
    }
    assert data["participants"] == [{"name": n} for n in NAMES]
    for matchup in data["matchups"]:
        assert set(matchup) == {"participant", "matches"}
        for match in matchup["matches"]:
            assert set(match) == {"opponent", "completed"}


def test_save_without_store_is_an_error():
    session = TournamentSession(TournamentConfig(name="Loose"))
    with pytest.raises(TournamentStateException):
        session.save()


def test_summary_lists_progress(session):
    session.generate_matchups()
    session.record_result("Ann", "Bob", "1-0", "win")

    summary = build_summary(session)

    assert "Tournament: Office Cup" in summary
    assert "Total Participants: 4" in summary
    assert "- Cid" in summary
    assert "Ann - 1/3 matches completed" in summary
    assert "#1 Ann: 1W 0L 0D" in summary


def test_summary_before_matchups(session):
    summary = build_summary(session)
    assert "Status: registration" in summary
    assert "Match Progress" not in summary


def test_wheel_rotation_survives_reload(session, store):
    first = session.spin_wheel()

    loaded = TournamentSession.load(store, "cup", rng=random.Random(1))
    assert loaded.wheel_rotation == first.rotation

    second = loaded.spin_wheel()
    assert second.rotation > first.rotation
    assert store.load("cup")["wheel_rotation"] == second.rotation


def test_set_pairing_strategy(session, store):
    session.set_pairing_strategy("greedy")

    assert session.config.pairing_strategy == "greedy"
    assert session.engine.strategy == "greedy"
    assert store.load("cup")["pairing_strategy"] == "greedy"

    with pytest.raises(InvalidConfigurationException):
        session.set_pairing_strategy("swiss")
    assert session.engine.strategy == "greedy"


def test_mark_reminder_sent_is_idempotent(session, store):
    session.mark_reminder_sent("24-hour")
    session.mark_reminder_sent("24-hour")

    assert session.config.reminders_sent == ["24-hour"]
    assert store.load("cup")["reminders_sent"] == ["24-hour"]

    with pytest.raises(InvalidConfigurationException):
        session.mark_reminder_sent("1-week")


@pytest.mark.parametrize(
    "changes",
    [
        {"matches_per_participant": "three"},
        {"wheel_rotation": "north"},
        {"tournament_start_at": 12},
    ],
)
def test_malformed_snapshot_is_a_configuration_error(session, changes):
    data = session.to_dict()
    data.update(changes)
    with pytest.raises(InvalidConfigurationException):
        TournamentSession.from_dict(data)
