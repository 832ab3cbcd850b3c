import random

import pytest

from helpers import make_participants

from matchwheel.models.participant import Participant
from matchwheel.pairing.matchup_engine import MatchupEngine
from matchwheel.tournament.result_recorder import ResultRecorder
from matchwheel.tournament.standings import StandingsCalculator, StandingsEntry


def _entry(name, wins=0, losses=0, draws=0, completed=3, scheduled=0):
    return StandingsEntry(
        participant=Participant(name=name),
        wins=wins,
        losses=losses,
        draws=draws,
        completed_count=completed,
        scheduled_count=scheduled,
    )


def _by_name(entries):
    return {
        e.participant.name: (e.wins, e.losses, e.draws, e.completed_count)
        for e in entries
    }


def test_four_player_scenario(abcd, rng):
    recorder = ResultRecorder()
    assignment = MatchupEngine(rng=rng).generate(abcd).assignment
    assert all(len(m.matches) == 3 for m in assignment)

    assignment = recorder.record_result(assignment, "A", "B", "2-1", "win")
    assignment = recorder.record_result(assignment, "B", "C", "3-0", "win")
    assignment = recorder.record_result(assignment, "C", "D", "1-1", "draw")

    standings = StandingsCalculator().compute_standings(assignment)

    assert _by_name(standings) == {
        "A": (1, 0, 0, 1),
        "B": (1, 1, 0, 2),
        "C": (0, 1, 1, 2),
        "D": (0, 0, 1, 1),
    }


def test_rank_orders_by_wins_then_losses_then_draws():
    entries = [
        _entry("low", wins=0, losses=3),
        _entry("drawer", wins=1, losses=0, draws=2),
        _entry("top", wins=3),
        _entry("mid", wins=1, losses=1, draws=1),
        _entry("mid-more-losses", wins=1, losses=2),
        _entry("fewer-draws", wins=1, losses=0, draws=1),
    ]

    ranked = StandingsCalculator.rank(entries)

    assert [e.participant.name for e in ranked] == [
        "top",
        "drawer",
        "fewer-draws",
        "mid",
        "mid-more-losses",
        "low",
    ]


def test_rank_is_stable_under_permutation():
    entries = [
        _entry("a", wins=2, losses=1),
        _entry("b", wins=2, losses=1),
        _entry("c", wins=1, losses=1, draws=1),
        _entry("d", wins=0, losses=2, draws=1),
        _entry("e", wins=3),
        _entry("f", wins=1, losses=2),
    ]
    expected = [(e.wins, e.losses, e.draws) for e in StandingsCalculator.rank(entries)]

    shuffler = random.Random(3)
    for _ in range(25):
        permuted = entries[:]
        shuffler.shuffle(permuted)
        ranked = StandingsCalculator.rank(permuted)
        assert [(e.wins, e.losses, e.draws) for e in ranked] == expected


def test_tie_detection_groups_equal_records():
    entries = [
        _entry("first", wins=2, losses=1),
        _entry("second", wins=2, losses=1),
        _entry("third", wins=1, losses=2),
    ]

    groups = StandingsCalculator().find_tie_groups(entries)

    assert len(groups) == 1
    assert groups[0].entries == entries[:2]
    assert (groups[0].wins, groups[0].losses) == (2, 1)


def test_ties_ignore_draws():
    entries = StandingsCalculator.rank(
        [
            _entry("a", wins=1, losses=1, draws=1),
            _entry("b", wins=1, losses=1, draws=1),
            _entry("c", wins=3),
            _entry("d", wins=0, losses=3),
        ]
    )
    groups = StandingsCalculator().find_tie_groups(entries)
    assert [[p.name for p in g.participants] for g in groups] == [["a", "b"]]


def test_no_ties_reported_until_every_match_is_played():
    entries = [
        _entry("a", wins=2, losses=0, completed=2),
        _entry("b", wins=2, losses=0, completed=3),
    ]
    assert StandingsCalculator().find_tie_groups(entries) == []


def test_scheduled_count_overrides_quota():
    calculator = StandingsCalculator()
    # a late entrant's opponent can have four matches scheduled
    assert not calculator.is_finished(_entry("x", completed=3, scheduled=4))
    assert calculator.is_finished(_entry("y", completed=4, scheduled=4))
    assert calculator.is_finished(_entry("z", completed=2, scheduled=2))


def test_multiple_tie_groups_come_out_in_rank_order():
    entries = StandingsCalculator.rank(
        [
            _entry("w", wins=1, losses=2),
            _entry("x", wins=2, losses=1),
            _entry("y", wins=1, losses=2),
            _entry("z", wins=2, losses=1),
        ]
    )
    groups = StandingsCalculator().find_tie_groups(entries)
    assert [(g.wins, g.losses) for g in groups] == [(2, 1), (1, 2)]
    assert all(len(g) == 2 for g in groups)


def test_clearing_resets_all_standings():
    recorder = ResultRecorder()
    engine = MatchupEngine(rng=random.Random(11))
    assignment = engine.generate(make_participants(6)).assignment
    outcomes = ["win", "loss", "draw"]
    for i, pairing in enumerate(sorted(assignment.pairings(), key=sorted)):
        a, b = sorted(pairing)
        assignment = recorder.record_result(assignment, a, b, "1-0", outcomes[i % 3])

    cleared = recorder.clear_results(assignment)

    for entry in StandingsCalculator().compute_standings(cleared):
        assert (entry.wins, entry.losses, entry.draws, entry.completed_count) == (
            0,
            0,
            0,
            0,
        )


def test_leaderboard_of_fully_played_tournament(abcd, rng):
    recorder = ResultRecorder()
    assignment = MatchupEngine(rng=rng).generate(abcd).assignment
    # A beats everyone, B beats C and D, C and D draw
    for a, b, outcome in [
        ("A", "B", "win"),
        ("A", "C", "win"),
        ("A", "D", "win"),
        ("B", "C", "win"),
        ("B", "D", "win"),
        ("C", "D", "draw"),
    ]:
        assignment = recorder.record_result(assignment, a, b, "1-0", outcome)

    calculator = StandingsCalculator()
    ranked = calculator.leaderboard(assignment)

    assert [e.participant.name for e in ranked[:2]] == ["A", "B"]
    assert calculator.all_matches_complete(ranked)
    groups = calculator.find_tie_groups(ranked)
    assert [sorted(p.name for p in g.participants) for g in groups] == [["C", "D"]]


@pytest.mark.parametrize("entries", [[], [_entry("solo", wins=3)]])
def test_no_tie_groups_for_trivial_inputs(entries):
    assert StandingsCalculator().find_tie_groups(entries) == []
