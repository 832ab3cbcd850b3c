from matchwheel.constants import COMPLEMENTARY_RESULT
from matchwheel.models.participant import Participant


def make_participants(count, prefix="P"):
    return [Participant(name=f"{prefix}{i}") for i in range(count)]


def assert_symmetric(assignment):
    """Every edge has a mirror with the same state and complementary result."""
    for matchup in assignment:
        owner = matchup.participant.name
        for edge in matchup.matches:
            mirror = assignment.find_match(edge.opponent.name, owner)
            assert mirror is not None, f"{edge.opponent.name} lacks a match with {owner}"
            assert mirror.completed == edge.completed
            assert mirror.score == edge.score
            if edge.result is None:
                assert mirror.result is None
            else:
                assert mirror.result == COMPLEMENTARY_RESULT[edge.result]


def assert_simple(assignment):
    """No self pairings and no pairing listed twice for the same participant."""
    for matchup in assignment:
        names = matchup.opponent_names
        assert matchup.participant.name not in names
        assert len(names) == len(set(names))
