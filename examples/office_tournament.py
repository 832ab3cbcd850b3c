"""Example script running a small tournament end to end.

Registers participants, generates matchups, plays random results, adds a
late entrant, and breaks any ties on the winner wheel.
"""

# Matchwheel
# Copyright (C) 2025  Matchwheel developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import random
import sys
import tempfile
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from matchwheel.constants import VALID_RESULTS
from matchwheel.models.tournament_config import TournamentConfig
from matchwheel.storage import JsonFileTournamentStore
from matchwheel.tournament import TournamentSession, build_summary


def play_pending(session, rng):
    """Record a random result for every pending match."""
    for pairing in sorted(session.assignment.pairings(), key=sorted):
        first, second = sorted(pairing)
        if session.assignment.find_match(first, second).completed:
            continue
        outcome = rng.choice(VALID_RESULTS)
        score = {"win": "2-1", "loss": "1-2", "draw": "1-1"}[outcome]
        session.record_result(first, second, score, outcome)


def main():
    rng = random.Random(7)
    store = JsonFileTournamentStore(Path(tempfile.mkdtemp()) / "tournaments")

    session = TournamentSession(
        TournamentConfig(name="Office Ping Pong", max_participants=10),
        store=store,
        rng=rng,
    )
    for name in ["Ada", "Brian", "Chidi", "Dana", "Elif", "Farah"]:
        session.register(name)

    print("=" * 70)
    print("Generating matchups")
    print("=" * 70)
    result = session.generate_matchups()
    for matchup in result.assignment:
        print(f"  {matchup.participant.name}: {', '.join(matchup.opponent_names)}")

    play_pending(session, rng)

    print("\nLate entrant joins")
    session.register("Gus", email="gus@example.com")
    play_pending(session, rng)

    print("\n" + build_summary(session))

    for group in session.tie_groups():
        spin = session.spin_tiebreaker(group)
        names = ", ".join(p.name for p in group.participants)
        print(f"\nTiebreaker ({names}): {spin.winner.name}")

    print(f"\nSaved to {store.directory}")


if __name__ == "__main__":
    main()
