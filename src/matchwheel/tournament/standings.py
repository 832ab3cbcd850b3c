"""Standings calculation for tournaments.

This module derives win/loss/draw records from a matchup assignment, ranks
them, and finds groups of participants that need a tiebreaker spin.
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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from matchwheel.constants import (
    MATCHES_PER_PARTICIPANT,
    RESULT_DRAW,
    RESULT_LOSS,
    RESULT_WIN,
)
from matchwheel.models.matchup import MatchupAssignment
from matchwheel.models.participant import Participant


@dataclass
class StandingsEntry:
    """Derived record of one participant.

    Attributes:
        participant: The participant
        wins: Matches won
        losses: Matches lost
        draws: Matches drawn
        completed_count: Matches with a recorded result
        scheduled_count: Matches scheduled, 0 when unknown
    """

    participant: Participant
    wins: int = 0
    losses: int = 0
    draws: int = 0
    completed_count: int = 0
    scheduled_count: int = 0

    @property
    def record(self) -> Tuple[int, int]:
        """The (wins, losses) pair ties are decided on."""
        return (self.wins, self.losses)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "participant": self.participant.to_dict(),
            "wins": self.wins,
            "losses": self.losses,
            "draws": self.draws,
            "completed": self.completed_count,
        }


@dataclass
class TieGroup:
    """Participants sharing the same (wins, losses) after all matches."""

    wins: int
    losses: int
    entries: List[StandingsEntry] = field(default_factory=list)

    @property
    def participants(self) -> List[Participant]:
        return [e.participant for e in self.entries]

    def __len__(self) -> int:
        return len(self.entries)


class StandingsCalculator:
    """Calculates leaderboards from matchup results.

    Ranking keys, in priority order:
    - Wins (descending)
    - Losses (ascending)
    - Draws (descending)

    Entries equal on all three keys keep their input order.
    """

    def __init__(self, matches_per_participant: int = MATCHES_PER_PARTICIPANT):
        self.matches_per_participant = matches_per_participant

    def compute_standings(self, assignment: MatchupAssignment) -> List[StandingsEntry]:
        """Count results for every participant, in matchup order."""
        entries = []
        for matchup in assignment:
            entry = StandingsEntry(
                participant=matchup.participant,
                scheduled_count=len(matchup.matches),
            )
            for match in matchup.matches:
                if match.result == RESULT_WIN:
                    entry.wins += 1
                elif match.result == RESULT_LOSS:
                    entry.losses += 1
                elif match.result == RESULT_DRAW:
                    entry.draws += 1
                if match.completed:
                    entry.completed_count += 1
            entries.append(entry)
        return entries

    @staticmethod
    def rank(entries: Sequence[StandingsEntry]) -> List[StandingsEntry]:
        """Return entries sorted best first."""
        return sorted(entries, key=lambda e: (-e.wins, e.losses, -e.draws))

    def leaderboard(self, assignment: MatchupAssignment) -> List[StandingsEntry]:
        """Compute and rank standings in one step."""
        return self.rank(self.compute_standings(assignment))

    def is_finished(self, entry: StandingsEntry) -> bool:
        """True when the participant has no pending matches left.

        Entries built without a schedule are finished once they reach the
        per-participant quota.
        """
        if entry.scheduled_count:
            return entry.completed_count >= entry.scheduled_count
        return entry.completed_count >= self.matches_per_participant

    def all_matches_complete(self, entries: Sequence[StandingsEntry]) -> bool:
        """True when every participant has played all of its matches."""
        return bool(entries) and all(self.is_finished(e) for e in entries)

    def find_tie_groups(self, ranked_entries: Sequence[StandingsEntry]) -> List[TieGroup]:
        """Group entries with identical (wins, losses).

        Only meaningful once the tournament is fully played; returns an empty
        list otherwise. Groups of one are left out. Groups come out in the
        order their best-ranked member appears.
        """
        if not self.all_matches_complete(ranked_entries):
            return []

        groups: Dict[Tuple[int, int], TieGroup] = {}
        for entry in ranked_entries:
            group = groups.get(entry.record)
            if group is None:
                group = groups[entry.record] = TieGroup(
                    wins=entry.wins, losses=entry.losses
                )
            group.entries.append(entry)

        return [g for g in groups.values() if len(g.entries) > 1]
