"""Data models for matchups and their results."""

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

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Iterator, List, Optional, Set, Tuple

from matchwheel.constants import MATCHES_PER_PARTICIPANT, VALID_RESULTS
from matchwheel.exceptions import (
    InvalidResultException,
    ParticipantNotFoundException,
)
from matchwheel.models.participant import Participant
from matchwheel.type_hints import MatchOutcome, MatchupList


@dataclass
class MatchEdge:
    """One side of a pairing, as seen by the participant that owns it.

    Attributes:
        opponent: The participant on the other side
        completed: Whether a result has been recorded
        score: Free-text score, e.g. "2-1"
        result: Outcome for the owning participant ('win', 'loss' or 'draw')
    """

    opponent: Participant
    completed: bool = False
    score: Optional[str] = None
    result: Optional[MatchOutcome] = None

    def reset(self) -> None:
        """Return the edge to the pending state."""
        self.completed = False
        self.score = None
        self.result = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match edge to dictionary."""
        data: Dict[str, Any] = {
            "opponent": self.opponent.to_dict(),
            "completed": self.completed,
        }
        if self.score is not None:
            data["score"] = self.score
        if self.result is not None:
            data["result"] = self.result
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchEdge":
        """Deserialize match edge from dictionary."""
        result = data.get("result")
        if result is not None and result not in VALID_RESULTS:
            raise InvalidResultException(f"Unknown match result: {result!r}")
        return cls(
            opponent=Participant.from_dict(data["opponent"]),
            completed=bool(data.get("completed", False)),
            score=data.get("score"),
            result=result,
        )


@dataclass
class Matchup:
    """A participant together with its scheduled matches, in creation order."""

    participant: Participant
    matches: List[MatchEdge] = field(default_factory=list)

    @property
    def opponent_names(self) -> List[str]:
        return [m.opponent.name for m in self.matches]

    def find_match(self, opponent_name: str) -> Optional[MatchEdge]:
        """Return the edge against ``opponent_name``, or None."""
        for match in self.matches:
            if match.opponent.name == opponent_name:
                return match
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "participant": self.participant.to_dict(),
            "matches": [m.to_dict() for m in self.matches],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Matchup":
        return cls(
            participant=Participant.from_dict(data["participant"]),
            matches=[MatchEdge.from_dict(m) for m in data.get("matches", [])],
        )


class MatchupAssignment:
    """The complete set of pairings for a tournament.

    Every pairing is stored twice, once in each participant's match list.
    Both copies always carry the same completion state and score, with
    complementary results. Instances are treated as snapshots: the core
    operations copy before changing anything.
    """

    def __init__(self, matchups: Optional[Iterable[Matchup]] = None) -> None:
        self.matchups: List[Matchup] = list(matchups or [])
        self._index: Dict[str, Matchup] = {m.participant.name: m for m in self.matchups}

    @classmethod
    def from_pairings(
        cls,
        participants: Iterable[Participant],
        pairings: Iterable[Tuple[Participant, Participant]],
    ) -> "MatchupAssignment":
        """Build an assignment with a pending edge pair for every pairing.

        Args:
            participants: All participants, in the order their matchups should appear
            pairings: Unordered participant pairs, in creation order

        Returns:
            A new assignment
        """
        assignment = cls(Matchup(participant=p) for p in participants)
        for first, second in pairings:
            assignment.add_pairing(first, second)
        return assignment

    # ========== Lookup ==========

    def __len__(self) -> int:
        return len(self.matchups)

    def __iter__(self) -> Iterator[Matchup]:
        return iter(self.matchups)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    @property
    def participants(self) -> List[Participant]:
        return [m.participant for m in self.matchups]

    def get_matchup(self, name: str) -> Matchup:
        """Return the matchup for ``name``.

        Raises:
            ParticipantNotFoundException: If the participant has no matchup
        """
        matchup = self._index.get(name)
        if matchup is None:
            raise ParticipantNotFoundException(f"No matchups for participant: {name}")
        return matchup

    def find_match(self, name: str, opponent_name: str) -> Optional[MatchEdge]:
        """Return ``name``'s edge against ``opponent_name``, or None."""
        matchup = self._index.get(name)
        if matchup is None:
            return None
        return matchup.find_match(opponent_name)

    def opponent_counts(self) -> Dict[str, int]:
        return {m.participant.name: len(m.matches) for m in self.matchups}

    def under_quota(self, quota: int = MATCHES_PER_PARTICIPANT) -> List[Participant]:
        """Participants with fewer than ``quota`` matches, in matchup order."""
        return [m.participant for m in self.matchups if len(m.matches) < quota]

    def pairings(self) -> Set[frozenset]:
        """All pairings as frozensets of participant names."""
        return {
            frozenset({m.participant.name, edge.opponent.name})
            for m in self.matchups
            for edge in m.matches
        }

    def is_complete(self) -> bool:
        """True when there is at least one match and every match has a result."""
        edges = [edge for m in self.matchups for edge in m.matches]
        return bool(edges) and all(edge.completed for edge in edges)

    # ========== Mutation (used on private copies) ==========

    def add_participant(self, participant: Participant) -> Matchup:
        """Append an empty matchup for ``participant`` and return it."""
        matchup = Matchup(participant=participant)
        self.matchups.append(matchup)
        self._index[participant.name] = matchup
        return matchup

    def add_pairing(self, first: Participant, second: Participant) -> None:
        """Append mirrored pending edges between two participants."""
        first_matchup = self._index.get(first.name) or self.add_participant(first)
        second_matchup = self._index.get(second.name) or self.add_participant(second)
        first_matchup.matches.append(MatchEdge(opponent=second))
        second_matchup.matches.append(MatchEdge(opponent=first))

    def copy(self) -> "MatchupAssignment":
        """Return an independent copy; participants are shared, edges are not."""
        return MatchupAssignment(
            Matchup(
                participant=m.participant,
                matches=[replace(edge) for edge in m.matches],
            )
            for m in self.matchups
        )

    # ========== Serialization ==========

    def to_list(self) -> MatchupList:
        """Serialize to the persisted ``[{participant, matches}]`` shape."""
        return [m.to_dict() for m in self.matchups]

    @classmethod
    def from_list(cls, data: Optional[MatchupList]) -> "MatchupAssignment":
        """Deserialize from the persisted shape; None or [] gives an empty assignment."""
        return cls(Matchup.from_dict(item) for item in (data or []))
