"""Matchup generation.

Every participant is paired with a fixed number of distinct opponents
(three by default). Two strategies are available:

``circulant``
    Participants are shuffled onto a cycle and each is joined to its
    nearest neighbours, plus its diametric opposite when the quota is odd.
    This is a simple regular graph whenever one exists. When the quota is
    odd and the participant count is odd no regular graph exists; the last
    participant is spliced into the cycle and ends one match short, which
    is the best achievable.

``greedy``
    A bounded-retry greedy scan over a shuffled order. Cheap, but may
    strand participants below quota even when a full assignment exists.

Both strategies report under-quota participants instead of failing.
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
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set, Tuple

from matchwheel.constants import (
    DEFAULT_PAIRING_STRATEGY,
    GENERATION_ATTEMPT_FACTOR,
    MATCHES_PER_PARTICIPANT,
    MIN_PARTICIPANTS,
    PAIRING_STRATEGIES,
    STRATEGY_GREEDY,
)
from matchwheel.exceptions import (
    DuplicateParticipantException,
    InsufficientParticipantsException,
    InvalidConfigurationException,
)
from matchwheel.models.matchup import MatchupAssignment
from matchwheel.models.participant import Participant
from matchwheel.utils import setup_logger

logger = setup_logger(__name__)

Pairing = Tuple[Participant, Participant]


@dataclass
class GenerationResult:
    """Outcome of a generation or insertion.

    Attributes:
        assignment: The new matchup assignment
        under_quota: Participants that received fewer matches than the quota
    """

    assignment: MatchupAssignment
    under_quota: List[Participant] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return not self.under_quota


class MatchupEngine:
    """Generates matchup assignments and extends them with late entrants.

    The engine never modifies the assignment it is given; every operation
    returns a new one.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        strategy: str = DEFAULT_PAIRING_STRATEGY,
        matches_per_participant: int = MATCHES_PER_PARTICIPANT,
    ):
        """Initialize the engine.

        Args:
            rng: Random source; pass a seeded ``random.Random`` for reproducible output
            strategy: 'circulant' or 'greedy'
            matches_per_participant: Opponents each participant should face
        """
        if strategy not in PAIRING_STRATEGIES:
            raise InvalidConfigurationException(f"Unknown pairing strategy: {strategy!r}")
        self.rng = rng if rng is not None else random.Random()
        self.strategy = strategy
        self.quota = matches_per_participant

    # ========== Generation ==========

    def generate(self, participants: Sequence[Participant]) -> GenerationResult:
        """Generate a fresh assignment for ``participants``.

        Args:
            participants: Participants with unique names

        Returns:
            GenerationResult with every match pending

        Raises:
            InsufficientParticipantsException: If fewer than MIN_PARTICIPANTS are given
            DuplicateParticipantException: If two participants share a name
        """
        if len(participants) < MIN_PARTICIPANTS:
            raise InsufficientParticipantsException(
                f"At least {MIN_PARTICIPANTS} participants are needed, "
                f"got {len(participants)}"
            )
        names = [p.name for p in participants]
        if len(set(names)) != len(names):
            raise DuplicateParticipantException("Participant names must be unique")

        order = list(participants)
        self.rng.shuffle(order)

        if self.strategy == STRATEGY_GREEDY:
            pairings = self._greedy_pairings(order)
        else:
            pairings = self._circulant_pairings(order)

        assignment = MatchupAssignment.from_pairings(participants, pairings)
        under_quota = assignment.under_quota(self.quota)

        logger.info(
            f"Generated {len(pairings)} matches for {len(participants)} participants "
            f"using {self.strategy} pairing"
        )
        if under_quota:
            logger.warning(
                f"{len(under_quota)} participant(s) below {self.quota} matches: "
                f"{', '.join(p.name for p in under_quota)}"
            )
        return GenerationResult(assignment=assignment, under_quota=under_quota)

    def _circulant_pairings(self, order: List[Participant]) -> List[Pairing]:
        """Pair participants placed on a cycle in ``order``.

        Each position i is joined to i+1 .. i+quota//2 and, for an odd quota,
        to i+n/2. With an odd quota and an odd count, the cycle is built on
        all but the last participant, and the last one replaces quota//2
        disjoint ring edges (a, b) with (last, a) and (last, b).
        """
        n = len(order)
        if n <= self.quota:
            # Everyone plays everyone and still falls short
            return [(order[i], order[j]) for i in range(n) for j in range(i + 1, n)]

        spliced: Optional[Participant] = None
        ring = order
        if self.quota % 2 == 1 and n % 2 == 1:
            ring, spliced = order[:-1], order[-1]
        size = len(ring)

        index_pairs: List[Tuple[int, int]] = []
        for offset in range(1, self.quota // 2 + 1):
            index_pairs.extend((i, (i + offset) % size) for i in range(size))
        if self.quota % 2 == 1:
            index_pairs.extend((i, i + size // 2) for i in range(size // 2))

        pairings = [(ring[a], ring[b]) for a, b in index_pairs]
        if spliced is not None:
            for k in range(self.quota // 2):
                a, b = ring[2 * k], ring[2 * k + 1]
                pairings.remove((a, b))
                pairings.append((spliced, a))
                pairings.append((spliced, b))
        return pairings

    def _greedy_pairings(self, order: List[Participant]) -> List[Pairing]:
        """Bounded-retry greedy pairing over ``order``.

        Each attempt walks the under-quota participants and pairs each one
        with the first later participant that is still under quota and not
        yet an opponent. Stops when everyone is at quota, when a pass pairs
        nobody, or after ``len(order) * GENERATION_ATTEMPT_FACTOR`` passes.
        """
        counts: Dict[str, int] = {p.name: 0 for p in order}
        seen: Dict[str, Set[str]] = {p.name: set() for p in order}
        pairings: List[Pairing] = []

        for _ in range(len(order) * GENERATION_ATTEMPT_FACTOR):
            open_slots = [p for p in order if counts[p.name] < self.quota]
            if not open_slots:
                break

            paired_any = False
            for i, p1 in enumerate(open_slots):
                if counts[p1.name] >= self.quota:
                    continue
                for p2 in open_slots[i + 1 :]:
                    if counts[p2.name] < self.quota and p2.name not in seen[p1.name]:
                        counts[p1.name] += 1
                        counts[p2.name] += 1
                        seen[p1.name].add(p2.name)
                        seen[p2.name].add(p1.name)
                        pairings.append((p1, p2))
                        paired_any = True
                        break

            if not paired_any:
                break

        return pairings

    # ========== Incremental insertion ==========

    def add_participant(
        self, assignment: MatchupAssignment, new_participant: Participant
    ) -> GenerationResult:
        """Add a late entrant to an existing assignment.

        Opponents are drawn first from participants still below quota, in
        random order, then from a random sample of everyone else. No
        opponent is chosen twice. Existing matches and their results are
        kept as they are.

        Args:
            assignment: Current assignment (left unchanged)
            new_participant: The entrant to add

        Returns:
            GenerationResult holding the extended assignment

        Raises:
            DuplicateParticipantException: If the name is already in the assignment
        """
        if new_participant.name in assignment:
            raise DuplicateParticipantException(
                f"{new_participant.name} already has matchups"
            )

        updated = assignment.copy()
        counts = updated.opponent_counts()
        existing = updated.participants

        open_slots = [p for p in existing if counts[p.name] < self.quota]
        self.rng.shuffle(open_slots)
        opponents = open_slots[: self.quota]

        if len(opponents) < self.quota:
            chosen = {p.name for p in opponents}
            others = [p for p in existing if p.name not in chosen]
            needed = min(self.quota - len(opponents), len(others))
            opponents.extend(self.rng.sample(others, needed))

        updated.add_participant(new_participant)
        for opponent in opponents:
            updated.add_pairing(new_participant, opponent)

        logger.info(
            f"Added {new_participant.name} with {len(opponents)} match(es) against "
            f"{', '.join(p.name for p in opponents) or 'nobody'}"
        )
        return GenerationResult(
            assignment=updated, under_quota=updated.under_quota(self.quota)
        )
