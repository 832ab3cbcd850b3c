"""Result recording and validation for tournaments.

This module handles recording match results with proper validation and error checking.
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

from typing import Optional

from matchwheel.constants import COMPLEMENTARY_RESULT, VALID_RESULTS
from matchwheel.exceptions import (
    InvalidResultException,
    MissingMatchException,
    SelfPairingException,
)
from matchwheel.models.matchup import MatchupAssignment
from matchwheel.utils import setup_logger

logger = setup_logger(__name__)


class ResultRecorder:
    """Handles recording and clearing match results.

    This class is responsible for:
    - Validating that the pairing exists on both sides
    - Writing complementary results to both mirrored edges
    - Resetting every match to pending

    Assignments passed in are never modified; a new one is returned.
    """

    def record_result(
        self,
        assignment: MatchupAssignment,
        participant_a: str,
        participant_b: str,
        score: Optional[str],
        result_for_a: str,
    ) -> MatchupAssignment:
        """Record the result of the match between A and B.

        Args:
            assignment: Current assignment
            participant_a: Name of the participant the result is given for
            participant_b: Name of the opponent
            score: Free-text score, e.g. "2-1"
            result_for_a: 'win', 'loss' or 'draw' from A's point of view

        Returns:
            New assignment with both edges completed

        Raises:
            SelfPairingException: If A and B are the same participant
            InvalidResultException: If the result is not win/loss/draw
            MissingMatchException: If A and B are not paired on both sides
        """
        if participant_a == participant_b:
            raise SelfPairingException(
                f"{participant_a} cannot play against themselves"
            )
        if result_for_a not in VALID_RESULTS:
            raise InvalidResultException(
                f"Invalid result: {result_for_a!r} "
                f"(must be one of {', '.join(VALID_RESULTS)})"
            )

        if assignment.find_match(participant_a, participant_b) is None:
            raise MissingMatchException(
                f"{participant_a} has no match against {participant_b}"
            )
        if assignment.find_match(participant_b, participant_a) is None:
            raise MissingMatchException(
                f"{participant_b} has no match against {participant_a}"
            )

        updated = assignment.copy()
        edge_a = updated.find_match(participant_a, participant_b)
        edge_b = updated.find_match(participant_b, participant_a)

        score = score.strip() if score else None
        edge_a.completed = True
        edge_a.score = score
        edge_a.result = result_for_a
        edge_b.completed = True
        edge_b.score = score
        edge_b.result = COMPLEMENTARY_RESULT[result_for_a]

        logger.debug(
            f"Recorded: {participant_a} ({result_for_a}) vs {participant_b} "
            f"({edge_b.result}), score {score or '-'}"
        )
        return updated

    def clear_results(self, assignment: MatchupAssignment) -> MatchupAssignment:
        """Return a copy with every match pending, keeping all pairings."""
        updated = assignment.copy()
        for matchup in updated:
            for match in matchup.matches:
                match.reset()
        logger.info(f"Cleared results for {len(updated)} participants")
        return updated
