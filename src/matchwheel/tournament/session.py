"""Tournament session: the caller that owns a tournament's state.

This module ties registration, matchup generation, result recording,
standings and the winner wheel together around one tournament snapshot,
and hands that snapshot to a storage collaborator after every change.
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
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from matchwheel.constants import (
    MIN_PARTICIPANTS,
    PAIRING_STRATEGIES,
    REMINDER_LEAD_HOURS,
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    STATUS_REGISTRATION,
)
from matchwheel.exceptions import (
    InsufficientParticipantsException,
    InvalidConfigurationException,
    ParticipantNotFoundException,
    TournamentStateException,
)
from matchwheel.models.matchup import MatchupAssignment
from matchwheel.models.participant import Participant
from matchwheel.models.tournament_config import TournamentConfig
from matchwheel.pairing.matchup_engine import GenerationResult, MatchupEngine
from matchwheel.storage.base import TournamentStore
from matchwheel.tournament.registration import build_participant
from matchwheel.tournament.result_recorder import ResultRecorder
from matchwheel.tournament.standings import (
    StandingsCalculator,
    StandingsEntry,
    TieGroup,
)
from matchwheel.tournament.winner_wheel import WheelSpin, WinnerWheel
from matchwheel.type_hints import TournamentSnapshot
from matchwheel.utils import setup_logger

logger = setup_logger(__name__)


class TournamentSession:
    """Main tournament management class.

    This class coordinates tournament operations through specialized helpers:
    - MatchupEngine: generates matchups and inserts late entrants
    - ResultRecorder: records and clears results
    - StandingsCalculator: ranks participants and finds ties
    - WinnerWheel: picks winners and breaks ties

    The helpers are pure; the session keeps the current snapshot and, when
    a store is attached, saves it after every change.
    """

    def __init__(
        self,
        config: TournamentConfig,
        participants: Optional[Sequence[Participant]] = None,
        assignment: Optional[MatchupAssignment] = None,
        tournament_id: Optional[str] = None,
        store: Optional[TournamentStore] = None,
        rng: Optional[random.Random] = None,
        wheel_rotation: float = 0.0,
    ) -> None:
        """Initialize a tournament session.

        Args:
            config: Tournament configuration
            participants: Registered participants, in registration order
            assignment: Existing matchups, if already generated
            tournament_id: Storage id; a new one is generated when omitted
            store: Storage collaborator, optional
            rng: Random source shared by the engine and the wheel
            wheel_rotation: Resting angle of the wheel after the last spin
        """
        self.config = config
        self.tournament_id = tournament_id or uuid.uuid4().hex
        self.participants: List[Participant] = list(participants or [])
        self.assignment: Optional[MatchupAssignment] = (
            assignment if assignment is not None and len(assignment) else None
        )
        self.store = store
        self.rng = rng if rng is not None else random.Random()

        self.engine = MatchupEngine(
            rng=self.rng,
            strategy=config.pairing_strategy,
            matches_per_participant=config.matches_per_participant,
        )
        self.result_recorder = ResultRecorder()
        self.standings_calculator = StandingsCalculator(
            matches_per_participant=config.matches_per_participant
        )
        self.wheel = WinnerWheel(rng=self.rng)
        self.wheel_rotation = float(wheel_rotation)

    # ========== Properties ==========

    @property
    def name(self) -> str:
        """Get tournament name."""
        return self.config.name

    @property
    def has_matchups(self) -> bool:
        return self.assignment is not None

    @property
    def status(self) -> str:
        """'registration' before matchups exist, then 'in_progress' or 'completed'."""
        if self.assignment is None:
            return STATUS_REGISTRATION
        if self.assignment.is_complete():
            return STATUS_COMPLETED
        return STATUS_IN_PROGRESS

    @property
    def under_quota(self) -> List[Participant]:
        """Participants with fewer matches than the configured quota."""
        if self.assignment is None:
            return []
        return self.assignment.under_quota(self.config.matches_per_participant)

    def get_participant(self, name: str) -> Participant:
        for participant in self.participants:
            if participant.name == name:
                return participant
        raise ParticipantNotFoundException(f"Unknown participant: {name}")

    def set_pairing_strategy(self, strategy: str) -> None:
        """Switch the pairing strategy used by later generations.

        Raises:
            InvalidConfigurationException: If the strategy is unknown
        """
        if strategy not in PAIRING_STRATEGIES:
            raise InvalidConfigurationException(
                f"Unknown pairing strategy: {strategy!r}"
            )
        self.config.pairing_strategy = strategy
        self.engine.strategy = strategy
        self._persist()

    # ========== Participant Management ==========

    def register(
        self,
        name: str,
        email: Optional[str] = None,
        image: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Participant:
        """Register a participant.

        If matchups already exist, the newcomer is given matches against
        existing participants without touching recorded results.

        Args:
            name: Display name
            email: Optional contact address
            image: Optional avatar reference
            now: Current time, for checking the registration window

        Returns:
            The registered participant
        """
        participant = build_participant(
            self.participants, self.config, name, email=email, image=image, now=now
        )

        if self.assignment is not None:
            result = self.engine.add_participant(self.assignment, participant)
            self.assignment = result.assignment

        self.participants.append(participant)
        logger.info(f"Registered {participant.name} for {self.name}")
        self._persist()
        return participant

    def remove_participant(self, name: str) -> Participant:
        """Remove a participant before matchups are generated.

        Raises:
            TournamentStateException: If matchups already exist
            ParticipantNotFoundException: If no participant has that name
        """
        if self.assignment is not None:
            raise TournamentStateException(
                "Participants cannot be removed after matchups are generated"
            )
        participant = self.get_participant(name)
        self.participants.remove(participant)
        logger.info(f"Removed {participant.name} from {self.name}")
        self._persist()
        return participant

    # ========== Matchups ==========

    def generate_matchups(self) -> GenerationResult:
        """Generate (or regenerate) matchups for every registered participant.

        Regenerating discards the previous matchups and their results.

        Raises:
            InsufficientParticipantsException: If fewer than MIN_PARTICIPANTS are registered
        """
        if len(self.participants) < MIN_PARTICIPANTS:
            raise InsufficientParticipantsException(
                f"Add at least {MIN_PARTICIPANTS} participants to generate matchups "
                f"({len(self.participants)} registered)"
            )
        if self.assignment is not None:
            logger.info(f"Regenerating matchups for {self.name}")

        result = self.engine.generate(self.participants)
        self.assignment = result.assignment
        self._persist()
        return result

    def _require_matchups(self) -> MatchupAssignment:
        if self.assignment is None:
            raise TournamentStateException("Matchups have not been generated yet")
        return self.assignment

    def record_result(
        self,
        participant_a: str,
        participant_b: str,
        score: Optional[str],
        result_for_a: str,
    ) -> None:
        """Record a match result; see ``ResultRecorder.record_result``."""
        self.assignment = self.result_recorder.record_result(
            self._require_matchups(), participant_a, participant_b, score, result_for_a
        )
        self._persist()

    def clear_results(self) -> None:
        """Reset every match to pending, keeping the pairings."""
        self.assignment = self.result_recorder.clear_results(self._require_matchups())
        self._persist()

    # ========== Standings ==========

    def standings(self) -> List[StandingsEntry]:
        """Ranked leaderboard; empty before matchups exist."""
        if self.assignment is None:
            return []
        return self.standings_calculator.leaderboard(self.assignment)

    def tie_groups(self) -> List[TieGroup]:
        """Tied groups needing a tiebreaker spin, once all matches are played."""
        return self.standings_calculator.find_tie_groups(self.standings())

    # ========== Winner Wheel ==========

    def spin_wheel(self, entrants: Optional[Sequence[Participant]] = None) -> WheelSpin:
        """Spin the wheel over ``entrants`` (all participants by default)."""
        pool = list(entrants) if entrants is not None else list(self.participants)
        spin = self.wheel.spin(pool, current_rotation=self.wheel_rotation)
        self.wheel_rotation = spin.rotation
        self._persist()
        return spin

    def spin_tiebreaker(self, group: TieGroup) -> WheelSpin:
        """Break a tie by spinning over the tied participants only."""
        logger.info(
            f"Tiebreaker between {', '.join(p.name for p in group.participants)}"
        )
        return self.spin_wheel(group.participants)

    # ========== Reminders ==========

    def mark_reminder_sent(self, reminder_type: str) -> None:
        """Record that a start-time reminder went out so it is not sent again."""
        if reminder_type not in REMINDER_LEAD_HOURS:
            raise InvalidConfigurationException(
                f"Unknown reminder type: {reminder_type!r}"
            )
        if reminder_type in self.config.reminders_sent:
            return
        self.config.reminders_sent.append(reminder_type)
        logger.info(f"Marked {reminder_type} reminder as sent for {self.name}")
        self._persist()

    # ========== Persistence ==========

    def _persist(self) -> None:
        if self.store is not None:
            self.store.save(self.tournament_id, self.to_dict())

    def save(self) -> None:
        """Save the current snapshot to the attached store.

        Raises:
            TournamentStateException: If no store is attached
        """
        if self.store is None:
            raise TournamentStateException("No store attached to this tournament")
        self._persist()

    @classmethod
    def load(
        cls,
        store: TournamentStore,
        tournament_id: str,
        rng: Optional[random.Random] = None,
    ) -> "TournamentSession":
        """Load a session from ``store`` and keep it attached."""
        return cls.from_dict(store.load(tournament_id), store=store, rng=rng)

    def to_dict(self) -> TournamentSnapshot:
        """Serialize the tournament to its stored shape."""
        data: Dict[str, Any] = {"id": self.tournament_id}
        data.update(self.config.to_dict())
        data["status"] = self.status
        data["wheel_rotation"] = self.wheel_rotation
        data["participants"] = [p.to_dict() for p in self.participants]
        data["matchups"] = self.assignment.to_list() if self.assignment else []
        return data

    @classmethod
    def from_dict(
        cls,
        data: TournamentSnapshot,
        store: Optional[TournamentStore] = None,
        rng: Optional[random.Random] = None,
    ) -> "TournamentSession":
        """Deserialize a tournament from its stored shape.

        ``status`` is derived, so a stored value is ignored.

        Raises:
            InvalidConfigurationException: If the snapshot is malformed
        """
        config = TournamentConfig.from_dict(data)
        rotation = data.get("wheel_rotation") or 0.0
        if isinstance(rotation, bool) or not isinstance(rotation, (int, float)):
            raise InvalidConfigurationException(
                f"wheel_rotation must be a number, got {rotation!r}"
            )
        participants = [Participant.from_dict(p) for p in data.get("participants") or []]
        return cls(
            config=config,
            participants=participants,
            assignment=MatchupAssignment.from_list(data.get("matchups")),
            tournament_id=data.get("id"),
            store=store,
            rng=rng,
            wheel_rotation=rotation,
        )
