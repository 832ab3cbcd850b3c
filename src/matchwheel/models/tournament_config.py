"""Tournament configuration data class."""

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
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from dateutil import parser as date_parser

from matchwheel.constants import (
    DEFAULT_MAX_PARTICIPANTS,
    DEFAULT_PAIRING_STRATEGY,
    MATCHES_PER_PARTICIPANT,
    MIN_PARTICIPANTS,
    PAIRING_STRATEGIES,
    REMINDER_LEAD_HOURS,
)
from matchwheel.exceptions import InvalidConfigurationException


def parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp into an aware datetime.

    Naive values are taken to be UTC, matching how the storage backend
    writes them.

    Raises:
        InvalidConfigurationException: If the string is not a valid timestamp
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif not isinstance(value, str):
        raise InvalidConfigurationException(f"Invalid timestamp: {value!r}")
    else:
        try:
            parsed = date_parser.isoparse(value)
        except (ValueError, OverflowError) as e:
            raise InvalidConfigurationException(
                f"Invalid timestamp: {value!r}"
            ) from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class TournamentConfig:
    """Configuration settings for a tournament.

    Attributes:
        name: Tournament name
        max_participants: Registration capacity
        matches_per_participant: Opponents each participant should face
        pairing_strategy: 'circulant' (constructive) or 'greedy' (bounded retry)
        registration_open_at: Registration opens at this time, if set
        registration_close_at: Registration closes at this time, if set
        tournament_start_at: Scheduled start, used for reminders
        reminders_sent: Reminder types already delivered ('1-hour', '24-hour')
    """

    name: str
    max_participants: int = DEFAULT_MAX_PARTICIPANTS
    matches_per_participant: int = MATCHES_PER_PARTICIPANT
    pairing_strategy: str = DEFAULT_PAIRING_STRATEGY
    registration_open_at: Optional[datetime] = None
    registration_close_at: Optional[datetime] = None
    tournament_start_at: Optional[datetime] = None
    reminders_sent: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidConfigurationException("Tournament name is required")
        self.name = self.name.strip()
        if self.pairing_strategy not in PAIRING_STRATEGIES:
            raise InvalidConfigurationException(
                f"Unknown pairing strategy: {self.pairing_strategy!r}"
            )
        if not _is_int(self.max_participants):
            raise InvalidConfigurationException(
                f"max_participants must be an integer, got {self.max_participants!r}"
            )
        if self.max_participants < MIN_PARTICIPANTS:
            raise InvalidConfigurationException(
                f"max_participants must be at least {MIN_PARTICIPANTS}"
            )
        if not _is_int(self.matches_per_participant):
            raise InvalidConfigurationException(
                "matches_per_participant must be an integer, "
                f"got {self.matches_per_participant!r}"
            )
        if self.matches_per_participant < 1:
            raise InvalidConfigurationException(
                "matches_per_participant must be positive"
            )
        self.registration_open_at = parse_timestamp(self.registration_open_at)
        self.registration_close_at = parse_timestamp(self.registration_close_at)
        self.tournament_start_at = parse_timestamp(self.tournament_start_at)
        if (
            self.registration_open_at
            and self.registration_close_at
            and self.registration_close_at < self.registration_open_at
        ):
            raise InvalidConfigurationException(
                "Registration cannot close before it opens"
            )
        if not isinstance(self.reminders_sent, (list, tuple)):
            raise InvalidConfigurationException(
                f"reminders_sent must be a list, got {self.reminders_sent!r}"
            )
        unknown = [r for r in self.reminders_sent if r not in REMINDER_LEAD_HOURS]
        if unknown:
            raise InvalidConfigurationException(f"Unknown reminder types: {unknown}")
        self.reminders_sent = list(self.reminders_sent)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "max_participants": self.max_participants,
            "matches_per_participant": self.matches_per_participant,
            "pairing_strategy": self.pairing_strategy,
            "registration_open_at": format_timestamp(self.registration_open_at),
            "registration_close_at": format_timestamp(self.registration_close_at),
            "tournament_start_at": format_timestamp(self.tournament_start_at),
            "reminders_sent": list(self.reminders_sent),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary.

        Missing or null optional fields fall back to their defaults; values of
        the wrong type raise InvalidConfigurationException.
        """
        if not isinstance(data, dict):
            raise InvalidConfigurationException(
                f"Tournament data must be an object, got {type(data).__name__}"
            )
        return cls(
            name=data.get("name") or "Untitled Tournament",
            max_participants=data.get("max_participants") or DEFAULT_MAX_PARTICIPANTS,
            matches_per_participant=data.get("matches_per_participant")
            or MATCHES_PER_PARTICIPANT,
            pairing_strategy=data.get("pairing_strategy") or DEFAULT_PAIRING_STRATEGY,
            registration_open_at=data.get("registration_open_at"),
            registration_close_at=data.get("registration_close_at"),
            tournament_start_at=data.get("tournament_start_at"),
            reminders_sent=data.get("reminders_sent") or [],
        )
