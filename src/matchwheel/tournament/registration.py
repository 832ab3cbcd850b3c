"""Registration rules: the registration window and roster checks."""

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

from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Sequence

from matchwheel.exceptions import (
    DuplicateParticipantException,
    RegistrationClosedException,
    TournamentFullException,
)
from matchwheel.models.participant import Participant
from matchwheel.models.tournament_config import TournamentConfig, parse_timestamp
from matchwheel.utils.validation import (
    name_key,
    validate_email_strict,
    validate_participant_name_strict,
)


class RegistrationStatus(Enum):
    """State of a tournament's registration window."""

    NOT_OPENED = "not_opened"
    OPEN = "open"
    CLOSED = "closed"


def get_registration_status(
    open_at: Optional[datetime],
    close_at: Optional[datetime],
    now: Optional[datetime] = None,
) -> RegistrationStatus:
    """Work out where ``now`` falls relative to the registration window.

    With neither bound set, registration is always open.
    """
    now = parse_timestamp(now) or datetime.now(timezone.utc)
    open_at = parse_timestamp(open_at)
    close_at = parse_timestamp(close_at)

    if open_at and now < open_at:
        return RegistrationStatus.NOT_OPENED
    if close_at and now > close_at:
        return RegistrationStatus.CLOSED
    return RegistrationStatus.OPEN


def can_register(config: TournamentConfig, now: Optional[datetime] = None) -> bool:
    status = get_registration_status(
        config.registration_open_at, config.registration_close_at, now
    )
    return status is RegistrationStatus.OPEN


def build_participant(
    roster: Sequence[Participant],
    config: TournamentConfig,
    name: str,
    email: Optional[str] = None,
    image: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Participant:
    """Validate a registration against the roster and return the new participant.

    Checks, in order: name, email, registration window, duplicate name
    (trimmed, case-insensitive), duplicate email (case-insensitive),
    capacity.

    Raises:
        InvalidParticipantDataException: If the name is missing or too short
        EmailValidationException: If the email is malformed
        RegistrationClosedException: If registration is not open
        DuplicateParticipantException: If the name or email is taken
        TournamentFullException: If the roster is at capacity
    """
    clean_name = validate_participant_name_strict(name)
    clean_email = validate_email_strict(email)

    status = get_registration_status(
        config.registration_open_at, config.registration_close_at, now
    )
    if status is RegistrationStatus.NOT_OPENED:
        raise RegistrationClosedException("Registration has not opened yet")
    if status is RegistrationStatus.CLOSED:
        raise RegistrationClosedException("Registration window has closed")

    key = name_key(clean_name)
    if any(name_key(p.name) == key for p in roster):
        raise DuplicateParticipantException(f"{clean_name} is already registered")

    if clean_email and any(
        p.email and p.email.casefold() == clean_email.casefold() for p in roster
    ):
        raise DuplicateParticipantException(f"{clean_email} is already registered")

    if len(roster) >= config.max_participants:
        raise TournamentFullException(
            f"Tournament is full ({config.max_participants} participants)"
        )

    return Participant(name=clean_name, image=image or None, email=clean_email)
