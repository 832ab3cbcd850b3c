"""Plain-text tournament summaries for notification collaborators."""

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

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from matchwheel.constants import (
    REMINDER_LEAD_HOURS,
    REMINDER_WINDOW_MINUTES,
    STATUS_REGISTRATION,
)
from matchwheel.models.participant import Participant
from matchwheel.models.tournament_config import parse_timestamp
from matchwheel.tournament.session import TournamentSession
from matchwheel.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class Reminder:
    """A start-time reminder that is due for delivery.

    Attributes:
        reminder_type: '1-hour' or '24-hour'
        time_left: Human-readable lead time, e.g. '24 hours'
        start_at: Scheduled tournament start
        recipients: Participants with an email address
    """

    reminder_type: str
    time_left: str
    start_at: datetime
    recipients: List[Participant] = field(default_factory=list)

    @property
    def emails(self) -> List[str]:
        return [p.email for p in self.recipients]


def _time_left_label(hours: int) -> str:
    return f"{hours} hour" if hours == 1 else f"{hours} hours"


def reminder_recipients(session: TournamentSession) -> List[Participant]:
    return [p for p in session.participants if p.email and "@" in p.email]


def due_reminders(
    session: TournamentSession, now: Optional[datetime] = None
) -> List[Reminder]:
    """Work out which start-time reminders should go out now.

    A reminder type is due while the tournament is still in registration and
    its start falls within ``REMINDER_WINDOW_MINUTES`` either side of
    ``now`` plus the reminder's lead time. Types listed in ``reminders_sent``
    are never due again. A type with nobody to email is skipped.

    Args:
        session: Tournament to check
        now: Current time; defaults to the current UTC time

    Returns:
        Due reminders, shortest lead time first
    """
    start_at = session.config.tournament_start_at
    if start_at is None or session.status != STATUS_REGISTRATION:
        return []

    now = parse_timestamp(now) or datetime.now(timezone.utc)
    window = timedelta(minutes=REMINDER_WINDOW_MINUTES)
    recipients = reminder_recipients(session)

    due = []
    for reminder_type, hours in sorted(REMINDER_LEAD_HOURS.items(), key=lambda kv: kv[1]):
        if reminder_type in session.config.reminders_sent:
            continue
        target = now + timedelta(hours=hours)
        if not (target - window <= start_at <= target + window):
            continue
        if not recipients:
            logger.info(f"No participants with emails for {session.name}")
            continue
        due.append(
            Reminder(
                reminder_type=reminder_type,
                time_left=_time_left_label(hours),
                start_at=start_at,
                recipients=list(recipients),
            )
        )
    return due
