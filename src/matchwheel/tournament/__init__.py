"""Tournament management system for Matchwheel.

This package provides result recording, standings, the winner wheel and
the session object that coordinates them.
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

from matchwheel.tournament.registration import (
    RegistrationStatus,
    can_register,
    get_registration_status,
)
from matchwheel.tournament.reminders import Reminder, due_reminders
from matchwheel.tournament.result_recorder import ResultRecorder
from matchwheel.tournament.session import TournamentSession
from matchwheel.tournament.standings import (
    StandingsCalculator,
    StandingsEntry,
    TieGroup,
)
from matchwheel.tournament.summary import build_summary
from matchwheel.tournament.winner_wheel import WheelSpin, WinnerWheel

__all__ = [
    "TournamentSession",
    "ResultRecorder",
    "StandingsCalculator",
    "StandingsEntry",
    "TieGroup",
    "WinnerWheel",
    "WheelSpin",
    "RegistrationStatus",
    "get_registration_status",
    "can_register",
    "build_summary",
    "Reminder",
    "due_reminders",
]
