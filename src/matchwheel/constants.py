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

# --- Constants ---
SAVE_FILE_EXTENSION = ".json"

# Matchup quotas
MATCHES_PER_PARTICIPANT = 3
MIN_PARTICIPANTS = 4
DEFAULT_MAX_PARTICIPANTS = 16
# Greedy pairing gets N * factor attempts
GENERATION_ATTEMPT_FACTOR = 10

# Match outcomes, from the perspective of the participant owning the edge
RESULT_WIN = "win"
RESULT_LOSS = "loss"
RESULT_DRAW = "draw"
VALID_RESULTS = (RESULT_WIN, RESULT_LOSS, RESULT_DRAW)

# Outcome as seen from the other side of the same match
COMPLEMENTARY_RESULT = {
    RESULT_WIN: RESULT_LOSS,
    RESULT_LOSS: RESULT_WIN,
    RESULT_DRAW: RESULT_DRAW,
}

# Pairing strategies
STRATEGY_CIRCULANT = "circulant"
STRATEGY_GREEDY = "greedy"
PAIRING_STRATEGIES = (STRATEGY_CIRCULANT, STRATEGY_GREEDY)
DEFAULT_PAIRING_STRATEGY = STRATEGY_CIRCULANT

# Tournament status values (as stored)
STATUS_REGISTRATION = "registration"
STATUS_IN_PROGRESS = "in_progress"
STATUS_COMPLETED = "completed"

# Registration rules
MIN_NAME_LENGTH = 2

# Winner wheel
WHEEL_FULL_TURN = 360.0
# Pointer sits at the top of the wheel, a quarter turn from 0 degrees
WHEEL_POINTER_OFFSET = 90.0
WHEEL_MIN_SPINS = 5
WHEEL_MAX_SPINS = 10  # exclusive

# Start-time reminders: type -> lead time in hours
REMINDER_ONE_HOUR = "1-hour"
REMINDER_TWENTY_FOUR_HOURS = "24-hour"
REMINDER_LEAD_HOURS = {
    REMINDER_ONE_HOUR: 1,
    REMINDER_TWENTY_FOUR_HOURS: 24,
}
# Start time may fall this many minutes either side of now + lead
REMINDER_WINDOW_MINUTES = 15
