"""Winner wheel: uniform random selection expressed as a wheel spin."""

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

import math
import random
from dataclasses import dataclass
from typing import Generic, Optional, Sequence, TypeVar

from matchwheel.constants import (
    WHEEL_FULL_TURN,
    WHEEL_MAX_SPINS,
    WHEEL_MIN_SPINS,
    WHEEL_POINTER_OFFSET,
)
from matchwheel.exceptions import EmptyWheelException
from matchwheel.utils import setup_logger

logger = setup_logger(__name__)

T = TypeVar("T")


@dataclass
class WheelSpin(Generic[T]):
    """Outcome of one spin.

    Attributes:
        rotation: Total rotation in degrees after the spin, for animation
        index: Segment index under the pointer
        winner: The entrant at ``index``
    """

    rotation: float
    index: int
    winner: T


class WinnerWheel:
    """Picks one entrant uniformly at random.

    Entrants occupy equal segments of a circle. A spin adds several full
    turns plus a continuous uniform offset, and the segment that comes to
    rest under the pointer wins. Since the offset is uniform over the full
    circle, every segment is equally likely.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    @staticmethod
    def segment_at(rotation: float, count: int) -> int:
        """Index of the segment under the pointer for a given rotation.

        Args:
            rotation: Wheel rotation in degrees (any magnitude)
            count: Number of segments

        Returns:
            Segment index in ``range(count)``
        """
        if count <= 0:
            raise EmptyWheelException("The wheel has no segments")
        segment_angle = WHEEL_FULL_TURN / count
        resting = rotation % WHEEL_FULL_TURN
        pointer = (WHEEL_FULL_TURN - resting + WHEEL_POINTER_OFFSET) % WHEEL_FULL_TURN
        return min(int(math.floor(pointer / segment_angle)), count - 1)

    def spin(self, entrants: Sequence[T], current_rotation: float = 0.0) -> WheelSpin[T]:
        """Spin the wheel once.

        Args:
            entrants: Candidates, one segment each
            current_rotation: Where the wheel was left by the previous spin

        Returns:
            WheelSpin with the new rotation and the winner

        Raises:
            EmptyWheelException: If there are no entrants
        """
        if not entrants:
            raise EmptyWheelException("Cannot spin a wheel with no entrants")

        turns = self.rng.randrange(WHEEL_MIN_SPINS, WHEEL_MAX_SPINS)
        offset = self.rng.random() * WHEEL_FULL_TURN
        rotation = current_rotation + turns * WHEEL_FULL_TURN + offset

        index = self.segment_at(rotation, len(entrants))
        winner = entrants[index]
        logger.info(f"Wheel stopped on {winner} ({index + 1} of {len(entrants)})")
        return WheelSpin(rotation=rotation, index=index, winner=winner)

    def pick_winner(self, entrants: Sequence[T]) -> T:
        """Return a uniformly random entrant."""
        return self.spin(entrants).winner
