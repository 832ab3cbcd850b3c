"""A tournament participant."""

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

from dataclasses import dataclass
from typing import Optional

from matchwheel.exceptions import InvalidParticipantDataException
from matchwheel.type_hints import ParticipantDict


@dataclass(frozen=True)
class Participant:
    """
    An entrant in a tournament.

    Participants are identified by ``name``, which is unique within a
    tournament. They are immutable once created; the only lifecycle
    change is removal from the roster.

    Attributes
    ----------
    name : str
        Display name.
    image : str or None
        Opaque avatar reference (URL or storage key).
    email : str or None
        Contact address used by notification collaborators.
    """

    name: str
    image: Optional[str] = None
    email: Optional[str] = None

    def __str__(self) -> str:
        return self.name

    def to_dict(self) -> ParticipantDict:
        """Serialize participant, omitting unset optional fields."""
        data: ParticipantDict = {"name": self.name}
        if self.image:
            data["image"] = self.image
        if self.email:
            data["email"] = self.email
        return data

    @classmethod
    def from_dict(cls, data: ParticipantDict) -> "Participant":
        """Deserialize participant from dictionary."""
        if not isinstance(data, dict) or not data.get("name"):
            raise InvalidParticipantDataException(
                f"Participant record without a name: {data!r}"
            )
        return cls(
            name=data["name"],
            image=data.get("image"),
            email=data.get("email"),
        )
