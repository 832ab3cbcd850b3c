"""Storage collaborator interface for tournament snapshots."""

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

import copy
from abc import ABC, abstractmethod
from typing import Dict, List

from matchwheel.exceptions import FileLoadException
from matchwheel.type_hints import TournamentSnapshot


class TournamentStore(ABC):
    """
    Abstract persistence backend for tournament snapshots.

    Snapshots are plain dictionaries in the shape produced by
    ``TournamentSession.to_dict``. Stores overwrite on save: concurrent
    writers are resolved by last write wins.
    """

    @abstractmethod
    def save(self, tournament_id: str, snapshot: TournamentSnapshot) -> None:
        """Persist ``snapshot`` under ``tournament_id``."""

    @abstractmethod
    def load(self, tournament_id: str) -> TournamentSnapshot:
        """Return the stored snapshot.

        Raises
        ------
        FileLoadException
            If no snapshot exists or it cannot be read.
        """

    @abstractmethod
    def list_ids(self) -> List[str]:
        """Return the ids of all stored tournaments."""


class InMemoryTournamentStore(TournamentStore):
    """Dictionary-backed store, handy for tests and scripting."""

    def __init__(self) -> None:
        self._snapshots: Dict[str, TournamentSnapshot] = {}

    def save(self, tournament_id: str, snapshot: TournamentSnapshot) -> None:
        self._snapshots[tournament_id] = copy.deepcopy(snapshot)

    def load(self, tournament_id: str) -> TournamentSnapshot:
        try:
            return copy.deepcopy(self._snapshots[tournament_id])
        except KeyError:
            raise FileLoadException(f"Tournament not found: {tournament_id}") from None

    def list_ids(self) -> List[str]:
        return sorted(self._snapshots)
