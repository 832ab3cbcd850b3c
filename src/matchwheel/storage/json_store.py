"""JSON file storage for tournament snapshots."""

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

import json
from pathlib import Path
from typing import List, Union

from matchwheel.constants import SAVE_FILE_EXTENSION
from matchwheel.exceptions import FileLoadException, FileSaveException
from matchwheel.storage.base import TournamentStore
from matchwheel.type_hints import TournamentSnapshot
from matchwheel.utils import setup_logger

logger = setup_logger(__name__)


def read_snapshot(path: Union[str, Path]) -> TournamentSnapshot:
    """Read a snapshot from a single JSON file.

    Raises:
        FileLoadException: If the file is missing or not valid JSON
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise FileLoadException(f"No tournament file at {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise FileLoadException(f"Could not load tournament from {path}: {e}") from e
    if not isinstance(data, dict):
        raise FileLoadException(f"{path} does not contain a tournament object")
    return data


def write_snapshot(path: Union[str, Path], snapshot: TournamentSnapshot) -> None:
    """Write a snapshot to a single JSON file, replacing it atomically.

    Raises:
        FileSaveException: If the file cannot be written
    """
    path = Path(path)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(snapshot, f, indent=4)
        tmp_path.replace(path)
    except OSError as e:
        raise FileSaveException(f"Could not save tournament to {path}: {e}") from e
    logger.info(f"Tournament saved to {path}")


class JsonFileTournamentStore(TournamentStore):
    """Stores each tournament as ``<directory>/<id>.json``."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def _path(self, tournament_id: str) -> Path:
        return self.directory / f"{tournament_id}{SAVE_FILE_EXTENSION}"

    def save(self, tournament_id: str, snapshot: TournamentSnapshot) -> None:
        write_snapshot(self._path(tournament_id), snapshot)

    def load(self, tournament_id: str) -> TournamentSnapshot:
        return read_snapshot(self._path(tournament_id))

    def list_ids(self) -> List[str]:
        if not self.directory.is_dir():
            return []
        return sorted(p.stem for p in self.directory.glob(f"*{SAVE_FILE_EXTENSION}"))
