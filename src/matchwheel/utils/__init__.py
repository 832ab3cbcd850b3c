"""Shared utilities for Matchwheel."""

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

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Return a module logger with a single stream handler attached.

    Repeated calls with the same name reuse the existing handler, so modules
    can call this at import time without duplicating output.

    Args:
        name: Logger name, usually ``__name__``
        level: Initial logging level

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(level)
        logger.propagate = False
    return logger


def set_log_level(level: int) -> None:
    """Set the level of every Matchwheel logger created so far."""
    for name in list(logging.root.manager.loggerDict):
        if name == "matchwheel" or name.startswith("matchwheel."):
            logging.getLogger(name).setLevel(level)
