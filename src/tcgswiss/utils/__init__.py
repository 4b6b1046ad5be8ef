"""Shared helpers for TCG Swiss: logging setup, ids and formatting."""

# TCG Swiss
# Copyright (C) 2025  TCG Swiss developers
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
import uuid

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# The library only emits records; handlers belong to the application
logging.getLogger("tcgswiss").addHandler(logging.NullHandler())


def setup_logger(name: str) -> logging.Logger:
    """Return the module logger for ``name``."""
    return logging.getLogger(name)


def configure_logging(level: int = logging.INFO) -> None:
    """Attach a console handler to the package logger.

    Meant for command-line entry points; library code never calls this.
    """
    root = logging.getLogger("tcgswiss")
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)


def generate_id(prefix: str) -> str:
    """Generate a unique id such as ``participant_3f2a9c1e``."""
    return f"{prefix.lower()}_{uuid.uuid4().hex[:8]}"


def format_percentage(value: float) -> str:
    """Format a 0-1 ratio as a percentage with two decimals."""
    return f"{value * 100:.2f}%"
