"""TournamentConfig data class."""

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

from dataclasses import dataclass
from typing import Any, Dict, Optional

from tcgswiss.constants import (
    DEFAULT_MAX_PAIRING_ATTEMPTS,
    DEFAULT_ROUND_TIME_MINUTES,
    DEFAULT_TIER,
    TIERS,
)
from tcgswiss.exceptions import InvalidConfigurationException


@dataclass
class TournamentConfig:
    """Tournament configuration settings.

    Attributes
    ----------
    name : str
        Tournament name.
    tier : str
        Event tier ("TIER_1" to "TIER_4"); tiers 3 and 4 play extra rounds.
    num_rounds : int or None
        Explicit number of Swiss rounds. ``None`` means plan from the roster
        size when the tournament is created.
    cut_size : int or None
        Top cut size. ``None`` means use the recommended cut for the field.
    round_time_minutes : int
        Length of the round clock.
    max_pairing_attempts : int
        Budget of the backtracking pairing search, per bye candidate.
    """

    name: str
    tier: str = DEFAULT_TIER
    num_rounds: Optional[int] = None
    cut_size: Optional[int] = None
    round_time_minutes: int = DEFAULT_ROUND_TIME_MINUTES
    max_pairing_attempts: int = DEFAULT_MAX_PAIRING_ATTEMPTS

    def __post_init__(self) -> None:
        if self.tier not in TIERS:
            raise InvalidConfigurationException(f"Unknown tier: {self.tier!r}")
        if self.num_rounds is not None and self.num_rounds < 1:
            raise InvalidConfigurationException(
                f"num_rounds must be at least 1, got {self.num_rounds}"
            )
        if self.round_time_minutes <= 0:
            raise InvalidConfigurationException(
                f"round_time_minutes must be positive, got {self.round_time_minutes}"
            )
        if self.max_pairing_attempts < 1:
            raise InvalidConfigurationException(
                "max_pairing_attempts must be at least 1, "
                f"got {self.max_pairing_attempts}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "tier": self.tier,
            "num_rounds": self.num_rounds,
            "cut_size": self.cut_size,
            "round_time_minutes": self.round_time_minutes,
            "max_pairing_attempts": self.max_pairing_attempts,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            name=data.get("name", "Untitled Tournament"),
            tier=data.get("tier", DEFAULT_TIER),
            num_rounds=data.get("num_rounds"),
            cut_size=data.get("cut_size"),
            round_time_minutes=data.get(
                "round_time_minutes", DEFAULT_ROUND_TIME_MINUTES
            ),
            max_pairing_attempts=data.get(
                "max_pairing_attempts", DEFAULT_MAX_PAIRING_ATTEMPTS
            ),
        )
