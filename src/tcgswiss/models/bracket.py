"""Top cut bracket data classes."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class BracketMatch:
    """A first-round top cut match between two seeds."""

    position: int
    higher_seed: int
    lower_seed: int
    higher_seed_id: str
    lower_seed_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position,
            "higher_seed": self.higher_seed,
            "lower_seed": self.lower_seed,
            "higher_seed_id": self.higher_seed_id,
            "lower_seed_id": self.lower_seed_id,
        }


@dataclass
class TopCutBracket:
    """Seeded single-elimination bracket.

    ``seeds`` lists participant ids by cut seed (index 0 is seed 1).
    ``matches`` are in bracket order, so the winners of positions 1 and 2
    meet next, then 3 and 4, and so on.
    """

    cut_size: int
    seeds: List[str] = field(default_factory=list)
    matches: List[BracketMatch] = field(default_factory=list)

    def seed_of(self, participant_id: str) -> int:
        return self.seeds.index(participant_id) + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cut_size": self.cut_size,
            "seeds": list(self.seeds),
            "matches": [m.to_dict() for m in self.matches],
        }
