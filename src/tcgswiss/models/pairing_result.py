"""PairingResult data class."""

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
from typing import List, Optional

from tcgswiss.models.match_result import MatchResult
from tcgswiss.models.round_data import Pairing, RematchForced
from tcgswiss.type_hints import PairingIDs


@dataclass
class PairingResult:
    """Result of a pairing computation for a single round."""

    round_number: int
    pairings: List[Pairing]
    bye_participant_id: Optional[str] = None
    bye_result: Optional[MatchResult] = None
    forced_rematches: List[RematchForced] = field(default_factory=list)

    @property
    def pairing_ids(self) -> List[PairingIDs]:
        return [(p.participant_a_id, p.participant_b_id) for p in self.pairings]

    @property
    def rematch_forced(self) -> bool:
        return bool(self.forced_rematches)
