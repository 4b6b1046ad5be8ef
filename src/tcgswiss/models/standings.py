"""Standings entry data class."""

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
from typing import Any, Dict

from tcgswiss.utils import format_percentage


@dataclass(frozen=True)
class StandingsEntry:
    """One participant's line in the standings.

    Attributes
    ----------
    participant_id : str
        Participant the line belongs to.
    name : str
        Display name.
    seed : int
        Initial seed, the final tie-break.
    match_points : int
        3 per win or bye, 1 per draw.
    wins, losses, draws, byes : int
        Match record. Byes are also counted in ``wins``.
    match_win_pct, omw_pct, gw_pct, ogw_pct : float
        Tiebreak percentages as ratios in [1/3, 1].
    rank : int
        1-based position in the standings; derived, never authoritative.
    dropped : bool
        Whether the participant has left the event.
    """

    participant_id: str
    name: str
    seed: int
    match_points: int
    wins: int
    losses: int
    draws: int
    byes: int
    match_win_pct: float
    omw_pct: float
    gw_pct: float
    ogw_pct: float
    rank: int
    dropped: bool = False

    @property
    def record(self) -> str:
        """Match record as W-L-D."""
        return f"{self.wins}-{self.losses}-{self.draws}"

    @property
    def rounds_played(self) -> int:
        return self.wins + self.losses + self.draws

    def sort_key(self) -> tuple:
        """Key ordering entries best first."""
        return (
            -self.match_points,
            -self.omw_pct,
            -self.gw_pct,
            -self.ogw_pct,
            self.seed,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rank": self.rank,
            "participant_id": self.participant_id,
            "name": self.name,
            "seed": self.seed,
            "match_points": self.match_points,
            "record": self.record,
            "byes": self.byes,
            "match_win_pct": self.match_win_pct,
            "omw_pct": self.omw_pct,
            "gw_pct": self.gw_pct,
            "ogw_pct": self.ogw_pct,
            "dropped": self.dropped,
        }

    def to_display_row(self) -> Dict[str, str]:
        """Row of formatted strings for printing a standings table."""
        return {
            "Rank": str(self.rank),
            "Name": self.name,
            "Points": str(self.match_points),
            "Record": self.record,
            "OMW%": format_percentage(self.omw_pct),
            "GW%": format_percentage(self.gw_pct),
            "OGW%": format_percentage(self.ogw_pct),
        }
