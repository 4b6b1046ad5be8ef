"""Data model for tournament round."""

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
from datetime import datetime
from typing import Any, Dict, List, Optional

from dateutil.relativedelta import relativedelta

from tcgswiss.models.match_result import MatchResult


@dataclass(frozen=True)
class Pairing:
    """One table of a round. ``participant_b_id`` is None for a bye."""

    table: int
    participant_a_id: str
    participant_b_id: Optional[str] = None

    @property
    def is_bye(self) -> bool:
        return self.participant_b_id is None

    @property
    def participant_ids(self) -> tuple:
        if self.participant_b_id is None:
            return (self.participant_a_id,)
        return (self.participant_a_id, self.participant_b_id)

    def matches(self, result: MatchResult) -> bool:
        """True if ``result`` was recorded for this pairing."""
        return set(self.participant_ids) == set(result.participant_ids)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "table": self.table,
            "participant_a_id": self.participant_a_id,
            "participant_b_id": self.participant_b_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pairing":
        return cls(
            table=int(data["table"]),
            participant_a_id=data["participant_a_id"],
            participant_b_id=data.get("participant_b_id"),
        )


@dataclass(frozen=True)
class RematchForced:
    """Warning attached to a round that had to repeat an earlier pairing."""

    round_number: int
    pair: frozenset
    previous_round: Optional[int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round_number": self.round_number,
            "pair": sorted(self.pair),
            "previous_round": self.previous_round,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RematchForced":
        return cls(
            round_number=int(data["round_number"]),
            pair=frozenset(data["pair"]),
            previous_round=data.get("previous_round"),
        )


@dataclass
class RoundData:
    """Container for all data related to a single tournament round.

    Attributes
    ----------
    round_number : int
        Round number (1-indexed).
    pairings : list of Pairing
        Tables in pairing order; a bye, if any, is the last entry.
    results : list of MatchResult
        Recorded results. The bye result is recorded when the round is created.
    forced_rematches : list of RematchForced
        Rematches the pairing engine could not avoid this round.
    started_at : datetime or None
        When the round clock started.
    round_time_minutes : int or None
        Length of the round clock.
    """

    round_number: int
    pairings: List[Pairing] = field(default_factory=list)
    results: List[MatchResult] = field(default_factory=list)
    forced_rematches: List[RematchForced] = field(default_factory=list)
    started_at: Optional[datetime] = None
    round_time_minutes: Optional[int] = None

    @property
    def is_completed(self) -> bool:
        """True once every pairing in the round has a recorded result."""
        return all(self.result_for(p) is not None for p in self.pairings)

    @property
    def bye_participant_id(self) -> Optional[str]:
        for pairing in self.pairings:
            if pairing.is_bye:
                return pairing.participant_a_id
        return None

    @property
    def pending_pairings(self) -> List[Pairing]:
        return [p for p in self.pairings if self.result_for(p) is None]

    @property
    def deadline(self) -> Optional[datetime]:
        """When the round clock runs out, if the round has been started."""
        if self.started_at is None or self.round_time_minutes is None:
            return None
        return self.started_at + relativedelta(minutes=self.round_time_minutes)

    def result_for(self, pairing: Pairing) -> Optional[MatchResult]:
        for result in self.results:
            if pairing.matches(result):
                return result
        return None

    def get_pairing(self, table: int) -> Optional[Pairing]:
        for pairing in self.pairings:
            if pairing.table == table:
                return pairing
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round data to dictionary."""
        return {
            "round_number": self.round_number,
            "pairings": [p.to_dict() for p in self.pairings],
            "results": [r.to_dict() for r in self.results],
            "forced_rematches": [f.to_dict() for f in self.forced_rematches],
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "round_time_minutes": self.round_time_minutes,
            "is_completed": self.is_completed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoundData":
        """Deserialize round data from dictionary."""
        started_at = data.get("started_at")
        return cls(
            round_number=data["round_number"],
            pairings=[Pairing.from_dict(p) for p in data.get("pairings", [])],
            results=[MatchResult.from_dict(r) for r in data.get("results", [])],
            forced_rematches=[
                RematchForced.from_dict(f) for f in data.get("forced_rematches", [])
            ],
            started_at=datetime.fromisoformat(started_at) if started_at else None,
            round_time_minutes=data.get("round_time_minutes"),
        )
