"""Pairing history: who has met whom, and who has had a bye."""

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
from typing import Any, Dict, Iterable, List, Optional, Set

from tcgswiss.models.match_result import MatchResult


@dataclass(frozen=True)
class PairingRecord:
    """An unordered pair of participants that met in a given round."""

    pair: frozenset
    round_number: int

    def to_dict(self) -> Dict[str, Any]:
        return {"pair": sorted(self.pair), "round_number": self.round_number}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingRecord":
        return cls(
            pair=frozenset(map(str, data["pair"])),
            round_number=int(data["round_number"]),
        )


@dataclass
class PairingHistory:
    """
    Tracks historical pairings to prevent repeat matches.

    Attributes
    ----------
    records : list of PairingRecord
        Every pairing played so far, in round order.
    bye_rounds : dict of str to list of int
        Rounds in which each participant received a bye.
    """

    records: List[PairingRecord] = field(default_factory=list)
    bye_rounds: Dict[str, List[int]] = field(default_factory=dict)

    @property
    def previous_matches(self) -> Set[frozenset]:
        """Set of frozensets of participant ids that have already met."""
        return {record.pair for record in self.records}

    def add_pairing(
        self, participant1_id: str, participant2_id: str, round_number: int
    ) -> None:
        """Record that two participants have been paired."""
        self.records.append(
            PairingRecord(frozenset({participant1_id, participant2_id}), round_number)
        )

    def add_bye(self, participant_id: str, round_number: int) -> None:
        """Record that a participant received a bye."""
        self.bye_rounds.setdefault(participant_id, []).append(round_number)

    def have_played(self, participant1_id: str, participant2_id: str) -> bool:
        """Check if two participants have previously played each other."""
        return frozenset({participant1_id, participant2_id}) in self.previous_matches

    def last_played_round(
        self, participant1_id: str, participant2_id: str
    ) -> Optional[int]:
        """Most recent round in which the two participants met, if any."""
        pair = frozenset({participant1_id, participant2_id})
        rounds = [r.round_number for r in self.records if r.pair == pair]
        return max(rounds) if rounds else None

    def bye_count(self, participant_id: str) -> int:
        """Number of byes a participant has received."""
        return len(self.bye_rounds.get(participant_id, []))

    @property
    def rounds_played(self) -> List[int]:
        """Rounds with at least one pairing or bye, in order."""
        rounds = {r.round_number for r in self.records}
        for bye_rounds in self.bye_rounds.values():
            rounds.update(bye_rounds)
        return sorted(rounds)

    def played_since(self, round_number: int) -> Set[frozenset]:
        """Pairs that met in ``round_number`` or later."""
        return {r.pair for r in self.records if r.round_number >= round_number}

    @classmethod
    def from_results(cls, results: Iterable[MatchResult]) -> "PairingHistory":
        """Rebuild the history from a match log."""
        history = cls()
        for result in sorted(results, key=lambda r: r.round_number):
            if result.is_bye:
                history.add_bye(result.participant_a_id, result.round_number)
            else:
                history.add_pairing(
                    result.participant_a_id,
                    result.participant_b_id,
                    result.round_number,
                )
        return history

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pairing history to dictionary."""
        return {
            "records": [record.to_dict() for record in self.records],
            "bye_rounds": self.bye_rounds,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingHistory":
        """Deserialize pairing history from dictionary."""
        return cls(
            records=[PairingRecord.from_dict(r) for r in data.get("records", [])],
            bye_rounds={
                str(k): [int(r) for r in v]
                for k, v in data.get("bye_rounds", {}).items()
            },
        )
