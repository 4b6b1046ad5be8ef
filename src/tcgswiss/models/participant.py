"""Participant data class."""

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

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Optional

from tcgswiss.exceptions import (
    DuplicateParticipantException,
    InvalidConfigurationException,
)
from tcgswiss.utils import generate_id


@dataclass(frozen=True)
class Participant:
    """A registered tournament participant.

    Attributes
    ----------
    id : str
        Unique identifier.
    name : str
        Display name.
    seed : int
        Initial seed rank assigned at registration. Lower is better; it is the
        tie-break of last resort and never changes.
    dropped : bool
        Whether the participant has left the event. Dropped participants keep
        their results but are no longer paired or cut.
    """

    id: str
    name: str
    seed: int
    dropped: bool = False

    def with_dropped(self, dropped: bool = True) -> "Participant":
        """Return a copy with the drop flag set."""
        return replace(self, dropped=dropped)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize participant to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "seed": self.seed,
            "dropped": self.dropped,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        """Deserialize participant from dictionary."""
        return cls(
            id=str(data["id"]),
            name=data.get("name", str(data["id"])),
            seed=int(data["seed"]),
            dropped=data.get("dropped", False),
        )


def create_participant(
    name: str, seed: int, participant_id: Optional[str] = None
) -> Participant:
    """Create a participant, generating an id when none is given."""
    return Participant(
        id=participant_id or generate_id("participant"), name=name, seed=seed
    )


def create_roster(names: Iterable[str]) -> List[Participant]:
    """Create a roster seeded in registration order (first name is seed 1)."""
    return [create_participant(name, seed) for seed, name in enumerate(names, 1)]


def index_roster(participants: Iterable[Participant]) -> Dict[str, Participant]:
    """Map participant ids to participants, rejecting duplicate ids or seeds."""
    roster: Dict[str, Participant] = {}
    seeds = set()
    for participant in participants:
        if participant.id in roster:
            raise DuplicateParticipantException(
                f"Participant id {participant.id!r} appears more than once"
            )
        if participant.seed in seeds:
            raise InvalidConfigurationException(
                f"Seed {participant.seed} is assigned to more than one participant"
            )
        roster[participant.id] = participant
        seeds.add(participant.seed)
    return roster
