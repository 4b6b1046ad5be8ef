"""Main Tournament class - orchestrates all tournament operations.

This is the primary interface for running one event, coordinating the
specialized components over an explicit :class:`TournamentState`.
"""

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

import json
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Optional

from tcgswiss.constants import SAVE_FILE_EXTENSION
from tcgswiss.exceptions import (
    TopCutException,
    UnknownParticipantException,
)
from tcgswiss.models.bracket import TopCutBracket
from tcgswiss.models.match_result import MatchResult, Outcome
from tcgswiss.models.participant import Participant, index_roster
from tcgswiss.models.round_data import RoundData
from tcgswiss.models.standings import StandingsEntry
from tcgswiss.models.tournament_config import TournamentConfig
from tcgswiss.tournament.round_manager import RoundManager
from tcgswiss.tournament.round_planner import plan_rounds, recommended_top_cut
from tcgswiss.tournament.standings_calculator import StandingsCalculator
from tcgswiss.tournament.top_cut import TopCutSelector
from tcgswiss.type_hints import MaybeGameScore
from tcgswiss.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class TournamentState:
    """Everything needed to resume an event.

    Attributes
    ----------
    config : TournamentConfig
        Event configuration. ``num_rounds`` is always filled in once the
        state belongs to a tournament.
    participants : list of Participant
        The roster, fixed at creation. Only the drop flags change.
    rounds : list of RoundData
        Rounds in order of creation.
    """

    config: TournamentConfig
    participants: List[Participant] = field(default_factory=list)
    rounds: List[RoundData] = field(default_factory=list)

    @property
    def match_log(self) -> List[MatchResult]:
        return [result for round_data in self.rounds for result in round_data.results]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "config": self.config.to_dict(),
            "participants": [p.to_dict() for p in self.participants],
            "rounds": [r.to_dict() for r in self.rounds],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentState":
        return cls(
            config=TournamentConfig.from_dict(data.get("config", {})),
            participants=[Participant.from_dict(p) for p in data["participants"]],
            rounds=[RoundData.from_dict(r) for r in data.get("rounds", [])],
        )


class Tournament:
    """Main tournament management class.

    This class coordinates all tournament operations through specialized
    components:
    - RoundManager: round sequencing, pairing and result entry
    - StandingsCalculator: ranked standings from the match log
    - TopCutSelector: seeding of the single-elimination stage

    Each event owns its own state; nothing is shared between tournaments.
    """

    def __init__(
        self,
        config: TournamentConfig,
        participants: List[Participant],
        rounds: Optional[List[RoundData]] = None,
    ) -> None:
        """Initialize a tournament.

        Args:
            config: Tournament configuration; ``num_rounds`` is planned from
                the roster size when not given
            participants: The roster, with unique ids and seeds
            rounds: Rounds already played, when resuming

        Raises:
            InsufficientParticipantsException: If fewer than two participants
            DuplicateParticipantException: If two participants share an id
            InvalidConfigurationException: If two participants share a seed
        """
        self._roster = index_roster(participants)
        config = replace(
            config,
            num_rounds=plan_rounds(
                len(participants), override=config.num_rounds, tier=config.tier
            ),
        )
        self.state = TournamentState(
            config=config,
            participants=list(participants),
            rounds=rounds if rounds is not None else [],
        )
        self.round_manager = RoundManager(
            num_rounds=config.num_rounds,
            rounds=self.state.rounds,
            max_pairing_attempts=config.max_pairing_attempts,
            round_time_minutes=config.round_time_minutes,
        )
        self.standings_calculator = StandingsCalculator()
        self.top_cut_selector = TopCutSelector()
        logger.info(
            f"Tournament {config.name!r}: {len(participants)} participants, "
            f"{config.num_rounds} rounds"
        )

    # ========== Properties ==========

    @property
    def config(self) -> TournamentConfig:
        return self.state.config

    @property
    def name(self) -> str:
        """Get tournament name."""
        return self.config.name

    @property
    def num_rounds(self) -> int:
        """Get number of Swiss rounds."""
        return self.config.num_rounds

    @property
    def participants(self) -> List[Participant]:
        return list(self.state.participants)

    @property
    def rounds(self) -> List[RoundData]:
        return self.state.rounds

    @property
    def match_log(self) -> List[MatchResult]:
        return self.state.match_log

    @property
    def current_round_number(self) -> int:
        return self.round_manager.current_round_number

    @property
    def is_swiss_complete(self) -> bool:
        return self.round_manager.is_swiss_complete

    # ========== Participant Management ==========

    def get_participant(self, participant_id: str) -> Participant:
        """Look up a participant by id.

        Raises:
            UnknownParticipantException: If the id is not on the roster
        """
        try:
            return self._roster[participant_id]
        except KeyError:
            raise UnknownParticipantException(
                f"Participant {participant_id!r} is not on the roster"
            ) from None

    def drop_participant(self, participant_id: str) -> Participant:
        """Drop a participant from the event.

        The participant keeps their results and standing but is not paired in
        later rounds and cannot make the top cut.

        Returns:
            The updated participant record
        """
        participant = self.get_participant(participant_id)
        if participant.dropped:
            return participant

        dropped = participant.with_dropped()
        self._roster[participant_id] = dropped
        self.state.participants = [
            dropped if p.id == participant_id else p for p in self.state.participants
        ]
        logger.info(f"Dropped {dropped.name} ({participant_id})")
        return dropped

    # ========== Round Management ==========

    def can_start_next_round(self) -> bool:
        return self.round_manager.can_create_next_round()

    def create_next_round(self, started_at: Optional[datetime] = None) -> RoundData:
        """Pair the next Swiss round.

        Raises:
            RoundNotCompleteException: If the current round has pending results
            TournamentStateException: If every Swiss round already exists
        """
        return self.round_manager.create_next_round(
            self.state.participants, started_at=started_at
        )

    def get_round(self, round_number: int) -> RoundData:
        return self.round_manager.get_round(round_number)

    # ========== Result Management ==========

    def record_result(
        self,
        round_number: int,
        table: int,
        outcome: Outcome,
        game_score: MaybeGameScore = None,
    ) -> MatchResult:
        """Record the result of one table.

        Args:
            round_number: Round the table belongs to
            table: Table number (byes are recorded automatically)
            outcome: Outcome from the first-listed participant's view
            game_score: Games won by each side, if reported

        Returns:
            The recorded MatchResult
        """
        return self.round_manager.record_result(
            round_number, table, outcome, game_score, self._roster.keys()
        )

    # ========== Standings and Top Cut ==========

    def get_standings(self) -> List[StandingsEntry]:
        """Get current standings, best first."""
        return self.standings_calculator.compute_standings(
            self.state.participants, self.match_log
        )

    def recommended_cut_size(self) -> int:
        return recommended_top_cut(len(self.state.participants), self.config.tier)

    def select_top_cut(self, cut_size: Optional[int] = None) -> TopCutBracket:
        """Seed the top cut from the current standings.

        Args:
            cut_size: Bracket size; defaults to the configured cut, then the
                recommended cut for the field

        Raises:
            TopCutException: If no cut size is configured and the field is too
                small for a recommended cut
            InvalidCutSizeException: If the cut size is not a power of two
            InsufficientFieldForCutException: If too few participants remain
        """
        if cut_size is None:
            cut_size = self.config.cut_size or self.recommended_cut_size()
            if not cut_size:
                raise TopCutException(
                    f"No top cut is played with {len(self.state.participants)} "
                    "participants"
                )
        return self.top_cut_selector.select_top_cut(self.get_standings(), cut_size)

    # ========== Utility Methods ==========

    def summary(self) -> Dict[str, int]:
        """Counts describing how far the event has progressed."""
        current = self.round_manager.current_round_number
        pending = 0
        if current:
            pending = len(self.round_manager.get_round(current).pending_pairings)
        dropped = sum(1 for p in self.state.participants if p.dropped)
        return {
            "total_participants": len(self.state.participants),
            "active_participants": len(self.state.participants) - dropped,
            "dropped_participants": dropped,
            "total_rounds": self.num_rounds,
            "current_round": current,
            "completed_rounds": self.round_manager.completed_rounds_count,
            "pending_matches": pending,
            "forced_rematches": sum(len(r.forced_rematches) for r in self.rounds),
        }

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary."""
        return self.state.to_dict()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        """Deserialize tournament from dictionary."""
        state = TournamentState.from_dict(data)
        tournament = cls(state.config, state.participants, rounds=state.rounds)
        logger.info(f"Loaded tournament: {tournament.name}")
        return tournament

    def save(self, path: str) -> str:
        """Write the tournament to a JSON file and return the path used."""
        if not path.endswith(SAVE_FILE_EXTENSION):
            path += SAVE_FILE_EXTENSION
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved tournament {self.name!r} to {path}")
        return path

    @classmethod
    def load(cls, path: str) -> "Tournament":
        """Read a tournament written by :meth:`save`."""
        with open(path, encoding="utf-8") as f:
            return cls.from_dict(json.load(f))
