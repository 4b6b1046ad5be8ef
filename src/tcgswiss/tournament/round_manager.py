"""Round management for tournaments.

This module handles all round-related operations including pairing generation,
round progression, and round history management.
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

from datetime import datetime
from typing import Iterable, List, Optional

from tcgswiss.constants import DEFAULT_MAX_PAIRING_ATTEMPTS
from tcgswiss.exceptions import (
    RoundNotCompleteException,
    RoundNotFoundException,
    TournamentStateException,
)
from tcgswiss.models.match_result import MatchResult, Outcome
from tcgswiss.models.pairing_history import PairingHistory
from tcgswiss.models.participant import Participant
from tcgswiss.models.round_data import RoundData
from tcgswiss.pairing.swiss_fold import SwissPairingEngine
from tcgswiss.tournament.result_recorder import ResultRecorder
from tcgswiss.tournament.standings_calculator import StandingsCalculator
from tcgswiss.type_hints import MaybeGameScore
from tcgswiss.utils import setup_logger

logger = setup_logger(__name__)


def history_from_rounds(rounds: Iterable[RoundData]) -> PairingHistory:
    """Build the pairing history from the pairings of earlier rounds."""
    history = PairingHistory()
    for round_data in rounds:
        for pairing in round_data.pairings:
            if pairing.is_bye:
                history.add_bye(pairing.participant_a_id, round_data.round_number)
            else:
                history.add_pairing(
                    pairing.participant_a_id,
                    pairing.participant_b_id,
                    round_data.round_number,
                )
    return history


class RoundManager:
    """Manages round progression and pairing generation for tournaments.

    This class is responsible for:
    - Refusing to pair a round before the previous one is complete
    - Generating pairings from fresh standings and the pairing history
    - Recording results into the right round
    - Tracking round history
    """

    def __init__(
        self,
        num_rounds: int,
        rounds: Optional[List[RoundData]] = None,
        max_pairing_attempts: int = DEFAULT_MAX_PAIRING_ATTEMPTS,
        round_time_minutes: Optional[int] = None,
    ):
        """Initialize the round manager.

        Args:
            num_rounds: Total number of Swiss rounds
            rounds: Rounds already played, when resuming a tournament
            max_pairing_attempts: Budget of the pairing search
            round_time_minutes: Length of the round clock
        """
        self.num_rounds = num_rounds
        self.rounds: List[RoundData] = rounds if rounds is not None else []
        self.round_time_minutes = round_time_minutes
        self.pairing_engine = SwissPairingEngine(max_attempts=max_pairing_attempts)
        self.result_recorder = ResultRecorder()
        self.standings_calculator = StandingsCalculator()

    @property
    def current_round_number(self) -> int:
        """Get the current round number (1-indexed).

        Returns:
            The current round number, or 0 if no rounds have been created.
        """
        return len(self.rounds)

    @property
    def completed_rounds_count(self) -> int:
        """Get the number of completed rounds."""
        return sum(1 for round_data in self.rounds if round_data.is_completed)

    @property
    def is_swiss_complete(self) -> bool:
        """True once every planned round exists and is complete."""
        return (
            len(self.rounds) >= self.num_rounds
            and self.completed_rounds_count == len(self.rounds)
        )

    @property
    def match_log(self) -> List[MatchResult]:
        """Every recorded result, round by round."""
        return [result for round_data in self.rounds for result in round_data.results]

    def get_round(self, round_number: int) -> RoundData:
        """Get data for a specific round.

        Raises:
            RoundNotFoundException: If the round has not been created
        """
        if 1 <= round_number <= len(self.rounds):
            return self.rounds[round_number - 1]
        raise RoundNotFoundException(f"Round {round_number} does not exist")

    def can_create_next_round(self) -> bool:
        if len(self.rounds) >= self.num_rounds:
            return False
        return not self.rounds or self.rounds[-1].is_completed

    def create_next_round(
        self,
        participants: List[Participant],
        started_at: Optional[datetime] = None,
    ) -> RoundData:
        """Generate pairings for the next round.

        Args:
            participants: The tournament roster
            started_at: When the round clock starts, if known

        Returns:
            The new round; its bye result, if any, is already recorded

        Raises:
            TournamentStateException: If all rounds have already been created
            RoundNotCompleteException: If the previous round still has
                pending results
        """
        if len(self.rounds) >= self.num_rounds:
            raise TournamentStateException(
                f"Cannot create more rounds: already at {self.num_rounds} rounds"
            )

        if self.rounds and not self.rounds[-1].is_completed:
            last = self.rounds[-1]
            raise RoundNotCompleteException(
                f"Round {last.round_number} has "
                f"{len(last.pending_pairings)} pending results"
            )

        round_number = len(self.rounds) + 1
        standings = self.standings_calculator.compute_standings(
            participants, self.match_log
        )
        history = history_from_rounds(self.rounds)

        result = self.pairing_engine.create_pairings(standings, history, round_number)

        round_data = RoundData(
            round_number=round_number,
            pairings=result.pairings,
            results=[result.bye_result] if result.bye_result else [],
            forced_rematches=result.forced_rematches,
            started_at=started_at,
            round_time_minutes=self.round_time_minutes,
        )
        self.rounds.append(round_data)

        logger.info(
            f"Created round {round_number}: {len(result.pairings)} tables"
            + (f", bye {result.bye_participant_id}" if result.bye_participant_id else "")
        )
        return round_data

    def record_result(
        self,
        round_number: int,
        table: int,
        outcome: Outcome,
        game_score: MaybeGameScore,
        participant_ids: Iterable[str],
    ) -> MatchResult:
        """Record the result of one table.

        Raises:
            RoundNotFoundException: If the round or table does not exist
            UnknownParticipantException: If a participant is not on the roster
            DuplicateResultException: If the table already has a result
            InvalidResultException: If the game score contradicts the outcome
        """
        round_data = self.get_round(round_number)
        pairing = round_data.get_pairing(table)
        if pairing is None:
            raise RoundNotFoundException(
                f"Round {round_number} has no table {table}"
            )

        round_data.results = self.result_recorder.record_result(
            round_data.results,
            pairing,
            outcome,
            game_score,
            set(participant_ids),
            round_number,
        )
        if round_data.is_completed:
            logger.info(f"Round {round_number} is complete")
        return round_data.results[-1]
