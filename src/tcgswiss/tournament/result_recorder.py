"""Result recording and validation for tournaments.

This module handles recording match results with proper validation and error checking.
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

from typing import Container, List, Optional, Sequence

from tcgswiss.exceptions import (
    DuplicateResultException,
    InvalidResultException,
    UnknownParticipantException,
)
from tcgswiss.models.match_result import MatchResult, Outcome
from tcgswiss.models.round_data import Pairing
from tcgswiss.type_hints import MaybeGameScore
from tcgswiss.utils import setup_logger

logger = setup_logger(__name__)


class ResultRecorder:
    """Handles recording and validating match results.

    The match log is append-only and never mutated in place: recording
    returns a new log with the result added. This class is responsible for:
    - Rejecting results for participants who are not on the roster
    - Rejecting a second result for the same pairing or participant in a round
    - Checking the game score against the outcome
    """

    def record_result(
        self,
        match_log: Sequence[MatchResult],
        pairing: Pairing,
        outcome: Outcome,
        game_score: MaybeGameScore,
        participant_ids: Container[str],
        round_number: int,
    ) -> List[MatchResult]:
        """Record the result of one pairing.

        Args:
            match_log: Results recorded so far
            pairing: The table being reported
            outcome: Outcome from participant A's point of view
            game_score: Games won by A and B, or None if not reported
            participant_ids: Ids on the roster
            round_number: Round the pairing belongs to

        Returns:
            A new match log with the result appended

        Raises:
            UnknownParticipantException: If a participant is not on the roster
            DuplicateResultException: If the pairing, or either participant,
                already has a result this round
            InvalidResultException: If the pairing names one participant
                twice, or the game score contradicts the outcome
        """
        for pid in pairing.participant_ids:
            if pid not in participant_ids:
                logger.error(f"Cannot find participant: {pid}")
                raise UnknownParticipantException(
                    f"Participant {pid!r} is not on the roster"
                )

        if pairing.participant_a_id == pairing.participant_b_id:
            logger.error(
                f"Round {round_number}: table {pairing.table} pairs "
                f"{pairing.participant_a_id} against themselves"
            )
            raise InvalidResultException(
                f"Table {pairing.table} names {pairing.participant_a_id!r} twice"
            )

        existing = self._existing_result(match_log, pairing, round_number)
        if existing is not None:
            logger.error(
                f"Round {round_number}: result for table {pairing.table} "
                "already recorded"
            )
            raise DuplicateResultException(
                f"Round {round_number} already has a result involving "
                f"{', '.join(existing.participant_ids)}"
            )

        # MatchResult validates outcome against game score
        result = MatchResult(
            round_number=round_number,
            participant_a_id=pairing.participant_a_id,
            participant_b_id=pairing.participant_b_id,
            outcome=outcome,
            game_score=game_score,
        )

        logger.debug(
            f"Recorded round {round_number} table {pairing.table}: "
            f"{pairing.participant_a_id} vs {pairing.participant_b_id} "
            f"-> {outcome.value} {game_score}"
        )
        return list(match_log) + [result]

    def _existing_result(
        self, match_log: Sequence[MatchResult], pairing: Pairing, round_number: int
    ) -> Optional[MatchResult]:
        ids = set(pairing.participant_ids)
        for result in match_log:
            if result.round_number != round_number:
                continue
            if ids & set(result.participant_ids):
                return result
        return None
