"""Stateless entry points of the Swiss engine.

Each function takes everything it needs as arguments and returns new values;
nothing is kept between calls. :class:`tcgswiss.models.tournament.Tournament`
wraps these for callers who prefer a per-event object.
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

from typing import Iterable, List, Optional, Sequence

from tcgswiss.constants import DEFAULT_MAX_PAIRING_ATTEMPTS, DEFAULT_TIER
from tcgswiss.exceptions import RoundNotCompleteException, TournamentStateException
from tcgswiss.models.bracket import TopCutBracket
from tcgswiss.models.match_result import MatchResult, Outcome
from tcgswiss.models.pairing_history import PairingHistory
from tcgswiss.models.pairing_result import PairingResult
from tcgswiss.models.participant import Participant
from tcgswiss.models.round_data import Pairing
from tcgswiss.models.standings import StandingsEntry
from tcgswiss.pairing.swiss_fold import create_swiss_pairings
from tcgswiss.tournament import round_planner, standings_calculator, top_cut
from tcgswiss.tournament.result_recorder import ResultRecorder
from tcgswiss.type_hints import MaybeGameScore

__all__ = [
    "plan_rounds",
    "generate_pairings",
    "record_result",
    "compute_standings",
    "select_top_cut",
]


def plan_rounds(
    participant_count: int,
    override: Optional[int] = None,
    tier: str = DEFAULT_TIER,
) -> int:
    """Number of Swiss rounds for the field.

    Raises:
        InsufficientParticipantsException: If fewer than two participants
    """
    return round_planner.plan_rounds(participant_count, override=override, tier=tier)


def generate_pairings(
    standings: Sequence[StandingsEntry],
    history: PairingHistory,
    round_number: int,
    max_attempts: int = DEFAULT_MAX_PAIRING_ATTEMPTS,
) -> PairingResult:
    """Pair one Swiss round.

    A rematch-free pairing is always preferred. When none exists within the
    search budget the result carries forced-rematch warnings instead of an
    error.

    Raises:
        TournamentStateException: If ``history`` already holds pairings for
            ``round_number`` or a later round
        RoundNotCompleteException: If ``history`` holds nothing for the
            previous round
    """
    played = history.rounds_played
    if played and played[-1] >= round_number:
        raise TournamentStateException(
            f"Cannot pair round {round_number}: history already reaches "
            f"round {played[-1]}"
        )
    if round_number > 1 and round_number - 1 not in played:
        raise RoundNotCompleteException(
            f"Cannot pair round {round_number}: round {round_number - 1} "
            "has no pairings in the history"
        )
    return create_swiss_pairings(
        standings, history, round_number, max_attempts=max_attempts
    )


def record_result(
    match_log: Sequence[MatchResult],
    pairing: Pairing,
    outcome: Outcome,
    game_score: MaybeGameScore,
    participants: Iterable[Participant],
    round_number: int,
) -> List[MatchResult]:
    """Return a new match log with the result of ``pairing`` appended.

    Raises:
        UnknownParticipantException: If a participant is not on the roster
        DuplicateResultException: If the pairing already has a result
        InvalidResultException: If the game score contradicts the outcome
    """
    participant_ids = {p.id for p in participants}
    return ResultRecorder().record_result(
        match_log, pairing, outcome, game_score, participant_ids, round_number
    )


def compute_standings(
    participants: Sequence[Participant], match_log: Iterable[MatchResult]
) -> List[StandingsEntry]:
    """Ranked standings; a pure function of the roster and the match log."""
    return standings_calculator.compute_standings(participants, match_log)


def select_top_cut(
    standings: Sequence[StandingsEntry], cut_size: int
) -> TopCutBracket:
    """Seed the single-elimination bracket from final standings.

    Raises:
        InvalidCutSizeException: If ``cut_size`` is not a power of two
        InsufficientFieldForCutException: If too few participants remain
    """
    return top_cut.select_top_cut(standings, cut_size)
