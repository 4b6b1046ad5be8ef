"""Swiss fold pairing with rematch avoidance."""

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
from itertools import product
from typing import List, Optional, Sequence, Set, Tuple

from tcgswiss.constants import DEFAULT_MAX_PAIRING_ATTEMPTS
from tcgswiss.exceptions import (
    InsufficientParticipantsException,
    PairingImpossibleException,
    TournamentStateException,
)
from tcgswiss.models.pairing_history import PairingHistory
from tcgswiss.models.pairing_result import PairingResult
from tcgswiss.models.round_data import Pairing, RematchForced
from tcgswiss.models.standings import StandingsEntry
from tcgswiss.pairing.bye_allocator import ByeAllocator
from tcgswiss.utils import setup_logger

logger = setup_logger(__name__)

EntryPair = Tuple[StandingsEntry, StandingsEntry]


@dataclass
class _SearchFrame:
    """One level of the backtracking stack."""

    unpaired: Tuple[StandingsEntry, ...]
    candidates: List[int]
    next_index: int = 0


@dataclass
class _SearchBudget:
    """Opponent trials left, shared by consecutive searches."""

    remaining: int

    @property
    def exhausted(self) -> bool:
        return self.remaining <= 0

    def spend(self) -> None:
        if self.exhausted:
            raise PairingImpossibleException("Pairing search budget used up")
        self.remaining -= 1


def _pair_key(a: StandingsEntry, b: StandingsEntry) -> frozenset:
    return frozenset({a.participant_id, b.participant_id})


def _candidate_order(unpaired: Sequence[StandingsEntry], fold: bool) -> List[int]:
    """Opponents for ``unpaired[0]``, most preferred first (indices).

    Without ``fold`` (round 1) the next participant in seed order comes
    first. With ``fold`` the head's bracket is its own score group, or the
    next group down if the head is the last of its group. An odd bracket
    pushes its lowest member down. The head prefers the participant halfway
    down the folded bracket, then the rest of the bottom half, then the top
    half upwards, then the pushed-down member, then lower brackets in rank
    order.
    """
    count = len(unpaired)
    if not fold:
        return list(range(1, count))

    bracket_points = unpaired[1].match_points
    bracket_end = 1
    while bracket_end < count and unpaired[bracket_end].match_points == bracket_points:
        bracket_end += 1

    folded_end = bracket_end
    pushed_down: Optional[int] = None
    if bracket_end % 2 == 1:
        folded_end = bracket_end - 1
        pushed_down = folded_end

    half = folded_end // 2
    order = list(range(half, folded_end)) + list(range(half - 1, 0, -1))
    if pushed_down is not None:
        order.append(pushed_down)
    order.extend(range(bracket_end, count))
    return order


def _check_everyone_has_an_opponent(
    pool: Sequence[StandingsEntry], forbidden: Set[frozenset]
) -> None:
    for entry in pool:
        if all(
            _pair_key(entry, other) in forbidden for other in pool if other is not entry
        ):
            raise PairingImpossibleException(
                f"{entry.participant_id} has already played everyone in the pool"
            )


def _search_pairings(
    pool: Sequence[StandingsEntry],
    forbidden: Set[frozenset],
    fold: bool,
    budget: _SearchBudget,
    relaxable: Set[frozenset] = frozenset(),
    max_relaxed: int = 0,
) -> List[EntryPair]:
    """Bounded depth-first search for a pairing that avoids ``forbidden``.

    The search walks an explicit stack; each frame pairs the highest ranked
    unpaired participant, trying opponents in :func:`_candidate_order`. The
    first complete pairing found is the most preferred one.

    Pairs in ``relaxable`` are tried after every other opponent of a frame,
    and at most ``max_relaxed`` of them may appear in the result.

    Raises:
        PairingImpossibleException: If no pairing exists or the budget is
            used up
    """
    if not pool:
        return []
    _check_everyone_has_an_opponent(pool, forbidden)

    def candidates(unpaired: Sequence[StandingsEntry]) -> List[int]:
        order = _candidate_order(unpaired, fold)
        if not relaxable:
            return order
        head = unpaired[0]
        fresh = [i for i in order if _pair_key(head, unpaired[i]) not in relaxable]
        return fresh + [i for i in order if _pair_key(head, unpaired[i]) in relaxable]

    pairs: List[EntryPair] = []
    relaxed_used = 0
    stack = [_SearchFrame(tuple(pool), candidates(pool))]

    while stack:
        frame = stack[-1]
        if frame.next_index >= len(frame.candidates):
            stack.pop()
            if pairs and _pair_key(*pairs.pop()) in relaxable:
                relaxed_used -= 1
            continue

        budget.spend()
        opponent_index = frame.candidates[frame.next_index]
        frame.next_index += 1
        head = frame.unpaired[0]
        opponent = frame.unpaired[opponent_index]
        key = _pair_key(head, opponent)
        if key in forbidden:
            continue
        if key in relaxable:
            if relaxed_used >= max_relaxed:
                continue
            relaxed_used += 1

        remaining = tuple(
            entry
            for i, entry in enumerate(frame.unpaired)
            if i != 0 and i != opponent_index
        )
        pairs.append((head, opponent))
        if not remaining:
            logger.debug(f"Pairing found with {relaxed_used} repeated pairs")
            return list(pairs)
        stack.append(_SearchFrame(remaining, candidates(remaining)))

    raise PairingImpossibleException("Every arrangement within the rematch limit was exhausted")


class SwissPairingEngine:
    """Produces one Swiss round from the current standings.

    Round 1 pairs neighbours in seed order (1v2, 3v4, ...). Later rounds use
    the fold inside each score group (top half against bottom half), with a
    bounded backtracking search to avoid rematches. When no rematch-free
    pairing is found the engine relaxes the oldest meetings first and records
    a :class:`RematchForced` warning instead of failing the round.
    """

    def __init__(
        self,
        max_attempts: int = DEFAULT_MAX_PAIRING_ATTEMPTS,
        bye_allocator: Optional[ByeAllocator] = None,
    ) -> None:
        self.max_attempts = max_attempts
        self.bye_allocator = bye_allocator or ByeAllocator()

    def create_pairings(
        self,
        standings: Sequence[StandingsEntry],
        history: PairingHistory,
        round_number: int,
    ) -> PairingResult:
        """Pair every active participant for ``round_number``.

        Args:
            standings: Current standings (any order; ranks decide)
            history: Pairings and byes of earlier rounds
            round_number: The round being paired (1-indexed)

        Returns:
            PairingResult holding the tables, the bye and any forced rematches

        Raises:
            InsufficientParticipantsException: If fewer than two participants
                are still active
            TournamentStateException: If ``round_number`` is below 1
        """
        if round_number < 1:
            raise TournamentStateException(
                f"Round numbers start at 1, got {round_number}"
            )

        active = [e for e in sorted(standings, key=lambda e: e.rank) if not e.dropped]
        if len(active) < 2:
            raise InsufficientParticipantsException(
                f"Round {round_number} needs at least 2 active participants, "
                f"got {len(active)}"
            )

        fold = round_number > 1
        previous = history.previous_matches
        logger.info(
            f"Pairing round {round_number} for {len(active)} active participants"
        )

        if len(active) % 2 == 0:
            bye_candidates: List[Optional[str]] = [None]
        else:
            bye_candidates = list(
                self.bye_allocator.eligible_candidates(
                    [e.participant_id for e in active], history
                )
            )

        for bye_id in bye_candidates:
            pool = [e for e in active if e.participant_id != bye_id]
            try:
                pairs = _search_pairings(
                    pool, previous, fold, _SearchBudget(self.max_attempts)
                )
            except PairingImpossibleException as e:
                logger.debug(f"Round {round_number}, bye {bye_id}: {e}")
                continue
            return self._build_result(round_number, pairs, bye_id, [])

        bye_id = bye_candidates[0]
        pool = [e for e in active if e.participant_id != bye_id]
        pairs = self._force_pairings(pool, history, fold)
        forced = [
            RematchForced(
                round_number=round_number,
                pair=_pair_key(a, b),
                previous_round=history.last_played_round(
                    a.participant_id, b.participant_id
                ),
            )
            for a, b in pairs
            if _pair_key(a, b) in previous
        ]
        for warning in forced:
            logger.warning(
                f"Round {round_number}: rematch forced between "
                f"{' and '.join(sorted(warning.pair))} "
                f"(last met in round {warning.previous_round})"
            )
        return self._build_result(round_number, pairs, bye_id, forced)

    def _force_pairings(
        self,
        pool: Sequence[StandingsEntry],
        history: PairingHistory,
        fold: bool,
    ) -> List[EntryPair]:
        """Pair the pool with as few rematches as possible.

        For each rematch count, meetings from the oldest round are allowed
        again first, then those of the next round, and so on. All of these
        searches share one budget; once it is spent the most preferred
        arrangement is taken with nothing forbidden.
        """
        previous = history.previous_matches
        budget = _SearchBudget(self.max_attempts)
        limits = product(range(1, len(pool) // 2 + 1), history.rounds_played)
        for max_relaxed, cutoff in limits:
            # Meetings up to and including ``cutoff`` may repeat
            forbidden = history.played_since(cutoff + 1)
            relaxable = previous - forbidden
            if not relaxable:
                continue
            try:
                return _search_pairings(
                    pool, forbidden, fold, budget, relaxable, max_relaxed
                )
            except PairingImpossibleException:
                if budget.exhausted:
                    logger.warning(
                        f"Pairing budget of {self.max_attempts} attempts used up "
                        f"while limiting rematches"
                    )
                    break
        # Nothing forbidden and no limit: the first fresh opponent, else the
        # first candidate, is accepted at every level
        return _search_pairings(
            pool,
            set(),
            fold,
            _SearchBudget(max(self.max_attempts, len(pool))),
            previous,
            len(pool) // 2,
        )

    def _build_result(
        self,
        round_number: int,
        pairs: List[EntryPair],
        bye_id: Optional[str],
        forced: List[RematchForced],
    ) -> PairingResult:
        pairings = [
            Pairing(
                table=table,
                participant_a_id=a.participant_id,
                participant_b_id=b.participant_id,
            )
            for table, (a, b) in enumerate(pairs, start=1)
        ]
        bye_result = None
        if bye_id is not None:
            pairings.append(Pairing(table=0, participant_a_id=bye_id))
            bye_result = self.bye_allocator.allocate(round_number, bye_id)

        return PairingResult(
            round_number=round_number,
            pairings=pairings,
            bye_participant_id=bye_id,
            bye_result=bye_result,
            forced_rematches=forced,
        )


def create_swiss_pairings(
    standings: Sequence[StandingsEntry],
    history: PairingHistory,
    round_number: int,
    max_attempts: int = DEFAULT_MAX_PAIRING_ATTEMPTS,
) -> PairingResult:
    """Pair one Swiss round. See :class:`SwissPairingEngine`."""
    engine = SwissPairingEngine(max_attempts=max_attempts)
    return engine.create_pairings(standings, history, round_number)
