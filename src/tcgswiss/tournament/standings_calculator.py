"""Standings and tiebreak calculation for tournaments.

This module turns a match log into ranked standings using the trading card
game tiebreak chain: match points, then OMW%, GW% and OGW%, then initial seed.
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

import math
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional

from tcgswiss.constants import MIN_PERCENTAGE, POINTS_WIN
from tcgswiss.exceptions import UnknownParticipantException
from tcgswiss.models.match_result import MatchResult, Outcome
from tcgswiss.models.participant import Participant, index_roster
from tcgswiss.models.standings import StandingsEntry
from tcgswiss.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class _ParticipantTally:
    """Raw counts for one participant, read straight off the match log."""

    match_points: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    byes: int = 0
    games_won: int = 0
    games_played: int = 0
    opponent_ids: List[str] = field(default_factory=list)

    @property
    def rounds_played(self) -> int:
        return self.wins + self.losses + self.draws


def _floored(value: float) -> float:
    return max(value, MIN_PERCENTAGE)


def _mean(values: List[float]) -> float:
    # fsum is exact, so the order the log lists opponents in cannot matter
    if not values:
        return MIN_PERCENTAGE
    return math.fsum(values) / len(values)


class StandingsCalculator:
    """Calculates ranked standings from a match log.

    Percentages are computed in two flat passes. The first pass derives every
    participant's own match-win and game-win percentages from raw results.
    The second pass averages the cached values of each participant's
    opponents. Nothing reads another participant's opponent averages, so
    there is no recursion.

    - Match win % = match points / (rounds played x 3), floored at 1/3
    - OMW% = mean of opponents' match win %, byes excluded
    - GW% = games won / games played, floored at 1/3; a bye counts 2-0
    - OGW% = mean of opponents' GW%
    """

    def compute_standings(
        self,
        participants: Iterable[Participant],
        results: Iterable[MatchResult],
    ) -> List[StandingsEntry]:
        """Rank every participant on the roster.

        Args:
            participants: The tournament roster
            results: Every recorded match result

        Returns:
            Standings entries, best first, ranked 1..N

        Raises:
            UnknownParticipantException: If a result names a participant that
                is not on the roster
        """
        roster = index_roster(participants)
        tallies = self._tally(roster, results)

        # Pass 1: own percentages
        match_win = {
            pid: self._match_win_pct(tally) for pid, tally in tallies.items()
        }
        game_win = {pid: self._game_win_pct(tally) for pid, tally in tallies.items()}

        # Pass 2: opponent averages over the cache
        unranked = []
        for pid, tally in tallies.items():
            participant = roster[pid]
            omw = _mean([match_win[opp] for opp in tally.opponent_ids])
            ogw = _mean([game_win[opp] for opp in tally.opponent_ids])
            unranked.append(
                StandingsEntry(
                    participant_id=pid,
                    name=participant.name,
                    seed=participant.seed,
                    match_points=tally.match_points,
                    wins=tally.wins,
                    losses=tally.losses,
                    draws=tally.draws,
                    byes=tally.byes,
                    match_win_pct=match_win[pid],
                    omw_pct=omw,
                    gw_pct=game_win[pid],
                    ogw_pct=ogw,
                    rank=0,
                    dropped=participant.dropped,
                )
            )

        ordered = sorted(unranked, key=StandingsEntry.sort_key)
        standings = [
            _with_rank(entry, rank) for rank, entry in enumerate(ordered, start=1)
        ]
        logger.debug(f"Computed standings for {len(standings)} participants")
        return standings

    def _tally(
        self, roster: Dict[str, Participant], results: Iterable[MatchResult]
    ) -> Dict[str, _ParticipantTally]:
        """Accumulate raw counts for every participant."""
        tallies = {pid: _ParticipantTally() for pid in roster}

        for result in results:
            for pid in result.participant_ids:
                if pid not in tallies:
                    logger.error(
                        f"Round {result.round_number} result names unknown "
                        f"participant {pid}"
                    )
                    raise UnknownParticipantException(
                        f"Participant {pid!r} is not on the roster"
                    )

            for pid in result.participant_ids:
                tally = tallies[pid]
                points = result.points_for(pid)
                tally.match_points += points

                if result.outcome is Outcome.BYE:
                    tally.byes += 1
                    tally.wins += 1
                elif result.outcome is Outcome.DRAW:
                    tally.draws += 1
                elif points == POINTS_WIN:
                    tally.wins += 1
                else:
                    tally.losses += 1

                games = result.games_for(pid)
                if games is not None:
                    won, lost = games
                    tally.games_won += won
                    tally.games_played += won + lost

                opponent = result.opponent_of(pid)
                if opponent is not None:
                    tally.opponent_ids.append(opponent)

        return tallies

    def _match_win_pct(self, tally: _ParticipantTally) -> float:
        if tally.rounds_played == 0:
            return MIN_PERCENTAGE
        return _floored(tally.match_points / (tally.rounds_played * POINTS_WIN))

    def _game_win_pct(self, tally: _ParticipantTally) -> float:
        if tally.games_played == 0:
            return MIN_PERCENTAGE
        return _floored(tally.games_won / tally.games_played)


def _with_rank(entry: StandingsEntry, rank: int) -> StandingsEntry:
    return replace(entry, rank=rank)


def compute_standings(
    participants: Iterable[Participant], results: Iterable[MatchResult]
) -> List[StandingsEntry]:
    """Convenience wrapper around :class:`StandingsCalculator`."""
    return StandingsCalculator().compute_standings(participants, results)


def find_entry(
    standings: Iterable[StandingsEntry], participant_id: str
) -> Optional[StandingsEntry]:
    """Return the standings line for ``participant_id``, if present."""
    for entry in standings:
        if entry.participant_id == participant_id:
            return entry
    return None
