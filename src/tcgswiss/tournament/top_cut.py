"""Top cut selection and seeding."""

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

from typing import List, Sequence

from tcgswiss.exceptions import (
    InsufficientFieldForCutException,
    InvalidCutSizeException,
)
from tcgswiss.models.bracket import BracketMatch, TopCutBracket
from tcgswiss.models.standings import StandingsEntry
from tcgswiss.utils import setup_logger

logger = setup_logger(__name__)


def is_power_of_two(value: int) -> bool:
    return value > 0 and value & (value - 1) == 0


def bracket_order(cut_size: int) -> List[int]:
    """Seeds in bracket slot order, e.g. [1, 8, 4, 5, 2, 7, 3, 6] for 8.

    Every adjacent pair sums to ``cut_size + 1``, and seeds 1 and 2 sit in
    opposite halves, so the top seeds can only meet in the final.
    """
    order = [1]
    while len(order) < cut_size:
        size = len(order) * 2
        order = [s for seed in order for s in (seed, size + 1 - seed)]
    return order


class TopCutSelector:
    """Selects and seeds the single-elimination stage after the Swiss.

    Seeds 1..K are the best K participants still in the event, by rank. The
    first bracket round pairs seed i with seed K+1-i.
    """

    def select_top_cut(
        self, standings: Sequence[StandingsEntry], cut_size: int
    ) -> TopCutBracket:
        """Seed the top ``cut_size`` participants into a bracket.

        Args:
            standings: Final Swiss standings
            cut_size: Bracket size, a power of two (4, 8, 16, ...)

        Returns:
            TopCutBracket with seeds and first-round matches

        Raises:
            InvalidCutSizeException: If ``cut_size`` is not a power of two of
                at least 2
            InsufficientFieldForCutException: If fewer than ``cut_size``
                participants are still in the event
        """
        valid = isinstance(cut_size, int) and cut_size >= 2 and is_power_of_two(cut_size)
        if not valid:
            raise InvalidCutSizeException(
                f"Top cut size must be a power of two of at least 2, got {cut_size}"
            )

        eligible = [e for e in sorted(standings, key=lambda e: e.rank) if not e.dropped]
        if len(eligible) < cut_size:
            raise InsufficientFieldForCutException(
                f"Top {cut_size} needs {cut_size} participants, "
                f"only {len(eligible)} remain"
            )

        seeds = [entry.participant_id for entry in eligible[:cut_size]]
        slots = bracket_order(cut_size)
        matches = []
        for position, i in enumerate(range(0, cut_size, 2), start=1):
            higher, lower = sorted(slots[i : i + 2])
            matches.append(
                BracketMatch(
                    position=position,
                    higher_seed=higher,
                    lower_seed=lower,
                    higher_seed_id=seeds[higher - 1],
                    lower_seed_id=seeds[lower - 1],
                )
            )

        summary = ", ".join(f"{m.higher_seed}v{m.lower_seed}" for m in matches)
        logger.info(f"Top {cut_size} seeded: {summary}")
        return TopCutBracket(cut_size=cut_size, seeds=seeds, matches=matches)


def select_top_cut(
    standings: Sequence[StandingsEntry], cut_size: int
) -> TopCutBracket:
    """Convenience wrapper around :class:`TopCutSelector`."""
    return TopCutSelector().select_top_cut(standings, cut_size)
