"""Bye allocation for odd-sized Swiss rounds."""

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

from tcgswiss.models.match_result import MatchResult, create_bye_result
from tcgswiss.models.pairing_history import PairingHistory
from tcgswiss.utils import setup_logger

logger = setup_logger(__name__)


class ByeAllocator:
    """Chooses who sits out an odd round and records the bye.

    Byes go breadth-first across the field: only participants holding the
    fewest byes in the active pool may receive one, so nobody gets a second
    bye while someone else still has none. Among eligible participants the
    lowest ranked goes first, since that is who the fold leaves unpaired.
    """

    def eligible_candidates(
        self, ranked_ids: Sequence[str], history: PairingHistory
    ) -> List[str]:
        """Bye candidates in the order they should be tried.

        Args:
            ranked_ids: Active participant ids, best ranked first
            history: Pairing history holding previous byes

        Returns:
            Eligible participant ids, lowest ranked first
        """
        if not ranked_ids:
            return []
        fewest = min(history.bye_count(pid) for pid in ranked_ids)
        candidates = [
            pid for pid in reversed(ranked_ids) if history.bye_count(pid) == fewest
        ]
        skipped = len(ranked_ids) - len(candidates)
        if skipped:
            logger.debug(
                f"{skipped} participants already hold {fewest + 1}+ byes and "
                "are not eligible"
            )
        return candidates

    def allocate(self, round_number: int, participant_id: str) -> MatchResult:
        """Record a bye for ``participant_id``: a 2-0 match win."""
        logger.info(f"Round {round_number}: bye to {participant_id}")
        return create_bye_result(round_number, participant_id)
