"""Swiss round planning.

Works out how many Swiss rounds a field needs and which top cut it should
play into.
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

from dataclasses import dataclass
from typing import Optional

from tcgswiss.constants import (
    DEFAULT_TIER,
    EXTRA_ROUNDS_BY_TIER,
    MIN_ROUNDS,
    MIN_ROUNDS_FIELD,
    TIER_3,
    TIER_4,
    TIERS,
    TOP_CUT_TABLE_TIER_1_2,
    TOP_CUT_TABLE_TIER_3_4,
)
from tcgswiss.exceptions import (
    InsufficientParticipantsException,
    InvalidConfigurationException,
)


@dataclass(frozen=True)
class RoundPlan:
    """Number of Swiss rounds and recommended top cut for an event."""

    rounds: int
    top_cut: int


def _check_tier(tier: str) -> None:
    if tier not in TIERS:
        raise InvalidConfigurationException(f"Unknown tier: {tier!r}")


def plan_rounds(
    participant_count: int,
    override: Optional[int] = None,
    tier: str = DEFAULT_TIER,
) -> int:
    """Number of Swiss rounds for a field of ``participant_count``.

    The base count is the smallest R with 2**R >= N, never below three rounds
    once four or more participants are registered. Tiers 3 and 4 add their
    extra rounds on top.

    Args:
        participant_count: Registered participants
        override: Organizer-chosen round count; authoritative when given
        tier: Event tier

    Returns:
        The number of Swiss rounds

    Raises:
        InsufficientParticipantsException: If fewer than two participants
        InvalidConfigurationException: If ``override`` is below 1 or the tier
            is unknown
    """
    if participant_count < 2:
        raise InsufficientParticipantsException(
            f"A Swiss event needs at least 2 participants, got {participant_count}"
        )

    if override is not None:
        if override < 1:
            raise InvalidConfigurationException(
                f"Round count override must be at least 1, got {override}"
            )
        return override

    _check_tier(tier)

    # Smallest R with 2**R >= N
    rounds = (participant_count - 1).bit_length()
    if participant_count >= MIN_ROUNDS_FIELD:
        rounds = max(rounds, MIN_ROUNDS)
    return rounds + EXTRA_ROUNDS_BY_TIER[tier]


def recommended_top_cut(participant_count: int, tier: str = DEFAULT_TIER) -> int:
    """Recommended top cut size for the field, 0 when no cut is played."""
    _check_tier(tier)
    table = (
        TOP_CUT_TABLE_TIER_3_4 if tier in (TIER_3, TIER_4) else TOP_CUT_TABLE_TIER_1_2
    )
    for minimum, maximum, cut in table:
        if minimum <= participant_count <= maximum:
            return cut
    return 0


def plan_event(
    participant_count: int,
    tier: str = DEFAULT_TIER,
    override: Optional[int] = None,
) -> RoundPlan:
    """Plan both the Swiss rounds and the top cut for an event."""
    return RoundPlan(
        rounds=plan_rounds(participant_count, override=override, tier=tier),
        top_cut=recommended_top_cut(participant_count, tier),
    )
