"""Match result data class."""

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
from enum import Enum
from typing import Any, Dict, Optional

from tcgswiss.constants import (
    BYE_GAME_SCORE,
    POINTS_BYE,
    POINTS_DRAW,
    POINTS_LOSS,
    POINTS_WIN,
)
from tcgswiss.exceptions import InvalidResultException
from tcgswiss.type_hints import GameScore, MaybeGameScore


class Outcome(Enum):
    """Possible outcomes of a Swiss match."""

    A_WIN = "A_WIN"
    B_WIN = "B_WIN"
    DRAW = "DRAW"
    BYE = "BYE"


@dataclass(frozen=True)
class MatchResult:
    """Represents the result of a single match.

    Attributes
    ----------
    round_number : int
        Swiss round the match belongs to (1-indexed).
    participant_a_id : str
        ID of the first participant (the bye holder for a bye).
    participant_b_id : str or None
        ID of the second participant, ``None`` for a bye.
    outcome : Outcome
        Match outcome from participant A's point of view.
    game_score : tuple of int or None
        Games won by A and by B. Optional except for byes, which are always
        recorded 2-0.
    """

    round_number: int
    participant_a_id: str
    participant_b_id: Optional[str]
    outcome: Outcome
    game_score: MaybeGameScore = None

    def __post_init__(self) -> None:
        if self.participant_a_id == self.participant_b_id:
            raise InvalidResultException(
                f"{self.participant_a_id!r} cannot play against themselves"
            )
        validate_outcome(
            self.outcome, self.game_score, is_bye=self.participant_b_id is None
        )
        # Frozen: normalise through object.__setattr__
        if self.outcome is Outcome.BYE:
            object.__setattr__(self, "game_score", BYE_GAME_SCORE)
        elif self.game_score is not None:
            object.__setattr__(self, "game_score", tuple(self.game_score))

    @property
    def is_bye(self) -> bool:
        return self.outcome is Outcome.BYE

    @property
    def participant_ids(self) -> tuple:
        if self.participant_b_id is None:
            return (self.participant_a_id,)
        return (self.participant_a_id, self.participant_b_id)

    def involves(self, participant_id: str) -> bool:
        return participant_id in self.participant_ids

    def opponent_of(self, participant_id: str) -> Optional[str]:
        """Return the opponent of ``participant_id`` (None for a bye)."""
        if participant_id == self.participant_a_id:
            return self.participant_b_id
        if participant_id == self.participant_b_id:
            return self.participant_a_id
        raise KeyError(participant_id)

    def points_for(self, participant_id: str) -> int:
        """Match points earned by ``participant_id`` in this match."""
        if self.outcome is Outcome.BYE:
            return POINTS_BYE
        if self.outcome is Outcome.DRAW:
            return POINTS_DRAW
        is_a = participant_id == self.participant_a_id
        won = (self.outcome is Outcome.A_WIN) == is_a
        return POINTS_WIN if won else POINTS_LOSS

    def games_for(self, participant_id: str) -> Optional[GameScore]:
        """Return (games won, games lost) for ``participant_id``, if known."""
        if self.game_score is None:
            return None
        a_games, b_games = self.game_score
        if participant_id == self.participant_a_id:
            return a_games, b_games
        return b_games, a_games

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match result to dictionary."""
        return {
            "round_number": self.round_number,
            "participant_a_id": self.participant_a_id,
            "participant_b_id": self.participant_b_id,
            "outcome": self.outcome.value,
            "game_score": list(self.game_score) if self.game_score else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchResult":
        """Deserialize match result from dictionary."""
        game_score = data.get("game_score")
        return cls(
            round_number=data["round_number"],
            participant_a_id=data["participant_a_id"],
            participant_b_id=data.get("participant_b_id"),
            outcome=Outcome(data["outcome"]),
            game_score=tuple(game_score) if game_score is not None else None,
        )


def validate_outcome(
    outcome: Outcome, game_score: MaybeGameScore, is_bye: bool = False
) -> None:
    """Check that an outcome and game score agree.

    Raises:
        InvalidResultException: If the pair is inconsistent
    """
    if not isinstance(outcome, Outcome):
        raise InvalidResultException(f"Unknown outcome: {outcome!r}")

    if is_bye != (outcome is Outcome.BYE):
        raise InvalidResultException(
            "A bye pairing must be recorded as BYE and only a bye pairing can be"
        )

    if outcome is Outcome.BYE:
        if game_score is not None and tuple(game_score) != BYE_GAME_SCORE:
            raise InvalidResultException(
                f"Byes are recorded {BYE_GAME_SCORE[0]}-{BYE_GAME_SCORE[1]}, "
                f"got {game_score}"
            )
        return

    if game_score is None:
        return

    if len(game_score) != 2:
        raise InvalidResultException(f"Game score must have two entries: {game_score}")
    a_games, b_games = game_score
    if not all(isinstance(g, int) and g >= 0 for g in (a_games, b_games)):
        raise InvalidResultException(
            f"Game score entries must be non-negative integers: {game_score}"
        )

    if outcome is Outcome.A_WIN and not a_games > b_games:
        raise InvalidResultException(f"A_WIN needs A ahead on games, got {game_score}")
    if outcome is Outcome.B_WIN and not b_games > a_games:
        raise InvalidResultException(f"B_WIN needs B ahead on games, got {game_score}")
    if outcome is Outcome.DRAW and a_games != b_games:
        raise InvalidResultException(f"DRAW needs level games, got {game_score}")


def create_bye_result(round_number: int, participant_id: str) -> MatchResult:
    """Build the BYE result awarded to ``participant_id``."""
    return MatchResult(
        round_number=round_number,
        participant_a_id=participant_id,
        participant_b_id=None,
        outcome=Outcome.BYE,
        game_score=BYE_GAME_SCORE,
    )
