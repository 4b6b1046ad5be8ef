"""Random event simulator - internal testing system for the Swiss engine.

This module plays out complete events with simulated results so the pairing
engine, standings and top cut can be exercised at any field size.
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
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from tcgswiss.constants import DEFAULT_MAX_PAIRING_ATTEMPTS, DEFAULT_TIER
from tcgswiss.exceptions import TopCutException
from tcgswiss.models.match_result import Outcome
from tcgswiss.models.participant import Participant, create_participant
from tcgswiss.models.round_data import Pairing
from tcgswiss.models.tournament import Tournament
from tcgswiss.models.tournament_config import TournamentConfig
from tcgswiss.type_hints import MaybeGameScore
from tcgswiss.utils import setup_logger
from tcgswiss.validation.stage_checker import SwissStageChecker

logger = setup_logger(__name__)


class ResultPattern(Enum):
    """Result generation patterns for simulated events."""

    REALISTIC = "realistic"
    BALANCED = "balanced"
    PREDICTABLE = "predictable"
    RANDOM = "random"


@dataclass
class SimulationConfig:
    """Configuration for the random event generator."""

    num_participants: int
    num_rounds: Optional[int] = None
    tier: str = DEFAULT_TIER
    result_pattern: ResultPattern = ResultPattern.REALISTIC
    seed: Optional[int] = None
    strength_range: Tuple[int, int] = (1000, 2000)
    draw_percentage: int = 5
    drop_percentage: float = 0.0
    unreported_score_percentage: float = 0.0
    max_pairing_attempts: int = DEFAULT_MAX_PAIRING_ATTEMPTS
    validate: bool = True


class ParticipantFactory:
    """Factory for simulated rosters with hidden playing strengths."""

    def __init__(self, config: SimulationConfig):
        self.config = config
        self.random = random.Random(config.seed)

    def create_participants(self) -> Tuple[List[Participant], Dict[str, int]]:
        """Create the roster, seeded by registration order, and its strengths."""
        low, high = self.config.strength_range
        participants = []
        strengths = {}
        for seed in range(1, self.config.num_participants + 1):
            participant = create_participant(
                f"Player-{seed:03d}", seed, participant_id=f"p{seed:03d}"
            )
            participants.append(participant)
            strengths[participant.id] = self.random.randint(low, high)

        logger.info(f"Created {len(participants)} simulated participants")
        return participants, strengths


class ResultSimulator:
    """Simulates best-of-three match results."""

    def __init__(self, config: SimulationConfig):
        self.config = config
        self.random = random.Random(
            None if config.seed is None else config.seed + 1
        )

    def simulate_result(
        self, pairing: Pairing, strengths: Dict[str, int]
    ) -> Tuple[Outcome, MaybeGameScore]:
        """Return the outcome and game score for one table."""
        pattern = self.config.result_pattern
        if pattern == ResultPattern.RANDOM:
            outcome = self.random.choice([Outcome.A_WIN, Outcome.B_WIN, Outcome.DRAW])
        else:
            a = strengths[pairing.participant_a_id]
            b = strengths[pairing.participant_b_id]
            outcome = self._rated_result(a, b, pattern)
        return outcome, self._game_score(outcome)

    def _rated_result(self, a: int, b: int, pattern: ResultPattern) -> Outcome:
        if pattern == ResultPattern.BALANCED:
            expected = 0.5
        elif pattern == ResultPattern.PREDICTABLE:
            expected = 0.95 if a > b else 0.05 if a < b else 0.5
        else:
            expected = 1.0 / (1.0 + 10 ** ((b - a) / 400.0))

        draw_probability = self.config.draw_percentage / 100.0
        value = self.random.random()
        if value < draw_probability:
            return Outcome.DRAW
        threshold = draw_probability + (1.0 - draw_probability) * expected
        return Outcome.A_WIN if value < threshold else Outcome.B_WIN

    def _game_score(self, outcome: Outcome) -> MaybeGameScore:
        if self.random.random() * 100 < self.config.unreported_score_percentage:
            return None
        if outcome == Outcome.DRAW:
            return self.random.choice([(1, 1), (0, 0)])
        loser_games = self.random.choice([0, 1])
        if outcome == Outcome.A_WIN:
            return 2, loser_games
        return loser_games, 2


class RandomTournamentGenerator:
    """Plays complete simulated events through the Tournament API."""

    def __init__(self, config: SimulationConfig):
        self.config = config
        self.participant_factory = ParticipantFactory(config)
        self.result_simulator = ResultSimulator(config)
        self.random = random.Random(None if config.seed is None else config.seed + 2)

    def generate_complete_tournament(self) -> Dict[str, Any]:
        """Play every Swiss round, then seed the top cut when one applies.

        Returns:
            Dictionary with the tournament, final standings, the bracket (or
            None) and the validation report (or None)
        """
        participants, strengths = self.participant_factory.create_participants()
        tournament = Tournament(
            TournamentConfig(
                name=f"Simulated event ({self.config.num_participants})",
                tier=self.config.tier,
                num_rounds=self.config.num_rounds,
                max_pairing_attempts=self.config.max_pairing_attempts,
            ),
            participants,
        )
        logger.info(
            f"Simulating {len(participants)} participants over "
            f"{tournament.num_rounds} rounds"
        )

        while tournament.can_start_next_round():
            round_data = tournament.create_next_round()
            for pairing in round_data.pending_pairings:
                outcome, game_score = self.result_simulator.simulate_result(
                    pairing, strengths
                )
                tournament.record_result(
                    round_data.round_number, pairing.table, outcome, game_score
                )
            self._simulate_drops(tournament)

        standings = tournament.get_standings()
        bracket = None
        try:
            bracket = tournament.select_top_cut()
        except TopCutException as e:
            logger.info(f"No top cut: {e}")

        report = None
        if self.config.validate:
            report = SwissStageChecker().validate_stage(
                tournament.participants, tournament.rounds
            )

        logger.info("Simulation complete")
        return {
            "config": self.config,
            "tournament": tournament,
            "standings": standings,
            "top_cut": bracket,
            "validation": report,
        }

    def _simulate_drops(self, tournament: Tournament) -> None:
        if self.config.drop_percentage <= 0:
            return
        active = [p for p in tournament.participants if not p.dropped]
        for participant in active:
            # Keep enough of the field to pair the next round
            if len(active) <= 2:
                return
            if self.random.random() * 100 < self.config.drop_percentage:
                tournament.drop_participant(participant.id)
                active = [p for p in active if p.id != participant.id]

    def export_json_format(self, tournament_data: Dict[str, Any]) -> str:
        tournament: Tournament = tournament_data["tournament"]
        bracket = tournament_data.get("top_cut")
        report = tournament_data.get("validation")

        export_data = {
            "simulation_config": {
                "num_participants": self.config.num_participants,
                "num_rounds": tournament.num_rounds,
                "tier": self.config.tier,
                "result_pattern": self.config.result_pattern.value,
                "seed": self.config.seed,
                "draw_percentage": self.config.draw_percentage,
                "drop_percentage": self.config.drop_percentage,
            },
            "tournament": tournament.to_dict(),
            "standings": [entry.to_dict() for entry in tournament_data["standings"]],
            "top_cut": bracket.to_dict() if bracket else None,
        }
        if report is not None:
            export_data["validation"] = {
                "summary": report.summary,
                "compliance_percentage": report.compliance_percentage,
                "violations": [v.criterion for v in report.violations],
            }
        return json.dumps(export_data, indent=2)


def create_small_event(
    num_participants: int = 9, seed: Optional[int] = None
) -> RandomTournamentGenerator:
    """Create small event for testing."""
    return RandomTournamentGenerator(
        SimulationConfig(num_participants=num_participants, seed=seed)
    )


def create_large_event(
    num_participants: int = 128, seed: Optional[int] = None
) -> RandomTournamentGenerator:
    """Create large event for performance testing."""
    return RandomTournamentGenerator(
        SimulationConfig(
            num_participants=num_participants,
            seed=seed,
            drop_percentage=2.0,
        )
    )
