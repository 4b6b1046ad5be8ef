"""Swiss stage checker - validation of a played Swiss stage.

Checks the rounds of an event against the rules every Swiss stage must keep:
participant conservation, rematch avoidance, bye fairness, the percentage
floor and order independence of the standings.
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

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from tcgswiss.constants import MIN_PERCENTAGE
from tcgswiss.models.participant import Participant
from tcgswiss.models.round_data import RoundData
from tcgswiss.tournament.standings_calculator import StandingsCalculator
from tcgswiss.utils import setup_logger

logger = setup_logger(__name__)

# Float noise allowed when comparing averaged percentages
TOLERANCE = 1e-9


class CriterionStatus(Enum):
    """Status of a single check."""

    COMPLIANT = "COMPLIANT"
    VIOLATION = "VIOLATION"
    NOT_APPLICABLE = "NOT_APPLICABLE"


@dataclass
class CriterionResult:
    """Result of validating a single criterion."""

    criterion: str
    status: CriterionStatus
    description: str = ""
    details: Dict[str, object] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return self.status != CriterionStatus.VIOLATION


@dataclass
class ValidationReport:
    """Complete validation report for a Swiss stage."""

    total_criteria: int
    compliant_count: int
    violations: List[CriterionResult]
    overall_status: CriterionStatus
    summary: str
    criteria_results: List[CriterionResult] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.overall_status != CriterionStatus.VIOLATION

    @property
    def compliance_percentage(self) -> float:
        """Calculate compliance percentage."""
        if self.total_criteria == 0:
            return 100.0
        return (self.compliant_count / self.total_criteria) * 100.0


def _compliant(criterion: str, description: str) -> CriterionResult:
    return CriterionResult(
        criterion=criterion, status=CriterionStatus.COMPLIANT, description=description
    )


def _violation(criterion: str, description: str, **details) -> CriterionResult:
    return CriterionResult(
        criterion=criterion,
        status=CriterionStatus.VIOLATION,
        description=description,
        details=details,
    )


class SwissStageChecker:
    """Runs every check over a roster and its rounds."""

    def __init__(self) -> None:
        self.standings_calculator = StandingsCalculator()

    def check_conservation(
        self, participants: Sequence[Participant], rounds: Sequence[RoundData]
    ) -> CriterionResult:
        """Every active participant is paired or receives the bye, exactly once.

        Participants dropped by the end of the event may be missing from any
        round; everyone else must appear in every round.
        """
        still_active = {p.id for p in participants if not p.dropped}
        known = {p.id for p in participants}
        for round_data in rounds:
            seen = Counter(
                pid for pairing in round_data.pairings for pid in pairing.participant_ids
            )
            twice = sorted(pid for pid, count in seen.items() if count > 1)
            if twice:
                return _violation(
                    "conservation",
                    f"Round {round_data.round_number}: paired more than once: "
                    f"{', '.join(twice)}",
                    round=round_data.round_number,
                    participants=twice,
                )
            unknown = sorted(set(seen) - known)
            if unknown:
                return _violation(
                    "conservation",
                    f"Round {round_data.round_number}: unknown participants "
                    f"{', '.join(unknown)}",
                    round=round_data.round_number,
                    participants=unknown,
                )
            missing = sorted(still_active - set(seen))
            if missing:
                return _violation(
                    "conservation",
                    f"Round {round_data.round_number}: not paired: "
                    f"{', '.join(missing)}",
                    round=round_data.round_number,
                    participants=missing,
                )
            byes = sum(1 for pairing in round_data.pairings if pairing.is_bye)
            if byes > 1 or (byes == 1) != (len(seen) % 2 == 1):
                return _violation(
                    "conservation",
                    f"Round {round_data.round_number}: {byes} byes for "
                    f"{len(seen)} participants",
                    round=round_data.round_number,
                )
        return _compliant("conservation", "Every participant accounted for")

    def check_no_rematch(self, rounds: Sequence[RoundData]) -> CriterionResult:
        """No pair meets twice unless the round recorded a forced rematch."""
        met: Dict[frozenset, int] = {}
        for round_data in rounds:
            forced = {warning.pair for warning in round_data.forced_rematches}
            for pairing in round_data.pairings:
                if pairing.is_bye:
                    continue
                pair = frozenset(pairing.participant_ids)
                if pair in met and pair not in forced:
                    return _violation(
                        "no_rematch",
                        f"Round {round_data.round_number}: "
                        f"{' and '.join(sorted(pair))} already met in round "
                        f"{met[pair]}",
                        round=round_data.round_number,
                        previous_round=met[pair],
                    )
                met[pair] = round_data.round_number
        return _compliant("no_rematch", "No unannounced rematches")

    def check_bye_fairness(self, rounds: Sequence[RoundData]) -> CriterionResult:
        """A bye only goes to someone holding the fewest byes in the round."""
        byes: Counter = Counter()
        bye_rounds = 0
        for round_data in rounds:
            bye_id = round_data.bye_participant_id
            if bye_id is not None:
                bye_rounds += 1
                present = [
                    pid for pairing in round_data.pairings for pid in pairing.participant_ids
                ]
                fewest = min(byes[pid] for pid in present)
                if byes[bye_id] > fewest:
                    return _violation(
                        "bye_fairness",
                        f"Round {round_data.round_number}: {bye_id} received bye "
                        f"number {byes[bye_id] + 1} while others had {fewest}",
                        round=round_data.round_number,
                        participant_id=bye_id,
                    )
                byes[bye_id] += 1
        if not bye_rounds:
            return CriterionResult(
                criterion="bye_fairness",
                status=CriterionStatus.NOT_APPLICABLE,
                description="No byes were assigned",
            )
        return _compliant("bye_fairness", f"{bye_rounds} byes spread fairly")

    def check_percentage_floor(
        self, participants: Sequence[Participant], rounds: Sequence[RoundData]
    ) -> CriterionResult:
        """Every percentage is at least one third once a match is recorded."""
        log = [result for round_data in rounds for result in round_data.results]
        standings = self.standings_calculator.compute_standings(participants, log)
        for entry in standings:
            if not entry.rounds_played:
                continue
            lowest = min(entry.match_win_pct, entry.omw_pct, entry.gw_pct, entry.ogw_pct)
            if lowest < MIN_PERCENTAGE - TOLERANCE:
                return _violation(
                    "percentage_floor",
                    f"{entry.participant_id} has a percentage of {lowest:.4f}",
                    participant_id=entry.participant_id,
                )
        return _compliant("percentage_floor", "All percentages at or above 1/3")

    def check_order_independence(
        self, participants: Sequence[Participant], rounds: Sequence[RoundData]
    ) -> CriterionResult:
        """Standings do not depend on the order results were recorded in."""
        log = [result for round_data in rounds for result in round_data.results]
        forward = self.standings_calculator.compute_standings(participants, log)
        backward = self.standings_calculator.compute_standings(
            participants, list(reversed(log))
        )
        if forward != backward:
            return _violation(
                "order_independence",
                "Standings changed when the match log was reversed",
            )
        return _compliant("order_independence", "Standings are order independent")

    def check_rematch_feasibility(
        self, participant_count: int, num_rounds: int
    ) -> Optional[CriterionResult]:
        """Flag events with more rounds than rematch-free pairings allow.

        With N participants there are N*(N-1)/2 distinct pairs, and R rounds
        need R * floor(N/2) of them.

        Returns:
            CriterionResult if rematches cannot be avoided, None otherwise.
        """
        if participant_count < 2 or num_rounds < 1:
            return None
        distinct_pairs = participant_count * (participant_count - 1) // 2
        needed = num_rounds * (participant_count // 2)
        if needed <= distinct_pairs:
            return None
        return CriterionResult(
            criterion="rematch_feasibility",
            status=CriterionStatus.NOT_APPLICABLE,
            description=(
                f"{participant_count} participants over {num_rounds} rounds need "
                f"{needed} pairings but only {distinct_pairs} distinct pairs exist"
            ),
            details={"min_rematches": needed - distinct_pairs},
        )

    def validate_stage(
        self, participants: Sequence[Participant], rounds: Sequence[RoundData]
    ) -> ValidationReport:
        """Run every check and collect a report."""
        logger.info(
            f"Validating Swiss stage: {len(participants)} participants, "
            f"{len(rounds)} rounds"
        )
        results = [
            self.check_conservation(participants, rounds),
            self.check_no_rematch(rounds),
            self.check_bye_fairness(rounds),
            self.check_percentage_floor(participants, rounds),
            self.check_order_independence(participants, rounds),
        ]
        feasibility = self.check_rematch_feasibility(len(participants), len(rounds))
        if feasibility is not None:
            results.append(feasibility)

        violations = [r for r in results if r.status == CriterionStatus.VIOLATION]
        compliant_count = sum(
            1 for r in results if r.status == CriterionStatus.COMPLIANT
        )
        overall_status = (
            CriterionStatus.VIOLATION if violations else CriterionStatus.COMPLIANT
        )
        if violations:
            summary = f"{len(violations)} of {len(results)} checks failed"
            for violation in violations:
                logger.warning(f"{violation.criterion}: {violation.description}")
        else:
            summary = f"All {compliant_count} applicable checks passed"
        logger.info(f"Validation complete: {summary}")

        return ValidationReport(
            total_criteria=len(results),
            compliant_count=compliant_count,
            violations=violations,
            overall_status=overall_status,
            summary=summary,
            criteria_results=results,
        )


def validate_tournament(tournament) -> ValidationReport:
    """Validate the Swiss stage of a :class:`~tcgswiss.models.tournament.Tournament`."""
    return SwissStageChecker().validate_stage(
        tournament.participants, tournament.rounds
    )
