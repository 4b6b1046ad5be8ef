import random

import pytest

from tcgswiss.constants import MIN_PERCENTAGE
from tcgswiss.exceptions import (
    DuplicateParticipantException,
    UnknownParticipantException,
)
from tcgswiss.models.match_result import MatchResult, Outcome, create_bye_result
from tcgswiss.models.participant import create_participant
from tcgswiss.tournament.standings_calculator import (
    StandingsCalculator,
    compute_standings,
    find_entry,
)


def _roster(count):
    return [
        create_participant(f"Player {seed}", seed, participant_id=f"p{seed}")
        for seed in range(1, count + 1)
    ]


def _entry(standings, participant_id):
    return find_entry(standings, participant_id)


def _two_round_log():
    return [
        MatchResult(1, "p1", "p2", Outcome.A_WIN, (2, 1)),
        MatchResult(1, "p3", "p4", Outcome.A_WIN, (2, 0)),
        MatchResult(2, "p1", "p3", Outcome.A_WIN, (2, 0)),
        MatchResult(2, "p4", "p2", Outcome.B_WIN, (1, 2)),
    ]


def test_empty_log_ranks_by_seed_with_floored_percentages():
    standings = compute_standings(_roster(4), [])

    assert [e.participant_id for e in standings] == ["p1", "p2", "p3", "p4"]
    assert [e.rank for e in standings] == [1, 2, 3, 4]
    for entry in standings:
        assert entry.match_points == 0
        assert entry.omw_pct == MIN_PERCENTAGE
        assert entry.gw_pct == MIN_PERCENTAGE
        assert entry.ogw_pct == MIN_PERCENTAGE


def test_tiebreakers_are_computed_from_opponents():
    standings = compute_standings(_roster(4), _two_round_log())

    p1 = _entry(standings, "p1")
    assert p1.match_points == 6
    assert p1.record == "2-0-0"
    assert p1.match_win_pct == pytest.approx(1.0)
    assert p1.gw_pct == pytest.approx(0.8)
    assert p1.omw_pct == pytest.approx(0.5)
    assert p1.ogw_pct == pytest.approx(0.5)

    p2 = _entry(standings, "p2")
    assert p2.omw_pct == pytest.approx(2 / 3)
    assert p2.gw_pct == pytest.approx(0.5)
    assert p2.ogw_pct == pytest.approx((1 / 3 + 0.8) / 2)

    p4 = _entry(standings, "p4")
    assert p4.match_win_pct == pytest.approx(MIN_PERCENTAGE)
    # 1 game won out of 5, floored
    assert p4.gw_pct == pytest.approx(MIN_PERCENTAGE)


def test_ties_fall_through_to_seed():
    standings = compute_standings(_roster(4), _two_round_log())

    assert [e.participant_id for e in standings] == ["p1", "p2", "p3", "p4"]


def test_bye_is_a_two_nil_win_without_an_opponent():
    log = [
        MatchResult(1, "p1", "p2", Outcome.A_WIN, (2, 0)),
        create_bye_result(1, "p3"),
    ]

    p3 = _entry(compute_standings(_roster(3), log), "p3")

    assert p3.match_points == 3
    assert p3.byes == 1
    assert p3.record == "1-0-0"
    assert p3.gw_pct == pytest.approx(1.0)
    # Byes are excluded from opponent averages
    assert p3.omw_pct == MIN_PERCENTAGE
    assert p3.ogw_pct == MIN_PERCENTAGE


def test_draw_is_worth_one_point():
    log = [MatchResult(1, "p1", "p2", Outcome.DRAW, (1, 1))]

    standings = compute_standings(_roster(2), log)

    for entry in standings:
        assert entry.match_points == 1
        assert entry.record == "0-0-1"


def test_missing_game_score_counts_no_games():
    log = [MatchResult(1, "p1", "p2", Outcome.A_WIN)]

    p1 = _entry(compute_standings(_roster(2), log), "p1")

    assert p1.match_points == 3
    assert p1.gw_pct == MIN_PERCENTAGE


def test_winners_rank_above_losers_after_round_one():
    roster = _roster(9)
    log = [
        MatchResult(1, f"p{i}", f"p{i + 1}", Outcome.A_WIN, (2, 1))
        for i in (1, 3, 5, 7)
    ]
    log.append(create_bye_result(1, "p9"))

    standings = compute_standings(roster, log)

    winners = [e.rank for e in standings if e.match_points == 3]
    losers = [e.rank for e in standings if e.match_points == 0]
    assert len(winners) == 5
    assert max(winners) < min(losers)


def test_percentages_never_fall_below_one_third():
    log = _two_round_log() + [MatchResult(3, "p2", "p1", Outcome.A_WIN, (2, 0))]

    for entry in compute_standings(_roster(4), log):
        for pct in (entry.match_win_pct, entry.omw_pct, entry.gw_pct, entry.ogw_pct):
            assert pct >= MIN_PERCENTAGE


def test_standings_do_not_depend_on_log_order():
    roster = _roster(4)
    log = _two_round_log()
    shuffled = list(log)
    random.Random(7).shuffle(shuffled)

    assert compute_standings(roster, log) == compute_standings(roster, shuffled)


def test_compute_standings_is_idempotent():
    calculator = StandingsCalculator()
    roster = _roster(4)
    log = _two_round_log()

    assert calculator.compute_standings(roster, log) == calculator.compute_standings(
        roster, log
    )


def test_dropped_participants_keep_their_standing():
    roster = _roster(4)
    roster[0] = roster[0].with_dropped()

    p1 = _entry(compute_standings(roster, _two_round_log()), "p1")

    assert p1.dropped
    assert p1.match_points == 6


def test_result_for_unknown_participant_is_rejected():
    log = [MatchResult(1, "p1", "ghost", Outcome.A_WIN, (2, 0))]

    with pytest.raises(UnknownParticipantException):
        compute_standings(_roster(2), log)


def test_duplicate_participant_ids_are_rejected():
    roster = _roster(2) + [create_participant("Copy", 3, participant_id="p1")]

    with pytest.raises(DuplicateParticipantException):
        compute_standings(roster, [])


def test_display_row_formats_percentages():
    entry = compute_standings(_roster(4), _two_round_log())[0]

    row = entry.to_display_row()

    assert row["Rank"] == "1"
    assert row["Points"] == "6"
    assert row["GW%"] == "80.00%"
