import pytest

from tcgswiss.exceptions import (
    InsufficientFieldForCutException,
    InvalidCutSizeException,
)
from tcgswiss.models.participant import create_participant
from tcgswiss.tournament.standings_calculator import compute_standings
from tcgswiss.tournament.top_cut import bracket_order, is_power_of_two, select_top_cut


def _standings(count, dropped=()):
    roster = [
        create_participant(f"Player {seed}", seed, participant_id=f"p{seed}")
        for seed in range(1, count + 1)
    ]
    roster = [p.with_dropped() if p.id in dropped else p for p in roster]
    return compute_standings(roster, [])


@pytest.mark.parametrize(
    "cut_size, order",
    [
        (2, [1, 2]),
        (4, [1, 4, 2, 3]),
        (8, [1, 8, 4, 5, 2, 7, 3, 6]),
    ],
)
def test_bracket_order(cut_size, order):
    assert bracket_order(cut_size) == order


def test_bracket_slots_pair_to_cut_size_plus_one():
    order = bracket_order(32)
    assert sorted(order) == list(range(1, 33))
    assert all(order[i] + order[i + 1] == 33 for i in range(0, 32, 2))


def test_top_eight_of_sixteen():
    bracket = select_top_cut(_standings(16), 8)

    assert bracket.cut_size == 8
    assert bracket.seeds == [f"p{i}" for i in range(1, 9)]
    assert [(m.higher_seed, m.lower_seed) for m in bracket.matches] == [
        (1, 8),
        (4, 5),
        (2, 7),
        (3, 6),
    ]
    first = bracket.matches[0]
    assert (first.higher_seed_id, first.lower_seed_id) == ("p1", "p8")
    assert [m.position for m in bracket.matches] == [1, 2, 3, 4]


def test_dropped_participants_are_skipped():
    bracket = select_top_cut(_standings(8, dropped={"p2"}), 4)

    assert bracket.seeds == ["p1", "p3", "p4", "p5"]
    assert bracket.seed_of("p3") == 2


@pytest.mark.parametrize("cut_size", [0, 1, 3, 6, 12, -4])
def test_cut_size_must_be_a_power_of_two(cut_size):
    with pytest.raises(InvalidCutSizeException):
        select_top_cut(_standings(16), cut_size)


def test_cut_larger_than_the_field_is_rejected():
    with pytest.raises(InsufficientFieldForCutException):
        select_top_cut(_standings(16), 32)


def test_drops_can_leave_too_few_for_the_cut():
    with pytest.raises(InsufficientFieldForCutException):
        select_top_cut(_standings(4, dropped={"p4"}), 4)


def test_is_power_of_two():
    assert [n for n in range(0, 20) if is_power_of_two(n)] == [1, 2, 4, 8, 16]
