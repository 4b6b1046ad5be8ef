from tcgswiss.models.match_result import Outcome
from tcgswiss.models.pairing_history import PairingHistory
from tcgswiss.pairing.bye_allocator import ByeAllocator


def test_lowest_ranked_is_first_candidate():
    candidates = ByeAllocator().eligible_candidates(["a", "b", "c"], PairingHistory())
    assert candidates == ["c", "b", "a"]


def test_participants_with_a_bye_wait_for_everyone_else():
    history = PairingHistory()
    history.add_bye("c", 1)
    history.add_bye("b", 2)

    candidates = ByeAllocator().eligible_candidates(["a", "b", "c"], history)

    assert candidates == ["a"]


def test_second_byes_once_everyone_has_one():
    history = PairingHistory()
    for round_number, pid in enumerate(["a", "b", "c"], start=1):
        history.add_bye(pid, round_number)

    candidates = ByeAllocator().eligible_candidates(["a", "b", "c"], history)

    assert candidates == ["c", "b", "a"]


def test_empty_pool_has_no_candidates():
    assert ByeAllocator().eligible_candidates([], PairingHistory()) == []


def test_allocated_bye_is_a_two_nil_win():
    result = ByeAllocator().allocate(3, "a")

    assert result.round_number == 3
    assert result.outcome is Outcome.BYE
    assert result.participant_b_id is None
    assert result.game_score == (2, 0)
    assert result.points_for("a") == 3
