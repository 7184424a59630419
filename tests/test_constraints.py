import pytest

from lotto_research.games import DecadeBucket, MEGA_645, LOTO_535
from lotto_research.services.constraints import (
    BASE_SCORE, PREFERRED_SCORE, has_excessive_consecutive, has_good_spread,
    has_preferred_pair, is_decade_balanced, is_high_low_balanced,
    is_odd_even_balanced, is_same_decade, is_valid_combination, is_valid_sum,
    score_candidate,
)

VALID = [3, 12, 19, 28, 35, 41]


@pytest.mark.parametrize("numbers,expected", [
    ([2, 4, 6, 8, 10, 12], False),   # 0 odd
    ([1, 4, 6, 8, 10, 12], False),   # 1 odd
    ([1, 3, 6, 8, 10, 12], True),    # 2 odd
    ([1, 3, 5, 8, 10, 12], True),    # 3 odd
    ([1, 3, 5, 7, 10, 12], True),    # 4 odd
    ([1, 3, 5, 7, 9, 12], False),    # 5 odd
    ([1, 3, 5, 7, 9, 11], False),    # 6 odd
])
def test_odd_even_balance_for_six(numbers, expected):
    assert is_odd_even_balanced(numbers) is expected


def test_odd_even_balance_for_five():
    assert is_odd_even_balanced([1, 3, 6, 8, 10])
    assert is_odd_even_balanced([1, 3, 5, 8, 10])
    assert not is_odd_even_balanced([1, 3, 5, 7, 10])
    assert not is_odd_even_balanced([1, 4, 6, 8, 10])


def test_high_low_balance():
    assert is_high_low_balanced([1, 2, 3, 30, 31, 32], 23)
    assert is_high_low_balanced([1, 2, 23, 30, 31, 32], 23)
    assert not is_high_low_balanced([1, 2, 3, 4, 5, 30], 23)
    assert not is_high_low_balanced([1, 23, 24, 30, 31, 32], 23)


def test_valid_sum_is_inclusive():
    assert is_valid_sum([50, 50], (100, 190))
    assert is_valid_sum([90, 100], (100, 190))
    assert not is_valid_sum([49, 50], (100, 190))
    assert not is_valid_sum([95, 96], (100, 190))


def test_excessive_consecutive():
    assert has_excessive_consecutive([1, 2, 3, 4, 10, 20])
    assert has_excessive_consecutive([20, 4, 2, 10, 1, 3])
    assert not has_excessive_consecutive([1, 2, 3, 10, 20, 30])


def test_same_decade():
    assert is_same_decade([1, 2, 5, 7, 9, 10])
    assert not is_same_decade([1, 2, 5, 7, 9, 11])
    assert is_same_decade([41, 42, 43, 44, 45])


def test_spread():
    assert has_good_spread([1, 6, 11, 16, 21, 26])
    assert not has_good_spread([1, 6, 11, 16, 21, 25])
    assert not has_good_spread([])


def test_decade_balance():
    buckets = (DecadeBucket(1, 10, 0, 2), DecadeBucket(11, 20, 1, 3))
    assert is_decade_balanced([1, 2, 11, 30, 40, 45], buckets)
    assert not is_decade_balanced([1, 2, 3, 11, 40, 45], buckets)
    assert not is_decade_balanced([1, 2, 30, 35, 40, 45], buckets)
    assert is_decade_balanced([1, 2, 3, 4, 5, 6], None)


def test_preferred_pair():
    assert has_preferred_pair(VALID, [(3, 12)])
    assert has_preferred_pair(VALID, [(50, 51), (41, 19)])
    assert not has_preferred_pair(VALID, [(3, 13)])
    assert not has_preferred_pair(VALID, None)


def test_valid_combination_for_mega645():
    assert is_valid_combination(VALID, MEGA_645)
    assert is_valid_combination(list(reversed(VALID)), MEGA_645)


@pytest.mark.parametrize("numbers", [
    [3, 12, 19, 28, 35],             # wrong length
    [1, 3, 5, 7, 9, 41],             # parity
    [1, 2, 4, 8, 12, 16],            # high/low, sum
    [25, 27, 30, 33, 38, 44],        # high/low
    [1, 2, 3, 4, 30, 41],            # consecutive run, odd-heavy
    [2, 12, 13, 24, 25, 26],         # spread < 25
    [31, 32, 34, 36, 38, 20],        # decade 31-40 holds 5
])
def test_invalid_combinations_for_mega645(numbers):
    assert not is_valid_combination(numbers, MEGA_645)


def test_loto535_valid_combination():
    assert is_valid_combination([3, 10, 17, 24, 31], LOTO_535)


def test_score_candidate():
    config = MEGA_645.with_preferred_pairs([(12, 3)])
    assert score_candidate(VALID, config) == PREFERRED_SCORE
    assert score_candidate(VALID, MEGA_645) == BASE_SCORE
