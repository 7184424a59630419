from collections import Counter

import pytest

from lotto_research.errors import ConstraintExhaustion, InvalidRangeError
from lotto_research.games import DecadeBias, GameConfig, MEGA_645
from lotto_research.services.analyzer import NumberStat
from lotto_research.services.constraints import (
    is_high_low_balanced, is_odd_even_balanced, is_valid_combination, is_valid_sum,
)
from lotto_research.services.strategies import (
    Accepted, Exhausted, generate_balanced, generate_fallback_balanced,
    search_balanced, split_fallback, weighted_pick,
)

VALID = [3, 12, 19, 28, 35, 41]


def _flat_stats(min_value, max_value, weight):
    return {n: NumberStat(freq=0, gap=0, weight=weight) for n in range(min_value, max_value + 1)}


def test_weighted_pick_returns_distinct_numbers(mega_stats):
    for _ in range(200):
        numbers = weighted_pick(1, 45, 6, mega_stats)
        assert len(numbers) == 6
        assert len(set(numbers)) == 6
        assert all(1 <= n <= 45 for n in numbers)


def test_weighted_pick_without_stats_uses_default_weight():
    numbers = weighted_pick(1, 45, 6, None)
    assert len(set(numbers)) == 6


def test_weighted_pick_only_draws_weighted_numbers():
    stats = _flat_stats(1, 45, 0)
    for n in range(1, 7):
        stats[n] = NumberStat(freq=5, gap=0, weight=50)
    for _ in range(20):
        assert sorted(weighted_pick(1, 45, 6, stats)) == [1, 2, 3, 4, 5, 6]


def test_weighted_pick_applies_decade_bias():
    bias = (DecadeBias(1, 40, 0.0), DecadeBias(41, 45, 2.0))
    numbers = weighted_pick(1, 45, 5, _flat_stats(1, 45, 10), bias)
    assert sorted(numbers) == [41, 42, 43, 44, 45]


def test_weighted_pick_stops_when_pool_runs_dry():
    stats = _flat_stats(1, 45, 0)
    stats[7] = stats[8] = stats[9] = NumberStat(freq=1, gap=0, weight=12)
    assert sorted(weighted_pick(1, 45, 6, stats)) == [7, 8, 9]


def test_weighted_pick_rejects_small_range():
    with pytest.raises(InvalidRangeError):
        weighted_pick(1, 5, 6)


def test_weighted_pick_with_equal_weights_is_uniform():
    trials = 3000
    counts = Counter()
    stats = _flat_stats(1, 45, 1)
    for _ in range(trials):
        counts.update(weighted_pick(1, 45, 6, stats))

    expected = trials * 6 / 45
    chi_square = sum((counts[n] - expected) ** 2 / expected for n in range(1, 46))
    # df=44; p=0.0001 critical value is about 86
    assert chi_square < 100


def test_search_balanced_returns_first_preferred_match():
    config = MEGA_645.with_preferred_pairs([(3, 12)])
    outcome = search_balanced(lambda: list(VALID), config, max_attempts=50)
    assert outcome == Accepted(sorted(VALID), 10, 1)


def test_search_balanced_accepts_first_valid_without_preferred_pairs():
    samples = iter([[1, 2, 3, 4, 5, 6], list(reversed(VALID))])
    outcome = search_balanced(lambda: next(samples), MEGA_645, max_attempts=50)
    assert isinstance(outcome, Accepted)
    assert outcome.numbers == VALID
    assert outcome.attempts == 2
    assert outcome.score == 5


def test_search_balanced_keeps_best_when_no_preferred_pair_shows_up():
    config = MEGA_645.with_preferred_pairs([(44, 45)])
    outcome = search_balanced(lambda: list(VALID), config, max_attempts=30)
    assert isinstance(outcome, Exhausted)
    assert outcome.attempts == 30
    assert outcome.best.numbers == VALID
    assert outcome.best.score == 5


def test_search_balanced_exhausts_without_valid_candidate():
    outcome = search_balanced(lambda: [1, 2, 3, 4, 5, 6], MEGA_645, max_attempts=10)
    assert outcome == Exhausted(None, 10)


def test_generate_balanced_results_satisfy_constraints(mega_stats):
    results = [generate_balanced(1, 45, 6, mega_stats, MEGA_645) for _ in range(1000)]
    normal = [r for r in results if not r.fallback]
    assert normal
    for res in normal:
        assert is_valid_combination(res.numbers, MEGA_645)
        assert is_odd_even_balanced(res.numbers)
        assert is_high_low_balanced(res.numbers, MEGA_645.mid_point)
        assert is_valid_sum(res.numbers, MEGA_645.sum_range)
        assert res.numbers == sorted(res.numbers)


def test_generate_balanced_prefers_configured_pair(mega_stats):
    config = MEGA_645.with_preferred_pairs([(n, n + 10) for n in range(1, 35)])
    res = generate_balanced(1, 45, 6, mega_stats, config)
    assert not res.fallback
    assert res.score == 10


def test_generate_balanced_falls_back_on_impossible_constraints(mega_stats):
    impossible = GameConfig(min=1, max=45, count=6, mid_point=23, sum_range=(0, 0))
    res = generate_balanced(1, 45, 6, mega_stats, impossible, max_attempts=50)
    assert res.fallback
    assert res.attempts == 50
    assert len(set(res.numbers)) == 6
    assert sum(1 for n in res.numbers if n < 23) == 3
    with pytest.raises(ConstraintExhaustion):
        res.raise_for_fallback()


def test_fallback_splits_around_mid_point():
    for _ in range(100):
        numbers = generate_fallback_balanced(MEGA_645)
        assert len(set(numbers)) == 6
        assert numbers == sorted(numbers)
        assert sum(1 for n in numbers if n < 23) == 3


def test_fallback_gives_odd_remainder_to_high_half():
    numbers = split_fallback(1, 35, 5, 18)
    assert sum(1 for n in numbers if n < 18) == 2
    assert sum(1 for n in numbers if n >= 18) == 3


def test_fallback_borrows_when_one_half_is_too_small():
    numbers = split_fallback(1, 10, 4, 2)
    assert numbers[0] == 1
    assert len(set(numbers)) == 4
    assert split_fallback(1, 6, 6, 6) == [1, 2, 3, 4, 5, 6]
