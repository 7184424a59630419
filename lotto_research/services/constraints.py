"""
Combination filters used by the balanced generator.

Each predicate takes a candidate (any order) and answers one question about
it. ``is_valid_combination`` is the conjunction of the hard rules;
``has_preferred_pair`` is a soft preference and never rejects a candidate.
"""
from typing import Iterable, Optional, Sequence, Tuple

from ..games import DecadeBucket, GameConfig
from .rng import MAX_CONSECUTIVE, longest_run

PREFERRED_SCORE = 10
BASE_SCORE = 5


def _balance_bounds(count: int) -> Tuple[int, int]:
    # count=6 -> 2..4, count=5 -> 2..3
    lower = max(2, count // 3)
    return lower, count - lower


def is_odd_even_balanced(numbers: Sequence[int]) -> bool:
    odd = sum(1 for n in numbers if n % 2 == 1)
    lower, upper = _balance_bounds(len(numbers))
    return lower <= odd <= upper


def is_high_low_balanced(numbers: Sequence[int], mid_point: int) -> bool:
    low = sum(1 for n in numbers if n < mid_point)
    lower, upper = _balance_bounds(len(numbers))
    return lower <= low <= upper


def is_valid_sum(numbers: Sequence[int], sum_range: Tuple[int, int]) -> bool:
    return sum_range[0] <= sum(numbers) <= sum_range[1]


def has_excessive_consecutive(numbers: Sequence[int]) -> bool:
    """True when more than three consecutive integers appear (e.g. 7,8,9,10)."""
    return longest_run(list(numbers)) > MAX_CONSECUTIVE


def is_same_decade(numbers: Sequence[int]) -> bool:
    return len({(n - 1) // 10 for n in numbers}) == 1


def has_good_spread(numbers: Sequence[int]) -> bool:
    """Max - min must be at least 5 per gap between picks."""
    if not numbers:
        return False
    return max(numbers) - min(numbers) >= 5 * (len(numbers) - 1)


def is_decade_balanced(numbers: Sequence[int],
                       buckets: Optional[Iterable[DecadeBucket]]) -> bool:
    """Every configured bucket holds between its min and max picks."""
    if not buckets:
        return True
    for bucket in buckets:
        inside = sum(1 for n in numbers if bucket.contains(n))
        if not (bucket.min_count <= inside <= bucket.max_count):
            return False
    return True


def has_preferred_pair(numbers: Sequence[int],
                       preferred_pairs: Optional[Iterable[Tuple[int, int]]]) -> bool:
    if not preferred_pairs:
        return False
    picked = set(numbers)
    return any(a in picked and b in picked for a, b in preferred_pairs)


def is_valid_combination(numbers: Sequence[int], config: GameConfig) -> bool:
    if len(numbers) != config.count:
        return False
    return (
        is_odd_even_balanced(numbers)
        and is_high_low_balanced(numbers, config.mid_point)
        and is_valid_sum(numbers, config.sum_range)
        and not has_excessive_consecutive(numbers)
        and not is_same_decade(numbers)
        and has_good_spread(numbers)
        and is_decade_balanced(numbers, config.decade_balance)
    )


def score_candidate(numbers: Sequence[int], config: GameConfig) -> int:
    """Rank an already valid candidate: a preferred pair beats everything else."""
    if has_preferred_pair(numbers, config.preferred_pairs):
        return PREFERRED_SCORE
    return BASE_SCORE
