"""
Cryptographically secure sampling and the plain/"smart" uniform generators.
"""
import logging
import secrets
from typing import List, Optional

from ..errors import InvalidRangeError, RangeError

logger = logging.getLogger(__name__)

OPTIMIZED_MAX_ATTEMPTS = 500
MAX_CONSECUTIVE = 3


def sample_int(min_value: int, max_value: int) -> int:
    """Uniform integer in ``[min_value, max_value]`` from the OS CSPRNG."""
    if min_value > max_value:
        raise RangeError(f"min {min_value} > max {max_value}")
    return min_value + secrets.randbelow(max_value - min_value + 1)


def sample_distinct(min_value: int, max_value: int, count: int) -> List[int]:
    """``count`` distinct integers from ``[min_value, max_value]``, sorted ascending."""
    if max_value - min_value + 1 < count:
        raise InvalidRangeError(min_value, max_value, count)
    numbers = set()
    while len(numbers) < count:
        numbers.add(sample_int(min_value, max_value))
    return sorted(numbers)


def sample_with_repeats(min_value: int, max_value: int, count: int) -> List[int]:
    """Digit-style draw: repeats allowed, draw order preserved."""
    return [sample_int(min_value, max_value) for _ in range(count)]


def generate_mechanical(min_value: int, max_value: int, count: int,
                        allow_repeats: bool = False) -> List[int]:
    if allow_repeats:
        return sample_with_repeats(min_value, max_value, count)
    return sample_distinct(min_value, max_value, count)


def longest_run(numbers: List[int]) -> int:
    """Length of the longest run of consecutive integers (numbers need not be sorted)."""
    if not numbers:
        return 0
    ordered = sorted(numbers)
    best = current = 1
    for prev, cur in zip(ordered, ordered[1:]):
        if cur == prev + 1:
            current += 1
            best = max(best, current)
        else:
            current = 1
    return best


def passes_light_filters(numbers: List[int], min_value: int, max_value: int) -> bool:
    """Parity (not all odd / all even), sum near the expected mean, no long runs."""
    count = len(numbers)
    odd = sum(1 for n in numbers if n % 2 == 1)
    if odd == 0 or odd == count:
        return False

    target = (min_value + max_value) / 2 * count
    total = sum(numbers)
    if total < target * 0.65 or total > target * 1.35:
        return False

    return longest_run(numbers) <= MAX_CONSECUTIVE


def generate_optimized(min_value: int, max_value: int, count: int,
                       max_attempts: int = OPTIMIZED_MAX_ATTEMPTS):
    """Uniform distinct sample retried until the light filters accept it.

    Small ranges (fewer than ``count * 2`` numbers) skip the filters: there may
    be no acceptable combination at all. On exhaustion the split-around-the-middle
    fallback is used and flagged on the result.
    """
    from .strategies import GenerationResult, split_fallback

    if max_value - min_value + 1 < count * 2:
        return GenerationResult(sample_distinct(min_value, max_value, count), "uniform", attempts=1)

    candidate: Optional[List[int]] = None
    for attempt in range(1, max_attempts + 1):
        candidate = sample_distinct(min_value, max_value, count)
        if passes_light_filters(candidate, min_value, max_value):
            return GenerationResult(candidate, "optimized", attempts=attempt)

    mid_point = min_value + (max_value - min_value + 1) // 2
    logger.warning("optimized %s..%s/%s: no valid combination after %s attempts, using fallback",
                   min_value, max_value, count, max_attempts)
    return GenerationResult(
        split_fallback(min_value, max_value, count, mid_point),
        "optimized", attempts=max_attempts, fallback=True,
    )
