"""
Weighted sampling and the balanced acceptance/rejection generator.

Flow: per-number statistics -> weighted pool -> candidate -> constraint check.
``search_balanced`` only reports what happened (``Accepted`` or
``Exhausted``); ``generate_balanced`` decides what to return, including the
deterministic split fallback.
"""
import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

from ..errors import ConstraintExhaustion, InvalidRangeError
from ..games import GameConfig
from .constraints import is_valid_combination, score_candidate, PREFERRED_SCORE
from .rng import sample_int

logger = logging.getLogger(__name__)

BALANCED_MAX_ATTEMPTS = 1500
DEFAULT_WEIGHT = 10


@dataclass
class GenerationResult:
    numbers: List[int]
    strategy: str
    attempts: int = 0
    fallback: bool = False
    score: Optional[int] = None

    def raise_for_fallback(self) -> "GenerationResult":
        if self.fallback:
            raise ConstraintExhaustion(self.strategy, self.attempts)
        return self


@dataclass(frozen=True)
class Accepted:
    numbers: List[int]
    score: int
    attempts: int


@dataclass(frozen=True)
class Exhausted:
    best: Optional[Accepted]
    attempts: int


SearchOutcome = Union[Accepted, Exhausted]


def _bias_factor(number: int, decade_bias) -> float:
    for bias in decade_bias or ():
        if bias.contains(number):
            return bias.factor
    return 1.0


def pool_weight(number: int, stats: Optional[Dict], decade_bias=None) -> int:
    stat = stats.get(number) if stats else None
    if stat is None:
        weight = DEFAULT_WEIGHT
    else:
        weight = stat["weight"] if isinstance(stat, dict) else stat.weight
    return max(0, math.floor(weight * _bias_factor(number, decade_bias)))


def weighted_pick(min_value: int, max_value: int, count: int,
                  stats: Optional[Dict] = None, decade_bias=None) -> List[int]:
    """Pick ``count`` distinct numbers, each drawn proportionally to its weight.

    Number ``i`` sits in the pool ``floor(weight_i * bias)`` times. Once picked,
    every copy of it leaves the pool. Selection order is preserved.
    """
    if max_value - min_value + 1 < count:
        raise InvalidRangeError(min_value, max_value, count)

    pool: List[int] = []
    for n in range(min_value, max_value + 1):
        pool.extend([n] * pool_weight(n, stats, decade_bias))

    result: List[int] = []
    while len(result) < count and pool:
        num = pool[sample_int(0, len(pool) - 1)]
        result.append(num)
        pool = [x for x in pool if x != num]
    return result


def search_balanced(sample: Callable[[], List[int]], config: GameConfig,
                    max_attempts: int = BALANCED_MAX_ATTEMPTS) -> SearchOutcome:
    """Bounded acceptance/rejection loop.

    A valid candidate ends the search at once if it contains a preferred pair,
    or if the config has no preferred pairs to look for. Otherwise the best
    valid candidate seen so far is kept until the budget runs out.
    """
    best: Optional[Accepted] = None
    for attempt in range(1, max_attempts + 1):
        candidate = sample()
        if not is_valid_combination(candidate, config):
            continue
        score = score_candidate(candidate, config)
        accepted = Accepted(sorted(candidate), score, attempt)
        if score == PREFERRED_SCORE or not config.preferred_pairs:
            return accepted
        if best is None or score > best.score:
            best = accepted
    return Exhausted(best, max_attempts)


def split_fallback(min_value: int, max_value: int, count: int, mid_point: int) -> List[int]:
    """Half the picks below ``mid_point``, the rest (odd remainder too) at or above it."""
    if max_value - min_value + 1 < count:
        raise InvalidRangeError(min_value, max_value, count)

    low_range = list(range(min_value, mid_point))
    high_range = list(range(mid_point, max_value + 1))
    low_take = min(count // 2, len(low_range))
    high_take = count - low_take
    if high_take > len(high_range):
        high_take = len(high_range)
        low_take = count - high_take

    result = []
    for source, take in ((low_range, low_take), (high_range, high_take)):
        for _ in range(take):
            result.append(source.pop(sample_int(0, len(source) - 1)))
    return sorted(result)


def generate_fallback_balanced(config: GameConfig) -> List[int]:
    return split_fallback(config.min, config.max, config.count, config.mid_point)


def generate_balanced(min_value: int, max_value: int, count: int,
                      stats: Optional[Dict], config: GameConfig,
                      max_attempts: int = BALANCED_MAX_ATTEMPTS) -> GenerationResult:
    """Weighted candidates filtered by every rule in ``config``."""
    if max_value - min_value + 1 < count:
        raise InvalidRangeError(min_value, max_value, count)

    def sample() -> List[int]:
        return weighted_pick(min_value, max_value, count, stats, config.decade_bias)

    outcome = search_balanced(sample, config, max_attempts)
    if isinstance(outcome, Accepted):
        return GenerationResult(outcome.numbers, "balanced", outcome.attempts, score=outcome.score)
    if outcome.best is not None:
        return GenerationResult(outcome.best.numbers, "balanced", outcome.attempts,
                                score=outcome.best.score)

    logger.warning("balanced %s..%s/%s: no valid combination after %s attempts, using fallback",
                   min_value, max_value, count, outcome.attempts)
    numbers = split_fallback(min_value, max_value, count, config.mid_point)
    return GenerationResult(numbers, "balanced", outcome.attempts, fallback=True)
