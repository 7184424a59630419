"""
Lottery number frequency and pattern analysis service.

Every function takes the draw history most-recent-first and never mutates it.
A draw may be a plain list of numbers, a mapping with a ``numbers`` key or an
object with a ``numbers`` attribute.
"""
import random
from collections import Counter
from dataclasses import dataclass
from itertools import combinations
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

PAIR_TOP = 20
SUM_BUCKET = 20
TREND_WINDOW = 10


@dataclass(frozen=True)
class NumberStat:
    freq: int
    gap: int
    weight: float


def _numbers(draw) -> List[int]:
    if isinstance(draw, Mapping):
        return list(draw["numbers"])
    return list(getattr(draw, "numbers", draw))


def _pct(part: float, whole: float) -> float:
    return round(part / whole * 100, 2) if whole else 0.0


def frequency(draws: Sequence, min_value: int, max_value: int) -> List[Dict]:
    """Occurrences of every number in range, most frequent first."""
    counts = Counter()
    for draw in draws:
        counts.update(n for n in _numbers(draw) if min_value <= n <= max_value)

    total = len(draws)
    rows = [
        {"number": n, "count": counts.get(n, 0), "percentage": _pct(counts.get(n, 0), total)}
        for n in range(min_value, max_value + 1)
    ]
    return sorted(rows, key=lambda r: (-r["count"], r["number"]))


def _gaps(draws: Sequence, min_value: int, max_value: int) -> Dict[int, int]:
    # never seen -> len(draws)
    gaps = {n: len(draws) for n in range(min_value, max_value + 1)}
    for index, draw in enumerate(draws):
        for n in _numbers(draw):
            if n in gaps and gaps[n] == len(draws):
                gaps[n] = index
    return gaps


def gap(draws: Sequence, min_value: int, max_value: int) -> List[Dict]:
    """Draws since each number last appeared, most overdue first."""
    rows = [{"number": n, "gap": g} for n, g in _gaps(draws, min_value, max_value).items()]
    return sorted(rows, key=lambda r: (-r["gap"], r["number"]))


def _pair_counts(draws: Sequence) -> Counter:
    counts = Counter()
    for draw in draws:
        for a, b in combinations(_numbers(draw), 2):
            if a != b:
                counts[(min(a, b), max(a, b))] += 1
    return counts


def pair_co_occurrence(draws: Sequence, top: int = PAIR_TOP) -> List[Dict]:
    """Most frequent unordered pairs drawn together."""
    items = sorted(_pair_counts(draws).items(), key=lambda x: (-x[1], x[0]))[:top]
    return [{"pair": list(pair), "count": cnt} for pair, cnt in items]


def _pattern_rows(patterns: Counter, total: int) -> List[Dict]:
    items = sorted(patterns.items(), key=lambda x: (-x[1], x[0]))
    return [{"pattern": p, "count": c, "percentage": _pct(c, total)} for p, c in items]


def odd_even_distribution(draws: Sequence) -> List[Dict]:
    patterns = Counter()
    for draw in draws:
        nums = _numbers(draw)
        odd = sum(1 for n in nums if n % 2 == 1)
        patterns[f"{odd} odd - {len(nums) - odd} even"] += 1
    return _pattern_rows(patterns, len(draws))


def high_low_distribution(draws: Sequence, mid_point: int) -> List[Dict]:
    patterns = Counter()
    for draw in draws:
        nums = _numbers(draw)
        low = sum(1 for n in nums if n < mid_point)
        patterns[f"{low} low - {len(nums) - low} high"] += 1
    return _pattern_rows(patterns, len(draws))


def sum_distribution(draws: Sequence) -> Dict:
    sums = [sum(_numbers(draw)) for draw in draws]
    if not sums:
        return {"average": 0.0, "min": None, "max": None, "ranges": []}

    buckets = Counter((s // SUM_BUCKET) * SUM_BUCKET for s in sums)
    return {
        "average": round(sum(sums) / len(sums), 2),
        "min": min(sums),
        "max": max(sums),
        "ranges": [
            {"range": f"{start}-{start + SUM_BUCKET - 1}", "start": start, "count": buckets[start]}
            for start in sorted(buckets)
        ],
    }


def decade_distribution(draws: Sequence, max_value: int) -> List[Dict]:
    """Share of all drawn numbers per ``1-10, 11-20, ...`` bucket."""
    counts = Counter()
    slots = 0
    for draw in draws:
        for n in _numbers(draw):
            slots += 1
            if 1 <= n <= max_value:
                counts[(n - 1) // 10] += 1

    rows = []
    for idx in range((max_value + 9) // 10):
        start, end = idx * 10 + 1, min((idx + 1) * 10, max_value)
        rows.append({
            "decade": f"{start}-{end}",
            "start": start,
            "end": end,
            "count": counts.get(idx, 0),
            "percentage": _pct(counts.get(idx, 0), slots),
        })
    return rows


def consecutive_run_stats(draws: Sequence) -> Dict:
    with_consecutive = 0
    max_run = 0
    for draw in draws:
        nums = sorted(_numbers(draw))
        run, has_pair = 1, False
        for prev, cur in zip(nums, nums[1:]):
            if cur == prev + 1:
                run += 1
                has_pair = True
            else:
                max_run = max(max_run, run)
                run = 1
        if nums:
            max_run = max(max_run, run)
        if has_pair:
            with_consecutive += 1

    return {
        "draws_with_consecutive": with_consecutive,
        "fraction": round(with_consecutive / len(draws), 4) if draws else 0.0,
        "percentage": _pct(with_consecutive, len(draws)),
        "max_run": max_run,
    }


def compute_statistics(draws: Sequence, min_value: int, max_value: int, mid_point: int) -> Dict:
    """Full report for one game's history."""
    return {
        "total_draws": len(draws),
        "frequency": frequency(draws, min_value, max_value),
        "gap": gap(draws, min_value, max_value),
        "pairs": pair_co_occurrence(draws),
        "odd_even": odd_even_distribution(draws),
        "high_low": high_low_distribution(draws, mid_point),
        "sum": sum_distribution(draws),
        "decades": decade_distribution(draws, max_value),
        "consecutive": consecutive_run_stats(draws),
    }


def analyze_for_weights(draws: Sequence, min_value: int, max_value: int) -> Dict[int, NumberStat]:
    """Per-number sampling weight: 10 + freq*2 + gap*0.5."""
    freq = Counter()
    for draw in draws:
        freq.update(_numbers(draw))
    gaps = _gaps(draws, min_value, max_value)

    stats = {}
    for n in range(min_value, max_value + 1):
        f = freq.get(n, 0)
        stats[n] = NumberStat(freq=f, gap=gaps[n], weight=10 + f * 2 + gaps[n] * 0.5)
    return stats


def trend(draws: Sequence, number: int, window: int = TREND_WINDOW) -> Dict:
    """Compare how often ``number`` shows up in recent windows vs older ones."""
    appearances = []
    for i in range(len(draws) - window):
        appearances.append(sum(1 for d in draws[i:i + window] if number in _numbers(d)))

    if len(appearances) < 2:
        return {"trend": "insufficient data"}

    half = len(appearances) // 2
    recent_avg = sum(appearances[:half]) / half
    older_avg = sum(appearances[half:]) / (len(appearances) - half)
    if recent_avg > older_avg:
        label = "INCREASING"
    elif recent_avg < older_avg:
        label = "DECREASING"
    else:
        label = "STABLE"
    return {"recent_avg": round(recent_avg, 2), "older_avg": round(older_avg, 2), "trend": label}


_TREND_SCORE = {"INCREASING": 20, "DECREASING": 5}


def prediction_scores(draws: Sequence, min_value: int, max_value: int,
                      top: int = 15, rng: Optional[random.Random] = None) -> List[Dict]:
    """Heuristic score: 40% frequency, 30% gap, trend bonus and up to 10 points of noise.

    Draws are independent; this is a product heuristic, not a forecast.
    """
    rng = rng or random
    stats = analyze_for_weights(draws, min_value, max_value)
    max_freq = max((s.freq for s in stats.values()), default=0) or 1
    max_gap = max((s.gap for s in stats.values()), default=0) or 1

    scores = []
    for n, s in stats.items():
        freq_score = s.freq / max_freq * 40
        gap_score = s.gap / max_gap * 30
        trend_score = _TREND_SCORE.get(trend(draws, n)["trend"], 10)
        noise = rng.random() * 10
        scores.append({
            "number": n,
            "score": round(freq_score + gap_score + trend_score + noise, 2),
            "breakdown": {
                "freq": round(freq_score, 2),
                "gap": round(gap_score, 2),
                "trend": trend_score,
                "random": round(noise, 2),
            },
        })
    scores.sort(key=lambda x: (-x["score"], x["number"]))
    return scores[:top]


def pair_partners(draws: Sequence, min_co_occurrence: int = 3) -> Dict[int, set]:
    """Numbers that appeared together at least ``min_co_occurrence`` times."""
    partners: Dict[int, set] = {}
    for (a, b), cnt in _pair_counts(draws).items():
        if cnt >= min_co_occurrence:
            partners.setdefault(a, set()).add(b)
            partners.setdefault(b, set()).add(a)
    return partners


def preferred_pairs_from_history(draws: Sequence, top: int = 10,
                                 min_co_occurrence: int = 3) -> List[Tuple[int, int]]:
    items = sorted(_pair_counts(draws).items(), key=lambda x: (-x[1], x[0]))
    return [pair for pair, cnt in items if cnt >= min_co_occurrence][:top]


def describe_combination(numbers: Iterable[int], draws: Sequence, config) -> List[str]:
    """Short reasons explaining a generated combination."""
    nums = sorted(numbers)
    reasons = []

    hot = [r["number"] for r in frequency(draws, config.min, config.max)[:10] if r["count"] > 0]
    hot_hits = [n for n in nums if n in hot]
    if hot_hits:
        reasons.append(f"{len(hot_hits)} hot number(s): {', '.join(map(str, hot_hits))}")

    odd = sum(1 for n in nums if n % 2 == 1)
    reasons.append(f"odd/even {odd}:{len(nums) - odd}")

    low = sum(1 for n in nums if n < config.mid_point)
    reasons.append(f"low/high {low}:{len(nums) - low}")

    total = sum(nums)
    if config.sum_range[0] <= total <= config.sum_range[1]:
        reasons.append(f"sum {total} within {config.sum_range[0]}-{config.sum_range[1]}")

    decades = len({(n - 1) // 10 for n in nums})
    if decades >= 3:
        reasons.append(f"spread over {decades} decades")

    if config.preferred_pairs:
        picked = set(nums)
        pairs = [f"{a}-{b}" for a, b in config.preferred_pairs if a in picked and b in picked]
        if pairs:
            reasons.append(f"frequent pair {', '.join(pairs)}")
    return reasons[:5]
