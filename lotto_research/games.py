"""
Game catalogue and per-game constraint configuration.

``GameConfig`` describes the combinatorial universe of one matrix-style game
(range, pick count) plus the acceptance thresholds used by the balanced
generator. Decade buckets are explicit ``[low, high]`` records; overlapping
buckets are rejected when the config is built.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class DecadeBucket:
    """Allowed count of picked numbers inside ``[low, high]``."""

    low: int
    high: int
    min_count: int = 0
    max_count: int = 6

    def contains(self, number: int) -> bool:
        return self.low <= number <= self.high

    @property
    def label(self) -> str:
        return f"{self.low}-{self.high}"


@dataclass(frozen=True)
class DecadeBias:
    """Multiplier applied to the sampling weight of numbers in ``[low, high]``."""

    low: int
    high: int
    factor: float = 1.0

    def contains(self, number: int) -> bool:
        return self.low <= number <= self.high


def _check_exclusive(records, name: str) -> None:
    ordered = sorted(records, key=lambda r: r.low)
    for rec in ordered:
        if rec.low > rec.high:
            raise ValueError(f"{name}: bucket {rec.low}-{rec.high} is inverted")
    for prev, cur in zip(ordered, ordered[1:]):
        if cur.low <= prev.high:
            raise ValueError(
                f"{name}: buckets {prev.low}-{prev.high} and {cur.low}-{cur.high} overlap"
            )


@dataclass(frozen=True)
class GameConfig:
    min: int
    max: int
    count: int
    mid_point: int
    sum_range: Tuple[int, int]
    decade_balance: Optional[Tuple[DecadeBucket, ...]] = None
    decade_bias: Optional[Tuple[DecadeBias, ...]] = None
    preferred_pairs: Optional[Tuple[Tuple[int, int], ...]] = None

    def __post_init__(self):
        if self.min > self.max:
            raise ValueError(f"min {self.min} > max {self.max}")
        if self.max - self.min + 1 < self.count:
            raise ValueError(f"range {self.min}..{self.max} cannot hold {self.count} numbers")
        if not (self.min < self.mid_point <= self.max):
            raise ValueError(f"mid_point {self.mid_point} must lie in ({self.min}, {self.max}]")
        if self.sum_range[0] > self.sum_range[1]:
            raise ValueError(f"sum_range {self.sum_range} is inverted")
        if self.decade_balance is not None:
            _check_exclusive(self.decade_balance, "decade_balance")
            for bucket in self.decade_balance:
                if bucket.min_count > bucket.max_count:
                    raise ValueError(f"decade_balance {bucket.label}: min_count > max_count")
        if self.decade_bias is not None:
            _check_exclusive(self.decade_bias, "decade_bias")
        if self.preferred_pairs is not None:
            if not self.preferred_pairs:
                raise ValueError("preferred_pairs must not be empty; pass None instead")
            for a, b in self.preferred_pairs:
                if a == b:
                    raise ValueError(f"preferred pair ({a}, {b}) repeats a number")

    def with_preferred_pairs(self, pairs) -> "GameConfig":
        """Copy of this config with ``pairs`` as preferred pairs (None when empty)."""
        pairs = tuple((min(a, b), max(a, b)) for a, b in pairs)
        return GameConfig(
            min=self.min,
            max=self.max,
            count=self.count,
            mid_point=self.mid_point,
            sum_range=self.sum_range,
            decade_balance=self.decade_balance,
            decade_bias=self.decade_bias,
            preferred_pairs=pairs or None,
        )


def decade_buckets(min_value: int, max_value: int, max_count: int) -> Tuple[DecadeBucket, ...]:
    """Width-10 buckets covering ``[min_value, max_value]`` (last one may be narrower)."""
    buckets = []
    low = min_value
    while low <= max_value:
        high = min(low + 9, max_value)
        buckets.append(DecadeBucket(low, high, 0, max_count))
        low = high + 1
    return tuple(buckets)


@dataclass(frozen=True)
class GamePart:
    min: int
    max: int
    size: int
    allow_duplicate: bool = False


@dataclass(frozen=True)
class Game:
    id: str
    name: str
    kind: str  # matrix | digit | compound
    parts: Tuple[GamePart, ...]
    config: Optional[GameConfig] = None
    min_matches_for_win: int = 3

    @property
    def main(self) -> GamePart:
        return self.parts[0]

    def as_dict(self) -> Dict:
        return {"id": self.id, "name": self.name, "kind": self.kind}


MEGA_645 = GameConfig(
    min=1, max=45, count=6,
    mid_point=23,  # 1-22 low, 23-45 high
    sum_range=(100, 190),
    decade_balance=decade_buckets(1, 45, 3),
)

POWER_655 = GameConfig(
    min=1, max=55, count=6,
    mid_point=28,
    sum_range=(120, 220),
    decade_balance=decade_buckets(1, 55, 3),
)

LOTO_535 = GameConfig(
    min=1, max=35, count=5,
    mid_point=18,
    sum_range=(70, 130),
)

KENO = GameConfig(
    min=1, max=80, count=10,
    mid_point=41,
    sum_range=(300, 510),
    decade_balance=decade_buckets(1, 80, 4),
)


GAMES: Dict[str, Game] = {
    "mega645": Game(
        id="mega645", name="Mega 6/45", kind="matrix",
        parts=(GamePart(1, 45, 6),), config=MEGA_645,
    ),
    "power655": Game(
        id="power655", name="Power 6/55", kind="matrix",
        parts=(GamePart(1, 55, 6),), config=POWER_655,
    ),
    "loto535": Game(
        id="loto535", name="Lotto 5/35", kind="compound",
        parts=(GamePart(1, 35, 5), GamePart(1, 12, 1)), config=LOTO_535,
        min_matches_for_win=2,
    ),
    "max3d": Game(
        id="max3d", name="Max 3D", kind="digit",
        parts=(GamePart(0, 9, 3, allow_duplicate=True), GamePart(0, 9, 3, allow_duplicate=True)),
        min_matches_for_win=1,
    ),
    "keno": Game(
        id="keno", name="Keno", kind="matrix",
        parts=(GamePart(1, 80, 10),), config=KENO,
    ),
}


def get_game(game_id: Optional[str]) -> Optional[Game]:
    if not game_id:
        return None
    return GAMES.get(game_id)


def list_games() -> List[Dict]:
    return [g.as_dict() for g in GAMES.values()]
