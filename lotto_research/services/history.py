"""
Draw history access and backtesting of a number set against past draws.
"""
import logging
from datetime import date
from typing import Dict, List, Optional, Sequence

from ..extensions import db
from ..models import DrawHistory

logger = logging.getLogger(__name__)

# Latest ten draws per game, collected manually on 2026-02-03
SEED_DATA = [
    ("mega645", "2026-02-01", [1, 18, 21, 23, 30, 36]),
    ("mega645", "2026-01-30", [16, 17, 30, 41, 42, 45]),
    ("mega645", "2026-01-28", [4, 10, 16, 19, 27, 40]),
    ("mega645", "2026-01-25", [2, 19, 20, 24, 33, 34]),
    ("mega645", "2026-01-23", [9, 15, 16, 20, 22, 31]),
    ("mega645", "2026-01-21", [1, 18, 23, 24, 29, 37]),
    ("mega645", "2026-01-18", [2, 5, 15, 26, 39, 42]),
    ("mega645", "2026-01-16", [2, 10, 21, 31, 34, 40]),
    ("mega645", "2026-01-14", [1, 22, 23, 28, 39, 45]),
    ("mega645", "2026-01-11", [8, 10, 21, 25, 31, 38]),
    ("power655", "2026-01-31", [10, 11, 14, 17, 49, 53]),
    ("power655", "2026-01-29", [11, 15, 22, 32, 34, 54]),
    ("power655", "2026-01-27", [13, 22, 32, 42, 53, 54]),
    ("power655", "2026-01-24", [14, 24, 25, 30, 35, 53]),
    ("power655", "2026-01-22", [2, 20, 21, 29, 36, 50]),
    ("power655", "2026-01-20", [4, 20, 26, 28, 37, 41]),
    ("power655", "2026-01-17", [14, 21, 23, 25, 46, 48]),
    ("power655", "2026-01-15", [13, 21, 31, 34, 48, 55]),
    ("power655", "2026-01-13", [3, 12, 25, 51, 52, 55]),
    ("power655", "2026-01-10", [9, 16, 30, 33, 34, 38]),
]


def seed_history() -> int:
    """Insert the seed draws when the table is empty. Returns rows inserted."""
    if DrawHistory.query.first() is not None:
        logger.info("history data already exists, skipping seed")
        return 0

    for game, draw_date, numbers in SEED_DATA:
        db.session.add(DrawHistory(
            game=game,
            draw_date=date.fromisoformat(draw_date),
            numbers=",".join(map(str, numbers)),
        ))
    db.session.commit()
    logger.info("seeded %s history draws", len(SEED_DATA))
    return len(SEED_DATA)


def get_draws(game: str, limit: Optional[int] = None) -> List[Dict]:
    """Stored draws for ``game``, most recent first."""
    query = DrawHistory.query.filter_by(game=game).order_by(
        DrawHistory.draw_date.desc(), DrawHistory.id.desc()
    )
    if limit:
        query = query.limit(limit)
    return [row.as_dict() for row in query.all()]


def match_history(draws: Sequence[Dict], numbers: Sequence[int], min_matches: int = 3) -> Dict:
    """How often ``numbers`` would have matched past draws.

    ``details`` lists the draws reaching ``min_matches``; ``best_match`` is the
    single draw with the most shared numbers (most recent wins ties).
    """
    picked = set(numbers)
    match_counts: Dict[int, int] = {}
    details = []
    best_match = None
    wins = 0

    for draw in draws:
        matches = len(picked.intersection(draw["numbers"]))
        if matches > 0:
            match_counts[matches] = match_counts.get(matches, 0) + 1
        if matches >= min_matches:
            wins += 1
            details.append({"draw_date": draw.get("draw_date"), "matches": matches,
                            "numbers": draw["numbers"]})
        if matches > (best_match["matches"] if best_match else 0):
            best_match = {"draw_date": draw.get("draw_date"), "matches": matches,
                          "numbers": draw["numbers"]}

    total = len(draws)
    return {
        "total_draws": total,
        "match_counts": match_counts,
        "details": details,
        "best_match": best_match,
        "wins": wins,
        "win_rate": round(wins / total * 100, 2) if total else 0.0,
        "min_matches_for_win": min_matches,
    }


def check_history(game, numbers: Sequence[int]) -> Dict:
    return match_history(get_draws(game.id), numbers, game.min_matches_for_win)
