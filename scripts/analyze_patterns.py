#!/usr/bin/env python3
"""
저장된 당첨 이력으로 게임별 패턴 분석 리포트를 출력합니다.

    python scripts/analyze_patterns.py --game mega645 --top 10
"""
import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from lotto_research import create_app
from lotto_research.games import GAMES
from lotto_research.services.analyzer import compute_statistics, prediction_scores
from lotto_research.services.history import get_draws


def print_report(game, top: int) -> None:
    part = game.main
    mid_point = game.config.mid_point if game.config else (part.min + part.max + 1) // 2
    draws = get_draws(game.id)

    print("=" * 60)
    print(f"{game.name} ({game.id}) - {len(draws)} draws")
    print("=" * 60)
    if len(draws) < 10:
        print("Not enough history for a meaningful analysis")
        return

    report = compute_statistics(draws, part.min, part.max, mid_point)

    print(f"\nHot numbers (top {top}):")
    for row in report["frequency"][:top]:
        print(f"  {row['number']:>3}: {row['count']} ({row['percentage']}%)")

    print(f"\nOverdue numbers (top {top}):")
    for row in report["gap"][:top]:
        print(f"  {row['number']:>3}: {row['gap']} draws")

    print(f"\nFrequent pairs (top {top}):")
    for row in report["pairs"][:top]:
        print(f"  {row['pair'][0]}-{row['pair'][1]}: {row['count']}")

    consecutive = report["consecutive"]
    print(f"\nDraws with consecutive numbers: {consecutive['draws_with_consecutive']} "
          f"({consecutive['percentage']}%), longest run {consecutive['max_run']}")

    print("\nOdd/even:")
    for row in report["odd_even"]:
        print(f"  {row['pattern']}: {row['count']} ({row['percentage']}%)")

    print("\nLow/high:")
    for row in report["high_low"]:
        print(f"  {row['pattern']}: {row['count']} ({row['percentage']}%)")

    sums = report["sum"]
    print(f"\nSum: average {sums['average']}, min {sums['min']}, max {sums['max']}")
    for row in sums["ranges"]:
        print(f"  {row['range']}: {row['count']}")

    print("\nDecades:")
    for row in report["decades"]:
        print(f"  {row['decade']}: {row['count']} ({row['percentage']}%)")

    scores = prediction_scores(draws, part.min, part.max, top=top)
    print(f"\nHeuristic scores (top {top}):")
    for row in scores:
        print(f"  {row['number']:>3}: {row['score']}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Print pattern statistics for stored draws")
    parser.add_argument("--game", choices=sorted(GAMES), help="analyse a single game")
    parser.add_argument("--top", type=int, default=10)
    args = parser.parse_args()

    app = create_app()
    with app.app_context():
        for game_id in ([args.game] if args.game else sorted(GAMES)):
            print_report(GAMES[game_id], args.top)
            print()

    print("Lottery draws are independent; these patterns are for reference only.")


if __name__ == "__main__":
    main()
