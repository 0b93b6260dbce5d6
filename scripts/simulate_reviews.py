"""
Simulate a sequence of ratings on one dummy card and print the history.

After each rating, simulated time jumps to the card's due time.

Usage:
  python scripts/simulate_reviews.py 3 3 4 1 3
  python scripts/simulate_reviews.py --modifiers lateness,consecutive_fails 1 1 3 4
"""

from __future__ import annotations

import argparse
import logging
from datetime import datetime, timedelta, timezone

from vocab_srs.fsrs import Rating, ReviewSimulator, SchedulerConfig, format_interval


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simulate reviews of a single card")
    parser.add_argument("ratings", nargs="+", type=int, choices=[1, 2, 3, 4], help="Ratings 1-4, in order")
    parser.add_argument(
        "--start",
        type=datetime.fromisoformat,
        default=datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc),
        help="Simulated start time (ISO 8601)",
    )
    parser.add_argument("--retention", type=float, default=0.9, help="Target retention")
    parser.add_argument("--modifiers", default="", help="Comma separated behavior modifiers")
    parser.add_argument("--verbose", action="store_true", help="Log scheduler decisions")
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    config = SchedulerConfig(
        target_retention=args.retention,
        behavior_modifiers=tuple(name for name in args.modifiers.split(",") if name),
    )
    simulator = ReviewSimulator(config=config, start=args.start)

    header = f"{'#':>3}  {'time':16}  {'rating':6}  {'phase':22}  {'S':>13}  {'D':>11}  {'R':>6}  next"
    print(header)
    print("-" * len(header))

    for number, rating in enumerate(args.ratings, 1):
        entry = simulator.review(rating)
        print(
            f"{number:>3}  {entry.timestamp:%Y-%m-%d %H:%M}  {Rating(entry.rating).name:6}  "
            f"{entry.phase_before.value + ' -> ' + entry.phase_after.value:22}  "
            f"{entry.stability_before:5.2f} -> {entry.stability_after:5.2f}  "
            f"{entry.difficulty_before:4.2f} -> {entry.difficulty_after:4.2f}  "
            f"{entry.retrievability * 100:5.1f}%  "
            f"{format_interval(timedelta(days=entry.next_interval_days))}"
        )

    print()
    print("Next buttons:")
    for rating, outcome in simulator.predictions().items():
        print(f"  {rating.name:5} -> {outcome.label}")


if __name__ == "__main__":
    main()
