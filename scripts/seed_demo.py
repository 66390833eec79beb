#!/usr/bin/env python3
"""Seed a demo trade database.

Creates a demo database with a handful of recorded trades spread
over two strategies, then prints the match report and statistics the
UI would show.

Usage:
    python scripts/seed_demo.py

This script:
1. Resets the demo database
2. Records demo trades through the normal validation path
3. Checks one setup against history
4. Prints grouped patterns and statistics
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from tradecheck.aggregation.history import (  # noqa: E402
    get_historical_data_grouped,
    get_statistics,
)
from tradecheck.db.store import TradeStore  # noqa: E402
from tradecheck.journal.matching import check_trade  # noqa: E402
from tradecheck.journal.recording import TradeInput, record_trade  # noqa: E402
from tradecheck.models.params import PARAMETER_KEYS  # noqa: E402

# Constants
DEMO_DB_PATH = PROJECT_ROOT / "demo.db"


def _vector(yes_keys: set[str]) -> dict[str, bool]:
    """Build a full vector answering yes for the given keys, no otherwise."""
    return {key: key in yes_keys for key in PARAMETER_KEYS}


# (strategy, yes-answers, result, comments)
DEMO_TRADES = [
    ("Strategy A", {"p1", "p4", "p13"}, "Win", ""),
    ("Strategy A", {"p1", "p4", "p13"}, "Win", "clean retest"),
    ("Strategy A", {"p1", "p4", "p13"}, "Loss", "good entry, stopped on news"),
    ("Strategy A", {"p2", "p5", "p11"}, "Break Even", ""),
    ("Strategy A", {"p2", "p5", "p11"}, "Partial Win", "scaled out early"),
    ("Strategy B", {"p1", "p4", "p13"}, "Loss", ""),
    ("Strategy B", {"p7", "p8", "p15"}, "Win", ""),
]


def seed_store(store: TradeStore) -> int:
    """Record demo trades. Returns the number saved."""
    saved = 0
    for strategy, yes_keys, result, comments in DEMO_TRADES:
        outcome = record_trade(
            store,
            TradeInput(
                strategy=strategy,
                parameters=_vector(yes_keys),
                result=result,
                comments=comments,
            ),
        )
        if outcome.success:
            saved += 1
            print(f"  Saved: {strategy} / {result} ({outcome.trade.id[:8]}...)")
        else:
            print(f"  FAILED: {strategy} / {result} - {outcome.error}")
    return saved


def main() -> int:
    """Main entry point."""
    print("=" * 60)
    print("Trade Check Demo Seeding Script")
    print("=" * 60)

    store = TradeStore.from_path(DEMO_DB_PATH)

    # Step 1: Reset
    print("\n[1/4] Resetting database...")
    store.clear()

    # Step 2: Seed trades
    print("\n[2/4] Recording demo trades...")
    saved = seed_store(store)
    if saved != len(DEMO_TRADES):
        print(f"Only {saved}/{len(DEMO_TRADES)} trades saved")
        return 1

    # Step 3: Check a setup
    print("\n[3/4] Checking Strategy A setup...")
    report = check_trade(store, "Strategy A", _vector({"p1", "p4", "p13"}))
    print(f"  {report.message}")
    for group in report.groups:
        print(f"    {group.result}: {group.count} ({', '.join(group.dates)})")
        for comment in group.comments:
            print(f"      - {comment.comment} [{comment.date}]")

    # Step 4: Patterns and statistics
    print("\n[4/4] Historical patterns...")
    for pattern in get_historical_data_grouped(store):
        print(
            f"  {pattern.strategy}: {pattern.total_occurrences} trades, "
            f"win rate {pattern.win_rate}%"
        )
    stats = get_statistics(store)
    print(f"  Total trades: {stats.total_trades}")
    print(f"  Unique combinations: {stats.unique_parameter_combinations}")
    print(f"  Strategies: {', '.join(stats.strategies)}")

    print("\n" + "=" * 60)
    print("Demo seeding complete!")
    print(f"Database: {DEMO_DB_PATH}")
    print("=" * 60)

    return 0


if __name__ == "__main__":
    sys.exit(main())
