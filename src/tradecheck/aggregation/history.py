"""Historical pattern aggregation.

Groups trades by exact parameter vector and computes summary
statistics. Domain logic is pure - store access happens up front.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tradecheck.db.store import TradeStore
from tradecheck.models.params import parameter_key, parameter_summary
from tradecheck.models.types import DateRange, PatternGroup, TradeRecord, TradeStatistics


@dataclass
class _PatternAccumulator:
    """Internal running totals for one parameter vector."""

    first: TradeRecord
    trades: list[TradeRecord] = field(default_factory=list)
    results: dict[str, int] = field(default_factory=dict)
    earliest: TradeRecord | None = None
    latest: TradeRecord | None = None

    def add(self, trade: TradeRecord) -> None:
        self.trades.append(trade)
        self.results[trade.result] = self.results.get(trade.result, 0) + 1
        # Compare instants, not display strings
        if self.earliest is None or trade.timestamp < self.earliest.timestamp:
            self.earliest = trade
        if self.latest is None or trade.timestamp > self.latest.timestamp:
            self.latest = trade


def _scope(store: TradeStore, strategy: str | None) -> list[TradeRecord]:
    return store.get_by_strategy(strategy) if strategy else store.get_all()


def win_rate(results: dict[str, int]) -> float:
    """Percentage of trades whose result label contains "win".

    Case-insensitive, so "Partial Win" counts. Rounded to one decimal;
    0.0 when there are no trades.
    """
    total = sum(results.values())
    if total == 0:
        return 0.0
    wins = sum(count for label, count in results.items() if "win" in label.lower())
    return round(wins / total * 100, 1)


def group_by_parameters(trades: list[TradeRecord]) -> list[PatternGroup]:
    """Group trades by exact parameter vector, most frequent first.

    Pure function - no database access. Ties keep the order in which
    each vector was first seen.
    """
    grouped: dict[str, _PatternAccumulator] = {}
    for trade in trades:
        key = parameter_key(trade.parameters)
        if key not in grouped:
            grouped[key] = _PatternAccumulator(first=trade)
        grouped[key].add(trade)

    patterns = [
        PatternGroup(
            parameters=acc.first.parameters,
            strategy=acc.first.strategy,
            trades=acc.trades,
            total_occurrences=len(acc.trades),
            results=acc.results,
            first_seen=acc.earliest.date,
            last_seen=acc.latest.date,
            win_rate=win_rate(acc.results),
            summary=parameter_summary(acc.first.parameters),
        )
        for acc in grouped.values()
    ]

    # sorted() is stable
    return sorted(patterns, key=lambda p: p.total_occurrences, reverse=True)


def get_historical_data_grouped(
    store: TradeStore,
    strategy: str | None = None,
) -> list[PatternGroup]:
    """Group stored trades by parameter vector.

    Args:
        store: Trade store to read.
        strategy: Limit to one strategy, or None for all trades.

    Returns:
        Pattern groups sorted by total occurrences, descending.
    """
    return group_by_parameters(_scope(store, strategy))


def get_statistics(store: TradeStore, strategy: str | None = None) -> TradeStatistics:
    """Compute summary statistics for a strategy scope.

    The strategy list always covers the whole store so a selector can
    offer every known strategy.

    Args:
        store: Trade store to read.
        strategy: Limit counts to one strategy, or None for all trades.

    Returns:
        TradeStatistics for the scope.
    """
    all_trades = store.get_all()
    scoped = [t for t in all_trades if t.strategy == strategy] if strategy else all_trades

    # dict.fromkeys keeps first-seen order
    strategies = list(dict.fromkeys(t.strategy for t in all_trades))

    results: dict[str, int] = {}
    for trade in scoped:
        results[trade.result] = results.get(trade.result, 0) + 1

    date_range = DateRange(first=None, last=None)
    if scoped:
        earliest = min(scoped, key=lambda t: t.timestamp)
        latest = max(scoped, key=lambda t: t.timestamp)
        date_range = DateRange(first=earliest.date, last=latest.date)

    return TradeStatistics(
        total_trades=len(scoped),
        strategies=strategies,
        results=results,
        unique_parameter_combinations=len({parameter_key(t.parameters) for t in scoped}),
        date_range=date_range,
        win_rate=win_rate(results),
    )
