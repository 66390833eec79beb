"""Exact-match historical lookup.

Finds past trades of one strategy whose 15 answers are identical to a
query, and groups them by result label.
"""

from __future__ import annotations

from typing import Mapping

from tradecheck.db.store import TradeStore
from tradecheck.models.params import (
    coerce_parameters,
    parameters_match,
    validate_parameters,
)
from tradecheck.models.types import MatchComment, MatchGroup, MatchReport, TradeRecord


def find_historical_matches(
    store: TradeStore,
    strategy: str,
    query_params: Mapping[str, object],
) -> MatchReport:
    """Look up trades with the same strategy and parameter vector.

    Args:
        store: Trade store to scan.
        strategy: Strategy name, compared exactly.
        query_params: Vector to match, as TriState members or raw
            True/False/None. UNSET matches UNSET.

    Returns:
        MatchReport with one group per result label, in order of first
        appearance, and the total number of matching trades.
    """
    matches = [
        trade
        for trade in store.get_by_strategy(strategy)
        if parameters_match(trade.parameters, query_params)
    ]

    return MatchReport(
        groups=group_matches_by_result(matches),
        total_occurrences=len(matches),
    )


def group_matches_by_result(matches: list[TradeRecord]) -> list[MatchGroup]:
    """Group matching trades by their literal result string.

    Pure function - no database access. "Win" and "win" are separate
    groups.
    """
    grouped: dict[str, MatchGroup] = {}

    for match in matches:
        group = grouped.get(match.result)
        if group is None:
            group = MatchGroup(result=match.result, count=0, dates=[], comments=[])
            grouped[match.result] = group

        group.count += 1
        group.dates.append(match.date)
        if match.comments and match.comments.strip():
            group.comments.append(
                MatchComment(
                    comment=match.comments,
                    date=match.date,
                    timestamp=match.timestamp,
                )
            )

    return list(grouped.values())


def check_trade(
    store: TradeStore,
    strategy: str,
    query_params: Mapping[str, object],
) -> MatchReport:
    """Validate a query vector, then report its historical matches.

    Args:
        store: Trade store to scan.
        strategy: Strategy name.
        query_params: Raw answers (bool/None or TriState) for p1..p15.

    Returns:
        MatchReport with a user-facing message. An incomplete vector
        gives success=False and no groups.
    """
    if not validate_parameters(query_params):
        return MatchReport(
            success=False,
            groups=[],
            total_occurrences=0,
            error="Please fill in all 15 parameters before checking.",
        )

    report = find_historical_matches(store, strategy, coerce_parameters(query_params))

    if report.total_occurrences == 0:
        report.message = "No historical matches found for this parameter combination."
    else:
        report.message = (
            f"Found {report.total_occurrences} historical occurrence(s) "
            "matching these parameters."
        )
    return report
