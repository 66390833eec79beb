"""History API endpoints.

GET /api/history    - Trades grouped by parameter combination
GET /api/statistics - Summary statistics
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from tradecheck.aggregation.history import get_historical_data_grouped, get_statistics
from tradecheck.api.app import get_trade_store
from tradecheck.db.store import TradeStore
from tradecheck.models.types import PatternGroup, TradeStatistics

router = APIRouter()


@router.get("/history", response_model=list[PatternGroup])
def get_history(
    strategy: str | None = None,
    store: TradeStore = Depends(get_trade_store),
) -> list[PatternGroup]:
    """Get historical patterns, most frequent first.

    Args:
        strategy: Limit to one strategy; omit for all.
        store: Trade store (injected).
    """
    return get_historical_data_grouped(store, strategy)


@router.get("/statistics", response_model=TradeStatistics)
def get_trade_statistics(
    strategy: str | None = None,
    store: TradeStore = Depends(get_trade_store),
) -> TradeStatistics:
    """Get summary statistics.

    Args:
        strategy: Limit counts to one strategy; omit for all.
        store: Trade store (injected).
    """
    return get_statistics(store, strategy)
