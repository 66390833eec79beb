"""Trades API endpoints.

POST   /api/trades        - Record a trade
GET    /api/trades        - List trades
DELETE /api/trades        - Delete every trade
DELETE /api/trades/{id}   - Delete one trade
POST   /api/trades/check  - Check a parameter combination against history
"""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException

from tradecheck.api.app import get_trade_store
from tradecheck.db.store import TradeStore
from tradecheck.journal.matching import check_trade
from tradecheck.journal.recording import TradeInput, record_trade
from tradecheck.models.domain import OperationResult, SaveResult
from tradecheck.models.types import (
    MatchReport,
    OperationResponse,
    TradeCheckRequest,
    TradeRecord,
    TradeSubmission,
)

router = APIRouter()


def _raise_for_failure(result: OperationResult | SaveResult) -> None:
    """Map a failed store operation to an HTTP error."""
    if result.success:
        return
    status_code = 500 if result.error_code == "storage" else 400
    raise HTTPException(status_code=status_code, detail=result.error)


@router.post("/trades", response_model=TradeRecord, status_code=201)
def create_trade(
    submission: TradeSubmission,
    store: TradeStore = Depends(get_trade_store),
) -> TradeRecord:
    """Record a trade.

    Args:
        submission: Strategy, answers, result and comments.
        store: Trade store (injected).

    Returns:
        The saved TradeRecord.

    Raises:
        HTTPException: 400 on incomplete input, 500 if storage fails.
    """
    trade_input = TradeInput(
        strategy=submission.strategy,
        parameters=submission.parameters,
        result=submission.result,
        comments=submission.comments,
    )

    result = record_trade(store, trade_input)

    _raise_for_failure(result)
    return result.trade


@router.get("/trades", response_model=list[TradeRecord])
def list_trades(
    strategy: str | None = None,
    order: Literal["insertion", "chronological"] = "insertion",
    store: TradeStore = Depends(get_trade_store),
) -> list[TradeRecord]:
    """List trades, optionally for one strategy.

    Args:
        strategy: Exact strategy name to filter by.
        order: "insertion" (as saved) or "chronological" (newest first).
        store: Trade store (injected).
    """
    if order == "chronological":
        return store.get_chronological(strategy)
    if strategy:
        return store.get_by_strategy(strategy)
    return store.get_all()


@router.delete("/trades", response_model=OperationResponse)
def clear_trades(store: TradeStore = Depends(get_trade_store)) -> OperationResponse:
    """Delete every trade."""
    result = store.clear()
    _raise_for_failure(result)
    return OperationResponse(success=True)


@router.delete("/trades/{trade_id}", response_model=OperationResponse)
def delete_trade(
    trade_id: str,
    store: TradeStore = Depends(get_trade_store),
) -> OperationResponse:
    """Delete one trade. Unknown ids succeed without change."""
    result = store.delete(trade_id)
    _raise_for_failure(result)
    return OperationResponse(success=True)


@router.post("/trades/check", response_model=MatchReport)
def check_trade_history(
    request: TradeCheckRequest,
    store: TradeStore = Depends(get_trade_store),
) -> MatchReport:
    """Report historical outcomes for an exact parameter combination.

    Raises:
        HTTPException: 400 if any of the 15 parameters is unset.
    """
    report = check_trade(store, request.strategy, request.parameters)

    if not report.success:
        raise HTTPException(status_code=400, detail=report.error)

    return report
