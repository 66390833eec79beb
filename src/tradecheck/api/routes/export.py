"""Export / import API endpoints.

GET  /api/export - Download every trade as a JSON array
POST /api/import - Replace every trade with a JSON array
"""

from __future__ import annotations

from datetime import date
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import JSONResponse

from tradecheck.api.app import get_trade_store
from tradecheck.core.identity import export_filename
from tradecheck.db.store import TradeStore
from tradecheck.models.types import OperationResponse

router = APIRouter()


@router.get("/export")
def export_trades(store: TradeStore = Depends(get_trade_store)) -> JSONResponse:
    """Export trades as downloadable JSON.

    Args:
        store: Trade store (injected).

    Returns:
        JSON array with Content-Disposition header for download.
    """
    result = store.export_all()

    if not result.success:
        raise HTTPException(status_code=500, detail=result.error)

    return JSONResponse(
        content=result.data,
        headers={
            "Content-Disposition": f'attachment; filename="{export_filename(date.today())}"'
        },
    )


@router.post("/import", response_model=OperationResponse)
def import_trades(
    payload: Any = Body(...),
    store: TradeStore = Depends(get_trade_store),
) -> OperationResponse:
    """Replace every stored trade with the posted array.

    Args:
        payload: JSON array of trade records.
        store: Trade store (injected).

    Raises:
        HTTPException: 400 if the body is not an array, 500 if storage fails.
    """
    result = store.import_all(payload)

    if not result.success:
        status_code = 500 if result.error_code == "storage" else 400
        raise HTTPException(status_code=status_code, detail=result.error)

    return OperationResponse(success=True)
