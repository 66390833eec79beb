"""Catalog API endpoints.

GET /api/parameters - Parameter groups and labels
GET /api/strategies - Strategies and result labels
"""

from __future__ import annotations

from fastapi import APIRouter

from tradecheck.api.app import configured_strategies
from tradecheck.models.params import PARAMETER_GROUPS
from tradecheck.models.types import (
    RESULT_LABELS,
    ParameterDetail,
    ParameterGroupDetail,
    StrategyCatalog,
)

router = APIRouter()


@router.get("/parameters", response_model=list[ParameterGroupDetail])
def list_parameters() -> list[ParameterGroupDetail]:
    """Get the 15 parameter questions in their 5 groups."""
    return [
        ParameterGroupDetail(
            title=group.title,
            parameters=[
                ParameterDetail(key=p.key, label=p.label, description=p.description)
                for p in group.parameters
            ],
        )
        for group in PARAMETER_GROUPS
    ]


@router.get("/strategies", response_model=StrategyCatalog)
def list_strategies() -> StrategyCatalog:
    """Get configured strategies and the usual result labels."""
    return StrategyCatalog(
        strategies=configured_strategies(),
        result_labels=list(RESULT_LABELS),
    )
