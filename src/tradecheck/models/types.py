"""Pydantic models for Trade Check.

TradeRecord is also the persisted and exported wire format:
parameters serialize as true / false / null per key.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, StrictBool, field_serializer, field_validator

from tradecheck.models.params import ParameterVector, TriState, coerce_parameters

RESULT_LABELS = ["Win", "Loss", "Break Even", "Partial Win", "Partial Loss"]


class TradeRecord(BaseModel):
    """A saved trade observation."""

    id: str
    strategy: str
    parameters: ParameterVector
    result: str
    comments: str = ""
    timestamp: datetime
    date: str

    @field_validator("parameters", mode="before")
    @classmethod
    def _coerce_parameters(cls, value: Any) -> ParameterVector:
        if not isinstance(value, dict):
            raise ValueError("parameters must be an object")
        return coerce_parameters(value)

    @field_validator("comments", mode="before")
    @classmethod
    def _none_comments(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @field_serializer("parameters")
    def _serialize_parameters(self, parameters: ParameterVector) -> dict[str, bool | None]:
        return {key: state.value for key, state in parameters.items()}


class TradeSubmission(BaseModel):
    """Request body for recording a trade."""

    strategy: str
    parameters: dict[str, StrictBool | None]
    result: str
    comments: str = ""


class TradeCheckRequest(BaseModel):
    """Request body for checking a parameter combination."""

    strategy: str
    parameters: dict[str, StrictBool | None]


class MatchComment(BaseModel):
    """A comment left on a matching historical trade."""

    comment: str
    date: str
    timestamp: datetime


class MatchGroup(BaseModel):
    """Historical matches sharing one result label."""

    result: str
    count: int
    dates: list[str]
    comments: list[MatchComment]


class MatchReport(BaseModel):
    """Outcome of an exact-match historical lookup."""

    success: bool = True
    groups: list[MatchGroup]
    total_occurrences: int
    message: str | None = None
    error: str | None = None


class PatternGroup(BaseModel):
    """All trades sharing one exact parameter vector."""

    parameters: ParameterVector
    strategy: str
    trades: list[TradeRecord]
    total_occurrences: int
    results: dict[str, int]
    first_seen: str
    last_seen: str
    win_rate: float
    summary: str

    @field_serializer("parameters")
    def _serialize_parameters(self, parameters: ParameterVector) -> dict[str, bool | None]:
        return {key: state.value for key, state in parameters.items()}


class DateRange(BaseModel):
    """First and last display dates in scope."""

    first: str | None
    last: str | None


class TradeStatistics(BaseModel):
    """Summary statistics over a strategy scope."""

    total_trades: int
    strategies: list[str]
    results: dict[str, int]
    unique_parameter_combinations: int
    date_range: DateRange
    win_rate: float


class ParameterDetail(BaseModel):
    """Parameter metadata for API response."""

    key: str
    label: str
    description: str


class ParameterGroupDetail(BaseModel):
    """Parameter group metadata for API response."""

    title: str
    parameters: list[ParameterDetail]


class StrategyCatalog(BaseModel):
    """Strategies and result labels offered to the UI."""

    strategies: list[str]
    result_labels: list[str]


class OperationResponse(BaseModel):
    """Generic success payload."""

    success: bool
    error: str | None = None
