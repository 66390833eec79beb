"""Domain result types for Trade Check.

Store and journal operations report failures through these result
objects instead of raising, so callers always get {success, error}.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from tradecheck.models.types import TradeRecord

ErrorCode = Literal["validation", "storage", "import_format"]


@dataclass
class OperationResult:
    """Outcome of a store mutation."""

    success: bool
    error: str | None = None
    error_code: ErrorCode | None = None


@dataclass
class SaveResult:
    """Outcome of saving a trade."""

    success: bool
    trade: TradeRecord | None = None
    error: str | None = None
    error_code: ErrorCode | None = None


@dataclass
class ExportResult:
    """Outcome of exporting every trade."""

    success: bool
    data: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None
