"""Trade recording.

Validates a submission before it reaches the store: the store itself
accepts whatever it is given.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from tradecheck.db.store import TradeStore
from tradecheck.models.domain import SaveResult
from tradecheck.models.params import coerce_parameters, validate_parameters


@dataclass
class TradeInput:
    """Input for trade recording."""

    strategy: str
    parameters: Mapping[str, object] = field(default_factory=dict)
    result: str = ""
    comments: str | None = ""


def validate_trade_input(trade_input: TradeInput) -> str | None:
    """Check a submission.

    Pure function - no database access.

    Returns:
        A user-facing error message, or None when the input is complete.
    """
    if not trade_input.strategy or not trade_input.strategy.strip():
        return "Please select a trading strategy before saving."
    if not validate_parameters(trade_input.parameters):
        return "Please fill in all 15 parameters before saving."
    if not trade_input.result or not trade_input.result.strip():
        return "Please select a trade result before saving."
    return None


def record_trade(store: TradeStore, trade_input: TradeInput) -> SaveResult:
    """Validate and save a trade.

    Nothing is written when validation fails.

    Args:
        store: Trade store to append to.
        trade_input: Submission data.

    Returns:
        SaveResult with the saved record, or a validation/storage error.
    """
    error = validate_trade_input(trade_input)
    if error is not None:
        return SaveResult(success=False, error=error, error_code="validation")

    return store.save(
        strategy=trade_input.strategy,
        parameters=coerce_parameters(trade_input.parameters),
        result=trade_input.result,
        comments=trade_input.comments,
    )
