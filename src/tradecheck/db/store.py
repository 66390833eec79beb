"""Trade record store.

Append-only list of trade records persisted as one JSON array in a
named key-value slot. Every mutation is a read-modify-write of the
whole array in a single transaction; there is no locking between
operations, so concurrent writers race and the last one wins.

Failures never propagate: reads degrade to an empty list and writes
return a result object with success=False. Stored entries that fail
validation are hidden from reads but kept through later writes.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Mapping, Sequence

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from tradecheck.core.identity import format_display_date, new_trade_id
from tradecheck.db import repo
from tradecheck.db.session import get_session_factory, init_db, session_scope
from tradecheck.models.domain import ExportResult, OperationResult, SaveResult
from tradecheck.models.params import TriState
from tradecheck.models.types import TradeRecord

logger = logging.getLogger(__name__)

DEFAULT_SLOT = "trades"

# User-facing storage errors; details go to the log
SAVE_ERROR = "Error saving trade"
DELETE_ERROR = "Error deleting trade"
CLEAR_ERROR = "Error clearing trades"
IMPORT_ERROR = "Error importing trades"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TradeStore:
    """Explicit handle on the persisted trade list.

    Construct one per database (or per test with an in-memory engine)
    and pass it to the matching and aggregation functions.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        slot: str = DEFAULT_SLOT,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize store.

        Args:
            session_factory: Factory for sessions bound to the backing engine.
            slot: Name of the key-value slot holding the trade array.
            clock: Source of creation timestamps. Defaults to UTC now.
        """
        self._session_factory = session_factory
        self.slot = slot
        self._clock = clock or _utcnow

    @classmethod
    def from_path(cls, db_path: Path | None = None, slot: str = DEFAULT_SLOT) -> TradeStore:
        """Open (and create if needed) a store backed by a SQLite file."""
        init_db(db_path)
        store = cls(get_session_factory(db_path), slot=slot)
        store.initialize()
        return store

    def initialize(self) -> None:
        """Write an empty array if the slot does not exist yet."""
        try:
            with session_scope(self._session_factory) as session:
                if not repo.slot_exists(session, self.slot):
                    repo.put_slot(session, self.slot, "[]")
        except SQLAlchemyError:
            logger.exception(f"Failed to initialize trade slot {self.slot!r}")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_all(self) -> list[TradeRecord]:
        """Return every readable trade in insertion order.

        A missing, empty or unparsable slot yields an empty list.
        Individual records that do not validate are skipped, but stay
        in the slot untouched.
        """
        trades = []
        for index, item in enumerate(self._read_raw()):
            try:
                trades.append(TradeRecord.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping unreadable trade at position {index}: {e}")
        return trades

    def get_by_strategy(self, strategy: str) -> list[TradeRecord]:
        """Return trades whose strategy equals the given string exactly."""
        return [trade for trade in self.get_all() if trade.strategy == strategy]

    def get_chronological(self, strategy: str | None = None) -> list[TradeRecord]:
        """Return trades newest first, optionally for one strategy."""
        trades = self.get_by_strategy(strategy) if strategy else self.get_all()
        return sorted(trades, key=lambda t: t.timestamp, reverse=True)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save(
        self,
        strategy: str,
        parameters: Mapping[str, TriState],
        result: str,
        comments: str | None = "",
    ) -> SaveResult:
        """Append a new trade and persist the full list.

        Parameter and result validation is the caller's responsibility.

        Args:
            strategy: Strategy the trade belongs to.
            parameters: Complete p1..p15 vector.
            result: Outcome label.
            comments: Optional free text.

        Returns:
            SaveResult with the created record, or a storage error.
        """
        now = self._clock()
        try:
            trade = TradeRecord(
                id=new_trade_id(),
                strategy=strategy,
                parameters=dict(parameters),
                result=result,
                comments=comments or "",
                timestamp=now,
                date=format_display_date(now),
            )
            records = self._read_raw()
            records.append(trade.model_dump(mode="json"))
            self._write(records)
        except (SQLAlchemyError, ValueError, TypeError) as e:
            logger.error(f"Error saving trade: {e}")
            return SaveResult(success=False, error=SAVE_ERROR, error_code="storage")

        logger.info(f"Saved trade {trade.id} for {strategy!r} ({result})")
        return SaveResult(success=True, trade=trade)

    def delete(self, trade_id: str) -> OperationResult:
        """Remove the first trade with the given id. Unknown ids are a no-op."""
        records = self._read_raw()
        index = next(
            (
                i
                for i, item in enumerate(records)
                if isinstance(item, dict) and item.get("id") == trade_id
            ),
            None,
        )
        if index is None:
            return OperationResult(success=True)

        del records[index]
        try:
            self._write(records)
        except (SQLAlchemyError, TypeError, ValueError) as e:
            logger.error(f"Error deleting trade {trade_id}: {e}")
            return OperationResult(success=False, error=DELETE_ERROR, error_code="storage")

        logger.info(f"Deleted trade {trade_id}")
        return OperationResult(success=True)

    def clear(self) -> OperationResult:
        """Replace the stored list with an empty one."""
        try:
            self._write([])
        except SQLAlchemyError as e:
            logger.error(f"Error clearing trades: {e}")
            return OperationResult(success=False, error=CLEAR_ERROR, error_code="storage")

        logger.info("Cleared all trades")
        return OperationResult(success=True)

    # ------------------------------------------------------------------
    # Export / import
    # ------------------------------------------------------------------

    def export_all(self) -> ExportResult:
        """Return every stored entry as JSON-ready data in insertion order.

        Entries are exported as stored, including ones get_all skips.
        """
        return ExportResult(success=True, data=self._read_raw())

    def import_all(self, records: Any) -> OperationResult:
        """Replace the stored list with the given records.

        Records are stored as given without per-record validation.
        Anything that is not a list or tuple is rejected before any
        mutation.
        """
        if not isinstance(records, (list, tuple)):
            logger.warning(f"Rejected import of {type(records).__name__}, expected a list")
            return OperationResult(
                success=False,
                error="Invalid trades data format",
                error_code="import_format",
            )

        try:
            self._write(self._dump_records(records))
        except (SQLAlchemyError, TypeError, ValueError) as e:
            logger.error(f"Error importing trades: {e}")
            return OperationResult(success=False, error=IMPORT_ERROR, error_code="storage")

        logger.info(f"Imported {len(records)} trades")
        return OperationResult(success=True)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _read_raw(self) -> list[Any]:
        """Load the stored JSON array without validating its entries.

        Database errors, invalid JSON and non-array content read as [].
        """
        try:
            with session_scope(self._session_factory) as session:
                raw = repo.get_slot(session, self.slot)
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving trades: {e}")
            return []

        if not raw:
            return []

        try:
            records = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unparsable trade data in slot {self.slot!r}: {e}")
            return []

        if not isinstance(records, list):
            logger.warning(f"Ignoring non-array trade data in slot {self.slot!r}")
            return []
        return records

    @staticmethod
    def _dump_records(records: Sequence[TradeRecord | dict[str, Any]]) -> list[Any]:
        return [
            r.model_dump(mode="json") if isinstance(r, TradeRecord) else r for r in records
        ]

    def _write(self, records: list[Any]) -> None:
        payload = json.dumps(records)
        with session_scope(self._session_factory) as session:
            repo.put_slot(session, self.slot, payload)
