"""Database schema for Trade Check.

Trades are kept as a single JSON array in one named slot of a
key-value table. There is no schema version; the array layout is
the TradeRecord wire format.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class KeyValueSlot(Base):
    """Named slot holding a serialized value.

    Invariant: one row per slot name.
    """

    __tablename__ = "kv_slots"

    slot_name: Mapped[str] = mapped_column(String(64), primary_key=True)
    value_json: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
