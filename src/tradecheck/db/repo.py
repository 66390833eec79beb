"""Repository pattern for database operations.

Encapsulates all SQLAlchemy queries. Slot values are returned as raw
JSON text; parsing belongs to the store.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from tradecheck.db.schema import KeyValueSlot

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession
else:
    DbSession = Session

# Re-export for external use
__all__ = ["DbSession"]


# ============================================================================
# Slot Repository
# ============================================================================


def get_slot(session: DbSession, slot_name: str) -> str | None:
    """Get raw slot value by name."""
    slot = session.query(KeyValueSlot).filter(KeyValueSlot.slot_name == slot_name).first()
    return slot.value_json if slot else None


def put_slot(session: DbSession, slot_name: str, value_json: str) -> None:
    """Create or replace a slot value."""
    slot = session.query(KeyValueSlot).filter(KeyValueSlot.slot_name == slot_name).first()
    if slot:
        slot.value_json = value_json
    else:
        session.add(KeyValueSlot(slot_name=slot_name, value_json=value_json))


def slot_exists(session: DbSession, slot_name: str) -> bool:
    """Check whether a slot has been written."""
    return (
        session.query(KeyValueSlot.slot_name)
        .filter(KeyValueSlot.slot_name == slot_name)
        .first()
        is not None
    )
