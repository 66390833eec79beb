"""Database session management.

Engines and session factories for the SQLite file behind a trade
store, one of each per resolved path.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from tradecheck.db.schema import Base

# Overridable with TRADECHECK_DB_PATH
DEFAULT_DB_PATH = Path(os.environ.get("TRADECHECK_DB_PATH", "data/tradecheck.db"))

_engines: dict[str, Engine] = {}
_session_factories: dict[str, sessionmaker] = {}


def _resolve(db_path: Path | str | None) -> tuple[Path, str]:
    path = Path(db_path) if db_path is not None else DEFAULT_DB_PATH
    return path, str(path.resolve())


def get_engine(db_path: Path | None = None) -> Engine:
    """Return the engine for a trade database file, creating it once.

    The file's directory is created on first use. Sync FastAPI routes
    run in a threadpool, so the single SQLite connection is shared
    across threads.
    """
    path, key = _resolve(db_path)
    engine = _engines.get(key)
    if engine is None:
        path.parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(
            f"sqlite:///{path}",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        _engines[key] = engine
    return engine


def get_session_factory(db_path: Path | None = None) -> sessionmaker:
    """Return the sessionmaker bound to get_engine(db_path)."""
    path, key = _resolve(db_path)
    factory = _session_factories.get(key)
    if factory is None:
        factory = sessionmaker(bind=get_engine(path))
        _session_factories[key] = factory
    return factory


@contextmanager
def session_scope(factory: sessionmaker) -> Generator[Session, None, None]:
    """Open a session that commits on success and rolls back on error.

    Example:
        with session_scope(factory) as session:
            repo.put_slot(session, "trades", "[]")
    """
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(db_path: Path | None = None) -> None:
    """Create the kv_slots table if it does not exist."""
    Base.metadata.create_all(get_engine(db_path))
