"""Shared pytest fixtures for tradecheck tests."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tradecheck.db.schema import Base
from tradecheck.db.store import TradeStore
from tradecheck.models.params import PARAMETER_KEYS


class TickingClock:
    """Deterministic clock that advances by a fixed step per call."""

    def __init__(self, start: datetime, step: timedelta = timedelta(days=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        now = self.current
        self.current = self.current + self.step
        return now


def make_vector(yes_keys=(), unset_keys=()):
    """Full p1..p15 answer dict: yes for yes_keys, None for unset_keys, else no."""
    vector = {}
    for key in PARAMETER_KEYS:
        if key in unset_keys:
            vector[key] = None
        else:
            vector[key] = key in yes_keys
    return vector


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session(engine):
    """Create a database session for testing."""
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def clock():
    """Clock starting 2026-01-05 09:30 UTC, one day per trade."""
    return TickingClock(datetime(2026, 1, 5, 9, 30, tzinfo=timezone.utc))


@pytest.fixture
def store(engine, clock):
    """Isolated trade store on the in-memory engine."""
    store = TradeStore(sessionmaker(bind=engine), clock=clock)
    store.initialize()
    return store
