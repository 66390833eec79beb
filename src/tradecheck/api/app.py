"""FastAPI application factory.

- Validates inputs, reads/writes the trade store
- Returns payloads for UI
- Forbidden: matching or aggregation logic of its own
"""

from __future__ import annotations

import os
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tradecheck.db.store import TradeStore

DEFAULT_STRATEGIES = ["Strategy A", "Strategy B", "Strategy C", "Strategy D", "Strategy E"]

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",  # UI dev server
    "http://127.0.0.1:3000",
    "http://localhost:5173",
]

# Process-wide default store, opened on first request
_default_store: TradeStore | None = None


def _split_env_list(name: str, default: list[str]) -> list[str]:
    raw = os.environ.get(name)
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def configured_strategies() -> list[str]:
    """Strategies offered to the UI (TRADECHECK_STRATEGIES, comma-separated)."""
    return _split_env_list("TRADECHECK_STRATEGIES", DEFAULT_STRATEGIES)


def get_trade_store() -> TradeStore:
    """Dependency to get the trade store.

    Returns:
        Store backed by the default database file.
    """
    global _default_store
    if _default_store is None:
        _default_store = TradeStore.from_path()
    return _default_store


def create_app(db_path: Path | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        db_path: Optional path to database file. When given, the app
            uses a store on that file instead of the default one.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(
        title="Trade Check API",
        description="Record trade setups and check them against history",
        version="0.1.0",
    )

    # Add CORS middleware for UI access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_split_env_list("TRADECHECK_CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if db_path is not None:
        store = TradeStore.from_path(db_path)
        app.dependency_overrides[get_trade_store] = lambda: store

    # Include routes
    from tradecheck.api.routes import catalog, export, history, trades

    app.include_router(catalog.router, prefix="/api")
    app.include_router(trades.router, prefix="/api")
    app.include_router(history.router, prefix="/api")
    app.include_router(export.router, prefix="/api")

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


# Default app instance
app = create_app()
