"""FastAPI application wiring and process entry point."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings
from .logging_utils import setup_logging
from .market import MarketDataClient, create_market_data_client
from .watchlist import (
    SymbolStore,
    SyncCoordinator,
    WatchlistRegistry,
    create_symbol_store,
    create_watchlist_router,
)

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    store: SymbolStore | None = None,
    market_client: MarketDataClient | None = None,
) -> FastAPI:
    """Build the application. ``store`` and ``market_client`` override the
    settings-selected implementations (used by tests).
    """
    settings = settings or Settings()
    if store is None:
        store = create_symbol_store(settings)
    if market_client is None:
        market_client = create_market_data_client(settings)

    registry = WatchlistRegistry(store)
    coordinator = SyncCoordinator(registry=registry, market_client=market_client)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Watchlist service starting")
        yield
        await store.close()
        close_client = getattr(market_client, "close", None)
        if close_client is not None:
            close_client()
        logger.info("Watchlist service stopped")

    app = FastAPI(title="Stock Watchlist", lifespan=lifespan)
    app.state.coordinator = coordinator
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.client_origin],
        allow_methods=["GET", "POST"],
    )

    @app.get("/")
    async def root() -> str:
        return "Stock Chart API is running!"

    @app.get("/api/watchlist")
    async def list_watchlist() -> list[str]:
        """Current symbols, without fetching any series."""
        return await registry.list_all()

    app.include_router(create_watchlist_router(coordinator))
    return app


def run() -> None:
    """Console entry point: load settings, configure logging, serve."""
    settings = Settings.from_env()
    setup_logging(settings.log_level, settings.log_file)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
