"""Factory for creating the symbol store."""

from __future__ import annotations

import logging

from ..config import Settings
from .store import InMemorySymbolStore, SqliteSymbolStore, SymbolStore

logger = logging.getLogger(__name__)


def create_symbol_store(settings: Settings) -> SymbolStore:
    """Create the store selected by STORE_BACKEND.

    - sqlite → SqliteSymbolStore at WATCHLIST_DB_PATH (survives restarts)
    - memory → InMemorySymbolStore (lost on exit)
    """
    if settings.store_backend == "memory":
        logger.info("Symbol store: in-memory")
        return InMemorySymbolStore()

    logger.info("Symbol store: SQLite at %s", settings.watchlist_db_path)
    return SqliteSymbolStore(settings.watchlist_db_path)
