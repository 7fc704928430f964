"""Shared watchlist synchronization.

Public API:
    SymbolStore           - Abstract persistence contract (plus in-memory / SQLite backends)
    WatchlistRegistry     - Canonical symbol set; folds duplicate inserts into ALREADY_EXISTS
    ConnectionSet         - Connected clients, unicast and broadcast delivery
    SyncCoordinator       - Bootstrap and add/remove flows
    create_symbol_store   - Factory that selects the store backend
    create_watchlist_router - FastAPI router factory for the WebSocket endpoint
"""

from .connections import Connection, ConnectionSet
from .coordinator import SyncCoordinator
from .factory import create_symbol_store
from .registry import RegisterResult, UnregisterResult, WatchlistRegistry, normalize_symbol
from .store import InMemorySymbolStore, SqliteSymbolStore, StoreEntry, SymbolStore
from .stream import create_watchlist_router

__all__ = [
    "Connection",
    "ConnectionSet",
    "SyncCoordinator",
    "create_symbol_store",
    "RegisterResult",
    "UnregisterResult",
    "WatchlistRegistry",
    "normalize_symbol",
    "InMemorySymbolStore",
    "SqliteSymbolStore",
    "StoreEntry",
    "SymbolStore",
    "create_watchlist_router",
]
