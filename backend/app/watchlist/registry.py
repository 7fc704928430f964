"""Canonical watchlist of symbols, backed by a SymbolStore."""

from __future__ import annotations

import logging
from enum import Enum

from ..errors import DuplicateKeyError
from .store import SymbolStore

logger = logging.getLogger(__name__)


def normalize_symbol(raw: object) -> str:
    """Strip and uppercase a user-supplied symbol. Returns "" for non-strings."""
    if not isinstance(raw, str):
        return ""
    return raw.strip().upper()


class RegisterResult(str, Enum):
    INSERTED = "inserted"
    ALREADY_EXISTS = "already_exists"


class UnregisterResult(str, Enum):
    REMOVED = "removed"
    NOT_FOUND = "not_found"


class WatchlistRegistry:
    """Owns the shared symbol set.

    There is no in-process mirror: every read goes through to the store, and
    the store's uniqueness constraint decides concurrent registrations. A
    duplicate insert is an expected race and comes back as ALREADY_EXISTS.
    Any other store fault propagates as StoreError.
    """

    def __init__(self, store: SymbolStore) -> None:
        self._store = store

    async def list_all(self) -> list[str]:
        """Current durable symbols, in insertion order."""
        entries = await self._store.find_all()
        return [entry.symbol for entry in entries]

    async def contains(self, symbol: str) -> bool:
        return await self._store.find(normalize_symbol(symbol)) is not None

    async def register(self, symbol: str) -> RegisterResult:
        symbol = normalize_symbol(symbol)
        try:
            await self._store.insert(symbol)
        except DuplicateKeyError:
            logger.warning("Attempted to add duplicate stock: %s", symbol)
            return RegisterResult.ALREADY_EXISTS
        logger.info("Stock added to store: %s", symbol)
        return RegisterResult.INSERTED

    async def unregister(self, symbol: str) -> UnregisterResult:
        symbol = normalize_symbol(symbol)
        removed = await self._store.delete_one(symbol)
        if removed > 0:
            logger.info("Stock removed from store: %s", symbol)
            return UnregisterResult.REMOVED
        return UnregisterResult.NOT_FOUND
