"""Durable symbol storage: the SymbolStore contract and two backends."""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from threading import Lock

from ..errors import DuplicateKeyError, StoreError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StoreEntry:
    """One persisted watchlist symbol."""

    symbol: str
    created_ts: str


class SymbolStore(ABC):
    """Contract for persisting the watchlist.

    Uniqueness on ``symbol`` is enforced by the store itself, so several
    server processes can share one store and still agree on who inserted
    first. Symbols arrive already normalized to uppercase.
    """

    @abstractmethod
    async def find(self, symbol: str) -> StoreEntry | None:
        """Return the entry for ``symbol``, or None."""

    @abstractmethod
    async def insert(self, symbol: str) -> StoreEntry:
        """Insert ``symbol``. Raises DuplicateKeyError if it is already stored."""

    @abstractmethod
    async def delete_one(self, symbol: str) -> int:
        """Delete ``symbol``. Returns the number of entries removed (0 or 1)."""

    @abstractmethod
    async def find_all(self) -> list[StoreEntry]:
        """All entries in insertion order."""

    async def close(self) -> None:
        """Release resources. Safe to call multiple times."""


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()


class InMemorySymbolStore(SymbolStore):
    """Process-local store. Each method completes without suspending, so
    insert-if-absent is atomic with respect to other tasks on the loop.
    """

    def __init__(self) -> None:
        self._entries: dict[str, StoreEntry] = {}

    async def find(self, symbol: str) -> StoreEntry | None:
        return self._entries.get(symbol)

    async def insert(self, symbol: str) -> StoreEntry:
        if symbol in self._entries:
            raise DuplicateKeyError(symbol)
        entry = StoreEntry(symbol=symbol, created_ts=_utc_now())
        self._entries[symbol] = entry
        return entry

    async def delete_one(self, symbol: str) -> int:
        return 1 if self._entries.pop(symbol, None) is not None else 0

    async def find_all(self) -> list[StoreEntry]:
        return list(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)


class SqliteSymbolStore(SymbolStore):
    """SQLite-backed store. The PRIMARY KEY on ``symbol`` is the uniqueness
    boundary, shared by every process that opens the same file.

    sqlite3 calls are blocking, so each one runs in a worker thread behind a
    lock that serializes access to the single connection.
    """

    def __init__(self, db_path: str) -> None:
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._lock = Lock()
        self._closed = False
        self.connection = sqlite3.connect(db_path, check_same_thread=False)
        self.connection.row_factory = sqlite3.Row
        self._initialize_schema()

    async def find(self, symbol: str) -> StoreEntry | None:
        return await asyncio.to_thread(self._find, symbol)

    async def insert(self, symbol: str) -> StoreEntry:
        return await asyncio.to_thread(self._insert, symbol)

    async def delete_one(self, symbol: str) -> int:
        return await asyncio.to_thread(self._delete_one, symbol)

    async def find_all(self) -> list[StoreEntry]:
        return await asyncio.to_thread(self._find_all)

    async def close(self) -> None:
        with self._lock:
            if not self._closed:
                self.connection.close()
                self._closed = True

    # --- Internal (run in worker threads) ---

    def _find(self, symbol: str) -> StoreEntry | None:
        with self._lock:
            try:
                row = self.connection.execute(
                    "SELECT symbol, created_ts FROM stocks WHERE symbol = ?",
                    (symbol,),
                ).fetchone()
            except sqlite3.Error as e:
                raise StoreError(f"Failed to look up {symbol}: {e}") from e
        return self._to_entry(row) if row else None

    def _insert(self, symbol: str) -> StoreEntry:
        now = _utc_now()
        with self._lock:
            try:
                with self.connection:
                    self.connection.execute(
                        "INSERT INTO stocks(symbol, created_ts) VALUES(?, ?)",
                        (symbol, now),
                    )
            except sqlite3.IntegrityError as e:
                raise DuplicateKeyError(symbol) from e
            except sqlite3.Error as e:
                raise StoreError(f"Failed to insert {symbol}: {e}") from e
        return StoreEntry(symbol=symbol, created_ts=now)

    def _delete_one(self, symbol: str) -> int:
        with self._lock:
            try:
                with self.connection:
                    cursor = self.connection.execute(
                        "DELETE FROM stocks WHERE symbol = ?",
                        (symbol,),
                    )
            except sqlite3.Error as e:
                raise StoreError(f"Failed to delete {symbol}: {e}") from e
        return cursor.rowcount

    def _find_all(self) -> list[StoreEntry]:
        with self._lock:
            try:
                rows = self.connection.execute(
                    "SELECT symbol, created_ts FROM stocks ORDER BY rowid ASC"
                ).fetchall()
            except sqlite3.Error as e:
                raise StoreError(f"Failed to list symbols: {e}") from e
        return [self._to_entry(row) for row in rows]

    def _initialize_schema(self) -> None:
        self.connection.execute(
            """
            CREATE TABLE IF NOT EXISTS stocks(
                symbol TEXT PRIMARY KEY,
                created_ts TEXT NOT NULL
            )
            """
        )
        self.connection.commit()
        logger.info("Symbol store schema initialized")

    @staticmethod
    def _to_entry(row: sqlite3.Row) -> StoreEntry:
        return StoreEntry(symbol=str(row["symbol"]), created_ts=str(row["created_ts"]))
