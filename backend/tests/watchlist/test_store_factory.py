"""Tests for the symbol store factory."""

import pytest

from app.config import Settings
from app.watchlist.factory import create_symbol_store
from app.watchlist.store import InMemorySymbolStore, SqliteSymbolStore


@pytest.mark.asyncio
class TestStoreFactory:
    """Tests for create_symbol_store."""

    async def test_memory_backend(self, memory_settings):
        """Test that STORE_BACKEND=memory yields the in-memory store."""
        store = create_symbol_store(memory_settings)
        assert isinstance(store, InMemorySymbolStore)

    async def test_sqlite_backend(self, tmp_path):
        """Test that the default backend is SQLite at the configured path."""
        db_path = tmp_path / "watchlist.db"
        store = create_symbol_store(Settings(watchlist_db_path=str(db_path)))
        assert isinstance(store, SqliteSymbolStore)
        assert db_path.exists()
        await store.close()
