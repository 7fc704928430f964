"""Tests for WatchlistRegistry."""

import pytest

from app.errors import StoreError
from app.watchlist.registry import (
    RegisterResult,
    UnregisterResult,
    WatchlistRegistry,
    normalize_symbol,
)
from fakes import FaultyStore


class TestNormalizeSymbol:
    """Unit tests for symbol normalization."""

    def test_uppercases_and_strips(self):
        """Test case folding and whitespace stripping."""
        assert normalize_symbol("  aapl ") == "AAPL"

    def test_whitespace_only(self):
        """Test that blank input normalizes to empty."""
        assert normalize_symbol("   ") == ""

    def test_non_string(self):
        """Test that non-string payloads normalize to empty."""
        assert normalize_symbol(None) == ""
        assert normalize_symbol(42) == ""


@pytest.mark.asyncio
class TestWatchlistRegistry:
    """Unit tests for register / unregister / list_all."""

    async def test_register_inserts(self, store):
        """Test that a new symbol is inserted."""
        registry = WatchlistRegistry(store)
        assert await registry.register("AAPL") is RegisterResult.INSERTED
        assert await registry.list_all() == ["AAPL"]

    async def test_register_duplicate_is_already_exists(self, store):
        """Test that a duplicate insert folds into ALREADY_EXISTS."""
        registry = WatchlistRegistry(store)
        await registry.register("AAPL")
        assert await registry.register("AAPL") is RegisterResult.ALREADY_EXISTS
        assert await registry.list_all() == ["AAPL"]

    async def test_register_is_case_insensitive(self, store):
        """Test that differently-cased symbols share one entry."""
        registry = WatchlistRegistry(store)
        await registry.register("aapl")
        assert await registry.register("AAPL") is RegisterResult.ALREADY_EXISTS
        assert await registry.contains("Aapl")

    async def test_unregister(self, store):
        """Test REMOVED then NOT_FOUND."""
        registry = WatchlistRegistry(store)
        await registry.register("AAPL")
        assert await registry.unregister("AAPL") is UnregisterResult.REMOVED
        assert await registry.unregister("AAPL") is UnregisterResult.NOT_FOUND
        assert await registry.list_all() == []

    async def test_list_all_reads_through(self, store):
        """Test that writes made directly to the store are visible."""
        registry = WatchlistRegistry(store)
        await store.insert("MSFT")
        assert await registry.list_all() == ["MSFT"]

    async def test_store_fault_propagates(self):
        """Test that faults other than duplicates are not swallowed."""
        registry = WatchlistRegistry(FaultyStore({"insert", "delete_one", "find_all"}))
        with pytest.raises(StoreError):
            await registry.register("AAPL")
        with pytest.raises(StoreError):
            await registry.unregister("AAPL")
        with pytest.raises(StoreError):
            await registry.list_all()
