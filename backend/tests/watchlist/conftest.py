"""Fixtures for watchlist tests."""

import pytest

from app.watchlist.connections import ConnectionSet
from app.watchlist.coordinator import SyncCoordinator
from app.watchlist.registry import WatchlistRegistry
from app.watchlist.store import InMemorySymbolStore
from fakes import FakeConnection, FakeMarketClient


@pytest.fixture
def store():
    return InMemorySymbolStore()


@pytest.fixture
def market():
    return FakeMarketClient()


@pytest.fixture
def coordinator(store, market):
    return SyncCoordinator(registry=WatchlistRegistry(store), market_client=market, connections=ConnectionSet())


@pytest.fixture
def clients(coordinator):
    """Three connections attached without running bootstrap."""
    conns = [FakeConnection(f"c{i}") for i in range(3)]
    for conn in conns:
        coordinator.connections.add(conn)
    return conns
