"""Abstract interface for market data clients."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import FetchOutcome


class MarketDataClient(ABC):
    """Contract for daily time-series providers.

    Every call is a live round trip: no retry, no caching. Expected failure
    modes (bad symbol, rate limit, network fault) come back as a ``FetchErr``
    instead of raising, so callers can branch on the outcome directly.

    Usage:
        client = create_market_data_client(settings)
        outcome = await client.fetch("AAPL")
        if outcome.ok:
            payload = outcome.series.to_dict()
    """

    @abstractmethod
    async def fetch(self, symbol: str) -> FetchOutcome:
        """Fetch the daily series for an already-normalized symbol."""
