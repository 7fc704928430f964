"""Factory for creating market data clients."""

from __future__ import annotations

import logging

from ..config import Settings
from .interface import MarketDataClient

logger = logging.getLogger(__name__)


def create_market_data_client(settings: Settings) -> MarketDataClient:
    """Create the appropriate market data client for the given settings.

    - STOCK_API_KEY set and non-empty → AlphaVantageClient (real market data)
    - Otherwise → SimulatorClient (GBM daily bars)
    """
    api_key = settings.stock_api_key.strip()

    if api_key:
        from .alpha_vantage import AlphaVantageClient

        logger.info("Market data client: Alpha Vantage (real data)")
        return AlphaVantageClient(
            api_key=api_key,
            base_url=settings.alpha_vantage_url,
            output_size=settings.alpha_vantage_output_size,
            timeout=settings.request_timeout_seconds,
        )
    else:
        from .simulator import SimulatorClient

        logger.info("Market data client: GBM Simulator")
        return SimulatorClient()
