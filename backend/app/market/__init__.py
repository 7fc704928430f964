"""Market data subsystem.

Public API:
    DailyBar, SeriesResult      - Immutable daily series dataclasses
    FetchOk, FetchErr           - FetchOutcome variants
    FetchErrorKind              - Upstream failure classification
    MarketDataClient            - Abstract interface for data providers
    create_market_data_client   - Factory that selects Alpha Vantage or the simulator
"""

from .factory import create_market_data_client
from .interface import MarketDataClient
from .models import DailyBar, FetchErr, FetchErrorKind, FetchOk, FetchOutcome, SeriesResult

__all__ = [
    "DailyBar",
    "SeriesResult",
    "FetchOk",
    "FetchErr",
    "FetchErrorKind",
    "FetchOutcome",
    "MarketDataClient",
    "create_market_data_client",
]
