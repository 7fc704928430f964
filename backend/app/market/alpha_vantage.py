"""Alpha Vantage client for daily OHLCV series."""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Any

import requests

from .interface import MarketDataClient
from .models import DailyBar, FetchErr, FetchErrorKind, FetchOk, FetchOutcome, SeriesResult

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.alphavantage.co/query"
TIME_SERIES_KEY = "Time Series (Daily)"

# Lowercased; matched as substrings of error bodies and notes
RATE_LIMIT_PHRASES: tuple[str, ...] = (
    "thank you for using alpha vantage",
    "api call frequency",
    "api rate limit",
)

RATE_LIMIT_MESSAGE = "Alpha Vantage API rate limit exceeded. Please wait a minute."
INVALID_SYMBOL_MESSAGE = "Invalid stock symbol."
NO_DATA_MESSAGE = "No historical data found for this symbol. It might be invalid or not traded."
FETCH_FAILED_MESSAGE = "Failed to connect to stock data API."

# Upstream field name -> DailyBar attribute
_FIELD_MAP = {
    "1. open": "open",
    "2. high": "high",
    "3. low": "low",
    "4. close": "close",
}
_VOLUME_FIELD = "5. volume"


def _is_rate_limit(text: str) -> bool:
    lowered = text.lower()
    return any(phrase in lowered for phrase in RATE_LIMIT_PHRASES)


def parse_daily_series(symbol: str, series: dict[str, Any]) -> SeriesResult:
    """Turn the ``Time Series (Daily)`` mapping into an ascending SeriesResult.

    Raises ValueError (or KeyError/TypeError) if any single entry is malformed.
    A partially-numeric series is never returned.
    """
    bars = []
    for day, fields in series.items():
        prices = {attr: float(fields[key]) for key, attr in _FIELD_MAP.items()}
        volume = int(fields[_VOLUME_FIELD])
        if volume < 0:
            raise ValueError(f"Negative volume on {day}: {volume}")
        bars.append(DailyBar(date=date.fromisoformat(day), volume=volume, **prices))
    bars.sort(key=lambda bar: bar.date)
    return SeriesResult(symbol=symbol, bars=tuple(bars))


def classify_payload(symbol: str, payload: Any) -> FetchOutcome:
    """Classify a decoded Alpha Vantage response body.

    Priority: error body (rate limit, then generic), rate-limit note,
    empty body, missing series, then parse.
    """
    if not isinstance(payload, dict):
        logger.error("Unexpected Alpha Vantage payload type for %s: %s", symbol, type(payload).__name__)
        return FetchErr(FetchErrorKind.FETCH_FAILED, FETCH_FAILED_MESSAGE)

    error_message = payload.get("Error Message")
    if error_message:
        logger.error("Alpha Vantage error for %s: %s", symbol, error_message)
        if _is_rate_limit(str(error_message)):
            return FetchErr(FetchErrorKind.RATE_LIMIT, RATE_LIMIT_MESSAGE)
        return FetchErr(FetchErrorKind.API_ERROR, str(error_message))

    for note_key in ("Note", "Information"):
        note = payload.get(note_key)
        if note and _is_rate_limit(str(note)):
            logger.warning("Alpha Vantage rate limit hit for %s: %s", symbol, note)
            return FetchErr(FetchErrorKind.RATE_LIMIT, RATE_LIMIT_MESSAGE)

    if not payload:
        return FetchErr(FetchErrorKind.INVALID_SYMBOL, INVALID_SYMBOL_MESSAGE)

    series = payload.get(TIME_SERIES_KEY)
    if not series:
        logger.warning("No daily time series for %s. Response keys: %s", symbol, list(payload))
        return FetchErr(FetchErrorKind.NO_DATA, NO_DATA_MESSAGE)

    try:
        return FetchOk(parse_daily_series(symbol, series))
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        logger.error("Malformed daily series for %s: %s", symbol, e)
        return FetchErr(FetchErrorKind.FETCH_FAILED, f"Malformed data received for {symbol}.")


class AlphaVantageClient(MarketDataClient):
    """MarketDataClient backed by the Alpha Vantage TIME_SERIES_DAILY endpoint.

    One HTTP GET per fetch(). The requests call is synchronous, so it runs in
    a worker thread; a hung upstream only stalls the task awaiting it.

    Rate limits:
      - Free tier: 25 req/day (older keys: 5 req/min, 500 req/day)
      - The limit shows up as a "Note"/"Information" body, not an HTTP status
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        output_size: str = "compact",
        timeout: float = 15.0,
        session: requests.Session | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._output_size = output_size
        self._timeout = timeout
        self._session = session or requests.Session()

    async def fetch(self, symbol: str) -> FetchOutcome:
        try:
            payload = await asyncio.to_thread(self._get_payload, symbol)
        except (requests.RequestException, ValueError) as e:
            # ValueError covers non-JSON bodies (requests.JSONDecodeError)
            logger.error("Error fetching data for %s from Alpha Vantage: %s", symbol, e)
            return FetchErr(FetchErrorKind.FETCH_FAILED, FETCH_FAILED_MESSAGE)
        return classify_payload(symbol, payload)

    def close(self) -> None:
        self._session.close()

    def _get_payload(self, symbol: str) -> Any:
        """Synchronous GET against Alpha Vantage. Runs in a thread."""
        params = {
            "function": "TIME_SERIES_DAILY",
            "symbol": symbol,
            "outputsize": self._output_size,
            "apikey": self._api_key,
        }
        response = self._session.get(self._base_url, params=params, timeout=self._timeout)
        response.raise_for_status()
        return response.json()
