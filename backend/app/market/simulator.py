"""GBM-based daily bar simulator for running without an API key."""

from __future__ import annotations

import logging
import math
import re
import zlib
from datetime import date, timedelta

import numpy as np

from .interface import MarketDataClient
from .models import DailyBar, FetchErr, FetchErrorKind, FetchOk, FetchOutcome, SeriesResult
from .seed_prices import (
    COMPACT_BARS,
    DEFAULT_PARAMS,
    PRICE_RANGE,
    SEED_PRICES,
    SYMBOL_PARAMS,
    TRADING_DAYS_PER_YEAR,
    VOLUME_RANGE,
)

logger = logging.getLogger(__name__)

TICKER_PATTERN = re.compile(r"^[A-Z][A-Z0-9.\-]{0,9}$")


def trading_days(end: date, count: int) -> list[date]:
    """The ``count`` most recent weekdays on or before ``end``, ascending."""
    days: list[date] = []
    current = end
    while len(days) < count:
        if current.weekday() < 5:
            days.append(current)
        current -= timedelta(days=1)
    days.reverse()
    return days


class GBMDailySimulator:
    """Geometric Brownian Motion generator for daily OHLCV bars.

    Math (per trading day):
        C(t) = C(t-1) * exp((mu - sigma^2/2) * dt + sigma * sqrt(dt) * Z)

    Where dt = 1/252 and Z is standard normal. Opens gap from the previous
    close with a quarter of the daily volatility; highs and lows extend past
    the open/close range by a half-normal wick.

    The generator is seeded from the symbol, so every client asking for the
    same symbol on the same day sees an identical series.
    """

    def __init__(self, bars: int = COMPACT_BARS) -> None:
        self._bars = bars
        self._dt = 1.0 / TRADING_DAYS_PER_YEAR

    def generate(self, symbol: str, as_of: date) -> SeriesResult:
        rng = np.random.default_rng(zlib.crc32(symbol.encode("utf-8")))
        params = SYMBOL_PARAMS.get(symbol, DEFAULT_PARAMS)
        mu, sigma = params["mu"], params["sigma"]
        start = SEED_PRICES.get(symbol) or float(rng.uniform(*PRICE_RANGE))

        n = self._bars
        daily_vol = sigma * math.sqrt(self._dt)
        drift = (mu - 0.5 * sigma**2) * self._dt

        closes = start * np.exp(np.cumsum(drift + daily_vol * rng.standard_normal(n)))
        prev_closes = np.concatenate(([start], closes[:-1]))
        opens = prev_closes * np.exp(0.25 * daily_vol * rng.standard_normal(n))
        wick = np.minimum(np.abs(0.5 * daily_vol * rng.standard_normal((2, n))), 0.5)
        highs = np.maximum(opens, closes) * (1 + wick[0])
        lows = np.minimum(opens, closes) * (1 - wick[1])
        volumes = rng.integers(VOLUME_RANGE[0], VOLUME_RANGE[1], size=n)

        bars = tuple(
            DailyBar(
                date=day,
                open=round(float(opens[i]), 2),
                high=round(float(highs[i]), 2),
                low=round(float(lows[i]), 2),
                close=round(float(closes[i]), 2),
                volume=int(volumes[i]),
            )
            for i, day in enumerate(trading_days(as_of, n))
        )
        return SeriesResult(symbol=symbol, bars=bars)


class SimulatorClient(MarketDataClient):
    """MarketDataClient that synthesizes series locally.

    Symbols that do not look like tickers classify as INVALID_SYMBOL, so the
    add-flow error paths behave the same as against the real provider.
    """

    def __init__(self, bars: int = COMPACT_BARS, as_of: date | None = None) -> None:
        self._sim = GBMDailySimulator(bars=bars)
        self._as_of = as_of

    async def fetch(self, symbol: str) -> FetchOutcome:
        if not TICKER_PATTERN.match(symbol):
            logger.info("Simulator: rejecting invalid symbol %r", symbol)
            return FetchErr(FetchErrorKind.INVALID_SYMBOL, "Invalid stock symbol.")
        series = self._sim.generate(symbol, self._as_of or date.today())
        logger.debug("Simulator: generated %d bars for %s", len(series.bars), symbol)
        return FetchOk(series)
