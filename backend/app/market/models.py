"""Data models for market data."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


@dataclass(frozen=True, slots=True)
class DailyBar:
    """One trading day's OHLCV record."""

    date: date
    open: float
    high: float
    low: float
    close: float
    volume: int

    def to_dict(self) -> dict:
        """Serialize for JSON / WebSocket transmission."""
        return {
            "date": self.date.isoformat(),
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
        }


@dataclass(frozen=True, slots=True)
class SeriesResult:
    """A symbol plus its daily bars, ascending by date.

    Built fresh on every fetch. Nothing downstream keeps a reference after
    the series has been emitted to clients.
    """

    symbol: str
    bars: tuple[DailyBar, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        dates = [bar.date for bar in self.bars]
        if any(a >= b for a, b in zip(dates, dates[1:])):
            raise ValueError(f"Bars for {self.symbol} must be strictly ascending by date")

    def to_dict(self) -> dict:
        """Wire shape consumed by the chart client."""
        return {
            "symbol": self.symbol,
            "data": [bar.to_dict() for bar in self.bars],
        }


class FetchErrorKind(str, Enum):
    """Why an upstream fetch did not produce a series."""

    INVALID_SYMBOL = "INVALID_SYMBOL"
    NO_DATA = "NO_DATA"
    RATE_LIMIT = "RATE_LIMIT"
    API_ERROR = "API_ERROR"
    FETCH_FAILED = "FETCH_FAILED"


@dataclass(frozen=True, slots=True)
class FetchOk:
    """Successful fetch."""

    series: SeriesResult

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class FetchErr:
    """Classified fetch failure. ``message`` is safe to show to users."""

    kind: FetchErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False


FetchOutcome = FetchOk | FetchErr
