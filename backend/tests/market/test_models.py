"""Tests for DailyBar, SeriesResult and FetchOutcome."""

from datetime import date

import pytest

from app.market.models import DailyBar, FetchErr, FetchErrorKind, FetchOk, SeriesResult


def _bar(day: date, close: float = 100.0) -> DailyBar:
    return DailyBar(date=day, open=close, high=close + 1, low=close - 1, close=close, volume=1000)


class TestDailyBar:
    """Unit tests for the DailyBar model."""

    def test_to_dict(self):
        """Test serialization to the wire shape."""
        bar = DailyBar(
            date=date(2024, 3, 5), open=170.76, high=172.04, low=169.62, close=170.12, volume=95132355
        )
        assert bar.to_dict() == {
            "date": "2024-03-05",
            "open": 170.76,
            "high": 172.04,
            "low": 169.62,
            "close": 170.12,
            "volume": 95132355,
        }

    def test_immutability(self):
        """Test that DailyBar is immutable."""
        bar = _bar(date(2024, 3, 5))

        with pytest.raises(AttributeError):
            bar.close = 200.00  # Should raise error


class TestSeriesResult:
    """Unit tests for the SeriesResult model."""

    def test_to_dict(self):
        """Test serialization keeps symbol and bar order."""
        series = SeriesResult(symbol="AAPL", bars=(_bar(date(2024, 3, 1)), _bar(date(2024, 3, 4))))
        result = series.to_dict()

        assert result["symbol"] == "AAPL"
        assert [row["date"] for row in result["data"]] == ["2024-03-01", "2024-03-04"]

    def test_empty_series_allowed(self):
        """Test that a series without bars serializes to an empty list."""
        assert SeriesResult(symbol="AAPL").to_dict() == {"symbol": "AAPL", "data": []}

    def test_rejects_descending_bars(self):
        """Test that out-of-order bars are rejected."""
        with pytest.raises(ValueError):
            SeriesResult(symbol="AAPL", bars=(_bar(date(2024, 3, 4)), _bar(date(2024, 3, 1))))

    def test_rejects_duplicate_dates(self):
        """Test that duplicate dates are rejected."""
        with pytest.raises(ValueError):
            SeriesResult(symbol="AAPL", bars=(_bar(date(2024, 3, 4)), _bar(date(2024, 3, 4))))


class TestFetchOutcome:
    """Unit tests for the outcome variants."""

    def test_ok_flag(self):
        """Test the ok discriminator on both variants."""
        assert FetchOk(SeriesResult(symbol="AAPL")).ok is True
        assert FetchErr(FetchErrorKind.NO_DATA, "none").ok is False

    def test_error_kind_values(self):
        """Test that kinds serialize to their upstream names."""
        assert FetchErrorKind.RATE_LIMIT.value == "RATE_LIMIT"
        assert FetchErrorKind("FETCH_FAILED") is FetchErrorKind.FETCH_FAILED
