"""Fixtures for market data tests."""

import pytest


@pytest.fixture
def daily_payload():
    """A trimmed TIME_SERIES_DAILY response, newest day first as Alpha Vantage sends it."""
    return {
        "Meta Data": {
            "1. Information": "Daily Prices (open, high, low, close) and Volumes",
            "2. Symbol": "AAPL",
            "3. Last Refreshed": "2024-03-05",
            "4. Output Size": "Compact",
            "5. Time Zone": "US/Eastern",
        },
        "Time Series (Daily)": {
            "2024-03-05": {
                "1. open": "170.76",
                "2. high": "172.04",
                "3. low": "169.62",
                "4. close": "170.12",
                "5. volume": "95132355",
            },
            "2024-03-01": {
                "1. open": "179.55",
                "2. high": "180.53",
                "3. low": "177.38",
                "4. close": "179.66",
                "5. volume": "73563082",
            },
            "2024-03-04": {
                "1. open": "176.15",
                "2. high": "176.90",
                "3. low": "173.79",
                "4. close": "175.10",
                "5. volume": "81510101",
            },
        },
    }
