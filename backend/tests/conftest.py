"""Pytest configuration and fixtures."""

import pytest

from app.config import Settings


@pytest.fixture
def memory_settings():
    """Settings that never touch disk or the network."""
    return Settings(stock_api_key="", store_backend="memory")
