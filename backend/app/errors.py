"""Custom exceptions shared across the service."""


class WatchlistAppError(Exception):
    """Base exception for all app-specific errors."""


class ConfigError(WatchlistAppError):
    """Raised when environment configuration is invalid or missing."""


class StoreError(WatchlistAppError):
    """Raised when the symbol store cannot complete an operation."""


class DuplicateKeyError(StoreError):
    """Raised by SymbolStore.insert when the symbol is already stored."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"Symbol already stored: {symbol}")
        self.symbol = symbol
