"""Environment-driven service configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Self

from dotenv import load_dotenv

from .errors import ConfigError


@dataclass(frozen=True)
class Settings:
    """Runtime settings loaded from environment variables."""

    stock_api_key: str = ""
    alpha_vantage_url: str = "https://www.alphavantage.co/query"
    alpha_vantage_output_size: str = "compact"
    request_timeout_seconds: float = 15.0
    store_backend: str = "sqlite"
    watchlist_db_path: str = "data/watchlist.db"
    client_origin: str = "http://localhost:3000"
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"
    log_file: str | None = None

    @classmethod
    def from_env(cls, dotenv: bool = True) -> Self:
        """Build settings from environment variables (and .env, if present)."""
        if dotenv:
            load_dotenv()

        try:
            settings = cls(
                stock_api_key=os.getenv("STOCK_API_KEY", "").strip(),
                alpha_vantage_url=os.getenv(
                    "ALPHA_VANTAGE_URL", "https://www.alphavantage.co/query"
                ).strip(),
                alpha_vantage_output_size=os.getenv("ALPHA_VANTAGE_OUTPUT_SIZE", "compact")
                .strip()
                .lower(),
                request_timeout_seconds=float(os.getenv("REQUEST_TIMEOUT_SECONDS", "15")),
                store_backend=os.getenv("STORE_BACKEND", "sqlite").strip().lower(),
                watchlist_db_path=os.getenv("WATCHLIST_DB_PATH", "data/watchlist.db").strip(),
                client_origin=os.getenv("CLIENT_ORIGIN", "http://localhost:3000").strip(),
                host=os.getenv("HOST", "0.0.0.0").strip(),
                port=int(os.getenv("PORT", "5000")),
                log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
                log_file=os.getenv("LOG_FILE", "").strip() or None,
            )
        except ValueError as exc:
            raise ConfigError(
                "One or more numeric environment variables are invalid. "
                "Check PORT and REQUEST_TIMEOUT_SECONDS in your .env file."
            ) from exc

        return settings.validate()

    def validate(self) -> Self:
        """Validate loaded settings and raise clear config errors."""
        if self.request_timeout_seconds <= 0:
            raise ConfigError("REQUEST_TIMEOUT_SECONDS must be a positive number.")

        if not 0 < self.port < 65536:
            raise ConfigError("PORT must be between 1 and 65535.")

        if self.store_backend not in {"sqlite", "memory"}:
            raise ConfigError("STORE_BACKEND must be one of: sqlite, memory.")

        if self.store_backend == "sqlite" and not self.watchlist_db_path:
            raise ConfigError("WATCHLIST_DB_PATH is required when STORE_BACKEND=sqlite.")

        if self.alpha_vantage_output_size not in {"compact", "full"}:
            raise ConfigError("ALPHA_VANTAGE_OUTPUT_SIZE must be one of: compact, full.")

        return self
