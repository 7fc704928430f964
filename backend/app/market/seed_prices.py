"""Seed prices and per-symbol parameters for the daily-bar simulator."""

# Starting prices for well-known symbols (first bar of every generated series)
SEED_PRICES: dict[str, float] = {
    "AAPL": 190.00,
    "MSFT": 420.00,
    "GOOGL": 175.00,
    "AMZN": 185.00,
    "NVDA": 800.00,
    "META": 500.00,
    "TSLA": 250.00,
    "JPM": 195.00,
    "SPY": 510.00,
    "QQQ": 440.00,
}

# sigma: annualized volatility, mu: annualized drift
SYMBOL_PARAMS: dict[str, dict[str, float]] = {
    "TSLA": {"sigma": 0.50, "mu": 0.03},
    "NVDA": {"sigma": 0.40, "mu": 0.08},
    "JPM": {"sigma": 0.18, "mu": 0.04},
    "SPY": {"sigma": 0.15, "mu": 0.06},
    "QQQ": {"sigma": 0.20, "mu": 0.07},
}

DEFAULT_PARAMS: dict[str, float] = {"sigma": 0.25, "mu": 0.05}

# Unknown symbols start somewhere in this band
PRICE_RANGE: tuple[float, float] = (20.0, 400.0)

# Typical daily volume band (shares)
VOLUME_RANGE: tuple[int, int] = (2_000_000, 60_000_000)

TRADING_DAYS_PER_YEAR = 252
COMPACT_BARS = 100
