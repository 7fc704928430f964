"""Event names exchanged with watchlist clients.

Every frame on the wire is ``{"event": <name>, "data": <payload>}``.
"""

from __future__ import annotations

# client -> server
ADD_STOCK = "addStock"
REMOVE_STOCK = "removeStock"

# server -> client
INITIAL_STOCKS = "initialStocks"  # unicast: list of series
STOCK_ADDED = "stockAdded"  # broadcast: series
STOCK_ALREADY_EXISTS = "stockAlreadyExists"  # unicast: series
STOCK_REMOVED = "stockRemoved"  # broadcast: symbol
RATE_LIMIT_EXCEEDED = "rateLimitExceeded"  # unicast: notice
STOCK_ERROR = "stockError"  # unicast: notice


def frame(event: str, data: object) -> dict:
    return {"event": event, "data": data}


def notice(symbol: str, message: str) -> dict:
    """Payload for rateLimitExceeded / stockError."""
    return {"symbol": symbol, "message": message}
