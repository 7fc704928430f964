"""Per-connection bootstrap and add/remove flows for the shared watchlist."""

from __future__ import annotations

import asyncio
import logging

from ..errors import StoreError
from ..market.interface import MarketDataClient
from ..market.models import FetchErr, FetchErrorKind, FetchOk, SeriesResult
from . import events
from .connections import Connection, ConnectionSet
from .registry import RegisterResult, UnregisterResult, WatchlistRegistry, normalize_symbol

logger = logging.getLogger(__name__)

EMPTY_SYMBOL_MESSAGE = "Please enter a stock symbol."
LOAD_FAILED_MESSAGE = "Failed to load initial stocks."
ADD_FAILED_MESSAGE = "Server error adding stock."
REMOVE_FAILED_MESSAGE = "Server error removing stock."
REQUEST_FAILED_MESSAGE = "Server error processing request."


class SyncCoordinator:
    """Keeps every connected client's watchlist in step with the store.

    Rules:
      - Bootstrap is unicast; symbols whose fetch fails are left out.
      - A symbol is validated by fetching before it is ever persisted.
      - "stockAdded" is broadcast only after the store confirms the insert.
        Losing an insert race still broadcasts the series already fetched,
        so all clients converge on one "added" event.
      - Removing an absent symbol is already satisfied: no broadcast, no error.
      - Every fault is reported to the requester only. Each request ends in
        exactly one terminal event for its requester.
    """

    def __init__(
        self,
        registry: WatchlistRegistry,
        market_client: MarketDataClient,
        connections: ConnectionSet | None = None,
    ) -> None:
        self._registry = registry
        self._client = market_client
        self.connections = connections if connections is not None else ConnectionSet()

    # --- Connection lifecycle ---

    async def connect(self, connection: Connection) -> None:
        """Attach a new connection and send it the current watchlist.

        Broadcasts that land while the snapshot is being built are held and
        replayed after ``initialStocks``, so the client's view converges.
        """
        self.connections.add(connection, ready=False)
        logger.info("A user connected: %s", connection.id)
        await self.bootstrap(connection)
        await self.connections.mark_ready(connection)

    def disconnect(self, connection_id: str) -> None:
        self.connections.discard(connection_id)
        logger.info("User disconnected: %s", connection_id)

    async def bootstrap(self, connection: Connection) -> None:
        try:
            symbols = await self._registry.list_all()
        except StoreError:
            logger.exception("Error sending initial stocks to %s", connection.id)
            await self._notify(connection, events.STOCK_ERROR, "", LOAD_FAILED_MESSAGE)
            return

        outcomes = await asyncio.gather(*(self._client.fetch(symbol) for symbol in symbols))
        payload = []
        for symbol, outcome in zip(symbols, outcomes):
            if isinstance(outcome, FetchOk):
                payload.append(outcome.series.to_dict())
            else:
                logger.warning("Omitting %s from initial stocks: %s", symbol, outcome.message)
        await self.connections.unicast(connection, events.INITIAL_STOCKS, payload)

    # --- Requests ---

    async def handle(self, connection: Connection, event: str, data: object) -> None:
        """Dispatch one client request.

        A fault the flows do not classify still ends the request with a
        generic ``stockError`` for the requester.
        """
        try:
            if event == events.ADD_STOCK:
                await self.add_stock(connection, data)
            elif event == events.REMOVE_STOCK:
                await self.remove_stock(connection, data)
            else:
                logger.warning("Unknown event %r from %s", event, connection.id)
                await self._notify(connection, events.STOCK_ERROR, "", f"Unknown event: {event}")
        except Exception:
            logger.exception("Unexpected error handling %s from %s", event, connection.id)
            await self._notify(
                connection, events.STOCK_ERROR, normalize_symbol(data), REQUEST_FAILED_MESSAGE
            )

    async def add_stock(self, connection: Connection, raw_symbol: object) -> None:
        symbol = normalize_symbol(raw_symbol)
        logger.info("Add stock request: %s by %s", symbol or raw_symbol, connection.id)
        if not symbol:
            await self._notify(connection, events.STOCK_ERROR, "", EMPTY_SYMBOL_MESSAGE)
            return

        try:
            exists = await self._registry.contains(symbol)
        except StoreError:
            logger.exception("Error adding stock %s", symbol)
            await self._notify(connection, events.STOCK_ERROR, symbol, ADD_FAILED_MESSAGE)
            return

        if exists:
            logger.info("%s already exists.", symbol)
            await self._reply_already_exists(connection, symbol)
            return

        outcome = await self._client.fetch(symbol)
        if isinstance(outcome, FetchErr):
            await self._report_fetch_failure(connection, symbol, outcome)
            return

        await self._commit_and_broadcast(connection, outcome.series)

    async def remove_stock(self, connection: Connection, raw_symbol: object) -> None:
        symbol = normalize_symbol(raw_symbol)
        logger.info("Remove stock request: %s by %s", symbol or raw_symbol, connection.id)
        if not symbol:
            await self._notify(connection, events.STOCK_ERROR, "", EMPTY_SYMBOL_MESSAGE)
            return

        try:
            result = await self._registry.unregister(symbol)
        except StoreError:
            logger.exception("Error removing stock %s", symbol)
            await self._notify(connection, events.STOCK_ERROR, symbol, REMOVE_FAILED_MESSAGE)
            return

        if result is UnregisterResult.REMOVED:
            await self.connections.broadcast(events.STOCK_REMOVED, symbol)
        else:
            logger.info("%s not found in store to remove.", symbol)

    # --- Internal ---

    async def _reply_already_exists(self, connection: Connection, symbol: str) -> None:
        outcome = await self._client.fetch(symbol)
        if isinstance(outcome, FetchOk):
            await self.connections.unicast(
                connection, events.STOCK_ALREADY_EXISTS, outcome.series.to_dict()
            )
        else:
            await self._notify(connection, events.STOCK_ERROR, symbol, outcome.message)

    async def _commit_and_broadcast(self, connection: Connection, series: SeriesResult) -> None:
        try:
            result = await self._registry.register(series.symbol)
        except StoreError:
            logger.exception("Error adding stock %s", series.symbol)
            await self._notify(connection, events.STOCK_ERROR, series.symbol, ADD_FAILED_MESSAGE)
            return

        if result is RegisterResult.ALREADY_EXISTS:
            logger.info("Lost insert race for %s; broadcasting fetched series", series.symbol)
        await self.connections.broadcast(events.STOCK_ADDED, series.to_dict())

    async def _report_fetch_failure(
        self, connection: Connection, symbol: str, outcome: FetchErr
    ) -> None:
        if outcome.kind is FetchErrorKind.RATE_LIMIT:
            await self._notify(connection, events.RATE_LIMIT_EXCEEDED, symbol, outcome.message)
        elif outcome.kind in (FetchErrorKind.INVALID_SYMBOL, FetchErrorKind.NO_DATA):
            await self._notify(
                connection,
                events.STOCK_ERROR,
                symbol,
                f"Could not find data for {symbol}. Please check the symbol.",
            )
        else:
            await self._notify(
                connection,
                events.STOCK_ERROR,
                symbol,
                f"Failed to fetch data for {symbol}: {outcome.message}",
            )

    async def _notify(self, connection: Connection, event: str, symbol: str, message: str) -> None:
        await self.connections.unicast(connection, event, events.notice(symbol, message))
