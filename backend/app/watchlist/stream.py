"""WebSocket endpoint carrying watchlist events."""

from __future__ import annotations

import asyncio
import json
import logging
import uuid

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from . import events
from .connections import Connection
from .coordinator import SyncCoordinator

logger = logging.getLogger(__name__)


class WebSocketConnection(Connection):
    """Connection adapter over a Starlette WebSocket.

    Sends are serialized per connection so concurrent request tasks cannot
    interleave frames.
    """

    def __init__(self, websocket: WebSocket, connection_id: str | None = None) -> None:
        self.id = connection_id or uuid.uuid4().hex[:12]
        self._ws = websocket
        self._send_lock = asyncio.Lock()

    async def send(self, event: str, data: object) -> None:
        async with self._send_lock:
            await self._ws.send_json(events.frame(event, data))


def create_watchlist_router(coordinator: SyncCoordinator) -> APIRouter:
    """Create the watchlist WebSocket router bound to a coordinator.

    This factory pattern lets us inject the coordinator without globals.
    """
    router = APIRouter(tags=["watchlist"])
    # Request tasks outlive their connection; hold references until they finish
    pending: set[asyncio.Task] = set()

    @router.websocket("/ws/watchlist")
    async def watchlist_socket(websocket: WebSocket) -> None:
        """Bidirectional watchlist channel.

        On connect the client receives ``initialStocks``. It may then send

            {"event": "addStock", "data": "aapl"}
            {"event": "removeStock", "data": "AAPL"}

        and receives unicast notices or broadcast ``stockAdded`` /
        ``stockRemoved`` frames in the same envelope.
        """
        await websocket.accept()
        connection = WebSocketConnection(websocket)

        try:
            await coordinator.connect(connection)
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    raise WebSocketDisconnect(message.get("code", 1000))
                # Binary frames carry no "text" and are rejected as malformed
                request = _parse_request(message.get("text"))
                if request is None:
                    await coordinator.connections.unicast(
                        connection,
                        events.STOCK_ERROR,
                        events.notice("", "Malformed request."),
                    )
                    continue

                event, data = request
                task = asyncio.create_task(
                    coordinator.handle(connection, event, data),
                    name=f"watchlist-{event}-{connection.id}",
                )
                pending.add(task)
                task.add_done_callback(_finish_task(pending))
        except WebSocketDisconnect:
            pass
        finally:
            coordinator.disconnect(connection.id)

    return router


def _parse_request(text: str | None) -> tuple[str, object] | None:
    """Decode ``{"event": ..., "data": ...}``. Returns None if malformed."""
    if text is None:
        return None
    try:
        message = json.loads(text)
    except ValueError:
        return None
    if not isinstance(message, dict) or not isinstance(message.get("event"), str):
        return None
    return message["event"], message.get("data")


def _finish_task(pending: set[asyncio.Task]):
    def _done(task: asyncio.Task) -> None:
        pending.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Watchlist request %s failed", task.get_name(), exc_info=task.exception())

    return _done
