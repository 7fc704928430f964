"""Connected clients and delivery to one or all of them."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator

logger = logging.getLogger(__name__)


class Connection(ABC):
    """One client on the event channel. Delivery is in order per connection."""

    id: str

    @abstractmethod
    async def send(self, event: str, data: object) -> None:
        """Deliver one event. Raises if the underlying transport is gone."""


class ConnectionSet:
    """Connections currently attached to the server.

    Added on connect, discarded on disconnect. Broadcast iterates over a
    snapshot, so connections joining or leaving mid-broadcast are safe.

    A connection added with ``ready=False`` is still bootstrapping: broadcasts
    addressed to it are held back until ``mark_ready`` replays them, so they
    always arrive after its snapshot.
    """

    def __init__(self) -> None:
        self._connections: dict[str, Connection] = {}
        self._held: dict[str, list[tuple[str, object]]] = {}

    def add(self, connection: Connection, ready: bool = True) -> None:
        self._connections[connection.id] = connection
        if not ready:
            self._held[connection.id] = []

    def discard(self, connection_id: str) -> None:
        """Remove a connection. No-op if it is already gone."""
        self._connections.pop(connection_id, None)
        self._held.pop(connection_id, None)

    def get(self, connection_id: str) -> Connection | None:
        return self._connections.get(connection_id)

    def is_ready(self, connection_id: str) -> bool:
        return connection_id in self._connections and connection_id not in self._held

    async def mark_ready(self, connection: Connection) -> int:
        """Flush held broadcasts in order and start live delivery.

        Returns how many held events were delivered.
        """
        held = self._held.get(connection.id)
        delivered = 0
        # Broadcasts arriving during the flush append to ``held``
        while held:
            event, data = held.pop(0)
            if not await self.unicast(connection, event, data):
                return delivered
            delivered += 1
        self._held.pop(connection.id, None)
        if delivered:
            logger.debug("Replayed %d held event(s) to %s", delivered, connection.id)
        return delivered

    async def unicast(self, connection: Connection, event: str, data: object) -> bool:
        """Send to one connection. Returns False (and drops it) if the send fails."""
        try:
            await connection.send(event, data)
        except Exception as e:
            logger.warning("Dropping connection %s after failed %s send: %s", connection.id, event, e)
            self.discard(connection.id)
            return False
        return True

    async def broadcast(self, event: str, data: object) -> int:
        """Send to every connection. Returns how many deliveries succeeded or
        were held for a bootstrapping connection.
        """
        delivered = 0
        for connection in list(self._connections.values()):
            held = self._held.get(connection.id)
            if held is not None:
                held.append((event, data))
                delivered += 1
            elif await self.unicast(connection, event, data):
                delivered += 1
        logger.debug("Broadcast %s to %d connection(s)", event, delivered)
        return delivered

    def __iter__(self) -> Iterator[Connection]:
        return iter(list(self._connections.values()))

    def __len__(self) -> int:
        return len(self._connections)

    def __contains__(self, connection_id: str) -> bool:
        return connection_id in self._connections
