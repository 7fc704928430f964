"""Tests for ConnectionSet."""

import pytest

from app.watchlist.connections import ConnectionSet
from fakes import FakeConnection


class TestConnectionSetMembership:
    """Add / discard / lookup."""

    def test_add_and_discard(self):
        """Test basic membership."""
        conns = ConnectionSet()
        conn = FakeConnection("a")
        conns.add(conn)
        assert "a" in conns
        assert conns.get("a") is conn
        assert len(conns) == 1

        conns.discard("a")
        assert "a" not in conns
        assert len(conns) == 0

    def test_discard_missing(self):
        """Test that discarding an unknown id does not raise."""
        ConnectionSet().discard("nope")

    def test_iteration(self):
        """Test iteration over connected clients."""
        conns = ConnectionSet()
        for name in ("a", "b"):
            conns.add(FakeConnection(name))
        assert sorted(c.id for c in conns) == ["a", "b"]


@pytest.mark.asyncio
class TestConnectionSetDelivery:
    """Unicast and broadcast."""

    async def test_broadcast_reaches_everyone(self):
        """Test that broadcast sends to every connection."""
        conns = ConnectionSet()
        clients = [FakeConnection(name) for name in ("a", "b", "c")]
        for client in clients:
            conns.add(client)

        delivered = await conns.broadcast("stockRemoved", "AAPL")

        assert delivered == 3
        for client in clients:
            assert client.sent == [("stockRemoved", "AAPL")]

    async def test_broken_connection_is_dropped(self):
        """Test that one failing peer does not stop the broadcast."""
        conns = ConnectionSet()
        good, bad = FakeConnection("good"), FakeConnection("bad")
        bad.closed = True
        conns.add(bad)
        conns.add(good)

        delivered = await conns.broadcast("stockRemoved", "AAPL")

        assert delivered == 1
        assert good.sent == [("stockRemoved", "AAPL")]
        assert "bad" not in conns

    async def test_unicast_only_target(self):
        """Test that unicast reaches one connection."""
        conns = ConnectionSet()
        a, b = FakeConnection("a"), FakeConnection("b")
        conns.add(a)
        conns.add(b)

        assert await conns.unicast(a, "stockError", {"symbol": "X", "message": "m"})
        assert a.sent and not b.sent

    async def test_unicast_to_departed_connection(self):
        """Test that sending to a closed, already-removed connection returns False."""
        conns = ConnectionSet()
        gone = FakeConnection("gone")
        gone.closed = True

        assert await conns.unicast(gone, "stockError", {}) is False


@pytest.mark.asyncio
class TestConnectionSetHeldDelivery:
    """Broadcasts addressed to a connection that is still bootstrapping."""

    async def test_broadcast_held_until_ready(self):
        """Test that held events are replayed in order after the direct send."""
        conns = ConnectionSet()
        joining, live = FakeConnection("joining"), FakeConnection("live")
        conns.add(joining, ready=False)
        conns.add(live)

        assert await conns.broadcast("stockAdded", {"symbol": "AAPL"}) == 2
        assert await conns.broadcast("stockRemoved", "MSFT") == 2
        assert joining.sent == []
        assert not conns.is_ready("joining")

        await conns.unicast(joining, "initialStocks", [])
        assert await conns.mark_ready(joining) == 2

        assert joining.sent == [
            ("initialStocks", []),
            ("stockAdded", {"symbol": "AAPL"}),
            ("stockRemoved", "MSFT"),
        ]
        assert conns.is_ready("joining")
        await conns.broadcast("stockRemoved", "AAPL")
        assert joining.sent[-1] == ("stockRemoved", "AAPL")

    async def test_discard_drops_held_events(self):
        """Test that leaving mid-bootstrap forgets the held events."""
        conns = ConnectionSet()
        joining = FakeConnection("joining")
        conns.add(joining, ready=False)
        await conns.broadcast("stockRemoved", "AAPL")

        conns.discard("joining")

        assert await conns.mark_ready(joining) == 0
        assert joining.sent == []

    async def test_failed_replay_drops_connection(self):
        """Test that a send failure during replay discards the connection."""
        conns = ConnectionSet()
        joining = FakeConnection("joining")
        conns.add(joining, ready=False)
        await conns.broadcast("stockRemoved", "AAPL")
        joining.closed = True

        assert await conns.mark_ready(joining) == 0
        assert "joining" not in conns
