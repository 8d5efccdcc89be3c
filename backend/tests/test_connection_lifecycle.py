"""
Tests for Connection and ConnectionLifecycle.
"""

import asyncio
import json

import pytest
from starlette.websockets import WebSocketState

from realtime.connection import Connection, ConnectionState
from realtime.constants import WSCloseCode
from realtime.lifecycle import ConnectionLifecycle, sanitize_log_data
from realtime.registry import RoomRegistry
from realtime.rooms import RoomFamily


class FakeWebSocket:
    """Minimal stand-in for a starlette WebSocket."""

    def __init__(self):
        self.client_state = WebSocketState.CONNECTING
        self.accepted = False
        self.sent: list[str] = []
        self.close_code = None

    async def accept(self):
        self.accepted = True
        self.client_state = WebSocketState.CONNECTED

    async def send_text(self, message: str):
        self.sent.append(message)

    async def close(self, code: int = 1000, reason: str | None = None):
        self.close_code = code
        self.client_state = WebSocketState.DISCONNECTED


class SlowAcceptWebSocket(FakeWebSocket):
    """Handshake that yields to the loop before completing."""

    async def accept(self):
        await asyncio.sleep(0)
        await super().accept()


class BrokenAcceptWebSocket(FakeWebSocket):
    async def accept(self):
        raise OSError("handshake failed")


def drain(connection: Connection) -> list[dict]:
    """Pop everything queued on a connection (call from inside the loop)."""
    messages = []
    while not connection._outbound.empty():
        messages.append(json.loads(connection._outbound.get_nowait()))
    return messages


@pytest.fixture
def registry():
    return RoomRegistry()


@pytest.fixture
def lifecycle(registry):
    return ConnectionLifecycle(registry, max_connections=2, outbound_queue_size=4)


class TestOpen:
    @pytest.mark.asyncio
    async def test_open_accepts_with_no_rooms(self, lifecycle, registry):
        ws = FakeWebSocket()
        conn = await lifecycle.open(ws)

        assert ws.accepted
        assert conn.state is ConnectionState.CONNECTED
        assert registry.rooms_of(conn) == set()
        assert lifecycle.get(conn.id) is conn

    @pytest.mark.asyncio
    async def test_connection_ids_are_unique(self, lifecycle):
        a = await lifecycle.open(FakeWebSocket())
        b = await lifecycle.open(FakeWebSocket())
        assert a.id != b.id

    @pytest.mark.asyncio
    async def test_capacity_rejected(self, lifecycle):
        await lifecycle.open(FakeWebSocket())
        await lifecycle.open(FakeWebSocket())

        ws = FakeWebSocket()
        with pytest.raises(ConnectionError):
            await lifecycle.open(ws)
        assert not ws.accepted

    @pytest.mark.asyncio
    async def test_simultaneous_opens_respect_capacity(self, registry):
        lifecycle = ConnectionLifecycle(registry, max_connections=1)

        results = await asyncio.gather(
            lifecycle.open(SlowAcceptWebSocket()),
            lifecycle.open(SlowAcceptWebSocket()),
            return_exceptions=True,
        )

        assert sum(isinstance(r, Connection) for r in results) == 1
        assert sum(isinstance(r, ConnectionError) for r in results) == 1
        assert lifecycle.connection_count == 1

    @pytest.mark.asyncio
    async def test_failed_accept_releases_slot(self, registry):
        lifecycle = ConnectionLifecycle(registry, max_connections=1)

        with pytest.raises(OSError):
            await lifecycle.open(BrokenAcceptWebSocket())

        conn = await lifecycle.open(FakeWebSocket())
        assert conn.is_open
        assert lifecycle.connection_count == 1


class TestJoinMessages:
    """Client join requests: join-admin, join-menu, join-order."""

    @pytest.mark.asyncio
    async def test_join_admin(self, lifecycle, registry):
        conn = await lifecycle.open(FakeWebSocket())

        lifecycle.handle_message(conn, json.dumps({"event": "join-admin", "data": "42"}))
        await asyncio.sleep(0)

        assert registry.is_member(conn, "admin_42")
        assert conn.state is ConnectionState.JOINED
        assert drain(conn) == [{"event": "joined", "data": {"room": "admin_42"}}]

    @pytest.mark.asyncio
    async def test_binary_frame_replies_error(self, lifecycle):
        conn = await lifecycle.open(FakeWebSocket())

        lifecycle.handle_binary(conn, b"\x00\x01")
        await asyncio.sleep(0)

        assert conn.is_open
        assert drain(conn) == [
            {"event": "error", "data": {"detail": "Binary frames are not supported"}}
        ]

    @pytest.mark.asyncio
    async def test_join_order_with_int(self, lifecycle, registry):
        conn = await lifecycle.open(FakeWebSocket())
        lifecycle.handle_message(conn, json.dumps({"event": "join-order", "data": 17}))
        assert registry.is_member(conn, "order_17")

    @pytest.mark.asyncio
    async def test_join_several_rooms(self, lifecycle, registry):
        conn = await lifecycle.open(FakeWebSocket())
        lifecycle.handle_message(conn, json.dumps({"event": "join-admin", "data": "42"}))
        lifecycle.handle_message(conn, json.dumps({"event": "join-menu", "data": "42"}))
        lifecycle.handle_message(conn, json.dumps({"event": "join-admin", "data": "42"}))

        assert registry.rooms_of(conn) == {"admin_42", "menu_42"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            json.dumps(["join-admin", "42"]),
            json.dumps({"data": "42"}),
            json.dumps({"event": "leave-admin", "data": "42"}),
            json.dumps({"event": "join-admin"}),
            json.dumps({"event": "join-admin", "data": ""}),
            json.dumps({"event": "join-order", "data": {"id": 17}}),
        ],
    )
    async def test_bad_messages_reply_error(self, lifecycle, registry, raw):
        conn = await lifecycle.open(FakeWebSocket())

        lifecycle.handle_message(conn, raw)
        await asyncio.sleep(0)

        replies = drain(conn)
        assert len(replies) == 1
        assert replies[0]["event"] == "error"
        assert replies[0]["data"]["detail"]
        assert registry.rooms_of(conn) == set()
        assert conn.is_open

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["ping", json.dumps({"event": "ping"})])
    async def test_ping(self, lifecycle, raw):
        conn = await lifecycle.open(FakeWebSocket())
        lifecycle.handle_message(conn, raw)
        await asyncio.sleep(0)
        assert drain(conn) == [{"event": "pong", "data": None}]

    @pytest.mark.asyncio
    async def test_join_after_close_is_ignored(self, lifecycle, registry):
        conn = await lifecycle.open(FakeWebSocket())
        lifecycle.close(conn)

        assert lifecycle.join(conn, RoomFamily.ADMIN, "42") is None
        assert registry.members("admin_42") == set()


class TestClose:
    @pytest.mark.asyncio
    async def test_close_leaves_all_rooms(self, lifecycle, registry):
        conn = await lifecycle.open(FakeWebSocket())
        lifecycle.join(conn, RoomFamily.ADMIN, "42")
        lifecycle.join(conn, RoomFamily.ORDER, 17)

        assert lifecycle.close(conn) == 2

        assert conn.state is ConnectionState.DISCONNECTED
        assert registry.room_count == 0
        assert lifecycle.connection_count == 0
        assert registry.broadcast("admin_42", "new-order", {"id": 1}) == 0

    @pytest.mark.asyncio
    async def test_close_twice(self, lifecycle, registry):
        conn = await lifecycle.open(FakeWebSocket())
        lifecycle.join(conn, RoomFamily.ADMIN, "42")

        lifecycle.close(conn)
        assert lifecycle.close(conn) == 0

    @pytest.mark.asyncio
    async def test_close_frees_capacity(self, lifecycle):
        a = await lifecycle.open(FakeWebSocket())
        await lifecycle.open(FakeWebSocket())
        lifecycle.close(a)

        conn = await lifecycle.open(FakeWebSocket())
        assert conn.is_open

    @pytest.mark.asyncio
    async def test_shutdown_closes_everything(self, lifecycle, registry):
        ws = FakeWebSocket()
        conn = await lifecycle.open(ws)
        lifecycle.join(conn, RoomFamily.MENU, "42")

        await lifecycle.shutdown()

        assert ws.close_code == WSCloseCode.GOING_AWAY
        assert not conn.is_open
        assert registry.room_count == 0


class TestConnectionOutbound:
    @pytest.mark.asyncio
    async def test_pump_writes_in_order(self):
        ws = FakeWebSocket()
        await ws.accept()
        conn = Connection(ws, asyncio.get_running_loop())

        for i in range(3):
            assert conn.send("order-updated", {"seq": i}) is True

        task = asyncio.create_task(conn.pump())
        for _ in range(10):
            await asyncio.sleep(0)
        task.cancel()

        assert [json.loads(m)["data"]["seq"] for m in ws.sent] == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_send_after_disconnect_returns_false(self):
        conn = Connection(FakeWebSocket(), asyncio.get_running_loop())
        conn.mark_disconnected()
        assert conn.send_text("{}") is False

    @pytest.mark.asyncio
    async def test_full_buffer_drops_and_counts(self):
        conn = Connection(FakeWebSocket(), asyncio.get_running_loop(), max_queue_size=2)

        for i in range(5):
            conn.send("order-updated", {"seq": i})
        await asyncio.sleep(0)

        assert conn.pending == 2
        assert conn.dropped_messages == 3
        assert [m["data"]["seq"] for m in drain(conn)] == [0, 1]

    def test_send_after_loop_closed_returns_false(self):
        loop = asyncio.new_event_loop()
        conn = Connection(FakeWebSocket(), loop)
        loop.close()
        assert conn.send_text("{}") is False

    def test_mark_disconnected_once(self):
        loop = asyncio.new_event_loop()
        try:
            conn = Connection(FakeWebSocket(), loop)
            assert conn.mark_disconnected() is True
            assert conn.mark_disconnected() is False
        finally:
            loop.close()


def test_sanitize_log_data():
    assert sanitize_log_data("a\nb") == "a\\nb"
    assert sanitize_log_data("x" * 200, max_length=10) == "x" * 10 + "..."
