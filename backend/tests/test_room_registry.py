"""
Tests for RoomRegistry: membership, fan-out, ordering and disconnect cleanup.
"""

import json
import threading

import pytest

from realtime.registry import RoomRegistry, encode_message


class FakeSubscriber:
    """Records every message handed to it."""

    def __init__(self, name: str):
        self.id = name
        self.messages: list[dict] = []

    def send_text(self, message: str) -> bool:
        self.messages.append(json.loads(message))
        return True


class FailingSubscriber(FakeSubscriber):
    def send_text(self, message: str) -> bool:
        raise RuntimeError("socket gone")


@pytest.fixture
def registry():
    return RoomRegistry()


class TestEncodeMessage:
    def test_wire_shape(self):
        assert json.loads(encode_message("new-order", {"id": 1})) == {
            "event": "new-order",
            "data": {"id": 1},
        }

    def test_unserializable_payload_raises(self):
        with pytest.raises(TypeError):
            encode_message("new-order", {"when": object()})

    def test_nan_rejected(self):
        with pytest.raises(ValueError):
            encode_message("new-order", {"total": float("nan")})


class TestJoin:
    """Joining creates rooms on demand and is idempotent."""

    def test_join_adds_member(self, registry):
        a = FakeSubscriber("a")
        assert registry.join(a, "admin_42") is True
        assert registry.is_member(a, "admin_42")
        assert registry.members("admin_42") == {a}

    def test_join_twice_is_noop(self, registry):
        a = FakeSubscriber("a")
        registry.join(a, "admin_42")
        assert registry.join(a, "admin_42") is False
        assert len(registry.members("admin_42")) == 1

        registry.broadcast("admin_42", "new-order", {"id": 1})
        assert len(a.messages) == 1

    def test_subscriber_in_several_rooms(self, registry):
        a = FakeSubscriber("a")
        registry.join(a, "admin_42")
        registry.join(a, "menu_42")
        assert registry.rooms_of(a) == {"admin_42", "menu_42"}


class TestBroadcast:
    def test_only_members_receive(self, registry):
        """A broadcast reaches exactly the room's members."""
        a, b, c = FakeSubscriber("a"), FakeSubscriber("b"), FakeSubscriber("c")
        registry.join(a, "admin_42")
        registry.join(b, "admin_42")
        registry.join(c, "admin_7")

        delivered = registry.broadcast("admin_42", "table-updated", {"id": 3})

        assert delivered == 2
        assert a.messages == [{"event": "table-updated", "data": {"id": 3}}]
        assert b.messages == a.messages
        assert c.messages == []

    def test_empty_room_is_noop(self, registry):
        assert registry.broadcast("order_99", "order-status-updated", {"status": "ready"}) == 0
        assert registry.room_count == 0

    def test_same_room_events_keep_order(self, registry):
        a = FakeSubscriber("a")
        registry.join(a, "order_17")

        for status in ("preparing", "ready", "served"):
            registry.broadcast("order_17", "order-status-updated", {"status": status})

        assert [m["data"]["status"] for m in a.messages] == ["preparing", "ready", "served"]

    def test_failing_member_does_not_block_others(self, registry):
        bad, good = FailingSubscriber("bad"), FakeSubscriber("good")
        registry.join(bad, "admin_42")
        registry.join(good, "admin_42")

        delivered = registry.broadcast("admin_42", "new-order", {"id": 1})

        assert delivered == 1
        assert len(good.messages) == 1
        assert registry.get_stats()["failed_deliveries"] == 1

    def test_unserializable_payload_reaches_nobody(self, registry):
        a = FakeSubscriber("a")
        registry.join(a, "admin_42")

        with pytest.raises(TypeError):
            registry.broadcast("admin_42", "new-order", {"bad": object()})
        assert a.messages == []

    def test_concurrent_broadcasts_deliver_everything(self, registry):
        a = FakeSubscriber("a")
        registry.join(a, "admin_42")

        def worker(n):
            for i in range(50):
                registry.broadcast("admin_42", "order-updated", {"worker": n, "seq": i})

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(a.messages) == 200
        for n in range(4):
            seqs = [m["data"]["seq"] for m in a.messages if m["data"]["worker"] == n]
            assert seqs == list(range(50))


class TestLeaveAll:
    def test_removes_from_every_room(self, registry):
        a, b = FakeSubscriber("a"), FakeSubscriber("b")
        registry.join(a, "admin_42")
        registry.join(a, "order_17")
        registry.join(b, "admin_42")

        assert registry.leave_all(a) == 2

        assert registry.rooms_of(a) == set()
        assert registry.members("admin_42") == {b}
        registry.broadcast("admin_42", "new-order", {"id": 1})
        assert a.messages == []

    def test_empty_rooms_are_dropped(self, registry):
        a = FakeSubscriber("a")
        registry.join(a, "order_17")
        registry.leave_all(a)
        assert registry.room_count == 0

    def test_second_call_is_noop(self, registry):
        a = FakeSubscriber("a")
        registry.join(a, "admin_42")
        registry.leave_all(a)
        assert registry.leave_all(a) == 0

    def test_unknown_subscriber(self, registry):
        assert registry.leave_all(FakeSubscriber("ghost")) == 0


class TestStats:
    def test_counts_rooms_by_family(self, registry):
        a, b = FakeSubscriber("a"), FakeSubscriber("b")
        registry.join(a, "admin_42")
        registry.join(a, "menu_42")
        registry.join(b, "order_17")
        registry.join(b, "order_18")

        stats = registry.get_stats()

        assert stats["rooms"] == 4
        assert stats["rooms_by_family"] == {"admin": 1, "menu": 1, "order": 2}
        assert stats["subscribers"] == 2
        assert stats["memberships"] == 4
