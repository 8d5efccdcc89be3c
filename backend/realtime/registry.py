"""
Room Registry.

Tracks which subscribers are members of which rooms and fans broadcasts out
to the current members of a room.

Rooms are not created or destroyed explicitly: a room exists while it has at
least one member. Broadcasting to a room nobody joined is a silent no-op.

Thread Safety:
    FastAPI runs sync route handlers in a worker thread pool, so broadcasts can
    originate off the event loop thread while joins and disconnects happen on
    it. A single lock covers join, leave_all and broadcast. Subscriber.send_text
    must not block and must not call back into the registry.
"""

from __future__ import annotations

import json
import threading
from collections import Counter
from typing import Any, Protocol

from realtime.rooms import parse_room_name
from shared.config.logging import get_logger

logger = get_logger(__name__)


class Subscriber(Protocol):
    """Anything that can receive encoded event messages."""

    id: str

    def send_text(self, message: str) -> bool: ...


def encode_message(event_name: str, payload: Any) -> str:
    """
    Encode an event as the wire message {"event": name, "data": payload}.

    Raises TypeError/ValueError if the payload is not JSON-serializable.
    """
    return json.dumps({"event": event_name, "data": payload}, allow_nan=False)


class RoomRegistry:
    """
    In-memory room -> members map with a reverse subscriber -> rooms index.

    Indices maintained:
    - _rooms: room name -> set[Subscriber]
    - _memberships: Subscriber -> set[room name] (for leave_all on disconnect)
    """

    def __init__(self) -> None:
        self._rooms: dict[str, set[Subscriber]] = {}
        self._memberships: dict[Subscriber, set[str]] = {}
        self._lock = threading.Lock()
        self._broadcasts = 0
        self._deliveries = 0
        self._failed_deliveries = 0

    # =========================================================================
    # Mutations
    # =========================================================================

    def join(self, subscriber: Subscriber, room: str) -> bool:
        """
        Add subscriber to room. Creates the room on first join.

        Returns:
            True if the subscriber was added, False if it was already a member.
        """
        with self._lock:
            members = self._rooms.setdefault(room, set())
            if subscriber in members:
                return False
            members.add(subscriber)
            self._memberships.setdefault(subscriber, set()).add(room)

        logger.debug("Joined room", subscriber=subscriber.id, room=room)
        return True

    def leave_all(self, subscriber: Subscriber) -> int:
        """
        Remove subscriber from every room it belongs to.
        Rooms left without members are dropped. Calling it again is a no-op.

        Returns:
            Number of rooms the subscriber was removed from.
        """
        with self._lock:
            rooms = self._memberships.pop(subscriber, set())
            for room in rooms:
                members = self._rooms.get(room)
                if members is None:
                    continue
                members.discard(subscriber)
                if not members:
                    del self._rooms[room]

        if rooms:
            logger.debug("Left rooms", subscriber=subscriber.id, rooms=sorted(rooms))
        return len(rooms)

    def broadcast(self, room: str, event_name: str, payload: Any) -> int:
        """
        Deliver (event_name, payload) to every current member of room.

        The message is encoded once, before any member is contacted, so an
        unserializable payload raises without partial delivery. A member whose
        send fails is logged and skipped.

        Returns:
            Number of members the message was handed to (0 for an empty room).
        """
        message = encode_message(event_name, payload)

        delivered = 0
        failed = 0
        with self._lock:
            self._broadcasts += 1
            members = self._rooms.get(room)
            if not members:
                return 0

            # Sends only enqueue, so holding the lock keeps per-room emission order
            for subscriber in list(members):
                try:
                    if subscriber.send_text(message):
                        delivered += 1
                except Exception as e:
                    failed += 1
                    logger.warning(
                        "Failed to deliver event to subscriber",
                        subscriber=subscriber.id,
                        room=room,
                        event=event_name,
                        error=str(e),
                    )

            self._deliveries += delivered
            self._failed_deliveries += failed

        logger.debug("Broadcast event", room=room, event=event_name, delivered=delivered)
        return delivered

    # =========================================================================
    # Queries (return copies)
    # =========================================================================

    def members(self, room: str) -> set[Subscriber]:
        with self._lock:
            return set(self._rooms.get(room, ()))

    def rooms_of(self, subscriber: Subscriber) -> set[str]:
        with self._lock:
            return set(self._memberships.get(subscriber, ()))

    def is_member(self, subscriber: Subscriber, room: str) -> bool:
        with self._lock:
            return subscriber in self._rooms.get(room, ())

    @property
    def room_count(self) -> int:
        with self._lock:
            return len(self._rooms)

    def get_stats(self) -> dict[str, Any]:
        """Room and delivery counters for the health endpoint."""
        with self._lock:
            rooms_by_family: Counter[str] = Counter()
            for room in self._rooms:
                try:
                    family, _ = parse_room_name(room)
                except ValueError:
                    rooms_by_family["other"] += 1
                else:
                    rooms_by_family[family.value] += 1

            return {
                "rooms": len(self._rooms),
                "rooms_by_family": dict(rooms_by_family),
                "subscribers": len(self._memberships),
                "memberships": sum(len(m) for m in self._rooms.values()),
                "broadcasts": self._broadcasts,
                "deliveries": self._deliveries,
                "failed_deliveries": self._failed_deliveries,
            }
