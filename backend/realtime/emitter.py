"""
Event Emitter.

Called by HTTP handlers after their transaction has committed. Resolves the
target room from the event and broadcasts it. Notification is best-effort:
emit() and broadcast() never raise, so a realtime problem can never turn a
successful mutation into a failed response.
"""

from __future__ import annotations

from typing import Any

from realtime.events import EventName, RealtimeEvent
from realtime.registry import RoomRegistry
from realtime.rooms import RoomFamily, room_name
from shared.config.logging import get_logger

logger = get_logger(__name__)


class EventEmitter:
    """Typed and untyped entry points into RoomRegistry.broadcast."""

    def __init__(self, registry: RoomRegistry) -> None:
        self._registry = registry

    def emit(self, event: RealtimeEvent) -> int:
        """
        Broadcast a typed event to the room its variant is bound to.

        Returns:
            Number of connections the event was handed to (0 on failure).
        """
        try:
            room = event.room
            delivered = self._registry.broadcast(room, event.name.value, event.payload)
        except Exception:
            logger.error(
                "Failed to broadcast realtime event",
                event=getattr(getattr(event, "name", None), "value", None),
                exc_info=True,
            )
            return 0

        logger.debug("Realtime event emitted", event=event.name.value, room=room, delivered=delivered)
        return delivered

    def broadcast(
        self,
        family: RoomFamily | str,
        scope_id: Any,
        event_name: EventName | str,
        payload: Any,
    ) -> int:
        """
        Broadcast an untyped event to room {family}_{scope_id}.

        Returns:
            Number of connections the event was handed to (0 on failure).
        """
        try:
            room = room_name(family, scope_id)
            name = event_name.value if isinstance(event_name, EventName) else str(event_name)
            return self._registry.broadcast(room, name, payload)
        except Exception:
            logger.error(
                "Failed to broadcast realtime event",
                family=str(family),
                scope_id=str(scope_id),
                event=str(event_name),
                exc_info=True,
            )
            return 0
