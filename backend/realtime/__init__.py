"""
Realtime room-scoped notification layer.

- rooms: room families and room naming
- events: typed event variants
- registry: RoomRegistry (room -> members, broadcast)
- connection: Connection (one client link and its outbound buffer)
- lifecycle: ConnectionLifecycle (open / join / close)
- emitter: EventEmitter (post-commit, never raises)
- hub: RealtimeHub and FastAPI dependencies
- endpoint / router: the /ws WebSocket route
"""

from realtime.emitter import EventEmitter
from realtime.events import (
    EventName,
    MenuUpdated,
    NewOrder,
    OrderStatusUpdated,
    OrderUpdated,
    RealtimeEvent,
    TableUpdated,
)
from realtime.hub import RealtimeHub, get_emitter, get_realtime_hub
from realtime.registry import RoomRegistry
from realtime.rooms import JOIN_EVENTS, RoomFamily, parse_room_name, room_name

__all__ = [
    "EventEmitter",
    "EventName",
    "MenuUpdated",
    "NewOrder",
    "OrderStatusUpdated",
    "OrderUpdated",
    "RealtimeEvent",
    "TableUpdated",
    "RealtimeHub",
    "get_emitter",
    "get_realtime_hub",
    "RoomRegistry",
    "JOIN_EVENTS",
    "RoomFamily",
    "parse_room_name",
    "room_name",
]
