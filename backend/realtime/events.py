"""
Typed realtime events.

One frozen variant per event name. Each variant is bound to exactly one room
family, so the room an event goes to and the payload shape it carries are
fixed by its type:

    NewOrder            -> admin_{tenant}   full order with table and items
    OrderUpdated        -> admin_{tenant}   full order row
    OrderStatusUpdated  -> order_{id}       {"status": ...}
    MenuUpdated         -> menu_{tenant}    full menu row
    TableUpdated        -> admin_{tenant}   table row, status "occupied"
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Union

from realtime.rooms import RoomFamily, normalize_scope_id, room_name
from shared.config.constants import TableStatus


class EventName(str, Enum):
    """Server to client broadcast events."""

    NEW_ORDER = "new-order"
    ORDER_UPDATED = "order-updated"
    ORDER_STATUS_UPDATED = "order-status-updated"
    MENU_UPDATED = "menu-updated"
    TABLE_UPDATED = "table-updated"


def _require_row(value: Any, field: str) -> None:
    if not isinstance(value, dict):
        raise ValueError(f"{field} must be a dict, got {type(value).__name__}")


class _RoomEvent:
    """Routing shared by all variants."""

    name: ClassVar[EventName]
    family: ClassVar[RoomFamily]

    @property
    def scope_id(self) -> Any:
        raise NotImplementedError

    @property
    def payload(self) -> dict[str, Any]:
        raise NotImplementedError

    @property
    def room(self) -> str:
        return room_name(self.family, self.scope_id)

    def to_message(self) -> dict[str, Any]:
        return {"event": self.name.value, "data": self.payload}


@dataclass(frozen=True)
class NewOrder(_RoomEvent):
    """An order was created for a tenant. order must include table and line items."""

    tenant_id: str
    order: dict[str, Any]

    name: ClassVar[EventName] = EventName.NEW_ORDER
    family: ClassVar[RoomFamily] = RoomFamily.ADMIN

    def __post_init__(self) -> None:
        normalize_scope_id(self.tenant_id)
        _require_row(self.order, "order")

    @property
    def scope_id(self) -> str:
        return self.tenant_id

    @property
    def payload(self) -> dict[str, Any]:
        return self.order


@dataclass(frozen=True)
class OrderUpdated(_RoomEvent):
    """An order changed; the tenant dashboard gets the full row."""

    tenant_id: str
    order: dict[str, Any]

    name: ClassVar[EventName] = EventName.ORDER_UPDATED
    family: ClassVar[RoomFamily] = RoomFamily.ADMIN

    def __post_init__(self) -> None:
        normalize_scope_id(self.tenant_id)
        _require_row(self.order, "order")

    @property
    def scope_id(self) -> str:
        return self.tenant_id

    @property
    def payload(self) -> dict[str, Any]:
        return self.order


@dataclass(frozen=True)
class OrderStatusUpdated(_RoomEvent):
    """An order changed status; the customer view only needs the new status."""

    order_id: int | str
    status: str

    name: ClassVar[EventName] = EventName.ORDER_STATUS_UPDATED
    family: ClassVar[RoomFamily] = RoomFamily.ORDER

    def __post_init__(self) -> None:
        normalize_scope_id(self.order_id)
        if not isinstance(self.status, str) or not self.status:
            raise ValueError("status must be a non-empty string")

    @property
    def scope_id(self) -> int | str:
        return self.order_id

    @property
    def payload(self) -> dict[str, Any]:
        return {"status": self.status}


@dataclass(frozen=True)
class MenuUpdated(_RoomEvent):
    """A menu item of the tenant was updated."""

    tenant_id: str
    menu: dict[str, Any]

    name: ClassVar[EventName] = EventName.MENU_UPDATED
    family: ClassVar[RoomFamily] = RoomFamily.MENU

    def __post_init__(self) -> None:
        normalize_scope_id(self.tenant_id)
        _require_row(self.menu, "menu")

    @property
    def scope_id(self) -> str:
        return self.tenant_id

    @property
    def payload(self) -> dict[str, Any]:
        return self.menu


@dataclass(frozen=True)
class TableUpdated(_RoomEvent):
    """A table flipped to occupied when a customer opened its menu."""

    tenant_id: str
    table: dict[str, Any]

    name: ClassVar[EventName] = EventName.TABLE_UPDATED
    family: ClassVar[RoomFamily] = RoomFamily.ADMIN

    def __post_init__(self) -> None:
        normalize_scope_id(self.tenant_id)
        _require_row(self.table, "table")

    @property
    def scope_id(self) -> str:
        return self.tenant_id

    @property
    def payload(self) -> dict[str, Any]:
        return {**self.table, "status": TableStatus.OCCUPIED}


RealtimeEvent = Union[NewOrder, OrderUpdated, OrderStatusUpdated, MenuUpdated, TableUpdated]
