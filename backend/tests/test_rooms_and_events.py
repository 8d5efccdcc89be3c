"""
Tests for room naming and typed event routing.
"""

import pytest

from realtime.events import (
    EventName,
    MenuUpdated,
    NewOrder,
    OrderStatusUpdated,
    OrderUpdated,
    TableUpdated,
)
from realtime.rooms import JOIN_EVENTS, RoomFamily, normalize_scope_id, parse_room_name, room_name


class TestRoomNames:
    def test_families(self):
        assert room_name(RoomFamily.ADMIN, "42") == "admin_42"
        assert room_name(RoomFamily.MENU, "42") == "menu_42"
        assert room_name(RoomFamily.ORDER, 17) == "order_17"

    def test_string_family_accepted(self):
        assert room_name("order", "17") == "order_17"

    def test_family_helper(self):
        assert RoomFamily.ORDER.room(17) == "order_17"

    def test_int_and_str_scope_ids_match(self):
        """An order id sent as 17 or "17" names the same room."""
        assert room_name(RoomFamily.ORDER, 17) == room_name(RoomFamily.ORDER, "17")

    def test_uuid_tenant(self):
        tenant = "3f2c8a6e-1d2b-4c5e-9f00-aa11bb22cc33"
        assert room_name(RoomFamily.ADMIN, tenant) == f"admin_{tenant}"

    @pytest.mark.parametrize("bad", [None, "", "   ", True, 1.5, ["42"], {"id": 42}, "x" * 65])
    def test_invalid_scope_ids(self, bad):
        with pytest.raises(ValueError):
            normalize_scope_id(bad)

    def test_unknown_family(self):
        with pytest.raises(ValueError):
            room_name("kitchen", "42")

    def test_parse(self):
        assert parse_room_name("admin_42") == (RoomFamily.ADMIN, "42")
        assert parse_room_name("admin_a_b") == (RoomFamily.ADMIN, "a_b")

    @pytest.mark.parametrize("bad", ["admin", "admin_", "kitchen_1"])
    def test_parse_malformed(self, bad):
        with pytest.raises(ValueError):
            parse_room_name(bad)

    def test_join_events(self):
        assert JOIN_EVENTS["join-admin"] is RoomFamily.ADMIN
        assert JOIN_EVENTS["join-menu"] is RoomFamily.MENU
        assert JOIN_EVENTS["join-order"] is RoomFamily.ORDER
        assert "leave-admin" not in JOIN_EVENTS


class TestEventRouting:
    """Each event variant is bound to one room family and payload shape."""

    def test_new_order(self):
        event = NewOrder(tenant_id="42", order={"id": 17, "table": {"code": "T1"}})
        assert event.room == "admin_42"
        assert event.to_message() == {
            "event": "new-order",
            "data": {"id": 17, "table": {"code": "T1"}},
        }

    def test_order_updated(self):
        event = OrderUpdated(tenant_id="42", order={"id": 17, "status": "ready"})
        assert event.room == "admin_42"
        assert event.name is EventName.ORDER_UPDATED

    def test_order_status_updated_payload_is_status_only(self):
        event = OrderStatusUpdated(order_id=17, status="ready")
        assert event.room == "order_17"
        assert event.to_message() == {"event": "order-status-updated", "data": {"status": "ready"}}

    def test_menu_updated(self):
        event = MenuUpdated(tenant_id="42", menu={"id": 5, "name_en": "Soup"})
        assert event.room == "menu_42"
        assert event.payload["name_en"] == "Soup"

    def test_table_updated_is_occupied(self):
        event = TableUpdated(tenant_id="42", table={"id": 3, "code": "T1", "status": "available"})
        assert event.room == "admin_42"
        assert event.payload["status"] == "occupied"

    def test_events_are_frozen(self):
        event = OrderStatusUpdated(order_id=17, status="ready")
        with pytest.raises(AttributeError):
            event.status = "served"

    def test_invalid_tenant_rejected(self):
        with pytest.raises(ValueError):
            NewOrder(tenant_id="", order={"id": 1})

    def test_non_dict_row_rejected(self):
        with pytest.raises(ValueError):
            MenuUpdated(tenant_id="42", menu=["not", "a", "row"])

    def test_empty_status_rejected(self):
        with pytest.raises(ValueError):
            OrderStatusUpdated(order_id=17, status="")
