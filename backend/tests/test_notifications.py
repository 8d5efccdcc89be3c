"""
Tests for the post-commit notification publishers.
"""

import json
from unittest.mock import MagicMock, patch

from realtime import EventEmitter, RoomRegistry
from rest_api.services.events import (
    publish_menu_updated,
    publish_new_order,
    publish_order_status_changed,
    publish_table_occupied,
)


class Recorder:
    def __init__(self, name="rec"):
        self.id = name
        self.messages = []

    def send_text(self, message):
        self.messages.append(json.loads(message))
        return True


def make_emitter(*rooms):
    registry = RoomRegistry()
    recorders = {}
    for room in rooms:
        recorders[room] = Recorder(room)
        registry.join(recorders[room], room)
    return EventEmitter(registry), recorders


class TestPublishNewOrder:
    def test_payload_includes_table_and_items(self, db_session, seed_order):
        emitter, rec = make_emitter("admin_42")

        assert publish_new_order(db_session, emitter, seed_order.id) == 1

        message = rec["admin_42"].messages[0]
        assert message["event"] == "new-order"
        assert message["data"]["id"] == 17
        assert message["data"]["table"]["code"] == "T1"
        assert message["data"]["order_items"][0]["menu"]["name_en"] == "Grilled Chicken"

    def test_missing_order(self, db_session):
        emitter, rec = make_emitter("admin_42")
        with patch("rest_api.services.events.notifications.logger") as mock_logger:
            assert publish_new_order(db_session, emitter, 999) == 0
        mock_logger.warning.assert_called_once()

    def test_emitter_failure_is_logged(self, db_session, seed_order):
        emitter = MagicMock()
        emitter.emit.side_effect = RuntimeError("boom")

        with patch("rest_api.services.events.notifications.logger") as mock_logger:
            assert publish_new_order(db_session, emitter, seed_order.id) == 0
        mock_logger.error.assert_called_once()


class TestPublishOrderStatusChanged:
    def test_both_audiences(self, db_session, seed_order):
        emitter, rec = make_emitter("order_17", "admin_42")
        seed_order.status = "ready"
        db_session.commit()

        assert publish_order_status_changed(emitter, seed_order) == 2

        assert rec["order_17"].messages == [{"event": "order-status-updated", "data": {"status": "ready"}}]
        admin_message = rec["admin_42"].messages[0]
        assert admin_message["event"] == "order-updated"
        assert admin_message["data"]["status"] == "ready"
        assert admin_message["data"]["total"] == 25.0

    def test_second_broadcast_runs_after_first_fails(self, seed_order):
        emitter = MagicMock()
        emitter.emit.side_effect = [RuntimeError("boom"), 1]

        with patch("rest_api.services.events.notifications.logger") as mock_logger:
            assert publish_order_status_changed(emitter, seed_order) == 1
        assert emitter.emit.call_count == 2
        mock_logger.error.assert_called_once()


class TestPublishMenuUpdated:
    def test_menu_room(self, seed_menu):
        emitter, rec = make_emitter("menu_42", "admin_42")

        assert publish_menu_updated(emitter, "42", seed_menu) == 1

        message = rec["menu_42"].messages[0]
        assert message["event"] == "menu-updated"
        assert message["data"]["price"] == 12.5
        assert rec["admin_42"].messages == []


class TestPublishTableOccupied:
    def test_admin_room(self, seed_table):
        emitter, rec = make_emitter("admin_42")

        assert publish_table_occupied(emitter, seed_table) == 1

        message = rec["admin_42"].messages[0]
        assert message["event"] == "table-updated"
        assert message["data"]["code"] == "T1"
        assert message["data"]["status"] == "occupied"
