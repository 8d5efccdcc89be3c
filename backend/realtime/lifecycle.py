"""
Connection Lifecycle Manager.

Bridges the transport's connect / message / disconnect lifecycle into Room
Registry operations:

    open()            Connected, no rooms
    handle_message()  join-* requests add rooms (Joined-to-N)
    close()           Disconnected, leave_all exactly once

There is no leave message: membership is only cleared wholesale on close.
"""

from __future__ import annotations

import asyncio
import json
import threading
from typing import Any

from fastapi import WebSocket

from realtime.connection import Connection, ConnectionState
from realtime.constants import MSG_ERROR, MSG_JOINED, MSG_PING, MSG_PONG, WSCloseCode
from realtime.registry import RoomRegistry
from realtime.rooms import JOIN_EVENTS, RoomFamily, room_name
from shared.config.logging import get_logger

logger = get_logger(__name__)


def sanitize_log_data(data: Any, max_length: int = 100) -> str:
    """Trim client-supplied text before it goes into a log line."""
    text = str(data).replace("\n", "\\n").replace("\r", "\\r")
    if len(text) > max_length:
        return text[:max_length] + "..."
    return text


class ConnectionLifecycle:
    """
    Owns the set of open connections and applies their join requests
    to the shared RoomRegistry.
    """

    def __init__(
        self,
        registry: RoomRegistry,
        max_connections: int = 1000,
        outbound_queue_size: int = 256,
    ) -> None:
        self._registry = registry
        self._max_connections = max_connections
        self._outbound_queue_size = outbound_queue_size
        self._connections: dict[str, Connection] = {}
        # Slots held by sockets still completing the accept handshake
        self._opening = 0
        self._lock = threading.Lock()

    @property
    def registry(self) -> RoomRegistry:
        return self._registry

    @property
    def connection_count(self) -> int:
        with self._lock:
            return len(self._connections)

    def get(self, connection_id: str) -> Connection | None:
        with self._lock:
            return self._connections.get(connection_id)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def open(self, websocket: WebSocket) -> Connection:
        """
        Accept the socket and register a new connection with no rooms.

        Raises:
            ConnectionError: If the server is at ws_max_total_connections.
        """
        with self._lock:
            if len(self._connections) + self._opening >= self._max_connections:
                raise ConnectionError(
                    f"Server at connection capacity ({self._max_connections})"
                )
            self._opening += 1

        try:
            await websocket.accept()
            connection = Connection(
                websocket,
                asyncio.get_running_loop(),
                max_queue_size=self._outbound_queue_size,
            )
            with self._lock:
                self._connections[connection.id] = connection
        finally:
            with self._lock:
                self._opening -= 1

        logger.info("Realtime connection opened", connection_id=connection.id)
        return connection

    def join(self, connection: Connection, family: RoomFamily, scope_id: Any) -> str | None:
        """
        Add the connection to the room for family/scope_id.

        Returns:
            The room name, or None if the connection is already disconnected.

        Raises:
            ValueError: If scope_id cannot be used in a room name.
        """
        room = room_name(family, scope_id)
        if not connection.is_open:
            logger.debug("Join ignored on closed connection", connection_id=connection.id, room=room)
            return None

        self._registry.join(connection, room)
        connection.mark_joined()
        return room

    def close(self, connection: Connection) -> int:
        """
        Enter the terminal state and remove the connection from every room.
        Safe to call more than once; only the first call does anything.

        Returns:
            Number of rooms left.
        """
        if not connection.mark_disconnected():
            return 0

        with self._lock:
            self._connections.pop(connection.id, None)
        rooms_left = self._registry.leave_all(connection)

        logger.info(
            "Realtime connection closed",
            connection_id=connection.id,
            rooms_left=rooms_left,
            dropped_messages=connection.dropped_messages,
        )
        return rooms_left

    async def shutdown(self) -> None:
        """Close every open connection. Called from the app lifespan."""
        with self._lock:
            connections = list(self._connections.values())

        for connection in connections:
            try:
                await connection.websocket.close(
                    code=WSCloseCode.GOING_AWAY,
                    reason="Server shutdown",
                )
            except Exception as e:
                logger.debug("Error closing connection during shutdown", connection_id=connection.id, error=str(e))
            self.close(connection)

        if connections:
            logger.info("Realtime connections closed on shutdown", count=len(connections))

    # =========================================================================
    # Client messages
    # =========================================================================

    def handle_message(self, connection: Connection, raw: str) -> None:
        """
        Handle one client message.

        Accepted forms:
            {"event": "join-admin" | "join-menu" | "join-order", "data": <scope id>}
            {"event": "ping"} or the plain text "ping"

        Replies "joined" with the room name, "pong" to pings, and "error" for
        anything else. Errors never close the connection.
        """
        if raw.strip() == MSG_PING:
            connection.send(MSG_PONG, None)
            return

        try:
            message = json.loads(raw)
        except json.JSONDecodeError:
            self._reply_error(connection, "Message must be JSON", raw)
            return

        if not isinstance(message, dict) or not isinstance(message.get("event"), str):
            self._reply_error(connection, "Message must be an object with an event name", raw)
            return

        event = message["event"]
        if event == MSG_PING:
            connection.send(MSG_PONG, None)
            return

        family = JOIN_EVENTS.get(event)
        if family is None:
            self._reply_error(connection, f"Unknown event: {sanitize_log_data(event, 40)}", raw)
            return

        try:
            room = self.join(connection, family, message.get("data"))
        except ValueError as e:
            self._reply_error(connection, str(e), raw)
            return

        if room is not None:
            connection.send(MSG_JOINED, {"room": room})

    def handle_binary(self, connection: Connection, data: bytes) -> None:
        """Binary frames carry no events; reply "error" and keep the link."""
        self._reply_error(connection, "Binary frames are not supported", f"<{len(data)} bytes>")

    def _reply_error(self, connection: Connection, detail: str, raw: str) -> None:
        logger.debug(
            "Rejected client message",
            connection_id=connection.id,
            detail=detail,
            message=sanitize_log_data(raw),
        )
        connection.send(MSG_ERROR, {"detail": detail})

    def get_stats(self) -> dict[str, Any]:
        with self._lock:
            connections = list(self._connections.values())
        return {
            "connections": len(connections),
            "max_connections": self._max_connections,
            "joined_connections": sum(1 for c in connections if c.state is ConnectionState.JOINED),
            "pending_messages": sum(c.pending for c in connections),
        }
