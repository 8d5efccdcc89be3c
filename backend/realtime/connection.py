"""
A single realtime client link.

Outbound messages go through a bounded per-connection queue drained by
pump() on the connection's event loop. send_text() only schedules an
enqueue on that loop, so it is safe from any thread, never blocks and
preserves call order.
"""

from __future__ import annotations

import asyncio
import time
import uuid
from enum import Enum
from typing import Any

from fastapi import WebSocket
from starlette.websockets import WebSocketState

from realtime.registry import encode_message
from shared.config.logging import get_logger

logger = get_logger(__name__)


def is_ws_connected(ws: WebSocket) -> bool:
    """Check if the WebSocket can still be written to."""
    try:
        return ws.client_state == WebSocketState.CONNECTED
    except AttributeError:
        return False


class ConnectionState(str, Enum):
    CONNECTED = "connected"  # accepted, no rooms yet
    JOINED = "joined"  # member of one or more rooms
    DISCONNECTED = "disconnected"  # terminal


class Connection:
    """
    Opaque identifier, owning loop and outbound buffer of one client link.
    Identifiers are random and never reused.
    """

    def __init__(
        self,
        websocket: WebSocket,
        loop: asyncio.AbstractEventLoop,
        max_queue_size: int = 256,
    ) -> None:
        self.id = uuid.uuid4().hex
        self.websocket = websocket
        self.connected_at = time.time()
        self.state = ConnectionState.CONNECTED
        self.dropped_messages = 0
        self._loop = loop
        self._outbound: asyncio.Queue[str] = asyncio.Queue(maxsize=max_queue_size)

    def __repr__(self) -> str:
        return f"<Connection(id={self.id[:8]}, state={self.state.value})>"

    @property
    def is_open(self) -> bool:
        return self.state is not ConnectionState.DISCONNECTED

    @property
    def pending(self) -> int:
        return self._outbound.qsize()

    # =========================================================================
    # State transitions
    # =========================================================================

    def mark_joined(self) -> None:
        if self.state is ConnectionState.CONNECTED:
            self.state = ConnectionState.JOINED

    def mark_disconnected(self) -> bool:
        """Enter the terminal state. Returns False if already disconnected."""
        if self.state is ConnectionState.DISCONNECTED:
            return False
        self.state = ConnectionState.DISCONNECTED
        return True

    # =========================================================================
    # Outbound
    # =========================================================================

    def send_text(self, message: str) -> bool:
        """
        Schedule an encoded message for delivery.

        Returns:
            False if the connection is disconnected or its loop is gone.
        """
        if not self.is_open:
            return False
        try:
            self._loop.call_soon_threadsafe(self._enqueue, message)
        except RuntimeError:
            # Event loop already closed (process shutting down)
            logger.warning("Connection loop closed, message not sent", connection_id=self.id)
            return False
        return True

    def send(self, event_name: str, data: Any) -> bool:
        return self.send_text(encode_message(event_name, data))

    def _enqueue(self, message: str) -> None:
        if not self.is_open:
            return
        try:
            self._outbound.put_nowait(message)
        except asyncio.QueueFull:
            self.dropped_messages += 1
            logger.warning(
                "Outbound buffer full, dropping message",
                connection_id=self.id,
                dropped=self.dropped_messages,
            )

    async def pump(self) -> None:
        """Write queued messages to the socket in FIFO order until the link closes."""
        while True:
            message = await self._outbound.get()
            if not is_ws_connected(self.websocket):
                return
            await self.websocket.send_text(message)
