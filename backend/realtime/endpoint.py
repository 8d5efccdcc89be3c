"""
Realtime WebSocket endpoint.

Runs one client link end to end:
1. Open (accept + register, or reject at capacity)
2. Start the outbound pump
3. Message loop (receive timeout, size limit, join/ping handling)
4. Close in finally, so every exit path clears room membership
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from fastapi import WebSocket, WebSocketDisconnect
from starlette.types import Message

from realtime.connection import Connection
from realtime.constants import WSCloseCode
from shared.config.logging import audit_ws_connection, get_logger

if TYPE_CHECKING:
    from realtime.hub import RealtimeHub

logger = get_logger(__name__)


class RealtimeEndpoint:
    """
    Usage:
        @router.websocket("/ws")
        async def realtime_socket(websocket: WebSocket):
            await RealtimeEndpoint(websocket, websocket.app.state.realtime).run()
    """

    def __init__(
        self,
        websocket: WebSocket,
        hub: "RealtimeHub",
        endpoint_name: str = "/ws",
    ) -> None:
        self.websocket = websocket
        self.hub = hub
        self.endpoint_name = endpoint_name
        self.receive_timeout = hub.receive_timeout
        self.max_message_size = hub.max_message_size
        self.connection: Connection | None = None

    async def run(self) -> None:
        origin = self.websocket.headers.get("origin")
        lifecycle = self.hub.lifecycle

        try:
            connection = await lifecycle.open(self.websocket)
        except ConnectionError as e:
            audit_ws_connection(
                event_type="REJECTED",
                endpoint=self.endpoint_name,
                origin=origin,
                reason=str(e),
            )
            # Accept first, otherwise the client gets an HTTP 403 instead of 1013
            await self.websocket.accept()
            await self.websocket.close(code=WSCloseCode.SERVER_OVERLOADED, reason="Server busy")
            return

        self.connection = connection
        audit_ws_connection(
            event_type="CONNECT",
            endpoint=self.endpoint_name,
            connection_id=connection.id,
            origin=origin,
        )

        pump_task = asyncio.create_task(self._pump(connection))
        reason = "client_disconnect"
        try:
            reason = await self._message_loop(connection)
        except WebSocketDisconnect:
            reason = "client_disconnect"
        finally:
            lifecycle.close(connection)
            pump_task.cancel()
            audit_ws_connection(
                event_type="DISCONNECT",
                endpoint=self.endpoint_name,
                connection_id=connection.id,
                reason=reason,
            )

    async def _pump(self, connection: Connection) -> None:
        try:
            await connection.pump()
        except (WebSocketDisconnect, RuntimeError, OSError) as e:
            # Socket closed under us; the receive side will see the disconnect
            logger.debug("Outbound pump stopped", connection_id=connection.id, error=str(e))

    async def _message_loop(self, connection: Connection) -> str:
        """Process client messages until the link ends. Returns the close reason."""
        while True:
            message = await self._receive_with_timeout()
            if message is None:
                logger.info(
                    "Connection timed out (no messages)",
                    connection_id=connection.id,
                    timeout=self.receive_timeout,
                )
                await self.websocket.close(code=WSCloseCode.NORMAL, reason="Connection timeout")
                return "timeout"

            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(
                    code=message.get("code", WSCloseCode.NORMAL),
                    reason=message.get("reason"),
                )

            data = message.get("text")
            if data is None:
                self.hub.lifecycle.handle_binary(connection, message.get("bytes") or b"")
                continue

            if len(data) > self.max_message_size:
                logger.warning(
                    "Message too large",
                    connection_id=connection.id,
                    size=len(data),
                    limit=self.max_message_size,
                )
                await self.websocket.close(code=WSCloseCode.MESSAGE_TOO_BIG, reason="Message too large")
                return "message_too_big"

            self.hub.lifecycle.handle_message(connection, data)

    async def _receive_with_timeout(self) -> Message | None:
        """Next raw ASGI message (text, bytes or disconnect), or None on idle timeout."""
        try:
            return await asyncio.wait_for(
                self.websocket.receive(),
                timeout=self.receive_timeout,
            )
        except asyncio.TimeoutError:
            return None
