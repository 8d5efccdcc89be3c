"""
Realtime hub: the single owner of the Room Registry, the Connection
Lifecycle Manager and the Event Emitter for one application.

Built by the app factory and stored on app.state.realtime. Handlers reach it
through the get_emitter / get_realtime_hub dependencies.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request

from realtime.emitter import EventEmitter
from realtime.lifecycle import ConnectionLifecycle
from realtime.registry import RoomRegistry
from shared.config.settings import Settings


class RealtimeHub:
    def __init__(
        self,
        registry: RoomRegistry | None = None,
        max_connections: int = 1000,
        outbound_queue_size: int = 256,
        receive_timeout: float = 90.0,
        max_message_size: int = 8 * 1024,
    ) -> None:
        self.registry = registry if registry is not None else RoomRegistry()
        self.lifecycle = ConnectionLifecycle(
            self.registry,
            max_connections=max_connections,
            outbound_queue_size=outbound_queue_size,
        )
        self.emitter = EventEmitter(self.registry)
        self.receive_timeout = receive_timeout
        self.max_message_size = max_message_size

    @classmethod
    def from_settings(cls, settings: Settings) -> "RealtimeHub":
        return cls(
            max_connections=settings.ws_max_total_connections,
            outbound_queue_size=settings.ws_outbound_queue_size,
            receive_timeout=settings.ws_receive_timeout,
            max_message_size=settings.ws_max_message_size,
        )

    async def shutdown(self) -> None:
        await self.lifecycle.shutdown()

    def get_stats(self) -> dict[str, Any]:
        return {
            **self.lifecycle.get_stats(),
            **self.registry.get_stats(),
        }


def get_realtime_hub(request: Request) -> RealtimeHub:
    """FastAPI dependency returning the application's hub."""
    return request.app.state.realtime


def get_emitter(request: Request) -> EventEmitter:
    """FastAPI dependency returning the application's event emitter."""
    return get_realtime_hub(request).emitter
