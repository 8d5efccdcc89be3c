"""
Realtime routes: the WebSocket link and its health check.
"""

from typing import Any

from fastapi import APIRouter, Depends, WebSocket

from realtime.endpoint import RealtimeEndpoint
from realtime.hub import RealtimeHub, get_realtime_hub

router = APIRouter(tags=["realtime"])


@router.websocket("/ws")
async def realtime_socket(websocket: WebSocket) -> None:
    """
    Realtime link. After connecting, send one join request per scope:

        {"event": "join-admin", "data": "<tenant id>"}
        {"event": "join-menu", "data": "<tenant id>"}
        {"event": "join-order", "data": <order id>}

    Server events arrive as {"event": "<name>", "data": {...}}.
    """
    await RealtimeEndpoint(websocket, websocket.app.state.realtime).run()


@router.get("/ws/health")
def realtime_health(hub: RealtimeHub = Depends(get_realtime_hub)) -> dict[str, Any]:
    """Connection and room statistics."""
    return {"status": "healthy", **hub.get_stats()}
