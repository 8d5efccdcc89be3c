"""
Realtime layer constants: close codes and control message names.
"""

from enum import IntEnum
from typing import Final

__all__ = [
    "WSCloseCode",
    "MSG_PING",
    "MSG_PONG",
    "MSG_JOINED",
    "MSG_ERROR",
    "MAX_SCOPE_ID_LENGTH",
]


class WSCloseCode(IntEnum):
    """WebSocket close codes (RFC 6455) used by the realtime endpoint."""

    NORMAL = 1000  # Normal closure, also used for idle timeout
    GOING_AWAY = 1001  # Server shutting down
    MESSAGE_TOO_BIG = 1009  # Client message above ws_max_message_size
    SERVER_OVERLOADED = 1013  # ws_max_total_connections reached


# Control messages exchanged over the link, outside the broadcast event set
MSG_PING: Final[str] = "ping"
MSG_PONG: Final[str] = "pong"
MSG_JOINED: Final[str] = "joined"
MSG_ERROR: Final[str] = "error"

# Tenant ids are UUIDs (36 chars), order ids are integers
MAX_SCOPE_ID_LENGTH: Final[int] = 64
