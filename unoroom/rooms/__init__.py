"""Room registry and room lifecycle."""

from unoroom.rooms.registry import (
    MAX_PLAYERS,
    DrawResult,
    Room,
    RoomPhase,
    RoomRegistry,
    RoomView,
)

__all__ = [
    "MAX_PLAYERS",
    "DrawResult",
    "Room",
    "RoomPhase",
    "RoomRegistry",
    "RoomView",
]
