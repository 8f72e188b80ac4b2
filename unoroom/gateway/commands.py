"""Inbound commands - the closed set of things a connection can ask for.

Raw transport messages arrive as an event name plus a JSON-like payload.
``parse_command`` turns them into one of the command types below, or None
when the event is unknown or the payload has the wrong shape.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union

from unoroom.engine import Card


@dataclass(frozen=True)
class CreateRoom:
    pass


@dataclass(frozen=True)
class JoinRoom:
    room_id: str


@dataclass(frozen=True)
class DrawCardCommand:
    room_id: str


@dataclass(frozen=True)
class PlayCardCommand:
    room_id: str
    card: Card


@dataclass(frozen=True)
class EndTurnCommand:
    room_id: str


@dataclass(frozen=True)
class Disconnect:
    pass


Command = Union[
    CreateRoom, JoinRoom, DrawCardCommand, PlayCardCommand, EndTurnCommand, Disconnect
]


def _room_id(payload: Any) -> Optional[str]:
    # joinRoom sends the bare code, the other events wrap it in an object
    if isinstance(payload, str):
        room_id = payload
    elif isinstance(payload, dict):
        room_id = payload.get("roomId")
    else:
        return None
    if not isinstance(room_id, str) or not room_id:
        return None
    return room_id


def parse_command(event: str, payload: Any = None) -> Optional[Command]:
    """Validate a raw message. Returns None for anything malformed."""
    if event == "createRoom":
        return CreateRoom()
    if event == "disconnect":
        return Disconnect()

    room_id = _room_id(payload)
    if room_id is None:
        return None

    if event == "joinRoom":
        return JoinRoom(room_id=room_id)
    if event == "drawCard":
        return DrawCardCommand(room_id=room_id)
    if event == "endTurn":
        return EndTurnCommand(room_id=room_id)
    if event == "playCard":
        if not isinstance(payload, dict):
            return None
        try:
            card = Card.parse(payload.get("card"))
        except ValueError:
            return None
        return PlayCardCommand(room_id=room_id, card=card)
    return None
