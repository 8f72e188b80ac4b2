"""Session gateway: inbound commands and outbound messages."""

from unoroom.gateway.channel import Channel, InMemoryChannel
from unoroom.gateway.commands import (
    Command,
    CreateRoom,
    Disconnect,
    DrawCardCommand,
    EndTurnCommand,
    JoinRoom,
    PlayCardCommand,
    parse_command,
)
from unoroom.gateway.session import SessionGateway

__all__ = [
    "Channel",
    "InMemoryChannel",
    "Command",
    "CreateRoom",
    "Disconnect",
    "DrawCardCommand",
    "EndTurnCommand",
    "JoinRoom",
    "PlayCardCommand",
    "parse_command",
    "SessionGateway",
]
