"""Session gateway - turns connection commands into registry calls and messages.

Every registry call finishes (and releases the room lock) before anything is
published. Channel membership changes are made by the registry under the room
lock, together with the seat change they belong to. Rejected commands produce
an ``errorMessage`` for the caller only.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from unoroom.engine.errors import EngineError
from unoroom.gateway.channel import Channel
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
from unoroom.rooms import RoomRegistry, RoomView

logger = logging.getLogger(__name__)


class SessionGateway:
    """Dispatches commands from connections to the room registry."""

    def __init__(self, registry: RoomRegistry, channel: Channel):
        self.registry = registry
        self.channel = channel

    def handle_raw(self, caller_id: str, event: str, payload: Any = None) -> None:
        """Entry point for transports that deliver untyped messages."""
        command = parse_command(event, payload)
        if command is None:
            logger.debug("Ignoring malformed %r from %s", event, caller_id)
            return
        self.handle(caller_id, command)

    def handle(self, caller_id: str, command: Command) -> None:
        try:
            self._dispatch(caller_id, command)
        except EngineError as e:
            logger.info("Rejected %s from %s: %s", type(command).__name__, caller_id, e.message)
            self.channel.send(caller_id, "errorMessage", e.message)

    def _dispatch(self, caller_id: str, command: Command) -> None:
        if isinstance(command, CreateRoom):
            view = self.registry.create_room(caller_id, on_seated=self.channel.subscribe)
            self.channel.send(caller_id, "roomCreated", view.room_id)
            self._publish_players(view)

        elif isinstance(command, JoinRoom):
            view = self.registry.join_room(
                command.room_id, caller_id, on_seated=self.channel.subscribe
            )
            self._publish_players(view)
            # Joining a started game is rejected, so a started view means this seat started it
            if view.started:
                self.channel.publish(view.room_id, "gameStarted", view.game_state)

        elif isinstance(command, DrawCardCommand):
            result = self.registry.draw(command.room_id, caller_id)
            self._publish_state(result.view)
            self.channel.send(
                caller_id, "cardDrawn", {"card": str(result.card), "hand": list(result.hand)}
            )

        elif isinstance(command, PlayCardCommand):
            view = self.registry.play(command.room_id, caller_id, command.card)
            self._publish_state(view)

        elif isinstance(command, EndTurnCommand):
            view = self.registry.end_turn(command.room_id, caller_id)
            self._publish_state(view)

        elif isinstance(command, Disconnect):
            self._disconnect(caller_id)

    def _disconnect(self, caller_id: str) -> None:
        _, view = self.registry.leave_all(caller_id, on_unseated=self.channel.unsubscribe)
        if view is not None:
            self._publish_players(view)

    def _publish_players(self, view: RoomView) -> None:
        self.channel.publish(
            view.room_id, "playerList", {"roomId": view.room_id, "players": list(view.players)}
        )

    def _publish_state(self, view: Optional[RoomView]) -> None:
        if view is not None and view.game_state is not None:
            self.channel.publish(view.room_id, "gameStateUpdate", view.game_state)
