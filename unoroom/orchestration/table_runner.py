"""Table runner - seats four agents in one room and plays through the gateway."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from unoroom.engine import DrawCard, EndTurn, PlayCard
from unoroom.gateway import (
    CreateRoom,
    DrawCardCommand,
    EndTurnCommand,
    InMemoryChannel,
    JoinRoom,
    PlayCardCommand,
    SessionGateway,
)
from unoroom.rooms import MAX_PLAYERS, RoomRegistry

if TYPE_CHECKING:
    from unoroom.agents.protocol import AgentProtocol

logger = logging.getLogger(__name__)


@dataclass
class TableResult:
    """Card distribution after the runner stopped."""

    room_id: str
    turns: int
    hand_sizes: dict[str, int]
    deck_size: int
    discard_size: int

    @property
    def total_cards(self) -> int:
        return self.deck_size + self.discard_size + sum(self.hand_sizes.values())


def _latest_state(channel: InMemoryChannel, player_id: str) -> Optional[dict[str, Any]]:
    for event, payload in reversed(channel.events(player_id)):
        if event in ("gameStateUpdate", "gameStarted"):
            return payload
    return None


class TableRunner:
    """Runs one table for a bounded number of turns.

    There is no win condition, so ``max_turns`` is the only stopping rule. A
    turn is complete when its player plays a card or ends the turn.
    """

    def __init__(
        self,
        agents: dict[str, "AgentProtocol"],
        seed: Optional[int] = None,
        max_turns: int = 200,
    ):
        if len(agents) != MAX_PLAYERS:
            raise ValueError(f"A table needs exactly {MAX_PLAYERS} agents, got {len(agents)}")
        self._agents = agents
        self._seed = seed
        self._max_turns = max_turns
        self.channel = InMemoryChannel()
        self.registry = RoomRegistry(rng=random.Random(seed))
        self.gateway = SessionGateway(self.registry, self.channel)

    def _seat_everyone(self) -> str:
        player_ids = list(self._agents)
        owner = player_ids[0]
        self.gateway.handle(owner, CreateRoom())
        room_id = self.channel.last(owner, "roomCreated")
        for pid in player_ids[1:]:
            self.gateway.handle(pid, JoinRoom(room_id=room_id))
        return room_id

    def run(self) -> TableResult:
        """Run the table and return the final card distribution."""
        room_id = self._seat_everyone()
        observer = next(iter(self._agents))
        turns = 0
        has_drawn = False

        while turns < self._max_turns:
            state = _latest_state(self.channel, observer)
            if state is None:
                break
            pid = state["players"][state["turnIndex"]]
            action = self._agents[pid].get_action(state, pid, has_drawn)

            if isinstance(action, PlayCard):
                command = PlayCardCommand(room_id=room_id, card=action.card)
            elif isinstance(action, DrawCard):
                command = DrawCardCommand(room_id=room_id)
            else:
                command = EndTurnCommand(room_id=room_id)

            errors = len(self.channel.events(pid, "errorMessage"))
            self.gateway.handle(pid, command)
            rejected = len(self.channel.events(pid, "errorMessage")) > errors

            if rejected:
                logger.debug("%s had %s rejected, ending turn", pid, type(action).__name__)
                self.gateway.handle(pid, EndTurnCommand(room_id=room_id))
            elif isinstance(action, DrawCard):
                has_drawn = True
                continue
            turns += 1
            has_drawn = False

        view = self.registry.get_view(room_id)
        gs = view.game_state
        logger.info("Table %s stopped after %d turns", room_id, turns)
        return TableResult(
            room_id=room_id,
            turns=turns,
            hand_sizes={pid: len(hand) for pid, hand in gs["hands"].items()},
            deck_size=view.deck_size,
            discard_size=len(gs["discardPile"]),
        )
