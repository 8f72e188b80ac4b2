"""Game state for UNO."""

from dataclasses import dataclass
from typing import Any, Dict, List

from unoroom.engine.card import Card


@dataclass
class GameState:
    """Mutable state of a game in play.

    ``players`` is the turn order; only ``players[turn_index]`` may act.
    ``hands`` may also hold the abandoned hands of players who left mid-game.
    """

    players: List[str]
    hands: Dict[str, List[Card]]  # player_id -> list of cards
    discard_pile: List[Card]  # top is last
    turn_index: int = 0

    @property
    def current_card(self) -> Card:
        """The top card of the discard pile."""
        return self.discard_pile[-1]

    @property
    def current_player(self) -> str:
        return self.players[self.turn_index]

    def card_count(self) -> int:
        """Cards held by the discard pile and every hand."""
        return len(self.discard_pile) + sum(len(h) for h in self.hands.values())

    def to_dict(self) -> Dict[str, Any]:
        """Wire snapshot with cards as tokens. Safe to hand out after the room lock is released."""
        return {
            "players": list(self.players),
            "hands": {pid: [str(c) for c in hand] for pid, hand in self.hands.items()},
            "discardPile": [str(c) for c in self.discard_pile],
            "currentCard": str(self.current_card),
            "turnIndex": self.turn_index,
        }
