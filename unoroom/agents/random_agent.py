"""Random agent - plays any legal card, otherwise draws once, otherwise passes."""

import random
from typing import Any, Optional

from unoroom.engine import Action, Card, DrawCard, EndTurn, PlayCard, is_valid_play


class RandomAgent:
    """Agent that picks uniformly among its legal plays."""

    def __init__(self, name: str = "random", rng: Optional[random.Random] = None):
        self._name = name
        self._rng = rng or random.Random()

    @property
    def name(self) -> str:
        return self._name

    def get_action(
        self,
        game_state: dict[str, Any],
        player_id: str,
        has_drawn: bool,
    ) -> Action:
        current = Card.parse(game_state["currentCard"])
        hand = [Card.parse(t) for t in game_state["hands"][player_id]]
        playable = [c for c in hand if is_valid_play(c, current)]
        if playable:
            return PlayCard(card=self._rng.choice(playable))
        if not has_drawn:
            return DrawCard()
        return EndTurn()
