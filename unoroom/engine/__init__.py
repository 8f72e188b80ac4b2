"""Game engine for UNO."""

from unoroom.engine.card import Card, Color
from unoroom.engine.deck import DECK_SIZE, HAND_SIZE, DeckManager, build_deck, shuffle
from unoroom.engine.game_state import GameState
from unoroom.engine.rules import (
    Action,
    PlayCard,
    DrawCard,
    EndTurn,
    is_valid_play,
    apply_action,
    remove_player,
    start_game,
)

__all__ = [
    "Card",
    "Color",
    "DECK_SIZE",
    "HAND_SIZE",
    "DeckManager",
    "build_deck",
    "shuffle",
    "GameState",
    "Action",
    "PlayCard",
    "DrawCard",
    "EndTurn",
    "is_valid_play",
    "apply_action",
    "remove_player",
    "start_game",
]
