"""UNO rules: play legality and state transitions.

Only legality is modelled. Skip, Reverse, Draw2 and the wild cards do not
change turn order or force draws, a chosen wild color is never tracked, and
nobody is ever declared the winner.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from unoroom.engine.card import Card
from unoroom.engine.deck import DeckManager
from unoroom.engine.errors import CardNotHeld, IllegalPlay, NotYourTurn
from unoroom.engine.game_state import GameState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayCard:
    """Action: play a card from the hand."""

    card: Card


@dataclass(frozen=True)
class DrawCard:
    """Action: draw one card. The turn does not pass."""

    pass


@dataclass(frozen=True)
class EndTurn:
    """Action: pass the turn to the next player without playing."""

    pass


Action = Union[PlayCard, DrawCard, EndTurn]


def is_valid_play(card: Card, current_card: Card) -> bool:
    """Check if ``card`` can be played on top of ``current_card``."""
    # Wild can always be played
    if card.is_wild:
        return True
    # Anything goes on a wild, its color is never declared
    if current_card.is_wild:
        return True
    return card.color == current_card.color or card.rank == current_card.rank


def start_game(player_ids: List[str], deck: DeckManager) -> GameState:
    """Deal the hands and expose the starting card. The first player acts first."""
    hands = deck.deal_initial_hands(player_ids)
    first_card = deck.pick_starting_card()
    return GameState(
        players=list(player_ids),
        hands=hands,
        discard_pile=[first_card],
        turn_index=0,
    )


def _advance_turn(state: GameState) -> None:
    state.turn_index = (state.turn_index + 1) % len(state.players)


def apply_action(
    state: GameState,
    deck: DeckManager,
    player_id: str,
    action: Action,
) -> Optional[Card]:
    """Validate and apply an action in place.

    Returns the drawn card for DrawCard and None otherwise. Raises an
    EngineError subclass, leaving state untouched, when the action is rejected.
    """
    if not state.players or player_id != state.current_player:
        raise NotYourTurn()

    if isinstance(action, DrawCard):
        card = deck.draw(state.discard_pile)
        state.hands[player_id].append(card)
        return card

    if isinstance(action, EndTurn):
        _advance_turn(state)
        return None

    hand = state.hands[player_id]
    try:
        index = hand.index(action.card)
    except ValueError:
        raise CardNotHeld() from None
    if not is_valid_play(action.card, state.current_card):
        raise IllegalPlay(f"{action.card} cannot be played on {state.current_card}")

    hand.pop(index)
    state.discard_pile.append(action.card)
    _advance_turn(state)
    return None


def remove_player(state: GameState, player_id: str) -> None:
    """Drop a departed player from the turn order.

    Their hand stays in ``state.hands``. The player who would have acted next
    still does; if the departing player held the turn it passes to whoever
    now sits at that position.
    """
    if player_id not in state.players:
        return
    index = state.players.index(player_id)
    state.players.pop(index)
    if not state.players:
        state.turn_index = 0
        return
    if index < state.turn_index:
        state.turn_index -= 1
    state.turn_index %= len(state.players)
