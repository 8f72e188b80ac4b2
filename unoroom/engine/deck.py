"""Deck creation, shuffling and the per-room draw pile."""

import logging
import random
from typing import Dict, List, Optional

from unoroom.engine.card import ACTION_RANKS, NUMBER_RANKS, WILD_RANKS, Card, Color
from unoroom.engine.errors import EmptyDeck, NoCardsAvailable

logger = logging.getLogger(__name__)

DECK_SIZE = 108
HAND_SIZE = 7


def build_deck() -> List[Card]:
    """Create a standard 108-card UNO deck, unshuffled.

    - 4 colors × (one 0, two each of 1-9, Skip, Reverse, Draw2): 100 cards
    - 4 Wild, 4 WildDraw4: 8 cards
    """
    cards: List[Card] = []

    for color in Color:
        # One zero per color
        cards.append(Card(color=color, rank="0"))
        # Two of each 1-9 and action cards per color
        for rank in NUMBER_RANKS[1:] + ACTION_RANKS:
            cards.append(Card(color=color, rank=rank))
            cards.append(Card(color=color, rank=rank))

    for rank in WILD_RANKS:
        for _ in range(4):
            cards.append(Card(color=None, rank=rank))

    return cards


def shuffle(cards: list, rng: Optional[random.Random] = None) -> list:
    """Shuffle ``cards`` in place and return it."""
    (rng or random).shuffle(cards)
    return cards


class DeckManager:
    """The draw pile of a single room. The front of ``cards`` is drawn next."""

    def __init__(
        self,
        cards: Optional[List[Card]] = None,
        rng: Optional[random.Random] = None,
    ):
        self._rng = rng or random.Random()
        if cards is None:
            cards = shuffle(build_deck(), self._rng)
        self.cards: List[Card] = cards

    def __len__(self) -> int:
        return len(self.cards)

    def draw(self, discard_pile: List[Card]) -> Card:
        """Take the next card, rebuilding the pile from ``discard_pile`` if needed.

        On exhaustion every discard except the current (last) one is shuffled
        into a new draw pile and ``discard_pile`` is left holding only the
        current card. Raises NoCardsAvailable, without touching either pile,
        when there is nothing to rebuild from.
        """
        if not self.cards:
            if len(discard_pile) <= 1:
                raise NoCardsAvailable()
            current = discard_pile[-1]
            self.cards = shuffle(discard_pile[:-1], self._rng)
            discard_pile[:] = [current]
            logger.info("Reshuffled %d discards into the draw pile", len(self.cards))
        return self.cards.pop(0)

    def deal_initial_hands(self, player_ids: List[str]) -> Dict[str, List[Card]]:
        """Deal HAND_SIZE cards to each player in roster order from the front."""
        needed = HAND_SIZE * len(player_ids)
        if len(self.cards) < needed:
            raise EmptyDeck(f"Need {needed} cards to deal, deck has {len(self.cards)}")
        hands: Dict[str, List[Card]] = {}
        for pid in player_ids:
            hands[pid] = self.cards[:HAND_SIZE]
            del self.cards[:HAND_SIZE]
        return hands

    def pick_starting_card(self) -> Card:
        """Pop the first non-wild card, moving wilds to the back of the pile.

        The search looks at each card at most once. If every remaining card is
        wild, the last one popped is used anyway.
        """
        if not self.cards:
            raise EmptyDeck("No card left to start the discard pile")
        card = self.cards.pop(0)
        for _ in range(len(self.cards)):
            if not card.is_wild:
                break
            self.cards.append(card)
            card = self.cards.pop(0)
        return card
