"""Card and Color types for UNO."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Color(str, Enum):
    """Card colors, valued by their wire letter."""

    RED = "R"
    GREEN = "G"
    BLUE = "B"
    YELLOW = "Y"


NUMBER_RANKS = ("0", "1", "2", "3", "4", "5", "6", "7", "8", "9")
ACTION_RANKS = ("Skip", "Reverse", "Draw2")
WILD_RANKS = ("Wild", "WildDraw4")

CARD_RANKS = NUMBER_RANKS + ACTION_RANKS + WILD_RANKS


@dataclass(frozen=True)
class Card:
    """A UNO card.

    For number/action cards: color is set, rank is "0"-"9", "Skip", "Reverse", "Draw2".
    For wild cards: color is None, rank is "Wild" or "WildDraw4".

    Two cards with the same color and rank are interchangeable.
    """

    color: Optional[Color]
    rank: str

    def __post_init__(self) -> None:
        if self.rank not in CARD_RANKS:
            raise ValueError(f"Invalid card rank: {self.rank}")
        if self.rank in WILD_RANKS and self.color is not None:
            raise ValueError("Wild cards must have color=None")
        if self.rank not in WILD_RANKS and self.color is None:
            raise ValueError("Non-wild cards must have a color")

    @property
    def is_wild(self) -> bool:
        return self.rank in WILD_RANKS

    def __str__(self) -> str:
        if self.color is None:
            return self.rank
        return f"{self.color.value}{self.rank}"

    @classmethod
    def parse(cls, token: str) -> "Card":
        """Build a card from its wire token, e.g. "R5", "BSkip" or "Wild"."""
        if not isinstance(token, str) or not token:
            raise ValueError(f"Invalid card token: {token!r}")
        if token in WILD_RANKS:
            return cls(color=None, rank=token)
        try:
            color = Color(token[0])
        except ValueError:
            raise ValueError(f"Invalid card token: {token!r}") from None
        return cls(color=color, rank=token[1:])
