"""Errors raised by the engine and the room registry.

Every error here is local to the caller that triggered it: it is raised
before any state is touched and is reported back to that caller only.
"""


class EngineError(Exception):
    """Base class for rejected commands. ``message`` is shown to the caller."""

    default_message = "Command rejected"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class RoomNotFound(EngineError):
    default_message = "Room does not exist"


class RoomFull(EngineError):
    default_message = "Room is full"


class GameInProgress(EngineError):
    default_message = "Game already in progress"


class AlreadySeated(EngineError):
    default_message = "Player is already seated in a room"


class GameNotStarted(EngineError):
    default_message = "Game has not started yet"


class NotYourTurn(EngineError):
    default_message = "It is not your turn"


class CardNotHeld(EngineError):
    default_message = "You do not hold that card"


class IllegalPlay(EngineError):
    default_message = "That card cannot be played now"


class EmptyDeck(EngineError):
    default_message = "Deck is empty"


class NoCardsAvailable(EmptyDeck):
    default_message = "No cards available to draw"
