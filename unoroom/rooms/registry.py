"""Room registry - creates rooms, seats players and serializes room mutations.

LOCKING:
- Each Room has its own lock; every read or write of a room's deck, roster
  or game state happens under it.
- The registry lock only guards the room and seat maps. It is never held
  while a room lock is being acquired, so rooms never block each other.
- Seat hooks (channel subscribe/unsubscribe) run inside the same locked
  step as the roster change.
"""

from __future__ import annotations

import logging
import random
import string
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

from unoroom.engine import (
    Action,
    Card,
    DeckManager,
    DrawCard,
    EndTurn,
    GameState,
    PlayCard,
    apply_action,
    remove_player,
    start_game,
)
from unoroom.engine.errors import (
    AlreadySeated,
    GameInProgress,
    GameNotStarted,
    RoomFull,
    RoomNotFound,
)

logger = logging.getLogger(__name__)

MAX_PLAYERS = 4
ROOM_CODE_LENGTH = 6
ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits

# (room_id, player_id), called under the room lock when a seat changes hands
SeatHook = Callable[[str, str], None]


class RoomPhase(Enum):
    """Phase of a room's turn state machine."""
    LOBBY = "lobby"  # Fewer than four seated, no game state
    IN_PLAY = "in_play"  # Game state present, turns cycle


@dataclass
class Room:
    """An isolated game session. Only touch its fields while holding ``lock``."""
    room_id: str
    deck: DeckManager
    players: list[str] = field(default_factory=list)
    game_state: Optional[GameState] = None
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    closed: bool = False

    @property
    def phase(self) -> RoomPhase:
        return RoomPhase.LOBBY if self.game_state is None else RoomPhase.IN_PLAY

    def view(self) -> RoomView:
        return RoomView(
            room_id=self.room_id,
            players=tuple(self.players),
            phase=self.phase,
            deck_size=len(self.deck),
            game_state=self.game_state.to_dict() if self.game_state else None,
        )


@dataclass(frozen=True)
class RoomView:
    """Snapshot of a room taken under its lock."""
    room_id: str
    players: tuple[str, ...]
    phase: RoomPhase
    deck_size: int
    game_state: Optional[dict[str, Any]] = None

    @property
    def started(self) -> bool:
        return self.phase is RoomPhase.IN_PLAY


@dataclass(frozen=True)
class DrawResult:
    """Outcome of a draw: the room snapshot plus the card, for the drawer only."""
    view: RoomView
    card: Card
    hand: tuple[str, ...]


class RoomRegistry:
    """
    Owns every live room.

    Responsibilities:
    - Allocate unique room codes
    - Seat and unseat players (a player sits in at most one room)
    - Start the game when the fourth player sits down
    - Run draw/play/end-turn actions under the room's lock
    - Discard rooms once their last player leaves

    No persistence - rooms are in-memory only.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self._lock = threading.Lock()
        self._rooms: dict[str, Room] = {}
        self._seats: dict[str, str] = {}  # player_id -> room_id

    def _new_room_code(self) -> str:
        # Caller holds self._lock
        while True:
            code = "".join(self._rng.choices(ROOM_CODE_ALPHABET, k=ROOM_CODE_LENGTH))
            if code not in self._rooms:
                return code

    def _get(self, room_id: str) -> Room:
        with self._lock:
            room = self._rooms.get(room_id)
        if room is None:
            raise RoomNotFound()
        return room

    def create_room(self, owner_id: str, on_seated: Optional[SeatHook] = None) -> RoomView:
        """Create a room with a freshly shuffled deck and seat its owner.

        ``on_seated(room_id, player_id)`` runs before the room becomes
        reachable, so nobody can join ahead of it.
        """
        deck = DeckManager(rng=random.Random(self._rng.getrandbits(64)))
        with self._lock:
            if owner_id in self._seats:
                raise AlreadySeated()
            room_id = self._new_room_code()
            room = Room(room_id=room_id, deck=deck, players=[owner_id])
            if on_seated is not None:
                on_seated(room_id, owner_id)
            self._rooms[room_id] = room
            self._seats[owner_id] = room_id
        logger.info("Room %s created by %s", room_id, owner_id)
        with room.lock:
            return room.view()

    def join_room(
        self, room_id: str, player_id: str, on_seated: Optional[SeatHook] = None
    ) -> RoomView:
        """Seat a player. The fourth seat starts the game.

        ``on_seated(room_id, player_id)`` runs under the room lock right after
        the seat is taken, before any later join can start the game.
        """
        room = self._get(room_id)
        with self._lock:
            if player_id in self._seats:
                raise AlreadySeated()
            # Reserve the seat so a concurrent create/join cannot double-seat
            self._seats[player_id] = room_id
        try:
            with room.lock:
                if room.closed:
                    raise RoomNotFound()
                if len(room.players) >= MAX_PLAYERS:
                    raise RoomFull()
                # No seat filling once the game has started and someone left
                if room.game_state is not None:
                    raise GameInProgress()
                room.players.append(player_id)
                if on_seated is not None:
                    on_seated(room_id, player_id)
                if len(room.players) == MAX_PLAYERS:
                    room.game_state = start_game(room.players, room.deck)
                    logger.info(
                        "Room %s started, first card %s",
                        room_id, room.game_state.current_card,
                    )
                return room.view()
        except Exception:
            with self._lock:
                self._seats.pop(player_id, None)
            raise

    def leave(
        self, room_id: str, player_id: str, on_unseated: Optional[SeatHook] = None
    ) -> Optional[RoomView]:
        """Unseat a player. Returns None when the room was discarded.

        ``on_unseated(room_id, player_id)`` runs under the room lock, so the
        player sees no broadcast caused by a later mutation of this room.
        """
        room = self._get(room_id)
        with room.lock:
            if room.closed:
                raise RoomNotFound()
            if player_id not in room.players:
                return room.view()
            room.players.remove(player_id)
            if room.game_state is not None:
                remove_player(room.game_state, player_id)
            if on_unseated is not None:
                on_unseated(room_id, player_id)
            if not room.players:
                room.closed = True
            view = None if room.closed else room.view()
        with self._lock:
            if self._seats.get(player_id) == room_id:
                del self._seats[player_id]
            if view is None:
                self._rooms.pop(room_id, None)
        if view is None:
            logger.info("Room %s discarded", room_id)
        else:
            logger.info("%s left room %s", player_id, room_id)
        return view

    def leave_all(
        self, player_id: str, on_unseated: Optional[SeatHook] = None
    ) -> tuple[Optional[str], Optional[RoomView]]:
        """Unseat a player from whatever room they sit in (disconnect)."""
        with self._lock:
            room_id = self._seats.get(player_id)
        if room_id is None:
            return None, None
        try:
            return room_id, self.leave(room_id, player_id, on_unseated)
        except RoomNotFound:
            return room_id, None

    def room_of(self, player_id: str) -> Optional[str]:
        with self._lock:
            return self._seats.get(player_id)

    def get_view(self, room_id: str) -> RoomView:
        room = self._get(room_id)
        with room.lock:
            if room.closed:
                raise RoomNotFound()
            return room.view()

    def room_ids(self) -> list[str]:
        with self._lock:
            return list(self._rooms)

    @staticmethod
    def _act(room: Room, player_id: str, action: Action) -> Optional[Card]:
        # Caller holds room.lock
        if room.closed:
            raise RoomNotFound()
        if room.game_state is None:
            raise GameNotStarted()
        return apply_action(room.game_state, room.deck, player_id, action)

    def draw(self, room_id: str, player_id: str) -> DrawResult:
        """Draw one card for the current player. The turn does not pass."""
        room = self._get(room_id)
        with room.lock:
            card = self._act(room, player_id, DrawCard())
            hand = tuple(str(c) for c in room.game_state.hands[player_id])
            return DrawResult(view=room.view(), card=card, hand=hand)

    def play(self, room_id: str, player_id: str, card: Card) -> RoomView:
        room = self._get(room_id)
        with room.lock:
            self._act(room, player_id, PlayCard(card=card))
            return room.view()

    def end_turn(self, room_id: str, player_id: str) -> RoomView:
        room = self._get(room_id)
        with room.lock:
            self._act(room, player_id, EndTurn())
            return room.view()

