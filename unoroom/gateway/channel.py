"""Outbound message channel - publish/subscribe per room plus direct sends."""

import threading
from collections import defaultdict
from typing import Any, Protocol


class Channel(Protocol):
    """Transport used by the gateway to reach connections."""

    def subscribe(self, room_id: str, player_id: str) -> None:
        """Start delivering room broadcasts to a connection."""
        ...

    def unsubscribe(self, room_id: str, player_id: str) -> None:
        """Stop delivering room broadcasts to a connection."""
        ...

    def publish(self, room_id: str, event: str, payload: Any) -> None:
        """Broadcast to every subscriber of a room. Must not wait for delivery."""
        ...

    def send(self, player_id: str, event: str, payload: Any) -> None:
        """Deliver to a single connection."""
        ...


class InMemoryChannel:
    """Channel that records every delivery in per-connection inboxes."""

    def __init__(self):
        self._lock = threading.Lock()
        self._members: dict[str, list[str]] = defaultdict(list)
        self.inboxes: dict[str, list[tuple[str, Any]]] = defaultdict(list)

    def subscribe(self, room_id: str, player_id: str) -> None:
        with self._lock:
            if player_id not in self._members[room_id]:
                self._members[room_id].append(player_id)

    def unsubscribe(self, room_id: str, player_id: str) -> None:
        with self._lock:
            members = self._members.get(room_id)
            if members and player_id in members:
                members.remove(player_id)
            if not members:
                self._members.pop(room_id, None)

    def publish(self, room_id: str, event: str, payload: Any) -> None:
        with self._lock:
            for pid in self._members.get(room_id, ()):
                self.inboxes[pid].append((event, payload))

    def send(self, player_id: str, event: str, payload: Any) -> None:
        with self._lock:
            self.inboxes[player_id].append((event, payload))

    def members(self, room_id: str) -> list[str]:
        with self._lock:
            return list(self._members.get(room_id, ()))

    def events(self, player_id: str, event: str | None = None) -> list[tuple[str, Any]]:
        """Messages delivered to a connection, optionally only one event type."""
        with self._lock:
            inbox = list(self.inboxes.get(player_id, ()))
        if event is None:
            return inbox
        return [m for m in inbox if m[0] == event]

    def last(self, player_id: str, event: str) -> Any:
        """Payload of the latest ``event`` delivered to a connection, or None."""
        matching = self.events(player_id, event)
        return matching[-1][1] if matching else None
