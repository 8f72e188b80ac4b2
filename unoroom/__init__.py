"""Server-authoritative UNO rooms: deck, turn engine, room registry and gateway."""

__version__ = "0.1.0"
