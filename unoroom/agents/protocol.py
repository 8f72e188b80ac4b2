"""Agent protocol - interface for anything that occupies a seat at a table."""

from typing import Any, Protocol

from unoroom.engine import Action


class AgentProtocol(Protocol):
    """Interface for UNO-playing agents."""

    @property
    def name(self) -> str:
        """Display name for the agent."""
        ...

    def get_action(
        self,
        game_state: dict[str, Any],
        player_id: str,
        has_drawn: bool,
    ) -> Action:
        """Choose an action for this seat's turn.

        Args:
            game_state: The latest broadcast game state snapshot.
            player_id: This agent's player ID.
            has_drawn: Whether the agent already drew during this turn.

        Returns:
            The action to submit; EndTurn passes the turn.
        """
        ...
