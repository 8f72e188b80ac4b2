"""Human agent - reads actions from terminal."""

from typing import Any

from unoroom.engine import Action, Card, DrawCard, EndTurn, PlayCard


class HumanAgent:
    """Agent that prompts the human for input via terminal."""

    def __init__(self, name: str = "human"):
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def get_action(
        self,
        game_state: dict[str, Any],
        player_id: str,
        has_drawn: bool,
    ) -> Action:
        hand = game_state["hands"][player_id]

        print("\n--- Your turn ---")
        print("Your hand:", " ".join(hand))
        print("Current card:", game_state["currentCard"])
        for pid, cards in game_state["hands"].items():
            if pid != player_id and pid in game_state["players"]:
                print(f"  {pid}: {len(cards)} cards")
        print("\nActions:")
        for i, token in enumerate(hand):
            print(f"  {i}: PLAY {token}")
        print("  d: DRAW" + (" (again)" if has_drawn else ""))
        print("  e: END TURN")

        while True:
            try:
                raw = input("Enter choice: ").strip().lower()
            except EOFError:
                return EndTurn()
            if raw == "d":
                return DrawCard()
            if raw == "e":
                return EndTurn()
            try:
                idx = int(raw)
            except ValueError:
                idx = -1
            if 0 <= idx < len(hand):
                return PlayCard(card=Card.parse(hand[idx]))
            print("Invalid. Try again.")
