"""CLI entry point."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from dotenv import load_dotenv

from unoroom.config import Settings

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(help="Server-authoritative UNO rooms")


def _setup(seed: Optional[int], turns: Optional[int]) -> Settings:
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    return Settings(
        log_level=settings.log_level,
        seed=seed if seed is not None else settings.seed,
        max_turns=turns if turns is not None else settings.max_turns,
    )


def _report(result) -> None:
    typer.echo(f"Room: {result.room_id}")
    typer.echo(f"Turns: {result.turns}")
    for pid, size in result.hand_sizes.items():
        typer.echo(f"  {pid}: {size} cards")
    typer.echo(f"Deck: {result.deck_size}  Discard: {result.discard_size}  Total: {result.total_cards}")


@app.command()
def simulate(
    turns: Optional[int] = typer.Option(None, "--turns", "-t", help="Number of turns to play"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
) -> None:
    """Run one room with four random agents."""
    import random

    from unoroom.agents.random_agent import RandomAgent
    from unoroom.orchestration.table_runner import TableRunner

    settings = _setup(seed, turns)
    rng = random.Random(settings.seed)
    agents = {f"player_{i}": RandomAgent(name=f"Bot{i}", rng=rng) for i in range(4)}
    runner = TableRunner(agents, seed=settings.seed, max_turns=settings.max_turns)
    _report(runner.run())


@app.command()
def play(
    turns: Optional[int] = typer.Option(None, "--turns", "-t", help="Number of turns to play"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
) -> None:
    """Play one seat from the terminal against three random agents."""
    import random

    from unoroom.agents.human_agent import HumanAgent
    from unoroom.agents.random_agent import RandomAgent
    from unoroom.orchestration.table_runner import TableRunner

    settings = _setup(seed, turns)
    rng = random.Random(settings.seed)
    agents = {"you": HumanAgent(name="You")}
    for i in range(1, 4):
        agents[f"player_{i}"] = RandomAgent(name=f"Bot{i}", rng=rng)
    runner = TableRunner(agents, seed=settings.seed, max_turns=settings.max_turns)
    _report(runner.run())


if __name__ == "__main__":
    app()
