"""Settings read from the environment (and .env, loaded by the CLI)."""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    seed: Optional[int] = None
    max_turns: int = 200

    @classmethod
    def from_env(cls) -> "Settings":
        seed = os.environ.get("UNOROOM_SEED")
        max_turns = os.environ.get("UNOROOM_MAX_TURNS")
        return cls(
            log_level=os.environ.get("UNOROOM_LOG_LEVEL", "INFO").upper(),
            seed=int(seed) if seed else None,
            max_turns=int(max_turns) if max_turns else cls.max_turns,
        )
