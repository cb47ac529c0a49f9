"""Runtime configuration, read from environment variables."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Self

DEFAULT_DATABASE_URL = "sqlite:///chesslogic.db"
TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    database_echo: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """Pick up overrides from the environment (or any mapping, handy in tests)."""
        env = os.environ if environ is None else environ
        database_url = env.get("CHESSLOGIC_DATABASE_URL", DEFAULT_DATABASE_URL)
        database_echo = env.get("CHESSLOGIC_DATABASE_ECHO", "").lower() in TRUTHY
        return cls(database_url=database_url, database_echo=database_echo)
