"""Runtime settings read from the environment (and an optional .env file)."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

_TRUTHY = ("1", "true", "yes", "on")


def _flag(env: dict[str, str], name: str) -> bool:
    return env.get(name, "").strip().lower() in _TRUTHY


@dataclass(frozen=True)
class Settings:
    """Settings resolved once at startup and passed to whoever needs them."""

    history_dir: Path
    user_units: bool = False
    notify: bool = False
    debug: bool = False

    @property
    def history_file(self) -> Path:
        return self.history_dir / "history.log"

    @classmethod
    def from_env(cls, env: dict[str, str] | None = None) -> "Settings":
        """Build settings from ``env`` (defaults to ``os.environ``).

        TICKLE_HOME overrides the ledger directory (default ``~/.tickle``).
        TICKLE_USER_UNITS, TICKLE_NOTIFY and TICKLE_DEBUG are boolean flags.
        """
        if env is None:
            env = dict(os.environ)

        home = env.get("TICKLE_HOME")
        history_dir = Path(home).expanduser() if home else Path.home() / ".tickle"

        return cls(
            history_dir=history_dir,
            user_units=_flag(env, "TICKLE_USER_UNITS"),
            notify=_flag(env, "TICKLE_NOTIFY"),
            debug=_flag(env, "TICKLE_DEBUG"),
        )


def load_settings() -> Settings:
    """Load .env (if any) into the environment, then read settings."""
    load_dotenv()
    return Settings.from_env()
