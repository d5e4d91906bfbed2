"""Generation configuration and seed handling."""

from __future__ import annotations

import hashlib
import os
import random
from dataclasses import dataclass
from typing import Optional

from .errors import InvalidConfiguration

DEFAULT_WIDTH = 15
DEFAULT_HEIGHT = 15
SEED_MAX = 2**31 - 1

_FALSY = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class MazeConfig:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    ensure_reachable: bool = True
    seed: Optional[int] = None

    def validate(self) -> "MazeConfig":
        """Raise InvalidConfiguration unless the config can drive a generation run."""
        for name in ("width", "height"):
            value = getattr(self, name)
            # bool is an int subclass; True would silently mean 1
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise InvalidConfiguration(f"{name} must be greater than 0, got {value}")
        if not isinstance(self.ensure_reachable, bool):
            raise InvalidConfiguration(f"ensure_reachable must be a bool, got {self.ensure_reachable!r}")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise InvalidConfiguration(f"seed must be an integer or None, got {self.seed!r}")
        return self

    @classmethod
    def from_env(cls, **overrides) -> "MazeConfig":
        """Build a config from MAZE_* environment variables; keyword overrides win."""
        values = {
            "width": env_int("MAZE_WIDTH", DEFAULT_WIDTH),
            "height": env_int("MAZE_HEIGHT", DEFAULT_HEIGHT),
            "ensure_reachable": env_flag("MAZE_ENSURE_REACHABLE", True),
            "seed": coerce_seed(os.getenv("MAZE_SEED")) if os.getenv("MAZE_SEED") else None,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def env_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidConfiguration(f"{key} must be an integer, got {raw!r}") from None


def env_flag(key: str, default: bool) -> bool:
    """Read a boolean switch; unset means ``default``, ``0/false/no/off`` or blank mean False."""
    raw = os.getenv(key)
    if raw is None:
        return default
    return raw.strip().lower() not in _FALSY


def coerce_seed(value) -> int:
    """Convert an int or string seed into a bounded non-negative int.

    Digit strings are parsed, any other non-empty string is hashed with
    SHA-256 so that human-friendly seeds ("castle") stay deterministic.
    ``None`` or a blank string draws a fresh random seed.
    """
    if value is None:
        return random.randint(0, SEED_MAX)
    if isinstance(value, bool):
        raise InvalidConfiguration(f"seed must be an integer or string, got {value!r}")
    if isinstance(value, int):
        return value % (SEED_MAX + 1)
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return random.randint(0, SEED_MAX)
        if s.isdigit():
            return int(s) % (SEED_MAX + 1)
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % (SEED_MAX + 1)
    raise InvalidConfiguration(f"seed must be an integer or string, got {value!r}")


__all__ = ["MazeConfig", "coerce_seed", "env_int", "env_flag", "DEFAULT_WIDTH", "DEFAULT_HEIGHT", "SEED_MAX"]
