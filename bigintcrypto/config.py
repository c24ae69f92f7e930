# bigintcrypto/config.py
# Environment-driven defaults. Everything has a sane fallback so the library
# works with no configuration at all.
#   BIGINTCRYPTO_ROUNDS    Miller-Rabin rounds used by prime search (40)
#   BIGINTCRYPTO_WORKERS   worker count for workers="auto" (cpu count)
#   BIGINTCRYPTO_EXECUTOR  "process" or "thread" pool for concurrent tests

from __future__ import annotations
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Mapping, Optional

from .errors import InvalidArgument

EXECUTORS = ("process", "thread")

DEFAULT_ROUNDS = 40


def _env_int(env: Mapping[str, str], name: str, default: int, minimum: int = 1) -> int:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        val = int(raw, 10)
    except ValueError:
        raise InvalidArgument(f"{name} must be an integer, got {raw!r}") from None
    if val < minimum:
        raise InvalidArgument(f"{name} must be >= {minimum}, got {val}")
    return val


@dataclass(frozen=True)
class Settings:
    rounds: int = DEFAULT_ROUNDS
    workers: int = field(default_factory=lambda: os.cpu_count() or 1)
    executor: str = "process"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        executor = (env.get("BIGINTCRYPTO_EXECUTOR") or "process").strip().lower()
        if executor not in EXECUTORS:
            raise InvalidArgument(
                f"BIGINTCRYPTO_EXECUTOR must be one of {EXECUTORS}, got {executor!r}"
            )
        return cls(
            rounds=_env_int(env, "BIGINTCRYPTO_ROUNDS", DEFAULT_ROUNDS),
            workers=_env_int(env, "BIGINTCRYPTO_WORKERS", os.cpu_count() or 1),
            executor=executor,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, read from the environment once."""
    return Settings.from_env()
