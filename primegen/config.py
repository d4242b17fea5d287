# primegen/config.py
# Validated search parameters and env-driven defaults.

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError

MIN_BITS = 32
DEFAULT_COUNT = 1
DEFAULT_ROUNDS = 10
MAX_POOL = 64

REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name, "") or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")


def default_workers() -> int:
    n = _env_int("PRIMEGEN_WORKERS", 0)
    if n <= 0:
        n = os.cpu_count() or 1
    return min(n, MAX_POOL)


def default_rounds() -> int:
    return _env_int("PRIMEGEN_ROUNDS", DEFAULT_ROUNDS)


def max_bits() -> int:
    return _env_int("PRIMEGEN_MAX_BITS", 4096)


def max_sync_count() -> int:
    return _env_int("PRIMEGEN_MAX_SYNC_COUNT", 16)


# ---------- validation ----------

def _as_int(name: str, value) -> int:
    # ints and decimal strings only; bools and floats would truncate silently
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")


def validate_bits(bits) -> int:
    b = _as_int("bits", bits)
    if b < MIN_BITS or b % 8 != 0:
        raise ConfigurationError(f"bits must be a multiple of 8 and >= {MIN_BITS}, got {b}")
    return b


def validate_count(count) -> int:
    c = _as_int("count", count)
    if c < 1:
        raise ConfigurationError(f"count must be positive, got {c}")
    return c


def validate_workers(workers) -> int:
    if workers is None:
        return default_workers()
    w = _as_int("workers", workers)
    if not 1 <= w <= MAX_POOL:
        raise ConfigurationError(f"workers must be in 1..{MAX_POOL}, got {w}")
    return w


def validate_rounds(rounds) -> int:
    """None or non-positive means DEFAULT_ROUNDS."""
    if rounds is None:
        return DEFAULT_ROUNDS
    r = _as_int("rounds", rounds)
    return r if r > 0 else DEFAULT_ROUNDS


@dataclass(frozen=True)
class SearchConfig:
    bits: int
    count: int = DEFAULT_COUNT
    workers: int = 1
    rounds: int = DEFAULT_ROUNDS

    @classmethod
    def build(cls, bits, count=DEFAULT_COUNT, workers: Optional[int] = None,
              rounds: Optional[int] = None) -> "SearchConfig":
        r = validate_rounds(default_rounds() if rounds is None else rounds)
        return cls(bits=validate_bits(bits), count=validate_count(count),
                   workers=validate_workers(workers), rounds=r)
