from __future__ import annotations
from typing import Optional

from .config import SearchConfig
from .search import SearchCoordinator


# ---- Public RQ job -----------------------------------------------------------

def generate_primes_job(bits, count=1, workers: Optional[int] = None, rounds: Optional[int] = None) -> dict:
    """
    Run one timed search inside an RQ worker.
    Returns a JSON-safe dict: bits, count, workers, elapsed_ms, candidates,
    filtered, tested and primes as [{"index", "value"}] with decimal-string values.
    """
    cfg = SearchConfig.build(bits, count, workers=workers, rounds=rounds)
    return SearchCoordinator.from_config(cfg).run_timed().as_dict()
