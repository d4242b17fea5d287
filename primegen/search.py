# primegen/search.py
# Concurrent probable-prime search.
# - fixed pool of worker threads, each: draw -> small-factor filter -> Miller–Rabin
# - one lock guards re-check + index assignment + emit, so output order == discovery order
# - stop flag read without the lock as a fast exit path only

from __future__ import annotations
import enum
import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, FIRST_COMPLETED, wait
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from . import config
from .candidates import RandomCandidateSource
from .filters import SmallFactorFilter
from .miller_rabin import MillerRabinTester
from .sinks import ResultSink, CollectingSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FoundPrime:
    index: int
    value: int


class SearchPhase(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    DRAINING = "draining"
    COMPLETED = "completed"


class SearchState:
    """Found primes + stop flag for one search. Only touched through these methods."""

    def __init__(self, target: int):
        self.target = target
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._found: List[FoundPrime] = []
        self._error: Optional[BaseException] = None

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    @property
    def found_count(self) -> int:
        with self._lock:
            return len(self._found)

    @property
    def error(self) -> Optional[BaseException]:
        with self._lock:
            return self._error

    def stop(self) -> None:
        self._stop.set()

    def abort(self, error: BaseException) -> None:
        """Stop the search; only the first error reported is kept."""
        with self._lock:
            if self._error is None:
                self._error = error
            self._stop.set()

    def record(self, value: int, emit: Callable[[FoundPrime], None]) -> Optional[FoundPrime]:
        """Claim the next discovery index for value, or None if the target is already met."""
        with self._lock:
            # second check: another worker may have filled the target since our optimistic read
            if self._stop.is_set() or len(self._found) >= self.target:
                return None
            found = FoundPrime(len(self._found) + 1, value)
            self._found.append(found)
            if len(self._found) >= self.target:
                self._stop.set()
            emit(found)
            return found

    def results(self) -> List[FoundPrime]:
        with self._lock:
            return list(self._found)


@dataclass
class WorkerStats:
    drawn: int = 0
    filtered: int = 0
    tested: int = 0
    found: int = 0

    def __add__(self, other: "WorkerStats") -> "WorkerStats":
        return WorkerStats(self.drawn + other.drawn, self.filtered + other.filtered,
                           self.tested + other.tested, self.found + other.found)


@dataclass
class SearchReport:
    bits: int
    count: int
    workers: int
    primes: List[FoundPrime]
    elapsed_s: float
    stats: WorkerStats = field(default_factory=WorkerStats)

    def as_dict(self) -> dict:
        return {
            "bits": self.bits,
            "count": self.count,
            "workers": self.workers,
            "elapsed_ms": int(self.elapsed_s * 1000),
            "candidates": self.stats.drawn,
            "filtered": self.stats.filtered,
            "tested": self.stats.tested,
            "primes": [{"index": p.index, "value": str(p.value)} for p in self.primes],
        }


class SearchCoordinator:
    def __init__(self, bits: int, count: int = config.DEFAULT_COUNT, workers: Optional[int] = None,
                 rounds: Optional[int] = config.DEFAULT_ROUNDS, sink: Optional[ResultSink] = None,
                 source: Optional[RandomCandidateSource] = None,
                 prime_filter: Optional[SmallFactorFilter] = None,
                 tester: Optional[MillerRabinTester] = None):
        self.bits = config.validate_bits(bits)
        self.count = config.validate_count(count)
        self.workers = config.validate_workers(workers)
        self.rounds = config.validate_rounds(rounds)
        self.sink = sink if sink is not None else CollectingSink()
        self.source = source or RandomCandidateSource()
        self.prime_filter = prime_filter or SmallFactorFilter()
        self.tester = tester or MillerRabinTester()
        self.phase = SearchPhase.IDLE
        self.stats = WorkerStats()
        self._phase_lock = threading.Lock()

    @classmethod
    def from_config(cls, cfg: config.SearchConfig, **kw) -> "SearchCoordinator":
        return cls(cfg.bits, cfg.count, workers=cfg.workers, rounds=cfg.rounds, **kw)

    def _worker(self, state: SearchState) -> WorkerStats:
        stats = WorkerStats()
        try:
            while not state.stopped:
                n = self.source.next(self.bits)
                stats.drawn += 1
                if not self.prime_filter.passes(n):
                    stats.filtered += 1
                    continue
                stats.tested += 1
                if not self.tester.is_probable_prime(n, self.rounds):
                    continue
                if state.record(n, self.sink.emit) is not None:
                    stats.found += 1
        except Exception as e:
            logger.error("worker %s failed, aborting search: %r", threading.current_thread().name, e)
            state.abort(e)
        return stats

    def run(self) -> List[FoundPrime]:
        with self._phase_lock:
            if self.phase is not SearchPhase.IDLE:
                raise RuntimeError(f"search already {self.phase.value}")
            self.phase = SearchPhase.RUNNING

        state = SearchState(self.count)
        logger.info("searching %d x %d-bit probable primes on %d workers (rounds=%d)",
                    self.count, self.bits, self.workers, self.rounds)
        try:
            with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="primegen") as ex:
                futures = [ex.submit(self._worker, state) for _ in range(self.workers)]
                try:
                    # workers only exit once the stop flag is set
                    wait(futures, return_when=FIRST_COMPLETED)
                finally:
                    state.stop()
                    self.phase = SearchPhase.DRAINING
                for fut in futures:
                    self.stats = self.stats + fut.result()
        finally:
            self.phase = SearchPhase.COMPLETED

        if state.error is not None:
            raise state.error
        found = state.results()
        logger.info("found %d primes after %d candidates (%d tested)",
                    len(found), self.stats.drawn, self.stats.tested)
        return found

    def run_timed(self) -> SearchReport:
        t0 = time.perf_counter()
        primes = self.run()
        return SearchReport(self.bits, self.count, self.workers, primes,
                            time.perf_counter() - t0, self.stats)


def generate_primes(bits: int, count: int = 1, **kw) -> List[FoundPrime]:
    return SearchCoordinator(bits, count, **kw).run()
