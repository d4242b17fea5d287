from __future__ import annotations
from typing import Iterable, Tuple

# cheap divisibility screen before any modexp
SMALL_PRIMES: Tuple[int, ...] = (2, 3, 5, 7)


class SmallFactorFilter:
    def __init__(self, primes: Iterable[int] = SMALL_PRIMES):
        self.primes = tuple(primes)
        if not self.primes:
            raise ValueError("need at least one small prime")

    def passes(self, n: int) -> bool:
        """False if n is negative or divisible by any configured small prime."""
        if n < 0:
            return False
        for p in self.primes:
            if n % p == 0:
                return False
        return True

    __call__ = passes


_default = SmallFactorFilter()


def passes_filter(n: int) -> bool:
    return _default.passes(n)
