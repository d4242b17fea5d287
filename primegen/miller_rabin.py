# primegen/miller_rabin.py
# Randomized Miller–Rabin probable-prime test.
# - false-positive probability <= 4^-rounds
# - witnesses drawn by bounded rejection sampling
# - modexp via gmpy2

from __future__ import annotations
import enum
import logging
import random
from typing import Optional

import gmpy2

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10
# A draw of value.bit_length() random bits lands in [2, value-2) with probability
# (value-4) / 2^bits, which is > 1/2 - 4/2^bits for any value, so 64 misses in a
# row happen with probability < 2^-64 on the bit lengths we search.
MAX_WITNESS_DRAWS = 64


class TestOutcome(enum.Enum):
    COMPOSITE = "definitely composite"
    PROBABLY_PRIME = "probably prime"

    __test__ = False  # not a pytest class


def _decompose(n_minus_1: int) -> tuple[int, int]:
    """n-1 = d * 2^s with d odd."""
    d, s = n_minus_1, 0
    while d % 2 == 0:
        d //= 2
        s += 1
    return d, s


class MillerRabinTester:
    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng if rng is not None else random.SystemRandom()

    def draw_witness(self, value: int) -> int:
        """Uniform witness a with 2 <= a < value - 2 (needs value >= 5)."""
        bits = value.bit_length()
        hi = value - 2
        for _ in range(MAX_WITNESS_DRAWS):
            a = self._rng.getrandbits(bits)
            if 2 <= a < hi:
                return a
        logger.warning("witness sampling missed %d times for %d-bit value; drawing directly",
                       MAX_WITNESS_DRAWS, bits)
        return self._rng.randrange(2, hi)

    def _round_passes(self, value: int, d: int, s: int) -> bool:
        a = self.draw_witness(value)
        x = gmpy2.powmod(a, d, value)
        if x == 1 or x == value - 1:
            return True
        for _ in range(1, s):
            x = x * x % value
            if x == 1:
                return False
            if x == value - 1:
                return True
        return False

    def test(self, value: int, rounds: int = DEFAULT_ROUNDS) -> TestOutcome:
        if value <= 1:
            return TestOutcome.COMPOSITE
        if value in (2, 3):
            return TestOutcome.PROBABLY_PRIME
        if value % 2 == 0:
            return TestOutcome.COMPOSITE
        if rounds <= 0:
            rounds = DEFAULT_ROUNDS

        d, s = _decompose(value - 1)
        for _ in range(rounds):
            if not self._round_passes(value, d, s):
                return TestOutcome.COMPOSITE
        return TestOutcome.PROBABLY_PRIME

    def is_probable_prime(self, value: int, rounds: int = DEFAULT_ROUNDS) -> bool:
        return self.test(value, rounds) is TestOutcome.PROBABLY_PRIME


_default = MillerRabinTester()


def is_probable_prime(value: int, rounds: int = DEFAULT_ROUNDS) -> bool:
    return _default.is_probable_prime(value, rounds)
