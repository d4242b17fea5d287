"""Tests for primegen.miller_rabin."""

from __future__ import annotations

import logging
import random

import pytest

from primegen.miller_rabin import (
    MAX_WITNESS_DRAWS,
    MillerRabinTester,
    TestOutcome,
    _decompose,
    is_probable_prime,
)

SMALL_PRIMES = [2, 3, 5, 7, 11, 13, 97, 7919]
CARMICHAEL = [561, 1105]
MORE_CARMICHAEL = [1729, 2465, 2821, 6601, 8911, 41041, 825265]


class _ZeroBits(random.Random):
    """Every getrandbits() draw is 0, so rejection sampling never accepts."""

    def getrandbits(self, k):
        return 0


# --------------------------------------------------------------------------
# trivial and small values
# --------------------------------------------------------------------------


class TestSmallValues:
    @pytest.mark.parametrize("n", [1, 0, -1, -7, -(2**80)])
    @pytest.mark.parametrize("k", [-3, 0, 1, 10])
    def test_at_most_one_is_composite(self, n, k):
        assert is_probable_prime(n, k) is False

    @pytest.mark.parametrize("n", SMALL_PRIMES)
    @pytest.mark.parametrize("k", [1, 5, 10])
    def test_known_primes(self, n, k):
        assert is_probable_prime(n, k) is True

    @pytest.mark.parametrize("n", [4, 6, 8, 100, 2**64])
    def test_even_composites(self, n):
        assert is_probable_prime(n) is False

    def test_nonpositive_rounds_defaults(self, seeded_tester):
        assert seeded_tester.is_probable_prime(7919, 0) is True
        assert seeded_tester.is_probable_prime(561, -5) is False


class TestCompositesWithoutSmallFactors:
    @pytest.mark.parametrize("n", CARMICHAEL)
    def test_carmichael_numbers_rejected(self, n):
        for _ in range(100):
            assert is_probable_prime(n, 5) is False

    @pytest.mark.parametrize("n", MORE_CARMICHAEL)
    def test_more_carmichael_numbers(self, n):
        for _ in range(100):
            assert is_probable_prime(n, 10) is False

    def test_product_of_large_primes(self):
        p, q = 4294967291, 4294967279
        assert is_probable_prime(p * q, 10) is False

    def test_large_known_prime(self):
        assert is_probable_prime(2**127 - 1, 10) is True
        assert is_probable_prime(2**521 - 1, 10) is True


# --------------------------------------------------------------------------
# internals
# --------------------------------------------------------------------------


class TestDecompose:
    @pytest.mark.parametrize("n_minus_1,d,s", [(560, 35, 4), (96, 3, 5), (7, 7, 0), (2**20, 1, 20)])
    def test_decompose(self, n_minus_1, d, s):
        assert _decompose(n_minus_1) == (d, s)


class TestWitness:
    def test_witness_in_range(self, seeded_tester):
        for n in (5, 7, 97, 2**61 - 1):
            for _ in range(200):
                a = seeded_tester.draw_witness(n)
                assert 2 <= a < n - 2

    def test_five_has_single_witness(self, seeded_tester):
        assert {seeded_tester.draw_witness(5) for _ in range(50)} == {2}

    def test_exhausted_sampling_redraws_directly(self, caplog):
        tester = MillerRabinTester(rng=_ZeroBits(0))
        with caplog.at_level(logging.WARNING, logger="primegen.miller_rabin"):
            a = tester.draw_witness(1009)
        assert 2 <= a < 1007
        assert str(MAX_WITNESS_DRAWS) in caplog.text


class TestOutcomeAndIdempotence:
    def test_outcome_values(self, seeded_tester):
        assert seeded_tester.test(7919) is TestOutcome.PROBABLY_PRIME
        assert seeded_tester.test(7917) is TestOutcome.COMPOSITE

    @pytest.mark.parametrize("n", [0, 1, 2, 97, 561, 1105, 2**89 - 1, 2**89 + 1])
    def test_same_answer_twice(self, n):
        assert is_probable_prime(n, 10) == is_probable_prime(n, 10)
