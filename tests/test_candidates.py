from __future__ import annotations

import pytest

from primegen.candidates import RandomCandidateSource
from primegen.errors import ConfigurationError, EntropySourceError


class TestNext:
    @pytest.mark.parametrize("bits", [8, 32, 64, 256, 1024])
    def test_magnitude(self, bits):
        src = RandomCandidateSource()
        for _ in range(50):
            n = src.next(bits)
            assert 0 <= n < 2**bits

    def test_reaches_full_width(self):
        src = RandomCandidateSource()
        assert any(src.next(64).bit_length() == 64 for _ in range(200))

    def test_big_endian_bytes(self):
        src = RandomCandidateSource(lambda k: b"\x01" + b"\x00" * (k - 1))
        assert src.next(32) == 1 << 24

    @pytest.mark.parametrize("bits", [0, -8, 12])
    def test_bad_bits(self, bits):
        with pytest.raises(ConfigurationError):
            RandomCandidateSource().next(bits)


class TestEntropyFailure:
    def test_os_error_surfaces(self):
        def broken(_):
            raise OSError("no entropy")

        with pytest.raises(EntropySourceError, match="no entropy"):
            RandomCandidateSource(broken).next(64)

    def test_short_read(self):
        with pytest.raises(EntropySourceError):
            RandomCandidateSource(lambda k: b"\xff").next(64)
