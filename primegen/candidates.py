from __future__ import annotations
import secrets
from typing import Callable

from .errors import ConfigurationError, EntropySourceError


class RandomCandidateSource:
    """
    Random integers of a requested bit length from the OS CSPRNG.
    bits // 8 bytes, read big-endian unsigned, so the result has at most `bits` bits.
    """

    def __init__(self, randbytes: Callable[[int], bytes] = secrets.token_bytes):
        self._randbytes = randbytes

    def next(self, bits: int) -> int:
        if bits <= 0 or bits % 8:
            raise ConfigurationError(f"bits must be a positive multiple of 8, got {bits}")
        nbytes = bits // 8
        try:
            raw = self._randbytes(nbytes)
        except (OSError, NotImplementedError) as e:
            raise EntropySourceError(f"entropy source failed: {e}") from e
        if len(raw) != nbytes:
            raise EntropySourceError(f"entropy source returned {len(raw)} bytes, wanted {nbytes}")
        return int.from_bytes(raw, "big")
