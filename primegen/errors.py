from __future__ import annotations


class PrimeGenError(Exception):
    pass


class ConfigurationError(PrimeGenError, ValueError):
    """Bad search parameters (bits, count, workers, rounds). Raised before any search starts."""


class EntropySourceError(PrimeGenError, RuntimeError):
    """The OS random source failed. Fatal: the search is aborted, never retried."""
