from .candidates import RandomCandidateSource
from .filters import SmallFactorFilter, passes_filter
from .miller_rabin import MillerRabinTester, TestOutcome, is_probable_prime
from .search import FoundPrime, SearchCoordinator, SearchPhase, SearchState, generate_primes
__all__ = [
    "RandomCandidateSource", "SmallFactorFilter", "passes_filter",
    "MillerRabinTester", "TestOutcome", "is_probable_prime",
    "FoundPrime", "SearchCoordinator", "SearchPhase", "SearchState", "generate_primes",
]
