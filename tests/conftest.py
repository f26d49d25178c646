# =============================================================================
# tests/conftest.py - Shared fixtures
# =============================================================================
# Reference primes come from plain trial division, independent of the sieve
# code under test.
# =============================================================================

import pytest

from prime_cache import PrimeCache
from prime_locator import PrimeLocator


def trial_division_primes(count):
    primes = []
    candidate = 2
    while len(primes) < count:
        if all(candidate % p for p in primes if p * p <= candidate):
            primes.append(candidate)
        candidate += 1
    return primes


REFERENCE_PRIMES = trial_division_primes(3000)


@pytest.fixture
def reference_primes():
    """The first 3000 primes, 2 through 27449."""
    return REFERENCE_PRIMES


@pytest.fixture
def locator():
    return PrimeLocator()


@pytest.fixture
def cache():
    return PrimeCache()


@pytest.fixture
def cached_locator(cache):
    return PrimeLocator(cache=cache)
