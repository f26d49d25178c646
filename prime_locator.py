#!/usr/bin/env python3
"""Locate the n-th prime: estimate a bound, sieve seeds, scan segments.

A scan that runs out of room is retried with a doubled bound a few times
before BoundExceededError reaches the caller.
"""

import logging
import numbers

import numpy as np

from prime_cache import PrimeCache
from prime_errors import (
    INT64_MAX,
    BoundExceededError,
    InvalidIndexError,
    LocateCancelled,
    PrimeOverflowError,
)
from prime_numpy import (
    DEFAULT_MARGIN,
    DEFAULT_SEGMENT_ODDS,
    nth_prime_upper_bound,
    scan_segments,
    seed_limit,
    simple_sieve,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3

_ONLY_TWO = np.array([2], dtype=np.int64)


def check_index(n) -> int:
    """Return n as a plain int, or raise InvalidIndexError."""
    if isinstance(n, bool) or not isinstance(n, numbers.Integral) or n < 0:
        raise InvalidIndexError(n)
    return int(n)


class PrimeLocator:
    """
    Finds the n-th prime (0-indexed) with a bounded, segmented sieve.

    margin        safety factor applied to the asymptotic bound
    segment_odds  odd numbers per sieve segment (any positive value is correct)
    max_retries   how many times an exhausted bound is doubled and re-scanned
    cache         optional PrimeCache shared with other locators and threads
    """

    def __init__(
        self,
        margin: float = DEFAULT_MARGIN,
        segment_odds: int = DEFAULT_SEGMENT_ODDS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        cache: PrimeCache = None,
    ):
        if margin <= 0:
            raise ValueError(f"margin must be > 0, got {margin}")
        if segment_odds < 1:
            raise ValueError(f"segment_odds must be >= 1, got {segment_odds}")
        if max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {max_retries}")
        self.margin = margin
        self.segment_odds = segment_odds
        self.max_retries = max_retries
        self.cache = cache

    def locate(self, n, cancel=None) -> int:
        n = check_index(n)
        if n == 0:
            return 2
        # the n-th prime is larger than n itself
        if n >= INT64_MAX:
            raise PrimeOverflowError(n, n)

        upper = nth_prime_upper_bound(n, self.margin)
        attempt = 1
        while True:
            if upper > INT64_MAX:
                raise PrimeOverflowError(n, upper)
            try:
                return self._attempt(n, upper, cancel)
            except LocateCancelled as exc:
                raise LocateCancelled(exc.reached, n) from exc
            except BoundExceededError as exc:
                if attempt > self.max_retries:
                    raise BoundExceededError(upper, n, attempt) from exc
                if upper >= INT64_MAX:
                    raise PrimeOverflowError(n, 2 * upper) from exc
                # bypass the estimate: double what we just exhausted
                next_upper = min(2 * upper, INT64_MAX)
                logger.warning(
                    "prime #%d: bound %d exceeded, retrying with %d (attempt %d of %d)",
                    n, upper, next_upper, attempt + 1, self.max_retries + 1,
                )
                upper = next_upper
                attempt += 1

    def _attempt(self, n: int, upper: int, cancel) -> int:
        known = self.cache.snapshot() if self.cache is not None else _ONLY_TWO
        if n < known.size:
            logger.debug("prime #%d served from cache", n)
            return int(known[n])

        # resume after the last known prime; known[0] is 2, the rest are odd
        tail = int(known[-1])
        remaining = n - (known.size - 1)

        seeds = simple_sieve(seed_limit(upper))
        logger.debug(
            "prime #%d: scanning (%d, %d] with %d seed primes, %d to go",
            n, tail, upper, seeds.size, remaining,
        )

        on_segment = None
        if self.cache is not None:
            cache = self.cache
            after = tail

            def on_segment(primes):
                nonlocal after
                cache.extend(after, primes)
                after = int(primes[-1])

        return scan_segments(
            seeds,
            upper,
            remaining,
            low=tail + 1,
            segment_odds=self.segment_odds,
            cancel=cancel,
            on_segment=on_segment,
        )
