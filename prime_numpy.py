#!/usr/bin/env python3
"""Bound estimate, seed sieve and odd-only segmented scan (NumPy vectorized).

These are the three stages of locating the n-th prime:

  nth_prime_upper_bound  ->  simple_sieve(isqrt(upper) + 1)  ->  scan_segments

Bounds, p*p and first-multiple arithmetic stay in Python ints; NumPy only
holds the per-segment composite mask, so nothing can wrap around.
"""

import logging
import math

import numpy as np

from prime_errors import BoundExceededError, InvalidIndexError, LocateCancelled

logger = logging.getLogger(__name__)

DEFAULT_MARGIN = 1.15
DEFAULT_SEGMENT_ODDS = 100_000


def nth_prime_upper_bound(n: int, margin: float = DEFAULT_MARGIN) -> int:
    """Asymptotic upper bound for the n-th prime (0-indexed, n >= 1).

    Uses the 1-indexed rank n+1 so ln(ln(x)) stays defined. For small n the
    estimate can undershoot; the scan reports that as BoundExceededError.
    """
    if n < 1:
        raise InvalidIndexError(n)
    nf = float(n + 1)
    return int(math.ceil(nf * (math.log(nf) + math.log(math.log(nf))) * margin))


def simple_sieve(limit: int) -> np.ndarray:
    """Classic sieve up to 'limit' (inclusive), returns primes as int64 numpy array."""
    if limit < 2:
        return np.array([], dtype=np.int64)
    is_prime = np.ones(limit + 1, dtype=bool)
    is_prime[:2] = False
    r = math.isqrt(limit)
    for p in range(2, r + 1):
        if is_prime[p]:
            is_prime[p * p : limit + 1 : p] = False
    return np.flatnonzero(is_prime).astype(np.int64)


def seed_limit(upper: int) -> int:
    return math.isqrt(upper) + 1


def scan_segments(
    seeds: np.ndarray,
    upper: int,
    remaining: int,
    *,
    low: int = 3,
    segment_odds: int = DEFAULT_SEGMENT_ODDS,
    cancel=None,
    on_segment=None,
) -> int:
    """
    Return the remaining-th odd prime (1-based) in [low, upper].

    'seeds' must hold every prime <= isqrt(upper). The range is walked in
    segments of 'segment_odds' odd numbers; each segment gets a fresh mask.
    'cancel' is polled before each segment (anything with is_set(), e.g. a
    threading.Event). 'on_segment' receives each segment's primes as an int64
    array, truncated at the answer.

    Raises BoundExceededError if 'upper' is reached first.
    """
    if remaining < 1:
        raise ValueError(f"remaining must be >= 1, got {remaining}")
    if segment_odds < 1:
        raise ValueError(f"segment_odds must be >= 1, got {segment_odds}")

    low = max(low, 3)
    if (low & 1) == 0:
        low += 1
    odd_seeds = [p for p in seeds.tolist() if p != 2]
    span = 2 * segment_odds
    segments = 0

    while low <= upper:
        if cancel is not None and cancel.is_set():
            raise LocateCancelled(low)

        high = min(low + span, upper + 1)  # exclusive
        odd_count = (high - low + 1) // 2
        last = low + 2 * (odd_count - 1)
        mask = np.ones(odd_count, dtype=bool)

        for p in odd_seeds:
            p2 = p * p
            if p2 > last:
                # seeds ascend, so no later one marks anything here either
                break
            start = max(p2, -(-low // p) * p)
            if (start & 1) == 0:
                start += p
            mask[(start - low) // 2 :: p] = False

        segments += 1
        found = np.flatnonzero(mask)
        if remaining <= found.size:
            if on_segment is not None:
                on_segment(low + 2 * found[:remaining])
            prime = low + 2 * int(found[remaining - 1])
            logger.debug("found %d after %d segment(s)", prime, segments)
            return prime

        remaining -= found.size
        if on_segment is not None and found.size:
            on_segment(low + 2 * found)
        low = high

    logger.debug("scan exhausted %d segment(s) below %d, %d prime(s) short", segments, upper, remaining)
    raise BoundExceededError(upper)
