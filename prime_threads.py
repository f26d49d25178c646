#!/usr/bin/env python3
"""Locate many primes at once, one worker process per request."""

import logging
from concurrent.futures import ProcessPoolExecutor, as_completed

from prime_locator import PrimeLocator, check_index

logger = logging.getLogger(__name__)


def _locate(n, settings):
    # Each task builds its own seeds and buffers; nothing is shared.
    return PrimeLocator(**settings).locate(n)


def nth_primes(indices, workers=None, **settings):
    """
    Return the primes for 'indices', in input order.

    'workers' defaults to os.cpu_count(). Remaining keyword arguments
    (margin, segment_odds, max_retries) configure each worker's locator.
    Every index is validated before any process is started; the first
    failing task re-raises its error here.
    """
    indices = [check_index(n) for n in indices]
    if not indices:
        return []

    results = [None] * len(indices)
    with ProcessPoolExecutor(max_workers=workers) as ex:
        futures = {ex.submit(_locate, n, settings): idx for idx, n in enumerate(indices)}

        # Collect results; store by idx to restore order
        for fut in as_completed(futures):
            idx = futures[fut]
            try:
                results[idx] = fut.result()
            except Exception:
                for pending in futures:
                    pending.cancel()
                raise
            logger.debug("prime #%d = %d", indices[idx], results[idx])

    return results
