#!/usr/bin/env python3
"""Return the n-th prime (0-indexed: 0 -> 2, 1 -> 3, 99 -> 541).

    python prime.py 0 99 1000000
    python prime.py 10000000 100000000 --workers 2
"""

import argparse
import logging
import sys

from prime_cache import PrimeCache
from prime_errors import PrimeError
from prime_locator import DEFAULT_MAX_RETRIES, PrimeLocator
from prime_numpy import DEFAULT_MARGIN, DEFAULT_SEGMENT_ODDS
from prime_threads import nth_primes

logger = logging.getLogger(__name__)

_default_locator = PrimeLocator(cache=PrimeCache())


def nth_prime(n, cancel=None) -> int:
    """The n-th prime, sharing one process-wide cache between callers."""
    return _default_locator.locate(n, cancel=cancel)


def main(argv=None):
    ap = argparse.ArgumentParser(description="Find the n-th prime with a segmented, odd-only sieve.")
    ap.add_argument("indices", metavar="N", type=int, nargs="+", help="0-based prime index.")
    ap.add_argument("--margin", type=float, default=DEFAULT_MARGIN,
                    help=f"Safety factor on the asymptotic bound (default: {DEFAULT_MARGIN}).")
    ap.add_argument("--segment-odds", type=int, default=DEFAULT_SEGMENT_ODDS,
                    help=f"Odd numbers per segment (default: {DEFAULT_SEGMENT_ODDS:,}).")
    ap.add_argument("--retries", type=int, default=DEFAULT_MAX_RETRIES,
                    help=f"Bound doublings before giving up (default: {DEFAULT_MAX_RETRIES}).")
    ap.add_argument("--no-cache", action="store_true", help="Do not reuse primes between indices.")
    ap.add_argument("--workers", type=int, default=0,
                    help="Worker processes; 0 runs every index in this process (default: 0).")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = dict(margin=args.margin, segment_odds=args.segment_odds, max_retries=args.retries)
    try:
        if args.workers > 0:
            primes = nth_primes(args.indices, workers=args.workers, **settings)
        else:
            cache = None if args.no_cache else PrimeCache()
            locator = PrimeLocator(cache=cache, **settings)
            # ascending order lets the cache carry work from one index to the next
            found = {n: locator.locate(n) for n in sorted(set(args.indices))}
            primes = [found[n] for n in args.indices]
    except ValueError as exc:
        # negative index or bad tuning flags
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except PrimeError as exc:
        logger.error("%s (status %d)", exc, exc.status_code)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for n, p in zip(args.indices, primes):
        print(f"{n} -> {p}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
