#!/usr/bin/env python3
"""Process-wide cache of the leading primes (index 0 upward)."""

import logging
import threading

import numpy as np

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 1_000_000


class PrimeCache:
    """
    Append-only ordered store of the first primes, shared between threads.

    Readers call snapshot() and get a read-only view of the published prefix
    without locking. Writers serialize on one lock, write past the published
    length (or into a fresh, larger buffer) and only then publish the longer
    view, so a reader never sees a half-written append.
    """

    def __init__(self, max_size: int = DEFAULT_CACHE_SIZE):
        if max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {max_size}")
        self.max_size = max_size
        self._lock = threading.Lock()
        self._buf = np.empty(min(1024, max_size), dtype=np.int64)
        self._buf[0] = 2
        self._view = self._publish(1)

    def _publish(self, size: int) -> np.ndarray:
        view = self._buf[:size]
        view.flags.writeable = False
        return view

    def snapshot(self) -> np.ndarray:
        return self._view

    def __len__(self) -> int:
        return self._view.size

    def get(self, n: int):
        """Return the n-th prime if cached, else None."""
        known = self._view
        if 0 <= n < known.size:
            return int(known[n])
        return None

    def extend(self, after: int, primes: np.ndarray) -> int:
        """
        Append 'primes', the consecutive primes that follow 'after'.

        Entries already cached are skipped. A chunk that starts beyond the
        cached tail would leave a gap and is ignored. Returns the number of
        primes appended.
        """
        with self._lock:
            size = self._view.size
            room = self.max_size - size
            tail = int(self._buf[size - 1])
            if room <= 0 or after > tail or not len(primes):
                return 0
            fresh = primes[primes > tail][:room]
            if not fresh.size:
                return 0

            new_size = size + fresh.size
            if new_size > self._buf.size:
                capacity = min(max(new_size, 2 * self._buf.size), self.max_size)
                grown = np.empty(capacity, dtype=np.int64)
                grown[:size] = self._buf[:size]
                self._buf = grown
            self._buf[size:new_size] = fresh
            self._view = self._publish(new_size)

        logger.debug("cache extended by %d to %d primes", fresh.size, new_size)
        return int(fresh.size)

    def clear(self):
        with self._lock:
            self._buf = np.empty(min(1024, self.max_size), dtype=np.int64)
            self._buf[0] = 2
            self._view = self._publish(1)
