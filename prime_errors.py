#!/usr/bin/env python3
"""Typed failures raised while locating the n-th prime.

Each error carries the HTTP status the calling layer is expected to answer
with, so a web front end can map failures without inspecting messages.
Errors cross process boundaries (see prime_threads), hence the __reduce__
methods: pickle would otherwise rebuild them from the message alone.
"""

INT64_MAX = 2**63 - 1


class PrimeError(Exception):
    """Base class for every failure surfaced by the locator."""

    status_code = 500


class InvalidIndexError(PrimeError, ValueError):
    status_code = 400

    def __init__(self, index):
        self.index = index
        super().__init__(f"Negative Indexed Prime Numbers are not Allowed (got {index!r}).")

    def __reduce__(self):
        return (type(self), (self.index,))


class BoundExceededError(PrimeError):
    """The scan reached the upper bound before finding the requested prime."""

    def __init__(self, upper: int, index=None, attempts: int = 1):
        self.upper = upper
        self.index = index
        self.attempts = attempts
        what = "requested prime" if index is None else f"prime #{index}"
        super().__init__(f"{what} lies beyond {upper:,} (gave up after {attempts} attempt(s))")

    def __reduce__(self):
        return (type(self), (self.upper, self.index, self.attempts))


class PrimeOverflowError(PrimeError, OverflowError):
    def __init__(self, index, value: int):
        self.index = index
        self.value = value
        super().__init__(
            f"prime #{index} needs values up to {value:,}, beyond the int64 limit {INT64_MAX:,}"
        )

    def __reduce__(self):
        return (type(self), (self.index, self.value))


class LocateCancelled(PrimeError):
    # 499: client closed request
    status_code = 499

    def __init__(self, reached: int, index=None):
        self.reached = reached
        self.index = index
        what = "scan" if index is None else f"locating prime #{index}"
        super().__init__(f"{what} cancelled before reaching {reached:,}")

    def __reduce__(self):
        return (type(self), (self.reached, self.index))
