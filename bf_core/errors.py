"""Exceptions raised by the Bloom filter engine and its hashing strategies."""
from __future__ import annotations


class BloomFilterError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgumentError(BloomFilterError, ValueError):
    """A filter, strategy or digest function was configured with bad input.

    Raised at construction time only, before any bit array is allocated.
    """


class EmptyFilterError(BloomFilterError):
    """The requested statistic is undefined while the filter holds no elements."""
