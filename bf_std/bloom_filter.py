"""Double hashing index strategy.

Two independent digests (MurmurHash3 via mmh3 and xxHash64 by default) seed an
arithmetic progression modulo the filter size, so only two hash calls are paid
per element regardless of how many bit positions it needs.
"""
from __future__ import annotations

from typing import Iterator, Optional, Tuple

from bf_core.digests import DigestFunction, ensure_distinct
from bf_core.engine import BloomFilter, build_filter

DEFAULT_FIRST_HASH = "murmur3_128"
DEFAULT_SECOND_HASH = "xxh64"


class DoubleHashing:
    """Index strategy ``a_i = (a_{i-1} + b) mod m``."""

    def __init__(self, first_hash: DigestFunction, second_hash: DigestFunction) -> None:
        """Initialize the strategy.

        Args:
            first_hash: Digest seeding the start of the progression.
            second_hash: Digest seeding the step.

        Raises:
            InvalidArgumentError: If a digest function is None or both are the same.
        """
        ensure_distinct((first_hash, second_hash))
        self.first_hash = first_hash
        self.second_hash = second_hash

    @classmethod
    def default(cls) -> "DoubleHashing":
        return cls(DigestFunction(DEFAULT_FIRST_HASH), DigestFunction(DEFAULT_SECOND_HASH))

    @property
    def digest_functions(self) -> Tuple[DigestFunction, ...]:
        return (self.first_hash, self.second_hash)

    def derive_indices(self, payload: bytes, count: int, size: int) -> Iterator[int]:
        """Yield ``count`` bit positions for ``payload``.

        The starting value itself is never yielded: the first position is
        already one step into the progression.
        """
        a = self.first_hash.value(payload, size)
        b = self.second_hash.value(payload, size)
        for _ in range(count):
            a = (a + b) % size
            yield a


def double_hash_bloom_filter(
    expected_elements: int,
    *,
    size: Optional[int] = None,
    probability: Optional[float] = None,
    first_hash: Optional[DigestFunction] = None,
    second_hash: Optional[DigestFunction] = None,
) -> BloomFilter:
    """Create a double hashing Bloom filter.

    Give either ``size`` (bits) or ``probability`` (target false positive
    rate). Leave both digest functions out to use the defaults.
    """
    return build_filter(
        DoubleHashing,
        (first_hash, second_hash),
        expected_elements,
        size=size,
        probability=probability,
    )
