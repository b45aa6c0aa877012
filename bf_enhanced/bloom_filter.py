"""Enhanced double hashing index strategy.

Like double hashing, but the step grows by the loop counter on every position
(``b_i = b_{i-1} + i``). Since the step keeps changing, a step sharing a factor
with the filter size no longer traps the positions in a short cycle.
"""
from __future__ import annotations

from typing import Iterator, Optional, Tuple

from bf_core.digests import DigestFunction, ensure_distinct
from bf_core.engine import BloomFilter, build_filter

DEFAULT_FIRST_HASH = "murmur3_128"
DEFAULT_SECOND_HASH = "xxh64"


class EnhancedDoubleHashing:
    def __init__(self, first_hash: DigestFunction, second_hash: DigestFunction) -> None:
        ensure_distinct((first_hash, second_hash))
        self.first_hash = first_hash
        self.second_hash = second_hash

    @classmethod
    def default(cls) -> "EnhancedDoubleHashing":
        return cls(DigestFunction(DEFAULT_FIRST_HASH), DigestFunction(DEFAULT_SECOND_HASH))

    @property
    def digest_functions(self) -> Tuple[DigestFunction, ...]:
        return (self.first_hash, self.second_hash)

    def derive_indices(self, payload: bytes, count: int, size: int) -> Iterator[int]:
        a = self.first_hash.value(payload, size)
        b = self.second_hash.value(payload, size)
        for i in range(count):
            a = (a + b) % size
            b = (b + i) % size
            yield a


def enhanced_double_hash_bloom_filter(
    expected_elements: int,
    *,
    size: Optional[int] = None,
    probability: Optional[float] = None,
    first_hash: Optional[DigestFunction] = None,
    second_hash: Optional[DigestFunction] = None,
) -> BloomFilter:
    """Create an enhanced double hashing Bloom filter from ``size`` or ``probability``."""
    return build_filter(
        EnhancedDoubleHashing,
        (first_hash, second_hash),
        expected_elements,
        size=size,
        probability=probability,
    )
