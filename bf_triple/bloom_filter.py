"""Triple hashing index strategy.

Three digests seed a second-order progression: the step itself advances by the
third digest value on every position, which spreads positions better than
plain double hashing when ``b`` shares factors with the filter size.
"""
from __future__ import annotations

from typing import Iterator, Optional, Tuple

from bf_core.digests import DigestFunction, ensure_distinct
from bf_core.engine import BloomFilter, build_filter

DEFAULT_FIRST_HASH = "murmur3_128"
DEFAULT_SECOND_HASH = "xxh64"
DEFAULT_THIRD_HASH = "xxh3_128"


class TripleHashing:
    """Index strategy ``a_i = a_{i-1} + b_{i-1}``, ``b_i = b_{i-1} + c`` (mod m)."""

    def __init__(
        self,
        first_hash: DigestFunction,
        second_hash: DigestFunction,
        third_hash: DigestFunction,
    ) -> None:
        ensure_distinct((first_hash, second_hash, third_hash))
        self.first_hash = first_hash
        self.second_hash = second_hash
        self.third_hash = third_hash

    @classmethod
    def default(cls) -> "TripleHashing":
        return cls(
            DigestFunction(DEFAULT_FIRST_HASH),
            DigestFunction(DEFAULT_SECOND_HASH),
            DigestFunction(DEFAULT_THIRD_HASH),
        )

    @property
    def digest_functions(self) -> Tuple[DigestFunction, ...]:
        return (self.first_hash, self.second_hash, self.third_hash)

    def derive_indices(self, payload: bytes, count: int, size: int) -> Iterator[int]:
        a = self.first_hash.value(payload, size)
        b = self.second_hash.value(payload, size)
        c = self.third_hash.value(payload, size)
        for _ in range(count):
            a = (a + b) % size
            b = (b + c) % size
            yield a


def triple_hash_bloom_filter(
    expected_elements: int,
    *,
    size: Optional[int] = None,
    probability: Optional[float] = None,
    first_hash: Optional[DigestFunction] = None,
    second_hash: Optional[DigestFunction] = None,
    third_hash: Optional[DigestFunction] = None,
) -> BloomFilter:
    """Create a triple hashing Bloom filter from ``size`` or ``probability``."""
    return build_filter(
        TripleHashing,
        (first_hash, second_hash, third_hash),
        expected_elements,
        size=size,
        probability=probability,
    )
