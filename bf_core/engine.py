"""Bloom filter engine backed by a bytearray bitset.

The engine owns sizing, the bit array and the element counter. How an element
maps to bit positions is decided by a pluggable index strategy (double, triple
or enhanced double hashing), so the same membership protocol serves every
strategy.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Optional

from bf_core.contract import IndexStrategy
from bf_core.errors import EmptyFilterError, InvalidArgumentError
from bf_core.sizing import FilterParams, false_positive_probability

logger = logging.getLogger(__name__)


def to_payload(element: Any) -> bytes:
    """Serialize ``element`` to the bytes that get hashed.

    Bytes-like objects are used as-is, strings are UTF-8 encoded and anything
    else is hashed through its ``str()`` form.
    """
    if isinstance(element, bytes):
        return element
    if isinstance(element, (bytearray, memoryview)):
        return bytes(element)
    if isinstance(element, str):
        return element.encode("utf-8")
    return str(element).encode("utf-8")


def _default_strategy() -> IndexStrategy:
    from bf_std.bloom_filter import DoubleHashing

    return DoubleHashing.default()


class BloomFilter:
    """Bloom filter with a configurable index strategy.

    Not safe for concurrent mutation.
    """

    def __init__(
        self,
        size: int,
        expected_elements: int,
        strategy: Optional[IndexStrategy] = None,
    ) -> None:
        """Initialize a Bloom filter from an explicit size.

        Args:
            size: Number of bits in the filter.
            expected_elements: Number of elements the filter is sized for.
            strategy: Index strategy; double hashing with the default digest
                functions when omitted.

        Raises:
            InvalidArgumentError: If size or expected_elements is not positive.
        """
        self._init(FilterParams.from_size(size, expected_elements), strategy)

    @classmethod
    def from_probability(
        cls,
        probability: float,
        expected_elements: int,
        strategy: Optional[IndexStrategy] = None,
    ) -> "BloomFilter":
        """Build a filter sized for a target false positive probability."""
        return cls.from_params(FilterParams.from_probability(probability, expected_elements), strategy)

    @classmethod
    def from_params(cls, params: FilterParams, strategy: Optional[IndexStrategy] = None) -> "BloomFilter":
        bloom = cls.__new__(cls)
        bloom._init(params, strategy)
        return bloom

    def _init(self, params: FilterParams, strategy: Optional[IndexStrategy]) -> None:
        if strategy is None:
            strategy = _default_strategy()

        self.params = params
        self.size = params.size
        self.expected_elements = params.expected_elements
        self.num_hashes = params.num_hashes
        self.strategy = strategy
        self._count = 0
        self._bit_array = bytearray((params.size + 7) // 8)
        logger.debug(
            "created bloom filter size=%d expected_elements=%d num_hashes=%d strategy=%s",
            self.size,
            self.expected_elements,
            self.num_hashes,
            type(strategy).__name__,
        )

    def add(self, element: Any) -> None:
        """Insert ``element`` into the filter."""
        for bit_index in self._hashes(element):
            self._bit_array[bit_index >> 3] |= 1 << (bit_index & 7)
        self._count += 1

    def add_all(self, elements: Iterable[Any]) -> None:
        """Insert all ``elements`` into the filter, in order."""
        for element in elements:
            self.add(element)

    update = add_all

    def might_contain(self, element: Any) -> bool:
        """Return True if ``element`` may be present, False if definitely absent."""
        for bit_index in self._hashes(element):
            if not (self._bit_array[bit_index >> 3] & (1 << (bit_index & 7))):
                return False
        return True

    __contains__ = might_contain

    def might_contain_all(self, elements: Iterable[Any]) -> bool:
        """Return True if every element in ``elements`` may be present."""
        return all(self.might_contain(element) for element in elements)

    def clear(self) -> None:
        """Reset every bit and the element count. Sizing and strategy are kept."""
        self._bit_array[:] = bytes(len(self._bit_array))
        self._count = 0
        logger.debug("cleared bloom filter size=%d", self.size)

    def is_empty(self) -> bool:
        return self._count == 0

    @property
    def number_of_elements(self) -> int:
        """Number of ``add`` calls since construction or the last ``clear``."""
        return self._count

    def __len__(self) -> int:
        return self._count

    def number_of_hash(self) -> int:
        return self.num_hashes

    def probability_of_false_positives(self, count: int) -> float:
        """Estimated false positive probability once ``count`` elements are inserted."""
        return false_positive_probability(self.num_hashes, count, self.size)

    def expected_probability_of_false_positives(self) -> float:
        return self.probability_of_false_positives(self.expected_elements)

    def current_probability_of_false_positives(self) -> float:
        return self.probability_of_false_positives(self._count)

    def expected_bits_per_element(self) -> float:
        return self.params.bits_per_element

    def bits_per_element(self) -> float:
        """Bits available per inserted element.

        Raises:
            EmptyFilterError: If nothing has been inserted.
        """
        if self._count == 0:
            raise EmptyFilterError("bloom filter is empty")
        return self.size / self._count

    def bits_set(self) -> int:
        """Number of bits currently set to 1."""
        return sum(bin(byte).count("1") for byte in self._bit_array)

    def _hashes(self, element: Any) -> Iterator[int]:
        return self.strategy.derive_indices(to_payload(element), self.num_hashes, self.size)

    @property
    def bit_array(self) -> bytearray:
        """Expose the underlying bit array (primarily for inspection)."""
        return self._bit_array

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BloomFilter):
            return NotImplemented
        return (
            type(self.strategy) is type(other.strategy)
            and self.strategy.digest_functions == other.strategy.digest_functions
            and self.params == other.params
            and self._count == other._count
            and self._bit_array == other._bit_array
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        digests = ", ".join(str(function) for function in self.strategy.digest_functions)
        return (
            f"{type(self).__name__}(size={self.size}, expected_elements={self.expected_elements}, "
            f"num_hashes={self.num_hashes}, strategy={type(self.strategy).__name__}[{digests}], "
            f"number_of_elements={self._count})"
        )


def build_filter(
    strategy_type: Any,
    digest_functions: Iterable[Any],
    expected_elements: int,
    *,
    size: Optional[int] = None,
    probability: Optional[float] = None,
) -> BloomFilter:
    """Validate sizing and digest functions, then build a filter.

    Exactly one of ``size`` and ``probability`` must be given. When every
    digest function is ``None`` the strategy's defaults are used.

    Raises:
        InvalidArgumentError: On bad sizing, a partially specified or
            duplicated set of digest functions.
    """
    if (size is None) == (probability is None):
        raise InvalidArgumentError("exactly one of size and probability must be given")
    if size is not None:
        params = FilterParams.from_size(size, expected_elements)
    else:
        params = FilterParams.from_probability(probability, expected_elements)

    digest_functions = list(digest_functions)
    if all(function is None for function in digest_functions):
        strategy = strategy_type.default()
    else:
        strategy = strategy_type(*digest_functions)
    return BloomFilter.from_params(params, strategy)
