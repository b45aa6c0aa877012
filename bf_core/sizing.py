"""Sizing formulas for Bloom filters.

Given the expected number of elements ``n`` the filter is sized either from a
target false positive probability ``p``::

    m = ceil(-n * ln(p) / ln(2)^2)

or from an explicit bit count ``m``. The number of index positions touched per
element is then::

    k = ceil((m / n) * ln(2))

and the false positive probability after ``count`` insertions is estimated as
``(1 - e^(-k * count / m))^k``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from bf_core.errors import InvalidArgumentError

LN2 = math.log(2)


def _require_positive_int(value: int, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an integer, got {type(value).__name__}")
    if value <= 0:
        raise InvalidArgumentError(f"{name} must be positive")


def size_for_probability(probability: float, expected_elements: int) -> int:
    """Return the bit-array size needed to hit ``probability`` at ``expected_elements``.

    Raises:
        InvalidArgumentError: If ``expected_elements`` is not positive or
            ``probability`` is not strictly between 0 and 1.
    """
    _require_positive_int(expected_elements, "expected_elements")
    if isinstance(probability, bool) or not isinstance(probability, (int, float)):
        raise InvalidArgumentError(f"probability must be a number, got {type(probability).__name__}")
    if not 0.0 < probability < 1.0:
        raise InvalidArgumentError("probability must be in the open interval (0, 1)")
    return int(math.ceil(-expected_elements * math.log(probability) / (LN2 ** 2)))


def optimal_num_hashes(size: int, expected_elements: int) -> int:
    """Return ``k = ceil((m / n) * ln 2)``."""
    return int(math.ceil((size / expected_elements) * LN2))


def false_positive_probability(num_hashes: int, count: int, size: int) -> float:
    """Estimate the false positive probability after ``count`` insertions."""
    return (1.0 - math.exp(-num_hashes * count / size)) ** num_hashes


@dataclass(frozen=True)
class FilterParams:
    """Validated, immutable sizing of a single filter."""

    size: int
    expected_elements: int
    num_hashes: int
    bits_per_element: float

    @classmethod
    def from_size(cls, size: int, expected_elements: int) -> "FilterParams":
        """Derive parameters from an explicit bit-array size.

        Args:
            size: Number of bits in the filter (m).
            expected_elements: Number of elements the filter is sized for (n).

        Raises:
            InvalidArgumentError: If either argument is not a positive integer.
        """
        _require_positive_int(expected_elements, "expected_elements")
        _require_positive_int(size, "size")
        return cls(
            size=size,
            expected_elements=expected_elements,
            num_hashes=optimal_num_hashes(size, expected_elements),
            bits_per_element=size / expected_elements,
        )

    @classmethod
    def from_probability(cls, probability: float, expected_elements: int) -> "FilterParams":
        """Derive parameters from a target false positive probability."""
        return cls.from_size(size_for_probability(probability, expected_elements), expected_elements)
