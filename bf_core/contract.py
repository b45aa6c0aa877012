"""Protocols describing what a filter and an index strategy provide."""
from __future__ import annotations

from typing import Any, Iterable, Iterator, Protocol, Tuple, runtime_checkable

from bf_core.digests import DigestFunction


@runtime_checkable
class IndexStrategy(Protocol):
    """Turns a byte payload into bit positions."""

    @property
    def digest_functions(self) -> Tuple[DigestFunction, ...]:
        """The digest functions seeding the index sequence, in order."""
        ...

    def derive_indices(self, payload: bytes, count: int, size: int) -> Iterator[int]:
        """Yield exactly ``count`` positions in ``[0, size)`` for ``payload``."""
        ...


@runtime_checkable
class MembershipFilter(Protocol):
    """Probabilistic set membership: "possibly present" or "definitely absent"."""

    size: int
    expected_elements: int
    num_hashes: int

    @property
    def number_of_elements(self) -> int:
        ...

    def add(self, element: Any) -> None:
        ...

    def add_all(self, elements: Iterable[Any]) -> None:
        ...

    def might_contain(self, element: Any) -> bool:
        ...

    def might_contain_all(self, elements: Iterable[Any]) -> bool:
        ...

    def clear(self) -> None:
        ...

    def is_empty(self) -> bool:
        ...

    def expected_bits_per_element(self) -> float:
        ...

    def bits_per_element(self) -> float:
        ...

    def probability_of_false_positives(self, count: int) -> float:
        ...

    def expected_probability_of_false_positives(self) -> float:
        ...

    def current_probability_of_false_positives(self) -> float:
        ...
