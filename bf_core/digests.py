"""Digest functions used to seed index derivation.

A :class:`DigestFunction` is an immutable description of a hash algorithm
(name plus seed). Two descriptors are the same hash function exactly when
their configuration matches, which is what the strategies check when
refusing duplicates. A fresh hasher is created for every call, so no
streaming state is ever shared between derivations.

Seeded algorithms come from MurmurHash3 (``mmh3``) and xxHash (``xxhash``);
any fixed-length :mod:`hashlib` algorithm is accepted unseeded.
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from itertools import combinations
from typing import Callable, Dict, Iterable, List, Optional

import mmh3
import xxhash

from bf_core.errors import InvalidArgumentError

MAX_SEED = (1 << 32) - 1

_SEEDED: Dict[str, Callable[[bytes, int], bytes]] = {
    "murmur3_32": lambda data, seed: mmh3.hash(data, seed, signed=False).to_bytes(4, "big"),
    "murmur3_128": lambda data, seed: mmh3.hash_bytes(data, seed),
    "xxh32": lambda data, seed: xxhash.xxh32(data, seed=seed).digest(),
    "xxh64": lambda data, seed: xxhash.xxh64(data, seed=seed).digest(),
    "xxh3_64": lambda data, seed: xxhash.xxh3_64(data, seed=seed).digest(),
    "xxh3_128": lambda data, seed: xxhash.xxh3_128(data, seed=seed).digest(),
}


def _hashlib_name(name: str) -> Optional[str]:
    """Return hashlib's own name for ``name`` ('sha-1' -> 'sha1'), or None if unusable."""
    try:
        hasher = hashlib.new(name)
    except ValueError:
        return None
    # shake_* report digest_size 0 and need an explicit output length
    if hasher.digest_size <= 0:
        return None
    return hasher.name.lower()


def available_algorithms() -> List[str]:
    """Return every algorithm name accepted by :class:`DigestFunction`."""
    names = set(_SEEDED)
    for name in hashlib.algorithms_available:
        canonical = _hashlib_name(name.lower())
        if canonical is not None:
            names.add(canonical)
    return sorted(names)


@dataclass(frozen=True)
class DigestFunction:
    """A configured hash algorithm, compared by ``(algorithm, seed)``."""

    algorithm: str
    seed: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.algorithm, str) or not self.algorithm:
            raise InvalidArgumentError("algorithm must be a non-empty string")
        name = self.algorithm.lower()

        if isinstance(self.seed, bool) or not isinstance(self.seed, int):
            raise InvalidArgumentError("seed must be an integer")
        if not 0 <= self.seed <= MAX_SEED:
            raise InvalidArgumentError(f"seed must be between 0 and {MAX_SEED}")

        if name in _SEEDED:
            object.__setattr__(self, "algorithm", name)
            return
        canonical = _hashlib_name(name)
        if canonical is None:
            raise InvalidArgumentError(f"unsupported digest algorithm: {self.algorithm!r}")
        name = canonical
        object.__setattr__(self, "algorithm", name)
        if self.seed:
            raise InvalidArgumentError(f"{name} does not accept a seed")

    def digest(self, payload: bytes) -> bytes:
        """Return the raw digest of ``payload``."""
        seeded = _SEEDED.get(self.algorithm)
        if seeded is not None:
            return seeded(payload, self.seed)
        return hashlib.new(self.algorithm, payload).digest()

    def value(self, payload: bytes, size: int) -> int:
        """Return the digest read as a big-endian unsigned integer, reduced mod ``size``."""
        return int.from_bytes(self.digest(payload), "big") % size

    def __str__(self) -> str:
        if self.seed:
            return f"{self.algorithm}(seed={self.seed})"
        return self.algorithm


def ensure_distinct(functions: Iterable[Optional[DigestFunction]]) -> None:
    """Validate a strategy's digest functions.

    Raises:
        InvalidArgumentError: If any entry is ``None`` or any two entries are
            configured identically.
    """
    functions = list(functions)
    if any(function is None for function in functions):
        raise InvalidArgumentError("digest function cannot be None")
    for function in functions:
        if not isinstance(function, DigestFunction):
            raise InvalidArgumentError(f"expected a DigestFunction, got {type(function).__name__}")
    for first, second in combinations(functions, 2):
        if first == second:
            raise InvalidArgumentError(f"digest functions must be distinct, got {first} twice")
