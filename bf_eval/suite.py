"""Strategy comparison suite.

Performs a deterministic 80/20 split of synthetic unique items, builds one
filter per index strategy with the 80% training set, and runs five checks on
each:

1. Membership on the training set (should be all present)
2. False positive rate on the held-out set versus the theoretical estimate
3. Collision analysis using simple modifications of held-out items
4. Filter properties and memory usage
5. Insertion and query throughput

Filters are sized at ``BITS_PER_ITEM`` bits per training item, so the number of
positions per element follows from ``k = ceil((m / n) * ln 2)``.

Run with::

    python -m bf_eval.suite
"""
from __future__ import annotations

import time
import uuid
from typing import Callable, Dict, List, Optional, Tuple

from bf_core.engine import BloomFilter
from bf_enhanced.bloom_filter import enhanced_double_hash_bloom_filter
from bf_std.bloom_filter import double_hash_bloom_filter
from bf_triple.bloom_filter import triple_hash_bloom_filter

SYNTHETIC_ITEMS = 100_000
BITS_PER_ITEM = 10
TRAIN_FRACTION = 0.8
QUERY_OPS = 1_000_000

FilterFactory = Callable[..., BloomFilter]

STRATEGIES: Dict[str, FilterFactory] = {
    "Double": double_hash_bloom_filter,
    "Triple": triple_hash_bloom_filter,
    "EnhancedDouble": enhanced_double_hash_bloom_filter,
}


def generate_synthetic_data(n: int = SYNTHETIC_ITEMS) -> list[str]:
    """Generate n unique random strings."""
    print(f"Generating {n} synthetic items...")
    # UUIDs are virtually guaranteed to be unique
    return [str(uuid.uuid4()) for _ in range(n)]


def build_split(
    factory: FilterFactory,
    words: Optional[list[str]] = None,
) -> Tuple[BloomFilter, list[str], list[str]]:
    """Create a deterministic 80/20 split and build a filter with ``factory``.

    If `words` is provided it will be used instead of generating items.

    Returns (bloom_filter, training_words, test_words).
    """
    if words is None:
        words = generate_synthetic_data()

    words = sorted(words)
    split = int(len(words) * TRAIN_FRACTION)
    train = words[:split]
    test = words[split:]

    expected = max(1, len(train))
    bloom = factory(expected, size=expected * BITS_PER_ITEM)
    bloom.add_all(train)

    return bloom, train, test


def check_membership(bloom: BloomFilter, train: list[str]) -> int:
    """Verify all training items are present. Returns the number missing."""
    print("TEST A: Membership on training set")
    missing = [w for w in train if w not in bloom]
    print(f"  Training items: {len(train)}")
    print(f"  Missing after insertion: {len(missing)} (expected 0)")
    if missing:
        print(f"  Example missing: {missing[:5]}")
    print()
    return len(missing)


def measure_false_positive_on_heldout(bloom: BloomFilter, train: list[str], test: list[str]) -> Optional[float]:
    """Measure the empirical false positive rate on the held-out set."""
    print("TEST B: False positive rate on held-out items")
    train_set = set(train)
    test_filtered = [w for w in test if w not in train_set]

    if not test_filtered:
        print("  No held-out items available for testing.")
        return None

    false_positives = sum(1 for w in test_filtered if w in bloom)
    fpr = false_positives / len(test_filtered)
    theoretical = bloom.current_probability_of_false_positives()

    print(f"  Held-out items: {len(test_filtered)}")
    print(f"  False positives: {false_positives}")
    print(f"  Empirical FPR: {fpr:.6f} ({fpr*100:.4f}%)")
    print(f"  Theoretical FPR: {theoretical:.6f} ({theoretical*100:.4f}%)")
    print()
    return fpr


def measure_collisions(bloom: BloomFilter, train: list[str], test: list[str]) -> Optional[float]:
    """Analyze the collision rate using simple modifications of held-out items."""
    print("TEST C: Collision analysis with simple modifications of held-out items")
    sample = test[:500]
    modifications = []

    for word in sample:
        modifications.append(word + "x")
        if len(word) > 1:
            modifications.append(word[:-1] + "z")
        modifications.append("x" + word)

    # Remove any accidental actual items
    known = set(train) | set(test)
    modifications = [m for m in modifications if m not in known]

    if not modifications:
        print("  No modifications available for testing.")
        return None

    false_positives = sum(1 for m in modifications if m in bloom)
    rate = false_positives / len(modifications)

    print(f"  Variants tested: {len(modifications)}")
    print(f"  False positives from variants: {false_positives}")
    print(f"  Collision rate: {rate:.6f} ({rate*100:.4f}%)")
    print()
    return rate


def show_properties(bloom: BloomFilter) -> None:
    """Display filter memory and configuration properties."""
    print("TEST D: Filter properties")
    bytes_len = len(bloom.bit_array)
    mb = bytes_len / (1024 * 1024)
    digests = ", ".join(str(function) for function in bloom.strategy.digest_functions)

    print(f"  Strategy: {type(bloom.strategy).__name__} [{digests}]")
    print(f"  Filter size (bits): {bloom.size}")
    print(f"  Filter size (bytes): {bytes_len}")
    print(f"  Filter size (MB): {mb:.2f}")
    print(f"  Number of hash positions: {bloom.num_hashes}")
    print(f"  Items inserted: {bloom.number_of_elements}")
    print(f"  Bits set: {bloom.bits_set()} ({bloom.bits_set() / bloom.size * 100:.2f}%)")
    if not bloom.is_empty():
        print(f"  Bits per item: {bloom.bits_per_element():.4f}")
    print()


def measure_performance(
    factory: FilterFactory,
    train: list[str],
    test: list[str],
    query_ops: int = QUERY_OPS,
) -> dict:
    """Measure insertion and query throughput (Ops/Sec)."""
    print("TEST E: Performance Benchmarking")

    print("  Benchmarking Insertions...")
    expected = max(1, len(train))
    bench_filter = factory(expected, size=expected * BITS_PER_ITEM)

    start_time = time.perf_counter()
    for word in train:
        bench_filter.add(word)
    insert_time = time.perf_counter() - start_time

    ops_per_sec = len(train) / insert_time if insert_time > 0 else float('inf')
    print(f"    - Inserted {len(train)} items in {insert_time:.4f} sec")
    print(f"    - Insertion Throughput: {ops_per_sec:,.0f} ops/sec")

    print("  Benchmarking Queries...")
    queries = test or train
    repeats = (query_ops // max(1, len(queries))) + 1
    large_test_set = (queries * repeats)[:query_ops]

    start_time = time.perf_counter()
    for word in large_test_set:
        _ = word in bench_filter
    query_time = time.perf_counter() - start_time

    query_ops_per_sec = len(large_test_set) / query_time if query_time > 0 else float('inf')
    print(f"    - Performed {len(large_test_set)} queries in {query_time:.4f} sec")
    print(f"    - Query Throughput: {query_ops_per_sec:,.0f} ops/sec")
    print()

    return {
        "insert_count": len(train),
        "insert_time": max(insert_time, 0),
        "insert_ops_per_sec": ops_per_sec,
        "query_count": len(large_test_set),
        "query_time": max(query_time, 0),
        "query_ops_per_sec": query_ops_per_sec,
    }


def compare_performance(metrics: Dict[str, dict]) -> None:
    """Print a compact side-by-side comparison of every strategy's metrics."""
    def fmt(val):
        if val is None:
            return 'N/A'
        if isinstance(val, float):
            if val == float('inf'):
                return 'inf'
            if abs(val) >= 1000:
                return f"{val:,.0f}"
            return f"{val:,.6f}" if abs(val) < 1 else f"{val:,.2f}"
        return str(val)

    names = list(metrics)
    print(f"{'Metric':<36}" + "".join(f"{name:>18}" for name in names))
    print('-' * (36 + 18 * len(names)))

    rows = [
        ("Insertion Throughput (ops/sec)", "insert_ops_per_sec"),
        ("Insertion Time (s)", "insert_time"),
        ("Query Throughput (ops/sec)", "query_ops_per_sec"),
        ("Query Time (s)", "query_time"),
        ("Empirical FPR", "empirical_fpr"),
        ("Theoretical FPR", "theoretical_fpr"),
        ("Collision Rate", "collision_rate"),
    ]

    for label, key in rows:
        print(f"{label:<36}" + "".join(f"{fmt(metrics[name].get(key)):>18}" for name in names))
    print()


def run_strategy(name: str, factory: FilterFactory, words: list[str], query_ops: int = QUERY_OPS) -> dict:
    """Run every check against one strategy and return its metrics."""
    print("=" * 60)
    print(f"Running {name.upper()} Bloom Filter Suite (80/20 split)")
    print("=" * 60)
    print()

    bloom, train, test = build_split(factory, words)

    missing = check_membership(bloom, train)
    fpr = measure_false_positive_on_heldout(bloom, train, test)
    collisions = measure_collisions(bloom, train, test)
    show_properties(bloom)
    metrics = measure_performance(factory, train, test, query_ops)
    metrics.update(
        missing=missing,
        empirical_fpr=fpr,
        theoretical_fpr=bloom.current_probability_of_false_positives(),
        collision_rate=collisions,
    )
    return metrics


def run_all(n: int = SYNTHETIC_ITEMS, query_ops: int = QUERY_OPS) -> Dict[str, dict]:
    """Run the suite for every strategy on the same synthetic data."""
    full_words = generate_synthetic_data(n)
    print(f"Full dataset unique items: {len(full_words)}")

    metrics = {name: run_strategy(name, factory, full_words, query_ops) for name, factory in STRATEGIES.items()}

    print("=" * 60)
    print("COMPARISON: Strategy Summary")
    print("=" * 60)
    compare_performance(metrics)

    print("=" * 60)
    print("Suite completed successfully!")
    print("=" * 60)
    return metrics


if __name__ == "__main__":
    run_all()
