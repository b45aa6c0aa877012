import pytest

from bf_enhanced.bloom_filter import enhanced_double_hash_bloom_filter
from bf_std.bloom_filter import double_hash_bloom_filter
from bf_triple.bloom_filter import triple_hash_bloom_filter

PROBABILITY_OF_FALSE_POSITIVES = 0.001
EXPECTED_NUMBER_OF_ELEMENTS = 10

ELEMENTS = ["First element", "Second element", "Third element"]


@pytest.fixture(
    params=[double_hash_bloom_filter, triple_hash_bloom_filter, enhanced_double_hash_bloom_filter],
    ids=["double", "triple", "enhanced"],
)
def factory(request):
    """Filter factory for each index strategy."""
    return request.param


@pytest.fixture
def populated_filter(factory):
    """A filter sized for p=0.001, n=10 holding three elements."""
    bloom = factory(EXPECTED_NUMBER_OF_ELEMENTS, probability=PROBABILITY_OF_FALSE_POSITIVES)
    for element in ELEMENTS:
        bloom.add(element)
    return bloom
