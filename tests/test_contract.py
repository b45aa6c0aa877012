from bf_core.contract import IndexStrategy, MembershipFilter
from bf_core.engine import BloomFilter
from bf_enhanced.bloom_filter import EnhancedDoubleHashing
from bf_std.bloom_filter import DoubleHashing
from bf_triple.bloom_filter import TripleHashing


def test_strategies_satisfy_protocol():
    for strategy_type in (DoubleHashing, TripleHashing, EnhancedDoubleHashing):
        assert isinstance(strategy_type.default(), IndexStrategy)


def test_engine_satisfies_protocol():
    assert isinstance(BloomFilter(100, 10), MembershipFilter)
