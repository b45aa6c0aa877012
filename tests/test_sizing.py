import math

import pytest

from bf_core.errors import InvalidArgumentError
from bf_core.sizing import (
    FilterParams,
    false_positive_probability,
    optimal_num_hashes,
    size_for_probability,
)


def test_size_for_probability():
    assert size_for_probability(0.001, 10) == 144
    assert size_for_probability(0.01, 1000) == math.ceil(-1000 * math.log(0.01) / math.log(2) ** 2)


def test_optimal_num_hashes_uses_real_division():
    assert optimal_num_hashes(144, 10) == 10
    assert optimal_num_hashes(100, 10) == 7
    # m < n still needs at least one position
    assert optimal_num_hashes(5, 10) == 1


def test_false_positive_probability():
    assert false_positive_probability(7, 0, 100) == 0.0
    expected = (1 - math.exp(-7 * 10 / 100)) ** 7
    assert false_positive_probability(7, 10, 100) == pytest.approx(expected)


def test_params_from_probability():
    params = FilterParams.from_probability(0.001, 10)
    assert params == FilterParams(size=144, expected_elements=10, num_hashes=10, bits_per_element=14.4)


def test_params_from_size():
    params = FilterParams.from_size(100, 10)
    assert params.num_hashes == 7
    assert params.bits_per_element == pytest.approx(10.0)


@pytest.mark.parametrize("size,expected", [(100, 0), (0, 10), (-5, 10), (100, -1)])
def test_params_reject_non_positive(size, expected):
    with pytest.raises(InvalidArgumentError):
        FilterParams.from_size(size, expected)


@pytest.mark.parametrize("size,expected", [(100.0, 10), (100, 10.5), (True, 10), (100, None)])
def test_params_reject_non_integers(size, expected):
    with pytest.raises(InvalidArgumentError):
        FilterParams.from_size(size, expected)


@pytest.mark.parametrize("probability", [0.0, 1.0, -0.5, 2.0, float("nan")])
def test_probability_out_of_range(probability):
    with pytest.raises(InvalidArgumentError):
        size_for_probability(probability, 10)


def test_probability_requires_positive_expected_elements():
    with pytest.raises(InvalidArgumentError):
        FilterParams.from_probability(0.01, 0)


def test_params_are_frozen():
    params = FilterParams.from_size(100, 10)
    with pytest.raises(AttributeError):
        params.size = 1


@pytest.mark.parametrize("probability", ["0.1", None, True, [0.1]])
def test_probability_must_be_a_number(probability):
    with pytest.raises(InvalidArgumentError):
        size_for_probability(probability, 10)
