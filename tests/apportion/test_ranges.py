
import sys
import os
import random
import decimal
from fractions import Fraction

import numpy as np
import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import portionlib.apportion.ranges

RANGE_SPLITS = [
    (6, [1, 1], [range(0, 3), range(3, 6)]),
    (5, [1, 3], [range(0, 1), range(1, 5)]),
    (5, [3, 1], [range(0, 4), range(4, 5)]),
    (6, [1, 1, 1, 1], [range(0, 2), range(2, 3), range(3, 4), range(4, 6)]),
    (2, [1, 1, 1], [range(0, 1), range(1, 1), range(1, 2)]),
    (10, [2.0, 2.0], [range(0, 5), range(5, 10)]),
    (7, [0, 1, 0, 1], [range(0, 0), range(0, 4), range(4, 4), range(4, 7)]),
    (0, [1, 2, 3], [range(0, 0), range(0, 0), range(0, 0)]),
]


@pytest.mark.parametrize(('domain_size', 'weights', 'expected'), RANGE_SPLITS)
def test_split(domain_size, weights, expected):
    assert portionlib.apportion.ranges.split(domain_size, weights) == expected


@pytest.mark.parametrize(('domain_size', 'weights', 'expected'), RANGE_SPLITS)
def test_sizes(domain_size, weights, expected):
    assert portionlib.apportion.ranges.sizes(domain_size, weights) == [
        len(portion) for portion in expected
    ]


@pytest.mark.parametrize('weight', [0, 1, 0.001, 1e9, Fraction(1, 7)])
def test_single_weight(weight):
    for domain_size in (0, 1, 17):
        assert portionlib.apportion.ranges.split(domain_size, [weight]) == [
            range(0, domain_size)
        ]


def test_zero_weights_keep_neighbors():
    assert portionlib.apportion.ranges.sizes(12, [1, 0, 2]) == [4, 0, 8]
    assert portionlib.apportion.ranges.sizes(12, [0, 1, 2]) == [0, 4, 8]
    # the last portion takes whatever remains, even with a zero weight
    assert portionlib.apportion.ranges.sizes(12, [1, 2, 0]) == [4, 5, 3]


def test_rounding():
    split = portionlib.apportion.ranges.split
    assert split(5, [1, 1]) == [range(0, 2), range(2, 5)]
    assert split(5, [1, 1], decimal.ROUND_HALF_UP) == [
        range(0, 3), range(3, 5)
    ]
    assert split(5, [3, 1], decimal.ROUND_DOWN) == [
        range(0, 3), range(3, 5)
    ]


def test_fraction_weights():
    assert portionlib.apportion.ranges.sizes(
        9, [Fraction(1, 2), Fraction(1, 4), Fraction(1, 4)]
    ) == [4, 1, 4]


def test_numpy_weights():
    assert portionlib.apportion.ranges.sizes(
        10, np.array([1, 1, 3], dtype=np.int64)
    ) == [2, 2, 6]
    assert portionlib.apportion.ranges.sizes(
        10, np.array([0.25, 0.75], dtype=np.float32)
    ) == [2, 8]


def test_generator_weights():
    weights = (w for w in [1, 1, 2])
    assert portionlib.apportion.ranges.sizes(8, weights) == [2, 2, 4]


random.seed(1711)
RANDOM_CASES = []
for i in range(60):
    n_weights = random.randint(1, 12)
    RANDOM_CASES.append((
        random.choice([0, 1, random.randint(0, 50), random.randint(0, 10000)]),
        [random.choice([0, random.random(), random.randint(1, 100)])
         for j in range(n_weights)],
    ))


@pytest.mark.parametrize(('domain_size', 'weights'), RANDOM_CASES)
def test_split_properties(domain_size, weights):
    if len(weights) > 1 and sum(weights) == 0:
        weights[0] = 1
    ranges = portionlib.apportion.ranges.split(domain_size, weights)
    assert len(ranges) == len(weights)
    assert ranges[0].start == 0
    assert ranges[-1].stop == domain_size
    for prev, next in zip(ranges[:-1], ranges[1:]):
        assert prev.stop == next.start
    assert all(len(portion) >= 0 for portion in ranges)
    assert all(portion.step == 1 for portion in ranges)
    covered = [i for portion in ranges for i in portion]
    assert covered == list(range(domain_size))
    sizes = portionlib.apportion.ranges.sizes(domain_size, weights)
    assert sum(sizes) == domain_size


@pytest.mark.parametrize(('domain_size', 'weights'), [
    (5, []),
    (5, [1, -1]),
    (5, [float('nan')]),
    (5, [1, float('inf')]),
    (-1, [1]),
    (2.5, [1]),
    (5, [0, 0]),
    (5, [0.0, 0.0, 0.0]),
])
def test_split_invalid(domain_size, weights):
    with pytest.raises(ValueError):
        portionlib.apportion.ranges.split(domain_size, weights)


@pytest.mark.parametrize(('items', 'weights', 'expected'), [
    (list(range(10)), [1, 1], [list(range(5)), list(range(5, 10))]),
    ('abcdef', [1, 2], ['ab', 'cdef']),
    ((1, 2, 3), [1, 1, 1], [(1,), (2,), (3,)]),
    (range(6), [1, 1, 1, 1], [range(0, 2), range(2, 3), range(3, 4),
                              range(4, 6)]),
    ([], [1, 3], [[], []]),
    (['x', 'y'], [1, 1, 1], [['x'], [], ['y']]),
])
def test_partition(items, weights, expected):
    assert portionlib.apportion.ranges.partition(items, weights) == expected


def test_partition_iterable():
    parts = portionlib.apportion.ranges.partition(
        (c for c in 'abcde'), [1, 3]
    )
    assert parts == [['a'], ['b', 'c', 'd', 'e']]


def test_partition_numpy_views():
    items = np.arange(12)
    parts = portionlib.apportion.ranges.partition(items, [1, 2])
    assert [part.tolist() for part in parts] == [
        list(range(4)), list(range(4, 12))
    ]
    assert all(np.shares_memory(part, items) for part in parts)


def test_partition_does_not_mutate():
    items = [1, 2, 3, 4]
    weights = [1, 1]
    parts = portionlib.apportion.ranges.partition(items, weights)
    parts[0].append(99)
    assert items == [1, 2, 3, 4]
    assert weights == [1, 1]


def test_shares():
    assert portionlib.apportion.ranges.shares(
        ['a', 'b', 'c', 'd', 'e'], [3, 1]
    ) == [['a', 'b', 'c', 'd'], ['e']]


def test_list_apportion_ranges():
    apportion = portionlib.apportion.ranges.ListApportion('abcdef', [1, 1, 1])
    assert list(apportion.ranges) == [range(0, 2), range(2, 3), range(3, 6)]
    assert apportion.total_weight == 3
    assert apportion.get_portion(1) == 'c'


def test_huge_domain():
    domain_size = 10 ** 30
    assert portionlib.apportion.ranges.sizes(domain_size, [1, 1]) == [
        5 * 10 ** 29, 5 * 10 ** 29
    ]
    ranges = portionlib.apportion.ranges.split(domain_size + 7, [1, 2, 3])
    assert ranges[0].start == 0
    assert ranges[-1].stop == domain_size + 7
    for prev, next in zip(ranges[:-1], ranges[1:]):
        assert prev.stop == next.start
    thirds = portionlib.apportion.ranges.sizes(
        3 * 10 ** 40, [Fraction(1), Fraction(1), Fraction(1)]
    )
    assert thirds[:2] == [10 ** 40, (2 * 10 ** 40 + 1) // 3]
    assert sum(thirds) == 3 * 10 ** 40
