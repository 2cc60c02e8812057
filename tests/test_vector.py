
import sys
import os

import numpy as np
import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import portionlib.vector as v
from portionlib.util import ApportionError


def test_alternating_patterns():
    assert v.ALTERNATING_10.tolist() == [1, 0] * (v.LANES // 2)
    assert v.ALTERNATING_01.tolist() == [0, 1] * (v.LANES // 2)
    assert v.ALTERNATING_10.sum() == v.LANES // 2
    with pytest.raises(ValueError):
        v.ALTERNATING_10[0] = 5


@pytest.mark.parametrize('lanes', [0, 1, 3, -2])
def test_alternating_bad_lanes(lanes):
    with pytest.raises(ValueError):
        v.alternating(True, lanes)


@pytest.mark.parametrize('length', list(range(0, 21)) + [64, 67])
def test_add_pattern(length):
    for pattern in (v.ALTERNATING_10, v.ALTERNATING_01):
        span = np.ones(length, dtype=np.int64)
        v.add_pattern(span, pattern)
        expected = [1 + int(pattern[i % len(pattern)]) for i in range(length)]
        assert span.tolist() == expected


def test_add_pattern_reversed_view():
    buffer = np.zeros(11, dtype=np.int64)
    v.add_pattern(buffer[3:][::-1], v.ALTERNATING_10)
    assert buffer.tolist() == [0, 0, 0, 0, 1, 0, 1, 0, 1, 0, 1]


def test_add_pattern_subspan():
    buffer = np.zeros(20, dtype=np.int64)
    v.add_pattern(buffer[5:15], v.ALTERNATING_01)
    assert buffer[:5].sum() == 0
    assert buffer[15:].sum() == 0
    assert buffer[5:15].tolist() == [0, 1] * 5


def test_add_all():
    span = np.arange(5, dtype=np.int64)
    v.add_all(span, 3)
    assert span.tolist() == [3, 4, 5, 6, 7]
    v.add_all(span[:0], 3)
    assert span.tolist() == [3, 4, 5, 6, 7]


def test_add_each():
    span = np.zeros(3, dtype=np.int64)
    v.add_each(span, np.array([1, 0, 2]))
    assert span.tolist() == [1, 0, 2]
    with pytest.raises(ApportionError):
        v.add_each(span, np.array([1, 1]))


def test_buffer_view_array_writeback():
    buffer = np.zeros(3, dtype=np.int32)
    with v.buffer_view(buffer) as view:
        assert view is not buffer
        assert view.dtype == np.int32
        view += 2
        assert buffer.tolist() == [0, 0, 0]
    assert buffer.tolist() == [2, 2, 2]
    assert buffer.dtype == np.int32


def test_buffer_view_array_untouched_on_error():
    buffer = np.full(4, 5, dtype=np.uint8)
    with pytest.raises(RuntimeError):
        with v.buffer_view(buffer) as view:
            view += 1
            raise RuntimeError('failed halfway')
    assert buffer.tolist() == [5, 5, 5, 5]


@pytest.mark.parametrize('dtype', [np.uint8, np.int8, np.uint16, np.int32])
def test_add_narrow_dtypes(dtype):
    span = np.zeros(19, dtype=dtype)
    v.add_pattern(span, v.ALTERNATING_10)
    v.add_pattern(span[1:], v.ALTERNATING_10)
    assert span.dtype == dtype
    assert span.tolist() == [1] * 19
    v.add_each(span, np.arange(19, dtype=np.int64) % 2)
    assert span.tolist() == [1, 2] * 9 + [1]


def test_buffer_view_list_writeback():
    buffer = [1, 2, 3]
    with v.buffer_view(buffer) as view:
        view += 1
    assert buffer == [2, 3, 4]
    assert all(isinstance(item, int) for item in buffer)


def test_buffer_view_list_untouched_on_error():
    buffer = [1, 2, 3]
    with pytest.raises(RuntimeError):
        with v.buffer_view(buffer) as view:
            view += 1
            raise RuntimeError('failed halfway')
    assert buffer == [1, 2, 3]


@pytest.mark.parametrize('bad_buffer', [
    np.zeros((2, 2), dtype=np.int64),
    np.zeros(3, dtype=np.float64),
    [[1, 2], [3, 4]],
])
def test_buffer_view_bad(bad_buffer):
    with pytest.raises(ValueError):
        with v.buffer_view(bad_buffer):
            pass
