'''Bulk integer arithmetic over contiguous runs of a portion buffer.

The remainder distribution strategies mostly add ones to runs of a buffer,
either to every slot or in an alternating (spaced) pattern. These helpers
perform such additions with numpy, one vectorized add per block of
:data:`LANES` slots, falling back to scalar additions for the tail of a run
that does not fill a whole block. The observable result is the same as adding
slot by slot.

Element ``j`` of a run receives ``pattern[j % LANES]``, so a pattern always
starts at the first slot of the run it is applied to. Since :data:`LANES` is
even, the alternating patterns keep their phase across blocks.
'''

import contextlib
from typing import Iterator, MutableSequence, Union

import numpy as np

from portionlib.util import ApportionError

LANES: int = 8
'''Width of the constant patterns, in slots. Must be even.'''

BufferType = Union[np.ndarray, MutableSequence[int]]


def alternating(first_is_one: bool, lanes: int = LANES) -> np.ndarray:
    '''Create a read-only alternating pattern of ones and zeros.

    :param first_is_one: If True, the ones are placed at even positions
        (``[1, 0, 1, 0...]``), otherwise at odd positions
        (``[0, 1, 0, 1...]``).
    :param lanes: Length of the pattern; must be even so that the pattern
        sums to ``lanes / 2``.
    '''
    if lanes < 2 or lanes % 2:
        raise ValueError(f'pattern lanes must be even and positive, got {lanes}')
    pattern = np.zeros(lanes, dtype=np.int64)
    pattern[(0 if first_is_one else 1)::2] = 1
    pattern.flags.writeable = False
    return pattern


ALTERNATING_10 = alternating(True)
'''Ones in the even positions, zeros in the odd ones: ``[1, 0, 1, 0...]``.'''

ALTERNATING_01 = alternating(False)
'''Ones in the odd positions, zeros in the even ones: ``[0, 1, 0, 1...]``.'''


def add_pattern(span: np.ndarray, pattern: np.ndarray) -> None:
    '''Add a repeating pattern onto a buffer run in place.

    :param span: A one-dimensional numpy array or view (possibly strided,
        such as a reversed view) to be increased.
    :param pattern: The pattern to add, repeated along the span.
    '''
    pattern = pattern.astype(span.dtype, copy=False)
    lanes = len(pattern)
    n_full = len(span) - len(span) % lanes
    for start in range(0, n_full, lanes):
        span[start:start+lanes] += pattern
    for i in range(n_full, len(span)):
        span[i] += pattern[i % lanes]


def add_all(span: np.ndarray, value: int) -> None:
    '''Add a constant to every slot of a buffer run in place.'''
    if value:
        span += value


def add_each(span: np.ndarray, amounts: np.ndarray) -> None:
    '''Add amounts to a buffer run slot by slot, in place.'''
    if len(span) != len(amounts):
        raise ApportionError(
            f'cannot add {len(amounts)} amounts to {len(span)} portions'
        )
    span += np.asarray(amounts).astype(span.dtype, copy=False)


@contextlib.contextmanager
def buffer_view(buffer: BufferType) -> Iterator[np.ndarray]:
    '''Provide a numpy array to mutate a portion buffer through.

    The buffer is copied into a scratch array of the same integer type, and
    the scratch contents are written back into the buffer only when the
    block exits without an error. A failed operation thus leaves the buffer
    untouched. Lists and other mutable sequences of integers get an int64
    scratch array.

    :param buffer: A one-dimensional numpy integer array or a mutable
        sequence of integers (such as a list).
    '''
    if isinstance(buffer, np.ndarray):
        if buffer.ndim != 1:
            raise ValueError(
                f'buffer must be one-dimensional, got {buffer.ndim} dimensions'
            )
        if not np.issubdtype(buffer.dtype, np.integer):
            raise ValueError(f'buffer must hold integers, got {buffer.dtype}')
        array = buffer.copy()
        yield array
        buffer[:] = array
    else:
        array = np.array(buffer, dtype=np.int64)
        if array.ndim != 1:
            raise ValueError('buffer must be a flat sequence of integers')
        yield array
        buffer[:] = array.tolist()
