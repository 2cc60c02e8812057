'''Truncating apportionment by weights.

A vectorized alternative to :func:`portionlib.apportion.ranges.sizes` for
when speed matters more than the quality of the rounding: every portion gets
its exact proportional share of the amount rounded towards zero, all
computed at once, and whatever the truncation left unallocated is added to
the last portion. The total is conserved, but the last portion may get up to
``len(weights) - 1`` more than its fair share.
'''

import logging
from numbers import Number
from typing import Iterable, List

import numpy as np

from portionlib import vector
from portionlib.util import ApportionError, check_amount, check_weights

logger = logging.getLogger(__name__)


def weighted(amount: int, weights: Iterable[Number]) -> List[int]:
    '''Split an amount by weights, truncating the shares.

    >>> weighted(10, [1, 1, 1])
    [3, 3, 4]

    :param amount: The amount to split.
    :param weights: Relative sizes of the portions.
    :returns: The portions, summing to `amount`.
    '''
    weights = check_weights(weights)
    output = np.zeros(len(weights), dtype=np.int64)
    weighted_into(amount, weights, output)
    return output.tolist()


def weighted_into(amount: int,
                  weights: Iterable[Number],
                  output: vector.BufferType,
                  ) -> vector.BufferType:
    '''Split an amount by weights into a preallocated buffer.

    The previous contents of the buffer are overwritten.

    :param amount: The amount to split.
    :param weights: Relative sizes of the portions.
    :param output: A numpy integer array or a mutable sequence of integers,
        with one slot per weight.
    :returns: The `output` object, for convenience.
    :raises ApportionError: If the output does not have one slot per weight.
    '''
    amount = check_amount(amount)
    weights = np.asarray(check_weights(weights), dtype=np.float64)
    total = weights.sum()
    if len(weights) > 1 and total == 0:
        raise ValueError('weights must not all be zero')
    with vector.buffer_view(output) as buffer:
        if len(buffer) != len(weights):
            raise ApportionError(
                f'output has {len(buffer)} slots for {len(weights)} weights'
            )
        if total > 0:
            buffer[:] = np.trunc(weights / total * amount)
        else:
            buffer[:] = 0
        # dump whatever truncation left over into the last portion
        buffer[-1] += amount - int(buffer.sum())
    logger.debug('split %d by %s with truncation', amount, weights.tolist())
    return output
