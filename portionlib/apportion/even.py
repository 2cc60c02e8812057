'''Apportionment into equal portions.

This is the fast path for the common case where all weights are equal.
Every portion gets the amount divided by the number of portions (rounded
down); the remainder of the division is then handed out one unit at a time
by a distribution strategy from :mod:`portionlib.component.remainder`, so all
portions differ by at most one.

If the choice of the portions receiving the remainder should be fair rather
than fixed, pass a seeded ``random.Random`` instance as the strategy.
'''

import random
import logging
from typing import List, Union

import numpy as np

import portionlib.component.remainder
from portionlib import vector
from portionlib.util import check_amount, check_n_portions

logger = logging.getLogger(__name__)

StrategyArg = Union[
    None, str, portionlib.component.remainder.StrategyType, random.Random
]


def evenly(amount: int,
           portions: int,
           strategy: StrategyArg = None,
           ) -> List[int]:
    '''Divide an amount into a number of portions as evenly as possible.

    >>> evenly(5, 3)
    [2, 1, 2]
    >>> evenly(5, 3, 'from_left')
    [2, 2, 1]

    :param amount: The amount to distribute.
    :param portions: The number of portions; at least one.
    :param strategy: Determines which portions receive the remainder; the
        name of a registered distribution strategy, a strategy callable,
        a ``random.Random`` instance, or None for the default strategy
        (see :func:`portionlib.component.remainder.construct`).
    :returns: The portions, summing to `amount`.
    '''
    amount = check_amount(amount)
    n_portions = check_n_portions(portions)
    buffer = np.zeros(n_portions, dtype=np.int64)
    _add_evenly(amount, buffer, strategy)
    return buffer.tolist()


def evenly_into(amount: int,
                portions: vector.BufferType,
                strategy: StrategyArg = None,
                ) -> vector.BufferType:
    '''Divide an amount as evenly as possible into existing portions.

    The share of every portion is *added* to its current value, so repeated
    calls accumulate.

    >>> evenly_into(5, [10, 10, 10], 'from_right')
    [11, 12, 12]

    :param amount: The amount to distribute.
    :param portions: The portions to increase in place; a one-dimensional
        numpy integer array or a mutable sequence of integers. Must not be
        empty.
    :param strategy: Determines which portions receive the remainder,
        see :func:`evenly`.
    :returns: The `portions` object, for convenience.
    '''
    amount = check_amount(amount)
    with vector.buffer_view(portions) as buffer:
        check_n_portions(len(buffer))
        _add_evenly(amount, buffer, strategy)
    return portions


def _add_evenly(amount: int,
                buffer: np.ndarray,
                strategy: StrategyArg,
                ) -> None:
    # resolve first so that an unknown strategy leaves the buffer untouched
    strategy_fx = portionlib.component.remainder.construct(strategy)
    part, leftover = divmod(amount, len(buffer))
    vector.add_all(buffer, part)
    if leftover:
        portionlib.component.remainder.distribute(
            buffer, leftover, strategy_fx
        )
    logger.debug('divided %d into %d portions of %d with %d left over',
                 amount, len(buffer), part, leftover)
