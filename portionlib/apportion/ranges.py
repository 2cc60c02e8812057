'''Apportionment by arbitrary weights into contiguous ranges.

The core of this module is :class:`RangeApportion`, which divides an abstract
domain of indices ``0 .. N-1`` into contiguous, non-overlapping ranges with
lengths proportional to the weights. :class:`SizeApportion` gives the lengths
of those ranges and :class:`ListApportion` applies them to slice an ordered
collection.

The split works through the weights in order. Each weight but the last takes
its share (relative to the total of all weights) of the stock that is still
unallocated, rounded half to even by default; the last weight takes whatever
stock remains. Since each share is taken from the shrinking remaining stock,
the rounding errors do not pile up, and since the last portion absorbs the
rest, the total is always conserved exactly. For example, six items with four
equal weights are split into sizes ``2, 1, 1, 2``.
'''

import decimal
import logging
import collections.abc
from numbers import Number
from typing import Any, Iterable, Iterator, List, Sequence

import numpy as np

from portionlib.apportion.core import Apportion
from portionlib.util import check_amount, take_lerp

logger = logging.getLogger(__name__)


class RangeApportion(Apportion):
    '''Split a domain of indices into ranges proportional to weights.

    The portions are ``range`` objects; their union is exactly
    ``range(domain_size)``, with no gaps or overlaps.

    :param domain_size: Number of indices in the domain to be split.
    :param weights: Relative sizes of the ranges. A single weight always
        gets the whole domain, whatever its value. If there are more
        weights, they must not all be zero.
    :param rounding: A rounding mode from the *decimal* Python library used
        when taking the share of each weight but the last. Defaults to
        rounding half to even.
    '''
    def __init__(self,
                 domain_size: int,
                 weights: Iterable[Number],
                 rounding: str = decimal.ROUND_HALF_EVEN,
                 ):
        super().__init__(check_amount(domain_size, 'domain_size'), weights)
        if len(self.weights) > 1 and self.total_weight == 0:
            raise ValueError('weights must not all be zero')
        self.rounding = rounding

    def _get_portions(self) -> Iterator[range]:
        remaining = self.source
        offset = 0
        for weight in self.weights[:-1]:
            taken, remaining = take_lerp(
                remaining, weight / self.total_weight, self.rounding
            )
            yield range(offset, offset + taken)
            offset += taken
        # the last portion takes the rest so that nothing is lost to rounding
        yield range(offset, self.source)


class SizeApportion(RangeApportion):
    '''Split an integer amount into sizes proportional to weights.

    The sizes are the lengths of the ranges of :class:`RangeApportion`, so
    they always sum to the amount.

    :param amount: The amount to be split.
    :param weights: Relative sizes of the portions.
    :param rounding: A rounding mode from the *decimal* Python library,
        see :class:`RangeApportion`.
    '''
    def _get_portions(self) -> Iterator[int]:
        for portion in super()._get_portions():
            yield portion.stop - portion.start


class ListApportion(Apportion):
    '''Slice an ordered collection into parts proportional to weights.

    Sequences (lists, tuples, strings, ranges, numpy arrays...) are sliced
    directly, so the parts have the type of the collection (and numpy arrays
    give views instead of copies). Other iterables are collected into a list
    first.

    :param items: The collection to be divided.
    :param weights: Relative sizes of the parts.
    :param rounding: A rounding mode from the *decimal* Python library,
        see :class:`RangeApportion`.
    '''
    def __init__(self,
                 items: Iterable[Any],
                 weights: Iterable[Number],
                 rounding: str = decimal.ROUND_HALF_EVEN,
                 ):
        if not _is_sliceable(items):
            items = list(items)
        super().__init__(items, weights)
        self.ranges = RangeApportion(len(items), self.weights, rounding)

    def _get_portions(self) -> Iterator[Sequence[Any]]:
        for portion in self.ranges:
            yield self.source[portion.start:portion.stop]


def split(domain_size: int,
          weights: Iterable[Number],
          rounding: str = decimal.ROUND_HALF_EVEN,
          ) -> List[range]:
    '''Split ``range(domain_size)`` into ranges proportional to weights.

    >>> split(6, [1, 1, 1, 1])
    [range(0, 2), range(2, 3), range(3, 4), range(4, 6)]

    :param domain_size: Number of indices to be split.
    :param weights: Relative sizes of the ranges.
    :param rounding: A rounding mode from the *decimal* Python library.
    '''
    apportion = RangeApportion(domain_size, weights, rounding)
    ranges = list(apportion)
    logger.debug('split %d by %s into %s',
                 domain_size, apportion.weights, ranges)
    return ranges


def sizes(amount: int,
          weights: Iterable[Number],
          rounding: str = decimal.ROUND_HALF_EVEN,
          ) -> List[int]:
    '''Split an integer amount into sizes proportional to weights.

    >>> sizes(5, [3, 1])
    [4, 1]
    '''
    return list(SizeApportion(amount, weights, rounding))


def partition(items: Iterable[Any],
              weights: Iterable[Number],
              rounding: str = decimal.ROUND_HALF_EVEN,
              ) -> List[Sequence[Any]]:
    '''Slice a collection into parts with sizes proportional to weights.

    >>> partition('abcdef', [1, 2])
    ['ab', 'cdef']
    '''
    return list(ListApportion(items, weights, rounding))


def shares(stock: Iterable[Any],
           equities: Iterable[Number],
           ) -> List[Sequence[Any]]:
    '''Divide the stock among shareholders by their relative equities.

    The same as :func:`partition` with the default rounding.
    '''
    return partition(stock, equities)


def _is_sliceable(items: Any) -> bool:
    return isinstance(items, (collections.abc.Sequence, np.ndarray))
