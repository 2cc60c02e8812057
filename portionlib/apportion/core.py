'''General apportionment machinery.'''

import abc
import collections.abc
from numbers import Number
from typing import Any, Iterable, Iterator, Tuple

from portionlib.util import ApportionError, check_weights


class Apportion(collections.abc.Sequence):
    '''Divide a source into portions proportional to weights.

    A root abstract base class for all apportionments. It is a read-only
    sequence of the portions, one per weight, in the order of the weights.

    The portions are computed lazily on first access and then kept.
    Neither the source nor the weights are modified; to apportion anything
    else, create a new instance. The lazy computation is not synchronized:
    if an instance is shared between threads, access :attr:`portions` once
    before sharing it.

    :param source: What is being divided (an amount, a domain size or
        a collection, depending on the subclass).
    :param weights: Relative sizes of the portions. Must be non-empty,
        finite and non-negative; they need not sum to one.
    '''
    def __init__(self, source: Any, weights: Iterable[Number]):
        self.source = source
        self.weights = check_weights(weights)
        self._portions = None
        self._total_weight = None

    @property
    def total_weight(self) -> Number:
        '''Sum of all the weights.'''
        if self._total_weight is None:
            self._total_weight = sum(self.weights)
        return self._total_weight

    @property
    def portions(self) -> Tuple[Any, ...]:
        '''All the portions, in the order of the weights.'''
        if self._portions is None:
            portions = tuple(self._get_portions())
            if len(portions) != len(self.weights):
                raise ApportionError(
                    f'produced {len(portions)} portions'
                    f' for {len(self.weights)} weights'
                )
            self._portions = portions
        return self._portions

    @abc.abstractmethod
    def _get_portions(self) -> Iterator[Any]:
        '''Compute the portions, one per weight.'''
        raise NotImplementedError

    def get_portion(self, index: int) -> Any:
        return self.portions[index]

    def __getitem__(self, index):
        return self.portions[index]

    def __len__(self) -> int:
        return len(self.weights)

    def __repr__(self) -> str:
        return '{}({!r}, {!r})'.format(
            self.__class__.__name__, self.source, list(self.weights)
        )

