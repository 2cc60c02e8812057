'''Remainder distribution strategies for equal apportionment.

When an amount is split into equal portions and the division is not exact,
the remainder (``amount % n_portions``) has to be handed out one unit at
a time to some of the portions. A distribution strategy decides which
portions get the extra unit. It takes a numpy integer buffer holding the
portions and the remainder, and adds exactly one to exactly `remainder` slots
of the buffer in place, leaving the others unchanged.

The strategies differ in where the extra units land: clustered at an edge
(:func:`from_left`, :func:`from_right`), at both edges (:func:`from_outside`),
in the middle (:func:`from_center`), or interspersed with untouched slots
(the *spaced* strategies :func:`from_left_spaced` and
:func:`from_outside_spaced`), which keeps the extras visually even when the
portions are e.g. column widths. Random placement with an explicitly provided
generator is available through :func:`randomly`.

All named strategies are assembled in the `STRATEGIES` dictionary keyed by
their name. `get()` retrieves from this dictionary by string key;
`construct()` also accepts callables and passes them through, wraps
``random.Random`` instances by :func:`randomly`, and resolves None to the
strategy named by `DEFAULT`.

The strategies expect ``0 < remainder < len(portions)``; use
:func:`distribute` to have that checked.
'''

import random
import logging
from typing import Callable, Union

import numpy as np

import portionlib.component.core
from portionlib import vector
from portionlib.util import ApportionError

logger = logging.getLogger(__name__)

StrategyType = Callable[[np.ndarray, int], None]

STRATEGIES = {}

DEFAULT: str = 'from_outside_spaced'
'''Name of the strategy used when None is given. Read at call time.'''


strategy_mark, get, _construct_registered = \
    portionlib.component.core.register_functions(
        STRATEGIES, 'distribution strategy'
    )


def construct(strategy: Union[None, str, StrategyType, random.Random] = None
              ) -> StrategyType:
    '''Construct a distribution strategy function.

    :param strategy: Name of a registered strategy, a custom callable
        (passed through unchanged), a ``random.Random`` instance to place
        the remainder randomly with, or None for the `DEFAULT` strategy.
    '''
    if strategy is None:
        return get(DEFAULT)
    elif isinstance(strategy, random.Random):
        return randomly(strategy)
    else:
        return _construct_registered(strategy)


def distribute(portions: vector.BufferType,
               remainder: int,
               strategy: Union[None, str, StrategyType, random.Random] = None,
               ) -> None:
    '''Add one to exactly `remainder` of the portions.

    :param portions: The portions buffer, mutated in place; a numpy integer
        array or a mutable sequence of integers.
    :param remainder: Number of portions to increment; must be positive
        and smaller than the number of portions.
    :param strategy: The placement strategy, see :func:`construct`.
    :raises ApportionError: If the remainder does not fit the portions.
    '''
    strategy_fx = construct(strategy)
    with vector.buffer_view(portions) as buffer:
        n_portions = len(buffer)
        if n_portions <= 1:
            raise ApportionError(
                f'cannot distribute a remainder among {n_portions} portions'
            )
        if not 0 < remainder < n_portions:
            raise ApportionError(
                f'remainder must be between 0 and {n_portions} (exclusive),'
                f' got {remainder}'
            )
        logger.debug('distributing remainder %d among %d portions by %s',
                     remainder, n_portions,
                     getattr(strategy_fx, '__name__', strategy_fx))
        strategy_fx(buffer, remainder)


@strategy_mark
def from_left(portions: np.ndarray, remainder: int) -> None:
    '''Give the extras to the first `remainder` portions.

    For 5 portions: ``rem. 2 => [1, 1, 0, 0, 0]``.
    '''
    vector.add_all(portions[:remainder], 1)


@strategy_mark
def from_right(portions: np.ndarray, remainder: int) -> None:
    '''Give the extras to the last `remainder` portions.

    For 5 portions: ``rem. 2 => [0, 0, 0, 1, 1]``.
    '''
    vector.add_all(portions[len(portions)-remainder:], 1)


@strategy_mark
def from_outside(portions: np.ndarray, remainder: int) -> None:
    '''Give the extras to the outermost portions on both sides.

    The left side receives half of the remainder rounded down, the right
    side the rest. For 6 portions: ``rem. 3 => [1, 0, 0, 0, 1, 1]``.
    '''
    n_left = remainder // 2
    from_left(portions, n_left)
    from_right(portions, remainder - n_left)


@strategy_mark
def from_center(portions: np.ndarray, remainder: int) -> None:
    '''Give the extras to the innermost portions.

    The portions are split into halves (the right one being larger for an
    odd count); the left half receives half of the remainder rounded down
    at its right end, the right half receives the rest at its left end.
    For 5 portions: ``rem. 3 => [0, 1, 1, 1, 0]``.
    '''
    half = len(portions) // 2
    n_left = remainder // 2
    from_right(portions[:half], n_left)
    from_left(portions[half:], remainder - n_left)


@strategy_mark
def from_left_spaced(portions: np.ndarray, remainder: int) -> None:
    '''Give the extras to every other portion, starting from the left.

    Once all the even positions are taken, the remaining extras fill in the
    skipped odd positions, starting from the right. For 6 portions::

        rem. 1 => [1, 0, 0, 0, 0, 0]
        rem. 2 => [1, 0, 1, 0, 0, 0]
        rem. 3 => [1, 0, 1, 0, 1, 0]
        rem. 4 => [1, 0, 1, 0, 1, 1]
        rem. 5 => [1, 0, 1, 1, 1, 1]
    '''
    n_portions = len(portions)
    n_even = min(remainder, (n_portions + 1) // 2)
    vector.add_pattern(portions[:2*n_even], vector.ALTERNATING_10)
    n_odd = remainder - n_even
    if n_odd > 0:
        last_odd = n_portions - 1 if n_portions % 2 == 0 else n_portions - 2
        vector.add_pattern(
            portions[last_odd-2*n_odd+1:last_odd+1],
            vector.ALTERNATING_01
        )


@strategy_mark
def from_outside_spaced(portions: np.ndarray, remainder: int) -> None:
    '''Give the extras to every other portion, starting from both sides.

    The default strategy. The left part of the portions (the larger one for
    an odd count) receives half of the remainder rounded up, the right part
    the rest. Each part is filled from its outer edge inwards, every other
    portion first and the skipped ones next; the right part mirrors the left.
    For 7 portions::

        rem. 1 => [1, 0, 0, 0, 0, 0, 0]
        rem. 2 => [1, 0, 0, 0, 0, 0, 1]
        rem. 3 => [1, 0, 1, 0, 0, 0, 1]
        rem. 4 => [1, 0, 1, 0, 1, 0, 1]
        rem. 5 => [1, 1, 1, 0, 1, 0, 1]
        rem. 6 => [1, 1, 1, 0, 1, 1, 1]
    '''
    n_portions = len(portions)
    if remainder == 1:
        portions[0] += 1
        return
    elif remainder == 2:
        # more portions than remainder, so these are distinct
        portions[0] += 1
        portions[-1] += 1
        return
    elif remainder == n_portions - 1:
        _increment_all_but_one(portions, n_portions // 2)
        return
    split = (n_portions + 1) // 2
    n_right = remainder // 2
    _spaced_from_edge(portions[:split], remainder - n_right)
    _spaced_from_edge(portions[split:][::-1], n_right)


def randomly(generator: random.Random) -> StrategyType:
    '''Create a strategy giving the extras to randomly chosen portions.

    Every subset of `remainder` portions is equally likely to be chosen. The
    choice is driven only by the provided generator, so seeding it makes
    the result reproducible.

    :param generator: Source of randomness; anything with a
        ``randrange(n)`` method returning an integer in ``[0, n)``.
    '''
    def _randomly(portions: np.ndarray, remainder: int) -> None:
        n_portions = len(portions)
        if remainder == 1:
            portions[generator.randrange(n_portions)] += 1
            return
        elif remainder == n_portions - 1:
            _increment_all_but_one(portions, generator.randrange(n_portions))
            return
        additions = np.zeros(n_portions, dtype=np.int64)
        additions[:remainder] = 1
        # Fisher-Yates shuffle
        for i in range(n_portions - 1, 0, -1):
            j = generator.randrange(i + 1)
            additions[i], additions[j] = additions[j], additions[i]
        vector.add_each(portions, additions)

    return _randomly


def _spaced_from_edge(portions: np.ndarray, remainder: int) -> None:
    n_even = min(remainder, (len(portions) + 1) // 2)
    vector.add_pattern(portions[:2*n_even], vector.ALTERNATING_10)
    n_odd = remainder - n_even
    if n_odd > 0:
        vector.add_pattern(portions[:2*n_odd], vector.ALTERNATING_01)


def _increment_all_but_one(portions: np.ndarray, skipped_index: int) -> None:
    vector.add_all(portions, 1)
    portions[skipped_index] -= 1
