'''Various utility functions for other modules of Portionlib.

Argument checks shared by the apportionment functions, weight normalization
and the rounded "take" of a fraction of an integer total that underlies the
weighted range split.
'''

import math
import decimal
from fractions import Fraction
from numbers import Integral, Number, Rational
from typing import Iterable, List, Tuple

_UNIT = decimal.Decimal(1)
_ZERO = decimal.Decimal(0)
_QUARTER = decimal.Decimal('0.25')
_HALF = decimal.Decimal('0.5')
_THREE_QUARTERS = decimal.Decimal('0.75')

# integers above this are not all exactly representable as floats
_FLOAT_INTEGER_LIMIT = 2 ** 53


class ApportionError(Exception):
    '''An apportionment with valid arguments ended up in an inconsistent state.

    This signals a broken internal invariant (such as a remainder that does
    not fit into the portions it should be distributed among) and is never
    raised for invalid arguments of the public functions, which raise
    ``ValueError`` instead.
    '''
    pass


def check_weights(weights: Iterable[Number]) -> Tuple[Number, ...]:
    '''Validate apportionment weights and return them as a tuple.

    :param weights: Relative sizes of the portions. There must be at least
        one and all of them must be finite and non-negative.
    :raises ValueError: If the weights are empty, or any of them is negative,
        NaN or infinite.
    '''
    weights = tuple(weights)
    if not weights:
        raise ValueError('weights must not be empty')
    for i, weight in enumerate(weights):
        if math.isnan(weight):
            raise ValueError(f'weights must not be NaN, got {weight!r} at {i}')
        elif weight < 0:
            raise ValueError(
                f'weights must be non-negative, got {weight!r} at {i}'
            )
        elif math.isinf(weight):
            raise ValueError(f'weights must be finite, got {weight!r} at {i}')
    return weights


def check_amount(amount: int, name: str = 'amount') -> int:
    '''Validate a non-negative integer amount to be apportioned.'''
    if isinstance(amount, bool) or not isinstance(amount, Integral):
        raise ValueError(f'{name} must be an integer, got {amount!r}')
    if amount < 0:
        raise ValueError(f'{name} must be non-negative, got {amount}')
    return int(amount)


def check_n_portions(n_portions: int) -> int:
    '''Validate the number of portions to apportion into.'''
    if isinstance(n_portions, bool) or not isinstance(n_portions, Integral):
        raise ValueError(f'portions must be an integer, got {n_portions!r}')
    if n_portions < 1:
        raise ValueError(f'portions must be at least 1, got {n_portions}')
    return int(n_portions)


def normalize_weights(weights: Iterable[Number]) -> List[Number]:
    '''Proportionally adjust weights so that they total 1.

    Every weight but the last is divided by the weight total; the last one
    is whatever remains to 1, so the result sums to 1 even when the divisions
    are inexact. A single weight normalizes to 1 whatever its value.

    :param weights: Relative amounts, checked by :func:`check_weights`.
    :raises ValueError: If there are multiple weights and all are zero.
    '''
    weights = check_weights(weights)
    total = sum(weights)
    if len(weights) > 1 and total == 0:
        raise ValueError('weights must not all be zero')
    normalized = []
    remaining = 1
    for weight in weights[:-1]:
        share = weight / total
        normalized.append(share)
        remaining -= share
    normalized.append(remaining)
    return normalized


def take_lerp(total: int,
              fraction: Number,
              rounding: str = decimal.ROUND_HALF_EVEN,
              ) -> Tuple[int, int]:
    '''Take a rounded fraction of an integer total, keeping the leftovers.

    Rounding the fraction and its complement separately can gain or lose
    a unit (5 * 0.3 and 5 * 0.7 round to 2 and 4); here the leftover part is
    always computed by subtraction so that the two parts sum to the total.

    The product is rounded exactly, with no intermediate rounding and no
    limit on the size of the total. A float fraction is multiplied in float
    arithmetic as long as the total is exactly representable as a float;
    rational fractions (ints, ``Fraction``) and larger totals are multiplied
    exactly.

    :param total: The integer amount to take from.
    :param fraction: How much of the total to take. Fractions at or below
        zero take nothing, fractions at or above one take everything.
    :param rounding: A rounding mode from the *decimal* Python library
        applied to the taken part. The default rounds half to even, the
        IEEE 754 default.
    :returns: A tuple of the taken amount and the leftovers.
    '''
    if fraction <= 0:
        taken = 0
    elif fraction >= 1:
        taken = total
    else:
        exact = _exact_product(fraction, total)
        whole, rest = divmod(exact.numerator, exact.denominator)
        with decimal.localcontext() as context:
            context.rounding = rounding
            # room for all digits of the whole part and two decimals
            context.prec = whole.bit_length() // 3 + 3
            approx = whole + _rounding_tail(rest, exact.denominator)
            taken = int(approx.quantize(_UNIT))
    return taken, total - taken


def _exact_product(fraction: Number, total: int) -> Fraction:
    if isinstance(fraction, Rational) or total > _FLOAT_INTEGER_LIMIT:
        return _to_fraction(fraction) * total
    else:
        return _to_fraction(fraction * total)


def _rounding_tail(rest: int, denominator: int) -> decimal.Decimal:
    # the rounding only depends on where the rest lies relative to one half
    if not rest:
        return _ZERO
    elif 2 * rest < denominator:
        return _QUARTER
    elif 2 * rest > denominator:
        return _THREE_QUARTERS
    else:
        return _HALF


def _to_fraction(value: Number) -> Fraction:
    if isinstance(value, Integral):
        return Fraction(int(value))
    elif isinstance(value, (Fraction, float, decimal.Decimal)):
        return Fraction(value)
    else:
        return Fraction(float(value))
