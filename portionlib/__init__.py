"""Portionlib - a library for dividing integer amounts into proportional parts.

Portionlib splits a discrete quantity, such as a number of items, pixels or
frames, into a given number of portions proportional to given weights, while
conserving the total exactly: the portion sizes always sum to the original
amount, whatever rounding had to happen on the way. The same inputs always
produce the same split.

-   Splitting by arbitrary weights is done by the ``apportion.ranges``
    module, which produces contiguous index ranges, their sizes, or slices of
    a collection.
-   Splitting into equal portions is done by the ``apportion.even`` module,
    where the portions that receive the indivisible remainder are chosen by
    one of the distribution strategies from the ``component.remainder``
    module.
-   A faster, truncating weighted split is available in the
    ``apportion.weighted`` module.

The most common functions are gathered in the :mod:`apportion` subpackage.
"""
