'''Divide amounts and collections into proportional portions.

There are two basic apportionment types - weighted and equal.
In weighted apportionment, each portion has its own weight and gets a share
of the amount proportional to it; the results can be had as index ranges
(:func:`split`), sizes (:func:`sizes`) or slices of a collection
(:func:`partition`). In equal apportionment (:func:`evenly`), all weights are
the same and the leftover units of the division are placed by
a distribution strategy.

All apportionments conserve the total exactly and return the portions in the
order of the weights. Invalid arguments (negative, NaN or infinite weights,
no portions, negative amounts) raise ``ValueError``.
'''

from portionlib.apportion.core import Apportion    # noqa
from portionlib.apportion.ranges import (    # noqa
    RangeApportion, SizeApportion, ListApportion,
    split, sizes, partition, shares,
)
from portionlib.apportion.even import evenly, evenly_into    # noqa
from portionlib.apportion.weighted import weighted, weighted_into    # noqa
