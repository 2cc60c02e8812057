"""A commandline tool for quick apportionment of integer amounts.

Splits an amount into portions by weights or evenly and prints the result,
one portion per line.
"""

import argparse
import logging
import random
from typing import List, Optional

import portionlib.apportion
import portionlib.component.remainder

argparser = argparse.ArgumentParser(
    prog='portionlib',
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='show all log messages',
)
argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='do not show any log messages',
)
subparsers = argparser.add_subparsers(dest='command')

split_parser = subparsers.add_parser(
    'split', help='split a range of indices by weights'
)
sizes_parser = subparsers.add_parser(
    'sizes', help='split an amount into sizes by weights'
)
weighted_parser = subparsers.add_parser(
    'weighted', help='split an amount by weights, truncating the shares'
)
for weighted_subparser in (split_parser, sizes_parser, weighted_parser):
    weighted_subparser.add_argument(
        'amount', type=int, help='amount (domain size) to split'
    )
    weighted_subparser.add_argument(
        'weights', type=float, nargs='+', help='relative sizes of portions'
    )

evenly_parser = subparsers.add_parser(
    'evenly', help='split an amount into equal portions'
)
evenly_parser.add_argument('amount', type=int, help='amount to split')
evenly_parser.add_argument('portions', type=int, help='number of portions')
placement_group = evenly_parser.add_mutually_exclusive_group()
placement_group.add_argument(
    '-s', '--strategy',
    default=portionlib.component.remainder.DEFAULT,
    choices=sorted(portionlib.component.remainder.STRATEGIES.keys()),
    help='where to place the remainder',
)
placement_group.add_argument(
    '--seed',
    type=int,
    help='place the remainder randomly with this random seed,'
         ' instead of by a strategy',
)


def main(command: str,
         amount: int,
         weights: Optional[List[float]] = None,
         portions: Optional[int] = None,
         strategy: Optional[str] = None,
         seed: Optional[int] = None,
         verbose: bool = False,
         quiet: bool = False,
         ) -> None:
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    for portion in apportion(command, amount, weights, portions,
                             strategy, seed):
        if isinstance(portion, range):
            print(portion.start, portion.stop)
        else:
            print(portion)


def apportion(command: str,
              amount: int,
              weights: Optional[List[float]] = None,
              portions: Optional[int] = None,
              strategy: Optional[str] = None,
              seed: Optional[int] = None,
              ) -> list:
    """Run the apportionment selected by the command."""
    if command == 'split':
        return portionlib.apportion.split(amount, weights)
    elif command == 'sizes':
        return portionlib.apportion.sizes(amount, weights)
    elif command == 'weighted':
        return portionlib.apportion.weighted(amount, weights)
    elif command == 'evenly':
        if seed is not None:
            strategy = random.Random(seed)
        return portionlib.apportion.evenly(amount, portions, strategy)
    else:
        raise ValueError(f'unknown command: {command}')


if __name__ == '__main__':
    args = argparser.parse_args()
    if not args.command:
        argparser.print_usage()
    else:
        main(**vars(args))
