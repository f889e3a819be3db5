# Base class; subclasses will automatically show up as subcommands
import os
import sys

import numpy as np

from .. import logging
from ..spline import NaturalSpline

logger = logging.getLogger(__name__)


class ConsoleCommand:
    def __init__(self, parser):
        pass


class Command:
    def __init__(self, parser):
        '''Configure parser and parse args.'''
        parser.add_argument('-v', '--verbose', action='count', default=0,
                help="increase debugging output, specify multiply times for more")
        parser.add_argument('--debug-log', help="also write debugging output to this file")

    def main(self, args):
        logging.setup_logging(args.verbose)
        if args.debug_log:
            logging.add_debug_log(args.debug_log)
        logger.debug(sys.argv)
        logger.debug(args)


def read_points(filename):
    '''
    Read two-column (x, y) text data. Columns may be separated by
    whitespace or commas; lines starting with # are ignored.
    '''
    if not os.path.exists(filename):
        sys.exit("File not found: %s" % filename)
    with open(filename, "rt") as f:
        rows = [line.replace(",", " ") for line in f
                if line.strip() and not line.lstrip().startswith("#")]
    data = np.loadtxt(rows, ndmin=2) if rows else np.zeros((0, 2))
    if data.shape[1] != 2:
        sys.exit("Expected two columns in %s, found %d" % (filename, data.shape[1]))
    return data


def load_model(filename):
    if not os.path.exists(filename):
        sys.exit("File not found: %s" % filename)
    return NaturalSpline.load(filename)
