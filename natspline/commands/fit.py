import argparse

from .. import defaults, logging
from ..sparse import get_backend
from ..spline import fit
from . import command

logger = logging.getLogger(__name__)


class Fit(command.Command, command.ConsoleCommand):
    "Fit a natural spline through (x, y) points"

    def __init__(self, parser):
        command.Command.__init__(self, parser)
        parser.add_argument("-d", "--degree", type=int, default=defaults.degree,
                            help="polynomial degree. default: %d" % defaults.degree)
        parser.add_argument("-t", "--tolerance", type=float,
                            default=defaults.tolerance,
                            help="relative residual at which the solver stops. "
                            "default: %g" % defaults.tolerance)
        parser.add_argument("--max-iterations", type=int,
                            default=defaults.max_iterations, help=argparse.SUPPRESS)
        parser.add_argument("--method", default=defaults.method,
                            choices=["gmres", "bicgstab", "lgmres", "direct"],
                            help="sparse solver. default: %s" % defaults.method)
        parser.add_argument("--sort", action="store_true", default=False,
                            help="sort points by x before fitting")
        parser.add_argument("-o", "--output", required=True,
                            help="where to write the fitted model (JSON)")
        parser.add_argument("points", help="two-column text file of x and y")

    def main(self, args):
        command.Command.main(self, args)
        data = command.read_points(args.points)
        model = fit(data, degree=args.degree, tolerance=args.tolerance,
                    backend=get_backend(args.method),
                    max_iterations=args.max_iterations, sort=args.sort)
        model.dump(args.output)
        logger.info("Wrote %r to %s", model, args.output)
