from .. import defaults, plotting
from . import command


class Plot(command.Command, command.ConsoleCommand):
    "Plot a fitted spline"

    def __init__(self, parser):
        command.Command.__init__(self, parser)
        parser.add_argument("-k", "--derivative", type=int, default=0,
                            help="plot the k-th derivative instead")
        parser.add_argument("-n", "--num", type=int, default=defaults.plot_points,
                            help="number of sample points")
        parser.add_argument("--margin", type=float, default=0.,
                            help="extend the x-axis by this much on each side")
        parser.add_argument("--no-knots", action="store_true",
                            help="do not mark the knots")
        parser.add_argument("model", help="model written by `natspline fit`")
        parser.add_argument(
            "out", type=str, help="output image", metavar="plot.(pdf|png|gif|jpeg)"
        )

    def main(self, args):
        command.Command.main(self, args)
        model = command.load_model(args.model)
        plotting.save_plot(model, args.out, derivative=args.derivative,
                           num=args.num, knots=not args.no_knots,
                           margin=args.margin)
