import sys

from . import command


class Evaluate(command.Command, command.ConsoleCommand):
    "Evaluate a fitted spline, its derivatives or its integral"

    def __init__(self, parser):
        command.Command.__init__(self, parser)
        parser.add_argument("-k", "--derivative", type=int, default=0,
                            help="evaluate the k-th derivative instead")
        parser.add_argument("-c", "--continued-boundary", action="store_true",
                            help="outside the knots, use the value at the "
                            "nearest end instead of 0")
        parser.add_argument("-i", "--integral", action="store_true",
                            help="print the integral between each pair of X")
        parser.add_argument("model", help="model written by `natspline fit`")
        parser.add_argument("x", type=float, nargs="+", metavar="X")

    def main(self, args):
        command.Command.main(self, args)
        model = command.load_model(args.model)
        if args.integral:
            if len(args.x) % 2:
                sys.exit("--integral needs an even number of X values")
            pairs = zip(args.x[::2], args.x[1::2])
            for a, b in pairs:
                print("%g\t%g\t%.12g" % (a, b, model.integrate(a, b)))
            return
        for x in args.x:
            if args.derivative:
                y = model.derivative(x, args.derivative)
            else:
                y = model(x, continued_boundary=args.continued_boundary)
            print("%g\t%.12g" % (x, y))
