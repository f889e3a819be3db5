class NaturalSplineError(Exception):
    "Base class for errors raised while fitting or evaluating a spline."
    pass


class InsufficientPointsError(NaturalSplineError, ValueError):
    "Thrown when fewer than two points are given to fit."
    pass


class InvalidKnotSequenceError(NaturalSplineError, ValueError):
    "Thrown when the x-coordinates are not finite and strictly increasing."
    pass


class LinearSolveError(NaturalSplineError):
    "Thrown when the sparse solver fails or does not converge."
    pass


class DomainLookupError(NaturalSplineError):
    "Thrown when no segment can be located for a query."
    pass
