from .exceptions import (NaturalSplineError, InsufficientPointsError,
                         InvalidKnotSequenceError, LinearSolveError,
                         DomainLookupError)
from .spline import (NaturalSpline, fit, fit_function, segment_index,
                     evaluate, evaluate_derivative, evaluate_integral)
from .sparse import ScipyIterativeBackend, DirectBackend, get_backend
from .version import version as __version__

