import json

import numpy as np

from .. import defaults, logging
from ..exceptions import InsufficientPointsError
from ..sparse import default_backend, ResidualMonitor
from .assembler import ConstraintLayout, assemble, validate_knots
from .common import permutations
from .evaluate import evaluate, evaluate_derivative, evaluate_integral

logger = logging.getLogger(__name__)


def _frozen(a):
    a = np.array(a, dtype=float)
    a.setflags(write=False)
    return a


class NaturalSpline:
    '''
    A natural spline of degree D on knots x_0 < ... < x_N.

    Row i of :coef: holds the D+1 coefficients (ascending powers) of the
    polynomial on [x_i, x_{i+1}] in the local coordinate
    t = (x - x_i) / delta_i. Instances are immutable.
    '''

    def __init__(self, degree, knots, coef):
        self._degree = int(degree)
        self._knots = _frozen(knots)
        self._deltas = _frozen(np.diff(self._knots))
        self._coef = _frozen(coef)
        n = len(self._deltas)
        if self._knots.ndim != 1 or self._coef.shape != (n, self._degree + 1):
            raise ValueError(
                "coefficient table has shape %r, expected %r" % (
                    self._coef.shape, (n, self._degree + 1)))

    @property
    def degree(self):
        return self._degree

    @property
    def knots(self):
        return self._knots

    @property
    def deltas(self):
        return self._deltas

    @property
    def coef(self):
        return self._coef

    @property
    def segments(self):
        return len(self._deltas)

    @property
    def domain(self):
        return (self._knots[0], self._knots[-1])

    def __call__(self, points, continued_boundary=False):
        'Evaluate at points.'
        return evaluate(self, points, continued_boundary)

    def derivative(self, points, order=1):
        return evaluate_derivative(self, points, order)

    def integrate(self, a, b):
        return evaluate_integral(self, a, b)

    def roughness(self):
        'Integral of squared second derivative.'
        ret = 0.
        for c, h in zip(self._coef, self._deltas):
            d2 = np.array([c[k] * permutations(k, 2)
                           for k in range(2, self._degree + 1)])
            if len(d2) == 0:
                continue
            sq = np.convolve(d2, d2)
            ret += (sq / np.arange(1, len(sq) + 1)).sum() / h ** 3
        return float(ret)

    def to_dict(self):
        return {
            "degree": self._degree,
            "knots": self._knots.tolist(),
            "coef": self._coef.tolist(),
        }

    @classmethod
    def from_dict(klass, d):
        degree = d["degree"]
        coef = np.reshape(np.asarray(d["coef"], dtype=float), (-1, degree + 1))
        return klass(degree, d["knots"], coef)

    def dump(self, filename):
        with open(filename, "wt") as f:
            json.dump(self.to_dict(), f)

    @classmethod
    def load(klass, filename):
        with open(filename, "rt") as f:
            return klass.from_dict(json.load(f))

    def __repr__(self):
        return "NaturalSpline(degree=%d, segments=%d, domain=[%g, %g])" % (
            (self._degree, self.segments) + tuple(self.domain))


def _as_points(points, sort):
    pts = np.asarray(points, dtype=float)
    if pts.size == 0:
        pts = pts.reshape(0, 2)
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise ValueError("points must be a sequence of (x, y) pairs")
    if len(pts) < 2:
        raise InsufficientPointsError(
            "need at least 2 points to fit a spline, got %d" % len(pts))
    if sort:
        pts = pts[np.argsort(pts[:, 0], kind="stable")]
    return pts[:, 0], pts[:, 1]


def fit(points, degree=None, tolerance=None, backend=None,
        max_iterations=None, sort=False):
    '''
    Fit a natural spline of :degree: through :points:.

    Points must be ordered by strictly increasing x unless :sort: is set;
    duplicate x-values are always rejected. The sparse system is solved by
    :backend: (default: natspline.sparse.default_backend()) to a relative
    residual of :tolerance:.
    '''
    if degree is None:
        degree = defaults.degree
    if tolerance is None:
        tolerance = defaults.tolerance
    x, y = _as_points(points, sort)
    x = validate_knots(x)
    lay = ConstraintLayout(degree, len(x) - 1)
    if backend is None:
        backend = default_backend()
    monitor = ResidualMonitor()
    with backend.create(lay.size, lay.size) as system:
        system.register(monitor)
        assemble(system, x, y, degree)
        solution = system.solve_iterative(tolerance, max_iterations)
    coef = solution.reshape(lay.segments, lay.block)
    logger.debug("fit degree %d spline on %d segments in %d step(s)",
                 lay.degree, lay.segments, monitor.iterations)
    return NaturalSpline(lay.degree, x, coef)


def fit_function(points, degree=None, tolerance=None, backend=None, **kwargs):
    'Like fit(), but also return a function evaluating the fitted spline.'
    model = fit(points, degree, tolerance, backend, **kwargs)

    def f(x, continued_boundary=False):
        return evaluate(model, x, continued_boundary)

    return model, f
