'''
Point, derivative and integral queries against a fitted spline.

Any object exposing ``knots``, ``deltas`` and ``coef`` arrays (see
:class:`natspline.spline.spline.NaturalSpline`) can be queried. Outside
``[knots[0], knots[-1]]`` values and derivatives are 0.0.
'''
import numpy as np
import wrapt

from ..exceptions import DomainLookupError
from .common import polyval, polyder_eval, polyint


@wrapt.decorator
def vectorized(wrapped, instance, args, kwargs):
    'Map a scalar query (model, x, ...) over array-like x.'
    model, x, rest = args[0], args[1], args[2:]

    def call(xx):
        return wrapped(model, xx, *rest, **kwargs)

    if np.ndim(x) == 0:
        return call(float(x))
    x = np.asarray(x, dtype=float)
    ret = np.array([call(xx) for xx in x.ravel()], dtype=float)
    return ret.reshape(x.shape)


def segment_index(knots, x):
    '''
    Index of the knot immediately before the first knot >= x.

    Gives -1 for x at or left of the first knot and len(knots) - 2 when no
    knot is >= x. An x equal to an interior knot x_k maps to segment k - 1.
    '''
    k = int(np.searchsorted(knots, x, side="left"))
    if k < len(knots):
        return k - 1
    return len(knots) - 2


def _locate(model, x, continued_boundary=False):
    '''
    Return (segment, t) for x, or None outside the domain. With
    :continued_boundary: points outside snap to the nearest end.
    '''
    knots = model.knots
    if len(knots) < 2:
        return None
    if x < knots[0] or x > knots[-1]:
        if not continued_boundary:
            return None
        if x < knots[0]:
            return 0, 0.
        return len(knots) - 2, 1.
    i = max(segment_index(knots, x), 0)
    return i, (x - knots[i]) / model.deltas[i]


@vectorized
def evaluate(model, x, continued_boundary=False):
    loc = _locate(model, x, continued_boundary)
    if loc is None:
        return 0.
    i, t = loc
    return float(polyval(model.coef[i], t))


@vectorized
def evaluate_derivative(model, x, order=1):
    '''
    The :order:-th derivative with respect to x. Each segment stores its
    polynomial in t = (x - x_i) / delta_i, so d/dx = delta_i ** -1 d/dt.
    '''
    if order < 0:
        raise ValueError("derivative order must be non-negative")
    loc = _locate(model, x)
    if loc is None:
        return 0.
    i, t = loc
    return float(polyder_eval(model.coef[i], t, order) / model.deltas[i] ** order)


def evaluate_integral(model, xlo, xhi):
    '''
    Definite integral of the spline from :xlo: to :xhi:. Reversed bounds
    flip the sign; the parts of [xlo, xhi] outside the domain contribute
    nothing.
    '''
    knots, deltas, coef = model.knots, model.deltas, model.coef
    if len(knots) < 2:
        raise DomainLookupError("spline has no segments")
    if np.isnan(xlo) or np.isnan(xhi):
        raise DomainLookupError("cannot locate NaN integration bound")
    if xlo == xhi:
        return 0.
    if xhi < xlo:
        return -evaluate_integral(model, xhi, xlo)
    last = len(knots) - 2
    xlo = min(max(xlo, knots[0]), knots[-1])
    xhi = min(max(xhi, knots[0]), knots[-1])
    if xlo == xhi:
        return 0.
    lo = max(segment_index(knots, xlo), 0)
    hi = min(max(segment_index(knots, xhi), lo), last)
    if not (0 <= lo <= hi <= last):
        raise DomainLookupError(
            "cannot locate segments for [%g, %g]" % (xlo, xhi))
    tlo = (xlo - knots[lo]) / deltas[lo]
    thi = (xhi - knots[hi]) / deltas[hi]
    if lo == hi:
        return float(deltas[lo] * polyint(coef[lo], tlo, thi))
    ret = deltas[lo] * polyint(coef[lo], tlo, 1.)
    ret += deltas[hi] * polyint(coef[hi], 0., thi)
    for k in range(lo + 1, hi):
        ret += deltas[k] * polyint(coef[k], 0., 1.)
    return float(ret)
