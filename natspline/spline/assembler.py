'''
Linear constraints defining a natural spline of arbitrary degree.

The unknowns are the stacked per-segment coefficient vectors: column
``i * (D + 1) + k`` holds ``c[i, k]``, the coefficient of ``t**k`` in the
polynomial for segment ``i``, where ``t = (x - x_i) / delta_i``.

Rows are laid out in five consecutive groups:

    left values       c_i(0) = y_i
    right values      c_i(1) = y_{i+1}
    continuity        d^L/dx^L agrees across each interior knot, L = 1..D-1
    left natural      a band of derivatives vanishes at x_0
    right natural     a band of derivatives vanishes at x_N
'''
import numbers

import numpy as np

from .. import logging
from ..exceptions import InsufficientPointsError, InvalidKnotSequenceError
from .common import binomial, permutations

logger = logging.getLogger(__name__)


class ConstraintLayout:
    'Row counts and offsets of each constraint group.'

    def __init__(self, degree, segments):
        if (not isinstance(degree, numbers.Integral) or isinstance(degree, bool)
                or degree < 1):
            raise ValueError("degree must be an integer >= 1, got %r" % (degree,))
        if segments < 1:
            raise InsufficientPointsError("at least one segment is required")
        D = self.degree = int(degree)
        N = self.segments = int(segments)
        self.block = D + 1
        self.size = (D + 1) * N

        if D == 2:
            # Only the curvature at the left end is pinned; the band formula
            # below would pin the slope instead.
            self.left_orders = [2]
            self.right_orders = []
        else:
            if D % 2 == 0:
                left_start, right_start = D // 2, D // 2 + 1
            else:
                left_start = right_start = (D + 1) // 2
            self.left_orders = list(range(left_start, D))
            self.right_orders = list(range(right_start, D))

        self.left_value_rows = N
        self.right_value_rows = N
        self.continuity_rows = (D - 1) * (N - 1)
        self.left_natural_rows = len(self.left_orders)
        self.right_natural_rows = len(self.right_orders)

        self.left_value_offset = 0
        self.right_value_offset = self.left_value_offset + self.left_value_rows
        self.continuity_offset = self.right_value_offset + self.right_value_rows
        self.left_natural_offset = self.continuity_offset + self.continuity_rows
        self.right_natural_offset = self.left_natural_offset + self.left_natural_rows
        total = self.right_natural_offset + self.right_natural_rows
        assert total == self.size, (D, N, total, self.size)

    def column(self, segment, k):
        return segment * self.block + k

    def continuity_row(self, order, boundary):
        return self.continuity_offset + (order - 1) * (self.segments - 1) + boundary

    def __repr__(self):
        return ("ConstraintLayout(degree=%d, segments=%d, values=%d+%d, "
                "continuity=%d, natural=%d+%d)" % (
                    self.degree, self.segments, self.left_value_rows,
                    self.right_value_rows, self.continuity_rows,
                    self.left_natural_rows, self.right_natural_rows))


def validate_knots(x):
    x = np.asarray(x, dtype=float)
    if x.ndim != 1:
        raise InvalidKnotSequenceError("x-coordinates must be one-dimensional")
    if len(x) < 2:
        raise InsufficientPointsError(
            "need at least 2 points to fit a spline, got %d" % len(x))
    if not np.all(np.isfinite(x)):
        raise InvalidKnotSequenceError("x-coordinates must be finite")
    bad = np.flatnonzero(np.diff(x) <= 0)
    if len(bad):
        i = bad[0]
        raise InvalidKnotSequenceError(
            "x-coordinates must be strictly increasing: x[%d]=%g, x[%d]=%g" %
            (i, x[i], i + 1, x[i + 1]))
    return x


def assemble(system, x, y, degree):
    '''
    Fill :system: (a SparseSystem of size (D+1)N) and its right-hand side
    with the natural spline constraints for knots :x: and values :y:.
    Returns the ConstraintLayout used.
    '''
    x = validate_knots(x)
    y = np.asarray(y, dtype=float)
    if y.shape != x.shape:
        raise ValueError("x and y must have the same length")
    if not np.all(np.isfinite(y)):
        raise ValueError("y-values must be finite")
    delta = np.diff(x)
    lay = ConstraintLayout(degree, len(delta))
    if system.shape != (lay.size, lay.size):
        raise ValueError("system has shape %r, expected %r" % (
            system.shape, (lay.size, lay.size)))
    D, N = lay.degree, lay.segments
    logger.debug("assembling %r", lay)

    for i in range(N):
        row = lay.left_value_offset + i
        system.set(row, lay.column(i, 0), 1.)
        system.set_rhs(row, y[i])

    for i in range(N):
        row = lay.right_value_offset + i
        for j in range(D + 1):
            system.set(row, lay.column(i, j), 1.)
        system.set_rhs(row, y[i + 1])

    for L in range(1, D):
        for i in range(N - 1):
            row = lay.continuity_row(L, i)
            scale = (delta[i + 1] / delta[i]) ** L
            for j in range(L, D + 1):
                system.set(row, lay.column(i, j), binomial(j, L) * scale)
            system.set(row, lay.column(i + 1, L), -1.)

    for r, L in enumerate(lay.left_orders):
        system.set(lay.left_natural_offset + r, lay.column(0, L), 1.)

    for r, L in enumerate(lay.right_orders):
        row = lay.right_natural_offset + r
        for j in range(L, D + 1):
            system.set(row, lay.column(N - 1, j), permutations(j, L))

    return lay
