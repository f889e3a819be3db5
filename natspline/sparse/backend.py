'''
Sparse linear systems solved step by step.

A backend hands out :class:`SparseSystem` objects. A system is filled entry
by entry in a construction format, compressed to CSR, and then solved by
repeatedly calling the backend's single-step primitive until it reports
convergence or an error. All matrices, vectors and solver workspace held by
a system are dropped when it is closed; use it as a context manager so this
happens on every exit path.
'''
from abc import ABCMeta, abstractmethod

import numpy as np
import scipy.sparse
import scipy.sparse.linalg

from .. import defaults, logging
from ..exceptions import LinearSolveError
from ..observe import Observable, SOLVE_START, ITERATION, CONVERGED

logger = logging.getLogger(__name__)


class Status:
    CONTINUE = "continue"
    CONVERGED = "converged"
    ERROR = "error"


class Workspace:
    'Per-solve state shared between a system and its backend.'

    def __init__(self, A, b, tolerance):
        self.A = A
        self.b = b
        self.tolerance = tolerance
        self.x = np.zeros_like(b)
        self.bnorm = np.linalg.norm(b)
        self.residual = np.inf
        self.iterations = 0
        self.message = None

    def update_residual(self):
        r = np.linalg.norm(self.b - self.A @ self.x)
        self.residual = r / self.bnorm if self.bnorm > 0 else r
        return self.residual

    @property
    def released(self):
        return self.A is None

    def release(self):
        self.A = self.b = self.x = None


class SparseBackend(metaclass=ABCMeta):
    'Factory for sparse systems plus the single-step solve primitive.'

    name = None

    def create(self, rows, cols):
        return SparseSystem(self, rows, cols)

    def workspace(self, A, b, tolerance):
        return Workspace(A, b, tolerance)

    @abstractmethod
    def iterate(self, workspace):
        '''
        Advance the solve held in :workspace: by one step and return a
        :class:`Status`.
        '''
        pass

    def __repr__(self):
        return "%s()" % type(self).__name__


class ScipyIterativeBackend(SparseBackend):
    '''
    Krylov solvers from scipy.sparse.linalg.

    Each step is one call to the underlying solver, warm-started from the
    previous iterate. For GMRES a step is one restart cycle; for the other
    methods it is :inner: iterations (default: the system size).
    '''

    _solvers = {
        "gmres": scipy.sparse.linalg.gmres,
        "bicgstab": scipy.sparse.linalg.bicgstab,
        "lgmres": scipy.sparse.linalg.lgmres,
    }

    def __init__(self, method=None, restart=None, inner=None):
        method = method or defaults.method
        if method not in self._solvers:
            raise ValueError("unknown iterative method: %r" % method)
        self.name = method
        self._restart = restart if restart is not None else defaults.restart
        self._inner = inner

    def iterate(self, ws):
        n = ws.b.shape[0]
        kwargs = {"x0": ws.x, "rtol": ws.tolerance, "atol": 0.}
        if self.name == "gmres":
            kwargs["restart"] = self._restart or n
            kwargs["maxiter"] = 1
        else:
            kwargs["maxiter"] = self._inner or n
        try:
            x, info = self._solvers[self.name](ws.A, ws.b, **kwargs)
        except (ValueError, ArithmeticError, np.linalg.LinAlgError) as e:
            ws.message = "%s failed: %s" % (self.name, e)
            return Status.ERROR
        ws.iterations += 1
        if info < 0:
            ws.message = "%s reported illegal input or breakdown (info=%d)" % (
                self.name, info)
            return Status.ERROR
        if not np.all(np.isfinite(x)):
            ws.message = "%s produced non-finite values" % self.name
            return Status.ERROR
        ws.x = x
        ws.update_residual()
        if info == 0:
            return Status.CONVERGED
        return Status.CONTINUE

    def __repr__(self):
        return "ScipyIterativeBackend(method=%r)" % self.name


class DirectBackend(SparseBackend):
    'SuperLU factorization; converges in a single step or fails.'

    name = "direct"

    def iterate(self, ws):
        try:
            lu = scipy.sparse.linalg.splu(ws.A.tocsc())
        except RuntimeError as e:
            ws.message = "factorization failed: %s" % e
            return Status.ERROR
        ws.iterations += 1
        x = lu.solve(ws.b)
        if not np.all(np.isfinite(x)):
            ws.message = "factorization produced non-finite values"
            return Status.ERROR
        ws.x = x
        if ws.update_residual() > ws.tolerance:
            ws.message = "residual %g exceeds tolerance %g" % (
                ws.residual, ws.tolerance)
            return Status.ERROR
        return Status.CONVERGED


def get_backend(name=None):
    'Look up a backend by method name; "direct" selects SuperLU.'
    name = name or defaults.method
    if name == "direct":
        return DirectBackend()
    return ScipyIterativeBackend(method=name)


def default_backend():
    return ScipyIterativeBackend(defaults.method, defaults.restart)


class SparseSystem(Observable):
    '''
    A square (or rectangular) sparse matrix and right-hand side owned by a
    single solve.

    Observers receive "solve start", "iteration" and "converged" messages.
    '''

    def __init__(self, backend, rows, cols):
        Observable.__init__(self)
        if rows <= 0 or cols <= 0:
            raise ValueError("system dimensions must be positive")
        self._backend = backend
        self._shape = (rows, cols)
        self._matrix = scipy.sparse.lil_matrix((rows, cols))
        self._rhs = np.zeros(rows)
        self._compressed = None
        self._workspace = None
        self._closed = False

    @property
    def shape(self):
        return self._shape

    @property
    def closed(self):
        return self._closed

    @property
    def rhs(self):
        self._check_open()
        return self._rhs

    @property
    def matrix(self):
        'The matrix in whatever format it is currently held.'
        self._check_open()
        if self._compressed is not None:
            return self._compressed
        return self._matrix

    def _check_open(self):
        if self._closed:
            raise RuntimeError("sparse system has been released")

    def _check_index(self, i, j):
        rows, cols = self._shape
        if not (0 <= i < rows and 0 <= j < cols):
            raise IndexError("entry (%d, %d) outside %dx%d system" % (
                i, j, rows, cols))

    def set(self, i, j, value):
        self._check_open()
        if self._compressed is not None:
            raise RuntimeError("cannot set entries after compress()")
        self._check_index(i, j)
        self._matrix[i, j] = value

    def get(self, i, j):
        self._check_open()
        self._check_index(i, j)
        return float(self.matrix[i, j])

    def set_rhs(self, i, value):
        self._check_open()
        if not 0 <= i < self._shape[0]:
            raise IndexError("rhs index %d outside system of %d rows" % (
                i, self._shape[0]))
        self._rhs[i] = value

    def compress(self):
        self._check_open()
        if self._compressed is None:
            self._compressed = self._matrix.tocsr()
            self._matrix = None
        return self._compressed

    def solve_iterative(self, tolerance=None, max_iterations=None):
        '''
        Solve the system to a relative residual of :tolerance:.

        Raises LinearSolveError if the backend reports an error or has not
        converged after :max_iterations: steps.
        '''
        self._check_open()
        if tolerance is None:
            tolerance = defaults.tolerance
        if max_iterations is None:
            max_iterations = defaults.max_iterations
        if tolerance <= 0:
            raise ValueError("tolerance must be positive")
        A = self.compress()
        if self._workspace is not None:
            self._workspace.release()
        ws = self._workspace = self._backend.workspace(A, self._rhs, tolerance)
        logger.debug("solving %dx%d system (nnz=%d) with %r, tol=%g",
                     A.shape[0], A.shape[1], A.nnz, self._backend, tolerance)
        self.update_observers(SOLVE_START, shape=A.shape, tolerance=tolerance)
        for i in range(max_iterations):
            status = self._backend.iterate(ws)
            if status == Status.ERROR:
                raise LinearSolveError(ws.message or "solver error")
            self.update_observers(ITERATION, i=i, residual=ws.residual)
            if status == Status.CONVERGED:
                self.update_observers(CONVERGED, i=i, residual=ws.residual)
                return np.array(ws.x, dtype=float)
        raise LinearSolveError(
            "solver did not converge after %d iterations (residual %g > %g)" %
            (max_iterations, ws.residual, tolerance))

    def close(self):
        if self._closed:
            return
        if self._workspace is not None:
            self._workspace.release()
        self._workspace = None
        self._matrix = self._compressed = self._rhs = None
        self.unregister_all()
        self._closed = True

    def __enter__(self):
        self._check_open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
