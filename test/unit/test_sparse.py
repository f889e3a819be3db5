import pytest
import numpy as np

from natspline import LinearSolveError
from natspline.observe import Observer, targets, CONVERGED
from natspline.sparse import (Status, SparseBackend, ScipyIterativeBackend,
                              DirectBackend, ResidualMonitor, get_backend)

from fixtures import *


def _fill(system, A, b):
    for i, row in enumerate(A):
        for j, v in enumerate(row):
            if v:
                system.set(i, j, v)
        system.set_rhs(i, b[i])


def test_solves_small_system(backend):
    A = np.array([[4., 1., 0.], [1., 3., 1.], [0., 1., 2.]])
    b = np.array([1., 2., 3.])
    with backend.create(3, 3) as system:
        _fill(system, A, b)
        x = system.solve_iterative(1e-12)
    assert np.allclose(A @ x, b)


def test_set_overwrites():
    with DirectBackend().create(2, 2) as system:
        system.set(0, 0, 5.)
        system.set(0, 0, 2.)
        assert system.get(0, 0) == 2.
        assert system.get(1, 1) == 0.


def test_set_out_of_range():
    with DirectBackend().create(2, 2) as system:
        with pytest.raises(IndexError):
            system.set(2, 0, 1.)
        with pytest.raises(IndexError):
            system.set_rhs(-1, 1.)


def test_no_set_after_compress():
    with DirectBackend().create(2, 2) as system:
        system.set(0, 0, 1.)
        system.compress()
        assert system.get(0, 0) == 1.
        with pytest.raises(RuntimeError):
            system.set(1, 1, 1.)


def test_released_on_exit():
    with DirectBackend().create(2, 2) as system:
        system.set(0, 0, 1.)
    assert system.closed
    with pytest.raises(RuntimeError):
        system.set(0, 0, 1.)
    with pytest.raises(RuntimeError):
        system.solve_iterative()
    # idempotent
    system.close()


def test_singular_system_fails_and_releases():
    backend = DirectBackend()
    with pytest.raises(LinearSolveError):
        with backend.create(2, 2) as system:
            system.set(0, 0, 1.)
            system.set(0, 1, 1.)
            system.set(1, 0, 1.)
            system.set(1, 1, 1.)
            system.set_rhs(0, 1.)
            system.set_rhs(1, 2.)
            system.solve_iterative(1e-8)
    assert system.closed


class _NeverConverges(SparseBackend):
    def __init__(self):
        self.steps = 0

    def iterate(self, ws):
        self.steps += 1
        ws.residual = 1.
        return Status.CONTINUE


class _Breaks(SparseBackend):
    def iterate(self, ws):
        ws.x[:] = 123.
        ws.message = "boom"
        return Status.ERROR


def test_iteration_limit():
    backend = _NeverConverges()
    with pytest.raises(LinearSolveError):
        with backend.create(1, 1) as system:
            system.set(0, 0, 1.)
            system.solve_iterative(1e-8, max_iterations=7)
    assert backend.steps == 7
    assert system.closed


def test_error_status_does_not_return_values():
    with pytest.raises(LinearSolveError, match="boom"):
        with _Breaks().create(1, 1) as system:
            system.set(0, 0, 1.)
            system.solve_iterative(1e-8)
    assert system.closed


def test_bad_tolerance():
    with DirectBackend().create(1, 1) as system:
        with pytest.raises(ValueError):
            system.solve_iterative(0.)


def test_residual_monitor(backend):
    A = np.diag([1., 2., 3., 4.])
    b = np.ones(4)
    monitor = ResidualMonitor()
    with backend.create(4, 4) as system:
        system.register(monitor)
        _fill(system, A, b)
        system.solve_iterative(1e-10)
    assert monitor.converged
    assert monitor.iterations >= 1
    assert monitor.residuals[-1] <= 1e-10


def test_zero_rhs(backend):
    with backend.create(2, 2) as system:
        system.set(0, 0, 1.)
        system.set(1, 1, 1.)
        x = system.solve_iterative(1e-8)
    assert np.all(x == 0.)


def test_get_backend():
    assert isinstance(get_backend("direct"), DirectBackend)
    assert get_backend("bicgstab").name == "bicgstab"
    with pytest.raises(ValueError):
        ScipyIterativeBackend("cholesky")


class _ConvergenceCounter(Observer):
    def __init__(self):
        self.messages = []

    @targets(CONVERGED)
    def update(self, message, **kwargs):
        self.messages.append((message, kwargs["i"]))


def test_observer_sees_only_targeted_messages():
    counter = _ConvergenceCounter()
    with DirectBackend().create(1, 1) as system:
        system.register(counter)
        system.set(0, 0, 2.)
        system.set_rhs(0, 1.)
        system.solve_iterative(1e-10)
    assert counter.messages == [(CONVERGED, 0)]


def test_targets_rejects_unknown_message():
    with pytest.raises(ValueError):
        targets(["solve start", "restart"])


class _RecordingDirect(DirectBackend):
    def __init__(self):
        self.workspaces = []

    def workspace(self, A, b, tolerance):
        ws = DirectBackend.workspace(self, A, b, tolerance)
        self.workspaces.append(ws)
        return ws


def test_repeat_solve_releases_previous_workspace():
    backend = _RecordingDirect()
    with backend.create(2, 2) as system:
        system.set(0, 0, 1.)
        system.set(1, 1, 4.)
        system.set_rhs(1, 2.)
        x1 = system.solve_iterative(1e-10)
        x2 = system.solve_iterative(1e-10)
        first, second = backend.workspaces
        assert first.released
        assert not second.released
    assert second.released
    assert np.allclose(x1, [0., .5])
    assert np.array_equal(x1, x2)
