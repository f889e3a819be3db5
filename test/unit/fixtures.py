import pytest
import numpy as np

import natspline
from natspline.sparse import DirectBackend, ScipyIterativeBackend

TOL = 1e-10


@pytest.fixture
def hat():
    'Natural cubic through (0,0), (1,1), (2,0).'
    return natspline.fit([(0., 0.), (1., 1.), (2., 0.)], degree=3, tolerance=TOL)


@pytest.fixture
def uneven_points():
    np.random.seed(1)
    x = np.cumsum(np.random.uniform(0.2, 2., size=9))
    y = np.sin(x) + np.random.normal(0., .1, size=9)
    return np.array([x, y]).T


@pytest.fixture(params=["gmres", "lgmres", "direct"])
def backend(request):
    if request.param == "direct":
        return DirectBackend()
    return ScipyIterativeBackend(request.param)


def fit_uneven(points, degree, backend=None):
    return natspline.fit(points, degree=degree, tolerance=TOL,
                         backend=backend or DirectBackend())
