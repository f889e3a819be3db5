from .backend import (Status, SparseBackend, SparseSystem,
                      ScipyIterativeBackend, DirectBackend,
                      get_backend, default_backend)
from .monitor import ResidualMonitor
