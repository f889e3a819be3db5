from ..observe import Observer, targets, SOLVE_START, ITERATION, CONVERGED
from .. import logging

logger = logging.getLogger(__name__)


class ResidualMonitor(Observer):
    'Records the residual after every solver step.'

    def __init__(self):
        self.residuals = []
        self.converged = False

    @property
    def iterations(self):
        return len(self.residuals)

    @targets([SOLVE_START, ITERATION, CONVERGED])
    def update(self, message, **kwargs):
        if message == SOLVE_START:
            self.residuals = []
            self.converged = False
        elif message == ITERATION:
            self.residuals.append(kwargs["residual"])
            logger.log(logging.DEBUG1, "step %d: residual=%g",
                       kwargs["i"], kwargs["residual"])
        else:
            self.converged = True
            logger.debug("converged after %d step(s), residual=%g",
                         kwargs["i"] + 1, kwargs["residual"])
