import logging

from logging import INFO, ERROR, WARNING, DEBUG, NOTSET, CRITICAL

DEBUG1 = DEBUG - 1


class _NatsplineFilter:
    def filter(self, record):
        return record.name.startswith("natspline")


def init_logging():
    # Get rid of any pre-existing stuff
    root = logging.getLogger()
    while len(root.handlers) > 0:
        root.removeHandler(root.handlers[-1])
    logging.addLevelName(DEBUG1, 'DEBUG1')
    fmt = logging.Formatter(
        '%(relativeCreated)d %(name)-12s %(levelname)-1s %(message)s')
    sh = logging.StreamHandler()
    sh.setFormatter(fmt)
    sh.setLevel(logging.INFO)
    sh.addFilter(_NatsplineFilter())
    root.addHandler(sh)
    root.setLevel(logging.NOTSET)


def getLogger(name):
    return logging.getLogger(name)


def setup_logging(verbosity):
    root = logging.getLogger()
    if not root.handlers:
        init_logging()
    sh = root.handlers[0]
    sh.setLevel([INFO, DEBUG, DEBUG1][min(verbosity, 2)])
    logging.captureWarnings(True)


def add_debug_log(debug_log):
    fh = logging.FileHandler(debug_log, "wt")
    fh.setLevel(DEBUG)
    root = logging.getLogger()
    sh = root.handlers[0]
    fh.setFormatter(sh.formatter)
    fh.addFilter(_NatsplineFilter())
    root.addHandler(fh)
    return fh
