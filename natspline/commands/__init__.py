from . import command, fit, evaluate, plot, version
