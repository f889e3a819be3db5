from .spline import NaturalSpline, fit, fit_function
from .assembler import ConstraintLayout, assemble, validate_knots
from .evaluate import (segment_index, evaluate, evaluate_derivative,
                       evaluate_integral)
