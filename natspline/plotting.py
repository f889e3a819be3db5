import matplotlib

matplotlib.use("Agg")
import numpy as np

from . import defaults


def pretty_plot():
    from matplotlib.backends.backend_agg import FigureCanvasAgg as FigureCanvas
    from matplotlib.figure import Figure

    fig = Figure()
    FigureCanvas(fig)
    ax = fig.add_subplot(111)
    return fig, ax


def plot_spline(model, derivative=0, num=None, knots=True, margin=0.):
    '''
    Draw :model: (or its :derivative:-th derivative) over its domain,
    extended by :margin: on each side. Returns the figure.
    '''
    if num is None:
        num = defaults.plot_points
    fig, ax = pretty_plot()
    a, b = model.domain
    x = np.linspace(a - margin, b + margin, num)
    if derivative:
        y = model.derivative(x, derivative)
        label = "d^%d/dx^%d" % (derivative, derivative)
    else:
        y = model(x)
        label = "degree %d" % model.degree
    ax.plot(x, y, label=label)
    if knots:
        kx = model.knots
        ky = model.derivative(kx, derivative) if derivative else model(kx)
        ax.plot(kx, ky, "o", color="black", markersize=3, label="knots")
    ax.set_xlabel("x")
    ax.legend(loc="best")
    return fig


def save_plot(model, out, **kwargs):
    fig = plot_spline(model, **kwargs)
    fig.savefig(out)
    return fig
