import json
import os

import pytest
import numpy as np

import natspline
from natspline.frontend import console


@pytest.fixture
def points_file(tmp_path):
    fn = tmp_path / "points.csv"
    fn.write_text("# x, y\n0, 0\n1, 1\n2, 0\n")
    return str(fn)


@pytest.fixture
def model_file(tmp_path, points_file):
    out = str(tmp_path / "model.json")
    console.main(["fit", points_file, "-o", out, "-t", "1e-10", "--method", "direct"])
    return out


def test_fit(model_file):
    with open(model_file) as f:
        d = json.load(f)
    assert d["degree"] == 3
    assert d["knots"] == [0., 1., 2.]
    model = natspline.NaturalSpline.load(model_file)
    assert model(.5) == pytest.approx(.6875)


def test_fit_unsorted_needs_flag(tmp_path):
    fn = tmp_path / "points.txt"
    fn.write_text("2 0\n0 0\n1 1\n")
    out = str(tmp_path / "model.json")
    with pytest.raises(natspline.InvalidKnotSequenceError):
        console.main(["fit", str(fn), "-o", out])
    console.main(["fit", str(fn), "-o", out, "--sort", "-d", "2"])
    assert natspline.NaturalSpline.load(out).degree == 2


def test_fit_missing_file(tmp_path):
    with pytest.raises(SystemExit):
        console.main(["fit", str(tmp_path / "nope.csv"), "-o", "x.json"])


def test_evaluate(model_file, capsys):
    console.main(["evaluate", model_file, "0.5", "3"])
    lines = capsys.readouterr().out.split("\n")
    assert float(lines[0].split("\t")[1]) == pytest.approx(.6875)
    assert float(lines[1].split("\t")[1]) == 0.


def test_evaluate_continued_boundary(model_file, capsys):
    console.main(["evaluate", "-c", model_file, "-1", "3"])
    values = [float(l.split("\t")[1])
              for l in capsys.readouterr().out.strip().split("\n")]
    assert np.allclose(values, [0., 0.], atol=1e-8)


def test_evaluate_derivative(model_file, capsys):
    console.main(["evaluate", "-k", "2", model_file, "1"])
    out = capsys.readouterr().out
    assert float(out.split("\t")[1]) == pytest.approx(-3.)


def test_evaluate_integral(model_file, capsys):
    console.main(["evaluate", "--integral", model_file, "0", "2", "2", "0"])
    lines = capsys.readouterr().out.strip().split("\n")
    assert float(lines[0].split("\t")[2]) == pytest.approx(1.25)
    assert float(lines[1].split("\t")[2]) == pytest.approx(-1.25)
    with pytest.raises(SystemExit):
        console.main(["evaluate", "--integral", model_file, "0"])


def test_plot(model_file, tmp_path):
    out = str(tmp_path / "plot.png")
    console.main(["plot", model_file, out, "-n", "50"])
    assert os.path.getsize(out) > 0
    out = str(tmp_path / "deriv.png")
    console.main(["plot", "-k", "1", "--margin", ".5", model_file, out])
    assert os.path.getsize(out) > 0


def test_version(capsys):
    console.main(["version"])
    assert capsys.readouterr().out.startswith("natspline v")
