"""Pytest configuration to make `src` importable without installing the package."""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import numpy as np
import numpy.typing as npt
import pytest


def _ensure_src_on_sys_path() -> None:
    """Prepend the repository `src` directory to `sys.path` if missing."""
    repo_root: Path = Path(__file__).resolve().parents[1]
    src_path: Path = repo_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


_ensure_src_on_sys_path()

from bspcurve.bspline_curve import BsplineCurve  # noqa: E402

CurveSampler = Callable[[BsplineCurve, npt.ArrayLike], npt.NDArray[np.float64]]


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random generator for reproducible control points."""
    return np.random.default_rng(20240613)


@pytest.fixture
def quadratic_curve() -> BsplineCurve:
    """Degree 2 clamped scalar curve with control points [0, 1, 2, 3]."""
    return BsplineCurve(2, [0.0, 1.0, 2.0, 3.0], [0.0, 0.0, 0.0, 0.5, 1.0, 1.0, 1.0])


@pytest.fixture
def cubic_curve(rng: np.random.Generator) -> BsplineCurve:
    """Degree 3 clamped 3D curve with non-uniform interior knots."""
    knots = [0.0, 0.0, 0.0, 0.0, 0.15, 0.4, 0.45, 0.8, 1.0, 1.0, 1.0, 1.0]
    return BsplineCurve(3, rng.uniform(-1.0, 1.0, size=(8, 3)), knots)


@pytest.fixture
def sample_curve() -> CurveSampler:
    """Evaluate a curve at several parameters through De Boor's algorithm."""
    from bspcurve.de_boor import evaluate

    def _sample(curve: BsplineCurve, us: npt.ArrayLike) -> npt.NDArray[np.float64]:
        return np.array([evaluate(curve, float(u)).result for u in np.atleast_1d(us)])

    return _sample


@pytest.fixture
def reference_curve() -> CurveSampler:
    """Evaluate a curve at several parameters with SciPy's independent B-spline."""
    from scipy.interpolate import BSpline

    def _reference(curve: BsplineCurve, us: npt.ArrayLike) -> npt.NDArray[np.float64]:
        spline = BSpline(
            np.asarray(curve.knots, dtype=np.float64),
            np.asarray(curve.control_points, dtype=np.float64),
            curve.degree,
            extrapolate=False,
        )
        return np.asarray(spline(np.atleast_1d(np.asarray(us, dtype=np.float64))))

    return _reference
