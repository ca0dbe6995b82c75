"""Knot vector kernels.

This module provides the Numba-compiled primitives every curve operation is
built on: tolerant comparison of knot values, the knot-span search used by De
Boor's algorithm, and basic knot vector validation.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

import numba as nb
import numpy as np
import numpy.typing as npt

F = TypeVar("F", bound=Callable[..., Any])

if TYPE_CHECKING:
    # During type-checking, make the decorator a no-op that preserves types.
    def nb_jit(*args: object, **kwargs: object) -> Callable[[F], F]:
        def decorator(func: F) -> F:
            return func

        return decorator
else:
    # At runtime, use the real Numba decorator.
    nb_jit = nb.jit  # type: ignore[attr-defined]


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
)
def _knots_equal_core(x: float, y: float, abs_tol: float, rel_tol: float) -> bool:
    """Compare two values with an absolute, then a relative, tolerance.

    Args:
        x (float): First value.
        y (float): Second value.
        abs_tol (float): Absolute tolerance. Must be positive.
        rel_tol (float): Tolerance relative to the larger magnitude.

    Returns:
        bool: True if ``|x - y| < abs_tol`` or
        ``|x - y| / max(|x|, |y|) <= rel_tol``.

    Note:
        Inputs are assumed to be correct (no validation performed).
    """
    diff = abs(x - y)
    if diff < abs_tol:
        return True
    ref = max(abs(x), abs(y))
    return diff / ref <= rel_tol


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
)
def _find_knot_span_core(
    knots: npt.NDArray[np.float32 | np.float64],
    u: float,
    abs_tol: float,
    rel_tol: float,
) -> tuple[int, int]:
    """Locate the knot span containing ``u`` and the multiplicity of ``u``.

    Knots are scanned in increasing order. Every knot equal to ``u`` (up to
    tolerance) increments the multiplicity; the scan stops at the first knot
    strictly greater than ``u``.

    Args:
        knots (npt.NDArray[np.float32 | np.float64]): Non-decreasing knot vector.
        u (float): Parameter value.
        abs_tol (float): Absolute tolerance for knot comparisons.
        rel_tol (float): Relative tolerance for knot comparisons.

    Returns:
        tuple[int, int]: ``(k, s)`` where ``k`` is the index of the last knot
        smaller than or equal to ``u`` (-1 if there is none) and ``s`` is the
        number of knots equal to ``u`` up to and including ``k``.

    Note:
        Inputs are assumed to be correct (no validation performed).
    """
    k = 0
    s = 0
    n = knots.size
    while k < n:
        uk = float(knots[k])
        if _knots_equal_core(u, uk, abs_tol, rel_tol):
            s += 1
        elif u < uk:
            break
        k += 1
    return k - 1, s


def _check_curve_info(
    knots: npt.NDArray[np.float32 | np.float64],
    degree: int,
    num_control_points: int,
) -> None:
    """Validate a knot vector against a degree and number of control points.

    Args:
        knots (npt.NDArray[np.float32 | np.float64]): Knot vector to check.
        degree (int): Non-negative polynomial degree.
        num_control_points (int): Number of control points of the curve.

    Raises:
        TypeError: If `knots` is not 1-dimensional.
        ValueError: If the knot vector size is not ``num_control_points + degree + 1``,
            if it contains non-finite values, or if it is not non-decreasing.
    """
    if knots.ndim != 1:
        raise TypeError("knots must be a 1D array")
    if knots.size != num_control_points + degree + 1:
        raise ValueError(
            "knots must have num_control_points+degree+1 elements. "
            f"Got {knots.size} knots for {num_control_points} control points "
            f"and degree {degree}."
        )
    if not np.all(np.isfinite(knots)):
        raise ValueError("knots must be finite")
    if not np.all(np.diff(knots) >= knots.dtype.type(0.0)):
        raise ValueError("knots must be non-decreasing")


def _warmup_numba_functions() -> None:
    """Precompile numba functions with float64 signatures for faster first call."""
    knots_dummy = np.array([0.0, 0.0, 0.0, 0.5, 1.0, 1.0, 1.0], dtype=np.float64)
    _knots_equal_core(0.5, 0.5, 1e-12, 1e-15)
    _find_knot_span_core(knots_dummy, 0.5, 1e-12, 1e-15)


# Precompile numba functions on module import (skip during type checking)
if not TYPE_CHECKING:
    _warmup_numba_functions()


__all__ = [
    "_check_curve_info",
    "_find_knot_span_core",
    "_knots_equal_core",
    "nb_jit",
]
