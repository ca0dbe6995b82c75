"""Buckling: blending a curve toward the chord between its end control points."""

from __future__ import annotations

import numpy as np

from .bspline_curve import BsplineCurve
from .errors import allocation_guard


def buckle(curve: BsplineCurve, b: float) -> BsplineCurve:
    r"""Blend the control points of a curve toward the chord ``P_0 P_{n-1}``.

    Each control point is replaced by

        \[
        P_i' = b P_i + (1 - b) \left(P_0 + \frac{i}{n-1} (P_{n-1} - P_0)\right),
        \]

    so ``b = 1`` keeps the curve and ``b = 0`` flattens the control polygon onto
    the chord, evenly distributing the control points along it. Values outside
    ``[0, 1]`` extrapolate. The knot vector is kept.

    Args:
        curve (BsplineCurve): Curve to buckle.
        b (float): Blending factor.

    Returns:
        BsplineCurve: The buckled curve.

    Raises:
        AllocationFailureError: If the new curve cannot be allocated.

    Example:
        >>> curve = BsplineCurve(1, [[0.0, 0.0], [1.0, 2.0], [2.0, 0.0]], [0, 0, 0.5, 1, 1])
        >>> buckle(curve, 0.0).control_points
        array([[0., 0.],
               [1., 0.],
               [2., 0.]])
    """
    control_points = curve.control_points
    n = curve.num_control_points
    b = curve.dtype.type(b)

    with allocation_guard("buckled curve"):
        if n > 1:
            ratios = np.arange(n, dtype=curve.dtype) / curve.dtype.type(n - 1)
        else:
            ratios = np.zeros(1, dtype=curve.dtype)
        chord = control_points[0] + ratios[:, np.newaxis] * (control_points[-1] - control_points[0])
        buckled = b * control_points + (1 - b) * chord

    return BsplineCurve(curve.degree, buckled, curve.knots)


__all__ = ["buckle"]
