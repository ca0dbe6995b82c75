"""Knot insertion (Boehm's algorithm) on top of the De Boor net."""

from __future__ import annotations

import numpy as np

from ._de_boor_impl import _get_left_diagonal, _get_right_diagonal, _get_row
from .bspline_curve import BsplineCurve
from .de_boor import evaluate
from .errors import MultiplicityExceededError, allocation_guard
from .tolerance import KnotTolerance


def insert_knot(
    curve: BsplineCurve, u: float, times: int = 1, tol: KnotTolerance | None = None
) -> BsplineCurve:
    """Insert the knot ``u`` a number of times without changing the curve shape.

    The curve is evaluated at ``u``. The control points of the refined curve are
    the unaffected control points on the left, the first points of the first
    ``times`` rows of the De Boor net, the whole row ``times``, the last points of
    the first ``times`` rows (walked upwards) and the unaffected control points
    on the right. ``u`` is inserted in the knot vector right after its existing
    occurrences.

    Args:
        curve (BsplineCurve): Curve to refine.
        u (float): Knot value to insert. Must lie in the curve domain.
        times (int): Number of insertions. Defaults to 1.
        tol (KnotTolerance | None): Tolerances for knot comparisons. If None,
            the default preset for the curve dtype is used.

    Returns:
        BsplineCurve: A new curve with ``times`` more control points and knots.

    Raises:
        ValueError: If ``times`` is negative.
        MultiplicityExceededError: If the multiplicity of ``u`` plus ``times``
            exceeds the curve order.
        ParameterUndefinedError: If ``u`` lies outside the curve domain.
        AllocationFailureError: If the new curve storage cannot be allocated.

    Example:
        >>> curve = BsplineCurve(2, [0.0, 1.0, 2.0, 3.0], [0, 0, 0, 0.5, 1, 1, 1])
        >>> insert_knot(curve, 0.5).control_points.ravel()
        array([0. , 1. , 1.5, 2. , 3. ])
    """
    times = int(times)
    if times < 0:
        raise ValueError("times must be non-negative")

    net = evaluate(curve, u, tol)
    if net.multiplicity + times > curve.order:
        raise MultiplicityExceededError(
            f"inserting u={u} {times} times would raise its multiplicity "
            f"{net.multiplicity} above the curve order {curve.order}"
        )
    if times == 0:
        return curve.copy()

    # Here the multiplicity is smaller than the order: the net is a full table.
    k = net.knot_index
    num_affected = net.num_affected
    first = k - curve.degree
    control_points = curve.control_points
    knots = curve.knots
    # Reuse the stored value of an existing knot so the vector stays sorted.
    value = knots[k] if net.multiplicity > 0 else net.u

    with allocation_guard("refined curve"):
        new_control_points = np.concatenate(
            [
                control_points[:first],
                _get_left_diagonal(net.points, num_affected, times),
                _get_row(net.points, num_affected, times),
                _get_right_diagonal(net.points, num_affected, times),
                control_points[first + num_affected :],
            ]
        )
        new_knots = np.concatenate(
            [knots[: k + 1], np.full(times, value, dtype=curve.dtype), knots[k + 1 :]]
        )

    return BsplineCurve(curve.degree, new_control_points, new_knots)


__all__ = ["insert_knot"]
