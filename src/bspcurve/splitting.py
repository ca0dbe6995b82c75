"""Splitting a curve into two independent curves at a parameter."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

import numpy as np

from ._de_boor_impl import _get_left_diagonal, _get_right_diagonal
from ._knots_impl import _knots_equal_core
from .bspline_curve import BsplineCurve
from .de_boor import DeBoorCase, DeBoorNet, evaluate
from .errors import allocation_guard
from .tolerance import KnotTolerance, _resolve_knot_tolerance


class SplitCase(Enum):
    """Outcome of a split.

    Attributes:
        GENERAL (SplitCase): The curve was split into two curves.
        BOUNDARY_LOW (SplitCase): The parameter is the start of the domain;
            the result is a single copy of the curve.
        BOUNDARY_HIGH (SplitCase): The parameter is the end of the domain;
            the result is a single copy of the curve.
    """

    GENERAL = "general"
    BOUNDARY_LOW = "boundary_low"
    BOUNDARY_HIGH = "boundary_high"


class SplitResult(NamedTuple):
    """Curves produced by a split.

    Attributes:
        curves (tuple[BsplineCurve, ...]): Two curves (left, right) in the
            general case, otherwise a single copy of the input curve.
        case (SplitCase): Which case the split parameter fell into.
    """

    curves: tuple[BsplineCurve, ...]
    case: SplitCase


def _split_by_partition(curve: BsplineCurve, net: DeBoorNet) -> tuple[BsplineCurve, BsplineCurve]:
    """Split at an interior knot that already has full multiplicity.

    No interpolation is needed: the control points and knots are partitioned
    at the run of knots equal to the split parameter, which both halves keep.
    """
    cut = net.knot_index - net.multiplicity + 1
    control_points = curve.control_points
    knots = curve.knots

    left = BsplineCurve(curve.degree, control_points[:cut], knots[: net.knot_index + 1])
    right = BsplineCurve(curve.degree, control_points[cut:], knots[cut:])
    return left, right


def _split_general(curve: BsplineCurve, net: DeBoorNet) -> tuple[BsplineCurve, BsplineCurve]:
    """Split at a parameter whose multiplicity is smaller than the order.

    The left curve takes the unaffected control points before the evaluation
    window followed by the left diagonal of the De Boor net; the right curve
    takes the right diagonal followed by the unaffected control points after
    the window. Each half is clamped at the split parameter by ``order`` copies
    of it.
    """
    k = net.knot_index
    s = net.multiplicity
    num_affected = net.num_affected
    order = curve.order
    control_points = curve.control_points
    knots = curve.knots
    value = knots[k] if s > 0 else net.u
    clamp = np.full(order, value, dtype=curve.dtype)

    left_control_points = np.concatenate(
        [
            control_points[: k - curve.degree],
            _get_left_diagonal(net.points, num_affected, num_affected),
        ]
    )
    right_control_points = np.concatenate(
        [
            _get_right_diagonal(net.points, num_affected, num_affected),
            control_points[k - s + 1 :],
        ]
    )
    left_knots = np.concatenate([knots[: k - s + 1], clamp])
    right_knots = np.concatenate([clamp, knots[k + 1 :]])

    left = BsplineCurve(curve.degree, left_control_points, left_knots)
    right = BsplineCurve(curve.degree, right_control_points, right_knots)
    return left, right


def split(curve: BsplineCurve, u: float, tol: KnotTolerance | None = None) -> SplitResult:
    """Split a curve at ``u`` into two curves joining at ``u``.

    Splitting at either end of the domain is a no-op that returns a single
    copy of the curve; the returned case tells which end was matched.
    Otherwise two curves are returned, the left one defined on
    ``[domain[0], u]`` and the right one on ``[u, domain[1]]``, both clamped at
    ``u``. Together they describe exactly the original curve.

    Args:
        curve (BsplineCurve): Curve to split.
        u (float): Split parameter. Must lie in the curve domain.
        tol (KnotTolerance | None): Tolerances for knot comparisons. If None,
            the default preset for the curve dtype is used.

    Returns:
        SplitResult: The resulting curves and the split case.

    Raises:
        MultiplicityExceededError: If the multiplicity of ``u`` exceeds the order.
        ParameterUndefinedError: If ``u`` lies outside the curve domain.
        AllocationFailureError: If the new curves cannot be allocated.

    Example:
        >>> curve = BsplineCurve(2, [0.0, 1.0, 2.0, 3.0], [0, 0, 0, 0.5, 1, 1, 1])
        >>> left, right = split(curve, 0.5).curves
        >>> left.knots, right.knots
        (array([0. , 0. , 0. , 0.5, 0.5, 0.5]), array([0.5, 0.5, 0.5, 1. , 1. , 1. ]))
    """
    tol = _resolve_knot_tolerance(tol, curve.dtype)
    net = evaluate(curve, u, tol)

    knots = curve.knots
    if _knots_equal_core(float(knots[curve.degree]), net.u, tol.absolute, tol.relative):
        return SplitResult((curve.copy(),), SplitCase.BOUNDARY_LOW)
    if _knots_equal_core(
        float(knots[curve.num_knots - curve.order]), net.u, tol.absolute, tol.relative
    ):
        return SplitResult((curve.copy(),), SplitCase.BOUNDARY_HIGH)

    with allocation_guard("split curves"):
        if net.case is DeBoorCase.GENERAL:
            left, right = _split_general(curve, net)
        else:
            left, right = _split_by_partition(curve, net)

    return SplitResult((left, right), SplitCase.GENERAL)


__all__ = ["SplitCase", "SplitResult", "split"]
