"""Decomposition of a curve into Bézier segments."""

from __future__ import annotations

from .bspline_curve import BsplineCurve
from .de_boor import evaluate
from .knot_insertion import insert_knot
from .splitting import SplitCase, split
from .tolerance import KnotTolerance, _resolve_knot_tolerance


def _clamp_start(curve: BsplineCurve, tol: KnotTolerance) -> BsplineCurve:
    """Return an equivalent curve whose first knot has multiplicity ``order``.

    The domain start is inserted up to full multiplicity and the control points
    and knots in front of it, which do not contribute to the domain, are dropped.
    """
    net = evaluate(curve, curve.domain[0], tol)
    first = net.knot_index - net.multiplicity + 1
    if net.multiplicity < curve.order:
        curve = insert_knot(curve, net.u, curve.order - net.multiplicity, tol)
    if first == 0:
        return curve
    return BsplineCurve(curve.degree, curve.control_points[first:], curve.knots[first:])


def _clamp_end(curve: BsplineCurve, tol: KnotTolerance) -> BsplineCurve:
    """Return an equivalent curve whose last knot has multiplicity ``order``."""
    net = evaluate(curve, curve.domain[1], tol)
    num_control_points = net.knot_index - net.multiplicity + 1
    if net.multiplicity < curve.order:
        curve = insert_knot(curve, net.u, curve.order - net.multiplicity, tol)
    if num_control_points == curve.num_control_points:
        return curve
    return BsplineCurve(
        curve.degree,
        curve.control_points[:num_control_points],
        curve.knots[: num_control_points + curve.order],
    )


def to_bezier_segments(
    curve: BsplineCurve, tol: KnotTolerance | None = None
) -> list[BsplineCurve]:
    """Decompose a curve into Bézier segments.

    Every segment has the degree of the input curve and a knot vector with
    ``2*order`` knots: ``order`` copies of its start followed by ``order`` copies
    of its end. Segments are returned in parametric order and together describe
    the curve over its whole domain. Unclamped ends are clamped to the domain
    first.

    Args:
        curve (BsplineCurve): Curve to decompose.
        tol (KnotTolerance | None): Tolerances for knot comparisons. If None,
            the default preset for the curve dtype is used.

    Returns:
        list[BsplineCurve]: One segment per non-empty knot span of the domain.

    Raises:
        MultiplicityExceededError: If a knot multiplicity exceeds the order.
        AllocationFailureError: If a segment cannot be allocated.

    Example:
        >>> curve = BsplineCurve.create(2, 1, 5)
        >>> segments = to_bezier_segments(curve)
        >>> len(segments)
        3
        >>> segments[0].domain
        (0.0, 0.3333333333333333)
    """
    tol = _resolve_knot_tolerance(tol, curve.dtype)
    remainder = _clamp_end(_clamp_start(curve, tol), tol)

    segments: list[BsplineCurve] = []
    while True:
        result = split(remainder, remainder.knots[remainder.order], tol)
        if result.case is not SplitCase.GENERAL:
            segments.append(result.curves[0])
            return segments
        left, remainder = result.curves
        segments.append(left)


__all__ = ["to_bezier_segments"]
