"""Curve evaluation with De Boor's algorithm.

Evaluating a curve at a parameter ``u`` produces a :class:`DeBoorNet`: the
triangular table of intermediate points computed by De Boor's algorithm, whose
last point is the curve point. The net also records the knot span and the
multiplicity of ``u``, which knot insertion and splitting reuse to rebuild
curves without changing their shape.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from ._de_boor_impl import _compute_de_Boor_net_impl
from ._knots_impl import _find_knot_span_core
from .errors import MultiplicityExceededError, ParameterUndefinedError, allocation_guard
from .tolerance import KnotTolerance, _resolve_knot_tolerance

if TYPE_CHECKING:
    from .bspline_curve import BsplineCurve


class DeBoorCase(Enum):
    """Structural case of an evaluation.

    Attributes:
        GENERAL (DeBoorCase): The multiplicity of ``u`` is smaller than the
            order; the net holds the full triangular table.
        AT_BOUNDARY_LOW (DeBoorCase): ``u`` has full multiplicity before the
            first control point; the net holds the first control point.
        AT_BOUNDARY_HIGH (DeBoorCase): ``u`` has full multiplicity after the
            last control point; the net holds the last control point.
        AT_FULL_MULTIPLICITY (DeBoorCase): ``u`` is an interior knot of full
            multiplicity; the net holds the two control points that meet there.
    """

    GENERAL = "general"
    AT_BOUNDARY_LOW = "at_boundary_low"
    AT_BOUNDARY_HIGH = "at_boundary_high"
    AT_FULL_MULTIPLICITY = "at_full_multiplicity"


class DeBoorNet:
    """The De Boor net computed while evaluating a curve at one parameter.

    Attributes:
        _degree (int): Degree of the evaluated curve.
        _u (float): Evaluation parameter.
        _knot_index (int): Index k such that ``u`` lies in ``[knots[k], knots[k+1])``.
        _multiplicity (int): Multiplicity of ``u`` in the knot vector.
        _num_affected (int): Number of control points involved in the evaluation.
        _points (npt.NDArray[np.float32 | np.float64]): Read-only table of
            points, shape (num_points, dimension).
        _case (DeBoorCase): Structural case of the evaluation.
    """

    _degree: int
    _u: float
    _knot_index: int
    _multiplicity: int
    _num_affected: int
    _points: npt.NDArray[np.float32 | np.float64]
    _case: DeBoorCase

    def __init__(
        self,
        degree: int,
        u: float,
        knot_index: int,
        multiplicity: int,
        num_affected: int,
        points: npt.NDArray[np.float32 | np.float64],
        case: DeBoorCase,
    ) -> None:
        self._degree = degree
        self._u = u
        self._knot_index = knot_index
        self._multiplicity = multiplicity
        self._num_affected = num_affected
        self._points = points
        self._points.setflags(write=False)
        self._case = case

    @property
    def degree(self) -> int:
        """Degree of the evaluated curve."""
        return self._degree

    @property
    def dimension(self) -> int:
        """Number of coordinates of each point."""
        return int(self._points.shape[1])

    @property
    def u(self) -> float:
        """The evaluation parameter."""
        return self._u

    @property
    def knot_index(self) -> int:
        """Index k such that ``u`` lies in ``[knots[k], knots[k+1])``."""
        return self._knot_index

    @property
    def multiplicity(self) -> int:
        """Number of knots equal to ``u`` up to tolerance."""
        return self._multiplicity

    @property
    def num_refinements(self) -> int:
        """Number of blending rounds performed (degree - multiplicity, or 0)."""
        if self._case is DeBoorCase.GENERAL:
            return self._degree - self._multiplicity
        return 0

    @property
    def num_affected(self) -> int:
        """Number of control points the evaluation touches."""
        return self._num_affected

    @property
    def num_points(self) -> int:
        """Number of points in the net."""
        return int(self._points.shape[0])

    @property
    def points(self) -> npt.NDArray[np.float32 | np.float64]:
        """The read-only table of points, shape (num_points, dimension)."""
        return self._points

    @property
    def last_index(self) -> int:
        """Row of :attr:`points` holding the evaluated curve point."""
        return self.num_points - 1

    @property
    def result(self) -> npt.NDArray[np.float32 | np.float64]:
        """The evaluated curve point.

        At an interior knot of full multiplicity the curve may be
        discontinuous; the point returned is then the right-hand limit.
        """
        return self._points[self.last_index]

    @property
    def case(self) -> DeBoorCase:
        """The structural case of the evaluation."""
        return self._case

    def __repr__(self) -> str:
        return (
            f"DeBoorNet(u={self._u}, knot_index={self._knot_index}, "
            f"multiplicity={self._multiplicity}, num_points={self.num_points}, "
            f"case={self._case.name})"
        )


def evaluate(curve: BsplineCurve, u: float, tol: KnotTolerance | None = None) -> DeBoorNet:
    """Evaluate a curve at ``u`` with De Boor's algorithm.

    Args:
        curve (BsplineCurve): Curve to evaluate.
        u (float): Parameter value.
        tol (KnotTolerance | None): Tolerances for knot comparisons. If None,
            the default preset for the curve dtype is used.

    Returns:
        DeBoorNet: The net of intermediate points; its ``result`` is the curve
        point at ``u``.

    Raises:
        MultiplicityExceededError: If the multiplicity of ``u`` exceeds the order.
        ParameterUndefinedError: If ``u`` lies outside the curve domain.
        AllocationFailureError: If the net storage cannot be allocated.
        ValueError: If a tolerance component is not positive.

    Example:
        >>> curve = BsplineCurve(2, [0.0, 1.0, 2.0, 3.0], [0, 0, 0, 0.5, 1, 1, 1])
        >>> evaluate(curve, 0.5).result
        array([1.5])
    """
    tol = _resolve_knot_tolerance(tol, curve.dtype)
    u = float(u)

    k, s = _find_knot_span_core(curve.knots, u, tol.absolute, tol.relative)
    k, s = int(k), int(s)

    degree = curve.degree
    order = curve.order
    num_control_points = curve.num_control_points
    control_points = curve.control_points

    if s > order:
        raise MultiplicityExceededError(
            f"multiplicity {s} of u={u} exceeds the curve order {order}"
        )

    if s == order:
        first, second = k - s, k - s + 1
        with allocation_guard("De Boor net"):
            if first < 0:
                return DeBoorNet(
                    degree, u, k, s, 1, control_points[:1].copy(), DeBoorCase.AT_BOUNDARY_LOW
                )
            if second >= num_control_points:
                return DeBoorNet(
                    degree,
                    u,
                    k,
                    s,
                    1,
                    control_points[first : first + 1].copy(),
                    DeBoorCase.AT_BOUNDARY_HIGH,
                )
            return DeBoorNet(
                degree,
                u,
                k,
                s,
                2,
                control_points[first : second + 1].copy(),
                DeBoorCase.AT_FULL_MULTIPLICITY,
            )

    first, last = k - degree, k - s
    if first < 0 or last >= num_control_points:
        lower, upper = curve.domain
        raise ParameterUndefinedError(
            f"the curve is not defined at u={u}; its domain is [{lower}, {upper}]"
        )

    with allocation_guard("De Boor net"):
        points = _compute_de_Boor_net_impl(curve, u, k, s)
    return DeBoorNet(degree, u, k, s, last - first + 1, points, DeBoorCase.GENERAL)


__all__ = ["DeBoorCase", "DeBoorNet", "evaluate"]
