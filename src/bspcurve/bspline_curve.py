"""BsplineCurve class and construction utilities."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np
from numpy import typing as npt

from ._knots_impl import _check_curve_info
from .errors import DegreeTooHighError, InvalidDimensionError, allocation_guard
from .knots import KnotStyle, create_knot_vector

if TYPE_CHECKING:
    from .de_boor import DeBoorNet
    from .splitting import SplitResult
    from .tolerance import KnotTolerance


def _resolve_dtype(*arrays: npt.NDArray[Any]) -> np.dtype[Any]:
    """Pick the common floating dtype of the given arrays.

    Integer arrays adopt the dtype of the floating ones, or float64 if none is
    floating.

    Raises:
        ValueError: If floating arrays disagree or the dtype is not float32/float64.
    """
    float_dtypes = {arr.dtype for arr in arrays if np.issubdtype(arr.dtype, np.floating)}
    if len(float_dtypes) > 1:
        raise ValueError(
            "The control points must have the same dtype as the knots. "
            f"Got {sorted(str(dt) for dt in float_dtypes)}."
        )
    dtype = float_dtypes.pop() if float_dtypes else np.dtype(np.float64)
    if dtype not in (np.dtype(np.float32), np.dtype(np.float64)):
        raise ValueError("dtype must be float32 or float64")
    return dtype


def _as_owned_array(arr: npt.NDArray[Any], dtype: np.dtype[Any]) -> npt.NDArray[Any]:
    """Return a contiguous read-only copy of ``arr`` with the given dtype."""
    with allocation_guard("curve storage"):
        owned = np.array(arr, dtype=dtype, order="C", copy=True)
    owned.setflags(write=False)
    return owned


class BsplineCurve:
    """A non-rational B-spline curve.

    The curve is defined by its degree, a sequence of control points of any
    dimension and a non-decreasing knot vector with
    ``num_control_points + degree + 1`` entries. Instances are immutable: the
    control points and knots are owned, read-only arrays, and every transform
    returns a new curve.

    Attributes:
        _degree (int): Polynomial degree of the curve.
        _control_points (npt.NDArray[np.float32 | np.float64]): Control points,
            shape (num_control_points, dimension).
        _knots (npt.NDArray[np.float32 | np.float64]): Knot vector.
    """

    _degree: int
    _control_points: npt.NDArray[np.float32 | np.float64]
    _knots: npt.NDArray[np.float32 | np.float64]

    def __init__(self, degree: int, control_points: npt.ArrayLike, knots: npt.ArrayLike) -> None:
        """Initialize a B-spline curve.

        Args:
            degree (int): Polynomial degree of the curve. Must be non-negative.
            control_points (npt.ArrayLike): Control points with shape
                (num_control_points, dimension). A 1D array is interpreted as
                num_control_points scalar (dimension one) points.
            knots (npt.ArrayLike): Non-decreasing knot vector with
                num_control_points+degree+1 entries.

        Raises:
            InvalidDimensionError: If the control points have dimension zero.
            DegreeTooHighError: If degree is not smaller than the number of
                control points.
            ValueError: If degree is negative, the knot vector is invalid, or
                the dtypes are not float32/float64 or disagree.
            TypeError: If the control points or knots have an invalid rank.
        """
        ctrl = np.asarray(control_points)
        knot_arr = np.asarray(knots)

        if ctrl.ndim == 1:
            ctrl = ctrl.reshape(-1, 1)
        elif ctrl.ndim != 2:  # noqa: PLR2004
            raise TypeError("control_points must be a 1D or 2D array")

        degree = int(degree)
        BsplineCurve._validate_input(degree, ctrl.shape[0], ctrl.shape[1])
        _check_curve_info(knot_arr, degree, ctrl.shape[0])

        dtype = _resolve_dtype(ctrl, knot_arr)

        self._degree = degree
        self._control_points = _as_owned_array(ctrl, dtype)
        self._knots = _as_owned_array(knot_arr, dtype)

    @staticmethod
    def _validate_input(degree: int, num_control_points: int, dimension: int) -> None:
        """Validate the shape parameters of a curve.

        Raises:
            InvalidDimensionError: If dimension is smaller than one.
            ValueError: If degree is negative.
            DegreeTooHighError: If degree is not smaller than num_control_points.
        """
        if dimension < 1:
            raise InvalidDimensionError(f"dimension must be at least 1. Got {dimension}.")
        if degree < 0:
            raise ValueError("degree must be non-negative")
        if degree >= num_control_points:
            raise DegreeTooHighError(
                f"degree must be smaller than the number of control points. "
                f"Got degree {degree} and {num_control_points} control points."
            )

    @classmethod
    def create(
        cls,
        degree: int,
        dimension: int,
        num_control_points: int,
        knot_style: KnotStyle = KnotStyle.CLAMPED,
        dtype: npt.DTypeLike | None = None,
    ) -> BsplineCurve:
        """Create a curve with zeroed control points and a uniform knot vector.

        Args:
            degree (int): Polynomial degree. Must be non-negative.
            dimension (int): Number of coordinates of each control point.
            num_control_points (int): Number of control points.
            knot_style (KnotStyle): Style of the generated knot vector.
                Defaults to KnotStyle.CLAMPED.
            dtype (npt.DTypeLike | None): float32 or float64. Defaults to float64.

        Returns:
            BsplineCurve: The new curve.

        Raises:
            InvalidDimensionError: If dimension is smaller than one.
            DegreeTooHighError: If degree >= num_control_points.
            ValueError: If degree is negative or dtype is unsupported.

        Example:
            >>> BsplineCurve.create(2, 1, 4).knots
            array([0. , 0. , 0. , 0.5, 1. , 1. , 1. ])
        """
        cls._validate_input(degree, num_control_points, dimension)
        knots = create_knot_vector(num_control_points, degree, knot_style, dtype=dtype)
        with allocation_guard("control points"):
            control_points = np.zeros((num_control_points, dimension), dtype=knots.dtype)
        return cls(degree, control_points, knots)

    def copy(self) -> BsplineCurve:
        """Return a deep copy of the curve."""
        return BsplineCurve(self._degree, self._control_points, self._knots)

    @property
    def degree(self) -> int:
        """The polynomial degree of the curve."""
        return self._degree

    @property
    def order(self) -> int:
        """The order of the curve (degree + 1)."""
        return self._degree + 1

    @property
    def dimension(self) -> int:
        """The number of coordinates of each control point."""
        return int(self._control_points.shape[1])

    @property
    def num_control_points(self) -> int:
        """The number of control points."""
        return int(self._control_points.shape[0])

    @property
    def num_knots(self) -> int:
        """The number of knots (num_control_points + order)."""
        return int(self._knots.size)

    @property
    def control_points(self) -> npt.NDArray[np.float32 | np.float64]:
        """The read-only control points, shape (num_control_points, dimension)."""
        return self._control_points

    @property
    def knots(self) -> npt.NDArray[np.float32 | np.float64]:
        """The read-only knot vector."""
        return self._knots

    @property
    def dtype(self) -> np.dtype[np.float32 | np.float64]:
        """The floating-point type of the control points and knots."""
        return self._knots.dtype

    @property
    def domain(self) -> tuple[float, float]:
        """The parametric domain ``(knots[degree], knots[num_knots - order])``."""
        return float(self._knots[self._degree]), float(self._knots[self.num_knots - self.order])

    def evaluate(self, u: float, tol: KnotTolerance | None = None) -> DeBoorNet:
        """Evaluate the curve at ``u``. See :func:`bspcurve.de_boor.evaluate`."""
        from .de_boor import evaluate

        return evaluate(self, u, tol)

    def insert_knot(
        self, u: float, times: int = 1, tol: KnotTolerance | None = None
    ) -> BsplineCurve:
        """Insert ``u`` ``times`` times. See :func:`bspcurve.knot_insertion.insert_knot`."""
        from .knot_insertion import insert_knot

        return insert_knot(self, u, times, tol)

    def split(self, u: float, tol: KnotTolerance | None = None) -> SplitResult:
        """Split the curve at ``u``. See :func:`bspcurve.splitting.split`."""
        from .splitting import split

        return split(self, u, tol)

    def to_bezier_segments(self, tol: KnotTolerance | None = None) -> list[BsplineCurve]:
        """Decompose into Bézier segments. See :func:`bspcurve.bezier.to_bezier_segments`."""
        from .bezier import to_bezier_segments

        return to_bezier_segments(self, tol)

    def buckle(self, b: float) -> BsplineCurve:
        """Blend toward the end-point chord. See :func:`bspcurve.buckling.buckle`."""
        from .buckling import buckle

        return buckle(self, b)

    def __repr__(self) -> str:
        return (
            f"BsplineCurve(degree={self._degree}, dimension={self.dimension}, "
            f"num_control_points={self.num_control_points}, dtype={self.dtype})"
        )


__all__ = ["BsplineCurve"]
