"""Knot vector generation utilities for B-spline curves.

This module provides the two uniform knot vector styles a curve can be created
with: opened knot vectors, uniformly spaced over all knots, and clamped knot
vectors, whose first and last knots are repeated (degree+1) times.
"""

from enum import Enum
from typing import Any, cast

import numpy as np
import numpy.typing as npt

from .errors import DegreeTooHighError


class KnotStyle(Enum):
    """Enumeration of generated knot vector styles.

    Attributes:
        OPENED (KnotStyle): Uniformly spaced knots over the whole vector. The
            curve does not interpolate its first and last control points.
        CLAMPED (KnotStyle): First and last knots repeated (degree+1) times,
            uniformly spaced interior knots. The curve interpolates its first
            and last control points.
    """

    OPENED = "opened"
    CLAMPED = "clamped"


def _validate_knot_input(num_control_points: int, degree: int) -> None:
    """Validate the size parameters of a generated knot vector.

    Args:
        num_control_points (int): Number of control points of the curve.
        degree (int): Curve degree.

    Raises:
        ValueError: If degree is negative.
        DegreeTooHighError: If degree is not smaller than the number of control points.
    """
    if degree < 0:
        raise ValueError("degree must be non-negative")

    if degree >= num_control_points:
        raise DegreeTooHighError(
            f"degree must be smaller than the number of control points. "
            f"Got degree {degree} and {num_control_points} control points."
        )


def _get_domain_and_dtype(
    domain: tuple[float | np.floating[Any], float | np.floating[Any]] | None,
    dtype: npt.DTypeLike | None,
) -> tuple[np.floating[Any], np.floating[Any], np.dtype[np.floating[Any]]]:
    """Resolve the domain ends and dtype of a generated knot vector.

    Args:
        domain (tuple[float, float] | None): Domain boundaries as (start, end).
            Defaults to (0.0, 1.0).
        dtype (npt.DTypeLike | None): Requested dtype. If None, it is inferred
            from floating numpy domain values or defaults to float64.

    Returns:
        tuple[np.floating, np.floating, np.dtype]: Tuple of (start, end, dtype).

    Raises:
        ValueError: If the dtype is not float32/float64 or if end <= start.
    """
    start_raw, end_raw = (0.0, 1.0) if domain is None else domain

    if dtype is None:
        dtype = start_raw.dtype if isinstance(start_raw, np.floating) else np.float64

    dtype_obj = np.dtype(dtype)
    if dtype_obj not in (np.dtype(np.float32), np.dtype(np.float64)):
        raise ValueError("dtype must be float32 or float64")
    dtype_obj = cast(np.dtype[np.floating[Any]], dtype_obj)

    start, end = dtype_obj.type(start_raw), dtype_obj.type(end_raw)
    if start >= end:
        raise ValueError("domain[0] must be less than domain[1]")

    return start, end, dtype_obj


def create_opened_knot_vector(
    num_control_points: int,
    degree: int,
    domain: tuple[float | np.floating[Any], float | np.floating[Any]] | None = None,
    dtype: npt.DTypeLike | None = None,
) -> npt.NDArray[np.float32 | np.float64]:
    """Create an opened knot vector.

    All ``num_control_points + degree + 1`` knots are uniformly spaced over
    the domain, so the first and last knots have multiplicity one.

    Args:
        num_control_points (int): Number of control points of the curve.
        degree (int): Curve degree. Must be non-negative and smaller than
            ``num_control_points``.
        domain (tuple[float, float] | None): Span of the knot vector as
            (start, end). Defaults to (0.0, 1.0).
        dtype (npt.DTypeLike | None): Data type for the knot vector.
            If None, inferred from the domain or defaults to float64.

    Returns:
        npt.NDArray[np.float32 | np.float64]: Opened knot vector.

    Raises:
        ValueError: If degree is negative, the domain is empty or the dtype
            is not float32/float64.
        DegreeTooHighError: If degree is not smaller than num_control_points.

    Example:
        >>> create_opened_knot_vector(3, 1)
        array([0.  , 0.25, 0.5 , 0.75, 1.  ])
    """
    _validate_knot_input(num_control_points, degree)
    start, end, dtype_obj = _get_domain_and_dtype(domain, dtype)

    num_knots = num_control_points + degree + 1
    return np.linspace(start, end, num_knots, dtype=dtype_obj)


def create_clamped_knot_vector(
    num_control_points: int,
    degree: int,
    domain: tuple[float | np.floating[Any], float | np.floating[Any]] | None = None,
    dtype: npt.DTypeLike | None = None,
) -> npt.NDArray[np.float32 | np.float64]:
    """Create a clamped knot vector.

    The first and last knots are repeated (degree+1) times, ensuring the
    curve interpolates the first and last control points. Interior knots are
    uniformly spaced and simple.

    Args:
        num_control_points (int): Number of control points of the curve.
        degree (int): Curve degree. Must be non-negative and smaller than
            ``num_control_points``.
        domain (tuple[float, float] | None): Domain boundaries as (start, end).
            Defaults to (0.0, 1.0).
        dtype (npt.DTypeLike | None): Data type for the knot vector.
            If None, inferred from the domain or defaults to float64.

    Returns:
        npt.NDArray[np.float32 | np.float64]: Clamped knot vector.

    Raises:
        ValueError: If degree is negative, the domain is empty or the dtype
            is not float32/float64.
        DegreeTooHighError: If degree is not smaller than num_control_points.

    Example:
        >>> create_clamped_knot_vector(4, 2)
        array([0. , 0. , 0. , 0.5, 1. , 1. , 1. ])
    """
    _validate_knot_input(num_control_points, degree)
    start, end, dtype_obj = _get_domain_and_dtype(domain, dtype)

    num_intervals = num_control_points - degree
    unique_knots = np.linspace(start, end, num_intervals + 1, dtype=dtype_obj)

    return np.concatenate(
        [
            np.full(degree + 1, start, dtype=dtype_obj),
            unique_knots[1:-1],
            np.full(degree + 1, end, dtype=dtype_obj),
        ]
    )


def create_knot_vector(
    num_control_points: int,
    degree: int,
    knot_style: KnotStyle,
    domain: tuple[float | np.floating[Any], float | np.floating[Any]] | None = None,
    dtype: npt.DTypeLike | None = None,
) -> npt.NDArray[np.float32 | np.float64]:
    """Create a uniform knot vector of the given style.

    Args:
        num_control_points (int): Number of control points of the curve.
        degree (int): Curve degree.
        knot_style (KnotStyle): Style of the generated knot vector.
        domain (tuple[float, float] | None): Domain boundaries as (start, end).
            Defaults to (0.0, 1.0).
        dtype (npt.DTypeLike | None): Data type for the knot vector.

    Returns:
        npt.NDArray[np.float32 | np.float64]: The generated knot vector.

    Raises:
        ValueError: If any parameter is invalid.
        DegreeTooHighError: If degree is not smaller than num_control_points.
    """
    if knot_style is KnotStyle.OPENED:
        return create_opened_knot_vector(num_control_points, degree, domain, dtype)
    elif knot_style is KnotStyle.CLAMPED:
        return create_clamped_knot_vector(num_control_points, degree, domain, dtype)
    raise ValueError(f"Unknown knot style: {knot_style!r}")


__all__ = [
    "KnotStyle",
    "create_clamped_knot_vector",
    "create_knot_vector",
    "create_opened_knot_vector",
]
