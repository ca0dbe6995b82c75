"""De Boor net kernels and triangular table index helpers.

The De Boor net of a general-case evaluation is stored as a 2D array whose
rows are the points of a triangular table: row 0 holds the ``N`` affected
control points, row ``r`` holds ``N - r`` points obtained by blending
consecutive points of row ``r - 1``, and the last row holds the single
evaluated point. The helpers below are the only places where offsets into that
table are computed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from ._knots_impl import nb_jit

if TYPE_CHECKING:
    from .bspline_curve import BsplineCurve


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
)
def _tabulate_de_Boor_net_core(
    control_points: npt.NDArray[np.float32 | np.float64],
    knots: npt.NDArray[np.float32 | np.float64],
    degree: int,
    u: float,
    k: int,
    s: int,
    out: npt.NDArray[np.float32 | np.float64],
) -> None:
    """Core implementation of De Boor's algorithm, writing the full table to ``out``.

    Args:
        control_points (npt.NDArray[np.float32 | np.float64]): Curve control
            points, shape (num_control_points, dimension).
        knots (npt.NDArray[np.float32 | np.float64]): Curve knot vector.
        degree (int): Curve degree.
        u (float): Evaluation parameter.
        k (int): Index of the knot span containing ``u``.
        s (int): Multiplicity of ``u``. Must be smaller than degree+1.
        out (npt.NDArray[np.float32 | np.float64]): Output array with shape
            (N*(N+1)/2, dimension), where ``N = degree - s + 1``.

    Note:
        This is a Numba-compiled function optimized for performance. It
        expects pre-validated inputs: the window ``[k-degree, k-s]`` must lie
        within the control points and ``out`` must have the correct shape (no
        validation performed inside this numba-compiled function).
        For general use, call _compute_de_Boor_net_impl instead.
    """
    n_affected = degree - s + 1
    first = k - degree
    dim = control_points.shape[1]

    out[:n_affected, :] = control_points[first : first + n_affected, :]

    left = 0
    to = n_affected
    for r in range(1, degree - s + 1):
        for i in range(first + r, k - s + 1):
            ui = knots[i]
            a = (u - ui) / (knots[i + degree - r + 1] - ui)
            for d in range(dim):
                out[to, d] = (1.0 - a) * out[left, d] + a * out[left + 1, d]
            left += 1
            to += 1
        # The last point of the previous row has no right neighbour.
        left += 1


def _get_num_points(num_affected: int) -> int:
    """Number of points in a triangular table whose first row has ``num_affected`` points."""
    return num_affected * (num_affected + 1) // 2


def _get_row_offset(num_affected: int, row: int) -> int:
    """Index of the first point of ``row`` in the flattened triangular table.

    Row ``num_affected`` is accepted and maps to the end of the table, so that
    an empty row can be sliced.

    Raises:
        IndexError: If ``row`` is outside ``[0, num_affected]``.
    """
    if not 0 <= row <= num_affected:
        raise IndexError(f"row {row} out of range for a table with {num_affected} rows")
    return row * num_affected - row * (row - 1) // 2


def _get_row(
    points: npt.NDArray[np.float32 | np.float64], num_affected: int, row: int
) -> npt.NDArray[np.float32 | np.float64]:
    """View of the ``num_affected - row`` points of ``row``."""
    offset = _get_row_offset(num_affected, row)
    return points[offset : offset + num_affected - row]


def _get_left_diagonal(
    points: npt.NDArray[np.float32 | np.float64], num_affected: int, count: int
) -> npt.NDArray[np.float32 | np.float64]:
    """First points of rows ``0, ..., count-1``, in that order.

    Raises:
        IndexError: If ``count`` is outside ``[0, num_affected]``.
    """
    if not 0 <= count <= num_affected:
        raise IndexError(f"diagonal of length {count} out of range for {num_affected} rows")
    ids = [_get_row_offset(num_affected, row) for row in range(count)]
    return points[np.array(ids, dtype=np.int_)]


def _get_right_diagonal(
    points: npt.NDArray[np.float32 | np.float64], num_affected: int, count: int
) -> npt.NDArray[np.float32 | np.float64]:
    """Last points of rows ``count-1, ..., 0``, in that order.

    The order matches the order in which the points appear as control points
    to the right of the evaluated parameter.

    Raises:
        IndexError: If ``count`` is outside ``[0, num_affected]``.
    """
    if not 0 <= count <= num_affected:
        raise IndexError(f"diagonal of length {count} out of range for {num_affected} rows")
    ids = [
        _get_row_offset(num_affected, row) + num_affected - row - 1
        for row in reversed(range(count))
    ]
    return points[np.array(ids, dtype=np.int_)]


def _compute_de_Boor_net_impl(
    curve: BsplineCurve, u: float, k: int, s: int
) -> npt.NDArray[np.float32 | np.float64]:
    """Allocate and fill the De Boor table of a general-case evaluation.

    Args:
        curve (BsplineCurve): Curve to evaluate.
        u (float): Evaluation parameter.
        k (int): Index of the knot span containing ``u``.
        s (int): Multiplicity of ``u``, smaller than the curve order.

    Returns:
        npt.NDArray[np.float32 | np.float64]: Table with shape
            (N*(N+1)/2, dimension), ``N = degree - s + 1``.
    """
    num_affected = curve.degree - s + 1
    out = np.empty((_get_num_points(num_affected), curve.dimension), dtype=curve.dtype)
    _tabulate_de_Boor_net_core(curve.control_points, curve.knots, curve.degree, u, k, s, out)
    return out


def _warmup_numba_functions() -> None:
    """Precompile numba functions with float64 signatures for faster first call."""
    control_points_dummy = np.array([[0.0], [1.0], [2.0], [3.0]], dtype=np.float64)
    knots_dummy = np.array([0.0, 0.0, 0.0, 0.5, 1.0, 1.0, 1.0], dtype=np.float64)
    out_dummy = np.empty((3, 1), dtype=np.float64)
    _tabulate_de_Boor_net_core(control_points_dummy, knots_dummy, 2, 0.5, 3, 1, out_dummy)


# Precompile numba functions on module import (skip during type checking)
if not TYPE_CHECKING:
    _warmup_numba_functions()


__all__ = [
    "_compute_de_Boor_net_impl",
    "_get_left_diagonal",
    "_get_num_points",
    "_get_right_diagonal",
    "_get_row",
    "_get_row_offset",
    "_tabulate_de_Boor_net_core",
]
