"""Tolerance utilities for knot comparisons.

Knot coincidences are never decided with exact floating-point equality. Two
values are considered equal when their absolute difference is below an
absolute tolerance or, failing that, when their difference relative to the
larger magnitude is below a relative tolerance. Both tolerances are bundled in
a :class:`KnotTolerance` and chosen per curve dtype from named presets.
"""

from typing import Any, Literal, NamedTuple

import numpy as np
from numpy import typing as npt

from ._knots_impl import _knots_equal_core

PresetName = Literal["default", "strict", "conservative"]


class _TolerancePreset(NamedTuple):
    """Tolerance values for each supported curve dtype."""

    float32: float
    float64: float


_ABSOLUTE_PRESETS = {
    "default": _TolerancePreset(1e-6, 1e-12),
    "strict": _TolerancePreset(1e-7, 1e-15),
    "conservative": _TolerancePreset(1e-5, 1e-10),
}

# Relative comparisons are one step tighter than the absolute ones.
_RELATIVE_PRESETS = {
    "default": _ABSOLUTE_PRESETS["strict"],
    "strict": _ABSOLUTE_PRESETS["strict"],
    "conservative": _ABSOLUTE_PRESETS["default"],
}


class KnotTolerance(NamedTuple):
    """Absolute and relative tolerances used to compare knot values.

    Attributes:
        absolute (float): Two values closer than this are equal.
        relative (float): Otherwise, two values whose difference divided by the
            larger magnitude does not exceed this are equal.
    """

    absolute: float
    relative: float


def _get_tolerance(dtype: npt.DTypeLike, preset: _TolerancePreset) -> float:
    """Get the tolerance value for a curve dtype from a preset.

    Raises:
        ValueError: If dtype is not float32 or float64.
    """
    dtype_obj = np.dtype(dtype)
    if dtype_obj == np.dtype(np.float32):
        return preset.float32
    elif dtype_obj == np.dtype(np.float64):
        return preset.float64
    raise ValueError(f"Unsupported dtype: {dtype_obj.name}")


def _get_preset(table: dict[str, _TolerancePreset], preset: str) -> _TolerancePreset:
    if preset not in table:
        raise ValueError(f"Unknown tolerance preset: {preset!r}")
    return table[preset]


def get_knot_tolerance(dtype: npt.DTypeLike, preset: PresetName = "default") -> KnotTolerance:
    """Get the knot comparison tolerances for a dtype.

    Args:
        dtype (npt.DTypeLike): Curve dtype, float32 or float64.
        preset (PresetName): One of ``"default"``, ``"strict"`` or
            ``"conservative"``. Defaults to ``"default"``.

    Returns:
        KnotTolerance: Absolute and relative tolerances for the dtype.

    Raises:
        ValueError: If dtype is not float32 or float64, or the preset is unknown.

    Example:
        >>> get_knot_tolerance(np.float64)
        KnotTolerance(absolute=1e-12, relative=1e-15)
        >>> get_knot_tolerance("float32", "conservative")
        KnotTolerance(absolute=1e-05, relative=1e-06)
    """
    return KnotTolerance(
        _get_tolerance(dtype, _get_preset(_ABSOLUTE_PRESETS, preset)),
        _get_tolerance(dtype, _get_preset(_RELATIVE_PRESETS, preset)),
    )


def _validate_knot_tolerance(tol: KnotTolerance) -> KnotTolerance:
    """Check that both tolerance components are positive.

    Raises:
        ValueError: If any component is not positive.
    """
    if not (tol.absolute > 0.0 and tol.relative > 0.0):
        raise ValueError("tol must be positive")
    return tol


def _resolve_knot_tolerance(tol: KnotTolerance | None, dtype: npt.DTypeLike) -> KnotTolerance:
    """Return ``tol`` validated, or the default preset for ``dtype`` if it is None."""
    if tol is None:
        return get_knot_tolerance(dtype)
    return _validate_knot_tolerance(KnotTolerance(float(tol[0]), float(tol[1])))


def knots_equal(
    x: float | np.floating[Any],
    y: float | np.floating[Any],
    tol: KnotTolerance | None = None,
) -> bool:
    """Check whether two knot values coincide up to tolerance.

    Args:
        x (float | np.floating): First value.
        y (float | np.floating): Second value.
        tol (KnotTolerance | None): Tolerances to use. If None, the default
            float64 preset is used.

    Returns:
        bool: True if the values are equal in the absolute or relative sense.

    Raises:
        ValueError: If any tolerance component is not positive.

    Example:
        >>> knots_equal(0.5, 0.5 + 1e-14)
        True
        >>> knots_equal(1.0e6, 1.0e6 + 1e-4)
        False
    """
    tol = _resolve_knot_tolerance(tol, np.float64)
    return bool(_knots_equal_core(float(x), float(y), tol.absolute, tol.relative))


__all__ = [
    "KnotTolerance",
    "PresetName",
    "get_knot_tolerance",
    "knots_equal",
]
