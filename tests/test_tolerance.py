"""Tests for tolerance utilities."""

from __future__ import annotations

from typing import Any, cast

import numpy as np
import pytest

from bspcurve.tolerance import (
    KnotTolerance,
    PresetName,
    _resolve_knot_tolerance,
    get_knot_tolerance,
    knots_equal,
)

DEFAULT_TOL_F32: float = 1e-6
DEFAULT_TOL_F64: float = 1e-12

STRICT_TOL_F32: float = 1e-7
STRICT_TOL_F64: float = 1e-15

CONSERVATIVE_TOL_F32: float = 1e-5
CONSERVATIVE_TOL_F64: float = 1e-10


class TestKnotTolerance:
    """Test suite for the absolute/relative knot tolerance presets."""

    def test_default_float64(self) -> None:
        """The default float64 preset pairs the default and strict tables."""
        tol = get_knot_tolerance(np.float64)
        assert tol == KnotTolerance(DEFAULT_TOL_F64, STRICT_TOL_F64)
        assert tol.absolute == DEFAULT_TOL_F64
        assert tol.relative == STRICT_TOL_F64

    def test_default_float32(self) -> None:
        """The float32 preset is looser than the float64 one."""
        assert get_knot_tolerance("float32") == KnotTolerance(DEFAULT_TOL_F32, STRICT_TOL_F32)

    def test_strict(self) -> None:
        """Strict preset uses the strict table for both components."""
        assert get_knot_tolerance(np.float64, "strict") == KnotTolerance(
            STRICT_TOL_F64, STRICT_TOL_F64
        )

    def test_conservative(self) -> None:
        """Conservative preset relaxes both components."""
        assert get_knot_tolerance(np.float64, "conservative") == KnotTolerance(
            CONSERVATIVE_TOL_F64, DEFAULT_TOL_F64
        )

    @pytest.mark.parametrize(
        ("dtype", "preset", "expected"),
        [
            (np.float32, "default", (DEFAULT_TOL_F32, STRICT_TOL_F32)),
            (np.float32, "strict", (STRICT_TOL_F32, STRICT_TOL_F32)),
            (np.float32, "conservative", (CONSERVATIVE_TOL_F32, DEFAULT_TOL_F32)),
            ("float64", "default", (DEFAULT_TOL_F64, STRICT_TOL_F64)),
            ("float64", "strict", (STRICT_TOL_F64, STRICT_TOL_F64)),
            ("float64", "conservative", (CONSERVATIVE_TOL_F64, DEFAULT_TOL_F64)),
        ],
    )
    def test_presets(
        self, dtype: Any, preset: PresetName, expected: tuple[float, float]
    ) -> None:
        """Every preset is defined for both curve dtypes."""
        assert get_knot_tolerance(dtype, preset) == KnotTolerance(*expected)

    def test_accepts_dtype_objects(self) -> None:
        """np.dtype instances work like scalar types and names."""
        assert get_knot_tolerance(np.dtype(np.float32)) == get_knot_tolerance("float32")

    def test_unknown_preset(self) -> None:
        """Reject preset names outside the table."""
        with pytest.raises(ValueError, match="Unknown tolerance preset"):
            get_knot_tolerance(np.float64, cast(Any, "loose"))

    @pytest.mark.parametrize("dtype", [np.int64, np.float16, np.complex64])
    def test_invalid_dtype(self, dtype: Any) -> None:
        """Only the curve dtypes have knot tolerances."""
        with pytest.raises(ValueError, match="Unsupported dtype"):
            get_knot_tolerance(dtype)

    def test_resolve_none_uses_dtype_default(self) -> None:
        """A missing tolerance resolves to the dtype default."""
        assert _resolve_knot_tolerance(None, np.float32) == get_knot_tolerance(np.float32)

    def test_resolve_accepts_plain_tuples(self) -> None:
        """Any pair of positive numbers is accepted and normalized to floats."""
        tol = _resolve_knot_tolerance(cast(KnotTolerance, (1, 2)), np.float64)
        assert isinstance(tol, KnotTolerance)
        assert tol == KnotTolerance(1.0, 2.0)

    @pytest.mark.parametrize(
        "tol",
        [KnotTolerance(0.0, 1e-12), KnotTolerance(1e-12, 0.0), KnotTolerance(-1.0, 1.0)],
    )
    def test_resolve_rejects_non_positive(self, tol: KnotTolerance) -> None:
        """Both components must be positive."""
        with pytest.raises(ValueError, match="tol must be positive"):
            _resolve_knot_tolerance(tol, np.float64)


class TestKnotsEqual:
    """Test suite for tolerant knot comparison."""

    def test_identical(self) -> None:
        """Equal values compare equal."""
        assert knots_equal(0.25, 0.25)
        assert knots_equal(0.0, 0.0)

    def test_absolute(self) -> None:
        """Differences below the absolute tolerance are ignored."""
        assert knots_equal(0.5, 0.5 + 1e-13)
        assert not knots_equal(0.5, 0.5 + 1e-9)

    def test_relative(self) -> None:
        """Large values fall back on the relative comparison."""
        big = 1.0e6
        assert knots_equal(big, np.nextafter(big, 2.0 * big))
        assert not knots_equal(big, big + 1e-4)

    def test_absolute_is_strict_inequality(self) -> None:
        """A difference equal to the absolute tolerance is not absorbed by it."""
        tol = KnotTolerance(0.5, 1e-15)
        assert not knots_equal(0.0, 0.5, tol)
        assert knots_equal(0.0, 0.25, tol)

    def test_relative_is_inclusive(self) -> None:
        """A relative difference equal to the relative tolerance counts as equal."""
        tol = KnotTolerance(1e-12, 0.5)
        assert knots_equal(1.0, 2.0, tol)
        assert not knots_equal(1.0, 2.5, tol)

    def test_numpy_scalars(self) -> None:
        """NumPy scalars are accepted."""
        assert knots_equal(np.float32(0.5), np.float64(0.5))

    def test_symmetric(self) -> None:
        """The comparison does not depend on the argument order."""
        tol = KnotTolerance(1e-3, 1e-3)
        for x, y in [(1.0, 1.0005), (3.0, 3.01), (100.0, 100.05)]:
            assert knots_equal(x, y, tol) == knots_equal(y, x, tol)

    def test_invalid_tolerance(self) -> None:
        """Non-positive tolerances are rejected."""
        with pytest.raises(ValueError, match="tol must be positive"):
            knots_equal(0.0, 0.0, KnotTolerance(0.0, 0.0))
