"""Tests for the exception hierarchy and allocation guard."""

from __future__ import annotations

import pytest

from bspcurve.errors import (
    AllocationFailureError,
    BsplineError,
    DegreeTooHighError,
    InvalidDimensionError,
    MultiplicityExceededError,
    ParameterUndefinedError,
    allocation_guard,
)


class TestHierarchy:
    """Test suite for the exception classes."""

    @pytest.mark.parametrize(
        "error",
        [
            InvalidDimensionError,
            DegreeTooHighError,
            MultiplicityExceededError,
            ParameterUndefinedError,
        ],
    )
    def test_domain_errors(self, error: type[BsplineError]) -> None:
        """Domain errors are both BsplineErrors and ValueErrors."""
        assert issubclass(error, BsplineError)
        assert issubclass(error, ValueError)

    def test_allocation_failure(self) -> None:
        """Allocation failures are MemoryErrors, not ValueErrors."""
        assert issubclass(AllocationFailureError, BsplineError)
        assert issubclass(AllocationFailureError, MemoryError)
        assert not issubclass(AllocationFailureError, ValueError)


class TestAllocationGuard:
    """Test suite for allocation_guard."""

    def test_passes_through(self) -> None:
        """The block result is unaffected when nothing fails."""
        with allocation_guard("nothing"):
            value = 1
        assert value == 1

    def test_translates_memory_error(self) -> None:
        """A MemoryError becomes an AllocationFailureError chained to it."""
        with pytest.raises(AllocationFailureError, match="unable to allocate test storage") as info:
            with allocation_guard("test storage"):
                raise MemoryError
        assert isinstance(info.value.__cause__, MemoryError)

    def test_nested_guards_keep_inner_message(self) -> None:
        """An AllocationFailureError raised by an inner guard is not rewrapped."""
        with pytest.raises(AllocationFailureError, match="inner"):
            with allocation_guard("outer"):
                with allocation_guard("inner"):
                    raise MemoryError

    def test_other_errors_propagate(self) -> None:
        """Errors other than MemoryError are left alone."""
        with pytest.raises(ValueError, match="boom"):
            with allocation_guard("test storage"):
                raise ValueError("boom")

    def test_evaluation_allocation(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Memory exhaustion while building a De Boor net surfaces as AllocationFailureError."""
        from bspcurve import de_boor
        from bspcurve.bspline_curve import BsplineCurve

        def _fail(*_args: object) -> None:
            raise MemoryError

        curve = BsplineCurve(2, [0.0, 1.0, 2.0, 3.0], [0.0, 0.0, 0.0, 0.5, 1.0, 1.0, 1.0])
        monkeypatch.setattr(de_boor, "_compute_de_Boor_net_impl", _fail)
        with pytest.raises(AllocationFailureError, match="De Boor net"):
            de_boor.evaluate(curve, 0.25)
