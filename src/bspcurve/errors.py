"""Exceptions raised by B-spline curve operations.

Domain errors derive from both :class:`BsplineError` and :class:`ValueError`,
so callers may catch either the library-specific base class or the standard
exception. Allocation failures derive from :class:`MemoryError` instead.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager


class BsplineError(Exception):
    """Base class for all B-spline curve errors."""


class InvalidDimensionError(BsplineError, ValueError):
    """The dimension of the control points is smaller than one."""


class DegreeTooHighError(BsplineError, ValueError):
    """The degree is not smaller than the number of control points."""


class MultiplicityExceededError(BsplineError, ValueError):
    """A knot multiplicity would exceed the order of the curve."""


class ParameterUndefinedError(BsplineError, ValueError):
    """The curve is not defined at the requested parameter."""


class AllocationFailureError(BsplineError, MemoryError):
    """Backing storage for a curve or De Boor net could not be obtained."""


@contextmanager
def allocation_guard(what: str) -> Iterator[None]:
    """Translate memory exhaustion inside the block into an :class:`AllocationFailureError`.

    Args:
        what (str): Short description of the storage being allocated, used in
            the error message.

    Raises:
        AllocationFailureError: If a ``MemoryError`` is raised inside the block.
    """
    try:
        yield
    except AllocationFailureError:
        raise
    except MemoryError as exc:
        raise AllocationFailureError(f"unable to allocate {what}") from exc


__all__ = [
    "AllocationFailureError",
    "BsplineError",
    "DegreeTooHighError",
    "InvalidDimensionError",
    "MultiplicityExceededError",
    "ParameterUndefinedError",
    "allocation_guard",
]
