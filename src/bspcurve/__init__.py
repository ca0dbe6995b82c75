"""Public API surface for bspcurve.

Defines package metadata and exported interfaces.
"""

from typing import Final

# Private API imports (accessible but not in __all__)
# Users can access private functions via: bspcurve._de_boor_impl._function_name, etc.
from . import (
    _de_boor_impl,  # noqa: F401
    _knots_impl,  # noqa: F401
)

# Public API imports
from .bezier import to_bezier_segments
from .bspline_curve import BsplineCurve
from .buckling import buckle
from .de_boor import DeBoorCase, DeBoorNet, evaluate
from .errors import (
    AllocationFailureError,
    BsplineError,
    DegreeTooHighError,
    InvalidDimensionError,
    MultiplicityExceededError,
    ParameterUndefinedError,
)
from .knot_insertion import insert_knot
from .knots import (
    KnotStyle,
    create_clamped_knot_vector,
    create_knot_vector,
    create_opened_knot_vector,
)
from .splitting import SplitCase, SplitResult, split
from .tolerance import KnotTolerance, get_knot_tolerance, knots_equal

# Package metadata
__version__: Final[str] = "0.1.0"
__license__: Final[str] = "MIT"
__author__: Final[str] = "bspcurve developers"

# Public interface: only functions/classes that don't start with _
__all__ = [
    "AllocationFailureError",
    "BsplineCurve",
    "BsplineError",
    "DeBoorCase",
    "DeBoorNet",
    "DegreeTooHighError",
    "InvalidDimensionError",
    "KnotStyle",
    "KnotTolerance",
    "MultiplicityExceededError",
    "ParameterUndefinedError",
    "SplitCase",
    "SplitResult",
    "__author__",
    "__license__",
    "__version__",
    "buckle",
    "create_clamped_knot_vector",
    "create_knot_vector",
    "create_opened_knot_vector",
    "evaluate",
    "get_knot_tolerance",
    "insert_knot",
    "knots_equal",
    "split",
    "to_bezier_segments",
]
