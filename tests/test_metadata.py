"""Smoke tests for package metadata.

Validates public attributes exposed via the package API.
"""

from __future__ import annotations

import ast
import importlib
from pathlib import Path
from typing import Final

import bspcurve

DOCS_PATH: Final[Path] = Path(__file__).resolve().parent.parent / "docs"


def test_package_all_exports() -> None:
    """Ensure all expected symbols are exported."""
    expected_metadata: Final[set[str]] = {"__version__", "__license__", "__author__"}
    assert expected_metadata.issubset(set(bspcurve.__all__))

    expected_public_api: Final[set[str]] = {
        # Curve
        "BsplineCurve",
        "KnotStyle",
        "create_clamped_knot_vector",
        "create_knot_vector",
        "create_opened_knot_vector",
        # Operations
        "DeBoorCase",
        "DeBoorNet",
        "SplitCase",
        "SplitResult",
        "buckle",
        "evaluate",
        "insert_knot",
        "split",
        "to_bezier_segments",
        # Errors
        "AllocationFailureError",
        "BsplineError",
        "DegreeTooHighError",
        "InvalidDimensionError",
        "MultiplicityExceededError",
        "ParameterUndefinedError",
        # Tolerance
        "KnotTolerance",
        "get_knot_tolerance",
        "knots_equal",
    }

    assert expected_public_api.issubset(set(bspcurve.__all__))

    # Only metadata may start with an underscore
    private_in_all = {name for name in bspcurve.__all__ if name.startswith("_")}
    assert private_in_all.issubset(expected_metadata)

    assert set(bspcurve.__all__) == expected_metadata | expected_public_api
    for name in bspcurve.__all__:
        assert hasattr(bspcurve, name)


def test_package_metadata_values() -> None:
    """Validate the package metadata constants."""
    assert bspcurve.__version__ == "0.1.0"
    assert bspcurve.__license__ == "MIT"
    assert bspcurve.__author__ == "bspcurve developers"


def test_metadata_import_stability() -> None:
    """Verify metadata survives module reloads."""
    module = importlib.reload(bspcurve)
    assert module.__version__ == "0.1.0"


def test_docs_config_has_no_template_paths() -> None:
    """The Sphinx config sets no template or static paths; docs/ has neither directory."""
    tree = ast.parse((DOCS_PATH / "conf.py").read_text(encoding="utf-8"))
    assigned = {
        target.id
        for node in ast.walk(tree)
        if isinstance(node, ast.Assign)
        for target in node.targets
        if isinstance(target, ast.Name)
    }
    assert not assigned & {"templates_path", "html_static_path"}
    assert not (DOCS_PATH / "_templates").exists()
    assert not (DOCS_PATH / "_static").exists()


def test_docs_api_modules_import() -> None:
    """Every module listed in the API summary can be imported."""
    lines = (DOCS_PATH / "index.md").read_text(encoding="utf-8").splitlines()
    modules = [line.strip() for line in lines if line.strip().startswith("bspcurve.")]
    assert modules
    for name in modules:
        importlib.import_module(name)
