"""Sphinx configuration for the bspcurve documentation.

Loads the package from ``src`` for its version, then sets up autodoc with
Google-style docstrings and the Read the Docs theme.
"""

from __future__ import annotations

import importlib.util
import sys
import warnings
from datetime import date
from pathlib import Path
from typing import Final

PROJECT_ROOT: Final[Path] = Path(__file__).resolve().parent.parent
SRC_PATH: Final[Path] = PROJECT_ROOT / "src"

sys.path.insert(0, str(SRC_PATH))

bspcurve_spec = importlib.util.spec_from_file_location(
    "bspcurve", SRC_PATH / "bspcurve" / "__init__.py"
)
if bspcurve_spec is None or bspcurve_spec.loader is None:
    msg = f"Unable to locate bspcurve package at {SRC_PATH / 'bspcurve' / '__init__.py'}"
    raise ImportError(msg)
bspcurve = importlib.util.module_from_spec(bspcurve_spec)
sys.modules["bspcurve"] = bspcurve
bspcurve_spec.loader.exec_module(bspcurve)
CURRENT_YEAR: Final[int] = date.today().year

project = "bspcurve"
author = "bspcurve developers"
copyright = f"{CURRENT_YEAR}, bspcurve developers"  # pylint: disable=redefined-builtin

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "sphinx.ext.intersphinx",
    "myst_parser",
]

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "numpy": ("https://numpy.org/doc/stable", None),
}

exclude_patterns: list[str] = ["_build", "Thumbs.db", ".DS_Store"]

source_suffix = {
    ".rst": "restructuredtext",
    ".md": "markdown",
}

master_doc = "index"

napoleon_google_docstring = True
napoleon_numpy_docstring = False
napoleon_include_init_with_doc = True
napoleon_attr_annotations = True

autosummary_generate = True
autodoc_typehints = "description"
autodoc_member_order = "bysource"

html_theme = "sphinx_rtd_theme"
try:
    if importlib.util.find_spec("sphinx_rtd_theme") is None:
        raise ImportError
except (ImportError, ModuleNotFoundError):
    warnings.warn(
        "sphinx_rtd_theme not found. Falling back to 'alabaster'.",
        stacklevel=1,
    )
    html_theme = "alabaster"

if html_theme == "sphinx_rtd_theme":
    html_theme_options = {
        "collapse_navigation": False,
        "navigation_depth": 3,
    }

version = bspcurve.__version__
release = bspcurve.__version__
