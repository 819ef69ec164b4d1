"""Sphinx configuration for the Linesman documentation."""

from __future__ import annotations

import os
import sys
from datetime import datetime
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as package_version

# Ensure the project root is discoverable for autodoc imports of the namespace packages.
PROJECT_ROOT = os.path.abspath(os.path.join(__file__, "..", ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

project = "Linesman Match Officiating"
author = "WelshDragon"
copyright = f"{datetime.now():%Y}, {author}"

try:
    version = package_version("linesman")
except PackageNotFoundError:
    version = "0.1.0"
release = version

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
]

autosummary_generate = True
autodoc_mock_imports = ["pygame"]

templates_path = ["_templates"]
exclude_patterns: list[str] = ["_build", "Thumbs.db", ".DS_Store"]

html_theme = "sphinx_rtd_theme"

autodoc_typehints = "description"
napoleon_google_docstring = False
napoleon_numpy_docstring = True
