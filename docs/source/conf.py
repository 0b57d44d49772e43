# Sphinx configuration for the Intelligent Valet docs.
#
# Build with:  sphinx-build -b html docs/source docs/build

import os
import sys

# project root holds config.py, main.py and the valet / ui packages
sys.path.insert(0, os.path.abspath("../.."))

project = "Intelligent Valet"
copyright = "2026, Valet Team"
author = "Valet Team"
release = "0.1"

# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",   # numpy-style docstrings
    "sphinx.ext.viewcode",
    "sphinx_rtd_dark_mode",
]

templates_path = ["_templates"]
exclude_patterns = ["**/test_*"]

# -- HTML output -------------------------------------------------------------

html_theme = "sphinx_rtd_theme"
default_dark_mode = True
html_static_path = ["_static"]

# the window and the server are not needed to read the docstrings
autodoc_mock_imports = ["pygame", "uvicorn"]
