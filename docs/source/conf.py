import os
import sys

# Configuration file for the Sphinx documentation builder.
#

# -- Project information -----------------------------------------------------

project = "expect-changes"
copyright = "2024, expect-changes contributors"
author = "expect-changes contributors"

sys.path.insert(0, os.path.abspath("../.."))

# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.intersphinx",
    "sphinx.ext.autodoc",
    "sphinx_autodoc_typehints",
]

always_document_param_types = True

intersphinx_mapping = {"python": ("https://docs.python.org/3", None)}

# List of patterns, relative to source directory, that match files and
# directories to ignore when looking for source files.
exclude_patterns = ["build"]

pygments_style = "sphinx"

source_suffix = ".rst"

# -- Options for HTML output -------------------------------------------------

html_theme = "sphinx_rtd_theme"
