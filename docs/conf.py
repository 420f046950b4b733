# docs/conf.py
import os
import sys
from importlib.metadata import PackageNotFoundError, version

sys.path.insert(0, os.path.abspath(".."))

project = "peakfind"
copyright = "2026, peakfind developers"
author = "peakfind developers"
try:
    release = version("peakfind")
except PackageNotFoundError:
    release = "0.0.0"
version = ".".join(release.split(".")[:2])

extensions = [
    "myst_parser",
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.napoleon",           # NumPy docstrings
    "sphinx.ext.intersphinx",
    "sphinx.ext.viewcode",
    "sphinx.ext.doctest",
    "sphinx_autodoc_typehints",
]

autosummary_generate = True
html_theme = "sphinx_rtd_theme"
html_theme_options = {"collapse_navigation": False}

myst_enable_extensions = ["colon_fence", "deflist"]
source_suffix = [".rst", ".md"]
master_doc = "index"

exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "numpy": ("https://numpy.org/doc/stable/", None),
    "pandas": ("https://pandas.pydata.org/pandas-docs/stable/", None),
    "sklearn": ("https://scikit-learn.org/stable/", None),
}
