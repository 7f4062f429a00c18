# docs/conf.py  ── single source of truth
import os, sys
from importlib.metadata import version as pkg_version

# ── make your package importable ------------------------------------------------
sys.path.insert(0, os.path.abspath("../src"))  # src-layout package root

# ── project metadata ------------------------------------------------------------
project   = "ytpager"
author    = "ytpager contributors"
copyright = "2025, ytpager contributors"

# pull the actual package version so you never update this by hand
release = pkg_version("ytpager")               # e.g. 0.1.0
version = ".".join(release.split(".")[:2])     # 0.1

# ── Sphinx behaviour ------------------------------------------------------------
extensions = [
    "sphinx.ext.autodoc",      # enable .. automodule::, .. autoclass::, …
    "sphinx.ext.napoleon",     # Google-style docstrings
    "sphinx.ext.viewcode",     # add “[source]” links
    "sphinx.ext.autosummary",
    "myst_parser",             # README.md as the root page
]

templates_path   = ["_templates"]
exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]

# ── HTML output ----------------------------------------------------------
html_theme       = "sphinx_rtd_theme"
html_theme_options = {
    "collapse_navigation": False,
    "navigation_depth": 2,
}

autosummary_generate = True
autodoc_default_options = {
    "members": True,
    "show-inheritance": True,
}

root_doc = "README"
myst_heading_anchors = 2
