# Configuration file for the Sphinx documentation builder.
#
# https://www.sphinx-doc.org/en/master/usage/configuration.html

import pathlib
import re

import aiohttp.client

# -- Module Remapping --------------------------------------------------------

aiohttp.client.ClientSession.__module__ = "aiohttp"


# -- Project information -----------------------------------------------------

HERE = pathlib.Path(__file__).parent.parent
txt = (HERE / "rhmethods" / "__init__.py").read_text("utf-8")
try:
    version = re.findall(r'^__version__ = "([^\']+)"\r?$', txt, re.M)[0]
except IndexError:
    raise RuntimeError("Unable to determine version.")

project = "rhmethods"
copyright = "2020, rhmethods contributors"
author = "rhmethods contributors"
release = version


# -- General configuration ---------------------------------------------------

# Set whether module names are prepended to all object names.
add_module_names = False

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.intersphinx",
    "sphinx.ext.napoleon",
    "sphinx_autodoc_typehints",
]

exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]


# -- Intersphinx configuration -----------------------------------------------

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "aiohttp": ("https://docs.aiohttp.org/en/stable/", None),
    "yarl": ("https://yarl.readthedocs.io/en/stable/", None),
}


# -- Options for HTML output -------------------------------------------------

html_theme = "alabaster"
html_theme_options = {
    "description": "Typed Robinhood API methods with an asynchronous transport",
}
