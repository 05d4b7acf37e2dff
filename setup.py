import pathlib
import re
import sys

from setuptools import setup

if sys.version_info < (3, 8):
    raise RuntimeError("rhmethods requires Python 3.8+")


HERE = pathlib.Path(__file__).parent
txt = (HERE / "rhmethods" / "__init__.py").read_text("utf-8")
try:
    version = re.findall(r'^__version__ = "([^\']+)"\r?$', txt, re.M)[0]
except IndexError:
    raise RuntimeError("Unable to determine version.")


def get_long_description() -> str:
    readme = HERE / "README.md"
    with readme.open("r") as f:
        return f.read()


setup(
    name="rhmethods",
    version=version,
    description="Typed Robinhood API method builders with an asynchronous transport",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    packages=["rhmethods"],
    classifiers=[
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
    ],
    license="MIT",
    keywords=["robinhood", "asyncio", "python3", "stocks"],
    install_requires=["aiohttp>=3.8,<4.0", "yarl>=1.6,<2.0"],
    extras_require={
        "dev": [
            "black",
            "flake8",
            "isort",
            "mypy",
            "pytest",
            "pytest-aiohttp",
            "pytest-asyncio",
            "pytest-cov",
        ],
        "docs": ["sphinx", "sphinx-autodoc-typehints"],
    },
    python_requires=">=3.8",
)
