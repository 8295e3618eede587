"""Test if version is handled correctly."""

import tomllib
from pathlib import Path

from version import __version__


def read_version_from_pyproject():
    """Read version from pyproject.toml file."""
    pyproject = Path(__file__).parents[2] / "pyproject.toml"
    with open(pyproject, "rb") as fin:
        return tomllib.load(fin)["project"]["version"]


def test_version_handling():
    """Test how version is handled by the project."""
    source_version = __version__
    project_version = read_version_from_pyproject()
    assert (
        source_version == project_version
    ), f"Source version {source_version} != project version {project_version}"
