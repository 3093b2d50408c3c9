# src/farmland_linkage/utils/pathing.py

from __future__ import annotations

from pathlib import Path
from typing import Union


# This file lives at:
#   <project_root>/src/farmland_linkage/utils/pathing.py
#
#   [0] .../src/farmland_linkage/utils
#   [1] .../src/farmland_linkage
#   [2] .../src
#   [3] .../ (project root)
_PROJECT_ROOT = Path(__file__).resolve().parents[3]


def project_root() -> Path:
    """
    Return the absolute path to the project root directory (the one holding
    src/, tests/ and config/).
    """
    return _PROJECT_ROOT


def resolve_project_path(relative: Union[str, Path]) -> Path:
    """
    Resolve a path relative to the project root.

    Examples:
        resolve_project_path("config/farmland_linkage.yml")
        resolve_project_path(Path("tests") / "data" / "ledger.csv")
    """
    return project_root() / Path(relative)


def outputs_path(*parts: Union[str, Path]) -> Path:
    """Return a path under the top-level outputs/ directory."""
    return resolve_project_path(Path("outputs") / Path(*parts))


def tests_data_path(*parts: Union[str, Path]) -> Path:
    """
    Return the absolute path to a file under tests/data/.

    Examples:
        tests_data_path("registry.geojson")
    """
    return resolve_project_path(Path("tests") / "data" / Path(*parts))
