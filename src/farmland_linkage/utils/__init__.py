# src/farmland_linkage/utils/__init__.py

from .pathing import (
    outputs_path,
    project_root,
    resolve_project_path,
    tests_data_path,
)

__all__ = [
    "outputs_path",
    "project_root",
    "resolve_project_path",
    "tests_data_path",
]
