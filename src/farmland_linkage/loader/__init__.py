"""
Public interface for the input loaders.

    from farmland_linkage.loader import (
        load_features,
        load_polygons,
        load_ledger_csv,
        parse_ledger_csv,
    )
"""

from __future__ import annotations

from .file_loader import read_json, read_text, strip_bom
from .geojson import (
    feature_from_geojson,
    features_from_geojson,
    load_features,
    load_polygons,
    polygons_from_geojson,
)
from .ledger import load_ledger_csv, parse_ledger_csv, row_from_fields

__all__ = [
    "feature_from_geojson",
    "features_from_geojson",
    "load_features",
    "load_ledger_csv",
    "load_polygons",
    "parse_ledger_csv",
    "polygons_from_geojson",
    "read_json",
    "read_text",
    "row_from_fields",
    "strip_bom",
]
