"""
GeoJSON loading for registry point features and boundary polygons.

Registry features come from a point FeatureCollection whose properties carry
the registry fields (``DaichoId``, ``Address``, ``Tiban``, ``AreaOnRegistry``,
``ClassificationOfLandCodeName``, ...). Boundary polygons come from a Polygon
FeatureCollection identified by ``polygon_uuid``.

Entries that cannot be turned into records are skipped with a warning.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from farmland_linkage.core.exceptions import LoadError
from farmland_linkage.loader.file_loader import read_json
from farmland_linkage.logging import get_logger
from farmland_linkage.models import BoundaryPolygon, Coordinate, RegistryFeature

log = get_logger(__name__)

# Registry property names -> RegistryFeature fields
REGISTRY_FIELDS: Dict[str, str] = {
    "Address": "address",
    "Tiban": "tiban",
    "AreaOnRegistry": "area_on_registry",
    "ClassificationOfLandCodeName": "land_class",
    "FarmerIndicationNumberHash": "farmer_hash",
}


def _feature_list(data: Any) -> List[Any]:
    if not isinstance(data, Mapping):
        raise LoadError("GeoJSON root must be an object")
    if data.get("type") == "Feature":
        return [data]
    features = data.get("features")
    if not isinstance(features, list):
        raise LoadError("GeoJSON FeatureCollection has no 'features' list")
    return features


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _coordinate(raw: Sequence[Any]) -> Coordinate:
    return (float(raw[0]), float(raw[1]))


# -----------------------------
# Registry features
# -----------------------------

def feature_from_geojson(item: Mapping[str, Any]) -> Optional[RegistryFeature]:
    props = item.get("properties") or {}
    geometry = item.get("geometry") or {}

    daicho_id = props.get("DaichoId")
    if daicho_id in (None, ""):
        return None
    if geometry.get("type") != "Point":
        return None

    try:
        lng, lat = _coordinate(geometry.get("coordinates") or ())
    except (TypeError, ValueError, IndexError):
        return None

    values = {attr: _text(props.get(key)) for key, attr in REGISTRY_FIELDS.items()}
    extra = {k: v for k, v in props.items() if k not in REGISTRY_FIELDS and k != "DaichoId"}

    return RegistryFeature(
        daicho_id=str(daicho_id),
        longitude=lng,
        latitude=lat,
        properties=extra,
        **values,
    )


def features_from_geojson(data: Any) -> List[RegistryFeature]:
    features: List[RegistryFeature] = []
    skipped = 0

    for index, item in enumerate(_feature_list(data)):
        feature = feature_from_geojson(item) if isinstance(item, Mapping) else None
        if feature is None:
            skipped += 1
            log.warning("Registry feature #%d skipped: not a point feature with a DaichoId", index)
            continue
        features.append(feature)

    log.info("Registry features loaded: %d (skipped=%d)", len(features), skipped)
    return features


def load_features(path: Union[str, Path]) -> List[RegistryFeature]:
    return features_from_geojson(read_json(path))


# -----------------------------
# Boundary polygons
# -----------------------------

def _outer_ring(geometry: Mapping[str, Any]) -> Tuple[Optional[Sequence[Any]], Optional[str]]:
    gtype = geometry.get("type")
    coords = geometry.get("coordinates") or []

    if gtype == "Polygon":
        return (coords[0] if coords else None), None
    if gtype == "MultiPolygon":
        if len(coords) != 1:
            return None, f"MultiPolygon with {len(coords)} parts"
        return (coords[0][0] if coords[0] else None), None
    return None, f"unsupported geometry type {gtype!r}"


def polygon_from_geojson(item: Mapping[str, Any], index: int) -> Tuple[Optional[BoundaryPolygon], Optional[str]]:
    props = dict(item.get("properties") or {})
    polygon_uuid = props.get("polygon_uuid") or item.get("id") or f"polygon-{index}"

    ring, reason = _outer_ring(item.get("geometry") or {})
    if ring is None:
        return None, reason or "missing ring"

    try:
        vertices = tuple(_coordinate(c) for c in ring)
    except (TypeError, ValueError, IndexError) as exc:
        return None, f"bad coordinate: {exc}"

    return BoundaryPolygon(polygon_uuid=str(polygon_uuid), ring=vertices, properties=props), None


def polygons_from_geojson(data: Any) -> List[BoundaryPolygon]:
    polygons: List[BoundaryPolygon] = []

    for index, item in enumerate(_feature_list(data)):
        if not isinstance(item, Mapping):
            log.warning("Polygon #%d skipped: not a GeoJSON feature", index)
            continue
        polygon, reason = polygon_from_geojson(item, index)
        if polygon is None:
            log.warning("Polygon #%d skipped: %s", index, reason)
            continue
        polygons.append(polygon)

    log.info("Boundary polygons loaded: %d", len(polygons))
    return polygons


def load_polygons(path: Union[str, Path]) -> List[BoundaryPolygon]:
    return polygons_from_geojson(read_json(path))
