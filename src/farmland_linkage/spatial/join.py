"""
Point-in-polygon join of registry features against boundary polygons.

Boundary policy: a point lying exactly on a polygon's ring is NOT inside
(shapely ``contains`` semantics). For each feature the first polygon in load
order that contains it is attached and the scan stops.

Rings that cannot be evaluated (too few vertices, non-finite coordinates,
self-intersections) are skipped with a warning; they never stop the join.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Tuple

from shapely.errors import GEOSException
from shapely.geometry import Point, Polygon
from shapely.prepared import PreparedGeometry, prep
from shapely.validation import explain_validity

from farmland_linkage.core.exceptions import require_collection
from farmland_linkage.logging import get_logger
from farmland_linkage.models import (
    BoundaryPolygon,
    RegistryFeature,
    SpatialJoinEntry,
    SpatialJoinResult,
)

log = get_logger(__name__)


def build_geometry(polygon: BoundaryPolygon) -> Tuple[Optional[Polygon], Optional[str]]:
    """
    Build a shapely polygon from a ring.

    Returns (geometry, None) when the ring can be tested for containment,
    else (None, reason).
    """
    ring: List[Tuple[float, float]] = []
    for vertex in polygon.ring or ():
        # Extra ordinates (e.g. z) are ignored
        try:
            lng, lat = float(vertex[0]), float(vertex[1])
        except (TypeError, ValueError, IndexError) as exc:
            return None, f"bad coordinate {vertex!r}: {exc}"
        if not (math.isfinite(lng) and math.isfinite(lat)):
            return None, "non-finite coordinate"
        ring.append((lng, lat))

    if len(set(ring)) < 3:
        return None, f"degenerate ring ({len(set(ring))} distinct vertices)"

    try:
        geom = Polygon(ring)
    except (ValueError, TypeError, GEOSException) as exc:
        return None, f"unbuildable ring: {exc}"

    if geom.is_empty:
        return None, "empty geometry"
    if not geom.is_valid:
        return None, explain_validity(geom)

    return geom, None


class SpatialJoinEngine:
    """First-match-wins point-in-polygon join. Stateless between calls."""

    def _prepare(
        self, polygons: Iterable[BoundaryPolygon]
    ) -> Tuple[List[Tuple[BoundaryPolygon, PreparedGeometry]], List[Tuple[str, str]]]:
        usable: List[Tuple[BoundaryPolygon, PreparedGeometry]] = []
        skipped: List[Tuple[str, str]] = []

        for polygon in polygons:
            geom, reason = build_geometry(polygon)
            if geom is None:
                log.warning("Invalid polygon skipped: %s (%s)", polygon.polygon_uuid, reason)
                skipped.append((polygon.polygon_uuid, reason))
                continue
            usable.append((polygon, prep(geom)))

        return usable, skipped

    def join(
        self,
        features: Iterable[RegistryFeature],
        polygons: Iterable[BoundaryPolygon],
    ) -> SpatialJoinResult:
        require_collection(features, "features")
        require_collection(polygons, "polygons")

        feature_list = list(features)
        usable, skipped = self._prepare(polygons)

        log.info(
            "Spatial join starting: features=%d, polygons=%d, skipped_polygons=%d",
            len(feature_list), len(usable) + len(skipped), len(skipped),
        )

        entries: List[SpatialJoinEntry] = []
        for feature in feature_list:
            point = Point(feature.longitude, feature.latitude)
            matched: Optional[BoundaryPolygon] = None

            for polygon, geom in usable:
                try:
                    if geom.contains(point):
                        matched = polygon
                        break
                except GEOSException as exc:
                    log.warning(
                        "Containment test failed for polygon %s, feature %s: %s",
                        polygon.polygon_uuid, feature.daicho_id, exc,
                    )

            entries.append(SpatialJoinEntry(daicho_id=feature.daicho_id, polygon=matched))

        result = SpatialJoinResult(entries=tuple(entries), skipped_polygons=tuple(skipped))
        log.info(
            "Spatial join complete: %d/%d features matched with polygons",
            result.attached_count, len(feature_list),
        )
        return result


def spatial_join(
    features: Iterable[RegistryFeature],
    polygons: Iterable[BoundaryPolygon],
) -> SpatialJoinResult:
    return SpatialJoinEngine().join(features, polygons)
