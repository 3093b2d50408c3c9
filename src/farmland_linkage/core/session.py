"""
Per-session data holder.

A session owns the three datasets of one working session (registry features,
ledger rows, boundary polygons) and the derived linkage / join tables. Every
operation returns a new immutable ``SessionSnapshot``; nothing is updated in
place, and ``reset`` starts over from an empty snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Tuple

from farmland_linkage.logging import get_logger
from farmland_linkage.matching.linkage import RecordLinkageEngine
from farmland_linkage.models import (
    BoundaryPolygon,
    LedgerRow,
    LinkageResult,
    RegistryFeature,
    SpatialJoinResult,
)
from farmland_linkage.spatial.join import SpatialJoinEngine
from farmland_linkage.stats.aggregator import (
    FarmlandDetails,
    OrganizationStatistics,
    Statistics,
    compute_statistics,
    farmland_details,
    organization_statistics,
)

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    features: Tuple[RegistryFeature, ...] = ()
    rows: Tuple[LedgerRow, ...] = ()
    polygons: Tuple[BoundaryPolygon, ...] = ()
    linkage: Optional[LinkageResult] = None
    spatial: Optional[SpatialJoinResult] = None

    @property
    def is_empty(self) -> bool:
        return not (self.features or self.rows or self.polygons)

    def _linkage_or_empty(self) -> LinkageResult:
        if self.linkage is not None:
            return self.linkage
        # No ledger yet: every feature is unlinked
        return RecordLinkageEngine().link(self.features, ())

    def statistics(self) -> Statistics:
        return compute_statistics(self.features, self._linkage_or_empty(), total_rows=len(self.rows))

    def organization_statistics(self) -> List[OrganizationStatistics]:
        return organization_statistics(self.features, self._linkage_or_empty())

    def details(self, daicho_id: str, sakki: Optional[str] = None) -> Optional[FarmlandDetails]:
        return farmland_details(self.features, self._linkage_or_empty(), daicho_id, sakki)

    def is_linked(self, daicho_id: str) -> bool:
        return self.linkage is not None and self.linkage.is_linked(daicho_id)

    def linked_features(self) -> List[RegistryFeature]:
        return [f for f in self.features if self.is_linked(f.daicho_id)]

    def unlinked_features(self) -> List[RegistryFeature]:
        return [f for f in self.features if not self.is_linked(f.daicho_id)]

    def polygon_for(self, daicho_id: str) -> Optional[BoundaryPolygon]:
        return self.spatial.polygon_for(daicho_id) if self.spatial else None


class LinkageSession:
    """
    Explicit replacement for a process-wide data store.

    ``load`` replaces the datasets it is given wholesale and re-runs the
    linkage when both features and ledger rows are present. The spatial join
    is deferred until ``join`` is called.
    """

    def __init__(
        self,
        engine: Optional[RecordLinkageEngine] = None,
        spatial_engine: Optional[SpatialJoinEngine] = None,
    ):
        self.engine = engine or RecordLinkageEngine()
        self.spatial_engine = spatial_engine or SpatialJoinEngine()
        self._snapshot = SessionSnapshot()

    @property
    def snapshot(self) -> SessionSnapshot:
        return self._snapshot

    def load(
        self,
        features: Optional[Iterable[RegistryFeature]] = None,
        rows: Optional[Iterable[LedgerRow]] = None,
        polygons: Optional[Iterable[BoundaryPolygon]] = None,
    ) -> SessionSnapshot:
        snap = self._snapshot
        changes = {}

        if features is not None:
            changes["features"] = tuple(features)
            changes["spatial"] = None
        if rows is not None:
            changes["rows"] = tuple(rows)
        if polygons is not None:
            changes["polygons"] = tuple(polygons)
            changes["spatial"] = None

        snap = replace(snap, **changes)

        if features is not None or rows is not None:
            if snap.features and snap.rows:
                snap = replace(snap, linkage=self.engine.link(snap.features, snap.rows))
            else:
                snap = replace(snap, linkage=None)

        log.info(
            "Session loaded: features=%d, ledger_rows=%d, polygons=%d",
            len(snap.features), len(snap.rows), len(snap.polygons),
        )
        self._snapshot = snap
        return snap

    def join(self) -> SessionSnapshot:
        """Run the spatial join if it has not been run for the current data."""
        snap = self._snapshot
        if snap.spatial is None and snap.features and snap.polygons:
            snap = replace(snap, spatial=self.spatial_engine.join(snap.features, snap.polygons))
            self._snapshot = snap
        elif not snap.polygons:
            log.info("Spatial join not executed: no polygons loaded")
        return snap

    def reset(self) -> SessionSnapshot:
        self._snapshot = SessionSnapshot()
        log.info("Session reset")
        return self._snapshot
