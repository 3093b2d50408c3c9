from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple


Coordinate = Tuple[float, float]

# Fields making up the consumption token of a ledger row
UniquenessKey = Tuple[str, str, str, str, str, str]


# -----------------------------
# Source records
# -----------------------------

@dataclass(frozen=True, slots=True)
class RegistryFeature:
    """
    One authoritative farmland parcel (a point feature of the registry).

    Coordinates are WGS84 decimal degrees in (longitude, latitude) order,
    matching GeoJSON.
    """
    daicho_id: str
    longitude: float
    latitude: float
    address: str = ""
    tiban: str = ""
    area_on_registry: str = ""
    land_class: str = ""
    farmer_hash: str = ""

    # Remaining GeoJSON properties, kept verbatim
    properties: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def point(self) -> Coordinate:
        return (self.longitude, self.latitude)


@dataclass(frozen=True, slots=True)
class LedgerRow:
    """
    One ownership/cultivation record from the ledger CSV.

    Rows are keyed only by free-text address fragments; ``sakki`` marks the
    cultivation season ("1" or "2") the row describes.
    """
    organization_name: str
    full_address: str
    oaza: str
    koaza: str
    chiban: str
    edaban: Optional[str] = None
    bunkatsu1: Optional[str] = None
    bunkatsu2: Optional[str] = None
    sakki: Optional[str] = None
    crop: Optional[str] = None
    variety: Optional[str] = None

    @property
    def lot(self) -> str:
        """Lot number with the sub-lot appended: ``chiban`` or ``chiban-edaban``."""
        return f"{self.chiban}-{self.edaban}" if self.edaban else self.chiban

    @property
    def uniqueness_key(self) -> UniquenessKey:
        return (
            self.organization_name,
            self.oaza,
            self.koaza,
            self.chiban,
            self.edaban or "",
            self.sakki or "",
        )


@dataclass(frozen=True, slots=True)
class BoundaryPolygon:
    polygon_uuid: str
    ring: Tuple[Coordinate, ...]
    properties: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)


# -----------------------------
# Linkage output
# -----------------------------

@dataclass(frozen=True, slots=True)
class LinkageEntry:
    daicho_id: str
    rows: Tuple[LedgerRow, ...]

    @property
    def organization_name(self) -> Optional[str]:
        # Seasons of one parcel share the organization of the first row
        return self.rows[0].organization_name if self.rows else None


@dataclass(frozen=True, slots=True)
class LinkageSummary:
    total_features: int
    total_rows: int
    matched_features: int
    unique_row_matches: int
    consumed_rows: int
    match_rate: float


@dataclass(frozen=True, slots=True)
class LinkageResult:
    """
    Output of one RecordLinkageEngine pass.

    ``entries`` follows feature processing order. ``consumed_keys`` holds the
    uniqueness keys credited to some feature during the pass.
    """
    entries: Tuple[LinkageEntry, ...]
    unmatched_features: Tuple[RegistryFeature, ...]
    unmatched_rows: Tuple[LedgerRow, ...]
    consumed_keys: frozenset
    summary: LinkageSummary
    _index: Dict[str, LinkageEntry] = field(
        default_factory=dict, init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "_index", {e.daicho_id: e for e in self.entries})

    def __iter__(self) -> Iterator[LinkageEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def table(self) -> Dict[str, Tuple[LedgerRow, ...]]:
        """The linkage table: daicho id -> matched rows (a fresh dict)."""
        return {e.daicho_id: e.rows for e in self.entries}

    def rows_for(self, daicho_id: str) -> Tuple[LedgerRow, ...]:
        entry = self._index.get(daicho_id)
        return entry.rows if entry else ()

    def is_linked(self, daicho_id: str) -> bool:
        return daicho_id in self._index


# -----------------------------
# Spatial join output
# -----------------------------

@dataclass(frozen=True, slots=True)
class SpatialJoinEntry:
    daicho_id: str
    polygon: Optional[BoundaryPolygon] = None


@dataclass(frozen=True, slots=True)
class SpatialJoinResult:
    entries: Tuple[SpatialJoinEntry, ...]
    skipped_polygons: Tuple[Tuple[str, str], ...] = ()
    _index: Dict[str, SpatialJoinEntry] = field(
        default_factory=dict, init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "_index", {e.daicho_id: e for e in self.entries})

    def __iter__(self) -> Iterator[SpatialJoinEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def attached_count(self) -> int:
        return sum(1 for e in self.entries if e.polygon is not None)

    def polygon_for(self, daicho_id: str) -> Optional[BoundaryPolygon]:
        entry = self._index.get(daicho_id)
        return entry.polygon if entry else None
