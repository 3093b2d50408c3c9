"""
Aggregate statistics over a linkage result.

"Linked" parcels are registry features with at least one matched ledger row
(parcels farmed by a collective organization); the rest are "unlinked".
Registered areas are the integer square metres of ``AreaOnRegistry``.

Empty denominators never raise: percentages and rates come back as 0.0.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from farmland_linkage.core.exceptions import require_collection
from farmland_linkage.logging import get_logger
from farmland_linkage.models import LedgerRow, LinkageResult, RegistryFeature

log = get_logger(__name__)

_LEADING_INT_RE = re.compile(r"^\s*([+-]?[0-9]+)")

# Display colours assigned to organizations in first-seen order
ORGANIZATION_COLORS: Tuple[str, ...] = (
    "#0066CC",
    "#FF6600",
    "#9966CC",
    "#FF9900",
    "#CC0066",
    "#00CCAA",
    "#6633FF",
    "#FF3366",
)

SQM_PER_TSUBO = 3.306
SQM_PER_TAN = 991.74


@dataclass(frozen=True, slots=True)
class Bucket:
    count: int
    area: int
    percentage: float


@dataclass(frozen=True, slots=True)
class Statistics:
    total: int
    linked: Bucket
    unlinked: Bucket
    ledger_rows: int
    match_rate: float


@dataclass(frozen=True, slots=True)
class OrganizationStatistics:
    organization_name: str
    count: int
    area: int
    color: str


@dataclass(frozen=True, slots=True)
class FarmlandDetails:
    feature: RegistryFeature
    is_linked: bool
    ownership: Optional[LedgerRow] = None
    ownership_list: Tuple[LedgerRow, ...] = ()


def parse_area(raw) -> int:
    """Leading integer of a registry area string; anything else counts as 0."""
    if raw is None:
        return 0
    m = _LEADING_INT_RE.match(str(raw))
    return int(m.group(1)) if m else 0


def _percentage(part: int, whole: int) -> float:
    return (part / whole) * 100 if whole else 0.0


def compute_statistics(
    features: Iterable[RegistryFeature],
    result: LinkageResult,
    total_rows: Optional[int] = None,
) -> Statistics:
    """
    Counts, areas and percentages of linked vs unlinked features, plus the
    ledger match rate (unique consumed keys / ledger rows x 100).
    """
    require_collection(features, "features")
    if total_rows is None:
        total_rows = result.summary.total_rows

    total = 0
    linked_count = linked_area = 0
    unlinked_count = unlinked_area = 0

    for feature in features:
        total += 1
        area = parse_area(feature.area_on_registry)
        if result.is_linked(feature.daicho_id):
            linked_count += 1
            linked_area += area
        else:
            unlinked_count += 1
            unlinked_area += area

    stats = Statistics(
        total=total,
        linked=Bucket(linked_count, linked_area, _percentage(linked_count, total)),
        unlinked=Bucket(unlinked_count, unlinked_area, _percentage(unlinked_count, total)),
        ledger_rows=total_rows,
        match_rate=_percentage(len(result.consumed_keys), total_rows),
    )
    log.debug("Statistics computed: %s", stats)
    return stats


def organization_colors(result: LinkageResult) -> Dict[str, str]:
    """Organization -> colour, cycling the palette in first-seen order."""
    colors: Dict[str, str] = {}
    for entry in result.entries:
        org = entry.organization_name
        if org is not None and org not in colors:
            colors[org] = ORGANIZATION_COLORS[len(colors) % len(ORGANIZATION_COLORS)]
    return colors


def organization_statistics(
    features: Iterable[RegistryFeature],
    result: LinkageResult,
) -> List[OrganizationStatistics]:
    """
    Parcel count and registered area per organization.

    A parcel is credited to the organization of its first matched row.
    """
    require_collection(features, "features")
    colors = organization_colors(result)
    counts: Dict[str, List[int]] = {org: [0, 0] for org in colors}

    for feature in features:
        rows = result.rows_for(feature.daicho_id)
        if not rows:
            continue
        tally = counts.get(rows[0].organization_name)
        if tally is not None:
            tally[0] += 1
            tally[1] += parse_area(feature.area_on_registry)

    return [
        OrganizationStatistics(organization_name=org, count=c, area=a, color=colors[org])
        for org, (c, a) in counts.items()
    ]


def farmland_details(
    features: Iterable[RegistryFeature],
    result: LinkageResult,
    daicho_id: str,
    sakki: Optional[str] = None,
) -> Optional[FarmlandDetails]:
    """
    Details for one parcel. With ``sakki`` the row for that season is picked,
    otherwise the first matched row. Unknown ids return None.
    """
    feature = next((f for f in features if f.daicho_id == daicho_id), None)
    if feature is None:
        return None

    rows = result.rows_for(daicho_id)
    if sakki:
        ownership = next((r for r in rows if r.sakki == sakki), None)
    else:
        ownership = rows[0] if rows else None

    return FarmlandDetails(
        feature=feature,
        is_linked=bool(rows),
        ownership=ownership,
        ownership_list=rows,
    )


def format_area(raw) -> str:
    """
    Human-readable registered area:

      < 1,000 ㎡   -> "850㎡ (257.1坪)"
      < 10,000 ㎡  -> "2500㎡ (2.52反)"
      otherwise    -> "1.234ha"
    """
    m = _LEADING_INT_RE.match(str(raw)) if raw is not None else None
    if not m:
        return "不明"

    area = int(m.group(1))
    if area < 1000:
        return f"{area}㎡ ({area / SQM_PER_TSUBO:.1f}坪)"
    if area < 10000:
        return f"{area}㎡ ({area / SQM_PER_TAN:.2f}反)"
    return f"{area / 10000:.3f}ha"
