"""
Record linkage between registry point features and ledger rows.

This module implements the deterministic (all-match) linkage pass:

- Lot-number equality as a hard pre-filter (after normalization)
- District / sub-district substring containment against the registry address
- Every candidate row is attached to the feature (one row per season)
- A ledger row is consumed by its uniqueness key the first time it matches;
  later features never see it again

Processing order is significant: earlier features claim rows first. Callers
that need a different priority pass an explicit ``priority`` key.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Set

from farmland_linkage.core.exceptions import require_collection
from farmland_linkage.logging import get_logger
from farmland_linkage.matching.lot import compose_lot, lots_equal, parse_lot
from farmland_linkage.models import (
    LedgerRow,
    LinkageEntry,
    LinkageResult,
    LinkageSummary,
    RegistryFeature,
    UniquenessKey,
)
from farmland_linkage.normalization.text import normalize_text

log = get_logger(__name__)

FeaturePriority = Callable[[RegistryFeature], Any]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def fragment_in_address(address: str, fragment: str, *, match_empty: bool = True) -> bool:
    """
    Substring containment of an (already normalized) address fragment.

    An empty fragment is contained in every string, as with plain ``in``.
    Passing ``match_empty=False`` makes a blank fragment never match.
    """
    if not fragment:
        return match_empty
    return fragment in address


def order_features(
    features: Iterable[RegistryFeature],
    priority: Optional[FeaturePriority] = None,
) -> List[RegistryFeature]:
    """Input order, or a stable sort by ``priority`` when one is given."""
    ordered = list(features)
    if priority is not None:
        ordered.sort(key=priority)
    return ordered


@dataclass(frozen=True, slots=True)
class _PreparedRow:
    row: LedgerRow
    key: UniquenessKey
    oaza: str
    koaza: str


def _prepare_rows(rows: List[LedgerRow]) -> Dict[str, List[_PreparedRow]]:
    """Bucket rows by normalized full lot, keeping ledger order in each bucket."""
    buckets: Dict[str, List[_PreparedRow]] = {}
    for row in rows:
        lot = parse_lot(normalize_text(compose_lot(row.chiban, row.edaban))).full
        buckets.setdefault(lot, []).append(
            _PreparedRow(
                row=row,
                key=row.uniqueness_key,
                oaza=normalize_text(row.oaza),
                koaza=normalize_text(row.koaza),
            )
        )
    return buckets


def _match_rate(consumed: int, total: int) -> float:
    return (consumed / total) * 100 if total else 0.0


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class RecordLinkageEngine:
    """
    All-match linkage engine.

    A row is a candidate for a feature iff the lots are equal after
    normalization AND the normalized address contains the normalized oaza or
    koaza. A blank oaza or koaza is contained in every address, so such rows
    link on the lot alone unless ``match_empty_fragments`` is False.
    Stateless between calls: every ``link`` returns a fresh result.
    """

    def __init__(self, match_empty_fragments: bool = True):
        self.match_empty_fragments = match_empty_fragments

    def is_candidate(self, feature: RegistryFeature, row: LedgerRow) -> bool:
        """Matching policy for a single pair, ignoring consumption."""
        if not lots_equal(feature.tiban, row.lot):
            return False

        address = normalize_text(feature.address)
        return self._address_matches(address, normalize_text(row.oaza), normalize_text(row.koaza))

    def _address_matches(self, address: str, oaza: str, koaza: str) -> bool:
        return (
            fragment_in_address(address, oaza, match_empty=self.match_empty_fragments)
            or fragment_in_address(address, koaza, match_empty=self.match_empty_fragments)
        )

    def link(
        self,
        features: Iterable[RegistryFeature],
        rows: Iterable[LedgerRow],
        *,
        priority: Optional[FeaturePriority] = None,
    ) -> LinkageResult:
        """
        Link every feature to all of its unconsumed candidate rows.

        ``priority`` fixes the order in which features claim rows; by default
        the iteration order of ``features`` is used.
        """
        require_collection(features, "features")
        require_collection(rows, "rows")

        ordered = order_features(features, priority)
        row_list = list(rows)
        buckets = _prepare_rows(row_list)

        log.info(
            "Record linkage starting: features=%d, ledger_rows=%d, lot_buckets=%d",
            len(ordered), len(row_list), len(buckets),
        )

        consumed: Set[UniquenessKey] = set()
        entries: List[LinkageEntry] = []
        unmatched_features: List[RegistryFeature] = []

        for feature in ordered:
            lot = parse_lot(normalize_text(feature.tiban)).full
            address = normalize_text(feature.address)
            matched: List[LedgerRow] = []

            for prepared in buckets.get(lot, ()):
                if prepared.key in consumed:
                    continue
                if self._address_matches(address, prepared.oaza, prepared.koaza):
                    matched.append(prepared.row)
                    consumed.add(prepared.key)

            if matched:
                entries.append(LinkageEntry(daicho_id=feature.daicho_id, rows=tuple(matched)))
                log.debug(
                    "Feature %s (lot=%s) linked to %d row(s)",
                    feature.daicho_id, lot, len(matched),
                )
            else:
                unmatched_features.append(feature)

        unmatched_rows = tuple(r for r in row_list if r.uniqueness_key not in consumed)

        summary = LinkageSummary(
            total_features=len(ordered),
            total_rows=len(row_list),
            matched_features=len(entries),
            unique_row_matches=len(consumed),
            consumed_rows=len(row_list) - len(unmatched_rows),
            match_rate=_match_rate(len(consumed), len(row_list)),
        )

        log.info(
            "Record linkage complete: matched_features=%d/%d, unique_row_matches=%d/%d, match_rate=%.1f%%",
            summary.matched_features, summary.total_features,
            summary.unique_row_matches, summary.total_rows,
            summary.match_rate,
        )

        return LinkageResult(
            entries=tuple(entries),
            unmatched_features=tuple(unmatched_features),
            unmatched_rows=unmatched_rows,
            consumed_keys=frozenset(consumed),
            summary=summary,
        )


def link_records(
    features: Iterable[RegistryFeature],
    rows: Iterable[LedgerRow],
    *,
    priority: Optional[FeaturePriority] = None,
) -> LinkageResult:
    """Convenience wrapper: one pass with the default engine."""
    return RecordLinkageEngine().link(features, rows, priority=priority)
