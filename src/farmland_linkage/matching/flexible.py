"""
Flexible (best-match) scoring for triage of ledger rows.

Unlike the deterministic linkage pass, this engine scores every pair on
independent criteria and keeps, per ledger row, the single best unclaimed
feature above a threshold:

    lot      full match +40 | base match +30 | fuzzy up to +20
    oaza     contained  +30 | allowed missing +10
    koaza    contained  +30 | fuzzy "字..." token up to +20

Scores come with human-readable reasons so a reviewer can see why a pair
was (or was not) accepted. Results are diagnostic only and never feed the
primary linkage table.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from farmland_linkage.core.exceptions import require_collection
from farmland_linkage.logging import get_logger
from farmland_linkage.matching.linkage import FeaturePriority, fragment_in_address, order_features
from farmland_linkage.matching.lot import parse_lot
from farmland_linkage.matching.similarity import calculate_similarity
from farmland_linkage.models import LedgerRow, RegistryFeature
from farmland_linkage.normalization.address import extract_subdistrict
from farmland_linkage.normalization.text import normalize_text

log = get_logger(__name__)


# ---------------------------------------------------------------------------
# Policy / options
# ---------------------------------------------------------------------------

def _known_fields(cls, data: Mapping[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in (data or {}).items() if k in names}


@dataclass(frozen=True, slots=True)
class MatchingOptions:
    allow_partial_chiban: bool = True   # fuzzy lot similarity
    allow_similar_koaza: bool = True    # fuzzy sub-district similarity
    allow_missing_oaza: bool = False    # partial credit without a district hit
    similarity_threshold: float = 0.8   # koaza similarity cutoff

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "MatchingOptions":
        return cls(**_known_fields(cls, data))


@dataclass(frozen=True, slots=True)
class ScoringPolicy:
    match_threshold: float = 50
    lot_full_points: float = 40
    lot_base_points: float = 30
    lot_fuzzy_points: float = 20
    lot_fuzzy_min_similarity: float = 0.7
    oaza_points: float = 30
    missing_oaza_points: float = 10
    koaza_points: float = 30
    koaza_fuzzy_points: float = 20
    match_empty_fragments: bool = True

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ScoringPolicy":
        return cls(**_known_fields(cls, data))


DEFAULT_MATCHING_OPTIONS = MatchingOptions()

# Permissive settings used when listing manual-review candidates
CANDIDATE_SEARCH_OPTIONS = replace(
    DEFAULT_MATCHING_OPTIONS,
    allow_partial_chiban=True,
    allow_similar_koaza=True,
    allow_missing_oaza=True,
    similarity_threshold=0.5,
)

DEFAULT_MAX_CANDIDATES = 10

# Reason labels
REASON_LOT_FULL = "lot exact match"
REASON_LOT_BASE = "lot base match"
REASON_LOT_SIMILAR = "lot similar"
REASON_OAZA = "oaza match"
REASON_OAZA_MISSING = "oaza missing allowed"
REASON_KOAZA = "koaza match"
REASON_KOAZA_SIMILAR = "koaza similar"
REASON_NO_MATCH = "no match"


def _percent(label: str, similarity: float) -> str:
    return f"{label} ({similarity * 100:.1f}%)"


def reason_label(reason: str) -> str:
    """Strip the percentage suffix: "koaza similar (85.0%)" -> "koaza similar"."""
    return reason.split(" (", 1)[0]


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class MatchScore:
    is_match: bool
    score: float
    reasons: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class BatchMatchEntry:
    row: LedgerRow
    feature: Optional[RegistryFeature] = None
    score: float = 0.0
    reasons: Tuple[str, ...] = ()

    @property
    def matched(self) -> bool:
        return self.feature is not None


@dataclass(frozen=True, slots=True)
class BatchMatchResult:
    results: Tuple[BatchMatchEntry, ...]
    total_rows: int
    matched_count: int
    match_rate: float


@dataclass(frozen=True, slots=True)
class Candidate:
    feature: RegistryFeature
    score: float
    reasons: Tuple[str, ...] = ()


@dataclass(slots=True)
class MatchAnalysis:
    score_distribution: Dict[str, int] = field(
        default_factory=lambda: {"perfect": 0, "high": 0, "medium": 0, "low": 0}
    )
    reason_counts: Dict[str, int] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class FlexibleLinkageEngine:
    def __init__(self, policy: Optional[ScoringPolicy] = None):
        self.policy = policy or ScoringPolicy()

    # -- single pair -------------------------------------------------------

    def score_match(
        self,
        feature: RegistryFeature,
        row: LedgerRow,
        options: MatchingOptions = DEFAULT_MATCHING_OPTIONS,
    ) -> MatchScore:
        p = self.policy
        address = normalize_text(feature.address)
        reasons: List[str] = []
        score = 0.0

        # 1. Lot number
        row_lot = parse_lot(normalize_text(row.lot))
        geo_lot = parse_lot(normalize_text(feature.tiban))

        if row_lot.full == geo_lot.full:
            score += p.lot_full_points
            reasons.append(REASON_LOT_FULL)
        elif row_lot.base == geo_lot.base:
            score += p.lot_base_points
            reasons.append(REASON_LOT_BASE)
        elif options.allow_partial_chiban:
            similarity = calculate_similarity(row_lot.full, geo_lot.full)
            if similarity > p.lot_fuzzy_min_similarity:
                score += p.lot_fuzzy_points * similarity
                reasons.append(_percent(REASON_LOT_SIMILAR, similarity))

        # 2. District
        oaza = normalize_text(row.oaza)
        if fragment_in_address(address, oaza, match_empty=p.match_empty_fragments):
            score += p.oaza_points
            reasons.append(REASON_OAZA)
        elif options.allow_missing_oaza:
            score += p.missing_oaza_points
            reasons.append(REASON_OAZA_MISSING)

        # 3. Sub-district
        koaza = normalize_text(row.koaza)
        if fragment_in_address(address, koaza, match_empty=p.match_empty_fragments):
            score += p.koaza_points
            reasons.append(REASON_KOAZA)
        elif options.allow_similar_koaza:
            extracted = extract_subdistrict(address)
            if extracted:
                similarity = calculate_similarity(koaza, normalize_text(extracted))
                if similarity > options.similarity_threshold:
                    score += p.koaza_fuzzy_points * similarity
                    reasons.append(_percent(REASON_KOAZA_SIMILAR, similarity))

        return MatchScore(
            is_match=score >= p.match_threshold,
            score=score,
            reasons=tuple(reasons),
        )

    # -- batch -------------------------------------------------------------

    def batch_match(
        self,
        features: Iterable[RegistryFeature],
        rows: Iterable[LedgerRow],
        options: MatchingOptions = DEFAULT_MATCHING_OPTIONS,
        *,
        priority: Optional[FeaturePriority] = None,
    ) -> BatchMatchResult:
        """
        Best unclaimed feature per ledger row, row-major.

        A feature claimed by an earlier row is invisible to later rows. Only a
        strictly higher score replaces the current best, so among equal scores
        the earlier feature (in ``priority`` order) wins.
        """
        require_collection(features, "features")
        require_collection(rows, "rows")

        ordered = order_features(features, priority)
        row_list = list(rows)
        claimed = set()
        results: List[BatchMatchEntry] = []

        log.info(
            "Flexible batch match starting: features=%d, ledger_rows=%d, options=%s",
            len(ordered), len(row_list), options,
        )

        for row in row_list:
            best: Optional[Candidate] = None

            for feature in ordered:
                if feature.daicho_id in claimed:
                    continue
                scored = self.score_match(feature, row, options)
                if scored.is_match and (best is None or scored.score > best.score):
                    best = Candidate(feature=feature, score=scored.score, reasons=scored.reasons)

            if best is not None:
                claimed.add(best.feature.daicho_id)
                results.append(
                    BatchMatchEntry(row=row, feature=best.feature, score=best.score, reasons=best.reasons)
                )
            else:
                results.append(BatchMatchEntry(row=row, reasons=(REASON_NO_MATCH,)))

        matched_count = sum(1 for r in results if r.matched)
        match_rate = (matched_count / len(row_list)) * 100 if row_list else 0.0

        log.info(
            "Flexible batch match complete: matched=%d/%d (%.1f%%)",
            matched_count, len(row_list), match_rate,
        )

        return BatchMatchResult(
            results=tuple(results),
            total_rows=len(row_list),
            matched_count=matched_count,
            match_rate=match_rate,
        )

    # -- manual review -------------------------------------------------------

    def find_candidates(
        self,
        row: LedgerRow,
        features: Iterable[RegistryFeature],
        max_candidates: int = DEFAULT_MAX_CANDIDATES,
        options: MatchingOptions = CANDIDATE_SEARCH_OPTIONS,
    ) -> List[Candidate]:
        """Every feature with a positive score, best first, for manual matching."""
        require_collection(features, "features")
        candidates: List[Candidate] = []

        for feature in features:
            scored = self.score_match(feature, row, options)
            if scored.score > 0:
                candidates.append(Candidate(feature=feature, score=scored.score, reasons=scored.reasons))

        candidates.sort(key=lambda c: c.score, reverse=True)
        return candidates[:max_candidates]


def analyze_results(results: Iterable[BatchMatchEntry]) -> MatchAnalysis:
    """
    Score distribution and reason counts over matched entries:

      perfect >= 90, high >= 70, medium >= 50, low otherwise
    """
    analysis = MatchAnalysis()
    reasons: Counter = Counter()

    for entry in results:
        if not entry.matched:
            continue
        if entry.score >= 90:
            analysis.score_distribution["perfect"] += 1
        elif entry.score >= 70:
            analysis.score_distribution["high"] += 1
        elif entry.score >= 50:
            analysis.score_distribution["medium"] += 1
        else:
            analysis.score_distribution["low"] += 1

        reasons.update(reason_label(r) for r in entry.reasons)

    analysis.reason_counts = dict(reasons)
    return analysis
