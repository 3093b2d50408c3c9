"""
Matching engines for registry features and ledger rows.

- lot:        lot-number parsing and equality (LotMatcher)
- similarity: normalized Levenshtein similarity (SimilarityScorer)
- linkage:    deterministic all-match pass (RecordLinkageEngine)
- flexible:   scored best-match triage (FlexibleLinkageEngine)
"""

from .flexible import (
    CANDIDATE_SEARCH_OPTIONS,
    DEFAULT_MATCHING_OPTIONS,
    FlexibleLinkageEngine,
    MatchingOptions,
    ScoringPolicy,
    analyze_results,
)
from .linkage import RecordLinkageEngine, link_records
from .lot import ParsedLot, compose_lot, lots_equal, parse_lot
from .similarity import calculate_similarity, edit_distance, normalized_similarity

__all__ = [
    "CANDIDATE_SEARCH_OPTIONS",
    "DEFAULT_MATCHING_OPTIONS",
    "FlexibleLinkageEngine",
    "MatchingOptions",
    "ParsedLot",
    "RecordLinkageEngine",
    "ScoringPolicy",
    "analyze_results",
    "calculate_similarity",
    "compose_lot",
    "edit_distance",
    "link_records",
    "lots_equal",
    "normalized_similarity",
    "parse_lot",
]
