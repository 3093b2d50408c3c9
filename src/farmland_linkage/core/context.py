from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class RunContext:
    """
    State of one linkage run, handed from ``main.run`` to ``LinkagePipeline``.

    ``stats`` receives the headline numbers (features, linked, ledger_rows,
    match_rate and, after a join, polygons_attached). ``errors`` collects the
    ``(polygon_uuid, reason)`` pairs of boundary polygons skipped by the join.
    """

    config: Any
    logger: Any

    features_path: Optional[str] = None
    ledger_path: Optional[str] = None
    polygons_path: Optional[str] = None
    output_path: Optional[str] = None

    stats: Dict[str, Any] = field(default_factory=dict)
    errors: list = field(default_factory=list)

    debug: bool = False
