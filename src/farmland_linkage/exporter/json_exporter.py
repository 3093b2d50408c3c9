"""
json_exporter.py
Structured JSON exporter for session snapshots.

This exporter:
- Converts dataclasses and tuples to dictionaries / lists (NOT strings)
- Emits the linkage table, unmatched sets and the spatial join table
- Is deterministic: output order follows processing order
"""

from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any, Dict

from farmland_linkage.logging import get_logger

log = get_logger(__name__)


def to_json_compatible(obj: Any) -> Any:
    """
    Recursively convert objects into JSON-compatible structures.

    Rules:
    - Primitives pass through
    - dataclasses → dict of their public fields (recursively)
    - dict → dict (recursively)
    - list / tuple / set / frozenset → list (recursively)
    - Unknown objects → str(obj)
    """
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj

    if is_dataclass(obj) and not isinstance(obj, type):
        return {
            f.name: to_json_compatible(getattr(obj, f.name))
            for f in fields(obj)
            if not f.name.startswith("_")
        }

    if isinstance(obj, dict):
        return {str(k): to_json_compatible(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple, set, frozenset)):
        return [to_json_compatible(v) for v in obj]

    return str(obj)


def build_linkage_dict(snapshot: Any) -> Dict[str, Any]:
    """
    Convert a SessionSnapshot into a JSON-safe dict.
    """
    stats = snapshot.statistics()
    linkage = snapshot.linkage

    out: Dict[str, Any] = {
        "counts": {
            "features": len(snapshot.features),
            "ledger_rows": len(snapshot.rows),
            "polygons": len(snapshot.polygons),
        },
        "statistics": to_json_compatible(stats),
        "organizations": to_json_compatible(snapshot.organization_statistics()),
        "linkage": {},
        "unmatched_features": [f.daicho_id for f in snapshot.features],
        "unmatched_rows": to_json_compatible(snapshot.rows),
    }

    if linkage is not None:
        out["linkage"] = {
            daicho_id: to_json_compatible(rows) for daicho_id, rows in linkage.table.items()
        }
        out["unmatched_features"] = [f.daicho_id for f in linkage.unmatched_features]
        out["unmatched_rows"] = to_json_compatible(linkage.unmatched_rows)
        out["summary"] = to_json_compatible(linkage.summary)

    if snapshot.spatial is not None:
        out["spatial_join"] = {
            entry.daicho_id: entry.polygon.polygon_uuid if entry.polygon else None
            for entry in snapshot.spatial
        }
        out["skipped_polygons"] = [
            {"polygon_uuid": uuid, "reason": reason}
            for uuid, reason in snapshot.spatial.skipped_polygons
        ]

    return out


def serialize_linkage_to_json_string(snapshot: Any, indent: int | None = 2) -> str:
    return json.dumps(
        build_linkage_dict(snapshot),
        indent=indent,
        ensure_ascii=False,
    )


def export_linkage_json(snapshot: Any, output_path: str | Path, indent: int | None = 2) -> None:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    linkage = snapshot.linkage
    log.info(
        "Exporting linkage JSON to: %s (features=%d, ledger_rows=%d, linked=%d)",
        output_path,
        len(snapshot.features),
        len(snapshot.rows),
        len(linkage) if linkage is not None else 0,
    )

    json_str = serialize_linkage_to_json_string(snapshot, indent=indent)

    with output_path.open("w", encoding="utf-8") as f:
        f.write(json_str)

    size_bytes = output_path.stat().st_size
    log.info("JSON export complete. size=%d bytes", size_bytes)
