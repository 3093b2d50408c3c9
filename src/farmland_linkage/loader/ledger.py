"""
Ledger CSV parsing.

Layout (first line is a header and is always skipped):

    0 organization   1 full address   2 oaza   3 koaza   4 chiban
    5 edaban         6 bunkatsu1      7 bunkatsu2
    8 sakki          9 crop           10 variety

Columns 0-4 are required; lines with fewer fields are dropped silently.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import List, Optional, Sequence, Union

from farmland_linkage.core.exceptions import require_text
from farmland_linkage.loader.file_loader import read_text, strip_bom
from farmland_linkage.logging import get_logger
from farmland_linkage.models import LedgerRow

log = get_logger(__name__)

MIN_FIELDS = 5


def _optional(parts: Sequence[str], index: int) -> Optional[str]:
    if index >= len(parts):
        return None
    return parts[index] or None


def row_from_fields(parts: Sequence[str]) -> Optional[LedgerRow]:
    """Build a LedgerRow from split fields, or None for a malformed line."""
    parts = [p.strip() for p in parts]
    if len(parts) < MIN_FIELDS:
        return None

    return LedgerRow(
        organization_name=parts[0],
        full_address=parts[1],
        oaza=parts[2],
        koaza=parts[3],
        chiban=parts[4],
        edaban=_optional(parts, 5),
        bunkatsu1=_optional(parts, 6),
        bunkatsu2=_optional(parts, 7),
        sakki=_optional(parts, 8),
        crop=_optional(parts, 9),
        variety=_optional(parts, 10),
    )


def parse_ledger_csv(text: str) -> List[LedgerRow]:
    require_text(text, "text")
    rows: List[LedgerRow] = []
    dropped = 0

    reader = csv.reader(io.StringIO(strip_bom(text)))
    for lineno, parts in enumerate(reader, start=1):
        if lineno == 1:
            continue  # header
        if not parts or not any(p.strip() for p in parts):
            continue

        row = row_from_fields(parts)
        if row is None:
            dropped += 1
            continue
        rows.append(row)

    log.debug("Ledger parsed: rows=%d, dropped=%d", len(rows), dropped)
    return rows


def load_ledger_csv(path: Union[str, Path]) -> List[LedgerRow]:
    rows = parse_ledger_csv(read_text(path))
    log.info("Loaded %d ledger rows from %s", len(rows), path)
    return rows
