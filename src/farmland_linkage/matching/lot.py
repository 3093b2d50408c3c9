from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from farmland_linkage.core.exceptions import require_text
from farmland_linkage.normalization.text import normalize_text

_LOT_BASE_RE = re.compile(r"^([0-9]+)(.*)$", re.DOTALL)


@dataclass(frozen=True, slots=True)
class ParsedLot:
    base: str  # leading numeric lot number
    full: str  # raw lot string, sub-lot included


def parse_lot(raw: str) -> ParsedLot:
    """
    Split a lot string into its leading numeric base and its full form.

      "123-4" -> ParsedLot(base="123", full="123-4")
      "甲12"  -> ParsedLot(base="甲12", full="甲12")
    """
    require_text(raw, "raw")
    m = _LOT_BASE_RE.match(raw)
    if m:
        return ParsedLot(base=m.group(1), full=raw)
    return ParsedLot(base=raw, full=raw)


def compose_lot(chiban: str, edaban: Optional[str] = None) -> str:
    """Join a ledger lot number and its optional sub-lot with a hyphen."""
    return f"{chiban}-{edaban}" if edaban else chiban


def lots_equal(a: str, b: str) -> bool:
    """True when both lot strings have the same full form after normalization."""
    return parse_lot(normalize_text(a)).full == parse_lot(normalize_text(b)).full
