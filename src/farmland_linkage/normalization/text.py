"""
text.py

Orthographic normalization for Japanese place names and lot strings.

Ledger clerks and the registry spell the same place differently
("高田ノ町" / "高田の町", "ケ丘" / "ヶ丘", full-width spaces, a leading
"大字"). ``normalize_text`` folds those variants onto one canonical form so
that substring containment and equality checks can be made on plain strings.
"""

from __future__ import annotations

from typing import Dict

from farmland_linkage.core.exceptions import require_text

# Single-character variants -> canonical form
_CHAR_MAP: Dict[int, str] = str.maketrans({
    "ノ": "の",
    "ケ": "ヶ",
    "ッ": "っ",
    "ヅ": "づ",
    "　": " ",
})

# Formal "major district" prefix, carries no matching value
OAZA_PREFIX = "大字"


def normalize_text(text: str) -> str:
    """
    Collapse known orthographic variants and strip the "大字" token.

    Total and idempotent: normalize_text(normalize_text(s)) == normalize_text(s).
    """
    require_text(text, "text")
    out = text.translate(_CHAR_MAP)
    # Removing one occurrence can join "大" + "字" into a new token
    while OAZA_PREFIX in out:
        out = out.replace(OAZA_PREFIX, "")
    return out
