from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Dict, Optional

from farmland_linkage.core.exceptions import require_text

_PREFECTURE_RE = re.compile(r"^([^県]+県)")
_CITY_RE = re.compile(r"([^市]+市)")
_TOWN_RE = re.compile(r"([^町]+町)")
_SUBDISTRICT_RE = re.compile(r"字([^0-9]+)")
_LOT_RE = re.compile(r"([0-9]+-?[0-9]*-?[0-9]*)$")


@dataclass(frozen=True, slots=True)
class AddressComponents:
    prefecture: Optional[str] = None
    city: Optional[str] = None
    town: Optional[str] = None
    subdistrict: Optional[str] = None
    lot: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return asdict(self)


def _first_group(pattern: re.Pattern, text: str) -> Optional[str]:
    m = pattern.search(text)
    return m.group(1) if m else None


def extract_subdistrict(address: str) -> Optional[str]:
    """Return the sub-district-like token following "字", up to the first digit."""
    return _first_group(_SUBDISTRICT_RE, require_text(address, "address"))


def analyze_address(address: str) -> AddressComponents:
    """
    Decompose a free-text registry address for diagnostics.

    Each component is extracted independently; a pattern that does not match
    leaves its field as None. Not used for the authoritative match decision.
    """
    require_text(address, "address")
    return AddressComponents(
        prefecture=_first_group(_PREFECTURE_RE, address),
        city=_first_group(_CITY_RE, address),
        town=_first_group(_TOWN_RE, address),
        subdistrict=_first_group(_SUBDISTRICT_RE, address),
        lot=_first_group(_LOT_RE, address),
    )
