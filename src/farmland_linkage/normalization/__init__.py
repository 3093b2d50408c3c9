"""
farmland_linkage.normalization package

- text:    orthographic variant folding (TextNormalizer)
- address: free-text address decomposition (AddressAnalyzer)
"""

from .address import AddressComponents, analyze_address, extract_subdistrict
from .text import normalize_text

__all__ = [
    "AddressComponents",
    "analyze_address",
    "extract_subdistrict",
    "normalize_text",
]
