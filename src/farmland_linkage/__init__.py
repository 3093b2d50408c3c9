"""
farmland_linkage

Record linkage and spatial join between a farmland point registry, an
ownership/cultivation ledger keyed by Japanese address fragments, and parcel
boundary polygons.
"""

__version__ = "0.1.0"
