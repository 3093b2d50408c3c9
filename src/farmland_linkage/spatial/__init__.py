from .join import SpatialJoinEngine, build_geometry, spatial_join

__all__ = [
    "SpatialJoinEngine",
    "build_geometry",
    "spatial_join",
]
