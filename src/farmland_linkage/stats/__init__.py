from .aggregator import (
    ORGANIZATION_COLORS,
    Bucket,
    FarmlandDetails,
    OrganizationStatistics,
    Statistics,
    compute_statistics,
    farmland_details,
    format_area,
    organization_colors,
    organization_statistics,
    parse_area,
)

__all__ = [
    "ORGANIZATION_COLORS",
    "Bucket",
    "FarmlandDetails",
    "OrganizationStatistics",
    "Statistics",
    "compute_statistics",
    "farmland_details",
    "format_area",
    "organization_colors",
    "organization_statistics",
    "parse_area",
]
