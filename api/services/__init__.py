"""
API Services - Business logic shared by the sandwich API routers.

Services are plain functions over already-loaded domain records; routers
own loading, caching, and error translation.
"""

from .collection_stats import (
    HostCount,
    MappingSummary,
    SandwichTotals,
    calculate_totals,
    host_mapping_counts,
    is_mapped_host,
    summarize_mapping,
)

__all__ = [
    # Totals
    "SandwichTotals",
    "calculate_totals",
    # Host mapping
    "HostCount",
    "MappingSummary",
    "host_mapping_counts",
    "is_mapped_host",
    "summarize_mapping",
]
