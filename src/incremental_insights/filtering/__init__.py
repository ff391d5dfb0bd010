"""Record filtering by partner, advertiser, campaign, KPI type and goal status."""

from .engine import FilterEngine, FilterResult
from .options import FilterOptions, default_kpi_types, discover_options

__all__ = [
    "FilterEngine",
    "FilterOptions",
    "FilterResult",
    "default_kpi_types",
    "discover_options",
]
