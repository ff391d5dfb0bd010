"""Header resolution, value coercion and record normalization."""

from .coercion import RATIO_CUTOFF, coerce_value, normalize_pacing, parse_loose_bool, parse_number
from .normalizer import (
    is_beating_goal,
    kpi_performance_ratio,
    lower_is_better,
    normalize_row,
    normalize_rows,
)
from .resolver import resolve_fields

__all__ = [
    "RATIO_CUTOFF",
    "coerce_value",
    "is_beating_goal",
    "kpi_performance_ratio",
    "lower_is_better",
    "normalize_pacing",
    "normalize_row",
    "normalize_rows",
    "parse_loose_bool",
    "parse_number",
    "resolve_fields",
]
