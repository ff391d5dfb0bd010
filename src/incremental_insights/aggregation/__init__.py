"""Flat group-by summaries and the partner/advertiser/campaign pivot tree."""

from .grouping import UNKNOWN_GROUP, GroupSummary, group_records
from .pivot import (
    UNKNOWN_ADVERTISER,
    UNKNOWN_PARTNER,
    AggregationNode,
    PivotLevel,
    PivotMetrics,
    PivotRow,
    all_node_ids,
    build_pivot,
    visible_rows,
)

__all__ = [
    "UNKNOWN_ADVERTISER",
    "UNKNOWN_GROUP",
    "UNKNOWN_PARTNER",
    "AggregationNode",
    "GroupSummary",
    "PivotLevel",
    "PivotMetrics",
    "PivotRow",
    "all_node_ids",
    "build_pivot",
    "group_records",
    "visible_rows",
]
