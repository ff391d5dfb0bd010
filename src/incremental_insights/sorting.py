"""Sorting for flat results and pivot trees by any field or metric."""

import math
from typing import Any, Callable, Iterable, Sequence, TypeVar

from incremental_insights.aggregation.grouping import GroupSummary
from incremental_insights.aggregation.pivot import AggregationNode
from incremental_insights.models.record import CampaignRecord
from incremental_insights.models.settings import SortSpec

T = TypeVar("T")

# Record-field keys mapped onto pivot node rollups
_NODE_KEYS: dict[str, Callable[[AggregationNode], Any]] = {
    "name": lambda n: n.name,
    "partner": lambda n: n.name,
    "advertiser": lambda n: n.name,
    "campaign": lambda n: n.name,
    "count": lambda n: n.metrics.count,
    "score": lambda n: n.metrics.avg_score,
    "avg_score": lambda n: n.metrics.avg_score,
    "incremental_budget": lambda n: n.metrics.incremental_budget_sum,
    "total_budget": lambda n: n.metrics.incremental_budget_sum,
    "calculated_opportunity": lambda n: n.metrics.calculated_opportunity_sum,
    "total_opportunity": lambda n: n.metrics.calculated_opportunity_sum,
}

# Record-field keys mapped onto flat group summary columns
_SUMMARY_KEYS: dict[str, str] = {
    "partner": "name",
    "advertiser": "name",
    "campaign": "name",
    "score": "avg_score",
    "incremental_budget": "total_budget",
    "calculated_opportunity": "total_opportunity",
}


def sort_key(value: Any) -> tuple:
    """
    Comparable key: strings case-insensitively, everything else numerically,
    missing as 0. Numbers order before strings when a column mixes both.
    """
    if isinstance(value, str):
        return (1, value.lower())
    if value is None:
        return (0, 0.0)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return (0, 0.0)
    return (0, number if not math.isnan(number) else 0.0)


def field_value(item: Any, key: str) -> Any:
    """Value of key on a model, or from a mapping; None when absent."""
    if isinstance(item, dict):
        return item.get(key)
    if key == "name" and isinstance(item, CampaignRecord):
        return item.campaign
    return getattr(item, key, None)


def node_value(node: AggregationNode, key: str) -> Any:
    """Sort value for a pivot node; averages computed on the fly."""
    getter = _NODE_KEYS.get(key)
    if getter is not None:
        return getter(node)
    return getattr(node.metrics, key, None)


def summary_value(summary: GroupSummary, key: str) -> Any:
    """Sort value for a group summary row."""
    return getattr(summary, _SUMMARY_KEYS.get(key, key), None)


def sort_items(
    items: Iterable[T],
    spec: SortSpec,
    value_fn: Callable[[Any, str], Any] = field_value,
) -> list[T]:
    """Stable sort; equal keys keep their input order in both directions."""
    return sorted(
        items,
        key=lambda item: sort_key(value_fn(item, spec.key)),
        reverse=spec.descending,
    )


def sort_pivot(tree: Sequence[AggregationNode], spec: SortSpec) -> list[AggregationNode]:
    """Sort every level independently. Returns a new tree."""
    sorted_tree: list[AggregationNode] = []
    for partner in sort_items(tree, spec, node_value):
        children = [
            advertiser.model_copy(update={"records": sort_items(advertiser.records, spec)})
            for advertiser in sort_items(partner.children, spec, node_value)
        ]
        sorted_tree.append(partner.model_copy(update={"children": children}))
    return sorted_tree
