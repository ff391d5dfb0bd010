"""Turn raw export rows into CampaignRecords."""

import logging
from typing import Optional, Sequence

from incremental_insights.errors import EmptyDatasetError
from incremental_insights.models.fields import CanonicalField
from incremental_insights.models.raw import RawRow
from incremental_insights.models.record import CampaignRecord, Dataset, FieldMap

from .coercion import coerce_value, parse_loose_bool
from .resolver import resolve_fields

logger = logging.getLogger(__name__)

# Substrings of a KPI type where a lower actual value beats the goal
_LOWER_IS_BETTER = ("cpa", "cost")


def lower_is_better(kpi_type: Optional[str]) -> bool:
    """True for cost-like KPI types (CPA, cost per ...)."""
    t = (kpi_type or "").lower()
    return any(s in t for s in _LOWER_IS_BETTER)


def kpi_performance_ratio(avg_kpi_value: float, goal_value: float) -> float:
    """Actual / goal; 0 when there is no goal."""
    if goal_value == 0:
        return 0.0
    return avg_kpi_value / goal_value


def is_beating_goal(
    kpi_type: str,
    avg_kpi_value: float,
    goal_value: float,
    reported: str = "",
) -> bool:
    """
    With a positive goal, compare in the direction implied by the KPI type.
    Without one, trust the export's own "Beating KPI Goal" cell.
    """
    if goal_value > 0:
        if lower_is_better(kpi_type):
            return avg_kpi_value <= goal_value
        return avg_kpi_value >= goal_value
    return parse_loose_bool(reported)


def normalize_row(raw: RawRow, index: int, field_map: FieldMap) -> CampaignRecord:
    """Build one record; unmapped fields keep their defaults."""
    values: dict = {}
    for field in CanonicalField:
        header = field_map.get(field)
        if header is None:
            continue
        values[field.value] = coerce_value(field, raw.get(header))

    reported = values.pop(CanonicalField.BEATING_GOAL.value, "")
    kpi_type = values.get("kpi_type", "")
    avg = values.get("avg_kpi_value", 0.0)
    goal = values.get("goal_value", 0.0)

    return CampaignRecord(
        index=index,
        raw=raw,
        kpi_perf_ratio=kpi_performance_ratio(avg, goal),
        beating_goal=is_beating_goal(kpi_type, avg, goal, reported),
        **values,
    )


def normalize_rows(rows: Sequence[RawRow]) -> Dataset:
    """
    Resolve headers from the first row and normalize every row.
    Raises EmptyDatasetError when there are no rows.
    """
    if not rows:
        raise EmptyDatasetError("Dataset contains no rows")

    field_map = resolve_fields(rows[0].headers)
    for field in field_map.unmapped:
        logger.debug("No header matched %s; using default values", field.value)

    records = tuple(normalize_row(raw, i, field_map) for i, raw in enumerate(rows))
    logger.info(
        "Normalized %d rows (%d of %d fields mapped)",
        len(records),
        len(field_map.headers),
        len(CanonicalField),
    )
    return Dataset(field_map=field_map, records=records)
