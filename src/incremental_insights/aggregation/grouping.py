"""Flat group-by summaries over the processed records."""

from typing import Iterable

from pydantic import BaseModel, computed_field

from incremental_insights.formatting import round_half_up
from incremental_insights.models.record import CampaignRecord
from incremental_insights.models.settings import GroupBy

UNKNOWN_GROUP = "Unknown"


class GroupSummary(BaseModel):
    """One row per distinct advertiser or partner."""

    name: str
    count: int = 0
    total_opportunity: float = 0.0
    total_budget: float = 0.0
    total_score: float = 0.0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def avg_score(self) -> int:
        if not self.count:
            return 0
        return round_half_up(self.total_score / self.count)


def group_records(records: Iterable[CampaignRecord], group_by: GroupBy) -> list[GroupSummary]:
    """
    Sum opportunity, budget and score per group value, in first-seen order.
    Records with an empty group value fall under "Unknown".
    """
    if group_by == GroupBy.NONE:
        raise ValueError("group_records needs group_by advertiser or partner")

    attr = group_by.value
    totals: dict[str, dict] = {}
    for record in records:
        name = getattr(record, attr) or UNKNOWN_GROUP
        acc = totals.setdefault(
            name,
            {"count": 0, "total_opportunity": 0.0, "total_budget": 0.0, "total_score": 0.0},
        )
        acc["count"] += 1
        acc["total_opportunity"] += record.calculated_opportunity
        acc["total_budget"] += record.incremental_budget
        acc["total_score"] += record.score
    return [GroupSummary(name=name, **acc) for name, acc in totals.items()]
