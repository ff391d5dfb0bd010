"""Qualification rule and incremental opportunity calculation."""

from typing import Iterable

from pydantic import BaseModel, Field

from incremental_insights.models.record import CampaignRecord
from incremental_insights.models.settings import Thresholds


class OpportunityResult(BaseModel):
    """Records with calculated_opportunity set, plus totals over them."""

    records: list[CampaignRecord] = Field(default_factory=list)
    total_opportunity: float = 0.0
    qualifying_count: int = 0


def qualifies(record: CampaignRecord, thresholds: Thresholds) -> bool:
    """Pacing at or above the pacing gate and score strictly above the score gate."""
    return (
        record.pacing >= thresholds.pacing_threshold
        and record.score > thresholds.score_threshold
    )


def flight_budget(record: CampaignRecord) -> float:
    """incremental_budget x days_remaining."""
    return record.incremental_budget * record.days_remaining


def opportunity_value(record: CampaignRecord, thresholds: Thresholds) -> float:
    """flight_budget when qualifying, else 0."""
    if not qualifies(record, thresholds):
        return 0.0
    return flight_budget(record)


def calculate_opportunities(
    records: Iterable[CampaignRecord],
    thresholds: Thresholds,
) -> OpportunityResult:
    """
    Recompute calculated_opportunity for every record.
    Returns updated copies in input order; the inputs are left untouched.
    """
    updated: list[CampaignRecord] = []
    total = 0.0
    count = 0
    for record in records:
        value = 0.0
        if qualifies(record, thresholds):
            value = flight_budget(record)
            total += value
            count += 1
        updated.append(record.model_copy(update={"calculated_opportunity": value}))
    return OpportunityResult(records=updated, total_opportunity=total, qualifying_count=count)
