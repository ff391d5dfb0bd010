"""Distinct filter values discovered from a dataset."""

from typing import Iterable

from pydantic import BaseModel, Field

from incremental_insights.models.record import CampaignRecord

# KPI types left unselected by default
NO_GOAL_TYPES: frozenset[str] = frozenset({"no goal", "none", "n/a"})


class FilterOptions(BaseModel):
    """Sorted, de-duplicated, non-empty values per filterable field."""

    partners: list[str] = Field(default_factory=list)
    advertisers: list[str] = Field(default_factory=list)
    campaigns: list[str] = Field(default_factory=list)
    kpi_types: list[str] = Field(default_factory=list)


def _distinct(values: Iterable[str]) -> list[str]:
    return sorted({v for v in values if v})


def discover_options(records: Iterable[CampaignRecord]) -> FilterOptions:
    records = list(records)
    return FilterOptions(
        partners=_distinct(r.partner for r in records),
        advertisers=_distinct(r.advertiser for r in records),
        campaigns=_distinct(r.campaign for r in records),
        kpi_types=_distinct(r.kpi_type for r in records),
    )


def default_kpi_types(records: Iterable[CampaignRecord]) -> frozenset[str]:
    """Every discovered KPI type except the no-goal ones."""
    return frozenset(
        t for t in discover_options(records).kpi_types if t.lower() not in NO_GOAL_TYPES
    )
