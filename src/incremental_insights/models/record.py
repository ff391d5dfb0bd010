"""Normalized campaign record and field map models."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from incremental_insights.models.raw import RawRow
from incremental_insights.models.fields import CanonicalField


class FieldMap(BaseModel):
    """Canonical field -> detected header. Built once per dataset."""

    model_config = ConfigDict(frozen=True)

    headers: dict[CanonicalField, str] = Field(default_factory=dict)

    def get(self, field: CanonicalField) -> Optional[str]:
        """Detected header for field, or None when no header matched."""
        return self.headers.get(field)

    def is_mapped(self, field: CanonicalField) -> bool:
        return field in self.headers

    @property
    def unmapped(self) -> list[CanonicalField]:
        """Canonical fields with no matching header, in declaration order."""
        return [f for f in CanonicalField if f not in self.headers]


class CampaignRecord(BaseModel):
    """Canonical, typed representation of one export row."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., description="Position within the ingested dataset")

    partner: str = ""
    advertiser: str = ""
    campaign: str = ""
    decisioned: str = ""
    kpi_type: str = ""

    score: float = 0.0
    incremental_budget: float = 0.0
    days_remaining: float = 0.0
    goal_value: float = 0.0
    avg_kpi_value: float = 0.0
    pacing: float = Field(default=0.0, ge=0.0, le=100.0, description="0-100 scale")

    kpi_perf_ratio: float = 0.0
    beating_goal: bool = False

    calculated_opportunity: float = Field(
        default=0.0,
        description="Budget x days when qualifying under current thresholds, else 0",
    )

    raw: RawRow = Field(default_factory=RawRow, exclude=True, repr=False)


class Dataset(BaseModel):
    """Normalized records for one ingested export plus the field map used."""

    model_config = ConfigDict(frozen=True)

    field_map: FieldMap
    records: tuple[CampaignRecord, ...] = ()

    def __len__(self) -> int:
        return len(self.records)
