"""Analysis settings: thresholds, filter criteria, sort order and grouping."""

from enum import Enum
from pathlib import Path
from typing import Optional

try:
    import yaml
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "PyYAML is required for settings loading. Run: poetry install"
    ) from e
from pydantic import BaseModel, ConfigDict, Field, field_validator


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class GroupBy(str, Enum):
    """Aggregation mode for the table view."""

    NONE = "none"
    ADVERTISER = "advertiser"
    PARTNER = "partner"


class Thresholds(BaseModel):
    """Qualification gates: score must exceed, pacing must reach."""

    model_config = ConfigDict(frozen=True)

    score_threshold: int = Field(default=100, ge=0)
    pacing_threshold: int = Field(default=99, ge=0, le=100)


class FilterCriteria(BaseModel):
    """
    Conjunction of record predicates.
    None on partner/advertiser/campaign/kpi_types means no constraint;
    an empty kpi_types set accepts nothing.
    """

    model_config = ConfigDict(frozen=True)

    partner: Optional[str] = None
    advertiser: Optional[str] = None
    campaign: Optional[str] = None
    kpi_types: Optional[frozenset[str]] = None
    only_beating_goal: bool = False


class SortSpec(BaseModel):
    """Sort key and direction; defaults to opportunity, largest first."""

    model_config = ConfigDict(frozen=True)

    key: str = "calculated_opportunity"
    direction: SortDirection = SortDirection.DESC

    @property
    def descending(self) -> bool:
        return self.direction == SortDirection.DESC

    def toggle(self, key: str) -> "SortSpec":
        """Re-selecting the current key flips direction; a new key starts descending."""
        if key == self.key:
            flipped = SortDirection.ASC if self.descending else SortDirection.DESC
            return SortSpec(key=key, direction=flipped)
        return SortSpec(key=key, direction=SortDirection.DESC)


class AnalysisSettings(BaseModel):
    """Everything the session needs besides the dataset itself."""

    model_config = ConfigDict(frozen=True)

    thresholds: Thresholds = Field(default_factory=Thresholds)
    criteria: FilterCriteria = Field(default_factory=FilterCriteria)
    sort: SortSpec = Field(default_factory=SortSpec)
    group_by: GroupBy = GroupBy.NONE

    @field_validator("group_by", mode="before")
    @classmethod
    def _none_string(cls, v):
        # YAML reads a bare `none` as null
        return GroupBy.NONE if v is None else v

    @classmethod
    def from_yaml(cls, path: str | Path) -> "AnalysisSettings":
        """Load settings from YAML. Supports nested (thresholds/filters/sort) or flat structure."""
        data = yaml.safe_load(Path(path).read_text()) or {}
        thresholds = data.get("thresholds", {}) or {}
        filters = data.get("filters", {}) or {}
        sort = data.get("sort", {}) or {}

        def _get(key: str, nested: dict, top: dict, default=None):
            return nested.get(key, top.get(key, default))

        kpi_types = _get("kpi_types", filters, data)
        if isinstance(kpi_types, str):
            kpi_types = [kpi_types]
        criteria = {
            "partner": _get("partner", filters, data),
            "advertiser": _get("advertiser", filters, data),
            "campaign": _get("campaign", filters, data),
            "kpi_types": frozenset(str(t) for t in kpi_types) if kpi_types is not None else None,
            # pydantic parses "false"/"yes" strings and rejects anything else
            "only_beating_goal": _get("only_beating_goal", filters, data) or False,
        }
        flat: dict = {
            "criteria": criteria,
            "thresholds": {
                "score_threshold": _get("score_threshold", thresholds, data, 100),
                "pacing_threshold": _get("pacing_threshold", thresholds, data, 99),
            },
            "group_by": data.get("group_by", GroupBy.NONE),
        }
        sort_key = _get("key", sort, {}) or data.get("sort_key")
        if sort_key:
            flat["sort"] = {
                "key": sort_key,
                "direction": _get("direction", sort, {}) or data.get("sort_direction", "desc"),
            }
        return cls.model_validate(flat)
