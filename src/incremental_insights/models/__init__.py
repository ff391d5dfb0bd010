"""Data models for raw rows, normalized records and analysis settings."""

from incremental_insights.models.raw import RawRow
from incremental_insights.models.record import CampaignRecord, Dataset, FieldMap
from incremental_insights.models.settings import (
    AnalysisSettings,
    FilterCriteria,
    GroupBy,
    SortDirection,
    SortSpec,
    Thresholds,
)

__all__ = [
    "AnalysisSettings",
    "CampaignRecord",
    "Dataset",
    "FieldMap",
    "FilterCriteria",
    "GroupBy",
    "RawRow",
    "SortDirection",
    "SortSpec",
    "Thresholds",
]
