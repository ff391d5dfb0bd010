"""Analysis session: one ingested dataset plus the current settings."""

import logging
from typing import Optional, Sequence

from incremental_insights.aggregation import (
    AggregationNode,
    GroupSummary,
    build_pivot,
    group_records,
)
from incremental_insights.filtering import (
    FilterEngine,
    FilterOptions,
    FilterResult,
    default_kpi_types,
    discover_options,
)
from incremental_insights.models.raw import RawRow
from incremental_insights.models.record import CampaignRecord, Dataset
from incremental_insights.models.settings import (
    AnalysisSettings,
    FilterCriteria,
    GroupBy,
    Thresholds,
)
from incremental_insights.normalization import normalize_rows
from incremental_insights.opportunity import calculate_opportunities
from incremental_insights.reporting import (
    GeneratedReport,
    ReportScope,
    ReportStyle,
    TableView,
    detail_table,
    generate_report,
    report_targets,
    summary_table,
)
from incremental_insights.reporting.table import DEFAULT_ROW_LIMIT
from incremental_insights.sorting import sort_items, sort_pivot, summary_value

logger = logging.getLogger(__name__)


class AnalysisSession:
    """
    Holds the normalized dataset (never modified) and the current settings.
    Every settings change re-derives the processed records from scratch:
    filter -> opportunity calculation. Aggregations and sorts are computed
    on request from the processed records.
    """

    def __init__(self, dataset: Dataset, settings: Optional[AnalysisSettings] = None):
        self._dataset = dataset
        self._settings = settings or AnalysisSettings()
        self._processed: list[CampaignRecord] = []
        self._total_opportunity = 0.0
        self._qualifying_count = 0
        self.recalculate()

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[RawRow],
        settings: Optional[AnalysisSettings] = None,
    ) -> "AnalysisSession":
        """Normalize rows and open a session. Raises EmptyDatasetError for no rows."""
        return cls(normalize_rows(rows), settings)

    @property
    def dataset(self) -> Dataset:
        return self._dataset

    @property
    def raw_records(self) -> tuple[CampaignRecord, ...]:
        return self._dataset.records

    @property
    def settings(self) -> AnalysisSettings:
        return self._settings

    @property
    def processed(self) -> list[CampaignRecord]:
        """Records passing the current filters, with opportunities calculated."""
        return list(self._processed)

    @property
    def totals(self) -> dict:
        return {
            "total_opportunity": self._total_opportunity,
            "qualifying_count": self._qualifying_count,
        }

    def ingest(self, rows: Sequence[RawRow]) -> None:
        """
        Replace the dataset. On failure (including an empty dataset) the
        session keeps its previous state.
        """
        dataset = normalize_rows(rows)
        self._dataset = dataset
        self.recalculate()

    def recalculate(self) -> None:
        """Filter the full dataset and recompute every opportunity."""
        engine = FilterEngine(self._settings.criteria)
        passed = engine.filter_passed(self._dataset.records)
        result = calculate_opportunities(passed, self._settings.thresholds)
        self._processed = result.records
        self._total_opportunity = result.total_opportunity
        self._qualifying_count = result.qualifying_count
        logger.debug(
            "Recalculated: %d of %d records, %d qualifying, total %.2f",
            len(self._processed),
            len(self._dataset.records),
            self._qualifying_count,
            self._total_opportunity,
        )

    def update_settings(self, **changes) -> None:
        """Replace settings fields (thresholds, criteria, sort, group_by) and recalculate."""
        self._settings = self._settings.model_copy(update=changes)
        self.recalculate()

    def set_thresholds(self, thresholds: Thresholds) -> None:
        self.update_settings(thresholds=thresholds)

    def set_criteria(self, criteria: FilterCriteria) -> None:
        self.update_settings(criteria=criteria)

    def set_group_by(self, group_by: GroupBy) -> None:
        self.update_settings(group_by=GroupBy(group_by))

    def toggle_sort(self, key: str) -> None:
        """Same key flips direction; a new key sorts descending."""
        self.update_settings(sort=self._settings.sort.toggle(key))

    def explain(self) -> list[FilterResult]:
        """Per-record filter outcome with explanations, over the full dataset."""
        return FilterEngine(self._settings.criteria).filter_many(self._dataset.records)

    def filter_options(self) -> FilterOptions:
        return discover_options(self._dataset.records)

    def default_kpi_types(self) -> frozenset[str]:
        return default_kpi_types(self._dataset.records)

    def sorted_records(self) -> list[CampaignRecord]:
        return sort_items(self._processed, self._settings.sort)

    def group_summaries(self, group_by: Optional[GroupBy] = None) -> list[GroupSummary]:
        """Flat summaries for group_by (defaults to the settings' mode), sorted."""
        mode = GroupBy(group_by or self._settings.group_by)
        return sort_items(group_records(self._processed, mode), self._settings.sort, summary_value)

    def pivot(self) -> list[AggregationNode]:
        """Partner -> advertiser -> campaign tree, sorted at every level."""
        return sort_pivot(build_pivot(self._processed), self._settings.sort)

    def table(self, row_limit: int = DEFAULT_ROW_LIMIT) -> TableView:
        """Detail or summary table for the current grouping mode."""
        mode = self._settings.group_by
        if mode == GroupBy.NONE:
            return detail_table(self.sorted_records(), row_limit)
        return summary_table(self.group_summaries(mode), mode, row_limit)

    def report_targets(self, scope: ReportScope) -> list[str]:
        return report_targets(self._processed, ReportScope(scope))

    def report(self, scope: ReportScope, target: str, style: ReportStyle) -> GeneratedReport:
        """Report over the processed records in current sort order."""
        return generate_report(
            self.sorted_records(),
            ReportScope(scope),
            target,
            ReportStyle(style),
            self._settings.thresholds,
        )
