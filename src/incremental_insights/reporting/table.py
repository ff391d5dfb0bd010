"""Table views: per-campaign detail or advertiser/partner summaries."""

from typing import Sequence

from pydantic import BaseModel, Field

from incremental_insights.aggregation.grouping import GroupSummary
from incremental_insights.formatting import (
    format_currency,
    format_kpi,
    format_percent,
    format_ratio,
    plain_number,
)
from incremental_insights.models.record import CampaignRecord
from incremental_insights.models.settings import GroupBy

DEFAULT_ROW_LIMIT = 100

DETAIL_HEADERS = [
    "Partner",
    "Advertiser",
    "Campaign",
    "Goal Type",
    "Avg. KPI",
    "Goal",
    "KPI Perf.",
    "Score",
    "Days",
    "Pacing",
    "Inc. Budget",
    "Total Inc. Opp.",
]
SUMMARY_HEADERS = ["Campaigns", "Avg. Score", "Inc. Budget", "Total Inc. Opp."]


class TableView(BaseModel):
    """Formatted cells ready for display."""

    headers: list[str]
    rows: list[list[str]] = Field(default_factory=list)
    total_rows: int = 0

    @property
    def truncated(self) -> int:
        """Rows left out by the row limit."""
        return self.total_rows - len(self.rows)


def detail_row(record: CampaignRecord) -> list[str]:
    """Display cells for one campaign."""
    return [
        record.partner or "-",
        record.advertiser or "-",
        record.campaign or "-",
        record.kpi_type or record.decisioned or "-",
        format_kpi(record.avg_kpi_value, record.kpi_type),
        format_kpi(record.goal_value, record.kpi_type),
        format_ratio(record.kpi_perf_ratio) if record.kpi_perf_ratio else "-",
        plain_number(record.score),
        plain_number(record.days_remaining),
        format_percent(record.pacing),
        format_currency(record.incremental_budget),
        format_currency(record.calculated_opportunity) if record.calculated_opportunity > 0 else "-",
    ]


def summary_row(summary: GroupSummary) -> list[str]:
    return [
        summary.name,
        str(summary.count),
        str(summary.avg_score),
        format_currency(summary.total_budget),
        format_currency(summary.total_opportunity),
    ]


def detail_table(records: Sequence[CampaignRecord], row_limit: int = DEFAULT_ROW_LIMIT) -> TableView:
    return TableView(
        headers=list(DETAIL_HEADERS),
        rows=[detail_row(r) for r in records[:row_limit]],
        total_rows=len(records),
    )


def summary_table(
    summaries: Sequence[GroupSummary],
    group_by: GroupBy,
    row_limit: int = DEFAULT_ROW_LIMIT,
) -> TableView:
    """Advertiser or partner summary columns."""
    if group_by == GroupBy.NONE:
        raise ValueError("summary_table needs group_by advertiser or partner")
    return TableView(
        headers=[group_by.value.capitalize(), *SUMMARY_HEADERS],
        rows=[summary_row(s) for s in summaries[:row_limit]],
        total_rows=len(summaries),
    )


def render_text_table(view: TableView) -> str:
    """Plain-text rendering with padded columns for terminal output."""
    widths = [len(h) for h in view.headers]
    for row in view.rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def _line(cells: Sequence[str]) -> str:
        return "  ".join(cell.ljust(widths[i]) for i, cell in enumerate(cells)).rstrip()

    lines = [_line(view.headers), _line(["-" * w for w in widths])]
    lines.extend(_line(row) for row in view.rows)
    if view.truncated > 0:
        lines.append(f"...and {view.truncated} more rows")
    return "\n".join(lines)
