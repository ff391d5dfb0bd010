"""Text reports and table views for opportunities."""

from .generator import (
    GeneratedReport,
    ReportScope,
    ReportStyle,
    generate_report,
    no_opportunity_message,
    report_targets,
    scope_records,
)
from .table import TableView, detail_table, render_text_table, summary_table

__all__ = [
    "GeneratedReport",
    "ReportScope",
    "ReportStyle",
    "TableView",
    "detail_table",
    "generate_report",
    "no_opportunity_message",
    "render_text_table",
    "report_targets",
    "scope_records",
    "summary_table",
]
