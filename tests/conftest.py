"""Pytest fixtures for incremental-insights tests."""

import csv
from io import StringIO
from pathlib import Path

import pytest

from incremental_insights.models.raw import RawRow
from incremental_insights.models.record import CampaignRecord


def build_csv(rows: list[dict]) -> str:
    """Build CSV string from list of row dicts."""
    if not rows:
        return ""
    out = StringIO()
    writer = csv.DictWriter(out, fieldnames=rows[0].keys())
    writer.writeheader()
    writer.writerows(rows)
    return out.getvalue()


def make_record(**kwargs) -> CampaignRecord:
    """Minimal record for testing."""
    defaults = {"index": 0, "partner": "P1", "advertiser": "A1", "campaign": "C1"}
    defaults.update(kwargs)
    return CampaignRecord(**defaults)


@pytest.fixture
def sample_export_row() -> dict[str, str]:
    """One export row using the long header names seen in real files."""
    return {
        "Partner": "Acme Media",
        "Advertiser": "Northwind",
        "Campaign": "Spring Launch",
        "Market Type": "Decisioned",
        "Avg. Campaign Decision Power Score": "120",
        "Avg. Campaign Daily Incremental Budget": "$1,250.50",
        "Flight Days Remaining": "10",
        "Pacing": "100%",
        "Beating KPI Goal": "No",
        "Goal Type": "CPA",
        "Goal Value": "$10.00",
        "Average KPI Value": "8",
    }


@pytest.fixture
def sample_export_rows(sample_export_row: dict[str, str]) -> list[dict[str, str]]:
    """A small export: qualifying, low-pacing, low-score and no-goal rows."""
    base = dict(sample_export_row)
    return [
        base,
        {**base, "Campaign": "Summer Push", "Pacing": "0.8", "Goal Type": "CTR",
         "Goal Value": "0.5", "Average KPI Value": "0.7"},
        {**base, "Advertiser": "Contoso", "Campaign": "Always On",
         "Avg. Campaign Decision Power Score": "90", "Avg. Campaign Daily Incremental Budget": "300"},
        {**base, "Partner": "Beta Digital", "Advertiser": "Fabrikam", "Campaign": "Brand Lift",
         "Avg. Campaign Decision Power Score": "150", "Avg. Campaign Daily Incremental Budget": "200",
         "Flight Days Remaining": "5", "Pacing": "1.02", "Goal Type": "No Goal",
         "Goal Value": "", "Average KPI Value": "", "Beating KPI Goal": "Yes"},
    ]


@pytest.fixture
def raw_rows(sample_export_rows: list[dict[str, str]]) -> list[RawRow]:
    return [RawRow(cells=row) for row in sample_export_rows]


@pytest.fixture
def export_csv_path(tmp_path: Path, sample_export_rows: list[dict[str, str]]) -> Path:
    """Sample export written to a temp CSV file."""
    path = tmp_path / "export.csv"
    path.write_text(build_csv(sample_export_rows), encoding="utf-8")
    return path
