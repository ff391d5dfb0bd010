"""Opportunity report generation for one partner, advertiser or campaign."""

from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel

from incremental_insights.models.record import CampaignRecord
from incremental_insights.models.settings import Thresholds

from .templates import (
    ACTION_BODY,
    ACTION_SUBJECT,
    EXECUTIVE_BODY,
    EXECUTIVE_SUBJECT,
    STANDARD_BODY,
    STANDARD_SUBJECT,
)

ACTION_LIST_LIMIT = 5
STANDARD_LIST_LIMIT = 10


class ReportScope(str, Enum):
    PARTNER = "partner"
    ADVERTISER = "advertiser"
    CAMPAIGN = "campaign"


class ReportStyle(str, Enum):
    EXECUTIVE = "executive"
    ACTION = "action"
    STANDARD = "standard"


class GeneratedReport(BaseModel):
    """Subject and body; subject is None for the no-opportunity message."""

    target: str
    style: ReportStyle
    subject: Optional[str] = None
    body: str
    opportunity_count: int = 0
    total_opportunity: float = 0.0

    @property
    def text(self) -> str:
        if self.subject is None:
            return self.body
        return f"Subject: {self.subject}\n\n{self.body}"


_TEMPLATES = {
    ReportStyle.EXECUTIVE: (EXECUTIVE_SUBJECT, EXECUTIVE_BODY, None),
    ReportStyle.ACTION: (ACTION_SUBJECT, ACTION_BODY, ACTION_LIST_LIMIT),
    ReportStyle.STANDARD: (STANDARD_SUBJECT, STANDARD_BODY, STANDARD_LIST_LIMIT),
}


def scope_records(
    records: Iterable[CampaignRecord],
    scope: ReportScope,
    target: str,
) -> list[CampaignRecord]:
    """Records whose scope field equals target, order preserved."""
    attr = ReportScope(scope).value
    return [r for r in records if getattr(r, attr) == target]


def report_targets(records: Iterable[CampaignRecord], scope: ReportScope) -> list[str]:
    """Distinct non-empty values of the scope field, sorted."""
    attr = ReportScope(scope).value
    return sorted({getattr(r, attr) for r in records if getattr(r, attr)})


def no_opportunity_message(target: str, thresholds: Thresholds) -> str:
    return (
        f"No qualifying incremental opportunities found for '{target}' based on current logic "
        f"(Score > {thresholds.score_threshold}, Pacing >= {thresholds.pacing_threshold}%)."
    )


def generate_report(
    records: Iterable[CampaignRecord],
    scope: ReportScope,
    target: str,
    style: ReportStyle,
    thresholds: Thresholds,
) -> GeneratedReport:
    """
    Render the report for target. Only records with a positive
    calculated_opportunity are included, in the order given.
    """
    if not target:
        raise ValueError("Report target is required")
    style = ReportStyle(style)

    opportunities = [
        r for r in scope_records(records, scope, target) if r.calculated_opportunity > 0
    ]
    if not opportunities:
        return GeneratedReport(
            target=target,
            style=style,
            body=no_opportunity_message(target, thresholds),
        )

    total = sum(r.calculated_opportunity for r in opportunities)
    subject_tpl, body_tpl, limit = _TEMPLATES[style]
    shown = opportunities if limit is None else opportunities[:limit]
    context = {
        "target": target,
        "total": total,
        "count": len(opportunities),
        "shown": shown,
        "remaining": len(opportunities) - len(shown),
    }
    return GeneratedReport(
        target=target,
        style=style,
        subject=subject_tpl.render(**context),
        body=body_tpl.render(**context),
        opportunity_count=len(opportunities),
        total_opportunity=total,
    )
