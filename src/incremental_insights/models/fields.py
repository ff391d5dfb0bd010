"""Canonical field keys and the header synonym table used to detect them."""

from enum import Enum


class CanonicalField(str, Enum):
    """Canonical keys every export column is resolved to."""

    PARTNER = "partner"
    ADVERTISER = "advertiser"
    CAMPAIGN = "campaign"
    DECISIONED = "decisioned"
    SCORE = "score"
    INCREMENTAL_BUDGET = "incremental_budget"
    DAYS_REMAINING = "days_remaining"
    PACING = "pacing"
    BEATING_GOAL = "beating_goal"
    KPI_TYPE = "kpi_type"
    GOAL_VALUE = "goal_value"
    AVG_KPI_VALUE = "avg_kpi_value"


# Header variants seen in exports, tried in order (exact match after trim, case-insensitive)
FIELD_SYNONYMS: dict[CanonicalField, tuple[str, ...]] = {
    CanonicalField.PARTNER: ("Partner",),
    CanonicalField.ADVERTISER: ("Advertiser",),
    CanonicalField.CAMPAIGN: ("Campaign",),
    # "Market Type" holds Decisioned / Non-Decisioned in current exports
    CanonicalField.DECISIONED: ("Market Type", "Decisioned", "Decisioned/Non-Decisioned"),
    CanonicalField.SCORE: (
        "Avg. Campaign Decision Power Score",
        "Decision Power Score",
        "Score",
    ),
    CanonicalField.INCREMENTAL_BUDGET: (
        "Avg. Campaign Daily Incremental Budget",
        "Avg. Campaign Daily Incremental Budget Ideal",
        "Campaign Incremental Budget",
        "Daily Budget",
    ),
    CanonicalField.DAYS_REMAINING: ("Flight Days Remaining", "Days Remaining", "Remaining Days"),
    CanonicalField.PACING: ("Pacing", "Pacing Percentage", "Campaign Pacing"),
    CanonicalField.BEATING_GOAL: ("Beating KPI Goal",),
    CanonicalField.KPI_TYPE: ("Goal Type", "KPI Type"),
    CanonicalField.GOAL_VALUE: ("Goal Value",),
    CanonicalField.AVG_KPI_VALUE: ("Average KPI Value",),
}

TEXT_FIELDS: frozenset[CanonicalField] = frozenset(
    {
        CanonicalField.PARTNER,
        CanonicalField.ADVERTISER,
        CanonicalField.CAMPAIGN,
        CanonicalField.DECISIONED,
        CanonicalField.KPI_TYPE,
        CanonicalField.BEATING_GOAL,
    }
)

NUMERIC_FIELDS: frozenset[CanonicalField] = frozenset(
    {
        CanonicalField.SCORE,
        CanonicalField.INCREMENTAL_BUDGET,
        CanonicalField.DAYS_REMAINING,
        CanonicalField.GOAL_VALUE,
        CanonicalField.AVG_KPI_VALUE,
    }
)
