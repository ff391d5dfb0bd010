"""Filter rules: each returns (passed, explanation, rule_id)."""

from incremental_insights.models.record import CampaignRecord
from incremental_insights.models.settings import FilterCriteria


def _exact_rule(label: str, value: str, wanted: str | None, rule_id: str) -> tuple[bool, str, str]:
    if wanted is None:
        return True, f"{label} filter not set", rule_id
    if value == wanted:
        return True, f"Matches {label.lower()}: {wanted}", rule_id
    return False, f"Excluded: {label.lower()} '{value}' is not '{wanted}'", rule_id


def apply_partner_rule(record: CampaignRecord, criteria: FilterCriteria) -> tuple[bool, str, str]:
    """Exact partner match when criteria.partner is set."""
    return _exact_rule("Partner", record.partner, criteria.partner, "partner")


def apply_advertiser_rule(record: CampaignRecord, criteria: FilterCriteria) -> tuple[bool, str, str]:
    """Exact advertiser match when criteria.advertiser is set."""
    return _exact_rule("Advertiser", record.advertiser, criteria.advertiser, "advertiser")


def apply_campaign_rule(record: CampaignRecord, criteria: FilterCriteria) -> tuple[bool, str, str]:
    """Exact campaign match when criteria.campaign is set."""
    return _exact_rule("Campaign", record.campaign, criteria.campaign, "campaign")


def apply_kpi_type_rule(record: CampaignRecord, criteria: FilterCriteria) -> tuple[bool, str, str]:
    """
    KPI type must be one of the accepted types.
    None accepts everything; an empty set (no types selected) accepts nothing.
    """
    if criteria.kpi_types is None:
        return True, "KPI type filter not set", "kpi_type"
    if not criteria.kpi_types:
        return False, "Excluded: no KPI types selected", "kpi_type"
    if record.kpi_type in criteria.kpi_types:
        return True, f"KPI type selected: {record.kpi_type}", "kpi_type"
    return False, f"Excluded: KPI type '{record.kpi_type}' not selected", "kpi_type"


def apply_beating_goal_rule(record: CampaignRecord, criteria: FilterCriteria) -> tuple[bool, str, str]:
    """With only_beating_goal set, the record must be beating its KPI goal."""
    if not criteria.only_beating_goal:
        return True, "Beating-goal filter not set", "beating_goal"
    if record.beating_goal:
        return True, "Beating KPI goal", "beating_goal"
    return False, "Excluded: not beating KPI goal", "beating_goal"
