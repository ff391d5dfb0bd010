"""Filter engine with pluggable rules and explanation trail."""

from typing import Callable, Iterable, Optional

from pydantic import BaseModel, Field

from incremental_insights.models.record import CampaignRecord
from incremental_insights.models.settings import FilterCriteria

from .rules import (
    apply_advertiser_rule,
    apply_beating_goal_rule,
    apply_campaign_rule,
    apply_kpi_type_rule,
    apply_partner_rule,
)


class FilterResult(BaseModel):
    """Result of filtering a record against the current criteria."""

    passed: bool = Field(..., description="All rules passed")
    explanations: list[str] = Field(default_factory=list)
    record: CampaignRecord = Field(..., description="The record that was filtered")
    excluded_by_rule: Optional[str] = Field(
        default=None,
        description="First rule that excluded (partner|advertiser|campaign|kpi_type|beating_goal)",
    )


RuleFn = Callable[[CampaignRecord, FilterCriteria], tuple[bool, str, str]]


class FilterEngine:
    """
    Applies FilterCriteria to normalized records.
    Pure: records are never modified, only selected.
    """

    def __init__(self, criteria: FilterCriteria):
        self.criteria = criteria
        self._rules: list[RuleFn] = [
            apply_partner_rule,
            apply_advertiser_rule,
            apply_campaign_rule,
            apply_kpi_type_rule,
            apply_beating_goal_rule,
        ]

    def filter(self, record: CampaignRecord) -> FilterResult:
        """Apply all rules and return FilterResult with explanation trail."""
        explanations: list[str] = []
        all_passed = True
        excluded_by: Optional[str] = None

        for rule_fn in self._rules:
            passed, explanation, rule_id = rule_fn(record, self.criteria)
            explanations.append(explanation)
            if not passed:
                all_passed = False
                if excluded_by is None:
                    excluded_by = rule_id

        return FilterResult(
            passed=all_passed,
            explanations=explanations,
            record=record,
            excluded_by_rule=excluded_by,
        )

    def matches(self, record: CampaignRecord) -> bool:
        """True when every rule passes; stops at the first failure."""
        return all(rule_fn(record, self.criteria)[0] for rule_fn in self._rules)

    def filter_many(self, records: Iterable[CampaignRecord]) -> list[FilterResult]:
        """Filter multiple records; returns all with full results."""
        return [self.filter(r) for r in records]

    def filter_passed(self, records: Iterable[CampaignRecord]) -> list[CampaignRecord]:
        """Records that pass every rule, in input order."""
        return [r for r in records if self.matches(r)]
