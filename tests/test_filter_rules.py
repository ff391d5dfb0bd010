"""Unit tests for filter rules."""

from incremental_insights.filtering.rules import (
    apply_advertiser_rule,
    apply_beating_goal_rule,
    apply_campaign_rule,
    apply_kpi_type_rule,
    apply_partner_rule,
)
from incremental_insights.models.settings import FilterCriteria
from tests.conftest import make_record


class TestExactMatchRules:
    """Tests for partner/advertiser/campaign rules."""

    def test_no_filter_passes(self) -> None:
        criteria = FilterCriteria()
        for rule in (apply_partner_rule, apply_advertiser_rule, apply_campaign_rule):
            passed, exp, _ = rule(make_record(), criteria)
            assert passed is True
            assert "not set" in exp

    def test_partner_match(self) -> None:
        passed, exp, rule_id = apply_partner_rule(make_record(partner="P1"), FilterCriteria(partner="P1"))
        assert passed is True
        assert rule_id == "partner"
        assert "P1" in exp

    def test_partner_match_is_exact(self) -> None:
        """No case folding or substring matching."""
        criteria = FilterCriteria(partner="p1")
        passed, exp, _ = apply_partner_rule(make_record(partner="P1"), criteria)
        assert passed is False
        assert exp.startswith("Excluded:")
        passed, _, _ = apply_partner_rule(make_record(partner="P10"), FilterCriteria(partner="P1"))
        assert passed is False

    def test_advertiser_and_campaign(self) -> None:
        rec = make_record(advertiser="A1", campaign="C1")
        assert apply_advertiser_rule(rec, FilterCriteria(advertiser="A2"))[0] is False
        assert apply_campaign_rule(rec, FilterCriteria(campaign="C1"))[0] is True


class TestKpiTypeRule:
    """Tests for apply_kpi_type_rule."""

    def test_none_accepts_all(self) -> None:
        passed, _, _ = apply_kpi_type_rule(make_record(kpi_type=""), FilterCriteria())
        assert passed is True

    def test_member_passes(self) -> None:
        criteria = FilterCriteria(kpi_types=frozenset({"CPA", "CTR"}))
        assert apply_kpi_type_rule(make_record(kpi_type="CTR"), criteria)[0] is True
        assert apply_kpi_type_rule(make_record(kpi_type="VCR"), criteria)[0] is False

    def test_empty_set_accepts_nothing(self) -> None:
        """No types selected means nothing passes."""
        passed, exp, rule_id = apply_kpi_type_rule(
            make_record(kpi_type="CPA"), FilterCriteria(kpi_types=frozenset())
        )
        assert passed is False
        assert rule_id == "kpi_type"
        assert "no KPI types" in exp


class TestBeatingGoalRule:
    """Tests for apply_beating_goal_rule."""

    def test_off_passes(self) -> None:
        assert apply_beating_goal_rule(make_record(beating_goal=False), FilterCriteria())[0] is True

    def test_on_requires_beating(self) -> None:
        criteria = FilterCriteria(only_beating_goal=True)
        assert apply_beating_goal_rule(make_record(beating_goal=True), criteria)[0] is True
        assert apply_beating_goal_rule(make_record(beating_goal=False), criteria)[0] is False
