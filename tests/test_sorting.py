"""Unit tests for sorting flat results and pivot trees."""

from incremental_insights.aggregation import GroupSummary, build_pivot
from incremental_insights.models.settings import SortDirection, SortSpec
from incremental_insights.sorting import (
    field_value,
    node_value,
    sort_items,
    sort_key,
    sort_pivot,
    summary_value,
)
from tests.conftest import make_record

ASC = SortDirection.ASC
DESC = SortDirection.DESC


class TestSortKey:
    def test_strings_case_insensitive(self) -> None:
        assert sort_key("beta") == sort_key("BETA")
        assert sort_key("alpha") < sort_key("Beta")

    def test_missing_is_zero(self) -> None:
        assert sort_key(None) == sort_key(0)

    def test_bool_numeric(self) -> None:
        assert sort_key(False) < sort_key(True)

    def test_numbers_before_strings(self) -> None:
        assert sort_key(1000) < sort_key("a")


class TestSortItems:
    """Tests for sort_items over records and summaries."""

    def test_numeric_desc(self) -> None:
        recs = [make_record(index=i, score=s) for i, s in enumerate([50, 150, 100])]
        out = sort_items(recs, SortSpec(key="score", direction=DESC))
        assert [r.score for r in out] == [150, 100, 50]

    def test_string_asc_ignores_case(self) -> None:
        recs = [make_record(index=i, partner=p) for i, p in enumerate(["beta", "Alpha", "gamma"])]
        out = sort_items(recs, SortSpec(key="partner", direction=ASC))
        assert [r.partner for r in out] == ["Alpha", "beta", "gamma"]

    def test_missing_key_treated_as_zero(self) -> None:
        """Unknown keys sort every item equal, keeping input order."""
        recs = [make_record(index=i) for i in range(3)]
        out = sort_items(recs, SortSpec(key="no_such_field", direction=DESC))
        assert [r.index for r in out] == [0, 1, 2]

    def test_stable_for_ties(self) -> None:
        recs = [make_record(index=i, score=s) for i, s in enumerate([10, 20, 10, 20])]
        out = sort_items(recs, SortSpec(key="score", direction=DESC))
        assert [r.index for r in out] == [1, 3, 0, 2]

    def test_toggle_reverses_order(self) -> None:
        """Toggling the same key gives exactly the reverse for distinct keys."""
        recs = [make_record(index=i, incremental_budget=b) for i, b in enumerate([30, 10, 50, 20])]
        spec = SortSpec(key="incremental_budget")
        first = sort_items(recs, spec)
        second = sort_items(recs, spec.toggle("incremental_budget"))
        assert [r.index for r in second] == [r.index for r in reversed(first)]

    def test_summaries_and_dicts(self) -> None:
        summaries = [
            GroupSummary(name="x", count=2, total_score=100),
            GroupSummary(name="y", count=1, total_score=90),
        ]
        out = sort_items(summaries, SortSpec(key="avg_score", direction=DESC))
        assert [s.name for s in out] == ["y", "x"]
        rows = [{"v": 2}, {"v": 1}, {}]
        assert sort_items(rows, SortSpec(key="v", direction=ASC)) == [{}, {"v": 1}, {"v": 2}]

    def test_name_alias_for_records(self) -> None:
        assert field_value(make_record(campaign="Zed"), "name") == "Zed"

    def test_record_keys_map_onto_summaries(self) -> None:
        summaries = [
            GroupSummary(name="beta", count=1, total_opportunity=10, total_budget=5, total_score=80),
            GroupSummary(name="Alpha", count=2, total_opportunity=30, total_budget=1, total_score=100),
        ]
        by_opp = sort_items(summaries, SortSpec(key="calculated_opportunity", direction=DESC), summary_value)
        assert [s.name for s in by_opp] == ["Alpha", "beta"]
        by_score = sort_items(summaries, SortSpec(key="score", direction=DESC), summary_value)
        assert [s.name for s in by_score] == ["beta", "Alpha"]
        by_name = sort_items(summaries, SortSpec(key="advertiser", direction=ASC), summary_value)
        assert [s.name for s in by_name] == ["Alpha", "beta"]
        assert summary_value(summaries[0], "incremental_budget") == 5


class TestSortPivot:
    """Tests for sort_pivot."""

    def _tree(self):
        return build_pivot(
            [
                make_record(index=0, partner="P1", advertiser="A1", campaign="c", score=100, calculated_opportunity=10),
                make_record(index=1, partner="P1", advertiser="A2", campaign="b", score=200, calculated_opportunity=50),
                make_record(index=2, partner="P2", advertiser="A3", campaign="a", score=120, calculated_opportunity=100),
                make_record(index=3, partner="P1", advertiser="A1", campaign="d", score=110, calculated_opportunity=30),
            ]
        )

    def test_each_level_sorted(self) -> None:
        tree = sort_pivot(self._tree(), SortSpec(key="calculated_opportunity", direction=DESC))
        assert [n.name for n in tree] == ["P2", "P1"]
        p1 = tree[1]
        assert [n.name for n in p1.children] == ["A2", "A1"]
        assert [r.campaign for r in p1.children[1].records] == ["d", "c"]

    def test_score_key_uses_average(self) -> None:
        """P1 avg score 136.67 beats P2's 120 even though P2 has the single best record."""
        tree = sort_pivot(self._tree(), SortSpec(key="score", direction=DESC))
        assert [n.name for n in tree] == ["P1", "P2"]
        assert node_value(tree[0], "score") == (100 + 200 + 110) / 3

    def test_name_sort(self) -> None:
        tree = sort_pivot(self._tree(), SortSpec(key="name", direction=ASC))
        assert [n.name for n in tree] == ["P1", "P2"]
        assert [r.campaign for r in tree[0].children[0].records] == ["c", "d"]

    def test_original_tree_untouched(self) -> None:
        tree = self._tree()
        sort_pivot(tree, SortSpec(key="name", direction=DESC))
        assert [n.name for n in tree] == ["P1", "P2"]
        assert [r.campaign for r in tree[0].children[0].records] == ["c", "d"]
