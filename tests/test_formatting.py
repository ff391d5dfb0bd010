"""Unit tests for display formatting."""

import pytest

from incremental_insights.formatting import (
    format_currency,
    format_kpi,
    format_number,
    format_percent,
    format_ratio,
    plain_number,
    round_half_up,
)


class TestRoundHalfUp:
    def test_halves_round_up(self) -> None:
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(-2.5) == -2
        assert round_half_up(2.49) == 2


class TestCurrency:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (1234.5, "$1,234.50"),
            (0, "$0.00"),
            (-1234.5, "-$1,234.50"),
            (1000000, "$1,000,000.00"),
            (0.005, "$0.01"),
            (None, "$0.00"),
        ],
    )
    def test_values(self, value, expected) -> None:
        assert format_currency(value) == expected


class TestNumber:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (1500, "1,500"),
            (1234.5678, "1,234.568"),
            (0, "0"),
            (10.5, "10.5"),
            (-2000, "-2,000"),
            (None, "0"),
        ],
    )
    def test_values(self, value, expected) -> None:
        assert format_number(value) == expected


class TestPercentAndRatio:
    def test_percent(self) -> None:
        assert format_percent(98.4) == "98%"
        assert format_percent(99.5) == "100%"
        assert format_percent(None) == "0%"

    def test_percent_display_clamped(self) -> None:
        assert format_percent(130) == "100%"

    def test_ratio(self) -> None:
        assert format_ratio(0.8) == "80%"
        assert format_ratio(1.2) == "120%"
        assert format_ratio(None) == "-"
        assert format_ratio(float("nan")) == "-"

    def test_plain_number(self) -> None:
        assert plain_number(92.0) == "92"
        assert plain_number(0.27) == "0.27"
        assert plain_number(5) == "5"


class TestKpi:
    @pytest.mark.parametrize(
        "value,kpi_type,expected",
        [
            (8, "CPA", "$8.00"),
            (12.5, "Cost per Visit", "$12.50"),
            (2500, "Revenue", "$2,500.00"),
            (0.27, "CTR", "0.27%"),
            (92.0, "VCR", "92%"),
            (45.5, "Completion Rate", "45.5%"),
            (1500, "Incremental Reach", "+1,500 people"),
            (1500, "Reach", "1,500"),
            (320, "Unique Users", "320"),
            (3, "No Goal", "N/A"),
            (3, "none", "N/A"),
            (1234, "ROAS", "1,234"),
            (5, "", "5"),
            (0, None, "-"),
            (None, "CPA", "-"),
        ],
    )
    def test_values(self, value, kpi_type, expected) -> None:
        assert format_kpi(value, kpi_type) == expected
