"""Display formatting shared by table views and generated reports."""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from incremental_insights.filtering.options import NO_GOAL_TYPES

_CURRENCY_KPI_TERMS = ("cpa", "revenue", "cost")
_PERCENT_KPI_TERMS = ("ctr", "vcr", "rate")
_COUNT_KPI_TERMS = ("reach", "users", "visitors")


def _is_number(val) -> bool:
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        return False
    return math.isfinite(val)


def round_half_up(val: float) -> int:
    """Nearest integer, halves rounded towards +inf (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(val + 0.5)


def _quantize(val: float, places: str) -> Decimal:
    return Decimal(repr(float(val))).quantize(Decimal(places), rounding=ROUND_HALF_UP)


def plain_number(val) -> str:
    """Shortest text for a number: 92.0 -> '92', 0.27 -> '0.27'."""
    if not _is_number(val):
        return str(val)
    if float(val).is_integer():
        return str(int(val))
    return repr(float(val))


def format_currency(val: Optional[float]) -> str:
    """US dollars with grouping and two decimals: -1234.5 -> '-$1,234.50'."""
    if not _is_number(val):
        val = 0.0
    q = _quantize(val, "0.01")
    sign = "-" if q < 0 else ""
    return f"{sign}${abs(q):,.2f}"


def format_number(val: Optional[float]) -> str:
    """Grouped count with up to three decimals: 1234.5 -> '1,234.5'."""
    if not _is_number(val):
        return "0"
    q = _quantize(val, "0.001")
    text = f"{abs(q):,.3f}".rstrip("0").rstrip(".")
    return f"-{text}" if q < 0 and text != "0" else text


def format_percent(val: Optional[float]) -> str:
    """Whole percent on the 0-100 scale, capped at 100 for display."""
    if not _is_number(val):
        return "0%"
    return f"{round_half_up(min(val, 100.0))}%"


def format_ratio(val: Optional[float]) -> str:
    """Ratio as a whole percent: 1.2 -> '120%'."""
    if not _is_number(val):
        return "-"
    return f"{round_half_up(val * 100)}%"


def format_kpi(val: Optional[float], kpi_type: Optional[str]) -> str:
    """Format a KPI value in the unit implied by its type."""
    if not _is_number(val):
        return "-"
    if not kpi_type:
        return plain_number(val) if val else "-"

    t = kpi_type.lower()
    if any(term in t for term in _CURRENCY_KPI_TERMS):
        return format_currency(val)
    if any(term in t for term in _PERCENT_KPI_TERMS):
        # values arrive already on the percent scale (0.27 -> 0.27%)
        return f"{plain_number(val)}%"
    if t == "incremental reach":
        return f"+{format_number(val)} people"
    if any(term in t for term in _COUNT_KPI_TERMS):
        return format_number(val)
    if t in NO_GOAL_TYPES:
        return "N/A"
    return format_number(val)
