"""Cell value coercion. Every failure degrades to the canonical default; nothing raises."""

import math
import re
from typing import Any

from incremental_insights.models.fields import NUMERIC_FIELDS, CanonicalField

# Pacing at or below this is read as a ratio (0.98 -> 98%, 1.05 -> 105%)
RATIO_CUTOFF = 2.0
PACING_MAX = 100.0
PACING_MIN = 0.0

_CURRENCY_CHARS = re.compile(r"[$,]")
# Leading numeric token, so "12 days" -> 12 and "abc" -> no match
_LEADING_NUMBER = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def stringify(value: Any) -> str:
    """Text form of a cell; integral floats drop the trailing .0."""
    if _is_missing(value):
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def parse_number(value: Any) -> float:
    """Strip $ and , then parse the leading number. Unparsable or non-finite -> 0."""
    if _is_missing(value):
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else 0.0
    cleaned = _CURRENCY_CHARS.sub("", str(value))
    m = _LEADING_NUMBER.match(cleaned)
    if not m:
        return 0.0
    try:
        parsed = float(m.group(1))
    except ValueError:
        return 0.0
    return parsed if math.isfinite(parsed) else 0.0


def normalize_pacing(value: Any) -> float:
    """
    Pacing onto a 0-100 scale.
    Exports mix "98", "98%" and "0.98": a % sign is taken literally, otherwise
    values at or below RATIO_CUTOFF are ratios. Result is clamped to [0, 100].
    """
    if _is_missing(value):
        return 0.0
    text = stringify(value)
    if "%" in text:
        pct = parse_number(text.replace("%", ""))
    else:
        pct = parse_number(value)
        if pct <= RATIO_CUTOFF:
            pct *= 100
    return max(PACING_MIN, min(PACING_MAX, pct))


def parse_loose_bool(value: Any) -> bool:
    """'true', 'yes' and '1' (any case) are true; everything else is false."""
    return stringify(value).strip().lower() in ("true", "yes", "1")


def coerce_value(field: CanonicalField, value: Any) -> Any:
    """Typed value for field from a raw cell."""
    if field == CanonicalField.PACING:
        return normalize_pacing(value)
    if field in NUMERIC_FIELDS:
        return parse_number(value)
    return stringify(value).strip()
