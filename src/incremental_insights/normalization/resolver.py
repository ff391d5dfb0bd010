"""Header synonym resolution: map an export header row to canonical fields."""

from typing import Iterable, Mapping, Optional

from incremental_insights.models.fields import FIELD_SYNONYMS, CanonicalField
from incremental_insights.models.record import FieldMap


def _normalize_header(text: Optional[str]) -> str:
    """Lowercase and strip for matching; empty string if None."""
    return (text or "").lower().strip()


def resolve_fields(
    headers: Iterable[str],
    synonyms: Mapping[CanonicalField, tuple[str, ...]] = FIELD_SYNONYMS,
) -> FieldMap:
    """
    Map each canonical field to the first header (in dataset order) equal to
    any of its synonyms, case-insensitively and after trimming.
    No substring matching; fields without a match are left unmapped.
    """
    header_list = [str(h) for h in headers]
    resolved: dict[CanonicalField, str] = {}
    for field, terms in synonyms.items():
        wanted = {_normalize_header(t) for t in terms}
        for header in header_list:
            if _normalize_header(header) in wanted:
                resolved[field] = header
                break
    return FieldMap(headers=resolved)
