"""Header row cleanup shared by the CSV and spreadsheet loaders."""

from typing import Any, Sequence


def normalize_headers(raw_headers: Sequence[Any]) -> list[str]:
    """Blank headers become column_N; repeated headers get a _2, _3 suffix."""
    headers: list[str] = []
    seen: dict[str, int] = {}
    for idx, value in enumerate(raw_headers):
        base = str(value).strip() if value not in (None, "") else f"column_{idx + 1}"
        count = seen.get(base, 0)
        name = base if count == 0 else f"{base}_{count + 1}"
        seen[base] = count + 1
        headers.append(name)
    return headers
