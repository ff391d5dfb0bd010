"""CSV export loader."""

import csv
from io import StringIO
from pathlib import Path

from incremental_insights.models.raw import RawRow

from .base import BaseLoader
from .headers import normalize_headers


class CsvLoader(BaseLoader):
    """Reads a CSV export; every cell arrives as a string."""

    extensions = (".csv",)

    def __init__(self, encoding: str = "utf-8-sig"):
        self.encoding = encoding

    def _read(self, path: Path) -> list[RawRow]:
        with path.open(newline="", encoding=self.encoding) as f:
            return self.parse(f.read())

    def parse(self, content: str) -> list[RawRow]:
        """
        Parse CSV text with proper handling of quoted multiline fields.
        Repeated headers are suffixed (_2, _3) so no column is overwritten.
        """
        reader = csv.reader(StringIO(content))
        header_row = next(reader, None)
        if header_row is None:
            return []

        headers = normalize_headers(header_row)
        rows: list[RawRow] = []
        for values in reader:
            if not any(v.strip() for v in values):
                continue
            # short rows are padded with ""; cells past the last header are dropped
            cells = {
                name: (values[idx] if idx < len(values) else "")
                for idx, name in enumerate(headers)
            }
            rows.append(RawRow(cells=cells))
        return rows
