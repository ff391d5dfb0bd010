"""Spreadsheet export loader (first sheet only)."""

from pathlib import Path
from typing import Any

from incremental_insights.models.raw import RawRow

from .base import BaseLoader
from .headers import normalize_headers


def _import_load_workbook() -> Any:
    try:
        from openpyxl import load_workbook
    except ModuleNotFoundError as e:  # pragma: no cover
        raise ModuleNotFoundError(
            "openpyxl is required for spreadsheet loading. Run: poetry install"
        ) from e
    return load_workbook


class ExcelLoader(BaseLoader):
    """Reads the first worksheet; empty cells become ''."""

    extensions = (".xlsx", ".xlsm")

    def _read(self, path: Path) -> list[RawRow]:
        load_workbook = _import_load_workbook()
        workbook = load_workbook(path, read_only=True, data_only=True)
        try:
            worksheet = workbook[workbook.sheetnames[0]]
            row_iter = worksheet.iter_rows(values_only=True)
            header_row = next(row_iter, None)
            if header_row is None:
                return []

            headers = normalize_headers(header_row)
            rows: list[RawRow] = []
            for values in row_iter:
                if values is None or all(v is None or v == "" for v in values):
                    continue
                cells: dict[str, Any] = {}
                for idx, name in enumerate(headers):
                    value = values[idx] if idx < len(values) else None
                    cells[name] = "" if value is None else value
                rows.append(RawRow(cells=cells))
            return rows
        finally:
            workbook.close()
