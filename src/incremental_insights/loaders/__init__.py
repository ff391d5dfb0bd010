"""Loaders that read campaign-performance exports into raw rows."""

from pathlib import Path

from incremental_insights.loaders.base import BaseLoader
from incremental_insights.loaders.csv_loader import CsvLoader
from incremental_insights.loaders.excel_loader import ExcelLoader
from incremental_insights.loaders.registry import LoaderRegistry
from incremental_insights.models.raw import RawRow


def read_export(path: str | Path) -> list[RawRow]:
    """Read raw rows from a CSV or spreadsheet export."""
    return LoaderRegistry.for_path(path).read_rows(path)


__all__ = ["BaseLoader", "CsvLoader", "ExcelLoader", "LoaderRegistry", "read_export"]
