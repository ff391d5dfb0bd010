"""Registry for choosing a loader by file extension."""

from pathlib import Path
from typing import Type

from incremental_insights.errors import IngestionError
from incremental_insights.loaders.base import BaseLoader
from incremental_insights.loaders.csv_loader import CsvLoader
from incremental_insights.loaders.excel_loader import ExcelLoader


class LoaderRegistry:
    """Provides the loader for an export file."""

    _loaders: list[Type[BaseLoader]] = [CsvLoader, ExcelLoader]

    @classmethod
    def for_path(cls, path: str | Path, **kwargs) -> BaseLoader:
        """Loader instance for path's extension. kwargs passed to loader __init__."""
        suffix = Path(path).suffix.lower()
        for loader_cls in cls._loaders:
            if suffix in loader_cls.extensions:
                return loader_cls(**kwargs)
        raise IngestionError(
            f"Unsupported file type: {suffix or '(none)'}. Supported: {cls.supported_extensions()}"
        )

    @classmethod
    def supported_extensions(cls) -> list[str]:
        return [ext for loader_cls in cls._loaders for ext in loader_cls.extensions]
