"""Abstract base class for export file loaders."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from incremental_insights.errors import EmptyDatasetError, IngestionError
from incremental_insights.models.raw import RawRow
from incremental_insights.models.record import Dataset
from incremental_insights.normalization import normalize_rows

logger = logging.getLogger(__name__)


class BaseLoader(ABC):
    """
    Standard interface for export loaders.
    Loaders only read rows; normalization is shared.
    """

    extensions: tuple[str, ...] = ()

    @abstractmethod
    def _read(self, path: Path) -> list[RawRow]:
        """Read every data row of the first sheet/table."""
        pass

    def read_rows(self, path: str | Path) -> list[RawRow]:
        """
        Read rows from path. Any read or parse failure is raised as IngestionError;
        an empty file raises EmptyDatasetError.
        """
        path = Path(path)
        try:
            rows = self._read(path)
        except (IngestionError, EmptyDatasetError):
            raise
        except Exception as e:
            logger.warning("Failed to read %s: %s", path, e)
            raise IngestionError(f"Could not read {path.name}: {e}") from e
        if not rows:
            raise EmptyDatasetError(f"{path.name} appears to be empty")
        logger.info("Read %d rows from %s", len(rows), path.name)
        return rows

    def load(self, path: str | Path) -> Dataset:
        """Read and normalize in one step."""
        return normalize_rows(self.read_rows(path))
