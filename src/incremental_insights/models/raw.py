"""Raw row representation before normalization."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RawRow(BaseModel):
    """
    One row of the ingested export, keyed by the original header strings.
    Loaders populate this from CSV or spreadsheet rows; never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    cells: dict[str, Any] = Field(default_factory=dict)

    @property
    def headers(self) -> list[str]:
        """Header strings in the order they appear in the source."""
        return list(self.cells.keys())

    def get(self, header: str, default: Any = None) -> Any:
        return self.cells.get(header, default)
