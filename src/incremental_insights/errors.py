"""Exceptions raised at the ingestion boundary."""


class IngestionError(ValueError):
    """The source could not be read or parsed; no dataset was produced."""


class EmptyDatasetError(ValueError):
    """The source was readable but contained no data rows."""
