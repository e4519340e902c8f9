from typing import Optional


class InventoryMetricsError(Exception):
    """Base class for errors raised while loading or normalizing inventory data."""


class MalformedRecord(InventoryMetricsError):
    """
    A required field is missing or has the wrong shape.
    Raised for the first offending row; the whole batch is rejected.
    """

    def __init__(self, field: str, reason: str, index: Optional[int] = None):
        self.field = field
        self.reason = reason
        self.index = index
        location = f"record {index}" if index is not None else "record"
        super().__init__(f"Malformed {location}, field '{field}': {reason}")


class LoadFailure(InventoryMetricsError):
    """One of the input documents could not be obtained."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to load inventory data from {source}: {reason}")
