"""
Error taxonomy for chart geometry computation.
Both errors are terminal for a render - there is no partial geometry.
"""

from typing import Optional


class ChartGeometryError(ValueError):
    """Base class for failures while deriving chart geometry."""


class EmptyDatasetError(ChartGeometryError):
    """Raised when a summary is requested over zero records."""

    def __init__(self, message: str = "Dataset is empty; mean is undefined"):
        super().__init__(message)


class InvalidFieldError(ChartGeometryError):
    """
    Raised when a named column is missing from a record or,
    for the value field, does not hold a number.
    """

    def __init__(self, field_name: str, record_index: Optional[int] = None, reason: str = "missing"):
        self.field_name = field_name
        self.record_index = record_index
        self.reason = reason
        location = f" on record {record_index}" if record_index is not None else ""
        super().__init__(f"Field '{field_name}' is {reason}{location}")
