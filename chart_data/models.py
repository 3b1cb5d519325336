"""
Record schema for the season viewership CSV and the immutable Dataset
handed to the geometry core.
"""

import math
from collections import abc
from types import MappingProxyType
from typing import Any, Iterator, List, Mapping, Sequence

from pydantic import BaseModel, Field, validator

# Column names exactly as they appear in the CSV header
SEASON_COLUMNS = [
    "Season",
    "year",
    "num_episodes",
    "avg_views",
    "Data",
    "most_viewed_title",
    "max_views"
]

ACTUAL_FLAG = "Actual"


def is_actual(record: Mapping[str, Any]) -> bool:
    """True when a record (keyed by CSV column) is an aired season, not a projection."""
    return record.get("Data") == ACTUAL_FLAG


class SeasonRecord(BaseModel):
    """
    One season row. Field aliases match the CSV header so rows parse directly;
    ``data_status`` separates actual seasons from projected ones.
    """
    season: int = Field(..., alias="Season", description="Season sequence number", ge=0)
    year: int = Field(..., description="Year the season aired")
    num_episodes: int = Field(..., description="Episodes in the season", ge=0)
    avg_views: float = Field(..., description="Average viewers per episode (millions)", ge=0)
    data_status: str = Field(..., alias="Data", description="'Actual' or a projection label")
    most_viewed_title: str = Field(..., description="Title of the most watched episode")
    max_views: float = Field(..., description="Viewers of the most watched episode (millions)", ge=0)

    @validator('avg_views', 'max_views')
    def validate_finite(cls, v):
        if not math.isfinite(v):
            raise ValueError("viewer counts must be finite numbers")
        return v

    @validator('data_status', 'most_viewed_title', pre=True)
    def validate_text(cls, v):
        if v is None:
            return v
        v = str(v).strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class Dataset(abc.Sequence):
    """
    Ordered, read-only sequence of records.
    Each record is a mapping from CSV column name to parsed value.
    """

    def __init__(self, records: Sequence[Mapping[str, Any]], columns: Sequence[str] = ()):
        self._records = tuple(MappingProxyType(dict(r)) for r in records)
        self.columns: List[str] = list(columns)

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index):
        return self._records[index]

    def __iter__(self) -> Iterator[Mapping[str, Any]]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"Dataset(records={len(self._records)}, columns={self.columns})"
