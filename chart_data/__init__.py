"""
Chart data package - record schema and CSV loading.
"""

from chart_data.models import (
    ACTUAL_FLAG,
    SEASON_COLUMNS,
    SeasonRecord,
    Dataset,
    is_actual
)

from chart_data.loader import (
    DatasetLoadError,
    load_dataset
)

__all__ = [
    'ACTUAL_FLAG',
    'SEASON_COLUMNS',
    'SeasonRecord',
    'Dataset',
    'is_actual',
    'DatasetLoadError',
    'load_dataset'
]
