"""
CSV loading for the chart.
Reads the file once with pandas, checks the header and validates every row
against the record schema before any geometry is computed.
"""

import logging
import math
from typing import Any, Dict, List, Optional, Sequence, Type

import pandas as pd
from pydantic import BaseModel, ValidationError

from chart_data.models import SEASON_COLUMNS, Dataset, SeasonRecord

logger = logging.getLogger(__name__)


class DatasetLoadError(ValueError):
    """The input file could not be read or does not match the record schema."""


def _clean_row(row: Dict[str, Any]) -> Dict[str, Any]:
    # pandas marks empty cells as NaN; the schema should see them as missing
    return {
        key: (None if isinstance(value, float) and math.isnan(value) else value)
        for key, value in row.items()
    }


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        location = ".".join(str(loc) for loc in err.get("loc", ()))
        parts.append(f"{location}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


def load_dataset(
    path: str,
    schema: Optional[Type[BaseModel]] = SeasonRecord,
    required_columns: Sequence[str] = SEASON_COLUMNS
) -> Dataset:
    """
    Load a comma-separated file with a header row into a Dataset.

    Rows are validated against ``schema`` (pass None to skip row validation);
    validated fields replace the raw cell values, other columns are kept as read.
    """
    logger.info(f"Loading chart data from {path}")

    try:
        # Only empty cells are missing; titles like "NA" or "None" are text
        df = pd.read_csv(path, skipinitialspace=True, keep_default_na=False, na_values=[""])
    except FileNotFoundError as e:
        raise DatasetLoadError(f"Input file not found: {path}") from e
    except pd.errors.EmptyDataError as e:
        raise DatasetLoadError(f"Input file is empty: {path}") from e
    except (pd.errors.ParserError, UnicodeDecodeError, OSError) as e:
        raise DatasetLoadError(f"Could not read {path}: {e}") from e

    df.columns = [str(c).strip() for c in df.columns]

    missing = [c for c in required_columns if c not in df.columns]
    if missing:
        raise DatasetLoadError(
            f"CSV is missing required columns: {missing}. Found: {list(df.columns)}"
        )

    records: List[Dict[str, Any]] = []
    for index, raw in enumerate(df.to_dict('records')):
        row = _clean_row(raw)
        if schema is not None:
            try:
                validated = schema(**row)
            except ValidationError as e:
                # +2: header is line 1
                raise DatasetLoadError(
                    f"Row {index + 2} of {path} is invalid: {_format_validation_error(e)}"
                ) from e
            row = {**row, **validated.dict(by_alias=True)}
        records.append(row)

    dataset = Dataset(records, columns=list(df.columns))
    logger.info(f"Loaded {len(dataset)} records with columns {dataset.columns}")
    return dataset
