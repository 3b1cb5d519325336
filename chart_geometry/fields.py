"""
Field access helpers shared by the summary and scale builders.
Records are plain mappings from column name to parsed value.
"""

import math
import numbers
from typing import Any, Hashable, Mapping

from chart_geometry.errors import InvalidFieldError


def read_numeric(record: Mapping[str, Any], field_name: str, index: int) -> float:
    """
    Read ``field_name`` from ``record`` as a finite float.
    Numeric text is coerced the way CSV cells are; booleans, blanks and NaN are rejected.
    """
    if field_name not in record or record[field_name] is None:
        raise InvalidFieldError(field_name, index, reason="missing")

    raw = record[field_name]

    if isinstance(raw, bool):
        raise InvalidFieldError(field_name, index, reason="not numeric")

    if isinstance(raw, numbers.Real):
        value = float(raw)
    elif isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            raise InvalidFieldError(field_name, index, reason="not numeric")
    else:
        raise InvalidFieldError(field_name, index, reason="not numeric")

    if not math.isfinite(value):
        raise InvalidFieldError(field_name, index, reason="not numeric")

    return value


def read_category(record: Mapping[str, Any], field_name: str, index: int) -> Hashable:
    """Read a category key; missing, null and NaN cells are all treated as absent."""
    if field_name not in record or record[field_name] is None:
        raise InvalidFieldError(field_name, index, reason="missing")

    key = record[field_name]
    # pandas fills empty cells with NaN
    if isinstance(key, float) and math.isnan(key):
        raise InvalidFieldError(field_name, index, reason="missing")

    try:
        hash(key)
    except TypeError:
        raise InvalidFieldError(field_name, index, reason="not a valid category")

    return key
