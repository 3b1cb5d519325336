"""
Summary statistics over the value column: grid-snapped maximum and mean.
"""

import math
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from chart_geometry.errors import EmptyDatasetError
from chart_geometry.fields import read_numeric
from chart_geometry.models import SummaryStats

# Grid increments of 1/20 of a unit
GRID_STEP = 0.05

# Quotients within this many decimals of an integer are already on the grid
_QUOTIENT_DIGITS = 9


def grid_divisions(grid_step: float) -> Optional[int]:
    """
    Return ``n`` when ``grid_step`` is ``1/n`` for an integer ``n``, else None.
    Snapping with ``ceil(v * n) / n`` avoids the binary drift of ``ceil(v / step) * step``
    (1.18 snaps to 1.2, not 1.2000000000000002).
    """
    divisions = round(1 / grid_step)
    if divisions > 0 and math.isclose(1 / divisions, grid_step, rel_tol=1e-12):
        return divisions
    return None


def _step_decimals(grid_step: float) -> int:
    """Decimal places needed to write ``grid_step`` (0.15 -> 2, 0.3 -> 1)."""
    exponent = Decimal(repr(grid_step)).normalize().as_tuple().exponent
    return max(0, -exponent)


def _grid_index(value: float, grid_step: float, divisions: Optional[int]) -> int:
    if divisions:
        return math.ceil(value * divisions)
    # 1.05 / 0.15 is 7.000000000000001; snap the quotient before the ceiling
    return math.ceil(round(value / grid_step, _QUOTIENT_DIGITS))


def _grid_value(index: int, grid_step: float, divisions: Optional[int]) -> float:
    if divisions:
        return index / divisions
    return round(index * grid_step, _step_decimals(grid_step))


def snap_up(value: float, grid_step: float = GRID_STEP) -> float:
    """Round ``value`` up to the nearest multiple of ``grid_step``."""
    if grid_step <= 0:
        raise ValueError(f"grid_step must be positive, got {grid_step}")

    divisions = grid_divisions(grid_step)
    return _grid_value(_grid_index(value, grid_step, divisions), grid_step, divisions)


def compute_summary(
    dataset: Sequence[Mapping[str, Any]],
    value_field: str,
    grid_step: float = GRID_STEP
) -> SummaryStats:
    """
    Scan the dataset once, returning the mean of ``value_field`` and its
    maximum rounded up to ``grid_step``.

    Every value is snapped to its grid index before the running maximum is
    taken, so the result is the tightest grid multiple at or above the true
    maximum.

    Raises:
        EmptyDatasetError: the dataset has no records.
        InvalidFieldError: ``value_field`` is missing or non-numeric on a record.
    """
    if grid_step <= 0:
        raise ValueError(f"grid_step must be positive, got {grid_step}")

    if len(dataset) == 0:
        raise EmptyDatasetError()

    divisions = grid_divisions(grid_step)

    max_index = None
    total = 0.0

    for index, record in enumerate(dataset):
        value = read_numeric(record, value_field, index)

        step_index = _grid_index(value, grid_step, divisions)
        if max_index is None or step_index > max_index:
            max_index = step_index

        total += value

    max_gridded = _grid_value(max_index, grid_step, divisions)

    return SummaryStats(mean=total / len(dataset), max_gridded=max_gridded)
