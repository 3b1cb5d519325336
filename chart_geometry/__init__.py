"""
Chart geometry package - summary statistics and scale mappings.
Pure computation: no I/O, no drawing, no shared state.
"""

from chart_geometry.errors import (
    ChartGeometryError,
    EmptyDatasetError,
    InvalidFieldError
)

from chart_geometry.models import (
    Viewport,
    FieldSelectors,
    SummaryStats
)

from chart_geometry.summary import (
    GRID_STEP,
    compute_summary,
    snap_up
)

from chart_geometry.scales import (
    BandScale,
    LinearScale,
    ScaleMapping,
    build_scales,
    nice_domain,
    ticks
)

from chart_geometry.computer import ChartGeometryComputer

__all__ = [
    'ChartGeometryError',
    'EmptyDatasetError',
    'InvalidFieldError',
    'Viewport',
    'FieldSelectors',
    'SummaryStats',
    'GRID_STEP',
    'compute_summary',
    'snap_up',
    'BandScale',
    'LinearScale',
    'ScaleMapping',
    'build_scales',
    'nice_domain',
    'ticks',
    'ChartGeometryComputer'
]

__version__ = "1.0.0"
