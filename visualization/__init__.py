"""
Visualization package for the viewership bar chart.
Draws finished geometry - no statistics are computed here.
"""

from visualization.chart_templates import (
    ChartType,
    ChartStyle
)

from visualization.tooltips import (
    PointerEvent,
    Tooltip,
    HoverHandler,
    format_record_tooltip,
    format_mean_tooltip,
    round_for_display
)

from visualization.generator import (
    VisualizationGenerator,
    format_tick
)

__all__ = [
    'ChartType',
    'ChartStyle',
    'PointerEvent',
    'Tooltip',
    'HoverHandler',
    'format_record_tooltip',
    'format_mean_tooltip',
    'round_for_display',
    'VisualizationGenerator',
    'format_tick'
]

__version__ = "1.0.0"
