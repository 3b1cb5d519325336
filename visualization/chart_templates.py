"""
Chart styling and configuration for the viewership bar chart.
"""

from typing import Optional
from enum import Enum


class ChartType(str, Enum):
    """Supported chart types."""
    BAR = "bar"


class ChartStyle:
    """Styling for bars, the mean reference line, axes and tooltips."""

    def __init__(
        self,
        title: Optional[str] = None,
        x_label: str = "Year",
        y_label: str = "Average Viewers (millions)",
        actual_color: str = "steelblue",
        projected_color: str = "gray",
        bar_width: float = 25,
        bar_inset: float = 1,
        mean_line_color: str = "black",
        mean_line_width: float = 3,
        mean_line_dash: str = "10px,3px",
        axis_color: str = "black",
        tick_size: float = 6,
        tick_padding: float = 3,
        font_size: int = 10,
        label_font_size: int = 12,
        tooltip_offset: float = 10,
        template: str = "plotly_white"
    ):
        self.chart_type = ChartType.BAR
        self.title = title
        self.x_label = x_label
        self.y_label = y_label
        self.actual_color = actual_color
        self.projected_color = projected_color
        self.bar_width = bar_width
        self.bar_inset = bar_inset
        self.mean_line_color = mean_line_color
        self.mean_line_width = mean_line_width
        self.mean_line_dash = mean_line_dash
        self.axis_color = axis_color
        self.tick_size = tick_size
        self.tick_padding = tick_padding
        self.font_size = font_size
        self.label_font_size = label_font_size
        self.tooltip_offset = tooltip_offset
        self.template = template

    def bar_color(self, is_actual: bool) -> str:
        return self.actual_color if is_actual else self.projected_color
