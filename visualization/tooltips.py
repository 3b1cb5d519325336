"""
Tooltip text and hover handling.

Display rounding here is for the overlay only; it never touches the
summary statistics it is given.
"""

import math
from html import escape as _html_esc
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field

from chart_geometry.models import FieldSelectors, SummaryStats


class PointerEvent(BaseModel):
    """Pointer position passed explicitly to hover callbacks."""
    page_x: float = Field(..., description="Pointer x in page pixels")
    page_y: float = Field(..., description="Pointer y in page pixels")


class Tooltip(BaseModel):
    """Overlay state returned by the hover handler."""
    html: str = Field("", description="Overlay content")
    left: float = Field(0, description="Overlay x in page pixels")
    top: float = Field(0, description="Overlay y in page pixels")
    opacity: float = Field(0, description="1 when shown, 0 when hidden", ge=0, le=1)

    @property
    def visible(self) -> bool:
        return self.opacity > 0


def round_for_display(value: float) -> float:
    """Round half up to one decimal place."""
    return math.floor(value * 10 + 0.5) / 10


def format_display_number(value: Any) -> str:
    """Shortest text for a number: 5.0 -> '5', 5.10 -> '5.1'."""
    if value is None:
        return "N/A"
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "N/A"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def _text(value: Any) -> str:
    return _html_esc(format_display_number(value))


def format_record_tooltip(record: Mapping[str, Any], fields: FieldSelectors) -> str:
    """Overlay content for one bar."""
    avg = record.get(fields.value_field)
    avg_text = format_display_number(round_for_display(float(avg))) if avg is not None else "N/A"

    lines = [
        f"Season #{_text(record.get('Season'))}",
        f"Year: {_text(record.get(fields.category_field))}",
        f"Episodes: {_text(record.get('num_episodes'))}",
        f"Average Viewers (millions): {_html_esc(avg_text)}",
        "",
        f"Most Watched Episode: {_text(record.get('most_viewed_title'))}",
        f"Viewers (millions): {_text(record.get('max_views'))}",
    ]
    return "<br>".join(lines)


def format_mean_tooltip(mean: float) -> str:
    """Overlay content for the mean reference line."""
    return f"Overall Average = {format_display_number(round_for_display(mean))}"


class HoverHandler:
    """
    Builds tooltip state for hover events.
    The pointer position always arrives as an explicit PointerEvent.

    The plotly figure only uses ``bar_text`` / ``mean_text`` for its hover
    labels; plotly places those labels itself. ``on_mousemove`` and
    ``on_mouseout`` are the explicit-event API for hosts that embed the chart
    and draw their own tooltip element at ``(page_x + offset, page_y + offset)``.
    """

    def __init__(self, fields: FieldSelectors, summary: SummaryStats, offset: float = 10):
        self.fields = fields
        self.summary = summary
        self.offset = offset

    def bar_text(self, record: Mapping[str, Any]) -> str:
        return format_record_tooltip(record, self.fields)

    def mean_text(self) -> str:
        return format_mean_tooltip(self.summary.mean)

    def _show(self, html: str, event: PointerEvent) -> Tooltip:
        return Tooltip(
            html=html,
            left=event.page_x + self.offset,
            top=event.page_y + self.offset,
            opacity=1
        )

    def on_mousemove(self, event: PointerEvent, record: Optional[Mapping[str, Any]] = None) -> Tooltip:
        """
        Tooltip for the hovered element: a bar when ``record`` is given,
        otherwise the mean reference line.
        """
        if record is not None:
            return self._show(self.bar_text(record), event)
        return self._show(self.mean_text(), event)

    def on_mouseout(self) -> Tooltip:
        return Tooltip(opacity=0)
