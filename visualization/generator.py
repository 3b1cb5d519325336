# visualization/generator.py

"""
Plotly rendering surface for the viewership bar chart.
Geometry is computed elsewhere; this module only draws it.

The figure is laid out in pixel space: both plotly axes are hidden and
span the whole surface (y grows downward), so every shape lands exactly
where the scale mapping puts it. Axes, ticks and labels are drawn
explicitly from the same scales.
"""

import logging
import math
import os
from typing import Any, Dict, List, Mapping, Optional, Sequence

import plotly.graph_objects as go

from chart_data.models import is_actual
from chart_geometry.models import FieldSelectors, SummaryStats, Viewport
from chart_geometry.scales import ScaleMapping
from visualization.chart_templates import ChartStyle, ChartType
from visualization.tooltips import HoverHandler

# Spacing of hover points along the mean line
_MEAN_LINE_SAMPLE_PX = 5


def _ensure_dir(path: Optional[str]) -> None:
    if path:
        d = os.path.dirname(path)
        if d and not os.path.exists(d):
            os.makedirs(d, exist_ok=True)


def format_tick(value: float, step: float) -> str:
    """Fixed-point tick label with just enough decimals for ``step``."""
    if step <= 0:
        return f"{value:,g}"
    precision = max(0, -math.floor(math.log10(abs(step)) + 1e-9))
    return f"{value:,.{precision}f}"


class VisualizationGenerator:
    """
    Draws bars, axes, labels and the mean reference line onto a plotly
    figure from a finished ScaleMapping.
    Same geometry ALWAYS produces the same figure.
    """

    def __init__(self, style: Optional[ChartStyle] = None):
        self.style = style or ChartStyle()
        self.logger = logging.getLogger(__name__)

    def generate_bar_chart(
        self,
        dataset: Sequence[Mapping[str, Any]],
        fields: FieldSelectors,
        summary: SummaryStats,
        scales: ScaleMapping,
        viewport: Viewport
    ) -> go.Figure:
        """Build the full interactive chart."""
        hover = HoverHandler(fields, summary, offset=self.style.tooltip_offset)

        fig = go.Figure()
        self._apply_layout(fig, viewport)
        self._draw_bars(fig, dataset, fields, scales, viewport, hover)
        self._draw_axes(fig, scales, viewport)
        self._draw_labels(fig, viewport)
        self._draw_mean_line(fig, summary, scales, viewport, hover)

        self.logger.debug(
            f"Generated {self.style.chart_type.value} chart: {len(dataset)} bars, "
            f"mean line at y={scales.value_to_pixel(summary.mean):.1f}px"
        )
        return fig

    def _apply_layout(self, fig: go.Figure, viewport: Viewport) -> None:
        fig.update_layout(
            template=self.style.template,
            width=viewport.surface_width,
            height=viewport.surface_height,
            margin=dict(l=0, r=0, t=0, b=0),
            showlegend=False,
            hovermode="closest",
            dragmode=False,
            plot_bgcolor="white",
            paper_bgcolor="white",
            hoverlabel=dict(bgcolor="white", font=dict(color="black"), align="left"),
            xaxis=dict(visible=False, range=[0, viewport.surface_width], fixedrange=True),
            yaxis=dict(visible=False, range=[viewport.surface_height, 0], fixedrange=True)
        )
        if self.style.title:
            fig.update_layout(title=dict(text=self.style.title, x=0.5, y=0.98))

    def _draw_bars(
        self,
        fig: go.Figure,
        dataset: Sequence[Mapping[str, Any]],
        fields: FieldSelectors,
        scales: ScaleMapping,
        viewport: Viewport,
        hover: HoverHandler
    ) -> None:
        inset = self.style.bar_inset
        bar_width = max(0.0, min(self.style.bar_width, scales.x_scale.bandwidth - inset))
        baseline = viewport.height

        centers: List[float] = []
        lengths: List[float] = []
        colors: List[str] = []
        texts: List[str] = []

        for record in dataset:
            left = scales.category_to_position(record[fields.category_field]) + inset
            top = scales.value_to_pixel(float(record[fields.value_field]))
            centers.append(left + bar_width / 2)
            # y grows downward, so bars extend upward from the baseline
            lengths.append(top - baseline)
            colors.append(self.style.bar_color(is_actual(record)))
            texts.append(hover.bar_text(record))

        fig.add_trace(go.Bar(
            x=centers,
            y=lengths,
            base=[baseline] * len(centers),
            width=[bar_width] * len(centers),
            marker=dict(color=colors, line=dict(width=0)),
            hovertext=texts,
            hovertemplate="%{hovertext}<extra></extra>",
            name="bars"
        ))

    def _draw_axes(self, fig: go.Figure, scales: ScaleMapping, viewport: Viewport) -> None:
        color = self.style.axis_color
        tick = self.style.tick_size
        pad = self.style.tick_padding
        font = dict(size=self.style.font_size, color=color)

        # bottom axis along the baseline
        x0, x1 = scales.x_scale.range
        y = viewport.height
        fig.add_shape(type="line", x0=x0, x1=x1, y0=y, y1=y,
                      xref="x", yref="y", line=dict(color=color, width=1))
        for key in scales.x_scale.domain:
            cx = scales.x_scale.center(key)
            fig.add_shape(type="line", x0=cx, x1=cx, y0=y, y1=y + tick,
                          xref="x", yref="y", line=dict(color=color, width=1))
            fig.add_annotation(x=cx, y=y + tick + pad, text=str(key), showarrow=False,
                               xref="x", yref="y", xanchor="center", yanchor="top", font=font)

        # left axis at the left margin
        x = viewport.margin_left
        y0, y1 = scales.y_scale.range
        fig.add_shape(type="line", x0=x, x1=x, y0=y0, y1=y1,
                      xref="x", yref="y", line=dict(color=color, width=1))
        values = scales.y_scale.ticks()
        step = values[1] - values[0] if len(values) > 1 else 0
        for value in values:
            py = scales.value_to_pixel(value)
            fig.add_shape(type="line", x0=x - tick, x1=x, y0=py, y1=py,
                          xref="x", yref="y", line=dict(color=color, width=1))
            fig.add_annotation(x=x - tick - pad, y=py, text=format_tick(value, step), showarrow=False,
                               xref="x", yref="y", xanchor="right", yanchor="middle", font=font)

    def _draw_labels(self, fig: go.Figure, viewport: Viewport) -> None:
        font = dict(size=self.style.label_font_size, color=self.style.axis_color)

        fig.add_annotation(
            x=(viewport.width + viewport.margin_left) / 2,
            y=viewport.height + viewport.margin_top,
            text=self.style.x_label, showarrow=False,
            xref="x", yref="y", xanchor="center", yanchor="bottom", font=font
        )
        fig.add_annotation(
            x=15, y=(viewport.margin_top + viewport.height) / 2,
            text=self.style.y_label, showarrow=False, textangle=-90,
            xref="x", yref="y", xanchor="left", yanchor="middle", font=font
        )

    def _draw_mean_line(
        self,
        fig: go.Figure,
        summary: SummaryStats,
        scales: ScaleMapping,
        viewport: Viewport,
        hover: HoverHandler
    ) -> None:
        y = scales.value_to_pixel(summary.mean)
        x0, x1 = viewport.margin_left, viewport.width

        # plotly only hovers at points, so sample the line densely
        count = max(2, int((x1 - x0) // _MEAN_LINE_SAMPLE_PX) + 1)
        xs = [x0 + (x1 - x0) * i / (count - 1) for i in range(count)]
        text = hover.mean_text()

        fig.add_trace(go.Scatter(
            x=xs,
            y=[y] * count,
            mode="lines",
            line=dict(
                color=self.style.mean_line_color,
                width=self.style.mean_line_width,
                dash=self.style.mean_line_dash
            ),
            hovertext=[text] * count,
            hovertemplate="%{hovertext}<extra></extra>",
            name="mean"
        ))

    def figure_to_dict(self, fig: go.Figure) -> Dict[str, Any]:
        """Convert Plotly figure to dictionary representation."""
        fig_dict = fig.to_dict()
        return {
            "type": "plotly",
            "chart_type": ChartType.BAR.value,
            "figure": fig_dict,
            "layout": fig_dict.get('layout', {}),
            "data": fig_dict.get('data', [])
        }

    def render(self, fig: go.Figure, output_html: Optional[str] = None) -> Optional[str]:
        """
        Show the chart on screen, or write it to ``output_html`` when given.
        Returns the written path, if any.
        """
        if output_html:
            _ensure_dir(output_html)
            fig.write_html(output_html)
            self.logger.info(f"Chart written to {output_html}")
            return output_html

        self.logger.info("Opening chart")
        fig.show()
        return None
