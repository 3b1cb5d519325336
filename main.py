# main.py

"""
Entry point: load the season CSV, compute chart geometry and show the
interactive bar chart.
"""

import logging
import sys
from typing import Optional

import plotly.graph_objects as go

from chart_data.loader import DatasetLoadError, load_dataset
from chart_geometry.computer import ChartGeometryComputer
from chart_geometry.errors import ChartGeometryError
from chart_geometry.models import FieldSelectors, Viewport
from visualization.chart_templates import ChartStyle
from visualization.generator import VisualizationGenerator
from config import CHART_CONFIG, VIEWPORT_CONFIG, APP_CONFIG, LOG_CONFIG


# Configure logging
logging.basicConfig(
    level=logging.INFO if not APP_CONFIG["debug"] else logging.DEBUG,
    format=LOG_CONFIG["format"],
    handlers=[
        logging.StreamHandler()
    ]
)
logger = logging.getLogger(__name__)


def build_viewport() -> Viewport:
    """Viewport from VIEWPORT_CONFIG."""
    return Viewport.from_surface(
        VIEWPORT_CONFIG["surface_width"],
        VIEWPORT_CONFIG["surface_height"],
        margin_top=VIEWPORT_CONFIG["margin_top"],
        margin_left=VIEWPORT_CONFIG["margin_left"],
        margin_bottom=VIEWPORT_CONFIG["margin_bottom"],
        margin_right=VIEWPORT_CONFIG["margin_right"]
    )


def draw_plot(
    data_path: str,
    fields: FieldSelectors,
    viewport: Viewport,
    generator: Optional[VisualizationGenerator] = None,
    grid_step: Optional[float] = None,
    tick_count: Optional[int] = None
) -> go.Figure:
    """
    Load the data once, derive summary and scales, and draw the figure.
    Grid step and tick count default to the current CHART_CONFIG values.

    Raises:
        DatasetLoadError: the file is missing, unreadable or malformed.
        ChartGeometryError: the data cannot be summarized (empty, bad field).
    """
    if grid_step is None:
        grid_step = CHART_CONFIG["grid_step"]
    if tick_count is None:
        tick_count = CHART_CONFIG["tick_count"]

    dataset = load_dataset(data_path)

    computer = ChartGeometryComputer(fields, viewport, grid_step=grid_step, tick_count=tick_count)
    summary, scales = computer.compute(dataset)
    logger.info(
        f"Summary of '{fields.value_field}': mean={summary.mean:.4f}, "
        f"max (gridded)={summary.max_gridded:g}, y domain={scales.y_scale.domain}"
    )

    generator = generator or VisualizationGenerator(ChartStyle(title=CHART_CONFIG["title"]))
    return generator.generate_bar_chart(dataset, fields, summary, scales, viewport)


def main() -> int:
    """Run the chart. Returns a process exit status."""
    try:
        fields = FieldSelectors(
            category_field=CHART_CONFIG["category_field"],
            value_field=CHART_CONFIG["value_field"]
        )
        viewport = build_viewport()
    except ValueError as e:
        logger.error(f"Invalid chart configuration: {e}")
        return 1

    generator = VisualizationGenerator(ChartStyle(title=CHART_CONFIG["title"]))

    try:
        fig = draw_plot(CHART_CONFIG["data_path"], fields, viewport, generator=generator)
    except DatasetLoadError as e:
        logger.error(f"Failed to load chart data: {e}")
        return 1
    except ChartGeometryError as e:
        logger.error(f"Cannot draw chart: {e}")
        return 1

    generator.render(fig, output_html=CHART_CONFIG["output_html"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
