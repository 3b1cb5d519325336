"""
ChartGeometryComputer: turns a flat dataset into summary statistics and
scale mappings for a given viewport. Stateless after construction.
"""

from typing import Any, Mapping, Sequence, Tuple

from chart_geometry.models import FieldSelectors, SummaryStats, Viewport
from chart_geometry.scales import DEFAULT_TICK_COUNT, ScaleMapping, build_scales
from chart_geometry.summary import GRID_STEP, compute_summary


class ChartGeometryComputer:
    """
    Computes chart geometry for one field selection and viewport.
    Same inputs ALWAYS produce the same geometry.
    """

    def __init__(
        self,
        fields: FieldSelectors,
        viewport: Viewport,
        grid_step: float = GRID_STEP,
        tick_count: int = DEFAULT_TICK_COUNT
    ):
        if grid_step <= 0:
            raise ValueError(f"grid_step must be positive, got {grid_step}")
        self.fields = fields
        self.viewport = viewport
        self.grid_step = grid_step
        self.tick_count = tick_count

    def compute_summary(self, dataset: Sequence[Mapping[str, Any]]) -> SummaryStats:
        return compute_summary(dataset, self.fields.value_field, self.grid_step)

    def build_scales(self, dataset: Sequence[Mapping[str, Any]], summary: SummaryStats) -> ScaleMapping:
        return build_scales(
            dataset,
            self.fields.category_field,
            summary,
            self.viewport,
            tick_count=self.tick_count
        )

    def compute(self, dataset: Sequence[Mapping[str, Any]]) -> Tuple[SummaryStats, ScaleMapping]:
        """Summary first, then scales over the summary's gridded maximum."""
        summary = self.compute_summary(dataset)
        return summary, self.build_scales(dataset, summary)
