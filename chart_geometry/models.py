"""
Pydantic models for chart geometry inputs and derived statistics.
Viewport and field selection are passed explicitly into every computation.
"""

from pydantic import BaseModel, Field, validator


class Viewport(BaseModel):
    """
    Pixel viewport for the chart.

    ``width`` and ``height`` are axis lengths; the drawing surface adds the
    left/right and top/bottom margins around them. The category axis spans
    ``[margin_left, width]`` and the value axis spans ``[height, margin_top]``.
    """
    margin_top: float = Field(50, description="Top margin in pixels", ge=0)
    margin_left: float = Field(70, description="Left margin in pixels", ge=0)
    margin_bottom: float = Field(20, description="Bottom margin in pixels", ge=0)
    margin_right: float = Field(10, description="Right margin in pixels", ge=0)
    width: float = Field(880, description="Horizontal axis length in pixels")
    height: float = Field(430, description="Vertical axis length in pixels")

    class Config:
        frozen = True

    @validator('width')
    def validate_width(cls, v, values):
        """The category range [margin_left, width] must not be empty."""
        margin_left = values.get('margin_left', 0)
        if v <= margin_left:
            raise ValueError(f"width ({v}) must be greater than margin_left ({margin_left})")
        return v

    @validator('height')
    def validate_height(cls, v, values):
        """The value range [height, margin_top] must not be empty."""
        margin_top = values.get('margin_top', 0)
        if v <= margin_top:
            raise ValueError(f"height ({v}) must be greater than margin_top ({margin_top})")
        return v

    @classmethod
    def from_surface(
        cls,
        surface_width: float,
        surface_height: float,
        margin_top: float = 50,
        margin_left: float = 70,
        margin_bottom: float = 20,
        margin_right: float = 10
    ) -> "Viewport":
        """Build a viewport from the full surface size by removing the margins."""
        return cls(
            margin_top=margin_top,
            margin_left=margin_left,
            margin_bottom=margin_bottom,
            margin_right=margin_right,
            width=surface_width - margin_left - margin_right,
            height=surface_height - margin_top - margin_bottom
        )

    @property
    def surface_width(self) -> float:
        return self.width + self.margin_left + self.margin_right

    @property
    def surface_height(self) -> float:
        return self.height + self.margin_top + self.margin_bottom


class FieldSelectors(BaseModel):
    """Which columns feed the category axis and the value axis."""
    category_field: str = Field("year", description="Column used for the category (x) axis")
    value_field: str = Field("avg_views", description="Numeric column used for the value (y) axis")

    class Config:
        frozen = True

    @validator('category_field', 'value_field')
    def validate_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("Field selectors must name a column")
        return v


class SummaryStats(BaseModel):
    """
    Read-only summary of the value column.
    ``max_gridded`` is the maximum rounded up to the grid step.
    """
    mean: float = Field(..., description="Arithmetic mean of the value field")
    max_gridded: float = Field(..., description="Maximum value rounded up to the grid step")

    class Config:
        frozen = True
