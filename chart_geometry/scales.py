"""
Scale primitives for mapping data onto the pixel viewport.

BandScale splits a horizontal span into equal slots, one per category.
LinearScale maps a numeric domain onto a pixel range and can round its
domain outward ("nice") so axis ticks land on readable values.
The tick arithmetic follows the usual 1-2-5 decade stepping used by
d3-array, so a chart drawn from these scales lines up with browser charts.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Hashable, List, Mapping, Sequence, Tuple

from chart_geometry.errors import EmptyDatasetError
from chart_geometry.fields import read_category
from chart_geometry.models import SummaryStats, Viewport

DEFAULT_TICK_COUNT = 10

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def _tick_spec(start: float, stop: float, count: float) -> Tuple[int, int, float]:
    """
    Return ``(i1, i2, inc)`` describing ticks between start and stop.
    A negative ``inc`` means ticks are ``i / -inc`` (sub-unit steps), otherwise ``i * inc``.
    """
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / math.pow(10, power)

    if error >= _E10:
        factor = 10
    elif error >= _E5:
        factor = 5
    elif error >= _E2:
        factor = 2
    else:
        factor = 1

    if power < 0:
        inc = math.pow(10, -power) / factor
        i1 = _round_half_up(start * inc)
        i2 = _round_half_up(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = math.pow(10, power) * factor
        i1 = _round_half_up(start / inc)
        i2 = _round_half_up(stop / inc)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1

    if i2 < i1 and 0.5 <= count < 2:
        return _tick_spec(start, stop, count * 2)

    return i1, i2, inc


def tick_increment(start: float, stop: float, count: float = DEFAULT_TICK_COUNT) -> float:
    """Tick step for ``[start, stop]``; negative values encode ``1 / -step``."""
    return _tick_spec(start, stop, count)[2]


def ticks(start: float, stop: float, count: float = DEFAULT_TICK_COUNT) -> List[float]:
    """Evenly spaced, human-readable tick values within ``[start, stop]``."""
    if not count > 0:
        return []
    if start == stop:
        return [start]

    reverse = stop < start
    if reverse:
        i1, i2, inc = _tick_spec(stop, start, count)
    else:
        i1, i2, inc = _tick_spec(start, stop, count)

    if not i2 >= i1:
        return []

    n = i2 - i1 + 1
    if reverse:
        indices = [i2 - i for i in range(n)]
    else:
        indices = [i1 + i for i in range(n)]

    if inc < 0:
        return [i / -inc for i in indices]
    return [i * inc for i in indices]


def nice_domain(start: float, stop: float, count: float = DEFAULT_TICK_COUNT) -> Tuple[float, float]:
    """
    Extend ``[start, stop]`` outward to tick-aligned bounds.
    Iterates until the tick step stops changing.
    """
    if start == stop or not (math.isfinite(start) and math.isfinite(stop)):
        return start, stop

    reverse = stop < start
    if reverse:
        start, stop = stop, start

    previous_step = None
    for _ in range(10):
        step = tick_increment(start, stop, count)
        if step == previous_step:
            break
        if step > 0:
            start = math.floor(start / step) * step
            stop = math.ceil(stop / step) * step
        elif step < 0:
            start = math.ceil(start * step) / step
            stop = math.floor(stop * step) / step
        else:
            break
        previous_step = step

    # normalise -0.0
    start, stop = start + 0.0, stop + 0.0

    if reverse:
        return stop, start
    return start, stop


class LinearScale:
    """Linear, invertible map from a numeric domain to a pixel range."""

    def __init__(self, domain: Tuple[float, float], range_: Tuple[float, float]):
        self.domain = (float(domain[0]), float(domain[1]))
        self.range = (float(range_[0]), float(range_[1]))

    def nice(self, count: float = DEFAULT_TICK_COUNT) -> "LinearScale":
        """Return a copy whose domain is rounded outward to tick-friendly bounds."""
        return LinearScale(nice_domain(self.domain[0], self.domain[1], count), self.range)

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            return (r0 + r1) / 2
        t = (value - d0) / (d1 - d0)
        return r0 * (1 - t) + r1 * t

    def invert(self, pixel: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if r1 == r0:
            return d0
        t = (pixel - r0) / (r1 - r0)
        return d0 * (1 - t) + d1 * t

    def ticks(self, count: float = DEFAULT_TICK_COUNT) -> List[float]:
        return ticks(self.domain[0], self.domain[1], count)

    def __repr__(self) -> str:
        return f"LinearScale(domain={self.domain}, range={self.range})"


class BandScale:
    """
    Equal-width, contiguous bands across a horizontal span, one per
    distinct key, in the order the keys were given.
    """

    def __init__(self, domain: Sequence[Hashable], range_: Tuple[float, float]):
        keys: List[Hashable] = []
        seen = set()
        for key in domain:
            if key not in seen:
                seen.add(key)
                keys.append(key)

        if not keys:
            raise ValueError("BandScale requires at least one category")

        self.domain = tuple(keys)
        self.range = (float(range_[0]), float(range_[1]))
        self.step = (self.range[1] - self.range[0]) / len(keys)
        self._positions: Dict[Hashable, float] = {
            key: self.range[0] + self.step * i for i, key in enumerate(keys)
        }

    @property
    def bandwidth(self) -> float:
        return self.step

    def __call__(self, key: Hashable) -> float:
        """Start of the band reserved for ``key``."""
        try:
            return self._positions[key]
        except KeyError:
            raise KeyError(f"Category {key!r} is not in the scale domain")

    def center(self, key: Hashable) -> float:
        return self(key) + self.step / 2

    def __repr__(self) -> str:
        return f"BandScale(domain={list(self.domain)}, range={self.range})"


@dataclass(frozen=True)
class ScaleMapping:
    """The pair of pure mapping functions used to place bars."""
    x_scale: BandScale
    y_scale: LinearScale

    def category_to_position(self, key: Hashable) -> float:
        return self.x_scale(key)

    def value_to_pixel(self, value: float) -> float:
        return self.y_scale(value)


def build_scales(
    dataset: Sequence[Mapping[str, Any]],
    category_field: str,
    summary: SummaryStats,
    viewport: Viewport,
    tick_count: int = DEFAULT_TICK_COUNT
) -> ScaleMapping:
    """
    Build the category band scale and the (niced) value scale for a viewport.

    Categories keep their first-seen order and share ``[margin_left, width]``;
    values ``[0, max_gridded]`` map onto ``[height, margin_top]`` so larger
    values sit higher on screen.

    Raises:
        EmptyDatasetError: the dataset has no records.
        InvalidFieldError: ``category_field`` is missing on a record.
    """
    if len(dataset) == 0:
        raise EmptyDatasetError("Cannot build category bands for an empty dataset")

    keys = [read_category(record, category_field, index) for index, record in enumerate(dataset)]

    x_scale = BandScale(keys, (viewport.margin_left, viewport.width))
    y_scale = LinearScale(
        (0, summary.max_gridded),
        (viewport.height, viewport.margin_top)
    ).nice(tick_count)

    return ScaleMapping(x_scale=x_scale, y_scale=y_scale)
