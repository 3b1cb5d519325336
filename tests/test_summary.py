"""
Tests for summary statistics over the value column.
"""

import math
import random

import pytest
from chart_geometry.summary import GRID_STEP, compute_summary, snap_up
from chart_geometry.errors import EmptyDatasetError, InvalidFieldError


SEASONS = [
    {"year": 2018, "avg_views": 1.02},
    {"year": 2019, "avg_views": 1.18},
    {"year": 2020, "avg_views": 0.95},
]


def _random_dataset(seed: int, size: int):
    rng = random.Random(seed)
    return [
        {"year": 2000 + i, "avg_views": round(rng.uniform(0.01, 25.0), 2)}
        for i in range(size)
    ]


def _is_grid_multiple(value: float, step: float) -> bool:
    ratio = value / step
    return abs(ratio - round(ratio)) < 1e-9


class TestComputeSummary:
    """Test mean and gridded maximum."""

    def test_concrete_seasons(self):
        """Three seasons snap to 1.2 with a mean of 1.05."""
        summary = compute_summary(SEASONS, "avg_views")

        assert summary.max_gridded == pytest.approx(1.20)
        assert summary.mean == pytest.approx(1.05)

    def test_exact_grid_value(self):
        """1.18 lands exactly on 1.2, without binary drift."""
        summary = compute_summary([{"avg_views": 1.18}], "avg_views")
        assert summary.max_gridded == 1.2

    def test_value_already_on_grid(self):
        """A maximum on the grid is not pushed up a step."""
        summary = compute_summary([{"v": 1.5}, {"v": 0.2}], "v")
        assert summary.max_gridded == pytest.approx(1.5)

    @pytest.mark.parametrize("seed", range(8))
    def test_gridded_max_is_tightest_bound(self, seed):
        """Gridded max is a grid multiple, at or above every value, below max + step."""
        dataset = _random_dataset(seed, size=5 + seed * 3)
        true_max = max(r["avg_views"] for r in dataset)

        summary = compute_summary(dataset, "avg_views")

        assert _is_grid_multiple(summary.max_gridded, GRID_STEP)
        assert summary.max_gridded >= true_max - 1e-12
        assert summary.max_gridded < true_max + GRID_STEP

    @pytest.mark.parametrize("seed", range(8))
    def test_per_record_snapping_matches_snapping_final_max(self, seed):
        """Snapping each value before the running max equals snapping the max once."""
        dataset = _random_dataset(seed, size=12)
        true_max = max(r["avg_views"] for r in dataset)

        summary = compute_summary(dataset, "avg_views")

        assert summary.max_gridded == pytest.approx(snap_up(true_max, GRID_STEP))

    @pytest.mark.parametrize("seed", range(5))
    def test_mean_is_permutation_invariant(self, seed):
        """Shuffling records does not change the mean."""
        dataset = _random_dataset(seed, size=20)
        expected = sum(r["avg_views"] for r in dataset) / len(dataset)

        shuffled = list(dataset)
        random.Random(seed + 100).shuffle(shuffled)

        assert compute_summary(dataset, "avg_views").mean == pytest.approx(expected)
        assert compute_summary(shuffled, "avg_views").mean == pytest.approx(expected)

    def test_numeric_strings_are_coerced(self):
        """CSV text values are read as numbers."""
        summary = compute_summary([{"v": "2.5"}, {"v": " 1.5 "}], "v")

        assert summary.mean == pytest.approx(2.0)
        assert summary.max_gridded == pytest.approx(2.5)

    def test_non_unit_grid_step(self):
        """Steps that are not 1/n still snap upward."""
        summary = compute_summary([{"v": 0.7}], "v", grid_step=0.3)
        assert summary.max_gridded == pytest.approx(0.9)

    @pytest.mark.parametrize("step", [0.15, 0.3, 0.35, 0.75])
    def test_non_unit_step_keeps_on_grid_values(self, step):
        """Values already on a non-1/n grid stay put and the result is not drifted."""
        for k in range(1, 60):
            value = round(k * step, 9)
            summary = compute_summary([{"v": value}, {"v": 0.0}], "v", grid_step=step)

            assert summary.max_gridded < value + step
            assert summary.max_gridded == pytest.approx(value)
            assert summary.max_gridded == round(summary.max_gridded, 2)

    def test_non_unit_step_examples(self):
        """1.05 stays 1.05 and 3.45 stays 3.45 on a 0.15 grid."""
        assert compute_summary([{"v": 1.05}], "v", grid_step=0.15).max_gridded == 1.05
        assert compute_summary([{"v": 3.45}], "v", grid_step=0.15).max_gridded == 3.45
        assert snap_up(2.1, 0.15) == 2.1
        assert snap_up(2.11, 0.15) == 2.25

    def test_invalid_grid_step(self):
        """A zero or negative step is rejected."""
        with pytest.raises(ValueError):
            compute_summary(SEASONS, "avg_views", grid_step=0)


class TestSummaryErrors:
    """Test failure modes."""

    def test_empty_dataset(self):
        """Empty input fails instead of returning NaN."""
        with pytest.raises(EmptyDatasetError):
            compute_summary([], "avg_views")

    def test_missing_field(self):
        """A row without the value field names the field."""
        dataset = [
            {"year": 2018, "avg_views": 1.02},
            {"year": 2019},
        ]

        with pytest.raises(InvalidFieldError) as exc_info:
            compute_summary(dataset, "avg_views")

        assert exc_info.value.field_name == "avg_views"
        assert exc_info.value.record_index == 1
        assert "avg_views" in str(exc_info.value)

    @pytest.mark.parametrize("bad_value", ["abc", "", None, float("nan"), True, [1.0]])
    def test_non_numeric_value(self, bad_value):
        """Text, blanks, NaN and booleans are not numbers."""
        dataset = [{"avg_views": 1.0}, {"avg_views": bad_value}]

        with pytest.raises(InvalidFieldError) as exc_info:
            compute_summary(dataset, "avg_views")

        assert exc_info.value.field_name == "avg_views"

    def test_errors_are_value_errors(self):
        """Callers catching ValueError also catch geometry errors."""
        with pytest.raises(ValueError):
            compute_summary([], "avg_views")


class TestSnapUp:
    """Test single-value snapping."""

    def test_snap_up(self):
        assert snap_up(1.01) == pytest.approx(1.05)
        assert snap_up(1.05) == pytest.approx(1.05)
        assert snap_up(0.0) == 0.0

    def test_snap_up_result_never_below_value(self):
        for value in [0.01, 0.33, 2.49, 7.77, 12.34]:
            snapped = snap_up(value)
            assert snapped >= value - 1e-12
            assert not math.isclose(snapped, value + GRID_STEP)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
