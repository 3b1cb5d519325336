"""
Tests for the record schema and CSV loading.
"""

import os

import pytest
from pydantic import ValidationError
from chart_data.loader import DatasetLoadError, load_dataset
from chart_data.models import SEASON_COLUMNS, Dataset, SeasonRecord, is_actual


HEADER = ",".join(SEASON_COLUMNS)

SAMPLE_CSV = os.path.join(os.path.dirname(__file__), "..", "data", "barData.csv")


def _write_csv(tmp_path, *rows):
    path = tmp_path / "seasons.csv"
    path.write_text("\n".join((HEADER,) + rows) + "\n")
    return str(path)


class TestSeasonRecord:
    """Test the record schema."""

    def test_record_from_csv_columns(self):
        record = SeasonRecord(**{
            "Season": 3,
            "year": 2012,
            "num_episodes": 22,
            "avg_views": "5.87",
            "Data": "Actual",
            "most_viewed_title": "Homecoming",
            "max_views": 7.12
        })

        assert record.season == 3
        assert record.avg_views == pytest.approx(5.87)
        assert record.data_status == "Actual"
        assert is_actual(record.dict(by_alias=True))

    def test_projected_record(self):
        record = SeasonRecord(**{
            "Season": 11, "year": 2020, "num_episodes": 16, "avg_views": 3.18,
            "Data": "Projected", "most_viewed_title": "Untitled", "max_views": 3.9
        })
        assert not is_actual(record.dict(by_alias=True))

    def test_rejects_negative_views(self):
        with pytest.raises(ValidationError):
            SeasonRecord(**{
                "Season": 1, "year": 2010, "num_episodes": 13, "avg_views": -1,
                "Data": "Actual", "most_viewed_title": "Pilot", "max_views": 5.6
            })

    def test_rejects_blank_title(self):
        with pytest.raises(ValidationError):
            SeasonRecord(**{
                "Season": 1, "year": 2010, "num_episodes": 13, "avg_views": 4.4,
                "Data": "Actual", "most_viewed_title": "   ", "max_views": 5.6
            })


class TestLoadDataset:
    """Test loading and validating a CSV file."""

    def test_load_valid_file(self, tmp_path):
        path = _write_csv(
            tmp_path,
            "1,2018,10,1.02,Actual,Opening Night,1.4",
            "2,2019,12,1.18,Actual,The Storm,1.6",
            "3,2020,8,0.95,Projected,Finale,1.1"
        )

        dataset = load_dataset(path)

        assert isinstance(dataset, Dataset)
        assert len(dataset) == 3
        assert dataset.columns == SEASON_COLUMNS
        assert [r["year"] for r in dataset] == [2018, 2019, 2020]
        assert dataset[1]["avg_views"] == pytest.approx(1.18)
        assert dataset[2]["Data"] == "Projected"

    def test_records_are_read_only(self, tmp_path):
        path = _write_csv(tmp_path, "1,2018,10,1.02,Actual,Opening Night,1.4")
        dataset = load_dataset(path)

        with pytest.raises(TypeError):
            dataset[0]["avg_views"] = 9.9

    def test_extra_columns_are_kept(self, tmp_path):
        path = tmp_path / "extra.csv"
        path.write_text(HEADER + ",network\n1,2018,10,1.02,Actual,Opening Night,1.4,ABC\n")

        dataset = load_dataset(str(path))

        assert dataset[0]["network"] == "ABC"

    def test_header_only_file_is_empty_dataset(self, tmp_path):
        path = _write_csv(tmp_path)
        assert len(load_dataset(path)) == 0

    def test_missing_file(self, tmp_path):
        with pytest.raises(DatasetLoadError) as exc_info:
            load_dataset(str(tmp_path / "nope.csv"))
        assert "not found" in str(exc_info.value)

    def test_blank_file(self, tmp_path):
        path = tmp_path / "blank.csv"
        path.write_text("")
        with pytest.raises(DatasetLoadError):
            load_dataset(str(path))

    def test_missing_columns(self, tmp_path):
        path = tmp_path / "partial.csv"
        path.write_text("year,avg_views\n2018,1.02\n")

        with pytest.raises(DatasetLoadError) as exc_info:
            load_dataset(str(path))

        assert "missing required columns" in str(exc_info.value)
        assert "Season" in str(exc_info.value)

    def test_invalid_row_reports_line(self, tmp_path):
        path = _write_csv(
            tmp_path,
            "1,2018,10,1.02,Actual,Opening Night,1.4",
            "2,2019,12,lots,Actual,The Storm,1.6"
        )

        with pytest.raises(DatasetLoadError) as exc_info:
            load_dataset(path)

        assert "Row 3" in str(exc_info.value)
        assert "avg_views" in str(exc_info.value)

    def test_empty_cell_is_invalid(self, tmp_path):
        path = _write_csv(tmp_path, "1,2018,10,,Actual,Opening Night,1.4")
        with pytest.raises(DatasetLoadError):
            load_dataset(path)

    @pytest.mark.parametrize("title", ["NA", "None", "null", "N/A", "nan"])
    def test_na_like_titles_are_text(self, tmp_path, title):
        """Episode titles that look like missing markers are kept as text."""
        path = _write_csv(tmp_path, f"1,2018,10,1.02,Actual,{title},1.4")

        dataset = load_dataset(path)

        assert dataset[0]["most_viewed_title"] == title

    def test_schema_can_be_skipped(self, tmp_path):
        path = tmp_path / "loose.csv"
        path.write_text("year,avg_views\n2018,1.02\n2019,1.18\n")

        dataset = load_dataset(str(path), schema=None, required_columns=["year", "avg_views"])

        assert len(dataset) == 2

    def test_bundled_sample_data(self):
        dataset = load_dataset(SAMPLE_CSV)

        assert len(dataset) == 12
        assert {r["Data"] for r in dataset} == {"Actual", "Projected"}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
