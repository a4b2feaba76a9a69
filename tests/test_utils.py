import pandas as pd
import pytest

from analysis import calculate_board_stats
from board import Board
from utils import SURVEY_COLUMNS, SurveyWriter, find_latest_file, get_next_filename


def test_get_next_filename_starts_at_one(tmp_path):
    target = tmp_path / "out"
    assert get_next_filename(str(target)) == str(target / "survey_1.parquet")
    assert target.is_dir()


def test_get_next_filename_skips_taken_indices(tmp_path):
    (tmp_path / "survey_1.parquet").touch()
    (tmp_path / "survey_7.parquet").touch()
    (tmp_path / "other_9.parquet").touch()
    assert get_next_filename(str(tmp_path)) == str(tmp_path / "survey_8.parquet")
    assert get_next_filename(str(tmp_path), "report", "json") == str(tmp_path / "report_1.json")


def test_find_latest_file(tmp_path):
    (tmp_path / "survey_2.parquet").touch()
    (tmp_path / "survey_10.parquet").touch()
    (tmp_path / "survey_3.csv").touch()
    path, error = find_latest_file(str(tmp_path), "survey")
    assert error is None
    assert path == str(tmp_path / "survey_10.parquet")


def test_find_latest_file_errors(tmp_path):
    path, error = find_latest_file(str(tmp_path / "missing"))
    assert path is None
    assert "not found" in error

    path, error = find_latest_file(str(tmp_path))
    assert path is None
    assert "No file matching" in error


def test_survey_writer_chunks(tmp_path):
    file_path = str(tmp_path / "survey_0.parquet")
    sizes = [(2, 1), (3, 3), (4, 2), (5, 5), (2, 6)]
    with SurveyWriter(file_path, chunk_size=2, silent=True) as writer:
        writer.process_stats(calculate_board_stats(Board(w, h)) for w, h in sizes)

    assert writer.total_rows == 5
    df = pd.read_parquet(file_path)
    assert list(df.columns) == SURVEY_COLUMNS
    assert list(zip(df["width"], df["height"])) == sizes
    assert df["is_spanning_tree"].dtype == bool
    assert df["is_spanning_tree"].all()
    assert (df["lit_nodes"] == df["nodes"]).all()


def test_survey_writer_without_rows_writes_nothing(tmp_path):
    file_path = tmp_path / "survey_0.parquet"
    with SurveyWriter(str(file_path), silent=True) as writer:
        pass
    assert writer.total_rows == 0
    assert not file_path.exists()


def test_survey_writer_reports_only_clean_exits(tmp_path, capsys):
    with SurveyWriter(str(tmp_path / "survey_1.parquet")) as writer:
        writer.write(calculate_board_stats(Board(2, 2)))
    assert "Finished" in capsys.readouterr().out

    with pytest.raises(RuntimeError):
        with SurveyWriter(str(tmp_path / "survey_2.parquet")) as writer:
            writer.write(calculate_board_stats(Board(2, 2)))
            raise RuntimeError("worker died")
    assert "Finished" not in capsys.readouterr().out
