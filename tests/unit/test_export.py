"""
Unit tests for the exporter (unix_dsv.export).

Tests CSV and Parquet export, directory creation, and error handling
using pytest's tmp_path fixture.
"""

from __future__ import annotations

import pandas as pd
import pytest

from unix_dsv.exceptions import ExportError
from unix_dsv.export import export_frame


def _make_df() -> pd.DataFrame:
    return pd.DataFrame({
        "user": ["root", "bin"],
        "uid": [0, 1],
        "shell": ["/bin/sh", "/bin/sh"],
    })


class TestExportCSV:

    def test_basic_csv_export(self, tmp_path):
        path = export_frame(_make_df(), tmp_path, "passwd", output_format="csv")
        assert path.endswith("passwd.csv")
        loaded = pd.read_csv(path)
        assert loaded["user"].tolist() == ["root", "bin"]
        assert loaded["uid"].tolist() == [0, 1]

    def test_creates_output_dir(self, tmp_path):
        out = tmp_path / "a" / "b"
        export_frame(_make_df(), out, "t", output_format="csv")
        assert (out / "t.csv").exists()


class TestExportParquet:

    def test_basic_parquet_export(self, tmp_path):
        path = export_frame(_make_df(), tmp_path, "passwd")
        assert path.endswith("passwd.parquet")
        loaded = pd.read_parquet(path)
        pd.testing.assert_frame_equal(loaded, _make_df())

    def test_integer_column_labels(self, tmp_path):
        df = pd.DataFrame([["a", "b"]])
        path = export_frame(df, tmp_path, "positional")
        assert list(pd.read_parquet(path).columns) == ["0", "1"]


class TestExportErrors:

    def test_unsupported_format(self, tmp_path):
        with pytest.raises(ExportError, match="Unsupported output format"):
            export_frame(_make_df(), tmp_path, "t", output_format="xlsx")

    def test_write_failure_wrapped(self, tmp_path):
        # A directory where the output file should go makes the write fail.
        (tmp_path / "t.csv").mkdir()
        with pytest.raises(ExportError, match="Failed to write t.csv"):
            export_frame(_make_df(), tmp_path, "t", output_format="csv")
