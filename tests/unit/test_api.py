"""
Unit tests for the top-level convenience functions (unix_dsv).

Tests parse_string, read_records, iter_records and read_frame using
synthetic files written to ``tmp_path``.
"""

from __future__ import annotations

import pytest

import unix_dsv
from unix_dsv import (
    FileOpenError,
    iter_records,
    parse_string,
    read_frame,
    read_records,
)
from unix_dsv.dialect_registry import Dialect

PASSWD_SAMPLE = """\
root:x:0:0:root:/root:/bin/sh
bin:x:1:1:bin:/bin:/bin/sh

backup:x:34:34:Backup\\: nightly:/var/backups:/usr/sbin/nologin
"""


@pytest.fixture()
def passwd_file(tmp_path):
    path = tmp_path / "passwd"
    path.write_text(PASSWD_SAMPLE, encoding="utf-8")
    return path


class TestParseString:

    def test_escaped_separator(self):
        assert parse_string("a\\:b:c\n") == [["a:b", "c"]]

    def test_trailing_record(self):
        assert parse_string("a:b\nc") == [["a", "b"], ["c"]]

    def test_other_dialect(self):
        assert parse_string("a|b\n", Dialect(separator="|", escape="\\")) == [["a", "b"]]


class TestReadRecords:

    def test_passwd(self, passwd_file):
        records = read_records(passwd_file)
        assert len(records) == 3
        assert records[2][4] == "Backup: nightly"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileOpenError):
            read_records(tmp_path / "missing")


class TestIterRecords:

    def test_matches_read_records(self, passwd_file):
        assert list(iter_records(passwd_file)) == read_records(passwd_file)

    def test_small_chunks(self, passwd_file, monkeypatch):
        """Chunk boundaries (even mid-escape) do not change the records."""
        monkeypatch.setattr(unix_dsv, "_CHUNK_SIZE", 3)
        assert list(iter_records(passwd_file)) == read_records(passwd_file)

    def test_trailing_record_without_line_feed(self, tmp_path):
        path = tmp_path / "t.dsv"
        path.write_text("a:b\nc:d", encoding="utf-8")
        assert list(iter_records(path)) == [["a", "b"], ["c", "d"]]

    def test_is_lazy(self, passwd_file):
        it = iter_records(passwd_file)
        assert next(it)[0] == "root"
        it.close()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileOpenError):
            next(iter_records(tmp_path / "missing"))


class TestReadFrame:

    def test_columns(self, passwd_file):
        cols = ["user", "password", "uid", "gid", "gecos", "home", "shell"]
        df = read_frame(passwd_file, columns=cols)
        assert list(df.columns) == cols
        assert df["user"].tolist() == ["root", "bin", "backup"]
        assert df.loc[2, "gecos"] == "Backup: nightly"

    def test_header(self, tmp_path):
        path = tmp_path / "h.dsv"
        path.write_text("name:size\na:1\nb:2\n", encoding="utf-8")
        df = read_frame(path, header=True)
        assert list(df.columns) == ["name", "size"]
        assert df["size"].tolist() == ["1", "2"]
