"""
Unit tests for sinks (unix_dsv.sinks).

Covers the Sink protocol and BaseSink ABC, the StringFieldBuffer
reference sink, RecordCollector/CallbackSink materialization and the
DataFrameSink table builder.
"""

from __future__ import annotations

import pandas as pd
import pytest

from unix_dsv.parser import DSVParser
from unix_dsv.sinks import (
    BaseSink,
    CallbackSink,
    DataFrameSink,
    EventRecorder,
    RecordCollector,
    Sink,
    StringFieldBuffer,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class JoinedFieldSink(StringFieldBuffer):
    """Minimal subclass: stores fields flat, records as field counts."""

    def __init__(self, binary: bool = False) -> None:
        super().__init__(binary=binary)
        self.fields = []
        self.record_sizes = []
        self._size = 0

    def on_record_start(self) -> None:
        self._size = 0

    def on_field_end(self) -> None:
        self.fields.append(self.field)
        self.clear_field()
        self._size += 1

    def on_record_end(self) -> None:
        self.record_sizes.append(self._size)


class DuckSink:
    """No base class at all; satisfies the protocol structurally."""

    def __init__(self) -> None:
        self.log = []

    def on_record_start(self):
        self.log.append("start")

    def on_field_character(self, c):
        self.log.append(c)

    def on_field_end(self):
        self.log.append("|")

    def on_record_end(self):
        self.log.append("end")

    def on_reset(self):
        self.log.append("reset")


def _collect(sink, text: str):
    parser = DSVParser(sink)
    parser.feed(text)
    parser.finish()
    return sink


# ---------------------------------------------------------------------------
# Contract
# ---------------------------------------------------------------------------

class TestContract:
    """Protocol and ABC forms of the sink contract."""

    def test_duck_typed_sink_is_a_sink(self):
        assert isinstance(DuckSink(), Sink)

    def test_duck_typed_sink_receives_events(self):
        sink = _collect(DuckSink(), "ab:c\n")
        assert sink.log == ["start", "a", "b", "|", "c", "|", "end"]

    def test_base_sink_is_abstract(self):
        with pytest.raises(TypeError):
            BaseSink()

    def test_string_field_buffer_requires_record_hooks(self):
        with pytest.raises(TypeError):
            StringFieldBuffer()

    def test_builtin_sinks_satisfy_protocol(self):
        for sink in (RecordCollector(), EventRecorder(), DataFrameSink()):
            assert isinstance(sink, Sink)


# ---------------------------------------------------------------------------
# StringFieldBuffer
# ---------------------------------------------------------------------------

class TestStringFieldBuffer:
    """Buffering, clearing and reset of the field buffer."""

    def test_field_accumulates_characters(self):
        sink = JoinedFieldSink()
        for c in "abc":
            sink.on_field_character(c)
        assert sink.field == "abc"

    def test_clear_field(self):
        sink = JoinedFieldSink()
        sink.on_field_character("a")
        sink.clear_field()
        assert sink.field == ""

    def test_reset_clears_buffer(self):
        sink = JoinedFieldSink()
        sink.on_field_character("a")
        sink.on_reset()
        assert sink.field == ""

    def test_subclass_through_parser(self):
        sink = _collect(JoinedFieldSink(), "a:bc\n\nd")
        assert sink.fields == ["a", "bc", "d"]
        assert sink.record_sizes == [2, 1]

    def test_binary_buffer(self):
        sink = JoinedFieldSink(binary=True)
        assert sink.field == b""
        sink.on_field_character(b"x")
        sink.on_field_character(b"y")
        assert sink.field == b"xy"


# ---------------------------------------------------------------------------
# RecordCollector / CallbackSink
# ---------------------------------------------------------------------------

class TestRecordCollector:
    """Record materialization."""

    def test_records(self):
        sink = _collect(RecordCollector(), "a:b\nc\n")
        assert sink.records == [["a", "b"], ["c"]]

    def test_reset_drops_partial_record(self):
        sink = RecordCollector()
        parser = DSVParser(sink)
        parser.feed("a:b\nc:d")
        parser.reset()
        parser.finish()
        assert sink.records == [["a", "b"]]
        assert sink.field == ""

    def test_callback_sink_streams_records(self):
        seen = []
        sink = _collect(CallbackSink(seen.append), "a\nb\nc")
        assert seen == [["a"], ["b"], ["c"]]
        assert sink.records == []

    def test_callback_sink_keep(self):
        seen = []
        sink = _collect(CallbackSink(seen.append, keep=True), "a\n")
        assert seen == [["a"]]
        assert sink.records == [["a"]]


# ---------------------------------------------------------------------------
# EventRecorder
# ---------------------------------------------------------------------------

class TestEventRecorder:

    def test_kinds_and_clear(self):
        sink = _collect(EventRecorder(), "a\n")
        assert sink.kinds() == ["record_start", "field_character", "field_end", "record_end"]
        sink.clear()
        assert sink.events == []


# ---------------------------------------------------------------------------
# DataFrameSink
# ---------------------------------------------------------------------------

class TestDataFrameSink:
    """Turning records into a DataFrame."""

    def test_default_integer_columns(self):
        df = _collect(DataFrameSink(), "a:b\nc:d\n").to_frame()
        assert df.shape == (2, 2)
        assert list(df.columns) == [0, 1]
        assert df.iloc[1, 0] == "c"

    def test_ragged_records_are_padded(self):
        df = _collect(DataFrameSink(), "a:b:c\nd\n").to_frame()
        assert df.shape == (2, 3)
        assert df.iloc[1].tolist() == ["d", "", ""]

    def test_header(self):
        df = _collect(DataFrameSink(), "user:uid\nroot:0\nbin:1\n").to_frame(header=True)
        assert list(df.columns) == ["user", "uid"]
        assert df["user"].tolist() == ["root", "bin"]

    def test_header_only(self):
        df = _collect(DataFrameSink(), "user:uid\n").to_frame(header=True)
        assert list(df.columns) == ["user", "uid"]
        assert len(df) == 0

    def test_header_with_no_records(self):
        df = DataFrameSink().to_frame(header=True)
        assert df.empty

    def test_explicit_columns(self):
        df = _collect(DataFrameSink(), "root:0\n").to_frame(columns=["user", "uid"])
        assert list(df.columns) == ["user", "uid"]
        assert df.loc[0, "uid"] == "0"

    def test_extra_fields_get_generated_names(self):
        df = _collect(DataFrameSink(), "root:0:extra\n").to_frame(columns=["user", "uid"])
        assert list(df.columns) == ["user", "uid", "field_2"]
        assert df.loc[0, "field_2"] == "extra"

    def test_short_records_padded_to_columns(self):
        df = _collect(DataFrameSink(), "root\n").to_frame(columns=["user", "uid"])
        assert df.loc[0, "uid"] == ""

    def test_header_and_columns_conflict(self):
        with pytest.raises(ValueError, match="either"):
            DataFrameSink().to_frame(header=True, columns=["a"])

    def test_empty(self):
        df = DataFrameSink().to_frame()
        assert isinstance(df, pd.DataFrame)
        assert df.empty
