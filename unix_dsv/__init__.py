"""
unix-dsv: streaming parser for Unix-style Delimiter-Separated Values.

DSV is the plain-text record format described in chapter five,
"Textuality", of *The Art of Unix Programming*: one record per line,
fields split by a single separator character (``:`` in ``/etc/passwd``),
and a single escape character (``\\``) that makes the next character
literal.

Core API:

- ``DSVParser`` -- the push-driven state machine.  Feed it characters
  (``feed_character``/``feed``) or an input source (``parse``), then
  ``finish()``.  It reports structure to a sink.
- ``unix_dsv.sinks`` -- ``RecordCollector``, ``CallbackSink``,
  ``DataFrameSink``, ``EventRecorder`` and the ``StringFieldBuffer`` base.
- ``unix_dsv.sources`` -- ``FileSource``, ``StringSource``,
  ``CStringSource`` and ``open_source()``.

Convenience functions:

- ``parse_string(text)`` -- records from an in-memory string.
- ``read_records(path)`` / ``iter_records(path)`` -- records from a file.
- ``read_frame(path)`` -- a pandas DataFrame from a file.
- ``ingest(config_path)`` -- YAML-driven parse + export to CSV/Parquet.
"""

from __future__ import annotations

import logging
from collections import deque
from pathlib import Path
from typing import Iterator

import pandas as pd

from unix_dsv._pipeline import run_pipeline_and_export
from unix_dsv.config import DsvConfig, load_config
from unix_dsv.dialect_registry import UNIX_DSV, Dialect, get_dialect
from unix_dsv.exceptions import (
    ConfigValidationError,
    DsvError,
    EndOfInput,
    ExportError,
    FileOpenError,
    IOFailure,
)
from unix_dsv.parser import DSVParser
from unix_dsv.sinks import CallbackSink, DataFrameSink, RecordCollector
from unix_dsv.sources import StringSource, open_source
from unix_dsv.writer import format_record, write_records

__all__ = [
    "ConfigValidationError",
    "DSVParser",
    "Dialect",
    "DsvConfig",
    "DsvError",
    "EndOfInput",
    "ExportError",
    "FileOpenError",
    "IOFailure",
    "UNIX_DSV",
    "format_record",
    "get_dialect",
    "ingest",
    "iter_records",
    "parse_string",
    "read_frame",
    "read_records",
    "write_records",
]

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


def parse_string(text: str, dialect: Dialect = UNIX_DSV) -> list[list[str]]:
    """Parse an in-memory DSV string into records.

    A trailing record without a line feed is included.

    Examples::

        parse_string("a\\\\:b:c\\n")  # [["a:b", "c"]]
    """
    sink = RecordCollector()
    DSVParser(sink, dialect).parse_and_finish(StringSource(text))
    return sink.records


def read_records(
    path: str | Path,
    dialect: Dialect = UNIX_DSV,
    encoding: str = "utf-8",
) -> list[list[str]]:
    """Read every record of a DSV file.

    Raises:
        FileOpenError: If the file cannot be opened.
        IOFailure: If reading fails.
    """
    sink = RecordCollector()
    parser = DSVParser(sink, dialect)
    with open_source(path, encoding=encoding) as source:
        parser.parse_and_finish(source)
    logger.info("Read %d records from %s", len(sink.records), path)
    return sink.records


def iter_records(
    path: str | Path,
    dialect: Dialect = UNIX_DSV,
    encoding: str = "utf-8",
) -> Iterator[list[str]]:
    """Yield the records of a DSV file one at a time.

    The file is read in chunks, so memory use is bounded by the largest
    record rather than the file size.

    Raises:
        FileOpenError: If the file cannot be opened.
        IOFailure: If reading fails.
    """
    pending: deque[list[str]] = deque()
    parser = DSVParser(CallbackSink(pending.append), dialect)
    with open_source(path, encoding=encoding) as source:
        while not source.is_eof():
            try:
                parser.feed(source.read_chunk(_CHUNK_SIZE))
            except EndOfInput:
                break
            while pending:
                yield pending.popleft()
    parser.finish()
    while pending:
        yield pending.popleft()


def read_frame(
    path: str | Path,
    dialect: Dialect = UNIX_DSV,
    header: bool = False,
    columns: list[str] | None = None,
    encoding: str = "utf-8",
) -> pd.DataFrame:
    """Read a DSV file into a DataFrame of strings.

    Args:
        path: The DSV file.
        dialect: Separator and escape characters.
        header: Use the first record as column names.
        columns: Explicit column names (mutually exclusive with *header*).
        encoding: Text encoding of the file.

    Returns:
        One row per record; short records are padded with ``""``.
    """
    sink = DataFrameSink()
    parser = DSVParser(sink, dialect)
    with open_source(path, encoding=encoding) as source:
        parser.parse_and_finish(source)
    return sink.to_frame(header=header, columns=columns)


def ingest(config_path: str | Path) -> str:
    """Config-driven entry point: parse a DSV file and export it.

    Orchestration:
      1. ``load_config()`` -> ``DsvConfig`` (Pydantic validation on load).
      2. Parse the source file with the configured dialect.
      3. Shape records into a table and coerce numeric columns.
      4. Export to ``{output_dir}/{table_name}.{csv|parquet}``.

    Returns:
        Path of the written output file.

    Raises:
        FileNotFoundError: If *config_path* does not exist.
        pydantic.ValidationError: If the config fails validation.
        ConfigValidationError: If the config is empty or names missing
            key columns.
        FileOpenError: If the source file cannot be opened.
        ExportError: If the output cannot be written.
    """
    logger.info("ingest() -- config_path=%s", config_path)
    config = load_config(config_path)
    logger.info(
        "Loaded config: source=%s, dialect=%s",
        config.source.input_path,
        config.dialect.name,
    )
    return run_pipeline_and_export(config)
