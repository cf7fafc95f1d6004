"""
Internal pipeline orchestration for unix-dsv.

Runs the parse -> table -> numbers -> export sequence for a loaded
``DsvConfig``.  Used by ``unix_dsv.ingest()``.

This module is **not** part of the public API.
"""

from __future__ import annotations

import logging

import pandas as pd

from unix_dsv.config import DsvConfig, validate_key_columns
from unix_dsv.export import export_frame
from unix_dsv.numbers import parse_numbers
from unix_dsv.parser import DSVParser
from unix_dsv.sinks.frame import DataFrameSink
from unix_dsv.sources import open_source

logger = logging.getLogger(__name__)


def build_table(config: DsvConfig) -> pd.DataFrame:
    """Parse the configured source file into a DataFrame.

    Steps:
      1. Parse the file with the configured dialect (finishing any
         trailing record without a line feed).
      2. Shape the records into a table (header / explicit columns).
      3. Check that the configured key columns exist.
      4. Optionally coerce numeric columns.

    Raises:
        FileOpenError: If the source file cannot be opened.
        IOFailure: If reading the source fails.
        ConfigValidationError: If a key column is missing.
    """
    sink = DataFrameSink()
    parser = DSVParser(sink, config.dialect)
    with open_source(config.source.input_path, encoding=config.source.encoding) as source:
        parser.parse_and_finish(source)
    logger.info(
        "Parsed %s: %d records", config.source.input_path, len(sink.records)
    )

    df = sink.to_frame(header=config.table.header, columns=config.table.columns)
    # Positional labels become "0", "1", ... so YAML key_columns can name them
    df.columns = [str(c) for c in df.columns]
    validate_key_columns(config, list(df.columns))

    if config.table.parse_numbers:
        df = parse_numbers(df, key_columns=config.table.key_columns)
    return df


def run_pipeline_and_export(config: DsvConfig) -> str:
    """Build the table for *config* and export it.

    Returns:
        Path of the written output file.
    """
    df = build_table(config)
    written = export_frame(
        df,
        output_dir=config.output.output_dir,
        table_name=config.output.table_name,
        output_format=config.output.output_format,
    )
    logger.info("Pipeline complete: wrote %s", written)
    return written
