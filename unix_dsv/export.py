"""
Exporter for unix-dsv.

Writes a materialized DSV table to the output directory as CSV or
Parquet.  The file is named ``{table_name}.{format}``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import pandas as pd

from unix_dsv.exceptions import ExportError

logger = logging.getLogger(__name__)

_SUPPORTED_FORMATS = {"csv", "parquet"}


def _write_dataframe(
    df: pd.DataFrame,
    path: Path,
    output_format: str,
) -> None:
    """Write a single DataFrame to disk in the specified format.

    Raises:
        ExportError: If writing fails for any reason.
    """
    try:
        if output_format == "csv":
            df.to_csv(path, index=False, encoding="utf-8")
        else:  # parquet
            # Parquet needs string column labels
            out = df.rename(columns=str)
            out.to_parquet(path, index=False, engine="pyarrow")
    except Exception as exc:
        raise ExportError(
            f"Failed to write {path.name} as {output_format}: {exc}"
        ) from exc


def export_frame(
    df: pd.DataFrame,
    output_dir: str | Path,
    table_name: str,
    output_format: Literal["csv", "parquet"] = "parquet",
) -> str:
    """Write a table to ``{output_dir}/{table_name}.{output_format}``.

    The output directory is created recursively if it does not exist.

    Args:
        df: The table to write.
        output_dir: Directory to write into (created if needed).
        table_name: File stem.
        output_format: "csv" or "parquet".

    Returns:
        The path written, as a string.

    Raises:
        ExportError: If *output_format* is unsupported, or if the write fails.
    """
    if output_format not in _SUPPORTED_FORMATS:
        raise ExportError(
            f"Unsupported output format: '{output_format}'. "
            f"Supported formats: {sorted(_SUPPORTED_FORMATS)}"
        )

    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    file_path = out / f"{table_name}.{output_format}"
    _write_dataframe(df, file_path, output_format)
    logger.info(
        "Exported table '%s' -> %s (%d rows, %d cols)",
        table_name,
        file_path.name,
        len(df),
        len(df.columns),
    )
    return str(file_path)
