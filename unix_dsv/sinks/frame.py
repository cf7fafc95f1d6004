"""
DataFrame sink for unix-dsv.

Collects records like ``RecordCollector`` and turns them into a
``pandas.DataFrame`` with all-string columns.  DSV does not require
every record to have the same number of fields, so short records are
padded with empty strings up to the widest record.

Column naming:
- ``header=True``: the first record supplies the column names.
- ``columns=[...]``: explicit names.  If some record is wider than the
  list, the extra columns are named ``field_<index>``.
- Neither: pandas' default integer column labels.
"""

from __future__ import annotations

import logging
from typing import Any

import pandas as pd

from unix_dsv.sinks.records import RecordCollector

logger = logging.getLogger(__name__)


def _pad(records: list[list[Any]], width: int, fill: Any) -> list[list[Any]]:
    return [r + [fill] * (width - len(r)) for r in records]


class DataFrameSink(RecordCollector):
    """Collect records and materialize them as a DataFrame."""

    def to_frame(
        self,
        header: bool = False,
        columns: list[str] | None = None,
    ) -> pd.DataFrame:
        """Build a DataFrame from the records collected so far.

        Args:
            header: Use the first record as column names.
            columns: Explicit column names (mutually exclusive with
                *header*).

        Returns:
            DataFrame with one row per record and string-typed cells.

        Raises:
            ValueError: If both *header* and *columns* are given.
        """
        if header and columns is not None:
            raise ValueError("Pass either header=True or columns, not both")

        rows = list(self.records)
        fill = self._empty
        if header:
            if not rows:
                return pd.DataFrame()
            columns = [str(c) for c in rows[0]]
            rows = rows[1:]

        width = max((len(r) for r in rows), default=0)
        if columns is not None:
            if width > len(columns):
                columns = list(columns) + [
                    f"field_{i}" for i in range(len(columns), width)
                ]
            width = len(columns)

        padded = _pad(rows, width, fill)
        df = pd.DataFrame(padded, columns=columns, dtype=object)
        logger.debug("Built DataFrame: %d rows x %d columns", len(df), len(df.columns))
        return df
