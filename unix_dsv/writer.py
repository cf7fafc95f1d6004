"""
DSV serialization for unix-dsv.

The inverse of the parser: every separator, escape and line feed inside
a field is prefixed with the escape character, fields are joined with
the separator, and each record ends with a line feed.

One record shape does not survive a round trip: a record made of a
single empty field serializes to a blank line, which the parser skips.
"""

from __future__ import annotations

import logging
from typing import IO, Iterable, Sequence

from unix_dsv.dialect_registry import LINE_FEED, UNIX_DSV, Dialect

logger = logging.getLogger(__name__)


def escape_field(field: str, dialect: Dialect = UNIX_DSV) -> str:
    """Escape the characters of *field* that the parser treats specially."""
    special = {dialect.separator, dialect.escape, LINE_FEED}
    if not any(c in special for c in field):
        return field
    return "".join(dialect.escape + c if c in special else c for c in field)


def format_record(fields: Sequence[str], dialect: Dialect = UNIX_DSV) -> str:
    """Serialize one record, including its terminating line feed."""
    return dialect.separator.join(escape_field(f, dialect) for f in fields) + LINE_FEED


def write_records(
    records: Iterable[Sequence[str]],
    handle: IO[str],
    dialect: Dialect = UNIX_DSV,
) -> int:
    """Write *records* to an open text handle.

    Returns:
        The number of records written.
    """
    count = 0
    for record in records:
        handle.write(format_record(record, dialect))
        count += 1
    logger.debug("Wrote %d records", count)
    return count
