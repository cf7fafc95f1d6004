"""
String-to-number helpers for unix-dsv.

DSV fields are always text.  Two helpers turn them into numbers:

- ``string_to_number()`` converts a single field with C ``strtol`` /
  ``strtod`` semantics: leading whitespace is skipped, the longest valid
  numeric prefix is converted, and the number of characters consumed is
  returned alongside the value so callers can tell whether the whole
  field was numeric.
- ``parse_numbers()`` coerces whole columns of a materialized DSV table
  (``pd.to_numeric``), leaving key columns and columns that are not
  entirely numeric untouched.
"""

from __future__ import annotations

import logging
import re

import pandas as pd

logger = logging.getLogger(__name__)

# C isspace() in the "C" locale
_C_WHITESPACE = " \t\n\v\f\r"

_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)

# C99 hexadecimal floating constant, e.g. 0x1.8p3
_HEX_FLOAT_PATTERN = re.compile(
    r"[+-]?0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?\d+)?",
    re.IGNORECASE,
)


def _digit_value(ch: str) -> int:
    """Value of *ch* as a digit in bases up to 36, or 99 if it is not one."""
    if "0" <= ch <= "9":
        return ord(ch) - ord("0")
    if "a" <= ch <= "z":
        return ord(ch) - ord("a") + 10
    if "A" <= ch <= "Z":
        return ord(ch) - ord("A") + 10
    return 99


def _skip_whitespace(text: str) -> int:
    i = 0
    while i < len(text) and text[i] in _C_WHITESPACE:
        i += 1
    return i


def _to_int(text: str, base: int) -> tuple[int, int]:
    i = _skip_whitespace(text)
    negative = False
    if i < len(text) and text[i] in "+-":
        negative = text[i] == "-"
        i += 1

    has_hex_prefix = (
        text[i:i + 2] in ("0x", "0X")
        and i + 2 < len(text)
        and _digit_value(text[i + 2]) < 16
    )
    if base == 0:
        if has_hex_prefix:
            base = 16
        elif text[i:i + 1] == "0":
            base = 8
        else:
            base = 10
    if base == 16 and has_hex_prefix:
        i += 2

    start = i
    value = 0
    while i < len(text):
        digit = _digit_value(text[i])
        if digit >= base:
            break
        value = value * base + digit
        i += 1

    if i == start:
        return 0, 0
    return (-value if negative else value), i


def _to_float(text: str) -> tuple[float, int]:
    start = _skip_whitespace(text)
    match = _HEX_FLOAT_PATTERN.match(text, start)
    if match is not None:
        return float.fromhex(match.group(0)), match.end()
    match = _FLOAT_PATTERN.match(text, start)
    if match is None:
        return 0.0, 0
    return float(match.group(0)), match.end()


def string_to_number(
    text: str | bytes,
    kind: type = int,
    base: int = 10,
) -> tuple[int | float, int]:
    """Convert the numeric prefix of *text*.

    Args:
        text: The field to convert (``str`` or ``bytes``).
        kind: ``int`` or ``float``.
        base: Radix for ``int`` conversion, 2-36, or 0 to detect ``0x``
            (hex) and leading-``0`` (octal) prefixes.  Ignored for
            ``float``.

    Returns:
        ``(value, end)`` where *end* is the number of characters consumed,
        counting leading whitespace.  When nothing converts, returns
        ``(0, 0)`` (or ``(0.0, 0)``).

    Raises:
        ValueError: If *base* is out of range.
        TypeError: If *kind* is not ``int`` or ``float``.

    Examples::

        string_to_number("42 apples")       # (42, 2)
        string_to_number("  -0x1f", base=0)  # (-31, 7)
        string_to_number("1.5e3kg", float)   # (1500.0, 5)
        string_to_number("0x1p3", float)     # (8.0, 5)
    """
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("latin-1")

    if kind is float:
        return _to_float(text)
    if kind is not int:
        raise TypeError(f"Unsupported number kind: {kind!r}. Use int or float.")
    if base != 0 and not 2 <= base <= 36:
        raise ValueError(f"Invalid base {base}: must be 0 or between 2 and 36")
    return _to_int(text, base)


def parse_numbers(df: pd.DataFrame, key_columns: list[str]) -> pd.DataFrame:
    """Coerce numeric columns of a DSV table.

    Every non-key column is stripped of surrounding whitespace and passed
    through ``pd.to_numeric(errors='coerce')``.  The result is kept only if
    the column has at least one non-empty cell and every non-empty cell
    converted; otherwise the column stays as text.  Empty cells become
    ``NaN`` in converted columns.

    Args:
        df: Table with string cells (e.g. from ``DataFrameSink``).
        key_columns: Column names to leave untouched.

    Returns:
        A new DataFrame; the input is not modified.
    """
    df = df.copy()
    key_set = set(key_columns)
    value_cols = [c for c in df.columns if c not in key_set]

    for col in value_cols:
        cleaned = df[col].astype(str).str.strip()
        present = cleaned != ""
        numeric = pd.to_numeric(cleaned.where(present), errors="coerce")
        if present.any() and numeric[present].notna().all():
            df[col] = numeric
        else:
            logger.debug("Column %r is not entirely numeric; left as text", col)

    return df
