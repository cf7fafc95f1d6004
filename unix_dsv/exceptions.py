"""
Custom exception hierarchy for unix-dsv.

The DSV state machine itself never raises: every character sequence is
valid DSV.  Errors come from the collaborators around it:

- Input sources signal normal termination with ``EndOfInput`` and
  lower-level read/open failures with ``IOFailure``.
- Configuration loading raises ``ConfigValidationError``.
- The exporter raises ``ExportError``.
"""

from __future__ import annotations


class DsvError(Exception):
    """Base exception for all unix-dsv errors."""


class EndOfInput(DsvError):
    """Raised by an input source's ``read_char()`` when no input remains.

    This is a normal termination signal, not a failure.  The parser's
    driver loop catches it and returns cleanly.
    """

    def __init__(self, source: str | None = None) -> None:
        self.source = source
        super().__init__(f"End of input: {source}" if source else "End of input")


class IOFailure(DsvError):
    """Raised when an input source fails below the DSV layer.

    Carries the operating-system error code (``errno``, may be ``None``
    when the failure did not come from the OS) and an identifier for the
    source that failed.  The parser keeps its state when this propagates,
    so a caller that recovers may resume feeding characters.
    """

    def __init__(
        self,
        source: str | None,
        errno: int | None = None,
        message: str | None = None,
    ) -> None:
        self.source = source
        self.errno = errno
        detail = message or "I/O failure"
        if errno is not None:
            detail = f"{detail} [errno {errno}]"
        super().__init__(f"{detail}: {source}" if source else detail)


class FileOpenError(IOFailure):
    """Raised when an input file cannot be opened."""


class ConfigValidationError(DsvError):
    """Raised when a unix-dsv YAML config fails validation.

    This can happen if:
    - The config file is empty.
    - ``table.key_columns`` names a column missing from the parsed table.

    Schema violations (wrong types, ``table.header`` together with
    ``table.columns``) surface as ``pydantic.ValidationError`` instead.
    """


class ExportError(DsvError):
    """Raised when the exporter fails to write output files.

    For example, permission errors, disk full, or unsupported format.
    """
