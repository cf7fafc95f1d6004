"""
Streaming DSV parser for unix-dsv.

Parses Delimiter-Separated Values as described in chapter five,
"Textuality", of Eric S. Raymond, *The Art of Unix Programming* (2003):
records end at a line feed, fields are split by a single separator
character, and a single escape character makes the next character
literal (including the separator, the escape itself and the line feed).

The parser is a push-driven character state machine with two flags:

- ``escaping``: the previous character was an unescaped escape.
- ``in_record``: at least one character of the current record has been
  consumed and no line feed has closed it yet.

Each character produces zero or more sink events:

================  ==============  ========================================
state             character       events
================  ==============  ========================================
escaping          any             field_character(c)
idle              line feed       (none; blank lines are skipped)
idle              other           record_start, then as "in record"
in record         separator       field_end
in record         escape          (none; start escaping)
in record         line feed       field_end, record_end
in record         other           field_character(c)
================  ==============  ========================================

When characters collide (a misconfigured dialect), the class tests run
in the order separator, escape, line feed, literal.

Nothing is buffered: events are delivered synchronously, in source order,
and the parser never allocates per character.  Field and record storage
is entirely the sink's business.
"""

from __future__ import annotations

import logging
from typing import Iterable

from unix_dsv.dialect_registry import LINE_FEED, UNIX_DSV, Dialect
from unix_dsv.exceptions import EndOfInput
from unix_dsv.sinks.base import Sink
from unix_dsv.sources import InputSource

logger = logging.getLogger(__name__)


class DSVParser:
    """Incremental DSV parser that reports structure to a sink.

    Args:
        sink: Receives the parse events (see ``unix_dsv.sinks``).
        dialect: Separator and escape characters.  Defaults to
            ``UNIX_DSV`` (``:`` and ``\\``).
        binary: Parse 1-length ``bytes`` characters instead of ``str``.
            The dialect characters must then be single-byte.

    The parser can be used as a context manager; leaving the ``with``
    block normally calls ``finish()``::

        sink = RecordCollector()
        with DSVParser(sink) as parser:
            parser.feed("a:b\\nc:d")
        sink.records  # [["a", "b"], ["c", "d"]]
    """

    def __init__(
        self,
        sink: Sink,
        dialect: Dialect = UNIX_DSV,
        binary: bool = False,
    ) -> None:
        self._sink = sink
        self._dialect = dialect
        self._binary = binary
        if binary:
            self._separator, self._escape = dialect.encoded()
            self._newline = LINE_FEED.encode("ascii")
        else:
            self._separator, self._escape = dialect.separator, dialect.escape
            self._newline = LINE_FEED
        self._escaping = False
        self._in_record = False

    # -- Properties ---------------------------------------------------------

    @property
    def sink(self) -> Sink:
        return self._sink

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    @property
    def binary(self) -> bool:
        return self._binary

    @property
    def separator(self):
        return self._separator

    @property
    def escape(self):
        return self._escape

    @property
    def escaping(self) -> bool:
        """``True`` if the next character will be taken literally."""
        return self._escaping

    @property
    def in_record(self) -> bool:
        """``True`` while a record has started but not been terminated."""
        return self._in_record

    # -- State machine ------------------------------------------------------

    def feed_character(self, c) -> None:
        """Consume one character and emit the resulting sink events."""
        sink = self._sink
        if self._escaping:
            sink.on_field_character(c)
            self._escaping = False
            return

        if not self._in_record and c != self._newline:
            self._in_record = True
            sink.on_record_start()

        if c == self._separator:
            sink.on_field_end()
        elif c == self._escape:
            self._escaping = True
        elif c == self._newline:
            if self._in_record:
                sink.on_field_end()
                self._in_record = False
                sink.on_record_end()
        else:
            sink.on_field_character(c)

    def feed(self, chars: Iterable) -> None:
        """Feed every character of *chars*.  Does not call ``finish()``.

        *chars* may be a ``str`` (text mode), a ``bytes`` value (binary
        mode; each byte is fed as a 1-length ``bytes``) or any iterable of
        characters.

        Raises:
            ValueError: If ``bytes`` are fed to a text-mode parser or a
                ``str`` to a binary-mode parser.
        """
        if isinstance(chars, (bytes, bytearray)):
            self._check_mode(True, f"{type(chars).__name__} input")
            for i in range(len(chars)):
                self.feed_character(bytes(chars[i:i + 1]))
            return
        if isinstance(chars, str):
            self._check_mode(False, "str input")
        for c in chars:
            self.feed_character(c)

    def _check_mode(self, binary: bool, what: str) -> None:
        if binary != self._binary:
            mode = "binary" if self._binary else "text"
            raise ValueError(
                f"Cannot parse {what} with a {mode}-mode parser "
                f"(construct it with binary={binary})"
            )

    def finish(self) -> None:
        """Close any record still in progress.

        If a record is open, the sink receives ``on_field_end`` then
        ``on_record_end``.  A dangling escape is discarded.  Afterwards the
        parser is idle, so calling ``finish()`` again emits nothing.
        """
        if self._in_record:
            if self._escaping:
                logger.debug("Discarding dangling escape at end of input")
            logger.debug("Finishing unterminated record")
            self._sink.on_field_end()
            self._escaping = self._in_record = False
            self._sink.on_record_end()
        self._escaping = self._in_record = False

    def reset(self) -> None:
        """Return to the initial state without closing the current record.

        The sink is told via ``on_reset`` so it can drop partial data.
        """
        logger.debug(
            "Resetting parser (escaping=%s, in_record=%s)",
            self._escaping, self._in_record,
        )
        self._escaping = self._in_record = False
        self._sink.on_reset()

    # -- Driver loop --------------------------------------------------------

    def parse(self, source: InputSource) -> None:
        """Feed characters from *source* until it reports end of input.

        Does not call ``finish()``, so a trailing record without a line
        feed stays open and more input may follow.

        Raises:
            ValueError: If the source's ``binary`` flag does not match
                the parser's.
            IOFailure: If the source fails.  The parser keeps its state.
        """
        name = getattr(source, "name", None)
        source_binary = getattr(source, "binary", self._binary)
        self._check_mode(
            source_binary,
            f"{'binary' if source_binary else 'text'} source {name!r}",
        )
        logger.debug("Parsing from %s", name)
        try:
            while not source.is_eof():
                self.feed_character(source.read_char())
        except EndOfInput:
            pass
        logger.debug("Reached end of input: %s", name)

    def parse_and_finish(self, source: InputSource) -> None:
        """``parse(source)`` followed by ``finish()``."""
        self.parse(source)
        self.finish()

    # -- Context manager ----------------------------------------------------

    def __enter__(self) -> DSVParser:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.finish()

    def __repr__(self) -> str:
        return (
            f"DSVParser(dialect={self._dialect.name!r}, "
            f"escaping={self._escaping}, in_record={self._in_record})"
        )
