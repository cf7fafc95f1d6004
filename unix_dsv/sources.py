"""
Input sources for unix-dsv.

An input source hands characters to ``DSVParser.parse()`` one at a time
through a minimal read interface:

- ``read_char()`` returns the next character, or raises ``EndOfInput``
  when none remains.
- ``is_eof()`` reports whether end of input has been reached.
- ``error()`` reports whether the source has failed.  The parser never
  inspects it; callers of ``parse()`` may.

Sources never own what they read from: ``FileSource`` does not close its
handle and the string sources keep a reference to the caller's data.
``open_source()`` is the one helper that opens (and closes) a file.

Characters are 1-length ``str`` for text data and 1-length ``bytes``
for binary data; ``binary`` on each source says which.
"""

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator

from unix_dsv.exceptions import EndOfInput, FileOpenError, IOFailure

logger = logging.getLogger(__name__)


class InputSource(ABC):
    """Abstract base class for character sources.

    Attributes:
        name: Identifier used in error messages (a path, ``"<string>"``...).
        binary: ``True`` if ``read_char()`` returns ``bytes``.
    """

    name: str | None = None
    binary: bool = False

    @abstractmethod
    def read_char(self):
        """Return the next character.

        Raises:
            EndOfInput: If no characters remain.
            IOFailure: If the underlying input fails.
        """

    @abstractmethod
    def is_eof(self) -> bool:
        """Return ``True`` once no further characters can be read."""

    def error(self) -> bool:
        """Return ``True`` if the source has failed."""
        return False


class FileSource(InputSource):
    """Read characters from an open file object or pipe.

    Works with both text handles (characters are ``str``) and binary
    handles (characters are ``bytes``).  The handle is not closed by this
    class.

    ``is_eof()`` follows stdio ``feof`` semantics: it only becomes true
    after a read has run into the end of the file, so a driver loop that
    polls ``is_eof()`` must also be ready to catch ``EndOfInput``.
    """

    def __init__(self, handle: IO, name: str | None = None) -> None:
        self.handle = handle
        self.name = name or getattr(handle, "name", None) or "<stream>"
        self.binary = not isinstance(handle, io.TextIOBase)
        self._eof = False
        self._error = False

    def read_char(self):
        return self.read_chunk(1)

    def read_chunk(self, size: int):
        """Return up to *size* characters in one read.

        Raises:
            EndOfInput: If no characters remain.
            IOFailure: If the underlying read fails.
        """
        try:
            chunk = self.handle.read(size)
        except OSError as exc:
            self._error = True
            raise IOFailure(self.name, exc.errno, exc.strerror or str(exc)) from exc
        except ValueError as exc:
            # Closed handles and undecodable text land here.
            self._error = True
            raise IOFailure(self.name, None, str(exc)) from exc
        if not chunk:
            self._eof = True
            raise EndOfInput(self.name)
        return chunk

    def is_eof(self) -> bool:
        return self._eof

    def error(self) -> bool:
        return self._error


class StringSource(InputSource):
    """Read characters from an in-memory ``str`` or ``bytes`` value.

    The source is rewindable: ``rewind()`` moves the cursor back to the
    start.  The data must not be resized while the source is in use.
    """

    def __init__(self, data: str | bytes | bytearray, name: str = "<string>") -> None:
        self.data = data
        self.name = name
        self.binary = isinstance(data, (bytes, bytearray))
        self._pos = 0

    def read_char(self):
        if self._pos >= len(self.data):
            raise EndOfInput(self.name)
        pos = self._pos
        self._pos += 1
        if self.binary:
            return bytes(self.data[pos:pos + 1])
        return self.data[pos]

    def is_eof(self) -> bool:
        return self._pos >= len(self.data)

    def rewind(self) -> None:
        """Reset the read cursor to the start of the data."""
        self._pos = 0


class CStringSource(InputSource):
    """Read bytes from a null-terminated byte string.

    Reading stops at the first NUL byte, or at the end of the buffer if
    it has none.  Rewindable like ``StringSource``.
    """

    binary = True

    def __init__(self, data: bytes | bytearray, name: str = "<cstring>") -> None:
        self.data = data
        self.name = name
        self._pos = 0

    def read_char(self) -> bytes:
        if self.is_eof():
            raise EndOfInput(self.name)
        pos = self._pos
        self._pos += 1
        return bytes(self.data[pos:pos + 1])

    def is_eof(self) -> bool:
        return self._pos >= len(self.data) or self.data[self._pos] == 0

    def rewind(self) -> None:
        """Reset the read cursor to the start of the data."""
        self._pos = 0


@contextmanager
def open_source(
    path: str | Path,
    binary: bool = False,
    encoding: str = "utf-8",
) -> Iterator[FileSource]:
    """Open *path* and yield a ``FileSource`` over it.

    Text files are opened with ``newline=""`` so that carriage returns
    reach the parser untouched; only the line feed terminates records.

    Raises:
        FileOpenError: If the file cannot be opened.
    """
    path = Path(path)
    try:
        if binary:
            handle = open(path, "rb")
        else:
            handle = open(path, "r", encoding=encoding, newline="")
    except OSError as exc:
        raise FileOpenError(
            str(path), exc.errno, exc.strerror or "cannot open file"
        ) from exc

    logger.debug("Opened %s (binary=%s)", path, binary)
    with handle:
        yield FileSource(handle, name=str(path))
