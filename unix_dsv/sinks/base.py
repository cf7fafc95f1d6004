"""
Sink contract for unix-dsv.

The parser calls five operations on its sink, strictly in source order:

1. ``on_record_start()`` -- once per record, before any of its fields.
2. ``on_field_character(c)`` -- once per content character.
3. ``on_field_end()`` -- once per field, after its last character (a
   field may have no characters at all).
4. ``on_record_end()`` -- once per record, after its final field end.
5. ``on_reset()`` -- when the caller resets the parser.  The sink must
   discard any partial field or record.

Two forms of the same contract are provided:

- ``Sink``: a ``typing.Protocol``.  Any object with the five methods is
  accepted, with no inheritance required.
- ``BaseSink``: an ABC with abstract methods, for sinks that want the
  interface enforced at instantiation time.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AnyStr, Generic, Protocol, runtime_checkable


@runtime_checkable
class Sink(Protocol):
    """Structural type for parser event receivers."""

    def on_record_start(self) -> None: ...

    def on_field_character(self, c) -> None: ...

    def on_field_end(self) -> None: ...

    def on_record_end(self) -> None: ...

    def on_reset(self) -> None: ...


class BaseSink(ABC):
    """Abstract base class for parser event receivers.

    Subclasses must implement all five event hooks.
    """

    @abstractmethod
    def on_record_start(self) -> None:
        """A new record begins."""

    @abstractmethod
    def on_field_character(self, c) -> None:
        """Append one literal character to the current field."""

    @abstractmethod
    def on_field_end(self) -> None:
        """The current field is complete."""

    @abstractmethod
    def on_record_end(self) -> None:
        """The current record is complete."""

    @abstractmethod
    def on_reset(self) -> None:
        """The parser was reset; discard partial state."""


class StringFieldBuffer(BaseSink, Generic[AnyStr]):
    """Reference sink that buffers the current field's characters.

    ``on_field_character`` appends to the buffer and ``on_reset`` clears
    it.  Subclasses implement ``on_record_start``, ``on_field_end`` and
    ``on_record_end``; ``on_field_end`` typically reads ``self.field``
    and then calls ``self.clear_field()``.

    Args:
        binary: If ``True``, characters are 1-length ``bytes`` and
            ``field`` returns ``bytes``.  Otherwise they are 1-length
            ``str``.
    """

    def __init__(self, binary: bool = False) -> None:
        self.binary = binary
        self._empty: AnyStr = b"" if binary else ""  # type: ignore[assignment]
        self._chars: list[AnyStr] = []

    @property
    def field(self) -> AnyStr:
        """The characters buffered for the current field."""
        return self._empty.join(self._chars)

    def on_field_character(self, c: AnyStr) -> None:
        self._chars.append(c)

    def on_reset(self) -> None:
        self.clear_field()

    def clear_field(self) -> None:
        """Empty the field buffer."""
        self._chars.clear()
