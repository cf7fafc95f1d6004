"""
Record-materializing sinks for unix-dsv.

- ``RecordCollector`` assembles each record as a list of field values
  and keeps every completed record in ``records``.
- ``CallbackSink`` hands each completed record to a callable, so large
  inputs can be processed one record at a time.
- ``EventRecorder`` keeps the raw event stream, which is what the
  parser actually emits before any materialization.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from unix_dsv.sinks.base import BaseSink, StringFieldBuffer

RECORD_START = "record_start"
FIELD_CHARACTER = "field_character"
FIELD_END = "field_end"
RECORD_END = "record_end"
RESET = "reset"


class RecordCollector(StringFieldBuffer):
    """Collect parsed records as lists of fields.

    Attributes:
        records: Every completed record, in source order.  Each record is
            a list of ``str`` (or ``bytes`` in binary mode).
    """

    def __init__(self, binary: bool = False) -> None:
        super().__init__(binary=binary)
        self.records: list[list[Any]] = []
        self._current: list[Any] | None = None

    def on_record_start(self) -> None:
        self._current = []

    def on_field_end(self) -> None:
        if self._current is None:
            # Only reachable with a separator equal to the line feed.
            self._current = []
        self._current.append(self.field)
        self.clear_field()

    def on_record_end(self) -> None:
        if self._current is not None:
            self.commit(self._current)
        self._current = None

    def on_reset(self) -> None:
        super().on_reset()
        self._current = None

    def commit(self, record: list[Any]) -> None:
        """Store a completed record.  Subclasses may override."""
        self.records.append(record)


class CallbackSink(RecordCollector):
    """Pass each completed record to *callback* instead of storing it.

    Args:
        callback: Called once per record with the list of fields.
        keep: If ``True``, records are also stored in ``records``.
        binary: See ``StringFieldBuffer``.
    """

    def __init__(
        self,
        callback: Callable[[list[Any]], None],
        keep: bool = False,
        binary: bool = False,
    ) -> None:
        super().__init__(binary=binary)
        self.callback = callback
        self.keep = keep

    def commit(self, record: list[Any]) -> None:
        if self.keep:
            super().commit(record)
        self.callback(record)


@dataclass(frozen=True)
class Event:
    """One sink invocation: *kind* plus the character for field characters."""

    kind: str
    char: Any = None

    def __repr__(self) -> str:
        if self.kind == FIELD_CHARACTER:
            return f"Event({self.kind}, {self.char!r})"
        return f"Event({self.kind})"


class EventRecorder(BaseSink):
    """Record every sink invocation as an ``Event``."""

    def __init__(self) -> None:
        self.events: list[Event] = []

    def on_record_start(self) -> None:
        self.events.append(Event(RECORD_START))

    def on_field_character(self, c) -> None:
        self.events.append(Event(FIELD_CHARACTER, c))

    def on_field_end(self) -> None:
        self.events.append(Event(FIELD_END))

    def on_record_end(self) -> None:
        self.events.append(Event(RECORD_END))

    def on_reset(self) -> None:
        self.events.append(Event(RESET))

    def kinds(self) -> list[str]:
        """Return just the event kinds, in order."""
        return [e.kind for e in self.events]

    def clear(self) -> None:
        self.events.clear()
