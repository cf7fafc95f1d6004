"""
Sinks sub-package for unix-dsv.

A sink receives the structural events emitted by ``DSVParser`` and
decides how to materialize fields and records.

Design: Strategy Pattern
- base.py defines the ``Sink`` protocol (structural typing: any object
  with the five event methods), the ``BaseSink`` ABC for run-time
  polymorphism, and the ``StringFieldBuffer`` reference sink.
- records.py implements ``RecordCollector`` (lists of field strings),
  ``CallbackSink`` (streams each record to a callable) and
  ``EventRecorder`` (raw event log).
- frame.py implements ``DataFrameSink``, which builds a pandas DataFrame.
"""

from unix_dsv.sinks.base import BaseSink, Sink, StringFieldBuffer
from unix_dsv.sinks.frame import DataFrameSink
from unix_dsv.sinks.records import CallbackSink, Event, EventRecorder, RecordCollector

__all__ = [
    "BaseSink",
    "CallbackSink",
    "DataFrameSink",
    "Event",
    "EventRecorder",
    "RecordCollector",
    "Sink",
    "StringFieldBuffer",
]
