"""Structured sheet events and the NDJSON files they are written to."""

from sheetcalc.logging.events import (
    EventLevel,
    EventType,
    SheetEvent,
    current_sink,
    emit,
    emit_error,
    emit_info,
    emit_warning,
    set_log_dir,
    truncate_context,
)
from sheetcalc.logging.sink import EventSink

__all__ = [
    "EventLevel",
    "EventSink",
    "EventType",
    "SheetEvent",
    "current_sink",
    "emit",
    "emit_error",
    "emit_info",
    "emit_warning",
    "set_log_dir",
    "truncate_context",
]
