"""Structured event logging for evexpr.

Provides the event schema, a filesystem NDJSON sink, and safe emit
helpers that never raise uncaught exceptions.
"""

from evexpr.logging.events import (
    EvalEvent,
    EventLevel,
    EventType,
    emit,
    emit_info,
    emit_warning,
    get_sink,
    set_log_path,
    truncate_context,
)
from evexpr.logging.sink import EventSink

__all__ = [
    "EvalEvent",
    "EventLevel",
    "EventSink",
    "EventType",
    "emit",
    "emit_info",
    "emit_warning",
    "get_sink",
    "set_log_path",
    "truncate_context",
]
