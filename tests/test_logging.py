"""Tests for the evexpr structured event logging system."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from evexpr.expr import EvalError, evaluate_as_double, report_error


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    return tmp_path / "logs" / "events.ndjson"


@pytest.fixture
def sink(log_path: Path):
    from evexpr.logging.sink import EventSink

    return EventSink(log_path)


# ---------------------------------------------------------------------------
# A) Event schema
# ---------------------------------------------------------------------------


class TestEvalEvent:
    def test_event_defaults(self):
        from evexpr.logging.events import EvalEvent, EventLevel, EventType

        evt = EvalEvent(
            level=EventLevel.info,
            event_type=EventType.eval_completed,
            message="hello",
        )
        assert evt.schema_version == 1
        assert evt.ts.endswith("Z")
        assert evt.level == "info"
        assert evt.event_type == "eval_completed"
        assert evt.context == {}
        assert evt.error_code is None

    def test_event_serialization(self):
        from evexpr.logging.events import EvalEvent, EventLevel, EventType

        evt = EvalEvent(
            level=EventLevel.warning,
            event_type=EventType.eval_error,
            message="Unknown function",
            error_code="unknown_function",
        )
        d = evt.model_dump(mode="json")
        assert d["level"] == "warning"
        assert d["event_type"] == "eval_error"
        assert d["error_code"] == "unknown_function"

    def test_all_event_types_exist(self):
        from evexpr.logging.events import EventType

        assert {e.value for e in EventType} == {"eval_completed", "eval_error"}


# ---------------------------------------------------------------------------
# B) Context truncation
# ---------------------------------------------------------------------------


class TestTruncation:
    def test_long_string_truncated(self):
        from evexpr.logging.events import truncate_context

        out = truncate_context({"expression": "1+" * 500})
        assert out["expression"].endswith("...[truncated]")
        assert len(out["expression"]) == 256 + len("...[truncated]")

    def test_short_values_untouched(self):
        from evexpr.logging.events import truncate_context

        ctx = {"expression": "1+1", "begin": 0, "nested": {"a": "b"}}
        assert truncate_context(ctx) == ctx


# ---------------------------------------------------------------------------
# C) Sink
# ---------------------------------------------------------------------------


class TestEventSink:
    def test_write_and_read(self, sink, log_path: Path):
        from evexpr.logging.events import EvalEvent, EventLevel, EventType

        sink.write(EvalEvent(level=EventLevel.info, event_type=EventType.eval_completed, message="a"))
        sink.write(EvalEvent(level=EventLevel.warning, event_type=EventType.eval_error, message="b"))

        lines = log_path.read_text().splitlines()
        assert len(lines) == 2
        assert json.loads(lines[0])["message"] == "a"

        events = sink.read_events()
        assert [e["message"] for e in events] == ["b", "a"]

    def test_read_filters(self, sink):
        from evexpr.logging.events import EvalEvent, EventLevel, EventType

        sink.write(EvalEvent(level=EventLevel.info, event_type=EventType.eval_completed))
        sink.write(EvalEvent(level=EventLevel.warning, event_type=EventType.eval_error))

        assert len(sink.read_events(level="warning")) == 1
        assert len(sink.read_events(event_type="eval_completed")) == 1
        assert len(sink.read_events(limit=1)) == 1

    def test_read_missing_file(self, sink):
        assert sink.read_events() == []

    def test_skips_corrupt_lines(self, sink, log_path: Path):
        log_path.write_text('{"message": "ok"}\nnot json\n\n')
        assert sink.read_events() == [{"message": "ok"}]

    def test_sorted_keys(self, sink, log_path: Path):
        from evexpr.logging.events import EvalEvent, EventLevel, EventType

        sink.write(EvalEvent(level=EventLevel.info, event_type=EventType.eval_completed))
        keys = list(json.loads(log_path.read_text()).keys())
        assert keys == sorted(keys)


# ---------------------------------------------------------------------------
# D) emit helpers
# ---------------------------------------------------------------------------


class TestEmit:
    def test_emit_without_sink_is_noop(self):
        from evexpr.logging.events import EventType, emit_info, get_sink

        assert get_sink() is None
        emit_info(EventType.eval_completed, "nothing happens")

    def test_emit_writes_to_configured_sink(self, log_path: Path):
        from evexpr.logging.events import EventType, emit_info, set_log_path

        set_log_path(log_path)
        emit_info(EventType.eval_completed, "done", {"expression": "1+1"})

        evt = json.loads(log_path.read_text())
        assert evt["message"] == "done"
        assert evt["context"] == {"expression": "1+1"}

    def test_emit_never_raises(self, log_path: Path, monkeypatch: pytest.MonkeyPatch):
        from evexpr.logging import events

        events.set_log_path(log_path)

        def boom(event):
            raise OSError("disk full")

        monkeypatch.setattr(events.get_sink(), "write", boom)
        events.emit_warning(events.EventType.eval_error, "ignored")

    def test_report_error_emits_event(self, log_path: Path):
        from evexpr.logging.events import set_log_path

        set_log_path(log_path)
        err = EvalError()
        evaluate_as_double("2 * foo", err)
        report_error(err, io.StringIO())

        evt = json.loads(log_path.read_text())
        assert evt["event_type"] == "eval_error"
        assert evt["error_code"] == "unknown_function"
        assert evt["message"] == "Unknown function"
        assert evt["context"] == {"expression": "2 * foo", "begin": 4, "end": 7}
