"""Filesystem NDJSON event sink with concurrency-safe appends.

Events are appended as one JSON line per event to a single log file.
Writes use ``json.dumps(sort_keys=True)`` for deterministic output.

Each append acquires an exclusive ``fcntl.flock`` on the file and reads
acquire a shared lock.  On platforms without ``fcntl`` (Windows), locking
is skipped.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from evexpr.logging.events import EvalEvent

try:
    import fcntl

    _HAS_FCNTL = True
except ImportError:
    _HAS_FCNTL = False


class EventSink:
    """Append-only NDJSON log writer with file locking."""

    def __init__(self, path: Path, *, fsync: bool = False) -> None:
        self.path = path
        self._fsync = fsync
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def write(self, event: EvalEvent) -> None:
        """Append *event* to the log."""
        line = json.dumps(event.model_dump(mode="json"), sort_keys=True, default=str) + "\n"
        self._append(line)

    def read_events(
        self,
        *,
        level: str | None = None,
        event_type: str | None = None,
        limit: int = 200,
    ) -> list[dict[str, Any]]:
        """Read events most-recent-first, with optional filters."""
        events = self._read_ndjson()

        if level:
            events = [e for e in events if e.get("level") == level]
        if event_type:
            events = [e for e in events if e.get("event_type") == event_type]

        events.reverse()
        return events[:limit]

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _append(self, line: str) -> None:
        """Append a single line under exclusive file lock."""
        if _HAS_FCNTL:
            fd = os.open(str(self.path), os.O_WRONLY | os.O_CREAT | os.O_APPEND)
            try:
                fcntl.flock(fd, fcntl.LOCK_EX)
                os.write(fd, line.encode("utf-8"))
                if self._fsync:
                    os.fsync(fd)
            finally:
                fcntl.flock(fd, fcntl.LOCK_UN)
                os.close(fd)
        else:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line)
                if self._fsync:
                    f.flush()
                    os.fsync(f.fileno())

    def _read_ndjson(self) -> list[dict[str, Any]]:
        if not self.path.exists():
            return []

        if _HAS_FCNTL:
            fd = os.open(str(self.path), os.O_RDONLY)
            try:
                fcntl.flock(fd, fcntl.LOCK_SH)
                size = os.fstat(fd).st_size
                raw = os.read(fd, size).decode("utf-8", errors="replace")
            finally:
                fcntl.flock(fd, fcntl.LOCK_UN)
                os.close(fd)
        else:
            raw = self.path.read_text(encoding="utf-8")

        events: list[dict[str, Any]] = []
        for line in raw.splitlines():
            line = line.strip()
            if not line:
                continue
            try:
                events.append(json.loads(line))
            except json.JSONDecodeError:
                continue
        return events
