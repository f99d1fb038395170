"""Append-only NDJSON files for sheet events.

Every event lands in ``logs/events.ndjson``.  Events that name a sheet are
also copied to ``logs/sheets/<sheet_id>.ndjson`` so one sheet's history can
be read without scanning the whole project log.

Writers hold an exclusive ``flock`` for the duration of one line; readers
hold a shared one while taking the tail of the file.
"""

from __future__ import annotations

import fcntl
import json
import os
import re
from pathlib import Path
from typing import Any

from sheetcalc.config import DEFAULT_CONFIG
from sheetcalc.logging.events import SheetEvent

# Sheet ids become file names
_SHEET_ID_RE = re.compile(r"^[A-Za-z0-9_\-]+$")

MAX_READ_LIMIT = 2000


class EventSink:
    """Writes and queries the event logs of one project directory."""

    def __init__(
        self,
        project_dir: Path,
        *,
        fsync: bool = False,
        tail_bytes: int = DEFAULT_CONFIG["logging_tail_bytes"],
    ) -> None:
        self.logs_dir = Path(project_dir) / "logs"
        self.fsync = fsync
        self.tail_bytes = tail_bytes

    @property
    def global_log(self) -> Path:
        return self.logs_dir / "events.ndjson"

    def sheet_log(self, sheet_id: str) -> Path | None:
        """Path of the per-sheet log, or ``None`` if *sheet_id* is not file-safe."""
        if not _SHEET_ID_RE.match(sheet_id):
            return None
        return self.logs_dir / "sheets" / f"{sheet_id}.ndjson"

    def append(self, event: SheetEvent) -> None:
        line = json.dumps(event.model_dump(mode="json"), sort_keys=True, default=str)
        self._write_line(self.global_log, line)
        if event.sheet_id:
            path = self.sheet_log(event.sheet_id)
            if path is not None:
                self._write_line(path, line)

    def read_global(
        self,
        *,
        level: str | None = None,
        event_type: str | None = None,
        sheet_id: str | None = None,
        limit: int = 200,
    ) -> list[dict[str, Any]]:
        """Most recent events first, optionally filtered by field."""
        wanted = {
            key: val
            for key, val in (("level", level), ("event_type", event_type), ("sheet_id", sheet_id))
            if val
        }
        matches = [
            rec
            for rec in reversed(self._read_records(self.global_log))
            if all(rec.get(key) == val for key, val in wanted.items())
        ]
        return matches[: min(limit, MAX_READ_LIMIT)]

    def read_sheet_log(self, sheet_id: str) -> list[dict[str, Any]]:
        """Events of one sheet in the order they were written."""
        path = self.sheet_log(sheet_id)
        if path is None:
            return []
        return self._read_records(path)

    def _write_line(self, path: Path, line: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            fcntl.flock(f, fcntl.LOCK_EX)
            f.write(line + "\n")
            f.flush()
            if self.fsync:
                os.fsync(f.fileno())

    def _read_records(self, path: Path) -> list[dict[str, Any]]:
        """Parse the last ``tail_bytes`` of *path*, skipping unreadable lines."""
        if not path.exists():
            return []
        with open(path, "rb") as f:
            fcntl.flock(f, fcntl.LOCK_SH)
            size = os.fstat(f.fileno()).st_size
            start = max(0, size - self.tail_bytes)
            f.seek(start)
            data = f.read()
        if start:
            # first line is probably cut
            data = data.partition(b"\n")[2]

        records = []
        for raw in data.decode("utf-8", errors="replace").splitlines():
            if not raw.strip():
                continue
            try:
                records.append(json.loads(raw))
            except json.JSONDecodeError:
                continue
        return records
