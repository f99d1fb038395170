"""Sheet-level events: what happened, in which sheet, at which cell.

A snapshot reports two things worth keeping: a cell whose evaluation failed
while it was being displayed, and an edit refused because it would close a
reference cycle.  Each becomes a :class:`SheetEvent` carrying the sheet id
and cell address as first-class fields.

Events go to the sink attached with :func:`set_log_dir`.  With no sink
attached they are dropped.  Emitting never raises into the caller; a failed
write is reported through the standard ``logging`` module instead.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field, field_validator

if TYPE_CHECKING:
    from sheetcalc.logging.sink import EventSink

logger = logging.getLogger(__name__)


class EventLevel(str, Enum):
    info = "info"
    warning = "warning"
    error = "error"


class EventType(str, Enum):
    cell_eval_error = "cell_eval_error"
    cell_cycle_rejected = "cell_cycle_rejected"
    config_loaded = "config_loaded"


# Machine-readable causes attached to error and warning events
REF_ERROR = "ref_error"
TYPE_ERROR = "type_error"
VALUE_ERROR = "value_error"
CYCLE_ERROR = "cycle_error"

MAX_CONTEXT_LEN = 256


def truncate_context(context: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of *context* with long strings cut to ``MAX_CONTEXT_LEN``.

    Renderings of deep formula trees grow without bound, so every string in
    the context (including inside nested dicts and lists) is capped and
    marked ``...[truncated]``.
    """
    return {key: _truncate(val) for key, val in context.items()}


def _truncate(val: Any) -> Any:
    if isinstance(val, str) and len(val) > MAX_CONTEXT_LEN:
        return val[:MAX_CONTEXT_LEN] + "...[truncated]"
    if isinstance(val, dict):
        return truncate_context(val)
    if isinstance(val, (list, tuple)):
        return [_truncate(item) for item in val]
    return val


def _utc_now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


class SheetEvent(BaseModel):
    """One structured record about a sheet."""

    schema_version: int = 1
    ts: str = Field(default_factory=_utc_now)
    level: EventLevel
    event_type: EventType
    message: str = ""
    sheet_id: str | None = None
    cell: str | None = None
    error_code: str | None = None
    context: dict[str, Any] = Field(default_factory=dict)

    @field_validator("context")
    @classmethod
    def cap_context(cls, v: dict[str, Any]) -> dict[str, Any]:
        return truncate_context(v)


_sink: EventSink | None = None


def set_log_dir(project_dir: Path | str | None) -> EventSink | None:
    """Attach an event sink writing under ``<project_dir>/logs``.

    The sink honours ``logging_fsync`` and ``logging_tail_bytes`` from the
    project's ``sheetcalc.yaml``.  ``None`` detaches the current sink.
    Returns the attached sink.
    """
    global _sink
    if project_dir is None:
        _sink = None
        return None

    from sheetcalc.config import load_config
    from sheetcalc.logging.sink import EventSink

    project_dir = Path(project_dir)
    cfg = load_config(project_dir)
    _sink = EventSink(
        project_dir,
        fsync=bool(cfg["logging_fsync"]),
        tail_bytes=int(cfg["logging_tail_bytes"]),
    )
    emit_info(
        EventType.config_loaded,
        "event sink attached",
        project_dir=str(project_dir),
        logging_fsync=_sink.fsync,
    )
    return _sink


def current_sink() -> EventSink | None:
    return _sink


def emit(event: SheetEvent) -> None:
    """Hand *event* to the attached sink.  Never raises."""
    sink = _sink
    if sink is None:
        return
    try:
        sink.append(event)
    except Exception:
        logger.warning("Could not record %s event", event.event_type.value, exc_info=True)


def _emit_at(
    level: EventLevel,
    event_type: EventType,
    message: str,
    *,
    sheet_id: str | None = None,
    cell: str | None = None,
    error_code: str | None = None,
    **context: Any,
) -> None:
    emit(
        SheetEvent(
            level=level,
            event_type=event_type,
            message=message,
            sheet_id=sheet_id,
            cell=cell,
            error_code=error_code,
            context=context,
        )
    )


def emit_info(event_type: EventType, message: str, **kwargs: Any) -> None:
    _emit_at(EventLevel.info, event_type, message, **kwargs)


def emit_warning(event_type: EventType, message: str, **kwargs: Any) -> None:
    _emit_at(EventLevel.warning, event_type, message, **kwargs)


def emit_error(event_type: EventType, message: str, **kwargs: Any) -> None:
    """Emit an error event.

    Keyword arguments ``sheet_id``, ``cell`` and ``error_code`` fill the
    matching event fields; any other keyword lands in ``context``.
    """
    _emit_at(EventLevel.error, event_type, message, **kwargs)
