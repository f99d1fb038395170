"""Read-only grid snapshot that formula trees evaluate against.

A :class:`SheetSnapshot` maps ``(row, column)`` coordinates to contents and
implements the :class:`~sheetcalc.formulas.content.CellResolver` protocol, so
references built against it resolve by plain lookup.  Evaluation never
mutates the snapshot; edits go through :meth:`SheetSnapshot.set_content`,
which refuses any content that would close a reference cycle.  Cycles are
therefore impossible by construction and evaluation needs no cycle guard.

Usage::

    sheet = SheetSnapshot(10, 10)
    sheet.set_content(0, 1, Number(12))
    sheet.set_content(0, 2, Sub(sheet.reference(0, 1), Number(4)))
    sheet.render(0, 2)   # "0;2|8=SUB(0;1,4)"
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator

from sheetcalc.config import DEFAULT_CONFIG, load_config
from sheetcalc.formulas.content import Content, argument_text_of, is_content
from sheetcalc.formulas.errors import (
    ENGINE_ERRORS,
    CellCycleError,
    FormulaConstructionError,
    FormulaRefError,
    FormulaTypeError,
    FormulaValueError,
)
from sheetcalc.formulas.literals import Literal
from sheetcalc.formulas.reference import Reference, format_address
from sheetcalc.logging.events import (
    CYCLE_ERROR,
    REF_ERROR,
    TYPE_ERROR,
    VALUE_ERROR,
    EventType,
    emit_error,
    emit_warning,
)

_ERROR_CODES: dict[type[Exception], str] = {
    FormulaRefError: REF_ERROR,
    FormulaTypeError: TYPE_ERROR,
    FormulaValueError: VALUE_ERROR,
}


def _error_code(exc: Exception) -> str | None:
    for exc_type, code in _ERROR_CODES.items():
        if isinstance(exc, exc_type):
            return code
    return None


class SheetSnapshot:
    """A fixed-size grid of contents.

    Parameters
    ----------
    rows, columns : int
        Grid dimensions; valid coordinates are ``0 <= row < rows`` and
        ``0 <= column < columns``.
    config : dict | None
        Engine configuration (see :func:`sheetcalc.config.load_config`).
        Missing keys fall back to ``DEFAULT_CONFIG``.
    sheet_id : str | None
        Identifier attached to logged events.
    """

    def __init__(
        self,
        rows: int,
        columns: int,
        *,
        config: dict[str, Any] | None = None,
        sheet_id: str | None = None,
    ) -> None:
        if rows < 1 or columns < 1:
            raise ValueError(f"Sheet dimensions must be positive, got {rows}x{columns}")
        self._rows = rows
        self._columns = columns
        self._config = {**DEFAULT_CONFIG, **(config or {})}
        self._sheet_id = sheet_id
        self._cells: dict[tuple[int, int], Content] = {}

    @classmethod
    def from_project(
        cls, project_dir: Path, rows: int, columns: int, *, sheet_id: str | None = None
    ) -> SheetSnapshot:
        """Create a snapshot configured from ``<project_dir>/sheetcalc.yaml``."""
        return cls(rows, columns, config=load_config(project_dir), sheet_id=sheet_id)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def sheet_id(self) -> str | None:
        return self._sheet_id

    # ------------------------------------------------------------------
    # CellResolver protocol implementation
    # ------------------------------------------------------------------

    def resolve(self, row: int, column: int) -> Content | None:
        """Return the content at (row, column), or ``None`` if empty.

        Raises:
            FormulaRefError: If the coordinate lies outside the grid.
        """
        self._check_bounds(row, column)
        return self._cells.get((row, column))

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def reference(self, row: int, column: int) -> Reference:
        """Build a reference to (row, column) in this snapshot."""
        self._check_bounds(row, column)
        return Reference(row, column, self)

    def set_content(self, row: int, column: int, content: Content) -> None:
        """Store *content* at (row, column).

        Raises:
            FormulaRefError: If the coordinate lies outside the grid.
            FormulaConstructionError: If *content* is not a content.
            CellCycleError: If *content* would (transitively) reference
                its own cell.
        """
        self._check_bounds(row, column)
        if not is_content(content):
            raise FormulaConstructionError(
                f"Cell {format_address(row, column)} requires a content, got {content!r}"
            )
        key = (row, column)
        path = self._path_to(content, key, set())
        if path is not None:
            cycle = [key] + path
            emit_warning(
                EventType.cell_cycle_rejected,
                f"Rejected circular content at {format_address(row, column)}",
                sheet_id=self._sheet_id,
                cell=format_address(row, column),
                error_code=CYCLE_ERROR,
                cycle=[format_address(r, c) for r, c in cycle],
            )
            raise CellCycleError(cycle)
        self._cells[key] = content

    def clear(self, row: int, column: int) -> None:
        """Remove the content at (row, column), if any."""
        self._check_bounds(row, column)
        self._cells.pop((row, column), None)

    # ------------------------------------------------------------------
    # Evaluation and display
    # ------------------------------------------------------------------

    def evaluate(self, row: int, column: int) -> Literal | None:
        """Evaluate a cell.  Errors propagate; empty cells yield ``None``."""
        content = self.resolve(row, column)
        if content is None:
            return None
        return content.value()

    def display(self, row: int, column: int) -> str:
        """Get the display string of a cell's value.

        Empty cells display as ``""``; cells whose evaluation fails display
        the configured error marker and log a ``cell_eval_error`` event.
        """
        try:
            val = self.evaluate(row, column)
        except ENGINE_ERRORS as exc:
            self._log_eval_error(row, column, exc)
            return self._config["error_marker"]
        if val is None:
            return ""
        return str(val)

    def render(self, row: int, column: int) -> str:
        """Render a cell as ``row;column|<content rendering>``.

        A failing formula renders its argument text behind the error marker,
        e.g. ``0;2|#VALUE=ADD(0;1,1)``.
        """
        prefix = f"{format_address(row, column)}|"
        content = self.resolve(row, column)
        if content is None:
            return prefix
        try:
            return prefix + str(content)
        except ENGINE_ERRORS as exc:
            self._log_eval_error(row, column, exc)
            return f"{prefix}{self._config['error_marker']}={argument_text_of(content)}"

    def render_all(self) -> list[str]:
        """Render every non-empty cell in row-major order."""
        return [self.render(r, c) for r, c in sorted(self._cells)]

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _check_bounds(self, row: int, column: int) -> None:
        if not (0 <= row < self._rows and 0 <= column < self._columns):
            raise FormulaRefError(
                format_address(row, column),
                f"Cell {format_address(row, column)} is outside the "
                f"{self._rows}x{self._columns} sheet",
            )

    def _path_to(
        self,
        content: Any,
        target: tuple[int, int],
        visited: set[tuple[int, int]],
    ) -> list[tuple[int, int]] | None:
        """Find a chain of this sheet's references from *content* to *target*."""
        for coord in self._local_references(content):
            if coord == target:
                return [coord]
            if coord in visited:
                continue
            visited.add(coord)
            stored = self._cells.get(coord)
            if stored is None:
                continue
            rest = self._path_to(stored, target, visited)
            if rest is not None:
                return [coord] + rest
        return None

    def _local_references(self, content: Any) -> Iterator[tuple[int, int]]:
        """Yield coordinates of references to this sheet inside *content*'s tree."""
        stack = [content]
        while stack:
            node = stack.pop()
            if isinstance(node, Reference):
                if node.resolver is self:
                    yield node.coordinates
                continue
            stack.extend(reversed(getattr(node, "operands", ())))

    def _log_eval_error(self, row: int, column: int, exc: Exception) -> None:
        emit_error(
            EventType.cell_eval_error,
            str(exc),
            sheet_id=self._sheet_id,
            cell=format_address(row, column),
            error_code=_error_code(exc),
            exception=type(exc).__name__,
        )
