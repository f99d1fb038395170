"""Cell references: contents that stand for another cell's content."""

from __future__ import annotations

import re

from sheetcalc.formulas.content import CellResolver
from sheetcalc.formulas.errors import FormulaConstructionError, FormulaRefError
from sheetcalc.formulas.literals import Literal

_ADDR_RE = re.compile(r"^\s*(\d+)\s*;\s*(\d+)\s*$")


def parse_address(text: str) -> tuple[int, int]:
    """Parse a ``row;column`` address into a coordinate pair.

    Examples:
        ``"0;1"`` → ``(0, 1)``
        ``" 3 ; 12 "`` → ``(3, 12)``

    Raises:
        FormulaRefError: If *text* is not a ``row;column`` address.
    """
    m = _ADDR_RE.match(text)
    if m is None:
        raise FormulaRefError(text, f"Malformed cell address: {text!r}")
    return int(m.group(1)), int(m.group(2))


def format_address(row: int, column: int) -> str:
    """Inverse of :func:`parse_address`."""
    return f"{row};{column}"


class Reference:
    """A pointer to the content stored at (row, column) of a resolver.

    The reference holds no value of its own.  Every ``value()`` call is a
    fresh lookup against the resolver, which is treated as a read-only
    snapshot owned elsewhere.
    """

    __slots__ = ("_row", "_column", "_resolver")

    def __init__(self, row: int, column: int, resolver: CellResolver) -> None:
        for label, coord in (("row", row), ("column", column)):
            if isinstance(coord, bool) or not isinstance(coord, int) or coord < 0:
                raise FormulaConstructionError(
                    f"Reference {label} must be a non-negative int, got {coord!r}"
                )
        if resolver is None:
            raise FormulaConstructionError("Reference requires a resolver")
        self._row = row
        self._column = column
        self._resolver = resolver

    @classmethod
    def from_address(cls, address: str, resolver: CellResolver) -> Reference:
        """Build a reference from ``row;column`` text."""
        row, column = parse_address(address)
        return cls(row, column, resolver)

    @property
    def row(self) -> int:
        return self._row

    @property
    def column(self) -> int:
        return self._column

    @property
    def coordinates(self) -> tuple[int, int]:
        return (self._row, self._column)

    @property
    def resolver(self) -> CellResolver:
        return self._resolver

    def target(self):
        """Return the referenced content, or ``None`` if the cell is empty."""
        return self._resolver.resolve(self._row, self._column)

    def value(self) -> Literal:
        """Evaluate the referenced cell.

        Raises:
            FormulaRefError: If the referenced cell is empty.
        """
        content = self.target()
        if content is None:
            raise FormulaRefError(
                self.argument_text(),
                f"Reference to empty cell {self.argument_text()}",
            )
        return content.value()

    def argument_text(self) -> str:
        return format_address(self._row, self._column)

    def __str__(self) -> str:
        return f"{self.value()}={self.argument_text()}"

    def __repr__(self) -> str:
        return f"Reference({self._row}, {self._column})"
