"""Error types for formula construction and evaluation."""

from __future__ import annotations

from typing import Any


class FormulaError(Exception):
    """Base class for all formula-related errors."""


class FormulaConstructionError(FormulaError):
    """A formula node was built with a missing or invalid part.

    Raised at construction time, never deferred to evaluation.
    """


class FormulaRefError(FormulaError):
    """Reference to an empty, out-of-range or malformed cell address.

    Attributes:
        address: The offending address in ``row;column`` form (or raw text).
    """

    def __init__(self, address: str, message: str | None = None) -> None:
        self.address = address
        msg = message or f"Unresolved reference: {address!r}"
        super().__init__(msg)


class FormulaTypeError(FormulaError):
    """An operand value has the wrong type for the combination applied to it.

    Attributes:
        expected: Name of the expected literal kind.
        actual: The literal that was received.
    """

    def __init__(self, expected: str, actual: Any) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expected {expected}, got {type(actual).__name__} {str(actual)!r}"
        )


class FormulaValueError(FormulaError):
    """An operand value is of the right type but invalid (e.g. division by zero)."""


class FormulaFunctionError(FormulaError):
    """Unknown function or wrong number of arguments.

    Attributes:
        func_name: The function that caused the error.
    """

    def __init__(self, func_name: str, message: str | None = None) -> None:
        self.func_name = func_name
        msg = message or f"Unknown function: {func_name!r}"
        super().__init__(msg)


class CellCycleError(FormulaError):
    """Raised when storing a content would create a circular cell reference.

    Attributes:
        cycle_path: List of (row, column) tuples showing the cycle.
    """

    def __init__(self, cycle_path: list[tuple[int, int]]) -> None:
        self.cycle_path = cycle_path
        parts = [f"{r};{c}" for r, c in cycle_path]
        super().__init__(f"Circular cell reference: {' -> '.join(parts)}")


# Errors that evaluation of a content tree may legitimately raise.  The grid
# layer catches exactly these when turning a failed cell into an error marker.
ENGINE_ERRORS: tuple[type[Exception], ...] = (
    FormulaRefError,
    FormulaTypeError,
    FormulaValueError,
)
