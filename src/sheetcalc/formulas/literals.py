"""Concrete scalar values: the leaves of every formula tree."""

from __future__ import annotations

import math
from typing import Any

from sheetcalc.formulas.errors import FormulaTypeError


class Literal:
    """A concrete scalar value with a canonical rendering.

    Literals are immutable.  ``value()`` returns the literal itself, so a
    literal can stand anywhere a content is expected.
    """

    __slots__ = ("_raw",)

    kind = "literal"

    def __init__(self, raw: Any) -> None:
        object.__setattr__(self, "_raw", raw)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def raw(self) -> Any:
        """The underlying Python value."""
        return self._raw

    def value(self) -> Literal:
        return self

    def argument_text(self) -> str:
        return str(self)

    def as_number(self) -> int | float:
        raise FormulaTypeError(Number.kind, self)

    def as_text(self) -> str:
        raise FormulaTypeError(Text.kind, self)

    def as_bool(self) -> bool:
        raise FormulaTypeError(Boolean.kind, self)

    def __str__(self) -> str:
        return str(self._raw)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._raw!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Literal):
            return NotImplemented
        return type(self) is type(other) and self._raw == other._raw

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._raw))


class Number(Literal):
    """An integer or floating point value."""

    __slots__ = ()

    kind = "number"

    def __init__(self, raw: int | float) -> None:
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise FormulaTypeError(self.kind, raw)
        super().__init__(raw)

    def as_number(self) -> int | float:
        return self._raw

    def is_nan(self) -> bool:
        return isinstance(self._raw, float) and math.isnan(self._raw)

    def __eq__(self, other: object) -> bool:
        # NaN results (e.g. inf - inf) compare equal so evaluation stays idempotent
        if isinstance(other, Number) and self.is_nan() and other.is_nan():
            return True
        return super().__eq__(other)

    def __hash__(self) -> int:
        if self.is_nan():
            return hash((type(self).__name__, "nan"))
        return super().__hash__()

    def __str__(self) -> str:
        val = self._raw
        if isinstance(val, float):
            # Format floats cleanly
            if val.is_integer():
                return str(int(val))
            return f"{val:.10g}"
        return str(val)


class Text(Literal):
    """A string value."""

    __slots__ = ()

    kind = "text"

    def __init__(self, raw: str) -> None:
        if not isinstance(raw, str):
            raise FormulaTypeError(self.kind, raw)
        super().__init__(raw)

    def as_text(self) -> str:
        return self._raw


class Boolean(Literal):
    """A logical value, rendered ``TRUE`` / ``FALSE``."""

    __slots__ = ()

    kind = "boolean"

    def __init__(self, raw: bool) -> None:
        if not isinstance(raw, bool):
            raise FormulaTypeError(self.kind, raw)
        super().__init__(raw)

    def as_bool(self) -> bool:
        return self._raw

    def __str__(self) -> str:
        return "TRUE" if self._raw else "FALSE"


def to_literal(value: Any) -> Literal:
    """Coerce a plain Python scalar into the matching literal.

    Args:
        value: An ``int``, ``float``, ``str``, ``bool`` or existing literal.

    Returns:
        The literal wrapping *value*.

    Raises:
        FormulaTypeError: If *value* has no literal counterpart.
    """
    if isinstance(value, Literal):
        return value
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return Boolean(value)
    if isinstance(value, (int, float)):
        return Number(value)
    if isinstance(value, str):
        return Text(value)
    raise FormulaTypeError("scalar", value)
