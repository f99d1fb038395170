"""The content capability shared by every formula-tree node.

A *content* is anything a cell can hold: a literal, a reference to another
cell, or a function over other contents.  Contents are not required to share
a base class; anything implementing the :class:`Content` protocol can be
evaluated, displayed, and embedded as a function argument.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from sheetcalc.formulas.literals import Literal


class Content(Protocol):
    """Protocol for formula-tree nodes."""

    def value(self) -> Literal:
        """Compute the node's current value (may recurse into operands)."""
        ...

    def argument_text(self) -> str:
        """Text shown when this node appears as a function argument."""
        ...

    def __str__(self) -> str:
        """Display rendering, e.g. ``5``, ``12=0;1`` or ``8=ADD(5,3)``."""
        ...


class CellResolver(Protocol):
    """Protocol for looking up the content stored at a grid coordinate."""

    def resolve(self, row: int, column: int) -> Content | None:
        """Return the content at (row, column), or ``None`` for an empty cell."""
        ...


def is_content(obj: Any) -> bool:
    """True if *obj* can be evaluated as a formula operand."""
    return obj is not None and callable(getattr(obj, "value", None))


def parse_argument(rendering: str) -> str:
    """Recover argument text from a display rendering.

    A computed node renders as ``value=rest``; only ``rest`` belongs in an
    enclosing argument list.  The split happens at the first ``=``, so
    ``"1=EQ(a,b=c)"`` yields ``"EQ(a,b=c)"``.  A rendering without ``=`` is
    returned unchanged.
    """
    _, sep, rest = rendering.partition("=")
    return rest if sep else rendering


def argument_text_of(content: Any) -> str:
    """Return the argument text for *content*.

    Uses the node's own :meth:`Content.argument_text` when it has one, and
    falls back to :func:`parse_argument` on its display string otherwise.
    """
    method = getattr(content, "argument_text", None)
    if callable(method):
        return method()
    return parse_argument(str(content))
