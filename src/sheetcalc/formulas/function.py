"""Function nodes: named computations over operand contents.

Every function renders as ``<value>=<NAME>(<arg>,<arg>,...)``.  Operand
arguments come from each operand's ``argument_text()``, so a nested function
contributes ``NAME(...)`` and a reference contributes ``row;column`` rather
than a second copy of their computed values.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from sheetcalc.formulas.content import Content, argument_text_of, is_content
from sheetcalc.formulas.errors import FormulaConstructionError
from sheetcalc.formulas.literals import Literal

logger = logging.getLogger(__name__)


class Function(ABC):
    """Base class for all spreadsheet functions.

    Subclasses supply ``operands`` and ``value()``; the base owns the name and
    the formula-string assembly.
    """

    __slots__ = ("_name",)

    # Default name for subclasses registered under a fixed name.
    function_name: str | None = None

    def __init__(self, name: str | None = None) -> None:
        if name is None:
            name = self.function_name
        if not isinstance(name, str) or not name:
            raise FormulaConstructionError(
                f"Function name must be a non-empty string, got {name!r}"
            )
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    @abstractmethod
    def operands(self) -> tuple[Content, ...]:
        """Operand contents, in order."""

    def value(self) -> Literal:
        """Compute the function result.

        Delegates to :meth:`compute_value`.  Never mutates the operands; any
        error raised while evaluating them propagates unchanged.
        """
        result = self.compute_value()
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s -> %r", self.argument_text(), result)
        return result

    @abstractmethod
    def compute_value(self) -> Literal:
        """Evaluate the operands and combine them into a literal."""

    def argument_text(self) -> str:
        args = ",".join(argument_text_of(op) for op in self.operands)
        return f"{self._name}({args})"

    def __str__(self) -> str:
        return f"{self.value()}={self.argument_text()}"

    def __repr__(self) -> str:
        ops = ", ".join(repr(op) for op in self.operands)
        return f"{type(self).__name__}({ops})"


def _check_operand(func_name: str, position: str, operand: Any) -> None:
    if not is_content(operand):
        raise FormulaConstructionError(
            f"{func_name}: {position} operand must be a content, got {operand!r}"
        )


class BinaryFunction(Function):
    """A function of exactly two operands.

    Concrete subclasses implement :meth:`compute_value`, which evaluates both
    operands and combines their values; errors raised by either operand
    propagate unchanged.  Instances never change after
    construction and may be shared between concurrent readers.
    """

    __slots__ = ("_left", "_right")

    arity = 2

    def __init__(self, left: Content, right: Content, name: str | None = None) -> None:
        super().__init__(name)
        _check_operand(self._name, "left", left)
        _check_operand(self._name, "right", right)
        self._left = left
        self._right = right

    @property
    def left(self) -> Content:
        return self._left

    @property
    def right(self) -> Content:
        return self._right

    @property
    def operands(self) -> tuple[Content, Content]:
        return (self._left, self._right)

    def __str__(self) -> str:
        left = argument_text_of(self._left)
        right = argument_text_of(self._right)
        return f"{self.value()}={self._name}({left},{right})"


class VariadicFunction(Function):
    """A function over one or more operands (SUM, CONCAT, ...)."""

    __slots__ = ("_operands",)

    arity = None

    def __init__(self, *operands: Content, name: str | None = None) -> None:
        super().__init__(name)
        if not operands:
            raise FormulaConstructionError(f"{self._name} requires at least 1 operand")
        for i, op in enumerate(operands):
            _check_operand(self._name, f"#{i + 1}", op)
        self._operands = operands

    @property
    def operands(self) -> tuple[Content, ...]:
        return self._operands

    def values(self) -> list[Literal]:
        """Evaluate every operand, in order."""
        return [op.value() for op in self._operands]
