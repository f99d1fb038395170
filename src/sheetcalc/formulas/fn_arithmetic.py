"""Binary arithmetic functions: ADD, SUB, MUL, DIV."""

from __future__ import annotations

from abc import abstractmethod

from sheetcalc.formulas.errors import FormulaValueError
from sheetcalc.formulas.function import BinaryFunction
from sheetcalc.formulas.literals import Literal, Number
from sheetcalc.formulas.registry import register_function


class _NumericBinary(BinaryFunction):
    """Evaluates both operands as numbers and applies :meth:`combine`."""

    __slots__ = ()

    def compute_value(self) -> Literal:
        left = self._left.value().as_number()
        right = self._right.value().as_number()
        return Number(self.combine(left, right))

    @abstractmethod
    def combine(self, left: int | float, right: int | float) -> int | float:
        """Apply the operator to two numbers."""


@register_function("ADD")
class Add(_NumericBinary):
    __slots__ = ()

    def combine(self, left: int | float, right: int | float) -> int | float:
        return left + right


@register_function("SUB")
class Sub(_NumericBinary):
    __slots__ = ()

    def combine(self, left: int | float, right: int | float) -> int | float:
        return left - right


@register_function("MUL")
class Mul(_NumericBinary):
    __slots__ = ()

    def combine(self, left: int | float, right: int | float) -> int | float:
        return left * right


@register_function("DIV")
class Div(_NumericBinary):
    """DIV(a, b) — true division; ``DIV(8,2)`` renders its value as ``4``."""

    __slots__ = ()

    def combine(self, left: int | float, right: int | float) -> int | float:
        if right == 0:
            raise FormulaValueError(f"Division by zero in {self.argument_text()}")
        return left / right
