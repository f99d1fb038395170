"""Binary comparison functions: EQ, GT, LT."""

from __future__ import annotations

from sheetcalc.formulas.function import BinaryFunction
from sheetcalc.formulas.literals import Boolean, Literal
from sheetcalc.formulas.registry import register_function


@register_function("EQ")
class Equal(BinaryFunction):
    """EQ(a, b) — TRUE if both values are equal literals of the same kind."""

    __slots__ = ()

    def compute_value(self) -> Literal:
        return Boolean(self._left.value() == self._right.value())


@register_function("GT")
class Greater(BinaryFunction):
    """GT(a, b) — TRUE if number a is greater than number b."""

    __slots__ = ()

    def compute_value(self) -> Literal:
        return Boolean(self._left.value().as_number() > self._right.value().as_number())


@register_function("LT")
class Less(BinaryFunction):
    """LT(a, b) — TRUE if number a is less than number b."""

    __slots__ = ()

    def compute_value(self) -> Literal:
        return Boolean(self._left.value().as_number() < self._right.value().as_number())
