"""Functions over one or more operands: SUM, AVERAGE, PRODUCT, CONCAT, COALESCE."""

from __future__ import annotations

import math

from sheetcalc.formulas.function import VariadicFunction
from sheetcalc.formulas.literals import Literal, Number, Text
from sheetcalc.formulas.registry import register_function


@register_function("SUM")
class Sum(VariadicFunction):
    """SUM(a, ...) — total of all numeric operands."""

    __slots__ = ()

    def compute_value(self) -> Literal:
        return Number(sum(v.as_number() for v in self.values()))


@register_function("AVERAGE")
class Average(VariadicFunction):
    """AVERAGE(a, ...) — arithmetic mean of all numeric operands."""

    __slots__ = ()

    def compute_value(self) -> Literal:
        nums = [v.as_number() for v in self.values()]
        return Number(sum(nums) / len(nums))


@register_function("PRODUCT")
class Product(VariadicFunction):
    __slots__ = ()

    def compute_value(self) -> Literal:
        return Number(math.prod(v.as_number() for v in self.values()))


@register_function("CONCAT")
class Concat(VariadicFunction):
    """CONCAT(a, ...) — join the display text of every operand value."""

    __slots__ = ()

    def compute_value(self) -> Literal:
        return Text("".join(str(v) for v in self.values()))


@register_function("COALESCE")
class Coalesce(VariadicFunction):
    """COALESCE(a, ...) — first non-empty text operand, or empty text.

    Operands are evaluated left to right and evaluation stops at the first
    match, so later operands are never touched.
    """

    __slots__ = ()

    def compute_value(self) -> Literal:
        for op in self._operands:
            val = op.value()
            if isinstance(val, Text) and val.as_text():
                return val
        return Text("")
