"""Formula trees for spreadsheet cells: literals, references and functions.

Public API::

    from sheetcalc.formulas import Number, Reference, build_function

    total = build_function("ADD", Number(5), Number(3))
    str(total)  # "8=ADD(5,3)"
"""

from sheetcalc.formulas.content import (
    CellResolver,
    Content,
    argument_text_of,
    is_content,
    parse_argument,
)
from sheetcalc.formulas.errors import (
    ENGINE_ERRORS,
    CellCycleError,
    FormulaConstructionError,
    FormulaError,
    FormulaFunctionError,
    FormulaRefError,
    FormulaTypeError,
    FormulaValueError,
)
from sheetcalc.formulas.function import BinaryFunction, Function, VariadicFunction
from sheetcalc.formulas.literals import Boolean, Literal, Number, Text, to_literal
from sheetcalc.formulas.reference import Reference, format_address, parse_address
from sheetcalc.formulas.fn_arithmetic import Add, Div, Mul, Sub
from sheetcalc.formulas.fn_compare import Equal, Greater, Less
from sheetcalc.formulas.fn_interval import Average, Coalesce, Concat, Product, Sum
from sheetcalc.formulas.registry import (
    build_function,
    get_function_class,
    list_functions,
    register_function,
)

__all__ = [
    "ENGINE_ERRORS",
    "Add",
    "Average",
    "BinaryFunction",
    "Boolean",
    "CellCycleError",
    "CellResolver",
    "Coalesce",
    "Concat",
    "Content",
    "Div",
    "Equal",
    "FormulaConstructionError",
    "FormulaError",
    "FormulaFunctionError",
    "FormulaRefError",
    "FormulaTypeError",
    "FormulaValueError",
    "Function",
    "Greater",
    "Less",
    "Literal",
    "Mul",
    "Number",
    "Product",
    "Reference",
    "Sub",
    "Sum",
    "Text",
    "VariadicFunction",
    "argument_text_of",
    "build_function",
    "format_address",
    "get_function_class",
    "is_content",
    "list_functions",
    "parse_address",
    "parse_argument",
    "register_function",
    "to_literal",
]
