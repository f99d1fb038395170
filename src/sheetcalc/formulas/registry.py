"""Central registry of named spreadsheet functions.

Formula-tree builders look functions up by name here instead of importing
the concrete classes directly.
"""

from __future__ import annotations

from typing import Any, Callable

from sheetcalc.formulas.errors import FormulaFunctionError

_FUNCTIONS: dict[str, type] = {}


def register_function(name: str) -> Callable[[type], type]:
    """Class decorator that registers a function class under *name*.

    The name is upper-cased and also becomes the class's default
    ``function_name``, so ``Add(a, b)`` renders as ``ADD(...)``.

    Args:
        name: The lookup name for this function.

    Returns:
        The original class.
    """
    key = name.upper()

    def decorator(cls: type) -> type:
        if key in _FUNCTIONS and _FUNCTIONS[key] is not cls:
            raise FormulaFunctionError(
                key, f"Function {key!r} is already registered to {_FUNCTIONS[key].__name__}"
            )
        cls.function_name = key
        _FUNCTIONS[key] = cls
        return cls

    return decorator


def get_function_class(name: str) -> type:
    """Look up a registered function class (case-insensitive).

    Raises:
        FormulaFunctionError: If no function is registered under *name*.
    """
    key = name.upper()
    if key not in _FUNCTIONS:
        raise FormulaFunctionError(name)
    return _FUNCTIONS[key]


def list_functions() -> list[str]:
    """Return the sorted names of all registered functions."""
    return sorted(_FUNCTIONS)


def build_function(name: str, *operands: Any):
    """Instantiate the function registered under *name* over *operands*.

    Args:
        name: Function name, e.g. ``"ADD"``.
        *operands: Operand contents, in order.

    Returns:
        The constructed function node.

    Raises:
        FormulaFunctionError: Unknown name or wrong number of operands.
        FormulaConstructionError: An operand is not a content.
    """
    cls = get_function_class(name)
    arity = getattr(cls, "arity", None)
    key = cls.function_name
    if arity is not None and len(operands) != arity:
        raise FormulaFunctionError(
            key, f"{key} requires exactly {arity} arguments, got {len(operands)}"
        )
    if arity is None and len(operands) < 1:
        raise FormulaFunctionError(key, f"{key} requires at least 1 argument")
    return cls(*operands)
