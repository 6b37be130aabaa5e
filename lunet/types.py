"""Runtime value helpers for Lunet.

Lunet values map directly onto Python objects:

    Number   -> float
    String   -> str
    Boolean  -> bool
    Nil      -> None (also used for unset variables)
    Function -> BuiltinFunction

These helpers give the interpreter one place to ask for a value's type
name, its display form, its truthiness and equality between values.
"""

from __future__ import annotations

import math
from typing import Any

from .builtin_function import BuiltinFunction

NUMBER = 'Number'
STRING = 'String'
BOOLEAN = 'Boolean'
NIL = 'Nil'
FUNCTION = 'Function'


def is_number(value: Any) -> bool:
    # bool is a subclass of int; numbers are always floats
    return isinstance(value, float)


def type_name(value: Any) -> str:
    if value is None:
        return NIL
    if isinstance(value, bool):
        return BOOLEAN
    if isinstance(value, float):
        return NUMBER
    if isinstance(value, str):
        return STRING
    if isinstance(value, BuiltinFunction):
        return FUNCTION
    return type(value).__name__


def format_number(value: float) -> str:
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def to_string(value: Any) -> str:
    """Natural string form of a value, used by `+` and `print`."""
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, str):
        return value
    return repr(value)


def is_truthy(value: Any) -> bool:
    """Only false and nil are falsy; 0 and "" are truthy."""
    if value is None:
        return False
    if value is False:
        return False
    return True


def equal_values(a: Any, b: Any) -> bool:
    """Equality for `==`/`!=`. Defined for every pair of values."""
    if type_name(a) != type_name(b):
        return False
    if isinstance(a, BuiltinFunction):
        return a is b
    return a == b
