"""Runtime data model: tagged values and the environment chain."""

from slither.types.values import (
    Value,
    Integer,
    Float,
    Symbol,
    String,
    Error,
    ListKind,
    List,
    Builtin,
    Closure,
    values_equal,
)
from slither.types.environment import Environment

__all__ = [
    "Value",
    "Integer",
    "Float",
    "Symbol",
    "String",
    "Error",
    "ListKind",
    "List",
    "Builtin",
    "Closure",
    "Environment",
    "values_equal",
]
