"""Argument checks shared by the builtins.

Each check returns an Error value describing the first violation, or None, so
builtins chain them with `or` and return the result:

    err = check_count("head", args, 1) or check_type("head", args, 0, ListKind.QUOTED, String)
    if err:
        return err
"""

from __future__ import annotations

from typing import Optional, Union

from slither.types.values import Error, List, ListKind, Symbol, Value

TypeSpec = Union[type, ListKind]


def _matches(value: Value, spec: TypeSpec) -> bool:
    if isinstance(spec, ListKind):
        return isinstance(value, List) and value.kind is spec
    return isinstance(value, spec)


def _name(spec: TypeSpec) -> str:
    return spec.value if isinstance(spec, ListKind) else spec.type_name


def check_count(func: str, args: list[Value], expected: int) -> Optional[Error]:
    if len(args) != expected:
        return Error(
            f"Function '{func}' passed incorrect number of arguments. "
            f"Got {len(args)}, Expected {expected}."
        )
    return None


def check_min_count(func: str, args: list[Value], expected: int) -> Optional[Error]:
    if len(args) < expected:
        return Error(
            f"Function '{func}' passed too few arguments. "
            f"Got {len(args)}, Expected at least {expected}."
        )
    return None


def check_type(func: str, args: list[Value], index: int, *expected: TypeSpec) -> Optional[Error]:
    """Check args[index] against one or more accepted types."""
    value = args[index]
    if any(_matches(value, spec) for spec in expected):
        return None
    wanted = " or ".join(_name(spec) for spec in expected)
    return Error(
        f"Function '{func}' passed incorrect type for argument {index}. "
        f"Got {value.type_name}, Expected {wanted}."
    )


def check_types(func: str, args: list[Value], *expected: TypeSpec) -> Optional[Error]:
    """Check every argument against the same accepted types."""
    for i in range(len(args)):
        err = check_type(func, args, i, *expected)
        if err:
            return err
    return None


def check_not_empty(func: str, args: list[Value], index: int) -> Optional[Error]:
    if len(args[index]) == 0:
        return Error(f"Function '{func}' passed {{}} for argument {index}.")
    return None


def check_symbols(func: Optional[str], syms: List) -> Optional[Error]:
    """Check a Q-expression holds only symbols (formals, or names to define)."""
    for cell in syms:
        if not isinstance(cell, Symbol):
            prefix = f"Function '{func}' cannot" if func else "Cannot"
            return Error(f"{prefix} define non-symbol. Got {cell.type_name}, Expected Symbol.")
    return None
