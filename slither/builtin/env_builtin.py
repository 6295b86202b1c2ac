"""Built-in functions for the Slither runtime environment.

This module defines list processing, arithmetic, comparison, logic, control,
binding and I/O builtins, plus the registration helper that binds them into a
root environment. Every builtin is called as fn(env, args) with evaluated
arguments, validates them itself, and reports failures as Error values.
"""
from __future__ import annotations

import logging
import operator
from pathlib import Path
from typing import Callable

from slither.builtin.checks import (
    check_count,
    check_min_count,
    check_not_empty,
    check_symbols,
    check_type,
    check_types,
)
from slither.config import resolve_source
from slither.errors import SlitherSyntaxError
from slither.evaluation.evaluator import evaluate, evaluate_form
from slither.reader.parser import Node, parse_file as default_parse_file
from slither.reader.reader import read
from slither.types.environment import Environment
from slither.types.values import (
    Builtin,
    Closure,
    Error,
    Float,
    Integer,
    List,
    ListKind,
    String,
    Value,
    values_equal,
    wrap_i64,
)

logger = logging.getLogger(__name__)

TRUE = Integer(1)
FALSE = Integer(0)


def _bool(flag: bool) -> Integer:
    return TRUE if flag else FALSE


# -------------------------------
# List operations
# -------------------------------
def list_builtin(env: Environment, args: list[Value]) -> Value:
    """Collect the arguments into a Q-expression."""
    return List.qexpr(*args)


def head(env: Environment, args: list[Value]) -> Value:
    """First element of a Q-expression (as a Q-expression), or first character of a String."""
    err = (
        check_count("head", args, 1)
        or check_type("head", args, 0, ListKind.QUOTED, String)
    )
    if err:
        return err
    xs = args[0]
    if isinstance(xs, String):
        return String(xs.contents[:1])
    return check_not_empty("head", args, 0) or List.qexpr(xs.cells[0])


def tail(env: Environment, args: list[Value]) -> Value:
    """All but the first element of a Q-expression, or the rest of a String."""
    err = (
        check_count("tail", args, 1)
        or check_type("tail", args, 0, ListKind.QUOTED, String)
    )
    if err:
        return err
    xs = args[0]
    if isinstance(xs, String):
        return String(xs.contents[1:])
    return check_not_empty("tail", args, 0) or List.qexpr(*xs.cells[1:])


def join(env: Environment, args: list[Value]) -> Value:
    """Concatenate Strings, or splice Q-expressions; all arguments share one kind."""
    err = check_min_count("join", args, 1)
    if err:
        return err
    if isinstance(args[0], String):
        return check_types("join", args, String) or String(
            "".join(s.contents for s in args)
        )
    err = check_types("join", args, ListKind.QUOTED)
    if err:
        return err
    return List.qexpr(*(cell for xs in args for cell in xs.cells))


def cons(env: Environment, args: list[Value]) -> Value:
    """(cons x {xs...}) => {x xs...}"""
    err = check_count("cons", args, 2) or check_type("cons", args, 1, ListKind.QUOTED)
    if err:
        return err
    x, xs = args
    return List.qexpr(x, *xs.cells)


def length(env: Environment, args: list[Value]) -> Value:
    err = (
        check_count("len", args, 1)
        or check_type("len", args, 0, ListKind.QUOTED, String)
    )
    if err:
        return err
    xs = args[0]
    if isinstance(xs, String):
        return Integer(len(xs.contents))
    return Integer(len(xs))


def eval_builtin(env: Environment, args: list[Value]) -> Value:
    """Evaluate a Q-expression as an S-expression in the caller's environment."""
    err = check_count("eval", args, 1) or check_type("eval", args, 0, ListKind.QUOTED)
    if err:
        return err
    return evaluate(args[0].as_eval(), env)


# -------------------------------
# Arithmetic
# -------------------------------
def _int_div(a: int, b: int) -> int:
    # C semantics: truncate toward zero
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


INT_OPS: dict[str, Callable[[int, int], int]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _int_div,
}

FLOAT_OPS: dict[str, Callable[[float, float], float]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
}


def arithmetic(op: str, args: list[Value]) -> Value:
    """Left fold of `op` over the arguments.

    Integer op Integer stays an Integer (64-bit wrap); any Float operand turns
    the running result into a Float. A single argument to `-` is negated.
    """
    err = check_min_count(op, args, 1) or check_types(op, args, Integer, Float)
    if err:
        return err

    x = args[0]
    if op == "-" and len(args) == 1:
        if isinstance(x, Integer):
            return Integer(wrap_i64(-x.value))
        return Float(-x.value)

    for y in args[1:]:
        if op == "/" and y.value == 0:
            return Error("Division by Zero!")
        if isinstance(x, Integer) and isinstance(y, Integer):
            x = Integer(wrap_i64(INT_OPS[op](x.value, y.value)))
        else:
            x = Float(FLOAT_OPS[op](float(x.value), float(y.value)))
    return x


def add(env: Environment, args: list[Value]) -> Value:
    return arithmetic("+", args)


def sub(env: Environment, args: list[Value]) -> Value:
    return arithmetic("-", args)


def mul(env: Environment, args: list[Value]) -> Value:
    return arithmetic("*", args)


def div(env: Environment, args: list[Value]) -> Value:
    return arithmetic("/", args)


# -------------------------------
# Comparison
# -------------------------------
ORD_OPS: dict[str, Callable[[object, object], bool]] = {
    ">": operator.gt,
    "<": operator.lt,
    ">=": operator.ge,
    "<=": operator.le,
}


def ordering(op: str, args: list[Value]) -> Value:
    """Numeric ordering of exactly two numbers, coercing to Float when the types differ."""
    err = (
        check_count(op, args, 2)
        or check_type(op, args, 0, Integer, Float)
        or check_type(op, args, 1, Integer, Float)
    )
    if err:
        return err
    a, b = args
    if type(a) is not type(b):
        return _bool(ORD_OPS[op](float(a.value), float(b.value)))
    return _bool(ORD_OPS[op](a.value, b.value))


def gt(env: Environment, args: list[Value]) -> Value:
    return ordering(">", args)


def lt(env: Environment, args: list[Value]) -> Value:
    return ordering("<", args)


def gte(env: Environment, args: list[Value]) -> Value:
    return ordering(">=", args)


def lte(env: Environment, args: list[Value]) -> Value:
    return ordering("<=", args)


def equals(env: Environment, args: list[Value]) -> Value:
    """1 if the two arguments are structurally equal, else 0."""
    err = check_count("==", args, 2)
    if err:
        return err
    return _bool(values_equal(*args))


def not_equals(env: Environment, args: list[Value]) -> Value:
    err = check_count("!=", args, 2)
    if err:
        return err
    return _bool(not values_equal(*args))


# -------------------------------
# Boolean logic
# -------------------------------
def logical(op: str, args: list[Value]) -> Value:
    err = check_count(op, args, 2) or check_types(op, args, Integer)
    if err:
        return err
    a, b = (x.value != 0 for x in args)
    return _bool(a or b) if op == "||" else _bool(a and b)


def logical_or(env: Environment, args: list[Value]) -> Value:
    return logical("||", args)


def logical_and(env: Environment, args: list[Value]) -> Value:
    return logical("&&", args)


def logical_not(env: Environment, args: list[Value]) -> Value:
    err = check_count("!", args, 1) or check_type("!", args, 0, Integer)
    if err:
        return err
    return _bool(args[0].value == 0)


# -------------------------------
# Control
# -------------------------------
def if_builtin(env: Environment, args: list[Value]) -> Value:
    """(if cond {then} {else}): evaluates exactly one branch; cond is true when nonzero."""
    err = (
        check_count("if", args, 3)
        or check_type("if", args, 0, Integer, Float)
        or check_type("if", args, 1, ListKind.QUOTED)
        or check_type("if", args, 2, ListKind.QUOTED)
    )
    if err:
        return err
    cond, then_branch, else_branch = args
    branch = then_branch if cond.value != 0 else else_branch
    return evaluate(branch.as_eval(), env)


# -------------------------------
# Binding
# -------------------------------
def lambda_builtin(env: Environment, args: list[Value]) -> Value:
    """(fn {formals...} {body...}) => a closure with an empty environment."""
    err = (
        check_count("fn", args, 2)
        or check_type("fn", args, 0, ListKind.QUOTED)
        or check_type("fn", args, 1, ListKind.QUOTED)
        or check_symbols(None, args[0])
    )
    if err:
        return err
    formals, body = args
    return Closure(formals, body, Environment())


def _define(func: str, env: Environment, args: list[Value]) -> Value:
    err = (
        check_min_count(func, args, 1)
        or check_type(func, args, 0, ListKind.QUOTED)
        or check_symbols(func, args[0])
    )
    if err:
        return err
    syms, values = args[0], args[1:]
    if len(syms) != len(values):
        return Error(
            f"Function '{func}' passed too many arguments for symbols. "
            f"Got {len(syms)}, Expected {len(values)}."
        )
    for sym, value in zip(syms, values):
        if func == "def":
            env.define_global(sym.name, value)
        else:
            env.put(sym.name, value)
    return List.sexpr()


def define(env: Environment, args: list[Value]) -> Value:
    """(def {a b} 1 2): bind in the root environment."""
    return _define("def", env, args)


def put(env: Environment, args: list[Value]) -> Value:
    """(= {a b} 1 2): bind in the current environment."""
    return _define("=", env, args)


# -------------------------------
# I/O
# -------------------------------
def print_builtin(env: Environment, args: list[Value]) -> Value:
    print(" ".join(str(a) for a in args))
    return List.sexpr()


def show(env: Environment, args: list[Value]) -> Value:
    """Print a String's raw contents."""
    err = check_count("show", args, 1) or check_type("show", args, 0, String)
    if err:
        return err
    print(args[0].contents)
    return List.sexpr()


def error(env: Environment, args: list[Value]) -> Value:
    err = check_count("error", args, 1) or check_type("error", args, 0, String)
    if err:
        return err
    return Error(args[0].contents)


def make_load(parse_file: Callable[[Path], Node]) -> Callable[[Environment, list[Value]], Value]:
    """Build the `load` builtin around a file parser.

    The loaded unit's top-level forms are evaluated one by one in the caller's
    environment; an Error from a form is printed and loading carries on.
    """

    def load(env: Environment, args: list[Value]) -> Value:
        err = check_count("load", args, 1) or check_type("load", args, 0, String)
        if err:
            return err
        path = resolve_source(args[0].contents)
        logger.debug("Loading %s", path)
        try:
            program = read(parse_file(path))
        except (SlitherSyntaxError, OSError, UnicodeDecodeError) as exc:
            logger.debug("Could not load %s: %s", path, exc)
            return Error(f"Could not load library {exc}")

        for form in program:
            result = evaluate_form(form, env)
            if isinstance(result, Error):
                print(result)
        return List.sexpr()

    return load


# -------------------------------
# Registration
# -------------------------------
def register(env: Environment, parse_file: Callable[[Path], Node] = default_parse_file) -> None:
    """Bind every builtin into `env` (normally the root environment)."""
    builtins = {
        # list functions
        "list": list_builtin,
        "head": head,
        "tail": tail,
        "eval": eval_builtin,
        "join": join,
        "cons": cons,
        "len": length,
        # mathematical functions
        "+": add,
        "-": sub,
        "*": mul,
        "/": div,
        # variable functions
        "fn": lambda_builtin,
        "\\": lambda_builtin,
        "def": define,
        "=": put,
        # comparison functions
        ">": gt,
        "<": lt,
        ">=": gte,
        "<=": lte,
        "==": equals,
        "!=": not_equals,
        # control
        "if": if_builtin,
        # logical operators
        "||": logical_or,
        "&&": logical_and,
        "!": logical_not,
        # string and I/O functions
        "load": make_load(parse_file),
        "error": error,
        "print": print_builtin,
        "show": show,
    }
    env.update({name: Builtin(name, fn) for name, fn in builtins.items()})
