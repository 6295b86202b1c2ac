"""Core evaluator for the Slither interpreter.

Reduces a value to its normal form: symbols are looked up, S-expressions are
reduced left to right and applied, and everything else evaluates to itself.
Errors are values; the first one produced inside an S-expression becomes its
result and stops the reduction.
"""

from __future__ import annotations

import logging

from slither.evaluation.apply import apply
from slither.types.environment import Environment
from slither.types.values import Builtin, Closure, Error, List, ListKind, Symbol, Value

logger = logging.getLogger(__name__)

RECURSION_ERROR = "maximum recursion depth exceeded"


def evaluate(expr: Value, env: Environment) -> Value:
    match expr:
        case Symbol(name=name):
            return env.get(name)
        case List(kind=ListKind.EVAL):
            return eval_sexpr(expr, env)
    # Numbers, strings, errors, Q-expressions and functions are self-evaluating.
    return expr


def eval_sexpr(expr: List, env: Environment) -> Value:
    """Reduce an S-expression.

    Children are evaluated in order, so a `def` in one child is visible to the
    next. An empty list evaluates to itself and a single child to its value;
    otherwise the first child must be a function applied to the rest.
    """
    cells: list[Value] = []
    for cell in expr.cells:
        value = evaluate(cell, env)
        if isinstance(value, Error):
            return value
        cells.append(value)

    if not cells:
        return expr
    if len(cells) == 1:
        return cells[0]

    head, *args = cells
    if not isinstance(head, (Builtin, Closure)):
        return Error(
            "S-Expression starts with incorrect type. "
            f"Got {head.type_name}, Expected Function."
        )
    return apply(head, args, env, evaluate)


def evaluate_form(expr: Value, env: Environment) -> Value:
    """Evaluate a top-level form; running out of Python stack becomes an Error value."""
    try:
        return evaluate(expr, env)
    except RecursionError:
        logger.debug("Recursion limit reached evaluating %s", expr)
        return Error(RECURSION_ERROR)
