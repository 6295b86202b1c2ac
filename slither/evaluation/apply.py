"""Application engine for Slither.

This module centralizes function application semantics for the interpreter:
- Builtins are called directly with the caller's environment and arguments.
- Closures bind arguments to formals from the front. Fewer arguments than
  formals yields a new, partially applied closure (currying).
- A formal named `&` collects every remaining argument into a Q-expression
  bound to the single symbol that follows it.
"""

from __future__ import annotations

from typing import Callable

from slither.types.environment import Environment
from slither.types.values import Builtin, Closure, Error, List, Value

EvaluatorFn = Callable[[Value, Environment], Value]

VARIADIC = "&"
VARIADIC_FORMAT_ERROR = "Function format invalid. Symbol '&' not followed by single symbol."


def apply_closure(
    fn: Closure,
    args: list[Value],
    caller_env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Value:
    """Apply a closure to already-evaluated arguments.

    Binding happens on a copy of `fn`, so the closure the caller looked up is
    left untouched. When every formal is bound the copy's environment is
    chained onto `caller_env` for this call and the body is evaluated as an
    S-expression; otherwise the copy is returned awaiting the rest.
    """
    given = len(args)
    total = len(fn.formals)

    fn = fn.copy()
    formals = list(fn.formals.cells)
    pending = list(args)

    while pending:
        if not formals:
            return Error(
                "Function passed too many arguments. "
                f"Got {given}, Expected {total}."
            )
        sym = formals.pop(0)
        if sym.name == VARIADIC:
            if len(formals) != 1:
                return Error(VARIADIC_FORMAT_ERROR)
            fn.env.put(formals.pop(0).name, List.qexpr(*pending))
            pending = []
            break
        fn.env.put(sym.name, pending.pop(0))

    # Out of arguments with only `& rest` left: rest is the empty Q-expression.
    if formals and formals[0].name == VARIADIC:
        if len(formals) != 2:
            return Error(VARIADIC_FORMAT_ERROR)
        fn.env.put(formals[1].name, List.qexpr())
        formals = []

    if formals:
        return Closure(List.qexpr(*formals), fn.body, fn.env)

    fn.env.outer = caller_env
    return evaluate_fn(fn.body.as_eval(), fn.env)


def apply(
    head: Value,
    args: list[Value],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Value:
    """Apply either a Builtin or a Closure; anything else is an Error value."""
    if isinstance(head, Builtin):
        return head.fn(env, args)
    if isinstance(head, Closure):
        return apply_closure(head, args, env, evaluate_fn)
    return Error(f"Cannot apply non-function. Got {head.type_name}, Expected Function.")
