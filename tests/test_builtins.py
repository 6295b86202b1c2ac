import pytest
from hypothesis import given, strategies as st

from slither.builtin.env_builtin import eval_builtin, list_builtin
from slither.types.environment import Environment
from slither.types.values import Builtin, Error, Float, Integer, List, String, Symbol

Q = List.qexpr


def ints(*xs):
    return Q(*(Integer(x) for x in xs))


# -------------------------------
# List operations
# -------------------------------
@pytest.mark.parametrize(
    "source,expected",
    [
        ("(list 1 2 3)", ints(1, 2, 3)),
        ("(head {1 2 3})", ints(1)),
        ('(head "hello")', String("h")),
        ('(head "")', String("")),
        ("(tail {1 2 3})", ints(2, 3)),
        ("(tail {1})", Q()),
        ('(tail "hello")', String("ello")),
        ("(join {1 2} {3} {})", ints(1, 2, 3)),
        ('(join "ab" "cd" "e")', String("abcde")),
        ("(cons 1 {2 3})", ints(1, 2, 3)),
        ("(cons {1} {})", Q(ints(1))),
        ("(len {1 2 3})", Integer(3)),
        ("(len {})", Integer(0)),
        ('(len "four")', Integer(4)),
        ("(eval {+ 1 2})", Integer(3)),
        ("(eval (list + 1 2))", Integer(3)),
        ("(eval (head {(+ 1 2) 5}))", Integer(3)),
        ("(eval {})", List.sexpr()),
    ],
)
def test_list_operations(run, source, expected):
    assert run(source) == expected


def test_list_argument_errors(run):
    assert run("(head {})") == Error("Function 'head' passed {} for argument 0.")
    assert run("(tail {})") == Error("Function 'tail' passed {} for argument 0.")
    assert run("(head 1)") == Error(
        "Function 'head' passed incorrect type for argument 0. Got Integer, Expected Q-Expression or String."
    )
    assert run("(head {1} {2})") == Error(
        "Function 'head' passed incorrect number of arguments. Got 2, Expected 1."
    )
    assert run('(join "a" {1})') == Error(
        "Function 'join' passed incorrect type for argument 1. Got Q-Expression, Expected String."
    )
    assert run('(join {1} "a")') == Error(
        "Function 'join' passed incorrect type for argument 1. Got String, Expected Q-Expression."
    )
    assert run("(cons 1 2)") == Error(
        "Function 'cons' passed incorrect type for argument 1. Got Integer, Expected Q-Expression."
    )
    assert run("(eval 1)") == Error(
        "Function 'eval' passed incorrect type for argument 0. Got Integer, Expected Q-Expression."
    )


def test_list_preserves_order_and_values(run):
    result = run("(list 3 1.5 \"s\" {x})")
    assert result == Q(Integer(3), Float(1.5), String("s"), Q(Symbol("x")))


@given(st.lists(st.integers(min_value=-1000, max_value=1000), max_size=6))
def test_list_then_eval_round_trip(xs):
    env = Environment()
    values = [Integer(x) for x in xs]
    quoted = list_builtin(env, values)
    assert quoted == Q(*values)
    # {list x y z} evaluates back to {x y z}
    code = list_builtin(env, [Builtin("list", list_builtin), *values])
    assert eval_builtin(env, [code]) == Q(*values)


# -------------------------------
# Comparison
# -------------------------------
@pytest.mark.parametrize(
    "source,expected",
    [
        ("(> 2 1)", 1),
        ("(< 2 1)", 0),
        ("(>= 2 2.0)", 1),
        ("(<= 1.5 1)", 0),
        ("(< 1 1.5)", 1),
        ("(> 2.5 2.25)", 1),
        ("(== 1 1.0)", 1),
        ("(== 1 2)", 0),
        ("(!= 1 2)", 1),
        ("(== {1 2} {1 2})", 1),
        ("(== {1 2} {1 3})", 0),
        ("(== {1 {2}} {1 {2}})", 1),
        ("(== {1} {1 1})", 0),
        ('(== "a" "a")', 1),
        ('(!= "a" "b")', 1),
        ('(== 1 "1")', 0),
        ("(== {a} {a})", 1),
        ("(== + +)", 1),
        ("(== + -)", 0),
        ("(== fn \\)", 1),
        ('(== (error "x") 1)', None),
    ],
)
def test_comparison(run, source, expected):
    result = run(source)
    if expected is None:
        assert result == Error("x")
    else:
        assert result == Integer(expected)


def test_comparison_errors(run):
    assert run('(> 1 "a")') == Error(
        "Function '>' passed incorrect type for argument 1. Got String, Expected Integer or Float."
    )
    assert run("(> 1)") == Error("Function '>' passed incorrect number of arguments. Got 1, Expected 2.")
    assert run("(== 1 2 3)") == Error(
        "Function '==' passed incorrect number of arguments. Got 3, Expected 2."
    )


def test_closure_equality_is_identity(run):
    run("(def {f} (fn {x} {x}))")
    assert run("(== f f)") == Integer(1)
    assert run("(== f (fn {x} {x}))") == Integer(0)


# -------------------------------
# Logic
# -------------------------------
@pytest.mark.parametrize(
    "source,expected",
    [
        ("(&& 1 0)", 0),
        ("(&& 2 3)", 1),
        ("(|| 1 0)", 1),
        ("(|| 0 0)", 0),
        ("(! 0)", 1),
        ("(! 5)", 0),
    ],
)
def test_logic(run, source, expected):
    assert run(source) == Integer(expected)


def test_logic_requires_integers(run):
    assert run("(&& 1.0 1)") == Error(
        "Function '&&' passed incorrect type for argument 0. Got Float, Expected Integer."
    )
    assert run("(! {})") == Error(
        "Function '!' passed incorrect type for argument 0. Got Q-Expression, Expected Integer."
    )


# -------------------------------
# Control
# -------------------------------
def test_if(run):
    assert run("(if 1 {10} {20})") == Integer(10)
    assert run("(if 0 {10} {20})") == Integer(20)
    assert run("(if 0.5 {+ 1 1} {20})") == Integer(2)
    assert run("(if (> 1 2) {1} {list 1 2})") == ints(1, 2)


def test_if_evaluates_one_branch_only(run, env):
    assert run("(if 1 {1} {/ 1 0})") == Integer(1)
    run("(if 1 {def {taken} 1} {def {skipped} 2})")
    assert env.get("taken") == Integer(1)
    assert env.get("skipped") == Error("Unbound Symbol 'skipped'")


def test_if_argument_errors(run):
    assert run("(if {1} {1} {2})") == Error(
        "Function 'if' passed incorrect type for argument 0. Got Q-Expression, Expected Integer or Float."
    )
    assert run("(if 1 1 {2})") == Error(
        "Function 'if' passed incorrect type for argument 1. Got Integer, Expected Q-Expression."
    )
    assert run("(if 1 {2})") == Error(
        "Function 'if' passed incorrect number of arguments. Got 2, Expected 3."
    )


# -------------------------------
# Binding
# -------------------------------
def test_def_and_put(run, env):
    assert run("(def {a b} 1 2)") == List.sexpr()
    assert run("(+ a b)") == Integer(3)
    assert run("(= {a} 10)") == List.sexpr()
    assert env.get("a") == Integer(10)
    run("(def {a} 11)")
    assert env.get("a") == Integer(11)


def test_def_errors(run):
    assert run("(def {a} 1 2)") == Error(
        "Function 'def' passed too many arguments for symbols. Got 1, Expected 2."
    )
    assert run("(def {1} 2)") == Error(
        "Function 'def' cannot define non-symbol. Got Integer, Expected Symbol."
    )
    assert run("(= 1)") == Error(
        "Function '=' passed incorrect type for argument 0. Got Integer, Expected Q-Expression."
    )


# -------------------------------
# Errors and I/O
# -------------------------------
def test_error_builtin(run):
    assert run('(error "bad thing")') == Error("bad thing")
    assert run("(error 1)") == Error(
        "Function 'error' passed incorrect type for argument 0. Got Integer, Expected String."
    )


def test_print_outputs_and_returns_empty_sexpr(run, capsys):
    result = run('(print 1 "a\\n" {x 2.5} print)')
    out = capsys.readouterr().out
    assert out == '1 "a\\n" {x 2.500000} <builtin>\n'
    assert result == List.sexpr()


def test_show_prints_raw_contents(run, capsys):
    assert run('(show "hi\\tthere")') == List.sexpr()
    assert capsys.readouterr().out == "hi\tthere\n"
    assert run("(show 1)") == Error(
        "Function 'show' passed incorrect type for argument 0. Got Integer, Expected String."
    )
