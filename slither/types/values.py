"""Tagged runtime values for Slither.

Every datum the evaluator handles is one of the variants below. Values are
frozen: operations build new values instead of mutating old ones, so a value
read out of an environment can be handed around without copying. The one
mutable piece is a closure's environment, which the application engine only
touches on a fresh copy of the closure.

Naming guidance:
- An Eval list is an S-expression, reduced by the evaluator.
- A Quoted list is a Q-expression, inert until `eval` retags it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, ClassVar

from slither.types.escapes import escape

if TYPE_CHECKING:
    from slither.types.environment import Environment

    BuiltinFn = Callable[[Environment, list["Value"]], "Value"]


I64_MIN = -(2 ** 63)
I64_MAX = 2 ** 63 - 1


def wrap_i64(n: int) -> int:
    """Reduce a Python int to the signed 64-bit range (two's complement wrap)."""
    return (n - I64_MIN) % 2 ** 64 + I64_MIN


class Value:
    """Base of every runtime datum."""

    __slots__ = ()
    type_name: ClassVar[str] = "Unknown"


@dataclass(frozen=True, slots=True)
class Integer(Value):
    value: int
    type_name: ClassVar[str] = "Integer"

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class Float(Value):
    value: float
    type_name: ClassVar[str] = "Float"

    def __str__(self) -> str:
        return f"{self.value:f}"


@dataclass(frozen=True, slots=True)
class Symbol(Value):
    name: str
    type_name: ClassVar[str] = "Symbol"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class String(Value):
    contents: str
    type_name: ClassVar[str] = "String"

    def __str__(self) -> str:
        return f'"{escape(self.contents)}"'


@dataclass(frozen=True, slots=True)
class Error(Value):
    """A failure carried as a value; it propagates, it is never raised."""

    message: str
    type_name: ClassVar[str] = "Error"

    def __str__(self) -> str:
        return f"Error: {self.message}"


class ListKind(Enum):
    EVAL = "S-Expression"
    QUOTED = "Q-Expression"


@dataclass(frozen=True, slots=True)
class List(Value):
    kind: ListKind
    cells: tuple[Value, ...] = ()

    @classmethod
    def sexpr(cls, *cells: Value) -> List:
        return cls(ListKind.EVAL, tuple(cells))

    @classmethod
    def qexpr(cls, *cells: Value) -> List:
        return cls(ListKind.QUOTED, tuple(cells))

    @property
    def type_name(self) -> str:  # type: ignore[override]
        return self.kind.value

    @property
    def is_quoted(self) -> bool:
        return self.kind is ListKind.QUOTED

    def as_eval(self) -> List:
        return List(ListKind.EVAL, self.cells)

    def as_quoted(self) -> List:
        return List(ListKind.QUOTED, self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self):
        return iter(self.cells)

    def __str__(self) -> str:
        open_, close = ("{", "}") if self.is_quoted else ("(", ")")
        return open_ + " ".join(str(c) for c in self.cells) + close


@dataclass(frozen=True, slots=True)
class Builtin(Value):
    """A host primitive registered under `name`; `fn` is called as fn(env, args)."""

    name: str
    fn: BuiltinFn
    type_name: ClassVar[str] = "Function"

    def __str__(self) -> str:
        return "<builtin>"


@dataclass(frozen=True, slots=True, eq=False)
class Closure(Value):
    """A user function: formal symbols, a Q-expression body and its own bindings.

    `env` starts without a parent and holds only arguments bound so far by
    partial application. The application engine works on a `copy()`, so the
    closure stored in an environment is never changed by a call.
    """

    formals: List
    body: List
    env: Environment
    type_name: ClassVar[str] = "Function"

    def copy(self) -> Closure:
        return Closure(self.formals, self.body, self.env.copy())

    def __str__(self) -> str:
        return f"(\\ {self.formals} {self.body})"


def is_number(v: Value) -> bool:
    return isinstance(v, (Integer, Float))


def values_equal(a: Value, b: Value) -> bool:
    """Structural equality; numbers compare by value across Integer and Float."""
    if is_number(a) and is_number(b):
        if type(a) is not type(b):
            return float(a.value) == float(b.value)
        return a.value == b.value
    if type(a) is not type(b):
        return False
    match a:
        case Symbol(name=name):
            return name == b.name
        case String(contents=contents):
            return contents == b.contents
        case Error(message=message):
            return message == b.message
        case List(kind=kind, cells=cells):
            if kind is not b.kind or len(cells) != len(b.cells):
                return False
            return all(values_equal(x, y) for x, y in zip(cells, b.cells))
        case Builtin(fn=fn):
            return fn is b.fn
        case Closure():
            return a is b
    raise TypeError(f"Unknown value type {type(a).__name__}")
