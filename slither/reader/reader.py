"""Convert a parsed syntax tree into Slither values.

The reader is a pure transformation: it never mutates the tree, and bad
numeric literals become Error values inside the result instead of failing the
whole read.
"""

from __future__ import annotations

import math

from slither.reader.parser import Node
from slither.types.escapes import unescape
from slither.types.values import (
    I64_MAX,
    I64_MIN,
    Error,
    Float,
    Integer,
    List,
    ListKind,
    String,
    Symbol,
    Value,
)

PUNCTUATION = {"(", ")", "{", "}"}


def read_integer(node: Node) -> Value:
    try:
        n = int(node.contents, 10)
    except ValueError:
        return Error("invalid number")
    if not I64_MIN <= n <= I64_MAX:
        return Error("invalid number")
    return Integer(n)


def read_float(node: Node) -> Value:
    try:
        x = float(node.contents)
    except ValueError:
        return Error("invalid number")
    if math.isinf(x):
        return Error("invalid number")
    return Float(x)


def read_string(node: Node) -> String:
    # strip the surrounding quote characters
    return String(unescape(node.contents[1:-1]))


def _skipped(child: Node) -> bool:
    return (
        child.contents in PUNCTUATION
        or child.tag == "regex"
        or "comment" in child.tag
    )


def read(node: Node) -> Value:
    """Read one node: atoms by tag, lists and the program node by their children."""
    tag = node.tag
    if "integer" in tag or "long" in tag:
        return read_integer(node)
    if "float" in tag:
        return read_float(node)
    if "symbol" in tag:
        return Symbol(node.contents)
    if "string" in tag:
        return read_string(node)

    if "qexpr" in tag:
        kind = ListKind.QUOTED
    elif tag == ">" or "sexpr" in tag:
        kind = ListKind.EVAL
    else:
        return Error(f"Cannot read syntax node tagged '{tag}'")

    return List(kind, tuple(read(child) for child in node.children if not _skipped(child)))
