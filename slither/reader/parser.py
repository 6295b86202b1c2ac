"""
  Slither Lexer and Parser

Turns source text into a syntax tree of tagged nodes. The tree is the only
thing the reader sees: each node carries a tag, and either the literal text of
a token or an ordered tuple of children.

    float   : /-?[0-9]+\\.[0-9]+/
    integer : /-?[0-9]+/
    symbol  : /[a-zA-Z0-9_+\\-*\\/\\\\=<>!&|]+/
    string  : /"(\\\\.|[^"])*"/
    comment : /;[^\\r\\n]*/
    sexpr   : '(' <expr>* ')'
    qexpr   : '{' <expr>* '}'
    program : /^/ <expr>* /$/

Tags follow the grammar rule names: atoms are tagged `<rule>|regex`, lists
`sexpr|>` / `qexpr|>`, bracket children `char`, the two program anchors
`regex`, and the program itself `>`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, NamedTuple, Optional

from slither.errors import SlitherSyntaxError


TOKEN_RE = re.compile(
    r"(?P<whitespace>\s+)"
    r"|(?P<comment>;[^\r\n]*)"  # single-line comment
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbrace>\{)"  # {
    r"|(?P<rbrace>\})"  # }
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r"|(?P<float>-?[0-9]+\.[0-9]+)"
    r"|(?P<integer>-?[0-9]+)"
    r"|(?P<symbol>[a-zA-Z0-9_+\-*/\\=<>!&|]+)",
    re.DOTALL,
)

OPENERS = {"lparen": ("sexpr", "rparen"), "lbrace": ("qexpr", "rbrace")}
CLOSERS = {"rparen": ")", "rbrace": "}"}
ATOMS = ("comment", "string", "float", "integer", "symbol")


class Token(NamedTuple):
    kind: str
    text: str
    line: int
    column: int


@dataclass(frozen=True)
class Node:
    tag: str
    contents: str = ""
    children: tuple[Node, ...] = ()
    line: int = 1
    column: int = 1


def _position(source: str, pos: int) -> tuple[int, int]:
    line = source.count("\n", 0, pos) + 1
    column = pos - source.rfind("\n", 0, pos)
    return line, column


def lex(source: str, name: str = "<stdin>") -> Iterator[Token]:
    """Token generator: yields Token(kind, text, line, column); skips whitespace."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            line, column = _position(source, pos)
            if source[pos] == '"':
                raise SlitherSyntaxError("unterminated string", name, line, column)
            raise SlitherSyntaxError(f"unexpected character {source[pos]!r}", name, line, column)
        kind = m.lastgroup
        if kind != "whitespace":
            line, column = _position(source, pos)
            yield Token(kind, m.group(kind), line, column)
        pos = m.end()


class TokenStream:
    def __init__(self, token_iter: Iterator[Token], name: str = "<stdin>"):
        self.tokens = iter(token_iter)
        self.name = name
        self.buffer: list[Token] = []
        self.last: Optional[Token] = None

    def peek(self) -> Optional[Token]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def advance(self) -> Optional[Token]:
        tok = self.buffer.pop(0) if self.buffer else next(self.tokens, None)
        if tok is not None:
            self.last = tok
        return tok

    def _error(self, message: str, tok: Optional[Token]) -> SlitherSyntaxError:
        if tok is None:
            tok = self.last
        line, column = (tok.line, tok.column) if tok else (1, 1)
        return SlitherSyntaxError(message, self.name, line, column)

    def parse_expr(self) -> Node:
        tok = self.advance()
        if tok is None:
            raise self._error("unexpected end of input", None)

        if tok.kind in ATOMS:
            return Node(f"{tok.kind}|regex", tok.text, (), tok.line, tok.column)

        if tok.kind in OPENERS:
            tag, closer = OPENERS[tok.kind]
            children = [Node("char", tok.text, (), tok.line, tok.column)]
            while True:
                nxt = self.peek()
                if nxt is None:
                    raise self._error(f"expected '{CLOSERS[closer]}' at end of input", None)
                if nxt.kind == closer:
                    self.advance()
                    children.append(Node("char", nxt.text, (), nxt.line, nxt.column))
                    break
                if nxt.kind in CLOSERS:
                    raise self._error(
                        f"expected '{CLOSERS[closer]}' but got '{nxt.text}'", nxt
                    )
                children.append(self.parse_expr())
            return Node(f"{tag}|>", "", tuple(children), tok.line, tok.column)

        raise self._error(f"unexpected '{tok.text}'", tok)

    def parse_all(self) -> Iterator[Node]:
        while self.peek() is not None:
            yield self.parse_expr()


def parse(source: str, name: str = "<stdin>") -> Node:
    """Parse a whole source unit into a program node tagged `>`."""
    stream = TokenStream(lex(source, name), name)
    children = [Node("regex", "", (), 1, 1)]
    children.extend(stream.parse_all())
    end_line, end_column = _position(source, len(source))
    children.append(Node("regex", "", (), end_line, end_column))
    return Node(">", "", tuple(children), 1, 1)


def parse_file(path: str | Path) -> Node:
    """Read a file (UTF-8) and parse it; OSError propagates to the caller."""
    p = Path(path)
    return parse(p.read_text(encoding="utf-8"), str(p))
