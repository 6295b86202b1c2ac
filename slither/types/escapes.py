"""Backslash escapes shared by the reader (decoding) and printing (encoding)."""

from __future__ import annotations

# C escape set: \a \b \f \n \r \t \v \\ \' \" \0
_ENCODE: dict[str, str] = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    "'": "\\'",
    '"': '\\"',
    "\0": "\\0",
}

_DECODE: dict[str, str] = {code[1]: char for char, code in _ENCODE.items()}


def escape(text: str) -> str:
    return "".join(_ENCODE.get(c, c) for c in text)


def unescape(text: str) -> str:
    """Decode backslash escapes; an unknown escape keeps the escaped character."""
    out: list[str] = []
    chars = iter(text)
    for c in chars:
        if c != "\\":
            out.append(c)
            continue
        nxt = next(chars, None)
        if nxt is None:
            out.append("\\")
            break
        out.append(_DECODE.get(nxt, nxt))
    return "".join(out)
