"""Runtime environment for Slither.

The Environment stores bindings of symbol names to values and supports nested
scopes via an `outer` link. The root environment (no `outer`) holds the
builtins and every global `def`; closure calls chain a short-lived frame onto
the caller's environment.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from slither.types.values import Error, Value


class Environment:
    """Hierarchical mapping from symbol names to values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, Value] = {}
        self.outer: Environment | None = outer

    def get(self, name: str) -> Value:
        """Look up `name` here, then along the parent chain.

        Returns an Error value (not an exception) when nothing binds `name`.
        Values are immutable, so the stored value is returned as is.
        """
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env.vars[name]
            env = env.outer
        return Error(f"Unbound Symbol '{name}'")

    def put(self, name: str, value: Value) -> None:
        """Bind or rebind `name` in this frame only."""
        self.vars[name] = value

    def root(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def define_global(self, name: str, value: Value) -> None:
        """Bind `name` in the root of the chain."""
        self.root().put(name, value)

    def copy(self) -> Environment:
        """Copy this frame's bindings; the parent link is shared, not copied."""
        env = Environment(self.outer)
        env.vars = dict(self.vars)
        return env

    def update(self, mapping: dict[str, Value]) -> None:
        """Bulk-bind a mapping of name -> value in the current frame."""
        for k, v in mapping.items():
            self.put(k, v)

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Chain representation for debugging purposes."""
        chain = []
        env: Optional[Environment] = self
        while env is not None:
            with StringIO() as buffer:
                env._write_vars(buffer)
                chain.append(buffer.getvalue())
            env = env.outer
        return "<Environment chain: " + " -> ".join(chain) + ">"
