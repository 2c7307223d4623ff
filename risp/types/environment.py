"""Runtime environment for risp.

The Environment is a stack of scopes, innermost last. Each scope maps Symbols
to values. Function, macro and `let` bodies push a scope on entry and pop it
on every exit path; `define` always writes the bottommost (global) scope and
`set` writes the topmost scope only.
"""

from __future__ import annotations

from contextlib import contextmanager
from io import StringIO
from typing import Iterable, Iterator, Optional

from risp import Value
from risp.types.errors import InternalEvalError
from risp.types.symbol import Symbol


class Environment:
    """Scope stack mapping Symbols to values."""

    __slots__ = ("scopes",)

    def __init__(self):
        self.scopes: list[dict[Symbol, Value]] = [{}]

    @property
    def depth(self) -> int:
        """Number of scopes above the global one."""
        return len(self.scopes) - 1

    def push_scope(self) -> None:
        self.scopes.append({})

    def pop_scope(self) -> None:
        if len(self.scopes) == 1:
            raise InternalEvalError("Cannot pop the global scope")
        self.scopes.pop()

    @contextmanager
    def scope(self, bindings: Iterable[tuple[Symbol, Value]] = ()) -> Iterator[Environment]:
        """Push a scope seeded with `bindings` and pop it however the block exits."""
        self.push_scope()
        try:
            for sym, value in bindings:
                self.set(sym, value)
            yield self
        finally:
            self.pop_scope()

    def define(self, name: Symbol, value: Value) -> None:
        """Bind `name` in the global scope."""
        self.scopes[0][name] = value

    def set(self, name: Symbol, value: Value) -> None:
        """Bind `name` in the current (topmost) scope; outer scopes are not searched."""
        self.scopes[-1][name] = value

    def resolve(self, name: Symbol) -> Optional[Value]:
        """Innermost binding of `name`, or None when it is unbound."""
        for scope in reversed(self.scopes):
            if name in scope:
                return scope[name]
        return None

    def update(self, mapping: dict[Symbol, Value]) -> None:
        """Bulk-define a mapping of Symbol -> value in the global scope."""
        self.scopes[0].update(mapping)

    def _write_vars(self, buffer: StringIO, scope: dict[Symbol, Value]) -> None:
        """Write one scope's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k!r}: {v!r}" for k, v in scope.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Innermost scope with an indicator for the scopes below it."""
        with StringIO() as buffer:
            self._write_vars(buffer, self.scopes[-1])
            if len(self.scopes) > 1:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment scopes: ")
            chain = []
            for scope in reversed(self.scopes):
                scope_buf = StringIO()
                self._write_vars(scope_buf, scope)
                chain.append(scope_buf.getvalue())
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
