from __future__ import annotations
from itertools import count
from typing import Optional


class Symbol:
    __slots__ = ("id",)

    def __init__(self, id: int):
        # Only a Symbols table hands out ids; equality never looks at names
        self.id = id

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Symbol) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self):
        return f"Symbol({self.id})"


class Symbols:
    """Interner: the one bijection between names and Symbol ids.

    A handful of names are interned eagerly because the reader, the parameter
    list parser and the printer compare against them by id.
    """

    def __init__(self):
        self._registry: dict[str, Symbol] = {}
        self._reverse: dict[int, str] = {}
        self._ids = count(1)

        self.quote = self.intern("quote")
        self.quasiquote = self.intern("quasiquote")
        self.unquote = self.intern("unquote")
        self.unquote_splice = self.intern("unquote-splice")
        self.rest = self.intern("&rest")
        self.fn = self.intern("fn")
        self.macro = self.intern("macro")

    def intern(self, name: str) -> Symbol:
        sym = self._registry.get(name)
        if sym is None:
            sym = Symbol(next(self._ids))
            self._registry[name] = sym
            self._reverse[sym.id] = name
        return sym

    def resolve_name(self, sym: Symbol) -> Optional[str]:
        return self._reverse.get(sym.id)

    def name_of(self, sym: Symbol) -> str:
        """Name for diagnostics; never fails."""
        name = self._reverse.get(sym.id)
        return name if name is not None else "~~uninterned~~"

    def __len__(self) -> int:
        return len(self._registry)
