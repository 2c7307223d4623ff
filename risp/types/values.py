"""Value variants that have no natural Python type.

Bool, Number, String and List are plain `bool`, `float`, `str` and `list`.
Symbols live in risp.types.symbol. Everything callable is defined here,
together with the small accessors natives and special forms use to check
the type of an operand.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Optional

from risp import SExpression, Value, NativeFn
from risp.types.errors import RispTypeError
from risp.types.symbol import Symbol, Symbols


class SpecialForm(Enum):
    DEF = "def"
    SET = "set"
    FN = "fn"
    MACRO = "macro"
    IF = "if"
    LET = "let"
    BEGIN = "begin"
    QUOTE = "quote"
    QUASIQUOTE = "quasiquote"

    def __str__(self) -> str:
        return self.value


class ParamList(NamedTuple):
    positional: tuple[Symbol, ...]
    rest: Optional[Symbol] = None

    def as_form(self, symbols: Symbols) -> list[SExpression]:
        """The raw parameter list this was parsed from."""
        form: list[SExpression] = list(self.positional)
        if self.rest is not None:
            form += [symbols.rest, self.rest]
        return form

    def describe(self, symbols: Symbols) -> str:
        names = [symbols.name_of(s) for s in self.positional]
        if self.rest is not None:
            names += ["&rest", symbols.name_of(self.rest)]
        return f"({' '.join(names)})"


class Native:
    """A primitive implemented in Python."""

    __slots__ = ("name", "params", "fn")

    def __init__(self, name: str, params: ParamList, fn: NativeFn):
        self.name = name
        self.params = params
        self.fn = fn

    def __repr__(self) -> str:
        return f"<Native {self.name}>"


class Lambda:
    """A function value: parameter list plus body forms.

    There is no captured environment. The body runs in a scope pushed on top
    of the caller's scope stack.
    """

    __slots__ = ("params", "body")

    head_name = "fn"

    def __init__(self, params: ParamList, body: tuple[SExpression, ...]):
        self.params = params
        self.body = tuple(body)

    def as_form(self, symbols: Symbols) -> list[SExpression]:
        """The definition form, e.g. (fn (x &rest r) body...)."""
        head = symbols.intern(self.head_name)
        return [head, self.params.as_form(symbols), *self.body]

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {len(self.params.positional)} params>"


class Macro(Lambda):
    """A macro value; binds its operands unevaluated."""

    __slots__ = ()

    head_name = "macro"


# -------------------------------
# Operand accessors
# -------------------------------
def as_bool(value: Value) -> bool:
    if not isinstance(value, bool):
        raise RispTypeError("Expected a bool")
    return value


def is_number(value: Value) -> bool:
    return isinstance(value, float)


def as_number(value: Value) -> float:
    if not is_number(value):
        raise RispTypeError("Expected a number")
    return value


def as_symbol(value: Value) -> Symbol:
    if not isinstance(value, Symbol):
        raise RispTypeError("Expected a symbol")
    return value


def as_list(value: Value) -> list[Value]:
    if not isinstance(value, list):
        raise RispTypeError("Expected a list")
    return value


def values_equal(a: Value, b: Value) -> bool:
    """Structural equality that also compares variants (#t is not 1)."""
    if type(a) is not type(b):
        return False
    if isinstance(a, list):
        return len(a) == len(b) and all(values_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, Lambda):
        return a.params == b.params and values_equal(list(a.body), list(b.body))
    if isinstance(a, Native):
        return a is b
    return a == b
