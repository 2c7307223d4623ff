"""Native primitives and the root environment.

Each native receives its bound arguments as a list; a declared rest
parameter arrives as one trailing list. Natives report failing arguments by
their position in the call form, so `(+ 1 "x")` traces the string as child 2.
"""
from __future__ import annotations

from typing import NamedTuple, Optional

from risp import NativeFn, Value
from risp.types.environment import Environment
from risp.types.errors import EvalError, RispTypeError
from risp.types.symbol import Symbol, Symbols
from risp.types.values import (
    Native,
    ParamList,
    SpecialForm,
    as_list,
    as_number,
    as_symbol,
    is_number,
)


class NativeDef(NamedTuple):
    name: str
    positional: tuple[str, ...]
    rest: Optional[str]
    fn: NativeFn


def _numbers(values: list[Value], first_index: int) -> list[float]:
    """Check every value is a number; a failure is traced at first_index + position."""
    numbers = []
    for index, value in enumerate(values):
        try:
            numbers.append(as_number(value))
        except EvalError as err:
            err.push_trace(index + first_index)
            raise
    return numbers


def _list_arg(value: Value, index: int = 1) -> list[Value]:
    try:
        return as_list(value)
    except EvalError as err:
        err.push_trace(index)
        raise


# -------------------------------
# Arithmetic
# -------------------------------
def add(args: list[Value]) -> Value:
    """Sum of all terms; (+) is 0."""
    return sum(_numbers(args[0], 1), 0.0)


def multiply(args: list[Value]) -> Value:
    """Product of all factors; (*) is 1."""
    result = 1.0
    for n in _numbers(args[0], 1):
        result *= n
    return result


def subtract(args: list[Value]) -> Value:
    """Minuend minus the sum of the subtrahends; (- x) is x."""
    minuend = _numbers([args[0]], 1)[0]
    return minuend - sum(_numbers(args[1], 2), 0.0)


def equal(args: list[Value]) -> Value:
    """Numeric or symbol equality; comparing different types is an error."""
    a, b = args
    if is_number(a):
        return a == _numbers([b], 2)[0]
    if isinstance(a, Symbol):
        try:
            return a == as_symbol(b)
        except EvalError as err:
            err.push_trace(2)
            raise
    raise RispTypeError("= is only implemented for numbers and symbols").push_trace(1)


# -------------------------------
# Lists
# -------------------------------
def first(args: list[Value]) -> Value:
    lst = _list_arg(args[0])
    if not lst:
        raise RispTypeError("first of an empty list").push_trace(1)
    return lst[0]


def rest(args: list[Value]) -> Value:
    """Tail of a list; the rest of the empty list is the empty list."""
    return _list_arg(args[0])[1:]


def list_builtin(args: list[Value]) -> Value:
    return list(args[0])


def concat(args: list[Value]) -> Value:
    result: list[Value] = []
    for index, lst in enumerate(args[0]):
        result.extend(_list_arg(lst, index + 1))
    return result


def is_list(args: list[Value]) -> Value:
    return isinstance(args[0], list)


def length(args: list[Value]) -> Value:
    return float(len(_list_arg(args[0])))


NATIVES: tuple[NativeDef, ...] = (
    NativeDef("+", (), "terms", add),
    NativeDef("*", (), "factors", multiply),
    NativeDef("-", ("min",), "subs", subtract),
    NativeDef("=", ("o1", "o2"), None, equal),
    NativeDef("first", ("lst",), None, first),
    NativeDef("rest", ("lst",), None, rest),
    NativeDef("list", (), "elems", list_builtin),
    NativeDef("concat", (), "lsts", concat),
    NativeDef("is-list", ("obj",), None, is_list),
    NativeDef("length", ("lst",), None, length),
)


def make_native(symbols: Symbols, definition: NativeDef) -> Native:
    positional = tuple(symbols.intern(p) for p in definition.positional)
    rest_sym = symbols.intern(definition.rest) if definition.rest is not None else None
    return Native(definition.name, ParamList(positional, rest_sym), definition.fn)


def register(env: Environment, symbols: Symbols) -> None:
    """Register the special forms and all native primitives in the global scope."""
    env.update({symbols.intern(form.value): form for form in SpecialForm})
    env.update({symbols.intern(d.name): make_native(symbols, d) for d in NATIVES})


def create_root(symbols: Symbols) -> Environment:
    env = Environment()
    register(env, symbols)
    return env
