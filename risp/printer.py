"""Serialization of values back to source text.

The same rules feed REPL output and the error trace renderer, which computes
highlight offsets by serializing the siblings of a failing sub-form; the two
must never diverge.
"""

from __future__ import annotations

import math

from risp import Value
from risp.types.symbol import Symbol, Symbols
from risp.types.values import Lambda, Native, SpecialForm

_STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
}

# Beyond this magnitude integral floats are printed in exponent form
_INTEGRAL_LIMIT = 1e16


def serialize_number(n: float) -> str:
    if math.isinf(n):
        # an overflowing literal reads back as infinity
        return "1e999" if n > 0 else "-1e999"
    if n.is_integer() and abs(n) < _INTEGRAL_LIMIT:
        return str(int(n))
    return repr(n)


def serialize_string(s: str) -> str:
    return '"' + "".join(_STRING_ESCAPES.get(c, c) for c in s) + '"'


def serialize_list(items: list[Value], symbols: Symbols) -> str:
    return "(" + " ".join(serialize(item, symbols) for item in items) + ")"


def serialize(value: Value, symbols: Symbols) -> str:
    """Render `value` as re-readable source (natives and special forms are opaque)."""
    if isinstance(value, bool):
        return "#t" if value else "#f"
    if isinstance(value, float):
        return serialize_number(value)
    if isinstance(value, str):
        return serialize_string(value)
    if isinstance(value, Symbol):
        return symbols.name_of(value)
    if isinstance(value, list):
        return serialize_list(value, symbols)
    if isinstance(value, Lambda):
        return serialize_list(value.as_form(symbols), symbols)
    if isinstance(value, Native):
        return f"#<native {value.name} {value.params.describe(symbols)}>"
    if isinstance(value, SpecialForm):
        return f"#<special-form {value}>"
    raise TypeError(f"Cannot serialize {type(value).__name__}: {value!r}")
