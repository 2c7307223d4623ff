from __future__ import annotations

from typing import TYPE_CHECKING

from risp import SExpression, Value
from risp.evaluation.params import Match, assert_args
from risp.types.errors import EvalError, RispTypeError
from risp.types.symbol import Symbol

if TYPE_CHECKING:
    from risp.evaluation.evaluator import Evaluator


def set_form(tail: list[SExpression], evaluator: Evaluator) -> Value:
    """
    (set name value)
    Binds name in the current scope only; enclosing scopes are left untouched.
    """
    assert_args(Match.EXACT, tail, 2, lambda: "special form set")
    var_sym, val_expr = tail
    if not isinstance(var_sym, Symbol):
        raise RispTypeError("special form set must have a symbol in 1st place").push_trace(1)
    try:
        value = evaluator.evaluate(val_expr)
    except EvalError as err:
        err.push_trace(2)
        raise
    evaluator.env.set(var_sym, value)

    return value
