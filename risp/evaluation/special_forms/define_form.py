from __future__ import annotations

from typing import TYPE_CHECKING

from risp import SExpression, Value
from risp.evaluation.params import Match, assert_args
from risp.types.errors import EvalError, RispTypeError
from risp.types.symbol import Symbol

if TYPE_CHECKING:
    from risp.evaluation.evaluator import Evaluator


def define_form(tail: list[SExpression], evaluator: Evaluator) -> Value:
    """
    (def name value)
    Binds name in the global scope, whatever scope the form runs in.
    """
    assert_args(Match.EXACT, tail, 2, lambda: "special form def")

    name, val_expr = tail
    if not isinstance(name, Symbol):
        raise RispTypeError("special form def must have a symbol in 1st place").push_trace(1)
    try:
        value = evaluator.evaluate(val_expr)
    except EvalError as err:
        err.push_trace(2)
        raise
    evaluator.env.define(name, value)
    return value
