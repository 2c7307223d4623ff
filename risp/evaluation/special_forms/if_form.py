from __future__ import annotations

from typing import TYPE_CHECKING

from risp import SExpression, Value
from risp.evaluation.params import Match, assert_args
from risp.types.errors import EvalError
from risp.types.values import as_bool

if TYPE_CHECKING:
    from risp.evaluation.evaluator import Evaluator


def if_form(tail: list[SExpression], evaluator: Evaluator) -> Value:
    """(if pred then else...)

    The predicate must reduce to a Bool. When it is false every remaining
    operand is evaluated in order and the last result returned; with no
    else forms the result is #f.
    """
    assert_args(Match.MIN, tail, 2, lambda: "special form if")

    try:
        predicate = as_bool(evaluator.evaluate(tail[0]))
    except EvalError as err:
        err.push_trace(1)
        raise

    branch = tail[1:2] if predicate else tail[2:]
    offset = 2 if predicate else 3
    result: Value = False
    for index, expr in enumerate(branch):
        try:
            result = evaluator.evaluate(expr)
        except EvalError as err:
            err.push_trace(index + offset)
            raise
    return result
