from __future__ import annotations

from typing import TYPE_CHECKING

from risp import SExpression, Value
from risp.evaluation.params import Match, assert_args
from risp.types.errors import EvalError

if TYPE_CHECKING:
    from risp.evaluation.evaluator import Evaluator


def begin_form(tail: list[SExpression], evaluator: Evaluator) -> Value:
    """(begin form...) evaluates each form in order and returns the last result."""
    assert_args(Match.MIN, tail, 1, lambda: "special form begin")
    result: Value = []
    for index, expr in enumerate(tail):
        try:
            result = evaluator.evaluate(expr)
        except EvalError as err:
            err.push_trace(index + 1)
            raise
    return result
