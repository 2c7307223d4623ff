from __future__ import annotations

from typing import TYPE_CHECKING

from risp import SExpression, Value
from risp.evaluation.params import Match, assert_args
from risp.types.errors import EvalError
from risp.types.symbol import Symbol
from risp.types.values import as_list, as_symbol

if TYPE_CHECKING:
    from risp.evaluation.evaluator import Evaluator


def _binding(pair_form: SExpression, evaluator: Evaluator) -> tuple[Symbol, Value]:
    # Traces here are relative to the (symbol expr) pair
    pair = as_list(pair_form)
    assert_args(Match.EXACT, pair, 2, lambda: "let binding")
    try:
        sym = as_symbol(pair[0])
    except EvalError as err:
        err.push_trace(0)
        raise
    try:
        value = evaluator.evaluate(pair[1])
    except EvalError as err:
        err.push_trace(1)
        raise
    return sym, value


def let_form(tail: list[SExpression], evaluator: Evaluator) -> Value:
    """(let ((name expr)...) body...)

    Every expr is evaluated left to right in the enclosing scope, then all
    names are bound at once in a single new scope for the body.
    """
    assert_args(Match.MIN, tail, 2, lambda: "special form let")
    try:
        pairs = as_list(tail[0])
    except EvalError as err:
        err.push_trace(1)
        raise

    binding: list[tuple[Symbol, Value]] = []
    for index, pair in enumerate(pairs):
        try:
            binding.append(_binding(pair, evaluator))
        except EvalError as err:
            err.push_trace(index).push_trace(1)
            raise

    return evaluator.eval_body(tail[1:], binding, offset=2)
