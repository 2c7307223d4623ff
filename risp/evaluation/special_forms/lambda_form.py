from __future__ import annotations

from typing import TYPE_CHECKING

from risp import SExpression, Value
from risp.evaluation.params import Match, assert_args, parse_param_list
from risp.types.errors import EvalError
from risp.types.values import Lambda, Macro, ParamList, as_list

if TYPE_CHECKING:
    from risp.evaluation.evaluator import Evaluator


def _parse(tail: list[SExpression], evaluator: Evaluator, description: str) -> tuple[ParamList, tuple]:
    # (fn (params...) body...) needs a parameter list and at least one body form
    assert_args(Match.MIN, tail, 2, lambda: description)
    try:
        params = parse_param_list(as_list(tail[0]), evaluator.symbols)
    except EvalError as err:
        err.push_trace(1)
        raise
    return params, tuple(tail[1:])


def lambda_form(tail: list[SExpression], evaluator: Evaluator) -> Value:
    """(fn (params...) body...) returns a Lambda; nothing is evaluated yet."""
    return Lambda(*_parse(tail, evaluator, "special form fn"))


def macro_form(tail: list[SExpression], evaluator: Evaluator) -> Value:
    """(macro (params...) body...) returns a Macro value."""
    return Macro(*_parse(tail, evaluator, "special form macro"))
