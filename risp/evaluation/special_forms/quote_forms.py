from __future__ import annotations

from typing import TYPE_CHECKING

from risp import SExpression, Value
from risp.evaluation.params import Match, assert_args
from risp.types.errors import EvalError, RispTypeError

if TYPE_CHECKING:
    from risp.evaluation.evaluator import Evaluator


def _is_wrapped(expr: SExpression, head) -> bool:
    return isinstance(expr, list) and len(expr) == 2 and expr[0] == head


def _evaluate_at(evaluator: Evaluator, expr: SExpression, index: int) -> Value:
    try:
        return evaluator.evaluate(expr)
    except EvalError as err:
        err.push_trace(index)
        raise


def eval_quasiquote(evaluator: Evaluator, expr: SExpression, depth: int = 1) -> SExpression:
    """Copy a quasiquote template, evaluating unquotes that belong to this level."""
    symbols = evaluator.symbols

    if not isinstance(expr, list):
        return expr

    if _is_wrapped(expr, symbols.unquote):
        if depth == 1:
            return _evaluate_at(evaluator, expr[1], 1)
        return [expr[0], _descend(evaluator, expr[1], depth - 1, 1)]
    if _is_wrapped(expr, symbols.quasiquote):
        return [expr[0], _descend(evaluator, expr[1], depth + 1, 1)]
    if _is_wrapped(expr, symbols.unquote_splice) and depth == 1:
        raise RispTypeError("unquote-splice is only valid inside a list")

    result: list[SExpression] = []
    for index, item in enumerate(expr):
        if _is_wrapped(item, symbols.unquote_splice) and depth == 1:
            try:
                spliced = _evaluate_at(evaluator, item[1], 1)
                if not isinstance(spliced, list):
                    raise RispTypeError("unquote-splice must produce a list").push_trace(1)
            except EvalError as err:
                err.push_trace(index)
                raise
            result.extend(spliced)
            continue
        result.append(_descend(evaluator, item, depth, index))
    return result


def _descend(evaluator: Evaluator, expr: SExpression, depth: int, index: int) -> SExpression:
    try:
        return eval_quasiquote(evaluator, expr, depth)
    except EvalError as err:
        err.push_trace(index)
        raise


def quote_form(tail: list[SExpression], evaluator: Evaluator) -> Value:
    assert_args(Match.EXACT, tail, 1, lambda: "special form quote")
    return tail[0]


def quasiquote_form(tail: list[SExpression], evaluator: Evaluator) -> Value:
    assert_args(Match.EXACT, tail, 1, lambda: "special form quasiquote")
    return _descend(evaluator, tail[0], 1, 1)
