"""Parameter lists: parsing raw lists into ParamList and binding call operands.

Single source of truth for lambda-list semantics in risp:
- positional required parameters
- `&rest name` as the final pair, collecting the remaining operands as a list

Errors carry trace indices in the coordinates of the form they were found in.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, NamedTuple, Optional

from risp import SExpression, Value
from risp.types.errors import ArityError, EvalError, InvalidParamList
from risp.types.symbol import Symbol, Symbols
from risp.types.values import ParamList, as_list, as_symbol


class Match(Enum):
    EXACT = "exactly"
    MIN = "at least"


def assert_args(match: Match, operands: list[SExpression], count: int, description: Callable[[], str]) -> None:
    """Raise ArityError unless `operands` has `count` (or, for MIN, at least `count`) entries."""
    actual = len(operands)
    failed = actual != count if match is Match.EXACT else actual < count
    if failed:
        raise ArityError(f"{description()} requires {match.value} {count} arguments, got {actual}")


def parse_param_list(raw: list[SExpression], symbols: Symbols) -> ParamList:
    """Turn a raw list of symbols into a ParamList; `&rest` must be second to last."""
    params: list[Symbol] = []
    for index, obj in enumerate(raw):
        try:
            params.append(as_symbol(obj))
        except EvalError as err:
            err.push_trace(index)
            raise
    if symbols.rest not in params:
        return ParamList(tuple(params))

    rest_index = params.index(symbols.rest)
    if rest_index != len(params) - 2:
        raise InvalidParamList("&rest must be second to last in parameter list").push_trace(rest_index)
    return ParamList(tuple(params[:rest_index]), params[rest_index + 1])


class FunctionDef(NamedTuple):
    params: ParamList
    body: tuple[SExpression, ...]
    is_macro: bool


def parse_function_def(form: list[SExpression], symbols: Symbols) -> FunctionDef:
    """Parse `(fn params body...)` or `(macro params body...)`."""
    assert_args(Match.MIN, form, 2, lambda: "fn definition")
    head = form[0]
    if head == symbols.fn:
        is_macro = False
    elif head == symbols.macro:
        is_macro = True
    else:
        raise InvalidParamList("Expected `fn` or `macro` at the head of a function definition").push_trace(0)

    try:
        params = parse_param_list(as_list(form[1]), symbols)
    except EvalError as err:
        err.push_trace(1)
        raise
    return FunctionDef(params, tuple(form[2:]), is_macro)


def bind_param_list(
    params: ParamList,
    operands: list[SExpression],
    evaluate: Optional[Callable[[SExpression], Value]],
    description: Callable[[], str],
) -> list[tuple[Symbol, Value]]:
    """Check arity, evaluate operands (unless `evaluate` is None) and pair them with parameters.

    Operand k sits at child k + 1 of the call form. The rest parameter, if
    declared, is bound to a list of every operand beyond the positional ones.
    """
    positional = params.positional
    match = Match.EXACT if params.rest is None else Match.MIN
    assert_args(match, operands, len(positional), description)

    if evaluate is None:
        args = list(operands)
    else:
        args = []
        for index, operand in enumerate(operands):
            try:
                args.append(evaluate(operand))
            except EvalError as err:
                err.push_trace(index + 1)
                raise

    binding = list(zip(positional, args))
    if params.rest is not None:
        binding.append((params.rest, args[len(positional):]))
    return binding
