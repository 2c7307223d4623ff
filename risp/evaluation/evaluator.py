"""Core evaluator for the risp interpreter.

Implements eval/apply over the scope-stack Environment: special-form
dispatch, native and function application, and single-step macro expansion.

Every call site that can fail annotates the EvalError on its way out: the
child index of the failing operand goes on `error.trace`, and crossing out of
a function or macro body records a Frame. Reconstruction of those annotations
lives in risp.evaluation.trace.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterable, Iterator, Optional

from risp import SExpression, Value
from risp.evaluation.params import bind_param_list, parse_function_def
from risp.evaluation.special_forms import SPECIAL_FORMS
from risp.types.environment import Environment
from risp.types.errors import (
    EmptyApplication,
    EvalError,
    InternalEvalError,
    NotApplicable,
    RecursionLimitExceeded,
    UnboundSymbol,
)
from risp.types.symbol import Symbol, Symbols
from risp.types.values import Lambda, Macro, Native, SpecialForm

logger = logging.getLogger(__name__)

# Label of the frame recorded when a macro expansion fails on re-evaluation
EXPANSION_LABEL = "~>"

_SELF_EVALUATING = (bool, float, str, Native, Lambda, SpecialForm)


class Evaluator:
    """Recursive eval/apply over one Environment and one Symbols table."""

    def __init__(self, symbols: Symbols, env: Environment, max_depth: int = 0):
        self.symbols = symbols
        self.env = env
        # 0 disables the call depth limit
        self.max_depth = max_depth
        self.call_depth = 0

    def evaluate(self, expr: SExpression) -> Value:
        if isinstance(expr, list):
            return self.evaluate_form(expr)
        if isinstance(expr, Symbol):
            value = self.env.resolve(expr)
            if value is None:
                raise UnboundSymbol(self.symbols.name_of(expr))
            return value
        if isinstance(expr, _SELF_EVALUATING):
            return expr
        raise InternalEvalError(f"Unexpected value of type {type(expr).__name__}")

    def evaluate_form(self, form: list[SExpression]) -> Value:
        if not form:
            raise EmptyApplication()

        head_form, operands = form[0], form[1:]
        try:
            head = self.evaluate(head_form)
        except EvalError as err:
            err.push_trace(0)
            raise
        name = self.symbols.resolve_name(head_form) if isinstance(head_form, Symbol) else None

        if isinstance(head, SpecialForm):
            return self.apply_special_form(head, operands)
        if isinstance(head, Native):
            return self.apply_native(head, operands)
        if isinstance(head, Lambda):
            return self.apply_function(head, operands, name)
        if self.is_function_def(head):
            try:
                fn = self.make_function(head)
            except EvalError as err:
                err.push_frame(head, name).push_trace(0)
                raise
            return self.apply_function(fn, operands, name)

        err = NotApplicable(head, name)
        err.push_frame(head, name).push_trace(0)
        raise err

    # --------------------------------------------------
    # Application
    # --------------------------------------------------
    def apply_special_form(self, form: SpecialForm, operands: list[SExpression]) -> Value:
        handler = SPECIAL_FORMS.get(form)
        if handler is None:
            raise InternalEvalError(f"No handler for special form {form}")
        return handler(operands, self)

    def apply_native(self, native: Native, operands: list[SExpression]) -> Value:
        binding = bind_param_list(
            native.params,
            operands,
            self.evaluate,
            lambda: f"{native.name} {native.params.describe(self.symbols)}",
        )
        return native.fn([value for _, value in binding])

    def apply_function(self, fn: Lambda, operands: list[SExpression], name: Optional[str] = None) -> Value:
        """Call a Lambda, or expand and evaluate a Macro (exactly one expansion step)."""
        is_macro = isinstance(fn, Macro)
        binding = bind_param_list(
            fn.params,
            operands,
            None if is_macro else self.evaluate,
            lambda: f"{name or fn.head_name} {fn.params.describe(self.symbols)}",
        )
        with self._enter_body():
            try:
                result = self.eval_body(fn.body, binding)
            except EvalError as err:
                err.push_frame(fn.as_form(self.symbols), name).push_trace(0)
                raise
        if not is_macro:
            return result

        logger.debug("macro %s expanded", name or "<anonymous>")
        try:
            return self.evaluate(result)
        except EvalError as err:
            err.push_frame(result, EXPANSION_LABEL).push_trace(0)
            raise

    def eval_body(
        self,
        forms: Iterable[SExpression],
        binding: Iterable[tuple[Symbol, Value]] = (),
        offset: int = 2,
    ) -> Value:
        """Evaluate `forms` in a fresh scope seeded with `binding`; result of the last form.

        Body form j is traced as child j + `offset` of the enclosing form. An
        empty body evaluates to the empty list.
        """
        result: Value = []
        with self.env.scope(binding):
            for index, form in enumerate(forms):
                try:
                    result = self.evaluate(form)
                except EvalError as err:
                    err.push_trace(index + offset)
                    raise
        return result

    # --------------------------------------------------
    # Function definitions
    # --------------------------------------------------
    def is_function_def(self, value: Value) -> bool:
        """True for a literal (fn ...) / (macro ...) list."""
        return (
            isinstance(value, list)
            and bool(value)
            and (value[0] == self.symbols.fn or value[0] == self.symbols.macro)
        )

    def make_function(self, form: list[SExpression]) -> Lambda:
        params, body, is_macro = parse_function_def(form, self.symbols)
        return Macro(params, body) if is_macro else Lambda(params, body)

    @contextmanager
    def _enter_body(self) -> Iterator[None]:
        if self.max_depth and self.call_depth >= self.max_depth:
            raise RecursionLimitExceeded(self.max_depth)
        self.call_depth += 1
        try:
            yield
        finally:
            self.call_depth -= 1
