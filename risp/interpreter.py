from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Iterator, Optional

from risp import SExpression, Value
from risp.builtin.natives import create_root
from risp.config import get_max_depth
from risp.evaluation.evaluator import Evaluator
from risp.printer import serialize
from risp.reader.reader import Reader
from risp.types.errors import EvalError, RecursionLimitExceeded
from risp.types.symbol import Symbols

logger = logging.getLogger(__name__)

# Label of the frame recorded for the top-level form
TOP_LEVEL_LABEL = "in"

# Python frames one nested risp call may use, with headroom
_HOST_FRAMES_PER_CALL = 40


class Interpreter:
    """
    A streaming interpreter for risp expressions.
    Owns one symbol table, one root environment and one reader, so code can be
    fed chunk by chunk while definitions persist.
    """

    def __init__(self, max_depth: Optional[int] = None):
        self.symbols = Symbols()
        self.env = create_root(self.symbols)
        self.max_depth = get_max_depth(max_depth)
        self.evaluator = Evaluator(self.symbols, self.env, self.max_depth)
        self.reader = Reader(self.symbols)

    def read(self, chunk: str) -> list[SExpression]:
        """Feed a chunk to the persistent reader; returns the forms it completed."""
        return self.reader.partial(chunk)

    def pending_depth(self) -> int:
        return self.reader.pending_depth()

    def eval_top_level(self, value: SExpression) -> Value:
        """Evaluate one top-level form, recording it as the outermost frame on failure."""
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("eval %s", self.serialize(value))
        try:
            with self._host_stack():
                return self.evaluator.evaluate(value)
        except EvalError as err:
            err.push_frame(value, TOP_LEVEL_LABEL)
            raise
        except RecursionError:
            err = RecursionLimitExceeded(None)
            err.push_frame(value, TOP_LEVEL_LABEL)
            raise err from None

    @contextmanager
    def _host_stack(self) -> Iterator[None]:
        """Raise the Python recursion limit so max_depth calls fit, restoring it on exit."""
        previous = sys.getrecursionlimit()
        needed = previous + self.max_depth * _HOST_FRAMES_PER_CALL
        if needed > previous:
            sys.setrecursionlimit(needed)
        try:
            yield
        finally:
            sys.setrecursionlimit(previous)

    def eval_source(self, text: str) -> list[Value]:
        """Read a complete source and evaluate every form in order."""
        forms = Reader(self.symbols).read_all(text)
        return [self.eval_top_level(form) for form in forms]

    def serialize(self, value: Value) -> str:
        return serialize(value, self.symbols)
