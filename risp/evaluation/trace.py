"""Reconstruction of error locations from EvalError traces.

A trace is a list of child indices pushed while an error unwound through one
form, innermost first. `locate` walks it back down from the outermost end,
rendering the form with the same rules as risp.printer so that the returned
offsets index straight into the printed text.
"""

from __future__ import annotations

from typing import NamedTuple, Optional, Sequence

from risp import SExpression
from risp.printer import serialize
from risp.types.errors import EvalError, Frame
from risp.types.symbol import Symbols


class Located(NamedTuple):
    text: str
    start: int
    end: int
    label: Optional[str] = None

    @property
    def highlighted(self) -> str:
        return self.text[self.start:self.end]


def locate(form: SExpression, trace: Sequence[int], symbols: Symbols) -> Located:
    """Render `form` and find the span of the sub-form `trace` points at."""
    if not trace or not isinstance(form, list) or not 0 <= trace[-1] < len(form):
        text = serialize(form, symbols)
        return Located(text, 0, len(text))

    target, remaining = trace[-1], trace[:-1]
    text = "("
    start = end = 0
    for index, child in enumerate(form):
        if index:
            text += " "
        if index == target:
            inner = locate(child, remaining, symbols)
            start, end = inner.start + len(text), inner.end + len(text)
            text += inner.text
        else:
            text += serialize(child, symbols)
    text += ")"
    return Located(text, start, end)


def locate_frame(frame: Frame, symbols: Symbols) -> Located:
    text, start, end, _ = locate(frame.form, frame.trace, symbols)
    return Located(text, start, end, frame.label)


def locate_error(error: EvalError, symbols: Symbols) -> list[Located]:
    """One located excerpt per recorded frame, innermost first.

    A trace still pending on the error (no frame recorded yet) has no form to
    point into and is ignored.
    """
    return [locate_frame(frame, symbols) for frame in error.frames]
