"""Diagnostics: turn read and eval errors into localized excerpts.

The presentation layer (terminal colours, editor markers) consumes only the
Diagnostic structure. `format_diagnostic` is a plain-text rendering of it
with a caret underline under each highlighted range.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from risp.config import get_max_frames
from risp.evaluation.trace import Located, locate_error
from risp.types.errors import EvalError, ReadError, RispError
from risp.types.symbol import Symbols

# One highlighted range of rendered source
Excerpt = Located


class Diagnostic(NamedTuple):
    message: str
    excerpts: list[Excerpt]
    internal: bool = False


def _line_excerpt(source: str, start: int, end: int) -> Excerpt:
    """Cut the line holding `start` out of a multi-line source and re-base the span."""
    line_start = source.rfind("\n", 0, start) + 1
    line_end = source.find("\n", start)
    if line_end == -1:
        line_end = len(source)
    end = min(max(end, start), line_end)
    return Excerpt(source[line_start:line_end], start - line_start, end - line_start)


def diagnose_read_error(error: ReadError, source: str) -> Diagnostic:
    excerpts = [] if error.span is None else [_line_excerpt(source, *error.span)]
    return Diagnostic(str(error), excerpts, error.internal)


def diagnose_eval_error(error: EvalError, symbols: Symbols, max_frames: Optional[int] = None) -> Diagnostic:
    """Locate every recorded frame of `error`, innermost first.

    `max_frames` (default from RISP_MAX_FRAMES, 0 meaning all) keeps only the
    innermost frames, which matters for runaway recursion.
    """
    excerpts = locate_error(error, symbols)
    limit = get_max_frames() if max_frames is None else max_frames
    if limit:
        excerpts = excerpts[:limit]
    return Diagnostic(error.message, excerpts, error.internal)


def diagnose(error: RispError, symbols: Symbols, source: str = "") -> Diagnostic:
    if isinstance(error, ReadError):
        return diagnose_read_error(error, source)
    if isinstance(error, EvalError):
        return diagnose_eval_error(error, symbols)
    return Diagnostic(str(error), [], error.internal)


def format_diagnostic(diagnostic: Diagnostic) -> str:
    kind = "Internal error" if diagnostic.internal else "Error"
    lines = [f"{kind}: {diagnostic.message}"]
    for excerpt in diagnostic.excerpts:
        if excerpt.label:
            lines.append(f" {excerpt.label}")
        lines.append(f" | {excerpt.text}")
        lines.append(f" | {' ' * excerpt.start}{'^' * max(excerpt.end - excerpt.start, 1)}")
    return "\n".join(lines)
