"""Exception hierarchy for risp.

Two families never mix: ReadError covers problems in raw text, EvalError
covers problems found while evaluating a form. Both derive from RispError.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from risp import SExpression


Span = tuple[int, int]


class RispError(Exception):
    """ Base class for all risp errors"""

    # Defects in the interpreter itself rather than in user input
    internal = False


# -------------------------------
# Read errors
# -------------------------------
class ReadError(RispError):
    """ Raised when text cannot be turned into forms"""

    message = "Read error."

    def __init__(self, span: Optional[Span] = None):
        super().__init__(self.message)
        self.span = span


class UnknownCharacter(ReadError):
    """ Raised when the lexer meets a character no token accepts"""
    message = "Unexpected character."


class UnexpectedCloseParen(ReadError):
    """ Raised for a ')' with no open list to close"""
    message = "Right paren without matching left paren."


class UnterminatedString(ReadError):
    """ Raised when input ends inside a string literal"""
    message = "Unexpected end of input while parsing string."


class UnexpectedEndOfInput(ReadError):
    """ Raised when a complete source ends with forms still open"""
    message = "Unexpected end of input, form is not closed."

    def __init__(self, depth: int):
        super().__init__(None)
        self.depth = depth


class ReaderInvariantError(ReadError):
    """ Raised when the lexer and reader disagree about the current mode"""
    message = "Internal error: lexer mode mismatch."
    internal = True


# -------------------------------
# Eval errors
# -------------------------------
class Frame(NamedTuple):
    """A form with the trace accumulated inside it when evaluation left it."""
    form: SExpression
    trace: tuple[int, ...]
    label: Optional[str] = None


class EvalError(RispError):
    """ Raised when evaluation of a form fails.

    `trace` collects child indices while the error unwinds through one form;
    `frames` keeps one snapshot per function/macro body the error crossed.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.trace: list[int] = []
        self.frames: list[Frame] = []

    def push_trace(self, index: int) -> EvalError:
        self.trace.append(index)
        return self

    def push_frame(self, form: SExpression, label: Optional[str] = None) -> EvalError:
        self.frames.append(Frame(form, tuple(self.trace), label))
        self.trace = []
        return self

    def __str__(self) -> str:
        return self.message


class UnboundSymbol(EvalError):
    """ Raised when a symbol is used before it is bound"""

    def __init__(self, name: Optional[str]):
        self.name = name
        super().__init__(f"Unbound symbol '{name if name is not None else '~~uninterned~~'}'")


class ArityError(EvalError):
    """ Raised when the number of arguments passed to a form is incorrect"""


class RispTypeError(EvalError):
    """ Raised when a value has the wrong type for the operation"""


class EmptyApplication(EvalError):
    """ Raised when the empty list is evaluated"""

    def __init__(self):
        super().__init__("apply received empty form")


class NotApplicable(EvalError):
    """ Raised when the head of a form evaluates to something that cannot be called"""

    def __init__(self, value: SExpression, name: Optional[str] = None):
        self.value = value
        self.name = name
        what = f"'{name}' is not callable" if name is not None else "head of form is not callable"
        super().__init__(f"{what}; apply only implemented for Native, Lambda, Macro and Special Form")


class InvalidParamList(EvalError):
    """ Raised when a parameter list is malformed"""


class RecursionLimitExceeded(EvalError):
    """ Raised when function calls nest deeper than the configured limit.

    `limit` is None when the Python stack ran out first.
    """

    def __init__(self, limit: Optional[int]):
        self.limit = limit
        if limit is None:
            super().__init__("Host stack exhausted; evaluation nests too deeply")
        else:
            super().__init__(f"Maximum call depth of {limit} exceeded")


class InternalEvalError(EvalError):
    """ Raised when the evaluator reaches a state it should never be in"""
    internal = True
