"""
  risp reader

Turns a token stream into completed forms, one `partial(chunk)` call per
input chunk. State lives on a stack of reader frames and survives between
calls, so a form may span several chunks (REPL continuation lines):

- _ListFrame: a list under construction
- _PrefixFrame: a reader-macro prefix (' ` , ,@) waiting for one object

Forms come out as plain values:

    - lists   -> Python list
    - symbols -> Symbol (interned)
    - strings -> str
    - numbers -> float
    - #t / #f -> bool
    - 'x      -> [quote, x]; `x, ,x and ,@x likewise
"""

from __future__ import annotations

import logging
from typing import Union

from risp import SExpression
from risp.reader.lexer import Lexer, Mode, Token, TokenKind
from risp.types.errors import (
    ReadError,
    ReaderInvariantError,
    UnexpectedCloseParen,
    UnexpectedEndOfInput,
    UnknownCharacter,
    UnterminatedString,
)
from risp.types.symbol import Symbol, Symbols

logger = logging.getLogger(__name__)


class _ListFrame:
    __slots__ = ("items",)

    def __init__(self):
        self.items: list[SExpression] = []


class _PrefixFrame:
    __slots__ = ("symbol",)

    def __init__(self, symbol: Symbol):
        self.symbol = symbol


class Reader:
    """Incremental s-expression reader."""

    def __init__(self, symbols: Symbols):
        self.symbols = symbols
        self.stack: list[Union[_ListFrame, _PrefixFrame]] = []
        self._prefixes: dict[TokenKind, Symbol] = {
            TokenKind.QUOTE: symbols.quote,
            TokenKind.QUASIQUOTE: symbols.quasiquote,
            TokenKind.UNQUOTE: symbols.unquote,
            TokenKind.UNQUOTE_SPLICE: symbols.unquote_splice,
        }

    def __len__(self) -> int:
        return len(self.stack)

    def pending_depth(self) -> int:
        """How many frames are still open; 0 means no form is in progress."""
        return len(self.stack)

    def reset(self) -> None:
        if self.stack:
            logger.debug("discarding %d open reader frame(s)", len(self.stack))
        self.stack.clear()

    def partial(self, chunk: str) -> list[SExpression]:
        """Read one chunk and return the forms it completed.

        On error the frame stack is discarded so the next chunk starts clean.
        """
        lexer = Lexer(chunk)
        completed: list[SExpression] = []
        try:
            for token in lexer:
                self._feed(token, lexer, completed)
        except ReadError:
            self.reset()
            raise
        return completed

    def finish(self) -> None:
        """Assert that the input read so far forms complete forms."""
        if self.stack:
            depth = len(self.stack)
            self.reset()
            raise UnexpectedEndOfInput(depth)

    def read_all(self, source: str) -> list[SExpression]:
        """Read a complete source; unclosed forms are an error."""
        forms = self.partial(source)
        self.finish()
        return forms

    # --------------------------------------------------
    def _feed(self, token: Token, lexer: Lexer, completed: list[SExpression]) -> None:
        kind = token.kind
        if kind.mode is not Mode.NORMAL:
            raise ReaderInvariantError(token.span)
        if kind is TokenKind.ERROR:
            raise UnknownCharacter(token.span)

        if kind is TokenKind.LPAREN:
            self.stack.append(_ListFrame())
            return
        if kind in self._prefixes:
            self.stack.append(_PrefixFrame(self._prefixes[kind]))
            return

        if kind is TokenKind.RPAREN:
            if not self.stack or not isinstance(self.stack[-1], _ListFrame):
                raise UnexpectedCloseParen(token.span)
            obj: SExpression = self.stack.pop().items
        elif kind is TokenKind.START_STRING:
            obj = self._read_string(lexer)
        elif kind is TokenKind.SYMBOL:
            obj = self.symbols.intern(token.value)
        else:
            # BOOL / NUMBER carry their value already
            obj = token.value
        self._resolve(obj, completed)

    def _read_string(self, lexer: Lexer) -> str:
        parts: list[str] = []
        for token in lexer:
            kind = token.kind
            if kind.mode is not Mode.STRING:
                raise ReaderInvariantError(token.span)
            if kind is TokenKind.STRING_ERROR:
                raise UnknownCharacter(token.span)
            if kind is TokenKind.END_STRING:
                return "".join(parts)
            parts.append(token.value)
        raise UnterminatedString()

    def _resolve(self, obj: SExpression, completed: list[SExpression]) -> None:
        """Wrap `obj` in pending prefixes, then hand it to the open list or the caller."""
        while self.stack and isinstance(self.stack[-1], _PrefixFrame):
            obj = [self.stack.pop().symbol, obj]
        if self.stack:
            self.stack[-1].items.append(obj)
        else:
            completed.append(obj)
