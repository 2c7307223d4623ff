"""
  risp lexer

Two cooperating sub-lexers share one cursor over a text chunk:

- normal mode: parens, #t/#f, numbers, reader-macro prefixes (' ` , ,@),
  the start-string delimiter and a catch-all symbol token
- string mode: runs of literal text, escape sequences and the end-string
  delimiter

Emitting a START_STRING token switches to string mode and emitting an
END_STRING token switches back, so callers just iterate. Characters no token
accepts come out as ERROR / STRING_ERROR tokens instead of raising.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Iterator, NamedTuple, Optional, Union


class Mode(Enum):
    NORMAL = "normal"
    STRING = "string"


class TokenKind(Enum):
    # normal mode
    LPAREN = "lparen"
    RPAREN = "rparen"
    BOOL = "bool"
    NUMBER = "number"
    SYMBOL = "symbol"
    QUOTE = "quote"
    QUASIQUOTE = "quasiquote"
    UNQUOTE = "unquote"
    UNQUOTE_SPLICE = "unquote_splice"
    START_STRING = "start_string"
    ERROR = "error"
    # string mode
    TEXT = "text"
    END_STRING = "end_string"
    STRING_ERROR = "string_error"

    @property
    def mode(self) -> Mode:
        return Mode.STRING if self in _STRING_KINDS else Mode.NORMAL


_STRING_KINDS = frozenset({TokenKind.TEXT, TokenKind.END_STRING, TokenKind.STRING_ERROR})


class Token(NamedTuple):
    kind: TokenKind
    value: Union[str, float, bool, None]
    span: tuple[int, int]


NORMAL_RE = re.compile(
    r"(?P<skip>[ \t\n\r\f]+|;[^\n]*)"  # whitespace, comment to end of line
    r"|(?P<lparen>\()"
    r"|(?P<rparen>\))"
    r"|(?P<unquote_splice>,@)"
    r"|(?P<unquote>,)"
    r"|(?P<quote>')"
    r"|(?P<quasiquote>`)"
    r'|(?P<start_string>")'
    r'|(?P<atom>[^\s()"\'`,;\x00-\x1f\x7f]+)'  # symbol, number or boolean
)

STRING_RE = re.compile(
    r'(?P<text>[^\\"]+)'
    r"|(?P<escape>\\[\s\S]?)"
    r'|(?P<end_string>")'
)

# Numbers win over symbols only when the whole run is numeric
NUMBER_RE = re.compile(r"-?(?:[0-9]*\.[0-9]+|[0-9]+)(?:[eE][-+]?[0-9]+)?")

ESCAPES: dict[str, str] = {
    '"': '"',
    "\\": "\\",
    "n": "\n",
    "t": "\t",
    "r": "\r",
}

_SIMPLE_KINDS: dict[str, TokenKind] = {
    "lparen": TokenKind.LPAREN,
    "rparen": TokenKind.RPAREN,
    "unquote_splice": TokenKind.UNQUOTE_SPLICE,
    "unquote": TokenKind.UNQUOTE,
    "quote": TokenKind.QUOTE,
    "quasiquote": TokenKind.QUASIQUOTE,
    "start_string": TokenKind.START_STRING,
}


def classify_atom(text: str) -> tuple[TokenKind, Union[str, float, bool]]:
    if text == "#t":
        return TokenKind.BOOL, True
    if text == "#f":
        return TokenKind.BOOL, False
    if NUMBER_RE.fullmatch(text):
        return TokenKind.NUMBER, float(text)
    return TokenKind.SYMBOL, text


class Lexer:
    """Token iterator over one chunk of text."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.mode = Mode.NORMAL
        self._span: tuple[int, int] = (0, 0)

    @property
    def span(self) -> tuple[int, int]:
        """Offsets (start, end) of the most recently produced token."""
        return self._span

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self._next_normal() if self.mode is Mode.NORMAL else self._next_string()
        if token is None:
            raise StopIteration
        self._span = token.span
        if token.kind is TokenKind.START_STRING:
            self.mode = Mode.STRING
        elif token.kind is TokenKind.END_STRING:
            self.mode = Mode.NORMAL
        return token

    def _error(self, kind: TokenKind, end: Optional[int] = None) -> Token:
        start = self.pos
        self.pos = end if end is not None else start + 1
        return Token(kind, self.source[start:self.pos], (start, self.pos))

    def _next_normal(self) -> Optional[Token]:
        n = len(self.source)
        while self.pos < n:
            m = NORMAL_RE.match(self.source, self.pos)
            if m is None:
                return self._error(TokenKind.ERROR)
            start, end = m.span()
            self.pos = end
            group = m.lastgroup
            if group == "skip":
                continue
            if group == "atom":
                kind, value = classify_atom(m.group("atom"))
                return Token(kind, value, (start, end))
            return Token(_SIMPLE_KINDS[group], m.group(group), (start, end))
        return None

    def _next_string(self) -> Optional[Token]:
        if self.pos >= len(self.source):
            return None
        m = STRING_RE.match(self.source, self.pos)
        start, end = m.span()
        group = m.lastgroup
        if group == "escape":
            if end - start == 1:
                # backslash at the end of the chunk, the string is still open
                return None
            decoded = ESCAPES.get(m.group("escape")[1:])
            if decoded is None:
                return self._error(TokenKind.STRING_ERROR, end)
            self.pos = end
            return Token(TokenKind.TEXT, decoded, (start, end))
        self.pos = end
        if group == "text":
            return Token(TokenKind.TEXT, m.group("text"), (start, end))
        return Token(TokenKind.END_STRING, '"', (start, end))


def lex(source: str) -> Iterator[Token]:
    """Token generator over a whole chunk (both modes)."""
    return iter(Lexer(source))
