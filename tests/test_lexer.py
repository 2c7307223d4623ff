import pytest

from risp.reader.lexer import Lexer, Mode, TokenKind as K, lex


def kinds(source):
    return [(t.kind, t.value) for t in lex(source)]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("a", [(K.SYMBOL, "a")]),
        ("(a 1)", [(K.LPAREN, "("), (K.SYMBOL, "a"), (K.NUMBER, 1.0), (K.RPAREN, ")")]),
        ("'x", [(K.QUOTE, "'"), (K.SYMBOL, "x")]),
        ("`(a ,b)", [(K.QUASIQUOTE, "`"), (K.LPAREN, "("), (K.SYMBOL, "a"),
                     (K.UNQUOTE, ","), (K.SYMBOL, "b"), (K.RPAREN, ")")]),
        (",@xs", [(K.UNQUOTE_SPLICE, ",@"), (K.SYMBOL, "xs")]),
        ("#t #f", [(K.BOOL, True), (K.BOOL, False)]),
        ("#tx", [(K.SYMBOL, "#tx")]),
        ("-1.5 .5 2e3 1e-2", [(K.NUMBER, -1.5), (K.NUMBER, 0.5), (K.NUMBER, 2000.0), (K.NUMBER, 0.01)]),
        ("1-2 1e - -a", [(K.SYMBOL, "1-2"), (K.SYMBOL, "1e"), (K.SYMBOL, "-"), (K.SYMBOL, "-a")]),
        ("&rest is-list", [(K.SYMBOL, "&rest"), (K.SYMBOL, "is-list")]),
        ("a ; comment (b\nc", [(K.SYMBOL, "a"), (K.SYMBOL, "c")]),
        (" \t\r\n\f", []),
        ("", []),
    ],
)
def test_normal_mode_tokens(source, expected):
    assert kinds(source) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ('"hi"', [(K.START_STRING, '"'), (K.TEXT, "hi"), (K.END_STRING, '"')]),
        ('""', [(K.START_STRING, '"'), (K.END_STRING, '"')]),
        ('"a\\nb"', [(K.START_STRING, '"'), (K.TEXT, "a"), (K.TEXT, "\n"), (K.TEXT, "b"), (K.END_STRING, '"')]),
        ('"\\"\\\\"', [(K.START_STRING, '"'), (K.TEXT, '"'), (K.TEXT, "\\"), (K.END_STRING, '"')]),
        ('"(a ;b)" c', [(K.START_STRING, '"'), (K.TEXT, "(a ;b)"), (K.END_STRING, '"'), (K.SYMBOL, "c")]),
        ('"\\q"', [(K.START_STRING, '"'), (K.STRING_ERROR, "\\q"), (K.END_STRING, '"')]),
        ('"open', [(K.START_STRING, '"'), (K.TEXT, "open")]),
        ('"ab\\', [(K.START_STRING, '"'), (K.TEXT, "ab")]),
    ],
)
def test_string_mode_tokens(source, expected):
    assert kinds(source) == expected


@pytest.mark.parametrize("bad", ["\x01", "\x7f", "\u00a0", "\u2003", "\v"])
def test_error_tokens(bad):
    tokens = list(lex(f"a{bad}b"))
    assert [t.kind for t in tokens] == [K.SYMBOL, K.ERROR, K.SYMBOL]
    assert tokens[1].span == (1, 2)


def test_spans_are_character_offsets():
    tokens = list(lex('(+ "ab" λ)'))
    assert [t.span for t in tokens] == [(0, 1), (1, 2), (3, 4), (4, 6), (6, 7), (8, 9), (9, 10)]
    assert tokens[5].value == "λ"


def test_mode_follows_string_delimiters():
    lexer = Lexer('"x" y')
    assert lexer.mode is Mode.NORMAL
    assert next(lexer).kind is K.START_STRING
    assert lexer.mode is Mode.STRING
    token = next(lexer)
    assert token.kind.mode is Mode.STRING
    assert lexer.span == token.span == (1, 2)
    next(lexer)
    assert lexer.mode is Mode.NORMAL
    assert next(lexer).value == "y"
    with pytest.raises(StopIteration):
        next(lexer)
