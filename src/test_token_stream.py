import pytest

from formula_lang.lexer import tokenize, Token, BOF, IDENT, INT, OPERATOR, EOF
from formula_lang.token_stream import TokenStream


def test_starts_before_first_token():
    stream = TokenStream(tokenize("A=1"))

    assert stream.kind() == BOF
    assert stream.position() == 0
    assert stream.column() == 0


def test_advance_returns_kind_and_clamps_at_eof():
    stream = TokenStream(tokenize("A=1"))

    assert stream.advance() == IDENT
    assert stream.text() == 'A'
    assert stream.column() == 1
    assert stream.advance() == OPERATOR
    assert stream.advance() == INT
    assert stream.advance() == EOF
    assert stream.position() == 4

    assert stream.advance() == EOF
    assert stream.advance() == EOF
    assert stream.position() == 4
    assert stream.current() == Token(EOF, '', 4)


def test_retreat_undoes_one_advance():
    stream = TokenStream(tokenize("A=1"))
    stream.advance()
    stream.advance()

    stream.retreat()

    assert stream.position() == 1
    assert stream.text() == 'A'
    assert stream.advance() == OPERATOR


def test_retreat_at_start_is_an_error():
    stream = TokenStream(tokenize("A=1"))
    with pytest.raises(IndexError):
        stream.retreat()


def test_requires_trailing_eof():
    with pytest.raises(ValueError):
        TokenStream([])
    with pytest.raises(ValueError):
        TokenStream([Token(IDENT, 'A', 1)])
