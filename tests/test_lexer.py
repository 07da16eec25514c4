import io

import pytest
from hypothesis import given
from hypothesis import strategies as st

from sushi.sushi_errors import SushiSyntaxError
from sushi.sushi_lexer import CharacterStream, Lexer, Token, tokenize


def kinds_values(source: str) -> list[tuple[str, object]]:
    return [(t.type, t.value) for t in tokenize(source)]


def test_identifier_then_char() -> None:
    assert kinds_values("foo123 =") == [
        ("IDENT", "foo123"),
        ("CHAR", "="),
        ("EOF", "EOF"),
    ]


@pytest.mark.parametrize("word,kind", [("def", "DEF"), ("extern", "EXTERN")])  # type: ignore[misc]
def test_keywords(word: str, kind: str) -> None:
    tok = tokenize(word)[0]
    assert tok.type == kind
    assert tok.type != "IDENT"


def test_keyword_prefix_is_identifier() -> None:
    assert kinds_values("define externs") == [
        ("IDENT", "define"),
        ("IDENT", "externs"),
        ("EOF", "EOF"),
    ]


@pytest.mark.parametrize(  # type: ignore[misc]
    "source,value", [("3.14", 3.14), (".5", 0.5), ("42", 42.0), ("7.", 7.0)]
)
def test_numbers(source: str, value: float) -> None:
    tok = tokenize(source)[0]
    assert tok.type == "NUMBER"
    assert tok.value == value


def test_comment_swallows_rest_of_line() -> None:
    assert kinds_values("1 # comment\n2") == [
        ("NUMBER", 1.0),
        ("NUMBER", 2.0),
        ("EOF", "EOF"),
    ]


def test_comment_ends_at_carriage_return() -> None:
    assert kinds_values("x # c\ry") == [("IDENT", "x"), ("IDENT", "y"), ("EOF", "EOF")]


def test_comment_at_end_of_input() -> None:
    assert kinds_values("# only a comment") == [("EOF", "EOF")]


def test_punctuation_is_single_char_tokens() -> None:
    assert [v for _, v in kinds_values("(a,b);")][:-1] == ["(", "a", ",", "b", ")", ";"]


def test_non_ascii_letter_is_char_token() -> None:
    assert kinds_values("é") == [("CHAR", "é"), ("EOF", "EOF")]


def test_underscore_is_not_identifier_start() -> None:
    assert kinds_values("_x") == [("CHAR", "_"), ("IDENT", "x"), ("EOF", "EOF")]


def test_malformed_number_rejected() -> None:
    lexer = Lexer(CharacterStream("1.2.3 x"))
    with pytest.raises(SushiSyntaxError, match="invalid number literal '1.2.3'"):
        lexer.next_token()
    # the literal was consumed, lexing resumes after it
    assert lexer.next_token() == Token("IDENT", "x", 1, 7)


def test_lone_dot_rejected() -> None:
    with pytest.raises(SushiSyntaxError):
        tokenize(".")


@pytest.mark.parametrize(  # type: ignore[misc]
    "source,value", [("1.2.3", 1.2), (".", 0.0), ("..5", 0.0), ("12..", 12.0)]
)
def test_lenient_numbers(source: str, value: float) -> None:
    tok = tokenize(source, lenient_numbers=True)[0]
    assert tok.type == "NUMBER"
    assert tok.value == value


def test_eof_is_sticky() -> None:
    lexer = Lexer(CharacterStream("  "))
    assert lexer.next_token().type == "EOF"
    assert lexer.next_token().type == "EOF"


def test_line_and_column_tracking() -> None:
    tokens = tokenize("x\n  y")
    assert (tokens[1].line, tokens[1].col) == (2, 3)


def test_text_stream_source() -> None:
    stream = io.StringIO("def f(x) x")
    assert [t.type for t in tokenize(stream)] == [
        "DEF",
        "IDENT",
        "CHAR",
        "IDENT",
        "CHAR",
        "IDENT",
        "EOF",
    ]


def test_character_stream_methods() -> None:
    stream = CharacterStream("abc")
    assert stream.peek() == "a"
    assert stream.next() == "a"
    assert stream.peek(1) == "c"
    assert stream.peek(5) == ""
    assert not stream.end_of_file()
    stream.next()
    stream.next()
    assert stream.end_of_file()


def test_character_stream_next_past_eof_raises() -> None:
    with pytest.raises(EOFError, match="Attempted to read past end of source"):
        CharacterStream(io.StringIO("")).next()


def test_token_repr_and_eq() -> None:
    t1 = Token("NUMBER", 4.0, 1, 2)
    t2 = Token("NUMBER", 4.0, 1, 2)
    t3 = Token("IDENT", "x")

    assert repr(t1) == "Token(NUMBER, 4.0)"
    assert t1 == t2
    assert t1 != t3
    assert len({t1, t2, t3}) == 2
    assert Token("CHAR", "+").is_char("+")
    assert not Token("IDENT", "+").is_char("+")


@given(st.text(max_size=100))  # type: ignore[misc]
def test_lexer_does_not_crash_on_random_input(source: str) -> None:
    lexer = Lexer(CharacterStream(source))
    for _ in range(len(source) + 1):
        try:
            tok = lexer.next_token()
        except SushiSyntaxError as e:
            assert "invalid number literal" in str(e)
            continue
        if tok.type == "EOF":
            break
    else:
        pytest.fail("lexer did not reach EOF")


@given(st.text(alphabet="abcdef0123456789.+-*<(),;# \n", max_size=60))  # type: ignore[misc]
def test_relexing_is_deterministic(source: str) -> None:
    first = tokenize(source, lenient_numbers=True)
    second = tokenize(io.StringIO(source), lenient_numbers=True)
    assert first == second
    assert first[-1].type == "EOF"


def test_text_stream_buffer_stays_bounded() -> None:
    stream = CharacterStream(io.StringIO("ab" * 10000))
    for _ in range(20000):
        stream.next()
        assert len(stream._buffer) <= 1
    assert stream.end_of_file()
    assert stream.position == 20000


def test_text_stream_peek_ahead() -> None:
    stream = CharacterStream(io.StringIO("xyz"))
    assert stream.peek(2) == "z"
    assert stream.next() == "x"
    assert stream.peek() == "y"
    assert stream.peek(1) == "z"
    assert stream.peek(2) == ""
