"""
Lexical analyzer for the sushi language.

This module converts a raw character source into sushi tokens:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Represents a single token with kind, value, and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens, one call at a time.

Features:
    - Skips whitespace and single-line comments (`#`)
    - Recognizes:
        * Identifiers (`[a-zA-Z][a-zA-Z0-9]*`) and the `def` / `extern` keywords
        * Numbers (`[0-9.]+`, parsed as a float)
        * Any other character as a single-character CHAR token

Raises:
    SushiSyntaxError: If a malformed numeric literal is encountered and the lexer
        is not in lenient mode.

Example:
    >>> lexer = Lexer(CharacterStream("def foo(x) x * 2"))
    >>> lexer.next_token()
    Token(DEF, def)
    >>> lexer.next_token()
    Token(IDENT, foo)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
"""

import re
from typing import Any, TextIO

from sushi.sushi_constants import (
    CHAR,
    EOF,
    IDENT,
    NUMBER,
    comment_char,
    comment_terminators,
    keyword_hashmap,
    whitespace_chars,
)
from sushi.sushi_errors import SushiSyntaxError

_float_prefix = re.compile(r"\d+\.?\d*|\.\d+")


class CharacterStream:
    """
    A utility for reading characters from a string or a text stream with
    line and column tracking.

    String sources are read in place. Text streams (``sys.stdin``, an open
    file) are pulled lazily one character at a time, so reading blocks until
    a character or end-of-input is available.

    Attributes:
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(
        self,
        source: str | TextIO,
        position: int = 0,
        line: int = 1,
        column: int = 1,
    ):
        """
        Initializes the character stream.

        Args:
            source (str | TextIO): The input source code, or a readable text stream.
            position (int, optional): Starting position index. Defaults to 0.
            line (int, optional): Starting line number. Defaults to 1.
            column (int, optional): Starting column number. Defaults to 1.
        """
        # _buffer[0] is the character at position _start. Text streams keep
        # only unconsumed lookahead in the buffer.
        if isinstance(source, str):
            self._buffer = source
            self._start = 0
            self._reader: TextIO | None = None
        else:
            self._buffer = ""
            self._start = position
            self._reader = source
        self._streaming = self._reader is not None
        self.position = position
        self.line = line
        self.column = column

    def _fill(self, offset: int) -> bool:
        """Reads from the text stream until ``offset`` characters of lookahead are buffered."""
        index = self.position - self._start + offset
        while index >= len(self._buffer):
            if self._reader is None:
                return False
            chunk = self._reader.read(1)
            if not chunk:
                self._reader = None
                return False
            self._buffer += chunk
        return True

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Returns:
            str: The next character.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if not self._fill(0):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self._buffer[self.position - self._start]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        if self._streaming:
            self._buffer = self._buffer[1:]
            self._start += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """
        Returns the character at the given offset from the current position without advancing.

        Args:
            offset (int, optional): Number of characters to look ahead. Defaults to 0.

        Returns:
            str: The character at the offset, or an empty string if out of bounds.
        """
        if offset < 0 or not self._fill(offset):
            return ""
        return self._buffer[self.position - self._start + offset]

    def end_of_file(self) -> bool:
        """Checks if the stream has reached the end of the source input."""
        return not self._fill(0)


class Token:
    """Represents a single lexical token in the sushi language.

    Attributes:
        type (str): The token kind ('EOF', 'DEF', 'EXTERN', 'IDENT', 'NUMBER' or 'CHAR').
        value (str | float): Identifier text, numeric value, or the raw character.
        line (int): The 1-based line number where the token appears.
        col (int): The 1-based column number where the token starts.
    """

    def __init__(self, type_: str, value: str | float, line: int = 0, col: int = 0):
        self.type = type_
        self.value = value
        self.line = line
        self.col = col

    def is_char(self, ch: str) -> bool:
        """True if this is the single-character token ``ch``."""
        return self.type == CHAR and self.value == ch

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value, self.line, self.col))


class Lexer:
    """Lexical analyzer for the sushi language.

    Each call to ``next_token`` skips whitespace and comments and returns
    exactly one token. The stream's read position doubles as the one
    character of pushback: the character that ended the previous token is
    still unread.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
        lenient_numbers (bool): Accept malformed numeric literals such as
            ``1.2.3`` by converting their longest valid prefix.
    """

    def __init__(self, stream: CharacterStream, lenient_numbers: bool = False) -> None:
        self.stream = stream
        self.lenient_numbers = lenient_numbers

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        """Skips whitespace and comments."""
        while not self.stream.end_of_file():
            if self.peek() in whitespace_chars:
                self.advance()
            elif self.peek() == comment_char:
                self.skip_comment()
            else:
                break

    def skip_comment(self) -> None:
        """Advances through the stream until the end of a comment line."""
        while not self.stream.end_of_file() and self.peek() not in comment_terminators:
            self.advance()

    def read_number(self, text: str) -> float:
        """Converts the scanned ``[0-9.]+`` text into a float.

        Raises:
            SushiSyntaxError: If the text is not a valid float literal and the
                lexer is strict.
        """
        if self.lenient_numbers:
            match = _float_prefix.match(text)
            return float(match.group(0)) if match else 0.0
        if text.count(".") > 1 or text == ".":
            raise SushiSyntaxError(f"invalid number literal '{text}'")
        return float(text)

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token; an EOF token once the source is exhausted.

        Raises:
            SushiSyntaxError: On a malformed numeric literal (strict mode). The
                literal is consumed before the error is raised.
        """
        self.skip_whitespace()

        line, col = self.stream.line, self.stream.column
        if self.stream.end_of_file():
            return Token(EOF, "EOF", line, col)

        ch = self.peek()

        # 1. Identifier or keyword
        if ch.isascii() and ch.isalpha():
            ident = ""
            while self.peek().isascii() and self.peek().isalnum():
                ident += self.advance()
            if ident in keyword_hashmap:
                return Token(keyword_hashmap[ident], ident, line, col)
            return Token(IDENT, ident, line, col)

        # 2. Number
        if ch.isdigit() and ch.isascii() or ch == ".":
            num = ""
            while (self.peek().isascii() and self.peek().isdigit()) or self.peek() == ".":
                num += self.advance()
            return Token(NUMBER, self.read_number(num), line, col)

        # 3. Anything else is a single-character token
        return Token(CHAR, self.advance(), line, col)


def tokenize(source: str | TextIO, lenient_numbers: bool = False) -> list[Token]:
    """Lexes ``source`` completely; the returned list always ends with EOF."""
    lexer = Lexer(CharacterStream(source), lenient_numbers=lenient_numbers)
    tokens = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.type == EOF:
            break
    return tokens


__all__ = ["CharacterStream", "Lexer", "Token", "tokenize"]
