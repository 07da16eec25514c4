"""
sushi Language Parser

Parses sushi tokens into the AST node set of ``sushi.sushi_ast``.

The parser pulls tokens from its own ``Lexer`` one at a time and keeps a
single token of lookahead in ``Parser.current``. Primary expressions are
parsed by recursive descent; chains of binary operators are resolved by
precedence climbing against a ``PrecedenceTable``.

Grammar
-------
    top          ::= definition | external | expression | ';'
    definition   ::= 'def' prototype expression
    external     ::= 'extern' prototype
    prototype    ::= identifier '(' identifier* ')'
    expression   ::= primary binoprhs
    binoprhs     ::= (binop primary)*
    primary      ::= identifierexpr | numberexpr | parenexpr
    identifierexpr
                 ::= identifier
                 ::= identifier '(' (expression (',' expression)*)? ')'
    numberexpr   ::= number
    parenexpr    ::= '(' expression ')'

Entry Points
------------
- `next_token()`: Advance the current token. Must be called once before the
  first parse so that `current` holds the first token.
- `parse_definition()`, `parse_extern()`, `parse_top_level_expr()`: Parse one
  top-level form starting at the current token.
- `parse_top_level()`: Dispatch to one of the three above on the current token.
- `parse_all()`: Parse an entire source, skipping `;` separators.

Raises
------
SushiSyntaxError
    Raised as soon as a sub-parse fails. No partially built node is ever
    returned; the current token is left wherever the failure was detected.
"""

from __future__ import annotations

import logging
from typing import TextIO

from sushi.sushi_ast import (
    BinaryExpr,
    CallExpr,
    Expr,
    Function,
    NumberExpr,
    Prototype,
    TopLevel,
    VariableExpr,
)
from sushi.sushi_constants import (
    DEF,
    EOF,
    EXTERN,
    IDENT,
    NUMBER,
    anon_function_name,
)
from sushi.sushi_errors import SushiSyntaxError
from sushi.sushi_lexer import CharacterStream, Lexer, Token
from sushi.sushi_precedence import PrecedenceTable

logger = logging.getLogger(__name__)


class Parser:
    """
    sushi Parser Class

    Each instance owns its lexer, its current token and its precedence table,
    so any number of parsers can run side by side.

    Attributes
    ----------
    lexer : Lexer
        Source of tokens.
    precedence : PrecedenceTable
        Binary operators and their binding strength.
    current : Token
        The single token of lookahead. Starts as an EOF placeholder until
        `next_token()` is first called.
    max_depth : int
        Limit on nested expressions (parentheses, call arguments). Deeper
        input is a syntax error rather than a RecursionError.
    """

    max_depth = 100

    def __init__(self, lexer: Lexer, precedence: PrecedenceTable | None = None) -> None:
        self.lexer = lexer
        self.precedence = precedence if precedence is not None else PrecedenceTable()
        self.current: Token = Token(EOF, "EOF")
        self.depth = 0

    @classmethod
    def from_source(
        cls,
        source: str | TextIO,
        precedence: PrecedenceTable | None = None,
        lenient_numbers: bool = False,
    ) -> Parser:
        """Builds a parser over a string or text stream (not yet primed)."""
        lexer = Lexer(CharacterStream(source), lenient_numbers=lenient_numbers)
        return cls(lexer, precedence)

    def next_token(self) -> Token:
        self.current = self.lexer.next_token()
        logger.debug("token %r", self.current)
        return self.current

    def token_precedence(self) -> int:
        return self.precedence.precedence_of(self.current)

    # Primary expressions

    def parse_number_expr(self) -> NumberExpr:
        """numberexpr ::= number"""
        node = NumberExpr(float(self.current.value))
        self.next_token()
        return node

    def parse_paren_expr(self) -> Expr:
        """parenexpr ::= '(' expression ')'"""
        self.next_token()  # eat (
        expr = self.parse_expression()
        if not self.current.is_char(")"):
            raise SushiSyntaxError("expected ')'")
        self.next_token()  # eat )
        return expr

    def parse_identifier_expr(self) -> Expr:
        name = str(self.current.value)
        self.next_token()

        if not self.current.is_char("("):
            return VariableExpr(name)

        self.next_token()  # eat (
        args: list[Expr] = []
        if not self.current.is_char(")"):
            while True:
                args.append(self.parse_expression())
                if self.current.is_char(")"):
                    break
                if not self.current.is_char(","):
                    raise SushiSyntaxError("Expected ')' or ',' in argument list")
                self.next_token()
        self.next_token()  # eat )
        return CallExpr(name, tuple(args))

    def parse_primary(self) -> Expr:
        tok = self.current
        if tok.type == IDENT:
            return self.parse_identifier_expr()
        if tok.type == NUMBER:
            return self.parse_number_expr()
        if tok.is_char("("):
            return self.parse_paren_expr()
        raise SushiSyntaxError("unknown token when expecting an expression")

    # Binary expressions

    def parse_bin_op_rhs(self, expr_prec: int, lhs: Expr) -> Expr:
        """Extends ``lhs`` with every operator binding at least ``expr_prec``.

        Equal precedence groups to the left: the recursive call only happens
        when the following operator binds strictly tighter.
        """
        while True:
            tok_prec = self.token_precedence()
            if tok_prec < expr_prec:
                return lhs

            op = str(self.current.value)
            self.next_token()

            rhs = self.parse_primary()

            next_prec = self.token_precedence()
            if tok_prec < next_prec:
                rhs = self.parse_bin_op_rhs(tok_prec + 1, rhs)

            lhs = BinaryExpr(op, lhs, rhs)

    def parse_expression(self) -> Expr:
        """expression ::= primary binoprhs"""
        if self.depth >= self.max_depth:
            raise SushiSyntaxError("expression nested too deeply")
        self.depth += 1
        try:
            lhs = self.parse_primary()
            return self.parse_bin_op_rhs(0, lhs)
        finally:
            self.depth -= 1

    # Top-level forms

    def parse_prototype(self) -> Prototype:
        """prototype ::= identifier '(' identifier* ')'"""
        if self.current.type != IDENT:
            raise SushiSyntaxError("Expected function name in prototype")
        name = str(self.current.value)
        self.next_token()

        if not self.current.is_char("("):
            raise SushiSyntaxError("Expected '(' in prototype")

        params: list[str] = []
        while self.next_token().type == IDENT:
            params.append(str(self.current.value))
        if not self.current.is_char(")"):
            raise SushiSyntaxError("Expected ')' in prototype")
        self.next_token()  # eat )

        return Prototype(name, tuple(params))

    def parse_definition(self) -> Function:
        """definition ::= 'def' prototype expression"""
        self.next_token()  # eat def
        proto = self.parse_prototype()
        body = self.parse_expression()
        return Function(proto, body)

    def parse_extern(self) -> Prototype:
        """external ::= 'extern' prototype"""
        self.next_token()  # eat extern
        return self.parse_prototype()

    def parse_top_level_expr(self) -> Function:
        """Wraps a bare expression in an anonymous, parameterless Function."""
        body = self.parse_expression()
        return Function(Prototype(anon_function_name, ()), body)

    def parse_top_level(self) -> TopLevel:
        """Parses the one top-level form that starts at the current token."""
        if self.current.type == DEF:
            return self.parse_definition()
        if self.current.type == EXTERN:
            return self.parse_extern()
        return self.parse_top_level_expr()

    def parse_all(self) -> list[TopLevel]:
        """Parses the whole source strictly; the first error propagates."""
        forms: list[TopLevel] = []
        self.next_token()
        while self.current.type != EOF:
            if self.current.is_char(";"):
                self.next_token()
                continue
            forms.append(self.parse_top_level())
        return forms


__all__ = ["Parser"]
