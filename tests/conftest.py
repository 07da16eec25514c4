from collections.abc import Callable

import pytest

from sushi.sushi_ast import Expr
from sushi.sushi_parser import Parser
from sushi.sushi_precedence import PrecedenceTable


def make_parser(source: str, precedence: PrecedenceTable | None = None) -> Parser:
    parser = Parser.from_source(source, precedence)
    parser.next_token()
    return parser


@pytest.fixture  # type: ignore[misc]
def parse_expr() -> Callable[[str], Expr]:
    def _parse(source: str) -> Expr:
        return make_parser(source).parse_expression()

    return _parse
