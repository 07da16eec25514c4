"""
Shared constants for the sushi front end.

Token kinds
-----------
EOF, DEF, EXTERN, IDENT and NUMBER are the fixed sentinel kinds. Every other
character the lexer sees is returned as a CHAR token whose value is the raw
character itself (operators, parentheses, comma, semicolon, ...).
"""

EOF = "EOF"
DEF = "DEF"
EXTERN = "EXTERN"
IDENT = "IDENT"
NUMBER = "NUMBER"
CHAR = "CHAR"

keyword_hashmap: dict[str, str] = {
    "def": DEF,
    "extern": EXTERN,
}

# C isspace() set
whitespace_chars = " \t\n\v\f\r"

comment_char = "#"
comment_terminators = ("\n", "\r")

default_precedence: dict[str, int] = {
    "<": 10,
    "+": 20,
    "-": 20,
    "*": 40,  # highest
}

# Characters with a fixed meaning in the grammar that can never be operators.
reserved_operator_chars = frozenset("().,#;")

# Leading underscore: never produced by the lexer as an identifier.
anon_function_name = "__anon_expr"

__all__ = [
    "CHAR",
    "DEF",
    "EOF",
    "EXTERN",
    "IDENT",
    "NUMBER",
    "anon_function_name",
    "comment_char",
    "comment_terminators",
    "default_precedence",
    "keyword_hashmap",
    "reserved_operator_chars",
    "whitespace_chars",
]
