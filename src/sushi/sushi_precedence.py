"""
Binary operator precedence table.

A ``PrecedenceTable`` is built once, validated, and handed to each ``Parser``.
Only characters present in the table are binary operators; anything else ends
a binary-expression chain.

Example:
    >>> table = PrecedenceTable().with_overrides({"/": 40})
    >>> table["/"]
    40
"""

from collections.abc import Iterator, Mapping

from sushi.sushi_constants import (
    CHAR,
    default_precedence,
    reserved_operator_chars,
    whitespace_chars,
)
from sushi.sushi_lexer import Token


class PrecedenceTable(Mapping[str, int]):
    """Read-only mapping from operator character to positive precedence.

    Args:
        mapping (Mapping[str, int] | None): Operator table. ``None`` selects the
            baseline ``{'<': 10, '+': 20, '-': 20, '*': 40}``.

    Raises:
        ValueError: If an operator is not a single ASCII punctuation character,
            or a precedence is not a positive integer.
    """

    def __init__(self, mapping: Mapping[str, int] | None = None) -> None:
        table = dict(default_precedence if mapping is None else mapping)
        for op, prec in table.items():
            self._validate(op, prec)
        self._table = table

    @staticmethod
    def _validate(op: str, prec: int) -> None:
        if not isinstance(op, str) or len(op) != 1:
            raise ValueError(f"Operator must be a single character, got {op!r}")
        if not op.isascii() or op.isalnum() or op in whitespace_chars:
            raise ValueError(f"Invalid operator character {op!r}")
        if op in reserved_operator_chars:
            raise ValueError(f"Reserved character {op!r} cannot be an operator")
        if isinstance(prec, bool) or not isinstance(prec, int) or prec <= 0:
            raise ValueError(
                f"Precedence for {op!r} must be a positive integer, got {prec!r}"
            )

    def __getitem__(self, op: str) -> int:
        return self._table[op]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"PrecedenceTable({self._table!r})"

    def precedence_of(self, tok: Token) -> int:
        """Precedence of ``tok`` as a binary operator, or -1 if it is not one."""
        if tok.type != CHAR:
            return -1
        return self._table.get(str(tok.value), -1)

    def with_overrides(self, overrides: Mapping[str, int]) -> "PrecedenceTable":
        """Returns a new table with ``overrides`` added or replaced."""
        merged = dict(self._table)
        merged.update(overrides)
        return PrecedenceTable(merged)


def parse_precedence_spec(spec: str) -> tuple[str, int]:
    """Parses an ``OP=N`` command-line setting such as ``'/=40'``.

    Raises:
        ValueError: If the text is not of the form ``OP=N``.
    """
    op, sep, value = spec.rpartition("=")
    if not sep or len(op) != 1:
        raise ValueError(f"Expected OP=N, got {spec!r}")
    try:
        prec = int(value)
    except ValueError:
        raise ValueError(f"Precedence must be an integer, got {value!r}") from None
    PrecedenceTable._validate(op, prec)
    return op, prec


__all__ = ["PrecedenceTable", "parse_precedence_spec"]
