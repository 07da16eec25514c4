"""
Defines the abstract syntax tree (AST) node set for the sushi language.

The node set is closed:

Expressions:
    NumberExpr:   a numeric literal.
    VariableExpr: a reference to a named variable.
    BinaryExpr:   ``lhs <op> rhs`` for a single-character operator.
    CallExpr:     ``callee(arg, ...)``.

Top-level forms:
    Prototype:    a function name and its parameter names (``extern`` or the
                  head of a definition).
    Function:     a prototype plus a body expression. Bare top-level
                  expressions are wrapped in an anonymous Function.

All nodes are frozen dataclasses: they are built once by the parser and
compare structurally. Each child is owned by exactly one parent.

ASTDict:
    TypedDict shape produced by ``to_dict()``, suitable for JSON output or
    debugging.
"""

from dataclasses import dataclass
from typing import Any, TypedDict, Union

from sushi.sushi_constants import anon_function_name


class ASTDict(TypedDict, total=False):
    """
    Serialized form of an AST node.

    Fields:
        kind (str): Node kind ('number', 'variable', 'binary', 'call',
            'prototype' or 'function').
        value (Any): Literal value, variable name, operator, callee or
            function name, depending on kind.
        children (list[ASTDict]): Child nodes in source order.
        params (list[str]): Parameter names (prototypes only).
    """

    kind: str
    value: Any
    children: list["ASTDict"]
    params: list[str]


@dataclass(frozen=True)
class NumberExpr:
    value: float

    def to_dict(self) -> ASTDict:
        return {"kind": "number", "value": self.value, "children": []}


@dataclass(frozen=True)
class VariableExpr:
    name: str

    def to_dict(self) -> ASTDict:
        return {"kind": "variable", "value": self.name, "children": []}


@dataclass(frozen=True)
class BinaryExpr:
    op: str
    lhs: "Expr"
    rhs: "Expr"

    def to_dict(self) -> ASTDict:
        return {
            "kind": "binary",
            "value": self.op,
            "children": [self.lhs.to_dict(), self.rhs.to_dict()],
        }


@dataclass(frozen=True)
class CallExpr:
    callee: str
    args: tuple["Expr", ...] = ()

    def to_dict(self) -> ASTDict:
        return {
            "kind": "call",
            "value": self.callee,
            "children": [a.to_dict() for a in self.args],
        }


Expr = Union[NumberExpr, VariableExpr, BinaryExpr, CallExpr]


@dataclass(frozen=True)
class Prototype:
    """Function signature: name plus ordered parameter names.

    Parameter names are not required to be unique.
    """

    name: str
    params: tuple[str, ...] = ()

    def to_dict(self) -> ASTDict:
        return {
            "kind": "prototype",
            "value": self.name,
            "params": list(self.params),
            "children": [],
        }


@dataclass(frozen=True)
class Function:
    """A function definition, or the anonymous wrapper of a top-level expression."""

    proto: Prototype
    body: Expr

    @property
    def is_anonymous(self) -> bool:
        return self.proto.name == anon_function_name

    def to_dict(self) -> ASTDict:
        return {
            "kind": "function",
            "value": self.proto.name,
            "params": list(self.proto.params),
            "children": [self.body.to_dict()],
        }


TopLevel = Union[Function, Prototype]

__all__ = [
    "ASTDict",
    "BinaryExpr",
    "CallExpr",
    "Expr",
    "Function",
    "NumberExpr",
    "Prototype",
    "TopLevel",
    "VariableExpr",
]
