"""AST node model shared by the parsers, the evaluator and the tree printer.

Nodes are frozen dataclasses forming a closed union; consumers dispatch on
the concrete class with ``match``. Children are always built before their
parent, so a finished tree has no cycles and no shared subtrees.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, List, Union
from typing_extensions import TypeAlias

UNARY_OPS = frozenset({'+', '-'})
BINARY_OPS = frozenset({'+', '-', '*', '/'})


@dataclass(frozen=True)
class NumberLiteral:
    value: float

    def label(self) -> str:
        return node_label(self)

    def children(self) -> List[Node]:
        return []


@dataclass(frozen=True)
class UnaryOperation:
    op: str
    operand: Node

    def __post_init__(self) -> None:
        if self.op not in UNARY_OPS:
            raise ValueError(f"invalid unary operator {self.op!r}")

    def label(self) -> str:
        return node_label(self)

    def children(self) -> List[Node]:
        return [self.operand]


@dataclass(frozen=True)
class BinaryOperation:
    left: Node
    op: str
    right: Node

    def __post_init__(self) -> None:
        if self.op not in BINARY_OPS:
            raise ValueError(f"invalid binary operator {self.op!r}")

    def label(self) -> str:
        return node_label(self)

    def children(self) -> List[Node]:
        return [self.left, self.right]


Node: TypeAlias = Union[NumberLiteral, UnaryOperation, BinaryOperation]


def format_number(value: float) -> str:
    """Integral values drop the decimal point; everything else uses repr."""
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


def node_label(node: Node) -> str:
    match node:
        case NumberLiteral(value=value):
            return f"NUMBER: {format_number(value)}"
        case UnaryOperation(op=op):
            return f"UNARY_OP: {op}"
        case BinaryOperation(op=op):
            return f"OP: {op}"
        case _:
            raise TypeError(f"not an AST node: {type(node).__name__}")


def node_children(node: Node) -> List[Node]:
    match node:
        case NumberLiteral():
            return []
        case UnaryOperation(operand=operand):
            return [operand]
        case BinaryOperation(left=left, right=right):
            return [left, right]
        case _:
            raise TypeError(f"not an AST node: {type(node).__name__}")


def walk(node: Node) -> Iterator[Node]:
    """Yield every node in pre-order."""
    yield node
    for child in node_children(node):
        yield from walk(child)


def count_nodes(node: Node) -> int:
    return sum(1 for _ in walk(node))
