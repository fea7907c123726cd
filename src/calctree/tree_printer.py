"""Text rendering of parsed expression trees.

Two forms are produced: the compact one-line label of a single node
(``OP: +``, ``UNARY_OP: -``, ``NUMBER: 4``) and the full indented diagram,
one node per line with branch glyphs.
"""
from __future__ import annotations

import sys
from typing import List, Optional, TextIO

from .tree import BinaryOperation, Node, NumberLiteral, UnaryOperation, node_label

BRANCH = "├── "
LAST_BRANCH = "└── "
VERTICAL = "│   "
EMPTY = "    "

VISUALIZATION_HEADER = "Parse Tree Visualization:"
STRUCTURE_HEADER = "Parse Tree Structure:"


def render(root: Node) -> str:
    """Return the indented diagram for ``root``, one newline-terminated line per node."""
    lines: List[str] = []
    try:
        _render_into(lines, root, "", True)
    except RecursionError:
        raise ValueError("Tree nested too deeply to render") from None
    return "".join(lines)


def _render_into(lines: List[str], node: Node, indent: str, is_last: bool) -> None:
    prefix = LAST_BRANCH if is_last else BRANCH
    lines.append(f"{indent}{prefix}{node_label(node)}\n")

    child_indent = indent + (EMPTY if is_last else VERTICAL)

    match node:
        case BinaryOperation(left=left, right=right):
            _render_into(lines, left, child_indent, False)
            _render_into(lines, right, child_indent, True)
        case UnaryOperation(operand=operand):
            _render_into(lines, operand, child_indent, True)
        case NumberLiteral():
            pass


def print_tree(root: Node, out: Optional[TextIO] = None) -> None:
    """Write the visualization header followed by the root's label."""
    out = out if out is not None else sys.stdout
    print(VISUALIZATION_HEADER, file=out)
    print(node_label(root), file=out)


def visualize_tree(root: Node, out: Optional[TextIO] = None) -> None:
    """Write the structure header followed by the full diagram.

    Unlike a println of the diagram, no blank line follows the last node.
    """
    out = out if out is not None else sys.stdout
    print(STRUCTURE_HEADER, file=out)
    out.write(render(root))
