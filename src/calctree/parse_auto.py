"""Grammar-driven reference parser built on Lark.

The grammar in ``grammar.lark`` states precedence and associativity
declaratively. Its trees are transformed into the same node classes the
recursive-descent parser builds, so the two can be compared node for node.
The grammar does not know about the sign-adjacency rule and therefore
accepts inputs such as ``1++2`` that ``parser_rd`` rejects.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from lark import Lark, Transformer, UnexpectedInput, v_args

from .lexer_rd import LexError
from .parser_rd import ParseError, parse_source
from .tree import BinaryOperation, Node, NumberLiteral, UnaryOperation

GRAMMAR_PATH = Path(__file__).resolve().parent / "grammar.lark"


def load_grammar(grammar_path: Optional[str] = None) -> str:
    p = Path(grammar_path) if grammar_path else GRAMMAR_PATH
    if not p.exists():
        raise FileNotFoundError(f"grammar not found: {p}")
    return p.read_text(encoding="utf-8")


def build_parser(grammar_text: Optional[str] = None, parser_kind: str = "lalr") -> Lark:
    if grammar_text is None:
        grammar_text = load_grammar()
    return Lark(
        grammar_text,
        parser=parser_kind,
        lexer="basic",
        start="start",
        maybe_placeholders=False,
        propagate_positions=True,
    )


@v_args(inline=True)
class ToAst(Transformer):
    """Map Lark trees onto tree.* nodes."""

    def number(self, tok):
        return NumberLiteral(float(tok))

    def unaryop(self, op, operand):
        return UnaryOperation(str(op), operand)

    def binop(self, left, op, right):
        return BinaryOperation(left, str(op), right)


_default_parser: Optional[Lark] = None


def _get_default_parser() -> Lark:
    global _default_parser
    if _default_parser is None:
        _default_parser = build_parser()
    return _default_parser


def parse_with_grammar(source: str, parser: Optional[Lark] = None) -> Node:
    """Parse with the Lark grammar; failures surface as ParseError."""
    if parser is None:
        parser = _get_default_parser()
    try:
        tree = parser.parse(source)
    except UnexpectedInput as exc:
        line = getattr(exc, "line", None)
        column = getattr(exc, "column", None)
        raise ParseError(
            f"Grammar parse failed ({exc.__class__.__name__}) at line {line}, col {column}"
        ) from exc
    try:
        return ToAst().transform(tree)
    except RecursionError:
        raise ParseError("Expression nested too deeply") from None


@dataclass(frozen=True)
class DiffResult:
    """Outcome of parsing one source with both parsers."""

    rd: Optional[Node]
    grammar: Optional[Node]
    rd_error: Optional[Exception] = None
    grammar_error: Optional[ParseError] = None

    @property
    def match(self) -> bool:
        return self.rd == self.grammar and (self.rd_error is None) == (self.grammar_error is None)


def differential(source: str, parser: Optional[Lark] = None) -> DiffResult:
    """Parse ``source`` with parser_rd and with the grammar, keeping both outcomes."""
    rd: Optional[Node] = None
    grammar: Optional[Node] = None
    rd_error: Optional[Exception] = None
    grammar_error: Optional[ParseError] = None

    try:
        rd = parse_source(source)
    except (LexError, ParseError) as exc:
        rd_error = exc

    try:
        grammar = parse_with_grammar(source, parser)
    except ParseError as exc:
        grammar_error = exc

    return DiffResult(rd, grammar, rd_error, grammar_error)
