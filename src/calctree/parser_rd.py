"""
Recursive Descent Parser for calctree

This serves as:
1. The parser used by the runner and the tree printer
2. The authority on the sign-adjacency rule (the Lark grammar in
   parse_auto only encodes precedence and associativity)

Structure:
- Token navigation: cursor over a borrowed token list, synthetic EOF
- Parser: three precedence levels (expression, term, factor)
- AST: tree.NumberLiteral / UnaryOperation / BinaryOperation
"""

from typing import Optional, Sequence

from .token_types import EOF_TOKEN, SYMBOLS, TT, Tok
from .tree import BinaryOperation, Node, NumberLiteral, UnaryOperation

# ============================================================================
# Parser
# ============================================================================

class ParseError(SyntaxError):
    """Parse error with position info"""
    def __init__(self, message: str, token: Optional[Tok] = None):
        self.message = message
        self.token = token
        has_pos = token is not None and token.line > 0
        super().__init__(
            f"{message} at line {token.line}, col {token.column}" if has_pos else message
        )

    @property
    def line(self) -> Optional[int]:
        return self.token.line if self.token is not None and self.token.line > 0 else None

    @property
    def column(self) -> Optional[int]:
        return self.token.column if self.token is not None and self.token.line > 0 else None


class Parser:
    """
    Recursive descent parser for arithmetic expressions.

    Expression precedence (lowest to highest):
    1. expression (+, -) left associative
    2. term (*, /) left associative
    3. factor (unary +/-, number, parenthesized expression)

    A unary sign may not directly follow an identical sign. The most recent
    sign is held in ``last_op``: a binary +/- sets it for its right operand,
    a unary +/- sets it for its operand, a number clears it, and a
    parenthesized sub-expression starts from None. Unary operands and
    parentheses restore the previous value on the way out.
    """

    def __init__(self, tokens: Sequence[Tok]):
        self.tokens = tokens
        self.pos = 0
        self.current = tokens[0] if tokens else EOF_TOKEN
        self.last_op: Optional[TT] = None

    # ========================================================================
    # Token Navigation
    # ========================================================================

    def advance(self) -> Tok:
        """Consume current token and move to next"""
        prev = self.current
        self.pos += 1
        if self.pos < len(self.tokens):
            self.current = self.tokens[self.pos]
        else:
            self.current = EOF_TOKEN
        return prev

    def check(self, *types: TT) -> bool:
        """Check if current token matches any of the given types"""
        return self.current.type in types

    def expect(self, token_type: TT, message: Optional[str] = None) -> Tok:
        """Consume token of expected type or raise error"""
        if not self.check(token_type):
            msg = message or f"Expected {token_type.name}, got {self.current.type.name}"
            raise ParseError(msg, self.current)
        return self.advance()

    # ========================================================================
    # Top-Level Parsing
    # ========================================================================

    def parse(self) -> Node:
        """Parse a single expression that must span the whole token list"""
        try:
            tree = self.parse_expression()
        except RecursionError:
            raise ParseError("Expression nested too deeply", self.current) from None

        if not self.check(TT.EOF):
            raise ParseError("Unexpected tokens after expression", self.current)

        return tree

    # ========================================================================
    # Expressions
    # ========================================================================

    def parse_expression(self) -> Node:
        """Parse addition/subtraction: term ((+|-) term)*"""
        left = self.parse_term()

        while self.check(TT.PLUS, TT.MINUS):
            op = self.advance()
            self.last_op = op.type
            right = self.parse_term()
            self.last_op = None
            left = BinaryOperation(left, _symbol(op), right)

        return left

    def parse_term(self) -> Node:
        """Parse multiplication/division: factor ((*|/) factor)*"""
        left = self.parse_factor()

        while self.check(TT.MULTIPLY, TT.DIVIDE):
            op = self.advance()
            right = self.parse_factor()
            left = BinaryOperation(left, _symbol(op), right)

        return left

    def parse_factor(self) -> Node:
        """
        Parse a factor:
        - unary sign: (+|-) factor
        - number literal
        - parenthesized expression (no wrapper node)
        """
        tok = self.current

        if self.check(TT.PLUS, TT.MINUS):
            if self.last_op == tok.type:
                raise ParseError(
                    f"Unexpected token: consecutive {_symbol(tok)} operators", tok
                )
            self.advance()
            saved = self.last_op
            self.last_op = tok.type
            operand = self.parse_factor()
            self.last_op = saved
            return UnaryOperation(_symbol(tok), operand)

        if self.check(TT.NUMBER):
            self.last_op = None
            self.advance()
            return NumberLiteral(_number_value(tok))

        if self.check(TT.LPAREN):
            self.advance()
            saved = self.last_op
            self.last_op = None
            expr = self.parse_expression()
            self.last_op = saved
            self.expect(TT.RPAREN, "Expected closing parenthesis")
            return expr

        raise ParseError(f"Unexpected token: {_describe(tok)}", tok)


def _symbol(tok: Tok) -> str:
    return SYMBOLS[tok.type]


def _number_value(tok: Tok) -> float:
    text = tok.value
    if text is None:
        raise ParseError("NUMBER token has no text", tok)
    try:
        return float(text)
    except ValueError:
        raise ParseError(f"Malformed number {text!r}", tok) from None


def _describe(tok: Tok) -> str:
    if tok.type == TT.EOF:
        return "end of input"
    if tok.value is None:
        return tok.type.name
    return f"{tok.type.name} {tok.value!r}"

# ============================================================================
# Entry Points
# ============================================================================

def parse(tokens: Sequence[Tok]) -> Node:
    """Parse a token sequence to an AST root; an explicit EOF is optional."""
    return Parser(tokens).parse()


def parse_source(source: str) -> Node:
    """Tokenize and parse arithmetic source text."""
    from .lexer_rd import tokenize

    return parse(tokenize(source))
