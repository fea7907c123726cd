"""
Token Types for the calctree parser

Shared between lexer and parser to avoid circular dependencies.
"""

from typing import Optional
from dataclasses import dataclass
from enum import Enum, auto


class TT(Enum):
    """Token Types - mirrors grammar terminals"""

    # Literals
    NUMBER = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    MULTIPLY = auto()
    DIVIDE = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()

    # Special
    EOF = auto()


# Printable symbol for operator/punctuation kinds
SYMBOLS = {
    TT.PLUS: '+',
    TT.MINUS: '-',
    TT.MULTIPLY: '*',
    TT.DIVIDE: '/',
    TT.LPAREN: '(',
    TT.RPAREN: ')',
}


@dataclass(frozen=True)
class Tok:
    """Token with position info"""

    type: TT
    value: Optional[str] = None
    line: int = 0
    column: int = 0

    @classmethod
    def of(cls, token_type: TT, value: Optional[str] = None) -> "Tok":
        """Build a position-less token, filling in the symbol for operators."""
        if value is None:
            value = SYMBOLS.get(token_type)
        return cls(token_type, value)

    def __repr__(self):
        return f"Tok({self.type.name}, {self.value!r}, {self.line}:{self.column})"


EOF_TOKEN = Tok(TT.EOF, None, 0, 0)
