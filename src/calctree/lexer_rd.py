"""
Lexer for calctree - Recursive Descent Parser

Tokenizes arithmetic source text into a stream of tokens.

Features:
- Single-pass tokenization
- Position tracking (line, column)
- Decimal and scientific-notation number literals
"""

from typing import List, Optional

from .token_types import TT, Tok

# ============================================================================
# Lexer Implementation
# ============================================================================

def _is_digit(ch: str) -> bool:
    # ASCII only; str.isdigit also accepts other scripts and superscripts
    return '0' <= ch <= '9'


class LexError(Exception):
    """Lexical analysis error"""
    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(
            f"{message} at line {line}, col {column}" if line is not None else message
        )


class Lexer:
    """
    Arithmetic lexer.

    Whitespace (including newlines) only separates tokens; it never
    produces one.
    """

    OPERATORS = [
        ('+', TT.PLUS),
        ('-', TT.MINUS),
        ('*', TT.MULTIPLY),
        ('/', TT.DIVIDE),
        ('(', TT.LPAREN),
        (')', TT.RPAREN),
    ]

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Tok] = []

    # ========================================================================
    # Main Tokenization
    # ========================================================================

    def tokenize(self) -> List[Tok]:
        """Tokenize entire source, return token list"""
        while self.pos < len(self.source):
            self.scan_token()

        self.emit(TT.EOF, None, self.line, self.column)
        return self.tokens

    def scan_token(self):
        """Scan next token"""
        if self.skip_whitespace():
            return

        if _is_digit(self.peek()):
            self.scan_number()
            return

        self.scan_operator()

    def scan_number(self):
        """Scan number literal"""
        line, column = self.line, self.column
        value = ''

        # Integer part
        while _is_digit(self.peek()):
            value += self.advance()

        # Decimal part
        if self.peek() == '.' and _is_digit(self.peek(1)):
            value += self.advance()  # .
            while _is_digit(self.peek()):
                value += self.advance()

        # Scientific notation
        if self.peek() in ('e', 'E'):
            value += self.advance()
            if self.peek() in ('+', '-'):
                value += self.advance()
            if not _is_digit(self.peek()):
                raise LexError(f"Malformed exponent in number '{value}'", line, column)
            while _is_digit(self.peek()):
                value += self.advance()

        if self.peek().isalpha() or self.peek() in ('_', '.'):
            raise LexError(f"Invalid number suffix '{self.peek()}'", line, column)

        # Keep as string; the parser does the float conversion
        self.emit(TT.NUMBER, value, line, column)

    def scan_operator(self):
        """Scan operators and punctuation"""
        for op_str, op_type in self.OPERATORS:
            if self.source.startswith(op_str, self.pos):
                line, column = self.line, self.column
                self.advance(len(op_str))
                self.emit(op_type, op_str, line, column)
                return

        ch = self.peek()
        raise LexError(f"Unexpected character '{ch}'", self.line, self.column)

    # ========================================================================
    # Utilities
    # ========================================================================

    def peek(self, offset: int = 0) -> str:
        """Look ahead at character"""
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return '\0'

    def advance(self, n: int = 1) -> str:
        """Consume n characters and return them as a string"""
        if n < 0:
            raise ValueError(f"advance() requires n >= 0, got {n}")
        result = ''
        for _ in range(n):
            ch = self.source[self.pos] if self.pos < len(self.source) else '\0'
            result += ch
            self.pos += 1
            if ch == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        return result

    def skip_whitespace(self) -> bool:
        """Skip spaces, tabs and newlines; report whether anything was skipped"""
        skipped = False
        while self.peek() in (' ', '\t', '\r', '\n') and self.pos < len(self.source):
            self.advance()
            skipped = True
        return skipped

    def emit(self, token_type: TT, value: Optional[str], line: int, column: int):
        """Emit a token"""
        self.tokens.append(Tok(type=token_type, value=value, line=line, column=column))


def tokenize(source: str) -> List[Tok]:
    """Convenience function to tokenize source"""
    lexer = Lexer(source)
    return lexer.tokenize()
