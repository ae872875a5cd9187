"""Lexer/tokenizer for numtree arithmetic expressions.

Converts expression strings into a stream of tokens for the parser.

Token types:
- Literals: NUMBER (optionally signed, see below), always a float
- Operators: SUM, SUB, MUL, DIV
- Grouping: START_PAREN, START_BRACKET, START_BRACE and their END_* pairs
- Comparison: EQUAL, LESS_THAN, GREATER_THAN, LESS_OR_EQUAL,
  GREATER_OR_EQUAL, SIMILAR (lexed only, the parser does not use them)
- ILLEGAL and EOF

The lexer never raises. Unknown input is returned as ILLEGAL tokens and the
parser decides what to do with them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator


class TokenType(Enum):
    """Types of tokens in the expression language."""

    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # Grouping symbols
    START_PAREN = "("
    START_BRACKET = "["
    START_BRACE = "{"
    END_PAREN = ")"
    END_BRACKET = "]"
    END_BRACE = "}"

    # Values
    NUMBER = "NUMBER"

    # Arithmetic operators
    SUM = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    # Comparison
    EQUAL = "="
    LESS_THAN = "<"
    GREATER_THAN = ">"
    LESS_OR_EQUAL = "<="
    GREATER_OR_EQUAL = ">="
    SIMILAR = "~"


# Lexemes with a fixed token type
TOKEN_STRINGS: dict[str, TokenType] = {
    "(": TokenType.START_PAREN,
    "[": TokenType.START_BRACKET,
    "{": TokenType.START_BRACE,
    ")": TokenType.END_PAREN,
    "]": TokenType.END_BRACKET,
    "}": TokenType.END_BRACE,
    "+": TokenType.SUM,
    "-": TokenType.SUB,
    "*": TokenType.MUL,
    "/": TokenType.DIV,
    "=": TokenType.EQUAL,
    "<": TokenType.LESS_THAN,
    ">": TokenType.GREATER_THAN,
    "<=": TokenType.LESS_OR_EQUAL,
    ">=": TokenType.GREATER_OR_EQUAL,
    "~": TokenType.SIMILAR,
}

# Single characters that start (and extend) a comparison lexeme
COMPARISON_CHARS = frozenset("=<>~")

NUMERIC_CHARS = frozenset("0123456789.")

WHITESPACE = frozenset(" \t\n\r")

SIGNS = frozenset("+-")


@dataclass(frozen=True)
class Token:
    """A single token from the lexer.

    Attributes:
        type: The token type
        value: The raw lexeme, or the parsed float for NUMBER tokens
        position: Character offset of the lexeme in the source string
        line: Newlines consumed before the lexeme (0-indexed)
        text: Source text of a NUMBER token
    """

    type: TokenType
    value: str | float | None
    position: int = 0
    line: int = 0
    text: str | None = field(default=None, compare=False, repr=False)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, pos={self.position})"

    @property
    def lexeme(self) -> str:
        """The token as it appeared in the source (``"EOF"`` at end of input)."""
        if self.type == TokenType.EOF:
            return "EOF"
        if self.text is not None:
            return self.text
        return str(self.value)


def is_number(text: str) -> bool:
    """Return True if text is a plain decimal numeric string.

    Accepts an optional leading sign, digits and at most one decimal point:
    ``"124"``, ``"14.742"``, ``"-3"``, ``"0000"``. Rejects ``""``,
    ``"154.3521.64"`` and anything with other characters (so ``"inf"``,
    ``"1e5"`` and ``" 1"`` are not numbers here even though float() takes them).
    """
    digits = text[1:] if text[:1] in SIGNS else text
    if not digits or any(ch not in NUMERIC_CHARS for ch in digits):
        return False
    try:
        float(digits)
    except ValueError:
        return False
    return True


class Lexer:
    """Tokenizer for arithmetic expressions.

    Usage:
        lexer = Lexer("12 + (3 * -4)")
        for token in lexer:
            print(token)

    A lexer is single-use: once it reaches the end of the input every call to
    next_token() returns an EOF token.
    """

    def __init__(self, source: str):
        self.source = source
        self.position = 0
        self.line = 0

    def __iter__(self) -> Iterator[Token]:
        """Iterate over the remaining tokens, ending with (and including) EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                break

    def tokenize(self) -> list[Token]:
        """Tokenize the rest of the source and return list of tokens."""
        return list(self)

    def get_line(self) -> int:
        """Return the number of newlines consumed so far."""
        return self.line

    # -------------------------------------------------------------------------
    # Character helpers
    # -------------------------------------------------------------------------

    def _char(self, offset: int = 0) -> str:
        """Character at position + offset, or "" outside the source."""
        index = self.position + offset
        if 0 <= index < len(self.source):
            return self.source[index]
        return ""

    def _skip_whitespace(self) -> None:
        while self._char() in WHITESPACE:
            if self._char() == "\n":
                self.line += 1
            self.position += 1

    def _is_signed_number(self) -> bool:
        """A sign followed by a digit, with no numeric character right before it.

        The look-behind is on the raw source, so whitespace counts: in
        ``10 -5`` the ``-`` belongs to ``-5`` while in ``10-5`` it does not.
        """
        return (
            self._char() in SIGNS
            and self._char(1) in NUMERIC_CHARS
            and self._char(-1) not in NUMERIC_CHARS
        )

    # -------------------------------------------------------------------------
    # Readers
    # -------------------------------------------------------------------------

    def _read_number(self) -> str:
        """Read a maximal run of numeric characters (after an optional sign)."""
        start = self.position
        if self._char() in SIGNS:
            self.position += 1
        while self._char() in NUMERIC_CHARS:
            self.position += 1
        return self.source[start:self.position]

    def _read_comparison(self) -> str:
        """Read comparison characters greedily (``<=``, ``>=``, but also ``><``)."""
        start = self.position
        while self._char() in COMPARISON_CHARS:
            self.position += 1
        return self.source[start:self.position]

    def next_token(self) -> Token:
        """Get the next token from the source."""
        self._skip_whitespace()

        start = self.position
        line = self.line
        char = self._char()

        if not char:
            return Token(TokenType.EOF, None, start, line)

        if char in COMPARISON_CHARS:
            lexeme = self._read_comparison()
            return Token(TOKEN_STRINGS.get(lexeme, TokenType.ILLEGAL), lexeme, start, line)

        if char in NUMERIC_CHARS or self._is_signed_number():
            lexeme = self._read_number()
            if is_number(lexeme):
                return Token(TokenType.NUMBER, float(lexeme), start, line, lexeme)
            return Token(TokenType.ILLEGAL, lexeme, start, line)

        self.position += 1
        return Token(TOKEN_STRINGS.get(char, TokenType.ILLEGAL), char, start, line)
