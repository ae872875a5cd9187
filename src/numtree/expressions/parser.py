"""Parser for numtree arithmetic expressions.

Converts the lexer's token stream into an expression tree.

Grammar (informal):

    <expression>  ::= <expression> <operation> <expression>
                    | <group-start> <expression> <group-end>
                    | <number>
    <operation>   ::= "+" | "-" | "*" | "/"
    <group-start> ::= "(" | "[" | "{"
    <group-end>   ::= ")" | "]" | "}"

Priorities are resolved with a single token of lookahead: after reading the
right operand of an operator, if the following operator binds tighter the
operand is handed to it first (``17 + 16 * 21`` -> ``17 + (16 * 21)``),
otherwise operands group to the left (``16 + 21 + 9`` -> ``(16 + 21) + 9``).
The lookahead is one level deep only, so ``1 + 2 * 3 * 4`` parses as
``(1 + 2 * 3) * 4``. Groups always bind like a single number.

Only groups recurse; operator chains are consumed in a loop, so
``max_depth`` bounds group nesting and nothing else.
"""

import logging

from numtree.expressions.lexer import Lexer, Token, TokenType
from numtree.expressions.number import OPERATIONS, Compound, Leaf, Node

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 128

# Group start symbol -> group end symbol
GROUP_DELIMITERS: dict[TokenType, TokenType] = {
    TokenType.START_PAREN: TokenType.END_PAREN,
    TokenType.START_BRACKET: TokenType.END_BRACKET,
    TokenType.START_BRACE: TokenType.END_BRACE,
}


# -----------------------------------------------------------------------------
# Errors
# -----------------------------------------------------------------------------


class ParseError(Exception):
    """Error during parsing."""

    def __init__(self, message: str, token: Token):
        self.message = message
        self.token = token
        super().__init__(f"{message} at position {token.position}")


class IllegalTokenError(ParseError):
    """The lexer could not classify part of the input."""

    def __init__(self, token: Token):
        super().__init__(f"Illegal token '{token.lexeme}'", token)


class UnexpectedOperatorError(ParseError):
    """An operator was expected but something else was found."""

    def __init__(self, token: Token):
        self.expected = tuple(op.symbol for op in OPERATIONS.values())
        super().__init__(
            f"Expected an operation ({', '.join(self.expected)}), got '{token.lexeme}'",
            token,
        )


class MissingOperandError(ParseError):
    """A number was expected but something else was found."""

    def __init__(self, token: Token):
        super().__init__(f"Expected a number, got '{token.lexeme}'", token)


class UnknownGroupDelimiterError(ParseError):
    """A group was started with a symbol that has no closing symbol."""

    def __init__(self, token: Token):
        super().__init__(f"Could not parse group, unknown symbol '{token.lexeme}'", token)


class UnterminatedGroupError(ParseError):
    """The input ended before a group was closed."""

    def __init__(self, token: Token, expected: TokenType):
        self.expected = expected
        super().__init__(f"Expected '{expected.value}' before end of input", token)


class EmptyResultError(ParseError):
    """The input (or a group) did not contain any value."""
    pass


class NestingTooDeepError(ParseError):
    """The expression nests deeper than the parser allows."""

    def __init__(self, token: Token, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"Expression nests deeper than {max_depth} levels", token)


# -----------------------------------------------------------------------------
# Parser
# -----------------------------------------------------------------------------


class Parser:
    """Recursive descent parser for arithmetic expressions.

    Usage:
        parser = Parser(Lexer("19 + 21"))
        tree = parser.parse()

    A parser consumes its lexer; call parse() once per instance.
    """

    def __init__(self, lexer: Lexer, max_depth: int = DEFAULT_MAX_DEPTH):
        self.lexer = lexer
        self.max_depth = max_depth
        self.last: Node | None = None
        self.group_depth = 0
        self.token = self.lexer.next_token()
        self.peek_token = self.lexer.next_token()

    def parse(self) -> Node:
        """Parse the whole input and return the resulting tree."""
        try:
            while self.token.type != TokenType.EOF:
                self.last = self._parse_value()
                self._advance()
        except ParseError as e:
            logger.debug("Parse failed for %r: %s", self.lexer.source, e)
            raise

        if self.last is None:
            raise EmptyResultError("Could not parse input: result is empty", self.token)

        logger.debug("Parsed %r (height %d)", self.lexer.source, self.last.height)
        return self.last

    # -------------------------------------------------------------------------
    # Helper methods
    # -------------------------------------------------------------------------

    def _advance(self) -> None:
        """Move to the next token."""
        self.token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def _is_group_start(self) -> bool:
        return self.token.type in GROUP_DELIMITERS

    # -------------------------------------------------------------------------
    # Grammar
    # -------------------------------------------------------------------------

    def _parse_number(self) -> Leaf:
        """Wrap the current NUMBER token in a leaf."""
        if self.token.type == TokenType.NUMBER:
            return Leaf(self.token.value)
        if self.token.type == TokenType.ILLEGAL:
            raise IllegalTokenError(self.token)
        raise MissingOperandError(self.token)

    def _parse_expression(self, last: Node | None) -> Node:
        """Parse ``last <operation> <operand>``, or a single number if there is no last."""
        if last is None:
            return self._parse_number()

        operation = OPERATIONS.get(self.token.type)
        if operation is None:
            if self.token.type == TokenType.ILLEGAL:
                raise IllegalTokenError(self.token)
            raise UnexpectedOperatorError(self.token)

        self._advance()

        if self._is_group_start():
            # 16 + ( ... )
            return Compound(last, operation, self._parse_group())

        next_num = self._parse_number()
        next_operation = OPERATIONS.get(self.peek_token.type)

        if next_operation is not None and next_operation.priority > operation.priority:
            # 17 + 16 * 21 -> 17 + (16 * 21)
            self._advance()
            return Compound(last, operation, self._parse_expression(next_num))

        # 16 + 21, or an operator of the same or lower priority follows
        return Compound(last, operation, next_num)

    def _parse_group(self) -> Node:
        """Parse a delimited group; the current token is left on the closing symbol."""
        start = self.token
        delimiter = GROUP_DELIMITERS.get(start.type)
        if delimiter is None:
            raise UnknownGroupDelimiterError(start)

        self.group_depth += 1
        if self.group_depth > self.max_depth:
            raise NestingTooDeepError(start, self.max_depth)

        self._advance()

        group: Node | None = None
        while self.token.type != delimiter:
            if self.token.type == TokenType.EOF:
                raise UnterminatedGroupError(self.token, delimiter)
            if group is None and self._is_group_start():
                # [ ( 1 + 2 ) * 3 ]
                group = self._parse_group()
            else:
                group = self._parse_expression(group)
            self._advance()

        self.group_depth -= 1

        if group is None:
            raise EmptyResultError("Could not parse group: result is empty", start)

        return group

    def _parse_value(self) -> Node:
        """Parse the next value at top level."""
        if self._is_group_start():
            return self._parse_group()
        return self._parse_expression(self.last)


def parse(source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> Node:
    """Convenience function to parse an expression string.

    Args:
        source: The expression string
        max_depth: Maximum group nesting. Flat chains such as ``1 + 1 + ... + 1``
            are not limited

    Returns:
        The root of the expression tree

    Raises:
        ParseError: On any malformed input
    """
    return Parser(Lexer(source), max_depth=max_depth).parse()
