"""Arithmetic expression front end.

This module provides:
- Lexer: Tokenizes expression strings
- Parser: Produces an expression tree from tokens
- Leaf / Compound: The immutable expression tree and its operation table
- Evaluator / Renderer: Compute the value or canonical infix form of a tree
- Tree utilities: depth, levels, stepwise reduction, serialization
"""

from numtree.expressions.evaluator import (
    EvaluationError,
    Evaluator,
    Renderer,
    evaluate,
    format_number,
    render,
)
from numtree.expressions.lexer import Lexer, Token, TokenType, is_number
from numtree.expressions.number import (
    OPERATIONS,
    Compound,
    Leaf,
    Node,
    Operation,
    compound,
    compound_from_values,
    div_op,
    identity,
    mul_op,
    sub_op,
    sum_op,
)
from numtree.expressions.parser import (
    GROUP_DELIMITERS,
    EmptyResultError,
    IllegalTokenError,
    MissingOperandError,
    NestingTooDeepError,
    ParseError,
    Parser,
    UnexpectedOperatorError,
    UnknownGroupDelimiterError,
    UnterminatedGroupError,
    parse,
)
from numtree.expressions.tree import (
    from_dict,
    get_depth,
    get_level,
    resolve,
    steps,
    to_dict,
)

__all__ = [
    # Evaluator
    "EvaluationError",
    "Evaluator",
    "Renderer",
    "evaluate",
    "format_number",
    "render",
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "is_number",
    # Tree
    "OPERATIONS",
    "Compound",
    "Leaf",
    "Node",
    "Operation",
    "compound",
    "compound_from_values",
    "div_op",
    "identity",
    "mul_op",
    "sub_op",
    "sum_op",
    # Parser
    "GROUP_DELIMITERS",
    "EmptyResultError",
    "IllegalTokenError",
    "MissingOperandError",
    "NestingTooDeepError",
    "ParseError",
    "Parser",
    "UnexpectedOperatorError",
    "UnknownGroupDelimiterError",
    "UnterminatedGroupError",
    "parse",
    # Tree utilities
    "from_dict",
    "get_depth",
    "get_level",
    "resolve",
    "steps",
    "to_dict",
]
