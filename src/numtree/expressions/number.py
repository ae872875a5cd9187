"""Expression tree ("Number") and operation table.

A tree is made of two node types:
- Leaf: a literal numeric value, priority -1
- Compound: an operation applied to a left and a right subtree, with the
  priority of its operation

Nodes are frozen dataclasses; nothing mutates a tree after construction, so a
tree can be evaluated, rendered and queried any number of times and shared
between threads. Evaluation and rendering live in the evaluator module.
"""

import math
from dataclasses import dataclass, field
from typing import Callable, Union

from numtree.expressions.lexer import TokenType

LEAF_PRIORITY = -1


# -----------------------------------------------------------------------------
# Operations
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class Operation:
    """A binary arithmetic operation.

    Attributes:
        symbol: Infix symbol used when rendering ("+", "-", "*", "/")
        apply: Numeric function of the two operands
        priority: Binding strength, higher binds tighter (0 additive, 1 multiplicative)
    """

    symbol: str
    apply: Callable[[float, float], float] = field(compare=False)
    priority: int

    def render(self, left: str, right: str) -> str:
        """Join two rendered operands with this operation's symbol."""
        return f"{left} {self.symbol} {right}"

    def __repr__(self) -> str:
        return f"Operation({self.symbol!r}, priority={self.priority})"


def _divide(a: float, b: float) -> float:
    """Division with IEEE-754 results instead of ZeroDivisionError."""
    a, b = float(a), float(b)
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


# Operands are always computed as floats
sum_op = Operation("+", lambda a, b: float(a) + float(b), 0)
sub_op = Operation("-", lambda a, b: float(a) - float(b), 0)
mul_op = Operation("*", lambda a, b: float(a) * float(b), 1)
div_op = Operation("/", _divide, 1)

# Operator token -> operation
OPERATIONS: dict[TokenType, Operation] = {
    TokenType.SUM: sum_op,
    TokenType.SUB: sub_op,
    TokenType.MUL: mul_op,
    TokenType.DIV: div_op,
}

# Rendering symbol -> operation
OPERATIONS_BY_SYMBOL: dict[str, Operation] = {op.symbol: op for op in OPERATIONS.values()}


# -----------------------------------------------------------------------------
# Tree nodes
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class Leaf:
    """A literal number, stored as a float."""

    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))

    @property
    def priority(self) -> int:
        return LEAF_PRIORITY

    @property
    def height(self) -> int:
        return 0


@dataclass(frozen=True)
class Compound:
    """An operation applied to two owned subtrees.

    ``height`` is the number of compound levels down to the deepest leaf,
    computed once at construction.
    """

    left: "Node"
    operation: Operation
    right: "Node"
    height: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.left is None or self.right is None:
            raise ValueError("Compound requires both a left and a right operand")
        object.__setattr__(self, "height", 1 + max(self.left.height, self.right.height))

    @property
    def priority(self) -> int:
        return self.operation.priority


Node = Union[Leaf, Compound]


def is_compound(node: Node | None) -> bool:
    """Return True for nodes that carry an operation."""
    return node is not None and node.priority != LEAF_PRIORITY


# -----------------------------------------------------------------------------
# Constructors
# -----------------------------------------------------------------------------


def identity(value: int | float) -> Leaf:
    """Build a leaf holding value."""
    return Leaf(value)


def compound(left: Node, operation: Operation, right: Node) -> Compound:
    """Build a compound node: ``left <operation> right``."""
    return Compound(left, operation, right)


def compound_from_values(a: int | float, operation: Operation, b: int | float) -> Compound:
    """Shortcut for ``compound(identity(a), operation, identity(b))``."""
    return Compound(Leaf(a), operation, Leaf(b))
