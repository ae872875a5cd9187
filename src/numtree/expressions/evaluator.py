"""Evaluation and rendering of expression trees.

Both walk the tree with the same dispatch: a node of type ``Leaf`` is handled
by ``_eval_leaf``/``_render_leaf``, a ``Compound`` by
``_eval_compound``/``_render_compound``. Compound handlers receive the
results already computed for their two operands.

The walk uses an explicit stack instead of recursion, so a long flat chain
such as ``1 + 1 + ... + 1`` (one tree level per operator) is handled no
matter how many terms it has.
"""

import math
from decimal import Decimal
from typing import Any

from numtree.expressions.number import Compound, Leaf, Node, is_compound


class EvaluationError(Exception):
    """Error during tree evaluation or rendering."""
    pass


def format_number(value: int | float) -> str:
    """Decimal string for a number, in a form the lexer reads back.

    Integral floats lose their ``.0`` (``12.0`` -> ``"12"``), other values are
    written positionally (``1e-07`` -> ``"0.0000001"``). Non-finite values
    are spelled ``Infinity``, ``-Infinity`` and ``NaN``.
    """
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        # repr is the shortest string that round-trips; Decimal drops its exponent
        return format(Decimal(repr(value)), "f")
    return str(value)


class _TreeVisitor:
    """Post-order walk with dispatch on node type by method name prefix.

    ``self.level`` holds the level of the node being handled (root is 0).
    Subclasses can stop the walk at a compound by returning False from
    ``_expands``; such a node is passed to ``_collapse`` instead.
    """

    prefix = ""

    def _method(self, node: Any):
        method_name = f"_{self.prefix}_{type(node).__name__.lower()}"
        method = getattr(self, method_name, None)

        if method is None:
            raise EvaluationError(f"Unknown node type: {type(node).__name__}")

        return method

    def _expands(self, node: Node, level: int) -> bool:
        return isinstance(node, Compound)

    def _collapse(self, node: Compound) -> Any:
        raise NotImplementedError

    def visit(self, node: Node) -> Any:
        results: list[Any] = []
        stack: list[tuple[Node, int, bool]] = [(node, 0, False)]

        while stack:
            current, level, ready = stack.pop()
            self.level = level

            if ready:
                right = results.pop()
                left = results.pop()
                results.append(self._method(current)(current, left, right))
            elif not isinstance(current, Compound):
                results.append(self._method(current)(current))
            elif self._expands(current, level):
                stack.append((current, level, True))
                stack.append((current.right, level + 1, False))
                stack.append((current.left, level + 1, False))
            else:
                results.append(self._collapse(current))

        return results.pop()


class Evaluator(_TreeVisitor):
    """Computes the numeric value of a tree.

    Usage:
        value = Evaluator().evaluate(parse("10 / (7 - 2)"))  # 2.0
    """

    prefix = "eval"

    def evaluate(self, node: Node) -> float:
        """Evaluate a node and return its value."""
        return self.visit(node)

    def _eval_leaf(self, node: Leaf) -> float:
        return node.value

    def _eval_compound(self, node: Compound, left: float, right: float) -> float:
        return node.operation.apply(left, right)


class Renderer(_TreeVisitor):
    """Produces the canonical infix string of a tree.

    An operand is wrapped in parentheses only when it is a compound whose
    priority is strictly lower than its parent's. Equal priorities are left
    bare, so ``(1 - 2) - 3`` renders as ``1 - 2 - 3``.
    """

    prefix = "render"

    def render(self, node: Node) -> str:
        """Render a node as an infix expression."""
        return self.visit(node)

    def _render_leaf(self, node: Leaf) -> str:
        return format_number(node.value)

    def _render_compound(self, node: Compound, left: str, right: str) -> str:
        return node.operation.render(
            self._render_operand(node.left, node, left),
            self._render_operand(node.right, node, right),
        )

    def _render_operand(self, child: Node, parent: Compound, text: str) -> str:
        if is_compound(child) and child.priority < parent.priority:
            return f"({text})"
        return text


# -----------------------------------------------------------------------------
# Convenience functions
# -----------------------------------------------------------------------------


def evaluate(node: Node) -> float:
    """Evaluate a tree.

    Follows native float semantics: ``x / 0`` is a signed infinity, ``0 / 0``
    is NaN, any NaN operand makes the result NaN and results too large for a
    float become ``inf``.

    Example:
        evaluate(parse("12 * 199 - 5"))  # 2383.0
    """
    return Evaluator().evaluate(node)


def render(node: Node) -> str:
    """Render a tree as a minimally parenthesized infix string.

    Example:
        render(compound(compound_from_values(1, sum_op, 2), mul_op, identity(3)))
        # "(1 + 2) * 3"
    """
    return Renderer().render(node)
