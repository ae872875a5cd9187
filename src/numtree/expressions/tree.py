"""Queries over expression trees.

Levels count edges from the root (the root is level 0). These helpers back
step-by-step presentation of a computation: ``steps()`` shows a tree being
reduced from its deepest operations up to the final value.

Like evaluation and rendering, every walk here keeps its own stack, so
trees of any height are accepted.
"""

from typing import Any

from numtree.expressions.evaluator import Renderer, _TreeVisitor, evaluate, format_number
from numtree.expressions.number import (
    OPERATIONS_BY_SYMBOL,
    Compound,
    Leaf,
    Node,
)


def get_depth(node: Node | None, level: int = -1) -> int:
    """Return the level of the deepest leaf below node.

    A lone leaf has depth 0, ``1 + 2`` has depth 1. ``None`` returns level
    unchanged, so ``get_depth(None)`` is -1.
    """
    if node is None:
        return level

    deepest = level
    stack = [(node, level + 1)]
    while stack:
        current, current_level = stack.pop()
        if isinstance(current, Compound):
            stack.append((current.left, current_level + 1))
            stack.append((current.right, current_level + 1))
        else:
            deepest = max(deepest, current_level)
    return deepest


def get_level(node: Node | None, level: int) -> list[Node]:
    """Return the nodes exactly level edges below node, left to right.

    Returns an empty list when node is None or no branch reaches that level.
    """
    if node is None:
        return []
    if level <= 0:
        return [node]

    found = []
    stack = [(node, 0)]
    while stack:
        current, current_level = stack.pop()
        if current_level == level:
            found.append(current)
        elif isinstance(current, Compound):
            stack.append((current.right, current_level + 1))
            stack.append((current.left, current_level + 1))
    return found


# -----------------------------------------------------------------------------
# Stepwise reduction
# -----------------------------------------------------------------------------


class ResolvedRenderer(Renderer):
    """Renderer that shows every compound at or below a level as its value.

    With ``resolved_level = get_depth(tree)`` nothing is resolved and the
    output equals ``render(tree)``; with 0 the whole tree is one number.
    Operands that remain compound are parenthesized exactly as render() does,
    resolved operands are plain numbers.
    """

    def __init__(self, resolved_level: int):
        self.resolved_level = resolved_level
        self.level = 0

    def _expands(self, node: Node, level: int) -> bool:
        return isinstance(node, Compound) and level < self.resolved_level

    def _collapse(self, node: Compound) -> str:
        return format_number(evaluate(node))

    def _render_operand(self, child: Node, parent: Compound, text: str) -> str:
        # Operands one level down from here have been collapsed to a number
        if self.level + 1 >= self.resolved_level:
            return text
        return super()._render_operand(child, parent, text)


def resolve(node: Node, resolved_level: int) -> str:
    """Render node with every compound at level >= resolved_level evaluated.

    Example:
        tree = parse("10 / (7 - 2)")
        resolve(tree, 2)  # "10 / (7 - 2)"
        resolve(tree, 1)  # "10 / 5"
        resolve(tree, 0)  # "2"
    """
    return ResolvedRenderer(resolved_level).render(node)


def steps(node: Node) -> list[str]:
    """Return every stage of reducing node, from the full expression to its value."""
    return [resolve(node, level) for level in range(get_depth(node), -1, -1)]


# -----------------------------------------------------------------------------
# Serialization
# -----------------------------------------------------------------------------


class _DictBuilder(_TreeVisitor):
    prefix = "dict"

    def _dict_leaf(self, node: Leaf) -> dict[str, Any]:
        return {"value": node.value}

    def _dict_compound(self, node: Compound, left: dict, right: dict) -> dict[str, Any]:
        return {"op": node.operation.symbol, "left": left, "right": right}


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a tree to plain data.

    Leaves become ``{"value": 12.0}``, compounds
    ``{"op": "+", "left": {...}, "right": {...}}``.
    """
    return _DictBuilder().visit(node)


def _check_node(data: Any) -> None:
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping, got {type(data).__name__}")

    if "value" in data:
        value = data["value"]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"Leaf value must be a number, got {value!r}")
        return

    if "op" not in data:
        raise ValueError("Node must have either 'value' or 'op'")

    if data["op"] not in OPERATIONS_BY_SYMBOL:
        raise ValueError(f"Unknown operation: {data['op']!r}")

    if "left" not in data or "right" not in data:
        raise ValueError(f"Operation {data['op']!r} needs both 'left' and 'right'")


def from_dict(data: dict[str, Any]) -> Node:
    """Rebuild a tree from to_dict() output.

    Raises:
        ValueError: If data is not a leaf or compound mapping, or names an
            unknown operation
    """
    built: list[Node] = []
    stack: list[tuple[Any, bool]] = [(data, False)]

    while stack:
        item, ready = stack.pop()
        if ready:
            right = built.pop()
            left = built.pop()
            built.append(Compound(left, OPERATIONS_BY_SYMBOL[item["op"]], right))
            continue

        _check_node(item)
        if "value" in item:
            built.append(Leaf(item["value"]))
        else:
            stack.append((item, True))
            stack.append((item["right"], False))
            stack.append((item["left"], False))

    return built.pop()
