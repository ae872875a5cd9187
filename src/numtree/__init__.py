"""numtree: parse, evaluate and render arithmetic expressions step by step."""

__version__ = "0.1.0"

from numtree.expressions import (  # noqa: E402
    ParseError,
    evaluate,
    get_depth,
    get_level,
    parse,
    render,
    steps,
)

__all__ = [
    "ParseError",
    "evaluate",
    "get_depth",
    "get_level",
    "parse",
    "render",
    "steps",
]
