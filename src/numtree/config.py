"""Runtime configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from numtree.expressions.parser import DEFAULT_MAX_DEPTH


def _int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")
    return value


@dataclass
class Settings:
    """numtree settings.

    Attributes:
        max_depth: Deepest group nesting the parser accepts
        log_level: Name of the root logging level (DEBUG, INFO, WARNING, ...)
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> Settings:
        """Create settings from environment variables.

        - NUMTREE_MAX_DEPTH: parser nesting limit (default 128)
        - NUMTREE_LOG_LEVEL: logging level name (default WARNING)
        """
        return cls(
            max_depth=_int_from_env("NUMTREE_MAX_DEPTH", DEFAULT_MAX_DEPTH),
            log_level=os.environ.get("NUMTREE_LOG_LEVEL", "WARNING").upper(),
        )
