"""Exceptions raised for unusable layout configuration."""

from __future__ import annotations


class LayoutError(ValueError):
    """Raised when a layout cannot be loaded or evaluated."""


class LayoutDepthError(LayoutError):
    """Raised when directive nesting exceeds the configured depth bound.

    Nested directive sequences are static configuration, so hitting the bound
    almost always means a sequence that contains itself.
    """

    def __init__(self, max_depth: int) -> None:
        super().__init__(f"directive nesting exceeds max_depth={max_depth}; check the layout for self-referencing sequences")
        self.max_depth = max_depth


__all__ = ["LayoutDepthError", "LayoutError"]
