"""Adapters connecting the formatter to host logging systems."""

from __future__ import annotations

from .stdlib import DirectiveFormatter, to_layout_record

__all__ = ["DirectiveFormatter", "to_layout_record"]
