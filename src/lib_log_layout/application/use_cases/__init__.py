"""Application use cases."""

from __future__ import annotations

from .format_record import LayoutFormatter, create_format_record, format_record, format_record_text, resolve_layout

__all__ = ["LayoutFormatter", "create_format_record", "format_record", "format_record_text", "resolve_layout"]
