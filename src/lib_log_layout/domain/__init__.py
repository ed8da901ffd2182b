"""Domain entities and value objects used by the layout formatter."""

from __future__ import annotations

from .colors import COLOR_RESET, CONSOLE_STYLE_THEMES, ColorTable, color_for, color_table_from_styles, color_table_from_theme
from .directives import (
    DEFAULT_LAYOUT,
    UNDEFINED,
    Directive,
    EndOfLine,
    Field,
    MetadataDump,
    MetadataRef,
    MetadataRefTernary,
    MetadataRefWithDefault,
    Verbatim,
    default_layout,
    directives_from_data,
)
from .errors import LayoutDepthError, LayoutError
from .levels import Severity
from .record import LogRecord, ProcessRef, format_timestamp

__all__ = [
    "COLOR_RESET",
    "CONSOLE_STYLE_THEMES",
    "ColorTable",
    "DEFAULT_LAYOUT",
    "Directive",
    "EndOfLine",
    "Field",
    "LayoutDepthError",
    "LayoutError",
    "LogRecord",
    "MetadataDump",
    "MetadataRef",
    "MetadataRefTernary",
    "MetadataRefWithDefault",
    "ProcessRef",
    "Severity",
    "UNDEFINED",
    "Verbatim",
    "color_for",
    "color_table_from_styles",
    "color_table_from_theme",
    "default_layout",
    "directives_from_data",
    "format_timestamp",
]
