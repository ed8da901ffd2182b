"""Render log records through data-driven layouts.

A layout is a sequence of directives: verbatim text, fixed record fields,
metadata references with defaults or conditional branches, and metadata dumps.
:func:`format_record` evaluates a layout against a :class:`LogRecord` and an
optional severity colour table and returns the rendered bytes.

>>> record = LogRecord("Message", ("2025-09-30", "12:00:00.000"), Severity.ERROR, {"pid": "<0.7.0>"})
>>> format_record_text(record)
'2025-09-30 12:00:00.000 [error] <0.7.0> Message\\n'
"""

from __future__ import annotations

import logging

from .adapters import DirectiveFormatter
from .application.ports import DefaultSeverityTable, RecordPort, SeverityTablePort
from .application.use_cases import LayoutFormatter, create_format_record, format_record, format_record_text
from .domain import (
    COLOR_RESET,
    CONSOLE_STYLE_THEMES,
    DEFAULT_LAYOUT,
    UNDEFINED,
    EndOfLine,
    Field,
    LayoutDepthError,
    LayoutError,
    LogRecord,
    MetadataDump,
    MetadataRef,
    MetadataRefTernary,
    MetadataRefWithDefault,
    ProcessRef,
    Severity,
    Verbatim,
    color_for,
    color_table_from_styles,
    color_table_from_theme,
    default_layout,
    directives_from_data,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "COLOR_RESET",
    "CONSOLE_STYLE_THEMES",
    "DEFAULT_LAYOUT",
    "DefaultSeverityTable",
    "DirectiveFormatter",
    "EndOfLine",
    "Field",
    "LayoutDepthError",
    "LayoutError",
    "LayoutFormatter",
    "LogRecord",
    "MetadataDump",
    "MetadataRef",
    "MetadataRefTernary",
    "MetadataRefWithDefault",
    "ProcessRef",
    "RecordPort",
    "Severity",
    "SeverityTablePort",
    "UNDEFINED",
    "Verbatim",
    "color_for",
    "color_table_from_styles",
    "color_table_from_theme",
    "create_format_record",
    "default_layout",
    "directives_from_data",
    "format_record",
    "format_record_text",
]
