"""Bridge rendering :mod:`logging` records through a directive layout.

Purpose
-------
Let applications that log through the standard library adopt layouts without
changing their call sites: install :class:`DirectiveFormatter` on any handler.

Contents
--------
* :class:`DirectiveFormatter` – ``logging.Formatter`` subclass.
* :func:`to_layout_record` – conversion from ``logging.LogRecord``.

System Role
-----------
Outer adapter. It builds the record value object the formatter expects and
leaves error containment to ``logging.Handler.handleError``.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Sequence

from lib_log_layout.application.use_cases.format_record import LayoutFormatter
from lib_log_layout.domain.colors import COLOR_RESET, ColorValue, normalise_color_table
from lib_log_layout.domain.levels import Severity
from lib_log_layout.domain.record import LogRecord, ProcessRef

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_STANDARD_ATTRIBUTES = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))) | {"message", "asctime", "taskName"}


def to_layout_record(record: logging.LogRecord) -> LogRecord:
    """Convert a stdlib record into a :class:`LogRecord`.

    Metadata holds ``pid`` (a :class:`ProcessRef`), ``module``, ``function``,
    ``line``, ``logger``, ``thread`` and every ``extra`` attribute.

    Examples
    --------
    >>> stdlib_record = logging.LogRecord("app.db", logging.WARNING, "/srv/app/db.py", 42, "slow query %s", ("q1",), None)
    >>> converted = to_layout_record(stdlib_record)
    >>> converted.message, converted.severity, converted.metadata["line"]
    ('slow query q1', <Severity.WARNING: 30>, 42)
    """

    metadata: dict[str, Any] = {
        "module": record.module,
        "function": record.funcName,
        "line": record.lineno,
        "logger": record.name,
        "thread": record.threadName,
    }
    if record.process is not None:
        metadata["pid"] = ProcessRef(pid=record.process, thread=record.thread or 0)
    metadata.update({key: value for key, value in vars(record).items() if key not in _STANDARD_ATTRIBUTES})
    return LogRecord.create(
        record.getMessage(),
        Severity.from_python_level(record.levelno),
        metadata,
        when=datetime.fromtimestamp(record.created),
    )


class DirectiveFormatter(logging.Formatter):
    """``logging.Formatter`` that renders records through a directive layout.

    Parameters
    ----------
    layout:
        Directive sequence; ``None`` selects the default layout.
    colors:
        Colour table keyed by :class:`Severity` or severity name. When present a
        reset sequence is appended to every line.
    formatter:
        Configured :class:`LayoutFormatter`; defaults to a fresh one.

    The trailing end-of-line produced by the layout is removed because handlers
    append their own terminator.

    Examples
    --------
    >>> from lib_log_layout.domain.directives import Field
    >>> formatter = DirectiveFormatter(["[", Field.SEVERITY, "] ", Field.MESSAGE])
    >>> formatter.format(logging.LogRecord("app", logging.INFO, __file__, 1, "hi", (), None))
    '[info] hi'
    """

    def __init__(
        self,
        layout: Sequence[Any] | None = None,
        *,
        colors: Mapping[Severity | str, ColorValue] | None = None,
        formatter: LayoutFormatter | None = None,
    ) -> None:
        super().__init__()
        self._layout = layout
        self._colors = normalise_color_table(colors)
        self._formatter = formatter or LayoutFormatter()

    def format(self, record: logging.LogRecord) -> str:
        line = self._formatter.text(to_layout_record(record), self._layout, self._colors)
        line = line.rstrip("\r\n")
        if self._colors:
            line += COLOR_RESET
        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            line = f"{line}\n{record.exc_text}"
        if record.stack_info:
            line = f"{line}\n{self.formatStack(record.stack_info)}"
        return line


__all__ = ["DirectiveFormatter", "to_layout_record"]
