"""Record port describing what the formatter reads from a log record.

Purpose
-------
Let host logging systems hand their own record objects to the formatter as long
as they expose the four accessors below, without converting them into
:class:`lib_log_layout.domain.record.LogRecord` first.

Contents
--------
* :class:`RecordPort` – runtime-checkable protocol over message, timestamp,
  severity, and metadata.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

from lib_log_layout.domain.levels import Severity


@runtime_checkable
class RecordPort(Protocol):
    """Read-only view of a log record.

    Examples
    --------
    >>> from lib_log_layout.domain.record import LogRecord
    >>> isinstance(LogRecord("msg", ("2025-09-30", "12:00:00.000"), Severity.INFO), RecordPort)
    True
    """

    @property
    def message(self) -> str | bytes:
        """Rendered message body."""

    @property
    def timestamp(self) -> tuple[str, str]:
        """``(date, time)`` pair of pre-formatted text."""

    @property
    def severity(self) -> Severity:
        """Severity of the record."""

    @property
    def metadata(self) -> Mapping[str, Any]:
        """Free-form properties attached to the record."""


__all__ = ["RecordPort"]
