"""Record value object consumed by the layout evaluator.

Purpose
-------
Provide an immutable representation of an already-built log record: message
body, pre-formatted timestamp pair, severity, and free-form metadata.

Contents
--------
* :class:`LogRecord` dataclass with a ``create`` helper.
* :class:`ProcessRef` opaque process/thread identifier with a canonical text form.
* :func:`format_timestamp` splitting a ``datetime`` into date and time text.

System Role
-----------
Sits in the domain layer; callers (the stdlib bridge, the CLI, host
applications) build records here and hand them to the formatter untouched.
"""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass, field, replace
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping

from .levels import Severity


def format_timestamp(moment: datetime) -> tuple[str, str]:
    """Return ``(date, time)`` text with millisecond precision.

    Examples
    --------
    >>> format_timestamp(datetime(2025, 9, 30, 7, 5, 3, 42000))
    ('2025-09-30', '07:05:03.042')
    """

    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}",
        f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}.{moment.microsecond // 1000:03d}",
    )


@dataclass(slots=True, frozen=True)
class ProcessRef:
    """Identity of the process and thread that produced a record.

    Examples
    --------
    >>> str(ProcessRef(pid=4242, thread=7))
    '<4242.7>'
    """

    pid: int
    thread: int

    @classmethod
    def current(cls) -> "ProcessRef":
        """Capture the calling process and thread."""

        return cls(pid=os.getpid(), thread=threading.get_ident())

    def __str__(self) -> str:
        return f"<{self.pid}.{self.thread}>"


@dataclass(slots=True, frozen=True)
class LogRecord:
    """Immutable log record rendered by the formatter.

    Attributes
    ----------
    message:
        Rendered message body, text or bytes.
    timestamp:
        ``(date, time)`` pair of pre-formatted text.
    severity:
        :class:`Severity` of the record.
    metadata:
        Read-only copy of the caller-supplied properties (``pid``, ``module``,
        ``function``, ``line`` or any user key).
    """

    message: str | bytes
    timestamp: tuple[str, str]
    severity: Severity
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if len(self.timestamp) != 2:
            raise ValueError("timestamp must be a (date, time) pair")
        object.__setattr__(self, "timestamp", tuple(self.timestamp))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @classmethod
    def create(
        cls,
        message: str | bytes,
        severity: Severity,
        metadata: Mapping[str, Any] | None = None,
        *,
        when: datetime | None = None,
    ) -> "LogRecord":
        """Build a record stamped with ``when`` (defaults to the local time now)."""

        moment = when if when is not None else datetime.now()
        return cls(message=message, timestamp=format_timestamp(moment), severity=severity, metadata=metadata or {})

    @property
    def date(self) -> str:
        return self.timestamp[0]

    @property
    def time(self) -> str:
        return self.timestamp[1]

    def replace(self, **changes: Any) -> "LogRecord":
        """Return a copied record with ``changes`` applied."""

        return replace(self, **changes)


__all__ = ["LogRecord", "ProcessRef", "format_timestamp"]
