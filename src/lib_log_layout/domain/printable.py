"""Coercion of arbitrary metadata values into printable fragments.

A fragment is either text or bytes. Text and bytes pass through untouched so a
byte-oriented sink receives exactly what the caller stored; every other value
is turned into text through a small closed set of rules.
"""

from __future__ import annotations

import threading
from enum import Enum
from multiprocessing.process import BaseProcess
from typing import Any, Union

from rich.pretty import pretty_repr

from .record import ProcessRef

Fragment = Union[str, bytes]

# Wide enough that pretty_repr never wraps a value across lines.
_SINGLE_LINE_WIDTH = 1_000_000


def printable(value: Any) -> Fragment:
    """Return ``value`` as a printable fragment.

    Examples
    --------
    >>> printable("text")
    'text'
    >>> printable(b"raw")
    b'raw'
    >>> from lib_log_layout.domain.levels import Severity
    >>> printable(Severity.ERROR)
    'ERROR'
    >>> printable(ProcessRef(pid=1, thread=2))
    '<1.2>'
    >>> printable({"retries": 3, "hosts": ("a", "b")})
    "{'retries': 3, 'hosts': ('a', 'b')}"
    """

    if isinstance(value, Enum):
        return value.name
    if isinstance(value, (str, bytes)):
        return value
    if isinstance(value, bytearray):
        return bytes(value)
    if isinstance(value, ProcessRef):
        return str(value)
    if isinstance(value, threading.Thread):
        return f"<{value.name}.{value.ident}>"
    if isinstance(value, BaseProcess):
        return f"<{value.name}.{value.pid}>"
    return pretty_repr(value, max_width=_SINGLE_LINE_WIDTH)


def as_text(fragment: Fragment, encoding: str = "utf-8") -> str:
    """Decode byte fragments, replacing undecodable bytes."""

    if isinstance(fragment, bytes):
        return fragment.decode(encoding, errors="replace")
    return fragment


def as_bytes(fragment: Fragment, encoding: str = "utf-8") -> bytes:
    """Encode text fragments; byte fragments are returned unchanged."""

    if isinstance(fragment, str):
        return fragment.encode(encoding, errors="replace")
    return fragment


__all__ = ["Fragment", "as_bytes", "as_text", "printable"]
