"""Protocols describing the collaborators the formatter depends on."""

from __future__ import annotations

from .record import RecordPort
from .severity import DefaultSeverityTable, SeverityTablePort

__all__ = ["DefaultSeverityTable", "RecordPort", "SeverityTablePort"]
