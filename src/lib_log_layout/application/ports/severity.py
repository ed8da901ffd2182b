"""Severity lookup port used for the ``severity`` and ``sev`` fields."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_layout.domain.levels import Severity


@runtime_checkable
class SeverityTablePort(Protocol):
    """Translate a severity into its display name and one-character acronym."""

    def name(self, severity: Severity) -> str:
        """Return the lowercase name of ``severity``."""

    def acronym(self, severity: Severity) -> str:
        """Return the single-character shorthand of ``severity``."""


class DefaultSeverityTable(SeverityTablePort):
    """Table backed by the :class:`Severity` enum's own metadata.

    Examples
    --------
    >>> table = DefaultSeverityTable()
    >>> table.name(Severity.NOTICE), table.acronym(Severity.NOTICE)
    ('notice', 'N')
    """

    def name(self, severity: Severity) -> str:
        return severity.severity

    def acronym(self, severity: Severity) -> str:
        return severity.acronym


__all__ = ["DefaultSeverityTable", "SeverityTablePort"]
