"""Severity abstraction covering the eight syslog-style levels.

Purpose
-------
Offer a domain-specific representation of log severities that extends the
stdlib levels with ``notice``, ``alert`` and ``emergency`` and carries the
one-character acronyms used by compact layouts.

Contents
--------
* :class:`Severity` enum with conversion helpers and presentation metadata.
* ``_ACRONYM_TABLE`` constant mapping severities to their shorthand.

System Role
-----------
Shared by the record value object, the colour tables, and the default
severity lookup table consumed by the directive evaluator.
"""

from __future__ import annotations

import logging
from enum import Enum


class Severity(Enum):
    """Ordered severities a log record can carry."""

    DEBUG = 10
    INFO = 20
    NOTICE = 25
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    ALERT = 60
    EMERGENCY = 70

    @property
    def severity(self) -> str:
        """Return the lowercase severity name used in rendered lines.

        Examples
        --------
        >>> Severity.ERROR.severity
        'error'
        """

        return self.name.lower()

    @property
    def acronym(self) -> str:
        """Return the single-character shorthand for compact layouts.

        Examples
        --------
        >>> Severity.EMERGENCY.acronym
        'M'
        """

        return _ACRONYM_TABLE[self]

    def to_python_level(self) -> int:
        """Return the :mod:`logging` level number matching this severity."""

        return getattr(logging, self.name, self.value)

    @classmethod
    def from_name(cls, name: str) -> "Severity":
        normalized = name.strip().upper()
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown severity: {name!r}") from exc

    @classmethod
    def from_numeric(cls, level: int) -> "Severity":
        """Return the :class:`Severity` whose value is exactly ``level``."""
        try:
            return cls(level)
        except ValueError as exc:
            raise ValueError(f"Unsupported severity numeric: {level}") from exc

    @classmethod
    def from_python_level(cls, level: int) -> "Severity":
        """Translate any stdlib logging level into the nearest severity at or below it.

        Levels below ``DEBUG`` map to ``DEBUG``.

        Examples
        --------
        >>> Severity.from_python_level(logging.WARNING) is Severity.WARNING
        True
        >>> Severity.from_python_level(35) is Severity.WARNING
        True
        >>> Severity.from_python_level(5) is Severity.DEBUG
        True
        """
        for member in sorted(cls, key=lambda item: item.value, reverse=True):
            if member.value <= level:
                return member
        return cls.DEBUG


_ACRONYM_TABLE = {
    Severity.DEBUG: "D",
    Severity.INFO: "I",
    Severity.NOTICE: "N",
    Severity.WARNING: "W",
    Severity.ERROR: "E",
    Severity.CRITICAL: "C",
    Severity.ALERT: "A",
    Severity.EMERGENCY: "M",
}
# Shorthand rendered by the severity acronym field.


__all__ = ["Severity"]
