from __future__ import annotations

from typing import Any, Callable, Mapping

import pytest

from lib_log_layout.domain.levels import Severity
from lib_log_layout.domain.record import LogRecord

RecordFactory = Callable[..., LogRecord]


@pytest.fixture
def stamp() -> tuple[str, str]:
    return ("2025-09-30", "12:00:00.000")


@pytest.fixture
def make_record(stamp: tuple[str, str]) -> RecordFactory:
    """Return a factory building records with a fixed timestamp."""

    def _make(
        metadata: Mapping[str, Any] | None = None,
        *,
        message: str | bytes = "Message",
        severity: Severity = Severity.ERROR,
    ) -> LogRecord:
        return LogRecord(message=message, timestamp=stamp, severity=severity, metadata=metadata or {})

    return _make
