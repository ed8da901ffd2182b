from __future__ import annotations

import logging

import pytest

from lib_log_layout.domain.levels import Severity


@pytest.mark.parametrize(
    "name, expected",
    [
        ("debug", Severity.DEBUG),
        ("INFO", Severity.INFO),
        ("Notice", Severity.NOTICE),
        (" warning ", Severity.WARNING),
        ("emergency", Severity.EMERGENCY),
    ],
)
def test_from_name_accepts_case_insensitive_matches(name: str, expected: Severity) -> None:
    assert Severity.from_name(name) is expected


def test_from_name_rejects_unknown_severity() -> None:
    with pytest.raises(ValueError, match="Unknown severity"):
        Severity.from_name("verbose")


@pytest.mark.parametrize("number", [-5, 5, 15, 35, 45, 55, 80])
def test_from_numeric_rejects_non_standard_levels(number: int) -> None:
    with pytest.raises(ValueError, match="Unsupported severity numeric"):
        Severity.from_numeric(number)


@pytest.mark.parametrize(
    "level, expected",
    [
        (logging.NOTSET, Severity.DEBUG),
        (logging.DEBUG, Severity.DEBUG),
        (logging.INFO, Severity.INFO),
        (25, Severity.NOTICE),
        (logging.WARNING, Severity.WARNING),
        (logging.ERROR, Severity.ERROR),
        (logging.CRITICAL, Severity.CRITICAL),
        (65, Severity.ALERT),
        (100, Severity.EMERGENCY),
    ],
)
def test_from_python_level_picks_nearest_severity_at_or_below(level: int, expected: Severity) -> None:
    assert Severity.from_python_level(level) is expected


@pytest.mark.parametrize(
    "severity, expected",
    [
        (Severity.DEBUG, logging.DEBUG),
        (Severity.WARNING, logging.WARNING),
        (Severity.NOTICE, 25),
        (Severity.EMERGENCY, 70),
    ],
)
def test_to_python_level(severity: Severity, expected: int) -> None:
    assert severity.to_python_level() == expected


@pytest.mark.parametrize(
    "severity, acronym",
    [
        (Severity.DEBUG, "D"),
        (Severity.INFO, "I"),
        (Severity.NOTICE, "N"),
        (Severity.WARNING, "W"),
        (Severity.ERROR, "E"),
        (Severity.CRITICAL, "C"),
        (Severity.ALERT, "A"),
        (Severity.EMERGENCY, "M"),
    ],
)
def test_acronym_table(severity: Severity, acronym: str) -> None:
    assert severity.acronym == acronym


@pytest.mark.parametrize("severity", list(Severity))
def test_severity_matches_lowercase_name(severity: Severity) -> None:
    assert severity.severity == severity.name.lower()


def test_severities_are_ordered() -> None:
    values = [severity.value for severity in Severity]
    assert values == sorted(values)
