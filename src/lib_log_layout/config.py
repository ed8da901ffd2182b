"""Configuration helpers: ``.env`` loading, environment settings, layout files.

Purpose
-------
Translate operator-facing configuration (environment variables, an optional
``.env`` file, a JSON layout file) into a configured formatter, layout, and
colour table.

Contents
--------
* :data:`DOTENV_ENV_VAR`, :func:`should_use_dotenv`, :func:`enable_dotenv`.
* :class:`LayoutSettings` and :func:`load_settings`.
* :func:`load_layout` – JSON layout file to directive sequence.

System Role
-----------
Outer configuration edge used by the CLI and by host applications; the domain
and application layers never read the environment themselves.

Environment variables
---------------------
``LOG_LAYOUT_USE_DOTENV``
    Truthy value enables ``.env`` loading when no CLI flag decides.
``LOG_LAYOUT_UNDEFINED``
    Text emitted for absent metadata referenced without a default.
``LOG_LAYOUT_MAX_DEPTH``
    Nesting bound for defaults and branches (positive integer).
``LOG_LAYOUT_THEME``
    Name of a colour theme from :data:`CONSOLE_STYLE_THEMES`.
``LOG_LAYOUT_EOL``
    Terminator of the default layout; ``\\n``, ``\\r`` and ``\\t`` escapes are decoded.
``LOG_LAYOUT_FILE``
    Path of a JSON layout file replacing the default layout.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from dotenv import find_dotenv, load_dotenv

from lib_log_layout.application.use_cases._evaluator import DEFAULT_MAX_DEPTH
from lib_log_layout.application.use_cases.format_record import LayoutFormatter, create_format_record
from lib_log_layout.domain.colors import CONSOLE_STYLE_THEMES, color_table_from_theme
from lib_log_layout.domain.directives import UNDEFINED, default_layout, directives_from_data
from lib_log_layout.domain.errors import LayoutError
from lib_log_layout.domain.levels import Severity

logger = logging.getLogger(__name__)

DOTENV_ENV_VAR = "LOG_LAYOUT_USE_DOTENV"

_TRUTHY = {"1", "true", "yes", "on"}
_ESCAPES = (("\\r", "\r"), ("\\n", "\n"), ("\\t", "\t"))

_DOTENV_PATH: Path | None = None


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether to load ``.env``; an explicit CLI flag wins over the environment.

    Examples
    --------
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(env_value=" Yes ")
    True
    >>> should_use_dotenv()
    False
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def enable_dotenv() -> Path | None:
    """Load the nearest ``.env`` above the working directory once.

    Existing environment variables keep precedence. Returns the resolved path of
    the loaded file, or ``None`` when no file was found.
    """

    global _DOTENV_PATH
    if _DOTENV_PATH is not None:
        return _DOTENV_PATH
    found = find_dotenv(usecwd=True)
    if not found:
        logger.debug("no .env file found above %s", Path.cwd())
        return None
    path = Path(found).resolve()
    load_dotenv(path, override=False)
    logger.debug("loaded environment from %s", path)
    _DOTENV_PATH = path
    return path


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_PATH
    _DOTENV_PATH = None


def load_layout(path: Path | str) -> tuple[Any, ...]:
    """Read a JSON layout file into a directive sequence.

    Raises
    ------
    LayoutError
        When the file is not valid JSON or contains an unsupported item.
    """

    layout_path = Path(path)
    try:
        data = json.loads(layout_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise LayoutError(f"Invalid layout file {layout_path}: {exc}") from exc
    directives = directives_from_data(data)
    logger.debug("loaded %d layout directives from %s", len(directives), layout_path)
    return directives


@dataclass(slots=True, frozen=True)
class LayoutSettings:
    """Resolved formatter configuration.

    Attributes
    ----------
    sentinel:
        Text for absent metadata referenced without a default.
    max_depth:
        Nesting bound handed to the evaluator.
    theme:
        Optional colour theme name.
    eol:
        Terminator of the default layout.
    layout_path:
        Optional JSON layout file replacing the default layout.
    """

    sentinel: str = UNDEFINED
    max_depth: int = DEFAULT_MAX_DEPTH
    theme: str | None = None
    eol: str = "\n"
    layout_path: Path | None = None

    def build_formatter(self) -> LayoutFormatter:
        return create_format_record(sentinel=self.sentinel, max_depth=self.max_depth)

    def layout(self) -> tuple[Any, ...]:
        """Return the configured layout, loading the layout file when set."""

        if self.layout_path is not None:
            return load_layout(self.layout_path)
        return default_layout(self.eol)

    def colors(self) -> dict[Severity, str]:
        if not self.theme:
            return {}
        return color_table_from_theme(self.theme)


def _decode_escapes(value: str) -> str:
    for escaped, actual in _ESCAPES:
        value = value.replace(escaped, actual)
    return value


def _parse_max_depth(raw: str) -> int:
    try:
        depth = int(raw)
    except ValueError as exc:
        raise ValueError(f"LOG_LAYOUT_MAX_DEPTH must be an integer, got {raw!r}") from exc
    if depth < 1:
        raise ValueError(f"LOG_LAYOUT_MAX_DEPTH must be positive, got {depth}")
    return depth


def _parse_theme(raw: str) -> str:
    theme = raw.strip().lower()
    if theme not in CONSOLE_STYLE_THEMES:
        raise ValueError(f"LOG_LAYOUT_THEME must be one of {sorted(CONSOLE_STYLE_THEMES)}, got {raw!r}")
    return theme


def load_settings(env: Mapping[str, str] | None = None, **overrides: Any) -> LayoutSettings:
    """Resolve :class:`LayoutSettings` from ``env`` (defaults to ``os.environ``).

    Keyword ``overrides`` that are not ``None`` win over the environment.

    Examples
    --------
    >>> load_settings({"LOG_LAYOUT_EOL": "\\\\r\\\\n", "LOG_LAYOUT_THEME": "Neon"}).eol
    '\\r\\n'
    >>> load_settings({"LOG_LAYOUT_MAX_DEPTH": "0"})
    Traceback (most recent call last):
    ...
    ValueError: LOG_LAYOUT_MAX_DEPTH must be positive, got 0
    """

    source = os.environ if env is None else env
    values: dict[str, Any] = {}
    if source.get("LOG_LAYOUT_UNDEFINED") is not None:
        values["sentinel"] = source["LOG_LAYOUT_UNDEFINED"]
    if source.get("LOG_LAYOUT_MAX_DEPTH"):
        values["max_depth"] = _parse_max_depth(source["LOG_LAYOUT_MAX_DEPTH"])
    if source.get("LOG_LAYOUT_THEME"):
        values["theme"] = _parse_theme(source["LOG_LAYOUT_THEME"])
    if source.get("LOG_LAYOUT_EOL") is not None:
        values["eol"] = _decode_escapes(source["LOG_LAYOUT_EOL"])
    if source.get("LOG_LAYOUT_FILE"):
        values["layout_path"] = Path(source["LOG_LAYOUT_FILE"])

    for key, value in overrides.items():
        if value is None:
            continue
        if key == "theme":
            value = _parse_theme(value)
        elif key == "max_depth":
            value = _parse_max_depth(str(value))
        elif key == "layout_path":
            value = Path(value)
        values[key] = value
    return LayoutSettings(**values)


__all__ = [
    "DOTENV_ENV_VAR",
    "LayoutSettings",
    "enable_dotenv",
    "load_layout",
    "load_settings",
    "should_use_dotenv",
]
