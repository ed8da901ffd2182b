"""Colour tables keyed by severity and the Rich palettes that produce them.

Purpose
-------
Resolve the colour prefix a layout's ``color`` field emits for a record, and
turn named Rich style palettes into plain ANSI colour tables operators can pass
to the formatter.

Contents
--------
* :func:`color_for` – exact-match lookup used by the evaluator.
* :func:`normalise_color_table` – accept severity names as keys.
* :func:`ansi_prefix` – render a Rich style definition to its SGR prefix.
* :data:`CONSOLE_STYLE_THEMES` plus :func:`color_table_from_theme` and
  :func:`color_table_from_styles`.

System Role
-----------
The formatter treats colour values as opaque text; no escape codes are
validated here or anywhere downstream.
"""

from __future__ import annotations

from typing import Mapping, Union

from rich.color import ColorSystem
from rich.style import Style

from .levels import Severity

ColorValue = Union[str, bytes]
ColorTable = Mapping[Severity, ColorValue]

COLOR_RESET = "\x1b[0m"

CONSOLE_STYLE_THEMES: dict[str, dict[str, str]] = {
    "classic": {
        "DEBUG": "dim",
        "INFO": "cyan",
        "NOTICE": "bright_cyan",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold red",
        "ALERT": "bold magenta",
        "EMERGENCY": "bold white on red",
    },
    "dark": {
        "DEBUG": "grey42",
        "INFO": "bright_white",
        "NOTICE": "bold bright_white",
        "WARNING": "bold gold3",
        "ERROR": "bold red3",
        "CRITICAL": "bold white on red3",
        "ALERT": "bold white on dark_magenta",
        "EMERGENCY": "bold blink white on red3",
    },
    "neon": {
        "DEBUG": "#00ffd5",
        "INFO": "#39ff14",
        "NOTICE": "#00b3ff",
        "WARNING": "#fff700",
        "ERROR": "#ff073a",
        "CRITICAL": "bold #ff00ff on black",
        "ALERT": "bold #ff6f00 on black",
        "EMERGENCY": "bold black on #ff073a",
    },
    "pastel": {
        "DEBUG": "aquamarine1",
        "INFO": "light_sky_blue1",
        "NOTICE": "light_steel_blue1",
        "WARNING": "khaki1",
        "ERROR": "light_salmon1",
        "CRITICAL": "bold plum1",
        "ALERT": "bold orchid1",
        "EMERGENCY": "bold black on light_salmon1",
    },
}
"""Built-in palettes keyed by theme name, then by severity name."""

_MARKER = "\x00"


def color_for(severity: Severity, color_table: ColorTable | None) -> ColorValue:
    """Return the colour prefix registered for ``severity`` or ``""``.

    Examples
    --------
    >>> color_for(Severity.ERROR, {Severity.ERROR: "\\x1b[31m"})
    '\\x1b[31m'
    >>> color_for(Severity.INFO, {Severity.ERROR: "\\x1b[31m"})
    ''
    >>> color_for(Severity.INFO, None)
    ''
    """

    if not color_table:
        return ""
    return color_table.get(severity, "")


def normalise_color_table(colors: Mapping[Severity | str, ColorValue] | None) -> dict[Severity, ColorValue]:
    """Return a :class:`Severity`-keyed copy of ``colors``.

    String keys are matched case-insensitively against severity names; unknown
    names raise :class:`ValueError`.
    """

    if not colors:
        return {}
    normalised: dict[Severity, ColorValue] = {}
    for key, value in colors.items():
        severity = key if isinstance(key, Severity) else Severity.from_name(str(key))
        normalised[severity] = value
    return normalised


def ansi_prefix(style: str, *, color_system: ColorSystem = ColorSystem.STANDARD) -> str:
    """Return the ANSI escape sequence that switches a terminal to ``style``.

    Examples
    --------
    >>> ansi_prefix("red")
    '\\x1b[31m'
    >>> ansi_prefix("bold red")
    '\\x1b[1;31m'
    """

    rendered = Style.parse(style).render(_MARKER, color_system=color_system)
    return rendered.split(_MARKER, 1)[0]


def color_table_from_styles(
    styles: Mapping[Severity | str, str],
    *,
    color_system: ColorSystem = ColorSystem.STANDARD,
) -> dict[Severity, str]:
    """Render a mapping of Rich style definitions into a colour table."""

    return {severity: ansi_prefix(str(style), color_system=color_system) for severity, style in normalise_color_table(styles).items()}


def color_table_from_theme(theme: str, *, color_system: ColorSystem = ColorSystem.STANDARD) -> dict[Severity, str]:
    """Return the colour table for one of :data:`CONSOLE_STYLE_THEMES`."""

    palette = CONSOLE_STYLE_THEMES.get(theme.strip().lower())
    if palette is None:
        raise ValueError(f"Unknown console theme: {theme!r}")
    return color_table_from_styles(palette, color_system=color_system)


__all__ = [
    "COLOR_RESET",
    "CONSOLE_STYLE_THEMES",
    "ColorTable",
    "ColorValue",
    "ansi_prefix",
    "color_for",
    "color_table_from_styles",
    "color_table_from_theme",
    "normalise_color_table",
]
