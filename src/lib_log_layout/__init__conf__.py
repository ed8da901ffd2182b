"""Static package metadata surfaced by the CLI ``info`` command."""

from __future__ import annotations

name = "lib_log_layout"
title = "Directive-driven log line layouts"
version = "0.1.0"
shell_command = "lib_log_layout"


def summary_info() -> str:
    """Return the metadata banner printed by ``lib_log_layout info``.

    Examples
    --------
    >>> summary_info().splitlines()[0]
    'Info for lib_log_layout:'
    """

    fields = (
        ("name", name),
        ("title", title),
        ("version", version),
        ("shell_command", shell_command),
    )
    width = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(width)} = {value}" for label, value in fields)
    return "\n".join(lines) + "\n"
