"""Click command-line interface for rendering and previewing layouts.

Contents
--------
* :func:`cli` – root group handling ``--traceback`` and ``.env`` loading.
* ``info`` / ``render`` / ``demo`` sub-commands.
* :func:`main` – entry point wrapping :func:`lib_cli_exit_tools.run_cli`.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Sequence

import click
import lib_cli_exit_tools

from . import __init__conf__
from .config import DOTENV_ENV_VAR, enable_dotenv, load_settings, should_use_dotenv
from .domain.colors import COLOR_RESET, CONSOLE_STYLE_THEMES
from .domain.errors import LayoutError
from .domain.levels import Severity
from .domain.record import LogRecord, ProcessRef

logger = logging.getLogger(__name__)

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_SEVERITY_NAMES = [severity.severity for severity in Severity]
_THEME_NAMES = sorted(CONSOLE_STYLE_THEMES)


def _parse_meta(values: Sequence[str]) -> dict[str, str]:
    metadata: dict[str, str] = {}
    for item in values:
        key, separator, value = item.partition("=")
        if not separator or not key.strip():
            raise click.BadParameter(f"expected KEY=VALUE, got {item!r}", param_hint="--meta")
        metadata[key.strip()] = value
    return metadata


def _with_reset(line: str) -> str:
    """Insert a colour reset before the trailing end-of-line of ``line``."""

    body = line.rstrip("\r\n")
    return f"{body}{COLOR_RESET}{line[len(body):]}"


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(version=__init__conf__.version, prog_name=__init__conf__.shell_command, message="%(version)s")
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python tracebacks on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load a nearby .env before running commands (overrides {DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool | None) -> None:
    """Render log records through directive layouts."""

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback
    if should_use_dotenv(explicit=use_dotenv, env_value=os.getenv(DOTENV_ENV_VAR)):
        enable_dotenv()
    if ctx.invoked_subcommand is None:
        click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata."""

    click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("render", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--message", "-m", default="Message", show_default=True, help="Message body of the record.")
@click.option(
    "--severity",
    "-s",
    type=click.Choice(_SEVERITY_NAMES, case_sensitive=False),
    default="info",
    show_default=True,
)
@click.option("--meta", "meta", multiple=True, metavar="KEY=VALUE", help="Metadata property; may be repeated.")
@click.option("--with-pid", is_flag=True, help="Attach the current process as the 'pid' property.")
@click.option(
    "--layout",
    "layout_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON layout file (defaults to LOG_LAYOUT_FILE or the built-in layout).",
)
@click.option("--eol", default=None, help="Terminator of the default layout (escapes like \\r\\n are decoded).")
@click.option("--theme", type=click.Choice(_THEME_NAMES, case_sensitive=False), default=None, help="Colour theme.")
def cli_render(
    message: str,
    severity: str,
    meta: tuple[str, ...],
    with_pid: bool,
    layout_path: Path | None,
    eol: str | None,
    theme: str | None,
) -> None:
    """Render one record and write it to stdout."""

    metadata: dict[str, Any] = dict(_parse_meta(meta))
    if with_pid:
        metadata.setdefault("pid", ProcessRef.current())

    env_overrides: dict[str, str] = {}
    if eol is not None:
        env_overrides["LOG_LAYOUT_EOL"] = eol
    try:
        settings = load_settings({**os.environ, **env_overrides}, theme=theme, layout_path=layout_path)
        layout = settings.layout()
        colors = settings.colors()
        record = LogRecord.create(message, Severity.from_name(severity), metadata)
        line = settings.build_formatter().text(record, layout, colors)
    except LayoutError as exc:
        raise click.ClickException(str(exc)) from exc
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc
    logger.debug("rendered %d characters for severity %s", len(line), severity)
    click.echo(_with_reset(line) if colors else line, nl=False)


@cli.command("demo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--theme", type=click.Choice(_THEME_NAMES, case_sensitive=False), default="classic", show_default=True)
@click.option("--no-color", is_flag=True, help="Render without colour codes.")
def cli_demo(theme: str, no_color: bool) -> None:
    """Render one line per severity with the default layout."""

    settings = load_settings(theme=None if no_color else theme)
    formatter = settings.build_formatter()
    colors = settings.colors()
    pid = ProcessRef.current()
    for line_number, severity in enumerate(Severity, start=1):
        record = LogRecord.create(
            f"{severity.severity} message",
            severity,
            {"pid": pid, "module": "demo", "function": "cli_demo", "line": line_number},
        )
        line = formatter.text(record, settings.layout(), colors)
        click.echo(_with_reset(line) if colors else line, nl=False)


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI and return its exit code.

    Parameters
    ----------
    argv:
        Argument list; ``None`` reads ``sys.argv[1:]``.
    restore_traceback:
        Restore the traceback preferences changed by ``--traceback`` once the
        command finished.
    """

    previous = (lib_cli_exit_tools.config.traceback, lib_cli_exit_tools.config.traceback_force_color)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback, lib_cli_exit_tools.config.traceback_force_color = previous


__all__ = ["cli", "main"]
