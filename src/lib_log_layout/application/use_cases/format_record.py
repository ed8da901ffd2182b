"""Use case rendering one log record through a directive layout.

Purpose
-------
Provide the formatter entry point: substitute the default layout when the
caller supplies none, evaluate every top-level directive in order, and join the
resulting fragments into bytes or text.

Contents
--------
* :class:`LayoutFormatter` – configured, reusable formatter.
* :func:`create_format_record` factory mirroring the other use cases.
* :func:`format_record` / :func:`format_record_text` – module-level helpers
  backed by a default :class:`LayoutFormatter`.
* :func:`resolve_layout` – default-layout and end-of-line substitution.

System Role
-----------
The only application-level operation of the package. It performs no I/O and
keeps no state between calls, so one formatter can be shared across threads.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from lib_log_layout.application.ports.record import RecordPort
from lib_log_layout.application.ports.severity import DefaultSeverityTable, SeverityTablePort
from lib_log_layout.domain.colors import ColorValue
from lib_log_layout.domain.directives import DEFAULT_LAYOUT, UNDEFINED, EndOfLine, default_layout
from lib_log_layout.domain.errors import LayoutDepthError
from lib_log_layout.domain.levels import Severity
from lib_log_layout.domain.printable import Fragment, as_bytes, as_text

from ._evaluator import DEFAULT_MAX_DEPTH, DirectiveEvaluator


def resolve_layout(config: Sequence[Any] | Any | None) -> tuple[Any, ...]:
    """Return the directive sequence to evaluate for ``config``.

    ``None`` or an empty sequence selects the default layout, and a sequence
    holding a single :class:`EndOfLine` selects the default layout with that
    terminator. A non-sequence value is a one-directive layout.

    Examples
    --------
    >>> resolve_layout([]) == DEFAULT_LAYOUT
    True
    >>> resolve_layout([EndOfLine("\\r\\n")])[-1]
    '\\r\\n'
    >>> resolve_layout("Simplest Format")
    ('Simplest Format',)
    """

    if config is None:
        return DEFAULT_LAYOUT
    if not isinstance(config, (list, tuple)):
        return (config,)
    if not config:
        return DEFAULT_LAYOUT
    if len(config) == 1 and isinstance(config[0], EndOfLine):
        return default_layout(config[0].eol)
    return tuple(config)


class LayoutFormatter:
    """Render records into bytes or text according to a layout.

    Parameters
    ----------
    severity_table:
        Lookup used for the ``severity`` and ``sev`` fields; defaults to
        :class:`DefaultSeverityTable`.
    sentinel:
        Text emitted for a bare metadata reference whose key is absent.
    max_depth:
        Maximum nesting of defaults, branches, and nested sequences.
    encoding:
        Codec used to encode text fragments in :meth:`__call__` and decode
        byte fragments in :meth:`text`.

    Examples
    --------
    >>> from lib_log_layout.domain.directives import MetadataRef
    >>> from lib_log_layout.domain.record import LogRecord
    >>> record = LogRecord("boom", ("2025-09-30", "12:00:00.000"), Severity.ERROR, {"pid": "<0.1.0>"})
    >>> LayoutFormatter()(record)
    b'2025-09-30 12:00:00.000 [error] <0.1.0> boom\\n'
    >>> LayoutFormatter(sentinel="-").text(record, ["user=", MetadataRef("user")])
    'user=-'
    """

    def __init__(
        self,
        *,
        severity_table: SeverityTablePort | None = None,
        sentinel: Any = UNDEFINED,
        max_depth: int = DEFAULT_MAX_DEPTH,
        encoding: str = "utf-8",
    ) -> None:
        self._evaluator = DirectiveEvaluator(
            severity_table=severity_table or DefaultSeverityTable(),
            sentinel=sentinel,
            max_depth=max_depth,
        )
        self._encoding = encoding

    def fragments(
        self,
        record: RecordPort,
        config: Sequence[Any] | Any | None = None,
        colors: Mapping[Severity, ColorValue] | None = None,
    ) -> list[Fragment]:
        """Return the unjoined fragments for ``record``.

        Raises
        ------
        LayoutDepthError
            When nesting exceeds ``max_depth`` or the interpreter stack runs
            out first because ``max_depth`` is larger than the stack allows.
        """

        try:
            return self._evaluator.evaluate_sequence(resolve_layout(config), record, colors)
        except RecursionError as exc:
            raise LayoutDepthError(self._evaluator.max_depth) from exc

    def __call__(
        self,
        record: RecordPort,
        config: Sequence[Any] | Any | None = None,
        colors: Mapping[Severity, ColorValue] | None = None,
    ) -> bytes:
        """Return the rendered line as bytes; byte fragments are copied unchanged."""

        return b"".join(as_bytes(fragment, self._encoding) for fragment in self.fragments(record, config, colors))

    def text(
        self,
        record: RecordPort,
        config: Sequence[Any] | Any | None = None,
        colors: Mapping[Severity, ColorValue] | None = None,
    ) -> str:
        """Return the rendered line as text."""

        return "".join(as_text(fragment, self._encoding) for fragment in self.fragments(record, config, colors))


def create_format_record(
    *,
    severity_table: SeverityTablePort | None = None,
    sentinel: Any = UNDEFINED,
    max_depth: int = DEFAULT_MAX_DEPTH,
    encoding: str = "utf-8",
) -> LayoutFormatter:
    """Build a formatter with the given collaborators frozen in.

    Why
    ---
    Hosts that swap the severity table or the sentinel text configure it once
    at start-up instead of threading options through every call.
    """

    return LayoutFormatter(severity_table=severity_table, sentinel=sentinel, max_depth=max_depth, encoding=encoding)


_DEFAULT_FORMATTER = LayoutFormatter()


def format_record(
    record: RecordPort,
    config: Sequence[Any] | Any | None = None,
    colors: Mapping[Severity, ColorValue] | None = None,
) -> bytes:
    """Render ``record`` with the default formatter settings.

    Examples
    --------
    >>> from lib_log_layout.domain.record import LogRecord
    >>> record = LogRecord("Message", ("2025-09-30", "12:00:00.000"), Severity.ERROR)
    >>> format_record(record, ["Simplest Format"])
    b'Simplest Format'
    """

    return _DEFAULT_FORMATTER(record, config, colors)


def format_record_text(
    record: RecordPort,
    config: Sequence[Any] | Any | None = None,
    colors: Mapping[Severity, ColorValue] | None = None,
) -> str:
    """Text variant of :func:`format_record`."""

    return _DEFAULT_FORMATTER.text(record, config, colors)


__all__ = [
    "LayoutFormatter",
    "create_format_record",
    "format_record",
    "format_record_text",
    "resolve_layout",
]
