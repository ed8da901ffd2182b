"""Recursive evaluation of layout directives against one record."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from lib_log_layout.application.ports.record import RecordPort
from lib_log_layout.application.ports.severity import SeverityTablePort
from lib_log_layout.domain.colors import ColorValue, color_for
from lib_log_layout.domain.directives import (
    UNDEFINED,
    EndOfLine,
    Field,
    MetadataDump,
    MetadataRef,
    MetadataRefTernary,
    MetadataRefWithDefault,
    Verbatim,
)
from lib_log_layout.domain.errors import LayoutDepthError
from lib_log_layout.domain.levels import Severity
from lib_log_layout.domain.metadata import dump, is_present, lookup
from lib_log_layout.domain.printable import Fragment, printable

DEFAULT_MAX_DEPTH = 64


class DirectiveEvaluator:
    """Turn directives into printable fragments.

    Recursion only happens through a default directive, a ternary branch, or a
    nested list/tuple; each step down increases ``depth`` and the walk aborts
    with :class:`LayoutDepthError` once ``max_depth`` is exceeded. Objects that
    are not directives are rendered through :func:`printable`.
    """

    def __init__(
        self,
        *,
        severity_table: SeverityTablePort,
        sentinel: Any = UNDEFINED,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        if max_depth < 1:
            raise ValueError("max_depth must be positive")
        self._severity_table = severity_table
        self._sentinel = sentinel
        self._max_depth = max_depth

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def evaluate_sequence(
        self,
        directives: Iterable[Any],
        record: RecordPort,
        colors: Mapping[Severity, ColorValue] | None,
        depth: int = 0,
    ) -> list[Fragment]:
        fragments: list[Fragment] = []
        for directive in directives:
            fragments.extend(self.evaluate(directive, record, colors, depth))
        return fragments

    def evaluate(
        self,
        directive: Any,
        record: RecordPort,
        colors: Mapping[Severity, ColorValue] | None,
        depth: int = 0,
    ) -> list[Fragment]:
        if depth > self._max_depth:
            raise LayoutDepthError(self._max_depth)

        if isinstance(directive, Field):
            return [self._field(directive, record, colors)]
        if isinstance(directive, Verbatim):
            return [printable(directive.value)]
        if isinstance(directive, MetadataDump):
            return [dump(record.metadata, directive.inter_separator, directive.field_separator)]
        if isinstance(directive, MetadataRef):
            return [printable(lookup(directive.key, record.metadata, self._sentinel))]
        if isinstance(directive, MetadataRefWithDefault):
            value = lookup(directive.key, record.metadata)
            if value is None:
                return self.evaluate(directive.default, record, colors, depth + 1)
            return [printable(value)]
        if isinstance(directive, MetadataRefTernary):
            branch = directive.present if is_present(directive.key, record.metadata) else directive.absent
            return self.evaluate_sequence(branch, record, colors, depth + 1)
        if isinstance(directive, EndOfLine):
            return [printable(directive.eol)]
        if isinstance(directive, (list, tuple)):
            return self.evaluate_sequence(directive, record, colors, depth + 1)
        return [printable(directive)]

    def _field(self, field: Field, record: RecordPort, colors: Mapping[Severity, ColorValue] | None) -> Fragment:
        if field is Field.COLOR:
            return color_for(record.severity, colors)
        if field is Field.MESSAGE:
            return printable(record.message)
        if field is Field.DATE:
            return record.timestamp[0]
        if field is Field.TIME:
            return record.timestamp[1]
        if field is Field.SEVERITY:
            return self._severity_table.name(record.severity)
        return self._severity_table.acronym(record.severity)


__all__ = ["DEFAULT_MAX_DEPTH", "DirectiveEvaluator"]
