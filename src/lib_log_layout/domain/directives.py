"""Layout directives and the built-in default layout.

Purpose
-------
Describe a log line layout as data: an ordered sequence of directives that the
formatter evaluates left to right. Directives either emit something verbatim,
pull a fixed record field, or resolve a metadata property with optional
fallbacks and conditional branches.

Contents
--------
* :class:`Field` – fixed record fields (message, date, time, severity, acronym, colour).
* :class:`Verbatim`, :class:`MetadataRef`, :class:`MetadataRefWithDefault`,
  :class:`MetadataRefTernary`, :class:`MetadataDump`, :class:`EndOfLine`.
* :func:`default_layout` – the layout used when the caller supplies none.
* :func:`directives_from_data` – build directives from JSON-compatible data.

System Role
-----------
Pure domain data. Evaluation lives in
:mod:`lib_log_layout.application.use_cases.format_record`; loading layouts from
files lives in :mod:`lib_log_layout.config`.

Any other Python value placed where a directive is expected is rendered
verbatim, and nested lists or tuples are evaluated as directive sequences.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence, Union

from .errors import LayoutError

UNDEFINED = "Undefined"
"""Text emitted for a bare :class:`MetadataRef` whose key is absent."""


class Field(Enum):
    """Fixed record fields a layout can reference."""

    MESSAGE = "message"
    DATE = "date"
    TIME = "time"
    SEVERITY = "severity"
    SEVERITY_ACRONYM = "sev"
    COLOR = "color"

    @classmethod
    def from_name(cls, name: str) -> "Field":
        """Return the field for a layout-file name such as ``"sev"``.

        Examples
        --------
        >>> Field.from_name("SEV") is Field.SEVERITY_ACRONYM
        True
        """

        normalized = name.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(f"Unknown layout field: {name!r}")


def _as_sequence(branch: Any) -> tuple[Any, ...]:
    if isinstance(branch, (list, tuple)):
        return tuple(branch)
    return (branch,)


@dataclass(slots=True, frozen=True)
class Verbatim:
    """Emit ``value`` unchanged after printable coercion."""

    value: Any


@dataclass(slots=True, frozen=True)
class MetadataRef:
    """Emit the metadata property ``key`` or :data:`UNDEFINED` when absent."""

    key: str


@dataclass(slots=True, frozen=True)
class MetadataRefWithDefault:
    """Emit ``key`` when present, otherwise evaluate ``default``.

    ``default`` is itself a directive or a sequence of directives, so fallbacks
    chain: ``MetadataRefWithDefault("host", MetadataRef("node"))``.
    """

    key: str
    default: Any


@dataclass(slots=True, frozen=True)
class MetadataRefTernary:
    """Evaluate ``present`` when ``key`` exists, ``absent`` otherwise.

    The value bound to ``key`` is irrelevant; only presence matters. A branch
    that is not a list or tuple is wrapped as a one-element sequence.

    Examples
    --------
    >>> MetadataRefTernary("pid", "@", "").present
    ('@',)
    """

    key: str
    present: Sequence[Any] = ()
    absent: Sequence[Any] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "present", _as_sequence(self.present))
        object.__setattr__(self, "absent", _as_sequence(self.absent))


@dataclass(slots=True, frozen=True)
class MetadataDump:
    """Emit every metadata entry sorted by key."""

    inter_separator: str = "="
    field_separator: str = " "


@dataclass(slots=True, frozen=True)
class EndOfLine:
    """Terminator override for the default layout.

    ``[EndOfLine("\\r\\n")]`` as the whole layout selects the default layout with
    ``"\\r\\n"`` as its terminator; anywhere else it emits ``eol``.
    """

    eol: str | bytes = "\n"


Directive = Union[Field, Verbatim, MetadataRef, MetadataRefWithDefault, MetadataRefTernary, MetadataDump, EndOfLine]


def default_layout(eol: str | bytes = "\n") -> tuple[Any, ...]:
    """Return ``date time [severity] pid@module:function:line message<eol>``.

    The ``pid`` prefix and ``:function``/``:line`` suffixes only appear when
    the matching metadata is present, and the whole location clause is skipped
    when ``module`` is absent.
    """

    location = (
        MetadataRefTernary("pid", ("@",), ()),
        MetadataRef("module"),
        MetadataRefTernary("function", (":", MetadataRef("function")), ()),
        MetadataRefTernary("line", (":", MetadataRef("line")), ()),
    )
    return (
        Field.DATE,
        " ",
        Field.TIME,
        " ",
        Field.COLOR,
        "[",
        Field.SEVERITY,
        "] ",
        MetadataRefWithDefault("pid", ""),
        MetadataRefTernary("module", location, ()),
        " ",
        Field.MESSAGE,
        eol,
    )


DEFAULT_LAYOUT = default_layout()


_META_KEYS = frozenset({"meta", "default", "present", "absent"})


def directives_from_data(data: Any) -> tuple[Any, ...]:
    """Build a directive sequence from JSON-compatible ``data``.

    Strings are verbatim text, lists are nested sequences, and mappings select
    a directive: ``{"field": "date"}``, ``{"meta": "pid"}``,
    ``{"meta": "pid", "default": ...}``,
    ``{"meta": "pid", "present": [...], "absent": [...]}``,
    ``{"metadata": true}`` or ``{"metadata": {"inter": "->", "field": ", "}}``,
    and ``{"eol": "\\r\\n"}``.

    Raises
    ------
    LayoutError
        For any item that does not match one of the shapes above.

    Examples
    --------
    >>> directives_from_data(["[", {"field": "severity"}, "] ", {"meta": "pid", "default": "-"}])
    (Verbatim(value='['), <Field.SEVERITY: 'severity'>, Verbatim(value='] '), MetadataRefWithDefault(key='pid', default=(Verbatim(value='-'),)))
    """

    if isinstance(data, list):
        return tuple(_directive_from_item(item) for item in data)
    return (_directive_from_item(data),)


def _directive_from_item(item: Any) -> Any:
    if isinstance(item, str):
        return Verbatim(item)
    if isinstance(item, (int, float)) and not isinstance(item, bool):
        return Verbatim(item)
    if isinstance(item, list):
        return directives_from_data(item)
    if isinstance(item, Mapping):
        return _directive_from_mapping(item)
    raise LayoutError(f"Unsupported layout item: {item!r}")


def _directive_from_mapping(item: Mapping[str, Any]) -> Any:
    keys = set(item)
    if keys == {"field"}:
        try:
            return Field.from_name(str(item["field"]))
        except ValueError as exc:
            raise LayoutError(str(exc)) from exc
    if keys == {"eol"} and isinstance(item["eol"], str):
        return EndOfLine(item["eol"])
    if keys == {"metadata"}:
        return _dump_from_data(item["metadata"])
    if "meta" in keys and keys <= _META_KEYS and isinstance(item["meta"], str):
        key = item["meta"]
        if "present" in keys or "absent" in keys:
            if "default" in keys:
                raise LayoutError(f"Layout item mixes 'default' with 'present'/'absent': {dict(item)!r}")
            return MetadataRefTernary(
                key,
                directives_from_data(item.get("present", [])),
                directives_from_data(item.get("absent", [])),
            )
        if "default" in keys:
            return MetadataRefWithDefault(key, directives_from_data(item["default"]))
        return MetadataRef(key)
    raise LayoutError(f"Unsupported layout item: {dict(item)!r}")


def _dump_from_data(options: Any) -> MetadataDump:
    if options is True:
        return MetadataDump()
    if isinstance(options, Mapping) and set(options) <= {"inter", "field"}:
        return MetadataDump(
            inter_separator=str(options.get("inter", "=")),
            field_separator=str(options.get("field", " ")),
        )
    raise LayoutError(f"Unsupported metadata options: {options!r}")


__all__ = [
    "DEFAULT_LAYOUT",
    "Directive",
    "EndOfLine",
    "Field",
    "MetadataDump",
    "MetadataRef",
    "MetadataRefTernary",
    "MetadataRefWithDefault",
    "UNDEFINED",
    "Verbatim",
    "default_layout",
    "directives_from_data",
]
