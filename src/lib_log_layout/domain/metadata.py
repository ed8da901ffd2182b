"""Metadata lookups and deterministic metadata dumps.

Contents
--------
* :func:`lookup` – fetch one property with a fallback value.
* :func:`is_present` – presence test used by ternary directives.
* :func:`dump` – render the whole mapping sorted by key.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .printable import as_text, printable


def lookup(key: Any, metadata: Mapping[Any, Any], default: Any = None) -> Any:
    """Return ``metadata[key]`` or ``default``.

    A key that is missing, bound to ``None``, or unhashable counts as absent.

    Examples
    --------
    >>> lookup("pid", {"pid": 12}, "n/a")
    12
    >>> lookup("pid", {"pid": None}, "n/a")
    'n/a'
    >>> lookup(["not", "hashable"], {}, "n/a")
    'n/a'
    """

    try:
        value = metadata.get(key)
    except TypeError:
        return default
    return default if value is None else value


def is_present(key: Any, metadata: Mapping[Any, Any]) -> bool:
    return lookup(key, metadata) is not None


def dump(metadata: Mapping[Any, Any], inter_separator: str = "=", field_separator: str = " ") -> str:
    """Render every entry as ``key<inter_separator>value`` sorted by key text.

    Examples
    --------
    >>> dump({"foo": 1, "bar": 2, "baz": 3})
    'bar=2 baz=3 foo=1'
    >>> dump({"foo": 1, "bar": 2}, "->", ", ")
    'bar->2, foo->1'
    """

    # Keys sharing a text form are ordered by type name, then by value text.
    entries = sorted(
        (as_text(printable(key)), type(key).__name__, as_text(printable(value))) for key, value in metadata.items()
    )
    inter = as_text(printable(inter_separator))
    return as_text(printable(field_separator)).join(f"{key}{inter}{value}" for key, _, value in entries)


__all__ = ["dump", "is_present", "lookup"]
