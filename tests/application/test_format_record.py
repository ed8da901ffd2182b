from __future__ import annotations

import itertools
from typing import Any

import pytest

from lib_log_layout.application.ports.severity import SeverityTablePort
from lib_log_layout.application.use_cases.format_record import (
    create_format_record,
    format_record,
    format_record_text,
    resolve_layout,
)
from lib_log_layout.domain.directives import (
    DEFAULT_LAYOUT,
    EndOfLine,
    Field,
    MetadataDump,
    MetadataRef,
    MetadataRefTernary,
    MetadataRefWithDefault,
    Verbatim,
    default_layout,
)
from lib_log_layout.domain.errors import LayoutDepthError
from lib_log_layout.domain.levels import Severity
from lib_log_layout.domain.record import ProcessRef

DATE, TIME = "2025-09-30", "12:00:00.000"


def test_default_layout_renders_pid_and_message(make_record) -> None:
    me = ProcessRef.current()
    record = make_record({"pid": me})

    assert format_record(record, []) == f"{DATE} {TIME} [error] {me} Message\n".encode()


def test_simplest_format_ignores_the_record(make_record) -> None:
    record = make_record({"pid": ProcessRef.current()})

    assert format_record(record, ["Simplest Format"]) == b"Simplest Format"


def test_explicit_layout_matches_default_for_pid_only_metadata(make_record) -> None:
    record = make_record({"pid": "<0.42.0>"})
    layout = [Field.DATE, " ", Field.TIME, " [", Field.SEVERITY, "] ", MetadataRef("pid"), " ", Field.MESSAGE, "\n"]

    assert format_record(record, layout) == format_record(record)


@pytest.mark.parametrize(
    "metadata",
    [
        {},
        {"pid": "<0.1.0>"},
        {"module": "db", "line": 7},
    ],
)
@pytest.mark.parametrize("severity", [Severity.DEBUG, Severity.EMERGENCY])
def test_literal_only_layouts_are_independent_of_the_record(make_record, metadata: dict[str, Any], severity: Severity) -> None:
    record = make_record(metadata, severity=severity, message="ignored")
    layout = ["left", b" | ", Verbatim("right")]

    assert format_record(record, layout, {severity: "\x1b[31m"}) == b"left | right"


@pytest.mark.parametrize("config", [None, [], ()])
def test_empty_config_is_the_default_layout(make_record, config) -> None:
    record = make_record({"pid": "<0.1.0>", "module": "db"}, severity=Severity.WARNING)
    colors = {Severity.WARNING: "\x1b[33m"}

    assert format_record(record, config, colors) == format_record(record, DEFAULT_LAYOUT, colors)


def test_default_layout_with_full_location(make_record) -> None:
    record = make_record({"pid": "<0.9.0>", "module": "db", "function": "query", "line": 12}, severity=Severity.INFO)

    assert format_record_text(record) == f"{DATE} {TIME} [info] <0.9.0>@db:query:12 Message\n"


def test_default_layout_location_without_pid(make_record) -> None:
    record = make_record({"module": "db", "line": 12}, severity=Severity.INFO)

    assert format_record_text(record) == f"{DATE} {TIME} [info] db:12 Message\n"


def test_default_layout_skips_location_without_module(make_record) -> None:
    record = make_record({"function": "query", "line": 12}, severity=Severity.INFO)

    assert format_record_text(record) == f"{DATE} {TIME} [info]  Message\n"


def test_default_layout_places_color_before_severity(make_record) -> None:
    record = make_record({"pid": "<0.1.0>"})

    line = format_record_text(record, None, {Severity.ERROR: "\x1b[31m"})

    assert line == f"{DATE} {TIME} \x1b[31m[error] <0.1.0> Message\n"


def test_color_is_empty_for_unlisted_severity(make_record) -> None:
    record = make_record(severity=Severity.NOTICE)

    assert format_record(record, [Field.COLOR, "x"], {Severity.ERROR: "\x1b[31m"}) == b"x"
    assert format_record(record, [Field.COLOR, "x"], {}) == b"x"


def test_end_of_line_override_replaces_newline(make_record) -> None:
    record = make_record({"pid": "<0.1.0>"})

    rendered = format_record(record, [EndOfLine("\r\n")])

    assert rendered == format_record(record).replace(b"\n", b"\r\n")
    assert resolve_layout([EndOfLine("\r\n")]) == default_layout("\r\n")


def test_end_of_line_inside_a_layout_emits_its_text(make_record) -> None:
    assert format_record(make_record(), [Field.MESSAGE, EndOfLine("\r\n")]) == b"Message\r\n"


def test_missing_metadata_defaults_to_literal(make_record) -> None:
    record = make_record({"pid": "<0.1.0>"})

    assert format_record(record, [MetadataRefWithDefault("does_not_exist", "Fallback")]) == b"Fallback"


def test_missing_metadata_defaults_to_other_metadata(make_record) -> None:
    record = make_record({"pid": "Fallback"})

    assert format_record(record, [MetadataRefWithDefault("does_not_exist", MetadataRef("pid"))]) == b"Fallback"


def test_present_metadata_ignores_default(make_record) -> None:
    record = make_record({"pid": "<0.1.0>"})

    assert format_record(record, [MetadataRefWithDefault("pid", "Fallback")]) == b"<0.1.0>"


@pytest.mark.parametrize(
    "default",
    [
        "plain",
        Field.SEVERITY,
        MetadataRef("pid"),
        MetadataRef("nope"),
        ["(", MetadataRef("pid"), ")"],
        MetadataRefTernary("pid", ["has pid"], ["no pid"]),
        MetadataRefWithDefault("also_missing", "deep"),
    ],
)
def test_absent_key_evaluates_default_directly(make_record, default: Any) -> None:
    record = make_record({"pid": "<0.1.0>"})

    assert format_record(record, [MetadataRefWithDefault("absent", default)]) == format_record(record, [default])


def test_ternary_selects_absent_branch(make_record) -> None:
    layout = [MetadataRefTernary("pid", ["My pid is ", MetadataRef("pid")], ["Unknown Pid"])]

    assert format_record(make_record({}), layout) == b"Unknown Pid"


def test_ternary_selects_present_branch(make_record) -> None:
    layout = [MetadataRefTernary("pid", ["My pid is ", MetadataRef("pid")], ["Unknown Pid"])]

    assert format_record(make_record({"pid": "hello"}), layout) == b"My pid is hello"


def test_ternary_treats_falsy_values_as_present(make_record) -> None:
    layout = [MetadataRefTernary("count", ["yes"], ["no"])]

    assert format_record(make_record({"count": 0}), layout) == b"yes"
    assert format_record(make_record({"count": ""}), layout) == b"yes"
    assert format_record(make_record({"count": None}), layout) == b"no"


@pytest.mark.parametrize(
    "metadata, expected",
    [
        ({"pid": "hello", "server": "servername"}, b"servername"),
        ({"pid": "hello"}, b"(hello)"),
        ({}, b"(Unknown Server)"),
    ],
)
def test_default_can_be_a_ternary(make_record, metadata: dict[str, str], expected: bytes) -> None:
    layout = [MetadataRefWithDefault("server", MetadataRefTernary("pid", ["(", MetadataRef("pid"), ")"], ["(Unknown Server)"]))]

    assert format_record(make_record(metadata), layout) == expected


def test_bare_reference_to_missing_key_renders_sentinel(make_record) -> None:
    assert format_record(make_record(), ["user=", MetadataRef("user")]) == b"user=Undefined"


def test_bare_reference_to_none_value_renders_sentinel(make_record) -> None:
    assert format_record(make_record({"user": None}), [MetadataRef("user")]) == b"Undefined"


def test_sentinel_is_configurable(make_record) -> None:
    formatter = create_format_record(sentinel="-")

    assert formatter(make_record(), [MetadataRef("user")]) == b"-"


def test_metadata_dump_uses_default_separators(make_record) -> None:
    record = make_record({"foo": 1, "bar": 2, "baz": 3})

    assert format_record(record, [MetadataDump()]) == b"bar=2 baz=3 foo=1"


def test_metadata_dump_uses_custom_separators(make_record) -> None:
    record = make_record({"foo": 1, "bar": 2, "baz": 3})

    assert format_record(record, [MetadataDump("->", ", ")]) == b"bar->2, baz->3, foo->1"


def test_metadata_dump_ignores_insertion_order(make_record) -> None:
    items = [("foo", 1), ("bar", "two"), ("baz", (3,)), ("qux", None)]
    rendered = {format_record(make_record(dict(order)), [MetadataDump()]) for order in itertools.permutations(items)}

    assert rendered == {b"bar=two baz=(3,) foo=1 qux=None"}


def test_severity_fields_use_the_severity_table(make_record) -> None:
    record = make_record(severity=Severity.CRITICAL)

    assert format_record(record, [Field.SEVERITY, "/", Field.SEVERITY_ACRONYM]) == b"critical/C"


def test_custom_severity_table_is_consulted(make_record) -> None:
    class ShoutingTable(SeverityTablePort):
        def name(self, severity: Severity) -> str:
            return severity.name

        def acronym(self, severity: Severity) -> str:
            return "!"

    formatter = create_format_record(severity_table=ShoutingTable())

    assert formatter(make_record(), [Field.SEVERITY, Field.SEVERITY_ACRONYM]) == b"ERROR!"


def test_byte_fragments_pass_through_unchanged(make_record) -> None:
    record = make_record({"blob": b"\xff\x00"}, message=b"\xfe raw")

    assert format_record(record, [Field.MESSAGE, "|", MetadataRef("blob")]) == b"\xfe raw|\xff\x00"


def test_text_variant_replaces_undecodable_bytes(make_record) -> None:
    record = make_record(message=b"ok \xff")

    assert format_record_text(record, [Field.MESSAGE]) == "ok �"


def test_text_fragments_are_encoded_with_the_configured_codec(make_record) -> None:
    formatter = create_format_record(encoding="latin-1")

    assert formatter(make_record(message="café"), [Field.MESSAGE]) == b"caf\xe9"


def test_unknown_directive_shapes_render_as_literals(make_record) -> None:
    layout = [42, "|", None, "|", Severity.INFO, "|", {"a": 1}, "|", 1.5]

    assert format_record(make_record(), layout) == b"42|None|INFO|{'a': 1}|1.5"


def test_nested_sequences_are_flattened(make_record) -> None:
    assert format_record(make_record(), ["a", ["b", ("c", [Field.MESSAGE])]]) == b"abcMessage"


def test_non_sequence_config_is_a_single_directive(make_record) -> None:
    assert format_record(make_record(), Field.MESSAGE) == b"Message"


def test_self_referencing_layout_raises_depth_error(make_record) -> None:
    loop: list[Any] = ["x"]
    loop.append(loop)

    with pytest.raises(LayoutDepthError, match="max_depth"):
        format_record(make_record(), loop)


def test_default_chain_beyond_max_depth_raises(make_record) -> None:
    directive: Any = "end"
    for index in range(5):
        directive = MetadataRefWithDefault(f"missing_{index}", directive)
    formatter = create_format_record(max_depth=3)

    with pytest.raises(LayoutDepthError):
        formatter(make_record(), [directive])
    assert create_format_record(max_depth=5)(make_record(), [directive]) == b"end"


def test_max_depth_must_be_positive() -> None:
    with pytest.raises(ValueError, match="positive"):
        create_format_record(max_depth=0)


def test_reference_with_unhashable_key_falls_back(make_record) -> None:
    record = make_record({"a": 1})

    assert format_record(record, [MetadataRef(("a", []))]) == b"Undefined"
    assert format_record(record, [MetadataRefWithDefault(("a", []), "fallback")]) == b"fallback"


def test_self_referencing_layout_beyond_the_stack_raises_depth_error(make_record) -> None:
    loop: list[Any] = ["x"]
    loop.append(loop)
    formatter = create_format_record(max_depth=100_000)

    with pytest.raises(LayoutDepthError, match="max_depth=100000"):
        formatter(make_record(), loop)
