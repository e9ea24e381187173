"""Tests for the format string engine."""
import pytest

from hostfetch.core.format import format_arg, is_present, render_format


def test_positional_placeholders():
    assert render_format("{2} {1}", ["a", "b"]) == "b a"


def test_out_of_range_index_renders_nothing():
    assert render_format("[{3}]", ["a"]) == "[]"
    assert render_format("[{0}]", ["a"]) == "[]"


def test_auto_index_counts_from_one():
    assert render_format("{}-{}-{}", ["a", "b"]) == "a-b-"


def test_conditional_block_absent():
    assert render_format("{1} ({?2}[{2}]{?})", ["X", ""]) == "X ()"


def test_conditional_block_present():
    assert render_format("{1} ({?2}[{2}]{?})", ["X", "v2"]) == "X (v2)"


def test_conditional_block_without_brackets():
    assert render_format("{1}{?2} @ {2}GHz{?}", ["CPU", 3.5]) == "CPU @ 3.5GHz"


def test_conditional_on_missing_argument_is_absent():
    assert render_format("a{?4}[b]{?}c", ["x"]) == "ac"


def test_unterminated_block_runs_to_end():
    assert render_format("a{?1}b{1}", ["x"]) == "abx"
    assert render_format("a{?1}b{1}", [""]) == "a"


def test_stray_block_end_renders_nothing():
    assert render_format("a{?}b", []) == "ab"


def test_unrelated_braces_are_literal():
    assert render_format("{x} {1} {", ["a"]) == "{x} a {"


def test_rendering_is_deterministic():
    template = "{1}{?2}[ ({2})]{?} {}"
    args = ["name", 0, True]
    assert render_format(template, args) == render_format(template, args)


@pytest.mark.parametrize(
    "arg,expected",
    [
        ("text", True),
        ("", False),
        (1, True),
        (0, False),
        (0.0, False),
        (2.5, True),
        (True, True),
        (False, False),
        (None, False),
    ],
)
def test_is_present(arg, expected):
    assert is_present(arg) is expected


@pytest.mark.parametrize(
    "arg,expected",
    [
        (True, "true"),
        (False, "false"),
        (None, ""),
        (3.10, "3.1"),
        (2.0, "2"),
        (0.0, "0"),
        (1.234, "1.23"),
        (42, "42"),
        ("x", "x"),
    ],
)
def test_format_arg(arg, expected):
    assert format_arg(arg) == expected
