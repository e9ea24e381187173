"""Tests for structure dispatch and row printing."""
import re
from unittest.mock import patch

import pytest

from hostfetch.core.dispatcher import (
    NO_IMPLEMENTATION,
    StructureDispatcher,
    TitleResult,
    split_structure,
)
from hostfetch.core.errors import DetectionError
from hostfetch.core.valuestore import ValueStore
from hostfetch.modules.base import BaseModule
from hostfetch.modules.registry import ModuleRegistry


class EchoModule(BaseModule):
    name = "Echo"
    tokens = ("echo", "repeat")
    format_args = ("Text",)
    default_format = "{1}"

    def __init__(self, context):
        super().__init__(context)
        self.calls = 0

    def detect(self):
        self.calls += 1
        return "hello"

    def format_values(self, result):
        return [result]


class BrokenModule(BaseModule):
    name = "OS"
    option_name = "os"
    tokens = ("broken",)
    format_args = ("Name",)
    default_format = "{1}"

    def detect(self):
        raise DetectionError("no os-release")

    def format_values(self, result):
        return [result]


@pytest.fixture
def values():
    return ValueStore()


@pytest.fixture
def dispatcher(config, values, context):
    registry = ModuleRegistry([EchoModule, BrokenModule])
    return StructureDispatcher(config, values, registry, context)


@pytest.fixture(autouse=True)
def fixed_title():
    title = TitleResult(user_name="alice", host_name="box", fqdn="box.example.org")
    with patch("hostfetch.core.dispatcher.detect_title", return_value=title) as m_title:
        yield m_title


def run(dispatcher, structure):
    dispatcher.run(split_structure(structure))


class TestSplitStructure:
    def test_split(self):
        assert split_structure("Title:Separator:OS") == ("Title", "Separator", "OS")

    def test_strips_and_drops_empty_tokens(self):
        assert split_structure(" OS : :CPU:") == ("OS", "CPU")

    def test_source_string_untouched(self):
        structure = "A:B"
        tokens = split_structure(structure)
        assert structure == "A:B"
        assert isinstance(tokens, tuple)


class TestDispatch:
    def test_title_separator_and_unknown_token(self, dispatcher, output):
        run(dispatcher, "title:separator:bogus_token")
        assert output.getvalue().splitlines() == [
            "alice@box",
            "---------",
            f"bogus_token: {NO_IMPLEMENTATION}",
        ]

    def test_title_fqdn(self, dispatcher, config, output):
        config.title_fqdn = True
        run(dispatcher, "Title:Separator")
        assert output.getvalue().splitlines() == ["alice@box.example.org", "-" * 21]

    def test_title_detected_once(self, dispatcher, fixed_title):
        run(dispatcher, "Title:Separator:Title")
        assert fixed_title.call_count == 1

    def test_break_is_empty_line(self, dispatcher, output):
        run(dispatcher, "Break")
        assert output.getvalue() == "\n"

    def test_custom_rows(self, dispatcher, values, output):
        values.set("Motto", "Stay curious", True)
        values.set("Banner", "hello world", False)
        run(dispatcher, "Motto:Banner")
        assert output.getvalue() == "Motto: Stay curious\nhello world\n"

    def test_custom_value_shadows_module(self, dispatcher, values, output):
        values.set("Echo", "custom", True)
        run(dispatcher, "Echo")
        assert output.getvalue() == "Echo: custom\n"
        assert dispatcher.module_for("echo").calls == 0

    def test_custom_value_lookup_is_exact(self, dispatcher, values, output):
        values.set("Echo", "custom", True)
        run(dispatcher, "ECHO")
        assert output.getvalue() == "Echo: hello\n"

    def test_custom_value_shadows_builtin(self, dispatcher, values, output):
        values.set("Title", "not a title", False)
        run(dispatcher, "Title")
        assert output.getvalue() == "not a title\n"

    def test_module_tokens_case_insensitive_with_aliases(self, dispatcher, output):
        run(dispatcher, "ECHO:Repeat")
        assert output.getvalue() == "Echo: hello\nEcho: hello\n"
        assert dispatcher.module_for("echo").calls == 1

    def test_module_error_row(self, dispatcher, output):
        run(dispatcher, "broken")
        assert output.getvalue() == "OS: no os-release\n"

    def test_error_format_used_on_failure_only(self, dispatcher, config, output):
        config.modules["os"].output_format = "[{1}]"
        config.modules["os"].error_format = "unavailable ({1})"
        run(dispatcher, "broken")
        assert output.getvalue() == "OS: unavailable (no os-release)\n"

    def test_errors_hidden(self, dispatcher, config, output):
        config.show_errors = False
        run(dispatcher, "bogus:broken:echo")
        assert output.getvalue() == "Echo: hello\n"

    def test_referenced_modules(self, dispatcher, values):
        values.set("broken", "shadowed", True)
        modules = dispatcher.referenced_modules(("Title", "echo", "broken", "repeat", "nothing"))
        assert [module.name for module in modules] == ["Echo"]


class TestTiming:
    def test_stat_in_pipe_mode(self, dispatcher, config, output):
        config.stat = True
        run(dispatcher, "Echo:Break")
        lines = output.getvalue().splitlines()
        assert lines[0] == "Echo: hello"
        assert re.fullmatch(r"\d+ms", lines[1])
        assert lines[2] == ""
        assert re.fullmatch(r"\d+ms", lines[3])

    def test_stat_overlay_on_terminal(self, dispatcher, config, output):
        config.stat = True
        config.pipe = False
        config.hide_cursor = False
        config.disable_linewrap = False
        run(dispatcher, "bogus")
        text = output.getvalue()
        assert re.search(r"\033\[s\033\[1A\033\[9999999C\033\[\d+D\d+ms\033\[u$", text)


class TestRowPrinter:
    def test_key_override_gets_index(self, printer, config, output):
        config.modules["disk"].key = "Volume {1}"
        printer.print_row("Disk", 2, config.modules["disk"].key, "10 GiB")
        assert output.getvalue() == "Volume 2: 10 GiB\n"

    def test_index_appended_to_name(self, printer, output):
        printer.print_row("GPU", 2, "", "x")
        assert output.getvalue() == "GPU 2: x\n"

    def test_padding_and_separator(self, printer, config, output):
        config.logo.padding_left = 2
        config.separator = " -> "
        printer.print_row("OS", 0, "", "Linux")
        assert output.getvalue() == "  OS -> Linux\n"

    def test_separator_pattern_is_cut_to_length(self, printer, config, output):
        config.separator_string = "-="
        printer.print_separator(5)
        assert output.getvalue() == "-=-=-\n"

    def test_colored_key_on_terminal(self, printer, config, output):
        config.pipe = False
        config.color_keys = "34"
        printer.print_row("OS", 0, "", "Linux")
        assert output.getvalue() == "\033[1m\033[34mOS\033[0m: Linux\n"

    def test_error_red_on_terminal(self, printer, config, output):
        config.pipe = False
        printer.print_error("OS", 0, None, "failed")
        assert output.getvalue() == "\033[1mOS\033[0m: \033[31mfailed\033[0m\n"

    def test_start_and_finish_on_terminal(self, printer, config, output):
        config.pipe = False
        config.logo.padding_top = 1
        printer.start()
        printer.finish()
        assert output.getvalue() == "\033[?25l\033[?7l\n\033[?25h\033[?7h"

    def test_start_in_pipe_mode_writes_no_escapes(self, printer, output):
        printer.start()
        printer.finish()
        assert output.getvalue() == ""
