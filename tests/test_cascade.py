"""Tests for config file parsing and the config cascade."""
import pytest

from hostfetch.core.cascade import parse_config_line
from hostfetch.core.errors import ConfigurationError


def write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestParseConfigLine:
    @pytest.mark.parametrize("line", ["", "   ", "# comment", "  # indented comment"])
    def test_ignored_lines(self, line):
        assert parse_config_line(line) is None

    def test_key_and_value(self):
        assert parse_config_line("structure OS:CPU\n") == ("--structure", "OS:CPU")

    def test_bare_key(self):
        assert parse_config_line("--pipe") == ("--pipe", None)

    def test_value_keeps_inner_whitespace(self):
        assert parse_config_line("set Motto=Stay   curious") == ("--set", "Motto=Stay   curious")

    def test_quoted_value(self):
        assert parse_config_line('separator " -> "') == ("--separator", " -> ")

    def test_single_dash_key_kept(self):
        assert parse_config_line("-s OS") == ("-s", "OS")


class TestCascade:
    """Later directories win, the command line wins over every file."""

    def test_more_specific_directory_wins(self, parser, paths, config):
        user, system = paths.config_files()
        write(system, "color-keys red\nseparator ' | '\n")
        write(user, "color-keys blue\n")

        parser.cascade.load_user_configs(parser.session)

        assert config.color_keys == "34"
        assert config.separator == " | "

    def test_command_line_wins(self, parser, paths, config):
        write(paths.config_files()[0], "color-keys blue\n")
        parser.cascade.load_user_configs(parser.session)
        parser.parse_arguments(["--color-keys", "green"])
        assert config.color_keys == "32"

    def test_missing_files_are_skipped(self, parser, config):
        parser.cascade.load_user_configs(parser.session)
        assert config.color_keys == ""

    def test_load_user_config_false_stops_cascade(self, parser, paths, config):
        user, system = paths.config_files()
        write(system, "load-user-config false\n")
        write(user, "color-keys blue\n")
        parser.cascade.load_user_configs(parser.session)
        assert config.color_keys == ""

    def test_errors_in_files_are_fatal(self, parser, paths):
        write(paths.config_files()[0], "bogus-option 1\n")
        with pytest.raises(ConfigurationError) as exc:
            parser.cascade.load_user_configs(parser.session)
        assert exc.value.status == 400

    def test_custom_values_from_file(self, parser, paths, session):
        write(paths.config_files()[0], "set Motto=from file\nstructure Motto\n")
        parser.cascade.load_user_configs(session)
        assert session.values.get("Motto").value == "from file"
        assert session.structure == "Motto"


class TestLoadConfig:
    """--load-config: literal path, then presets."""

    def test_literal_path(self, parser, tmp_path, config):
        path = write(tmp_path / "extra.conf", "separator ' => '\n")
        parser.parse("--load-config", str(path))
        assert config.separator == " => "

    def test_preset(self, parser, paths, session):
        write(paths.preset_dirs()[0] / "minimal", "structure OS:Kernel\n")
        parser.parse("--load-config", "minimal")
        assert session.structure == "OS:Kernel"

    def test_included_file_applies_in_place(self, parser, tmp_path, config):
        inner = write(tmp_path / "inner.conf", "separator B\n")
        outer = write(tmp_path / "outer.conf", f"separator A\nload-config {inner}\ncolor-keys red\n")
        parser.parse("--load-config", str(outer))
        assert config.separator == "B"
        assert config.color_keys == "31"

    def test_missing_config(self, parser):
        with pytest.raises(ConfigurationError) as exc:
            parser.parse("--load-config", "missing-name")
        assert exc.value.status == 414
        assert "couldn't find config: missing-name" in exc.value.message

    def test_missing_value(self, parser):
        with pytest.raises(ConfigurationError) as exc:
            parser.parse("--load-config", None)
        assert exc.value.status == 413

    def test_recursive_load(self, parser, tmp_path):
        first = tmp_path / "first.conf"
        second = tmp_path / "second.conf"
        write(first, f"load-config {second}\n")
        write(second, f"load-config {first}\n")
        with pytest.raises(ConfigurationError) as exc:
            parser.parse("--load-config", str(first))
        assert exc.value.status == 414
        assert "recursive" in exc.value.message

    def test_same_file_twice_in_sequence(self, parser, tmp_path, config):
        path = write(tmp_path / "twice.conf", "separator X\n")
        parser.parse("--load-config", str(path))
        parser.parse("--load-config", str(path))
        assert config.separator == "X"
