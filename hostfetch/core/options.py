"""
Option parsing: one (key, value) pair at a time, from config files or argv.
"""

from __future__ import annotations

import platform
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Sequence, Tuple, TypeVar

from loguru import logger
from rich.console import Console
from rich.table import Table

from hostfetch.__version__ import __version__
from hostfetch.core import help_content
from hostfetch.core.cascade import ConfigCascade
from hostfetch.core.config import (
    LIBRARY_ALIASES,
    LIBRARY_NAMES,
    MODULE_NAMES,
    BinaryPrefix,
    Configuration,
    GlType,
    LocalIpCompactType,
    LogLevel,
    LogoType,
    ModuleArgs,
    SoundType,
)
from hostfetch.core.errors import ConfigurationError, InformativeExit
from hostfetch.core.valuestore import ValueStore
from hostfetch.utils.paths import PlatformPaths

T = TypeVar("T")
Handler = Callable[[str, Optional[str]], None]
EnumChoices = Sequence[Tuple[str, T]]

_TRUE_VALUES = ("true", "yes", "on", "1")
_UINT = re.compile(r"[0-9]+")
_MODULE_ARG_SUFFIXES = ("key", "format", "error")

_COLOR_CODES = (
    ("reset_", "0;"),
    ("bright_", "1;"),
    ("black", "30"),
    ("red", "31"),
    ("green", "32"),
    ("yellow", "33"),
    ("blue", "34"),
    ("magenta", "35"),
    ("cyan", "36"),
    ("white", "37"),
)

LOGO_TYPE_CHOICES: EnumChoices[LogoType] = tuple((m.value, m) for m in LogoType)
BINARY_PREFIX_CHOICES: EnumChoices[BinaryPrefix] = tuple((m.value, m) for m in BinaryPrefix)
SOUND_TYPE_CHOICES: EnumChoices[SoundType] = tuple((m.value, m) for m in SoundType)
LOCALIP_COMPACT_CHOICES: EnumChoices[LocalIpCompactType] = tuple(
    (m.value, m) for m in LocalIpCompactType
)
GL_TYPE_CHOICES: EnumChoices[GlType] = tuple((m.value, m) for m in GlType)
LOG_LEVEL_CHOICES: EnumChoices[LogLevel] = tuple((m.value, m) for m in LogLevel)

# Options whose command line value may itself start with '-'
DASH_VALUE_OPTIONS = frozenset({"--separator-string"})


@dataclass
class ParseSession:
    """State that only lives while options are being resolved."""

    values: ValueStore = field(default_factory=ValueStore)
    structure: str = ""
    load_user_config: bool = True


def unknown_option(key: str) -> ConfigurationError:
    return ConfigurationError(400, f"Error: unknown option: {key}")


def parse_bool(value: Optional[str]) -> bool:
    """A missing or empty value means true."""
    return not value or value.lower() in _TRUE_VALUES


def parse_uint(key: str, value: Optional[str]) -> int:
    if value is None:
        raise ConfigurationError(480, f"Error: usage: {key} <num>")
    if not _UINT.fullmatch(value):
        raise ConfigurationError(479, f"Error: usage: {key} <num>")
    return int(value)


def parse_string(key: str, value: Optional[str]) -> str:
    if value is None:
        raise ConfigurationError(477, f"Error: usage: {key} <str>")
    return value


def parse_color(key: str, value: Optional[str]) -> str:
    """Expand color names to SGR fragments, copying anything else verbatim."""
    value = parse_string(key, value)
    result = []
    pos = 0
    lowered = value.lower()
    while pos < len(value):
        for name, code in _COLOR_CODES:
            if lowered.startswith(name, pos):
                result.append(code)
                pos += len(name)
                break
        else:
            result.append(value[pos])
            pos += 1
    return "".join(result)


def parse_enum(key: str, value: Optional[str], choices: EnumChoices[T]) -> T:
    """First case-insensitive match wins; no match is fatal."""
    if value is None:
        raise ConfigurationError(476, f"Error: usage: {key} <value>")
    for name, member in choices:
        if name.lower() == value.lower():
            return member
    raise ConfigurationError(478, f"Error: unknown {key} value: {value}")


def parse_module_args(key: str, value: Optional[str], module_name: str, args: ModuleArgs) -> bool:
    """
    Handle ``--<module>-key|format|error``.

    Returns False when the key does not have that shape for ``module_name``,
    so the caller can try the next module.
    """
    if not key.startswith("--"):
        return False

    rest = key[2:]
    if not rest.lower().startswith(module_name):
        return False

    rest = rest[len(module_name):]
    if not rest.startswith("-"):
        return False

    suffix = rest[1:].lower()
    if suffix not in _MODULE_ARG_SUFFIXES:
        return False

    text = parse_string(key, value)
    if suffix == "key":
        args.key = text
    elif suffix == "format":
        args.output_format = text
    else:
        args.error_format = text
    return True


def parse_custom_value(key: str, value: Optional[str], values: ValueStore, print_key: bool) -> None:
    if value is None:
        raise ConfigurationError(411, f"Error: usage: {key} <key=value>")
    name, separator, text = value.partition("=")
    if not separator:
        raise ConfigurationError(412, f"Error: usage: {key} <key=value>, '=' missing")
    values.set(name, text, print_key)


class OptionParser:
    """
    Apply options to a Configuration and a ParseSession.

    Buckets are tried in a fixed order: informative, general, logo, display,
    module arguments, library paths, module flags. Each bucket is a table
    built once here.
    """

    def __init__(
        self,
        config: Configuration,
        session: ParseSession,
        registry,
        paths: PlatformPaths,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ):
        self.config = config
        self.session = session
        self.registry = registry
        self.paths = paths
        self.console = console or Console(highlight=False, emoji=False, soft_wrap=True)
        self.err_console = err_console or Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)
        self.cascade = ConfigCascade(paths, self.parse)

        self._print_commands: Dict[str, Callable[[], None]] = {
            "-config-system": lambda: self._write(help_content.CONFIG_SYSTEM),
            "-config-user": lambda: self._write(help_content.CONFIG_USER),
            "-structure": lambda: self._write(help_content.DEFAULT_STRUCTURE),
        }
        self._list_commands: Dict[str, Callable[[], None]] = {
            "-modules": self._list_modules,
            "-presets": self._list_presets,
            "-config-paths": self._list_config_paths,
            "-data-paths": self._list_data_paths,
            "-features": self._list_features,
            "-logos": self._list_logos,
        }

        self._general: Dict[str, Handler] = {
            "--load-config": self.cascade.load_named,
            "--gen-config": lambda key, value: self._generate_config(force=False),
            "--gen-config-force": lambda key, value: self._generate_config(force=True),
            "--thread": self._flag("multithreading"),
            "--multithreading": self._flag("multithreading"),
            "--stat": self._set_stat,
            "--allow-slow-operations": self._flag("allow_slow_operations"),
            "--pipe": self._flag("pipe"),
            "--load-user-config": self._set_load_user_config,
            "--log-level": self._choice("log_level", LOG_LEVEL_CHOICES),
            "--log-file": self._text("log_file"),
        }

        self._logo_sources: Dict[str, LogoType] = {
            "--file": LogoType.FILE,
            "--file-raw": LogoType.FILE_RAW,
            "--data": LogoType.DATA,
            "--data-raw": LogoType.DATA_RAW,
            "--sixel": LogoType.SIXEL,
            "--kitty": LogoType.KITTY,
            "--chafa": LogoType.CHAFA,
            "--iterm": LogoType.ITERM,
            "--raw": LogoType.RAW,
        }
        # Keyed by what follows "--logo"
        self._logo: Dict[str, Handler] = {
            "-type": self._choice("logo.type", LOGO_TYPE_CHOICES),
            "-width": self._number("logo.width"),
            "-height": self._number("logo.height"),
            "-padding": self._set_logo_padding,
            "-padding-top": self._number("logo.padding_top"),
            "-padding-left": self._number("logo.padding_left"),
            "-padding-right": self._number("logo.padding_right"),
            "-print-remaining": self._flag("logo.print_remaining"),
            "-preserve-aspect-ratio": self._flag("logo.preserve_aspect_ratio"),
        }

        self._display: Dict[str, Handler] = {
            "--show-errors": self._flag("show_errors"),
            "--disable-linewrap": self._flag("disable_linewrap"),
            "--hide-cursor": self._flag("hide_cursor"),
            "-s": self._set_structure,
            "--structure": self._set_structure,
            "--separator": self._text("separator"),
            "--color-keys": self._colour("color_keys"),
            "--color-title": self._colour("color_title"),
            "-c": self._set_colors,
            "--color": self._set_colors,
            "--set": lambda key, value: parse_custom_value(key, value, self.session.values, True),
            "--set-keyless": lambda key, value: parse_custom_value(
                key, value, self.session.values, False
            ),
            "--binary-prefix": self._choice("binary_prefix", BINARY_PREFIX_CHOICES),
        }

        self._module_flags: Dict[str, Handler] = {
            "--cpu-temp": self._flag("cpu_temp"),
            "--gpu-temp": self._flag("gpu_temp"),
            "--battery-temp": self._flag("battery_temp"),
            "--gpu-hide-integrated": self._flag("gpu_hide_integrated"),
            "--gpu-hide-discrete": self._flag("gpu_hide_discrete"),
            "--title-fqdn": self._flag("title_fqdn"),
            "--shell-version": self._flag("shell_version"),
            "--terminal-version": self._flag("terminal_version"),
            "--disk-folders": self._text("disk_folders"),
            "--disk-show-removable": self._flag("disk_show_removable"),
            "--disk-show-hidden": self._flag("disk_show_hidden"),
            "--disk-show-subvolumes": self._flag("disk_show_subvolumes"),
            "--disk-show-unknown": self._flag("disk_show_unknown"),
            "--bluetooth-show-disconnected": self._flag("bluetooth_show_disconnected"),
            "--sound-type": self._choice("sound_type", SOUND_TYPE_CHOICES),
            "--battery-dir": self._text("battery_dir"),
            "--separator-string": self._text("separator_string"),
            "--localip-v6first": self._flag("localip_v6first"),
            "--localip-show-ipv4": self._flag("localip_show_ipv4"),
            "--localip-show-ipv6": self._flag("localip_show_ipv6"),
            "--localip-show-loop": self._flag("localip_show_loop"),
            "--localip-name-prefix": self._text("localip_name_prefix"),
            "--localip-compact-type": self._choice("localip_compact_type", LOCALIP_COMPACT_CHOICES),
            "--os-file": self._text("os_file"),
            "--player-name": self._text("player_name"),
            "--public-ip-url": self._text("public_ip_url"),
            "--public-ip-timeout": self._number("public_ip_timeout"),
            "--weather-output-format": self._text("weather_output_format"),
            "--weather-timeout": self._number("weather_timeout"),
            "--gl": self._choice("gl_type", GL_TYPE_CHOICES),
            "--percent-type": self._number("percent_type"),
            "--command-shell": self._text("command_shell"),
            "--command-key": lambda key, value: self.config.command_keys.append(
                parse_string(key, value)
            ),
            "--command-text": lambda key, value: self.config.command_texts.append(
                parse_string(key, value)
            ),
        }

        self._buckets = (
            self._parse_informative,
            self._parse_general,
            self._parse_logo,
            self._parse_display,
            self._parse_module_args,
            self._parse_library,
            self._parse_module_flags,
        )

    def parse(self, key: str, value: Optional[str]) -> None:
        """Apply one option. Unknown keys are fatal."""
        lowered = key.lower()
        logger.debug(f"Option {key} = {value!r}")
        for bucket in self._buckets:
            if bucket(key, lowered, value):
                return
        raise unknown_option(key)

    def parse_arguments(self, argv: Sequence[str]) -> None:
        """
        Apply command line arguments in order.

        The value of an option is the next argument, unless that argument
        starts with '-' and the option is not in DASH_VALUE_OPTIONS.
        """
        index = 0
        while index < len(argv):
            key = argv[index]
            has_value = index + 1 < len(argv) and (
                not argv[index + 1].startswith("-") or key.lower() in DASH_VALUE_OPTIONS
            )
            if has_value:
                self.parse(key, argv[index + 1])
                index += 2
            else:
                self.parse(key, None)
                index += 1

    # Handler factories

    def _assign(self, path: str, value) -> None:
        target = self.config
        *parents, name = path.split(".")
        for parent in parents:
            target = getattr(target, parent)
        setattr(target, name, value)

    def _flag(self, path: str) -> Handler:
        return lambda key, value: self._assign(path, parse_bool(value))

    def _number(self, path: str) -> Handler:
        return lambda key, value: self._assign(path, parse_uint(key, value))

    def _text(self, path: str) -> Handler:
        return lambda key, value: self._assign(path, parse_string(key, value))

    def _colour(self, path: str) -> Handler:
        return lambda key, value: self._assign(path, parse_color(key, value))

    def _choice(self, path: str, choices: EnumChoices) -> Handler:
        return lambda key, value: self._assign(path, parse_enum(key, value, choices))

    # Buckets

    def _parse_informative(self, key: str, lowered: str, value: Optional[str]) -> bool:
        if lowered in ("-h", "--help"):
            self._print_help(value)
        elif lowered in ("-v", "--version"):
            self._write(f"hostfetch {__version__} ({platform.machine() or 'unknown'})")
        elif lowered == "--version-raw":
            self._write(__version__)
        elif lowered.startswith("--print"):
            command = self._print_commands.get(lowered[len("--print"):])
            if command is None:
                raise unknown_option(key)
            command()
        elif lowered.startswith("--list"):
            command = self._list_commands.get(lowered[len("--list"):])
            if command is None:
                raise unknown_option(key)
            command()
        else:
            return False
        raise InformativeExit()

    def _parse_general(self, key: str, lowered: str, value: Optional[str]) -> bool:
        handler = self._general.get(lowered)
        if handler is None:
            return False
        handler(key, value)
        return True

    def _parse_logo(self, key: str, lowered: str, value: Optional[str]) -> bool:
        if lowered in ("-l", "--logo"):
            logo = self.config.logo
            logo.source = parse_string(key, value)
            # Usually wanted together with the none logo
            if logo.source.lower() == "none":
                logo.padding_top = 0
                logo.padding_left = 0
                logo.padding_right = 0
                logo.type = LogoType.NONE
            return True

        if lowered.startswith("--logo"):
            subkey = lowered[len("--logo"):]
            if subkey.startswith("-color-") and len(subkey) == len("-color-") + 1:
                digit = subkey[-1]
                if digit not in "123456789":
                    raise ConfigurationError(472, f"Error: invalid --color-[1-9] index: {key[-1]}")
                self.config.logo.colors[int(digit) - 1] = parse_color(key, value)
                return True
            handler = self._logo.get(subkey)
            if handler is None:
                raise unknown_option(key)
            handler(key, value)
            return True

        logo_type = self._logo_sources.get(lowered)
        if logo_type is None:
            return False
        self.config.logo.source = parse_string(key, value)
        self.config.logo.type = logo_type
        return True

    def _parse_display(self, key: str, lowered: str, value: Optional[str]) -> bool:
        handler = self._display.get(lowered)
        if handler is None:
            return False
        handler(key, value)
        return True

    def _parse_module_args(self, key: str, lowered: str, value: Optional[str]) -> bool:
        for name in MODULE_NAMES:
            if parse_module_args(key, value, name, self.config.modules[name]):
                return True
        return False

    def _parse_library(self, key: str, lowered: str, value: Optional[str]) -> bool:
        if not lowered.startswith("--lib"):
            return False
        subkey = lowered[len("--lib"):]
        if not subkey.startswith("-"):
            raise unknown_option(key)
        name = LIBRARY_ALIASES.get(subkey[1:], subkey[1:])
        if name not in LIBRARY_NAMES:
            raise unknown_option(key)
        self.config.libraries[name] = parse_string(key, value)
        return True

    def _parse_module_flags(self, key: str, lowered: str, value: Optional[str]) -> bool:
        handler = self._module_flags.get(lowered)
        if handler is None:
            return False
        handler(key, value)
        return True

    # Special handlers

    def _set_stat(self, key: str, value: Optional[str]) -> None:
        self.config.stat = parse_bool(value)
        if self.config.stat:
            self.config.show_errors = True

    def _set_load_user_config(self, key: str, value: Optional[str]) -> None:
        self.session.load_user_config = parse_bool(value)

    def _set_logo_padding(self, key: str, value: Optional[str]) -> None:
        padding = parse_uint(key, value)
        self.config.logo.padding_left = padding
        self.config.logo.padding_right = padding

    def _set_structure(self, key: str, value: Optional[str]) -> None:
        self.session.structure = parse_string(key, value)

    def _set_colors(self, key: str, value: Optional[str]) -> None:
        self.config.color_keys = parse_color(key, value)
        self.config.color_title = self.config.color_keys

    def _generate_config(self, force: bool) -> None:
        path = self.paths.config_files()[0]
        if not force and path.is_file():
            raise ConfigurationError(
                1, f"Config file exists in `{path}`, use `--gen-config-force` to overwrite"
            )
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(help_content.CONFIG_USER, encoding="utf-8")
        logger.info(f"Wrote sample config to {path}")
        self._write(f"A sample config file has been written in `{path}`")
        raise InformativeExit()

    # Informative output

    def _write(self, text: str) -> None:
        self.console.print(text, markup=False, emoji=False, highlight=False)

    def _print_help(self, topic: Optional[str]) -> None:
        if topic is None:
            self._write(help_content.HELP)
            return

        lowered = topic.lower()
        if lowered in ("c", "color"):
            self._write(help_content.HELP_COLOR)
        elif lowered == "format":
            self._write(help_content.HELP_FORMAT)
        elif lowered in ("load-config", "loadconfig", "config"):
            self._write(help_content.HELP_CONFIG)
        elif lowered.endswith("-format") and self.registry.get_by_option(lowered[: -len("-format")]):
            self._write(self._module_format_help(lowered[: -len("-format")]))
        else:
            self.err_console.print(
                f"No specific help for command {topic} provided", markup=False, emoji=False, highlight=False
            )

    def _module_format_help(self, option_name: str) -> str:
        module = self.registry.get_by_option(option_name)
        lines = [
            f"--{option_name}-format:",
            f"Sets the format string for {option_name} output.",
            'To see how a format string is constructed, take a look at "hostfetch --help format".',
            "The following values are passed:",
        ]
        for index, description in enumerate(module.format_args, start=1):
            lines.append(f"        {{{index}}}: {description}")
        lines.append(f'The default is something similar to "{module.default_format}".')
        return "\n".join(lines)

    def _list_modules(self) -> None:
        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        table.add_column("#", style="cyan", justify="right")
        table.add_column("Module", style="cyan")
        table.add_column("Description")
        for index, module in enumerate(self.registry.modules(), start=1):
            table.add_row(str(index), module.name, module.description)
        self.console.print(table)

    def _list_presets(self) -> None:
        for preset_dir in self.paths.preset_dirs():
            if not preset_dir.is_dir():
                continue
            for path in sorted(p for p in preset_dir.rglob("*") if p.is_file()):
                self._write(str(path.relative_to(preset_dir)))

    def _list_config_paths(self) -> None:
        for path in self.paths.config_files():
            self._write(f"{path}{' (*)' if path.is_file() else ''}")

    def _list_data_paths(self) -> None:
        for path in self.paths.data_dirs:
            self._write(f"{path}/")

    def _list_features(self) -> None:
        for feature in self.registry.features():
            self._write(feature)

    def _list_logos(self) -> None:
        self._write("Builtin logos:")
        self._write("(none)")
        self._write("\nCustom logos:")
        for logo_dir in self.paths.logo_dirs():
            if not logo_dir.is_dir():
                continue
            for path in sorted(p for p in logo_dir.rglob("*") if p.is_file()):
                self._write(str(path))
