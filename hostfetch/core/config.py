"""
Configuration management.
"""

import sys
from enum import Enum
from typing import Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOGO_MAX_COLORS = 9

# Option names of every module that carries a ModuleArgs record, in the
# order the option parser tries them.
MODULE_NAMES = (
    "os",
    "host",
    "bios",
    "board",
    "chassis",
    "kernel",
    "uptime",
    "processes",
    "packages",
    "shell",
    "display",
    "brightness",
    "de",
    "wifi",
    "wm",
    "wm-theme",
    "theme",
    "icons",
    "font",
    "cursor",
    "terminal",
    "terminal-font",
    "cpu",
    "cpu-usage",
    "gpu",
    "memory",
    "swap",
    "disk",
    "battery",
    "poweradapter",
    "locale",
    "local-ip",
    "public-ip",
    "weather",
    "player",
    "media",
    "datetime",
    "date",
    "time",
    "vulkan",
    "opengl",
    "opencl",
    "users",
    "bluetooth",
    "sound",
    "gamepad",
    "editor",
)

# --lib-<name> overrides; aliases map onto the canonical name
LIBRARY_NAMES = (
    "pci",
    "vulkan",
    "freetype",
    "wayland",
    "xcb-randr",
    "xcb",
    "xrandr",
    "x11",
    "gio",
    "dconf",
    "dbus",
    "xfconf",
    "sqlite3",
    "rpm",
    "imagemagick",
    "z",
    "chafa",
    "egl",
    "glx",
    "osmesa",
    "opencl",
    "jsonc",
    "wlanapi",
    "pulse",
    "nm",
)
LIBRARY_ALIASES = {"sqlite": "sqlite3"}


class LogoType(str, Enum):
    AUTO = "auto"
    BUILTIN = "builtin"
    FILE = "file"
    FILE_RAW = "file-raw"
    DATA = "data"
    DATA_RAW = "data-raw"
    SIXEL = "sixel"
    KITTY = "kitty"
    ITERM = "iterm"
    CHAFA = "chafa"
    RAW = "raw"
    NONE = "none"


class BinaryPrefix(str, Enum):
    IEC = "iec"
    SI = "si"
    JEDEC = "jedec"


class SoundType(str, Enum):
    MAIN = "main"
    ACTIVE = "active"
    ALL = "all"


class LocalIpCompactType(str, Enum):
    NONE = "none"
    ONELINE = "oneline"
    MULTILINE = "multiline"


class GlType(str, Enum):
    AUTO = "auto"
    EGL = "egl"
    GLX = "glx"
    OSMESA = "osmesa"


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ModuleArgs(BaseModel):
    """Per-module overrides: row label, output template, error template."""

    key: str = ""
    output_format: str = ""
    error_format: str = ""


class LogoOptions(BaseModel):
    """Logo settings. Stored for the logo renderer; the core never draws logos."""

    source: str = ""
    type: LogoType = LogoType.AUTO
    colors: List[str] = Field(default_factory=lambda: [""] * LOGO_MAX_COLORS)
    width: int = 0
    height: int = 0
    padding_top: int = 0
    padding_left: int = 0
    padding_right: int = 4
    print_remaining: bool = True
    preserve_aspect_ratio: bool = False


def _default_module_args() -> Dict[str, ModuleArgs]:
    return {name: ModuleArgs() for name in MODULE_NAMES}


def _stdout_is_pipe() -> bool:
    try:
        return not sys.stdout.isatty()
    except (AttributeError, ValueError):
        return True


class Configuration(BaseModel):
    """
    Every display and behaviour setting of one run.

    Built with defaults, mutated by the config cascade and the option parser,
    read-only once the structure starts executing.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    # General
    multithreading: bool = True
    stat: bool = False
    allow_slow_operations: bool = False
    pipe: bool = Field(default_factory=_stdout_is_pipe)
    log_level: Optional[LogLevel] = None
    log_file: str = ""

    # Logo
    logo: LogoOptions = Field(default_factory=LogoOptions)

    # Display
    show_errors: bool = True
    disable_linewrap: bool = True
    hide_cursor: bool = True
    separator: str = ": "
    color_keys: str = ""
    color_title: str = ""
    binary_prefix: BinaryPrefix = BinaryPrefix.IEC

    # Module arguments
    modules: Dict[str, ModuleArgs] = Field(default_factory=_default_module_args)

    # Library paths
    libraries: Dict[str, str] = Field(default_factory=dict)

    # Module flags
    cpu_temp: bool = False
    gpu_temp: bool = False
    battery_temp: bool = False
    gpu_hide_integrated: bool = False
    gpu_hide_discrete: bool = False
    title_fqdn: bool = False
    shell_version: bool = True
    terminal_version: bool = True
    disk_folders: str = ""
    disk_show_removable: bool = True
    disk_show_hidden: bool = False
    disk_show_subvolumes: bool = False
    disk_show_unknown: bool = False
    bluetooth_show_disconnected: bool = False
    sound_type: SoundType = SoundType.MAIN
    battery_dir: str = ""
    separator_string: str = "-"
    localip_v6first: bool = False
    localip_show_ipv4: bool = True
    localip_show_ipv6: bool = False
    localip_show_loop: bool = False
    localip_name_prefix: str = ""
    localip_compact_type: LocalIpCompactType = LocalIpCompactType.NONE
    os_file: str = ""
    player_name: str = ""
    public_ip_url: str = ""
    public_ip_timeout: int = 0
    weather_output_format: str = "%t+-+%C+(%l)"
    weather_timeout: int = 0
    gl_type: GlType = GlType.AUTO
    percent_type: int = 1
    command_shell: str = ""
    command_keys: List[str] = Field(default_factory=list)
    command_texts: List[str] = Field(default_factory=list)

    def module_args(self, name: str) -> ModuleArgs:
        """ModuleArgs record of a module, by option name."""
        return self.modules[name]


class EnvironmentSettings(BaseSettings):
    """Process environment consulted before any option is parsed."""

    model_config = SettingsConfigDict(env_prefix="HOSTFETCH_", extra="ignore")

    no_config: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("NO_CONFIG", "HOSTFETCH_NO_CONFIG"),
    )
    log_level: LogLevel = LogLevel.WARNING

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v):
        """Accept DEBUG, Debug, debug."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @property
    def load_user_config(self) -> bool:
        """The cascade is skipped whenever NO_CONFIG is set, whatever its value."""
        return self.no_config is None
