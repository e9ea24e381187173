"""
Configuration and data directory discovery.
"""

from __future__ import annotations

import os
import platform
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

APP_DIR_NAME = "hostfetch"
CONFIG_FILE_NAME = "config.conf"


def _split_path_list(value: Optional[str]) -> List[Path]:
    if not value:
        return []
    return [Path(p) for p in value.split(os.pathsep) if p]


def _unique(paths: List[Path]) -> List[Path]:
    seen = set()
    result = []
    for path in paths:
        key = str(path)
        if key in seen:
            continue
        seen.add(key)
        result.append(path)
    return result


@dataclass
class PlatformPaths:
    """
    Directories searched for configuration and presets.

    Both lists are ordered most specific first and already end in the
    application directory, e.g. ``~/.config/hostfetch``.
    """

    config_dirs: List[Path] = field(default_factory=list)
    data_dirs: List[Path] = field(default_factory=list)

    @classmethod
    def detect(
        cls,
        env: Optional[Mapping[str, str]] = None,
        home: Optional[Path] = None,
    ) -> "PlatformPaths":
        """Build the search lists from XDG variables and platform defaults."""
        env = os.environ if env is None else env
        home = Path.home() if home is None else home
        os_type = platform.system()

        config: List[Path] = []
        data: List[Path] = []

        if env.get("XDG_CONFIG_HOME"):
            config.append(Path(env["XDG_CONFIG_HOME"]))
        config.append(home / ".config")
        if os_type == "Darwin":
            config.append(home / "Library" / "Preferences")
        if os_type == "Windows" and env.get("APPDATA"):
            config.append(Path(env["APPDATA"]))
        config.extend(_split_path_list(env.get("XDG_CONFIG_DIRS")))
        if os_type != "Windows":
            config.append(Path("/etc/xdg"))
            config.append(Path("/etc"))

        if env.get("XDG_DATA_HOME"):
            data.append(Path(env["XDG_DATA_HOME"]))
        data.append(home / ".local" / "share")
        if os_type == "Darwin":
            data.append(home / "Library" / "Application Support")
        if os_type == "Windows" and env.get("LOCALAPPDATA"):
            data.append(Path(env["LOCALAPPDATA"]))
        data.extend(_split_path_list(env.get("XDG_DATA_DIRS")))
        if os_type != "Windows":
            data.append(Path("/usr/local/share"))
            data.append(Path("/usr/share"))

        return cls(
            config_dirs=[p / APP_DIR_NAME for p in _unique(config)],
            data_dirs=[p / APP_DIR_NAME for p in _unique(data)],
        )

    def config_files(self) -> List[Path]:
        """Candidate config files, most specific first."""
        return [d / CONFIG_FILE_NAME for d in self.config_dirs]

    def preset_dirs(self) -> List[Path]:
        return [d / "presets" for d in self.data_dirs]

    def logo_dirs(self) -> List[Path]:
        return [d / "logos" for d in self.data_dirs]
