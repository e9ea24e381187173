"""
Configuration file cascade and named config / preset loading.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING, Callable, List, Optional, Tuple, Union

from loguru import logger

from hostfetch.core.errors import ConfigurationError
from hostfetch.utils.paths import PlatformPaths

if TYPE_CHECKING:
    from hostfetch.core.options import ParseSession

_WHITESPACE = re.compile(r"\s+")

OptionSink = Callable[[str, Optional[str]], None]


def parse_config_line(line: str) -> Optional[Tuple[str, Optional[str]]]:
    """
    Split one config line into (key, value).

    Returns None for blank lines and comments. A line without whitespace is a
    bare key whose value is None. Keys may omit the leading ``--``.
    """
    line = line.strip()
    if not line or line.startswith("#"):
        return None

    parts = _WHITESPACE.split(line, maxsplit=1)
    key = parts[0]
    if not key.startswith("-"):
        key = "--" + key

    if len(parts) == 1:
        return key, None

    value = parts[1].strip()
    # Quoting keeps surrounding whitespace, the same way a shell would
    if len(value) >= 2 and value[0] in "\"'" and value[0] == value[-1]:
        value = value[1:-1]
    return key, value


class ConfigCascade:
    """
    Locate config files and feed their lines to an option sink.

    Parsing and application are interleaved: every line reaches the sink as
    soon as it is read, so a ``load-config`` line is resolved before the next
    line of the including file.
    """

    def __init__(self, paths: PlatformPaths, apply: OptionSink):
        self.paths = paths
        self.apply = apply
        self._loading: List[Path] = []

    def parse_file(self, path: Union[str, Path]) -> bool:
        """Apply a config file. Returns False if it cannot be opened."""
        path = Path(path).expanduser()
        try:
            handle = open(path, "r", encoding="utf-8", errors="replace")
        except OSError:
            return False

        resolved = path.resolve()
        if resolved in self._loading:
            handle.close()
            raise ConfigurationError(414, f"Error: recursive config load: {path}")

        logger.debug(f"Loading config file: {path}")
        self._loading.append(resolved)
        try:
            with handle:
                for line in handle:
                    parsed = parse_config_line(line)
                    if parsed is not None:
                        self.apply(*parsed)
        finally:
            self._loading.pop()
        return True

    def load_user_configs(self, session: "ParseSession") -> None:
        """Apply every config directory, least specific first."""
        for path in reversed(self.paths.config_files()):
            if not session.load_user_config:
                logger.debug("User config disabled, stopping cascade")
                return
            if not self.parse_file(path):
                logger.debug(f"No config file at {path}")

    def load_named(self, key: str, name: Optional[str]) -> None:
        """Resolve ``--load-config <name>``: literal path first, then presets."""
        if name is None:
            raise ConfigurationError(413, f"Error: usage: {key} <file>")

        if self.parse_file(name):
            return

        for preset_dir in self.paths.preset_dirs():
            if self.parse_file(preset_dir / name):
                return

        raise ConfigurationError(414, f"Error: couldn't find config: {name}")
