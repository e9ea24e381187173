"""
Installed package counts per package manager.
"""

import os
from pathlib import Path
from typing import Callable, Dict, List, Tuple

from loguru import logger
from pydantic import BaseModel, Field

from hostfetch.core.errors import DetectionError
from hostfetch.core.executor import CommandRunner
from hostfetch.core.format import FormatArg
from hostfetch.modules.base import BaseModule

MANAGERS = ("dpkg", "pacman", "rpm", "apk", "flatpak", "snap", "brew")


class PackagesResult(BaseModel):
    counts: Dict[str, int] = Field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.counts.values())


def count_dpkg(status_file: Path = Path("/var/lib/dpkg/status")) -> int:
    """Packages whose status line reads ``install ok installed``."""
    count = 0
    with status_file.open(encoding="utf-8", errors="replace") as f:
        for line in f:
            if line.startswith("Status: ") and line.rstrip().endswith(" installed"):
                count += 1
    return count


def count_dirs(directory: Path) -> int:
    return sum(1 for entry in directory.iterdir() if entry.is_dir())


def count_apk(installed: Path = Path("/lib/apk/db/installed")) -> int:
    with installed.open(encoding="utf-8", errors="replace") as f:
        return sum(1 for line in f if line.startswith("P:"))


def count_lines(runner: CommandRunner, command: List[str]) -> int:
    result = runner.run_command(command)
    if not result.success:
        return 0
    return sum(1 for line in result.stdout.splitlines() if line.strip())


def count_flatpak() -> int:
    total = 0
    for base in (Path("/var/lib/flatpak"), Path.home() / ".local/share/flatpak"):
        for kind in ("app", "runtime"):
            directory = base / kind
            if directory.is_dir():
                total += count_dirs(directory)
    return total


def count_snap() -> int:
    # /snap/bin is not a package
    directory = Path("/snap")
    return sum(1 for entry in directory.iterdir() if entry.is_dir() and entry.name != "bin")


def count_brew() -> int:
    total = 0
    prefixes = [os.environ.get("HOMEBREW_PREFIX", ""), "/opt/homebrew", "/usr/local", "/home/linuxbrew/.linuxbrew"]
    seen = set()
    for prefix in prefixes:
        if not prefix or prefix in seen:
            continue
        seen.add(prefix)
        for sub in ("Cellar", "Caskroom"):
            directory = Path(prefix) / sub
            if directory.is_dir():
                total += count_dirs(directory)
    return total


class PackagesModule(BaseModule):
    name = "Packages"
    option_name = "packages"
    tokens = ("packages",)
    description = "Number of installed packages"
    format_args = ("Number of all packages",) + tuple(f"Number of {name} packages" for name in MANAGERS)

    def _counters(self) -> List[Tuple[str, Callable[[], int]]]:
        runner = self.context.runner
        counters = [
            ("dpkg", count_dpkg),
            ("pacman", lambda: count_dirs(Path("/var/lib/pacman/local"))),
            ("apk", count_apk),
            ("flatpak", count_flatpak),
            ("snap", count_snap),
            ("brew", count_brew),
        ]
        # Querying the rpm database takes long enough to gate it
        if self.config.allow_slow_operations:
            counters.insert(2, ("rpm", lambda: count_lines(runner, ["rpm", "-qa"])))
        return counters

    def detect(self) -> PackagesResult:
        result = PackagesResult()
        for manager, counter in self._counters():
            try:
                count = counter()
            except OSError as e:
                logger.debug(f"No {manager} packages: {e}")
                continue
            if count:
                result.counts[manager] = count
        if not result.counts:
            raise DetectionError("no packages from known package managers found")
        return result

    def format_values(self, result: PackagesResult) -> List[FormatArg]:
        return [result.total] + [result.counts.get(name, 0) for name in MANAGERS]

    def default_output(self, result: PackagesResult) -> str:
        return ", ".join(f"{count} ({manager})" for manager, count in result.counts.items())
