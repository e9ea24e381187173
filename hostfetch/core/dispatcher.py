"""
Structure execution: one row (or group of rows) per structure token.
"""

import getpass
import os
import platform
import socket
import time
from typing import Dict, List, Optional, Tuple

from loguru import logger
from pydantic import BaseModel

from hostfetch.core.config import Configuration
from hostfetch.core.errors import DetectionError
from hostfetch.core.printing import RowPrinter
from hostfetch.core.valuestore import ValueStore

NO_IMPLEMENTATION = "<no implementation provided>"
TITLE_KEY = "title"


def split_structure(structure: str) -> Tuple[str, ...]:
    """Colon separated tokens, stripped, empty ones dropped."""
    return tuple(token.strip() for token in structure.split(":") if token.strip())


class TitleResult(BaseModel):
    user_name: str
    host_name: str
    fqdn: str = ""


def detect_title() -> TitleResult:
    """User and host name for the title row."""
    try:
        user_name = getpass.getuser()
    except (KeyError, OSError):
        user_name = os.environ.get("USER", "") or "unknown"
    host_name = socket.gethostname() or platform.node()
    try:
        fqdn = socket.getfqdn(host_name)
    except OSError:
        fqdn = host_name
    return TitleResult(user_name=user_name, host_name=host_name, fqdn=fqdn)


class StructureDispatcher:
    """
    Resolve structure tokens and print them in order.

    Resolution order for each token:
    1. custom value (exact, case-sensitive)
    2. built-in rows: title, separator, break
    3. registered module (case-insensitive, aliases included)
    4. an error row saying nothing implements the token
    """

    def __init__(self, config: Configuration, values: ValueStore, registry, context):
        self.config = config
        self.values = values
        self.registry = registry
        self.context = context
        self.printer: RowPrinter = context.printer
        self._instances: Dict[type, object] = {}

    def module_for(self, token: str):
        """Module instance for a token, one instance per module class."""
        cls = self.registry.get_by_token(token)
        if cls is None:
            return None
        instance = self._instances.get(cls)
        if instance is None:
            instance = cls(self.context)
            self._instances[cls] = instance
        return instance

    def referenced_modules(self, tokens: Tuple[str, ...]) -> List:
        """Modules the structure will run, in order, skipping tokens a custom value shadows."""
        modules = []
        for token in tokens:
            if token in self.values or token.lower() in ("title", "separator", "break"):
                continue
            module = self.module_for(token)
            if module is not None and module not in modules:
                modules.append(module)
        return modules

    def run(self, tokens: Tuple[str, ...]) -> None:
        for token in tokens:
            start = time.perf_counter()
            self.dispatch(token)
            if self.config.stat:
                self.printer.print_timing(int((time.perf_counter() - start) * 1000))

    def dispatch(self, token: str) -> None:
        custom = self.values.get(token)
        if custom is not None:
            self.printer.print_custom(token if custom.print_key else None, custom.value)
            return

        lowered = token.lower()
        if lowered == "title":
            self._print_title()
            return
        if lowered == "separator":
            self._print_separator()
            return
        if lowered == "break":
            self.printer.print_break()
            return

        module = self.module_for(token)
        if module is None:
            logger.debug(f"No module for structure token {token!r}")
            self.printer.print_error(token, 0, None, NO_IMPLEMENTATION)
            return
        module.print()

    def _title(self) -> Optional[TitleResult]:
        try:
            return self.context.cache.get(TITLE_KEY, detect_title)
        except DetectionError as e:
            self.printer.print_error("Title", 0, None, str(e))
            return None

    def _host_text(self, title: TitleResult) -> str:
        if self.config.title_fqdn and title.fqdn:
            return title.fqdn
        return title.host_name

    def _print_title(self) -> None:
        title = self._title()
        if title is not None:
            self.printer.print_title(title.user_name, self._host_text(title))

    def _print_separator(self) -> None:
        title = self._title()
        if title is not None:
            self.printer.print_separator(len(title.user_name) + 1 + len(self._host_text(title)))
