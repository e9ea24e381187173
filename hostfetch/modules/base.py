"""
Base module class and shared models.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, List, Optional, Tuple

from loguru import logger

from hostfetch.core.config import Configuration, ModuleArgs
from hostfetch.core.detector import DetectionCache
from hostfetch.core.errors import DetectionError
from hostfetch.core.executor import CommandRunner
from hostfetch.core.format import FormatArg, render_format
from hostfetch.core.printing import RowPrinter


@dataclass
class ModuleContext:
    """Collaborators shared by every module of a run."""

    config: Configuration
    printer: RowPrinter
    cache: DetectionCache
    runner: CommandRunner


class BaseModule(ABC):
    """
    A named row producer.

    Subclasses describe themselves with class attributes and implement
    ``detect`` and ``format_values``. ``print`` is the single entry point used
    by the structure dispatcher.
    """

    name: ClassVar[str] = ""
    option_name: ClassVar[Optional[str]] = None
    tokens: ClassVar[Tuple[str, ...]] = ()
    description: ClassVar[str] = ""
    format_args: ClassVar[Tuple[str, ...]] = ()
    default_format: ClassVar[str] = ""
    empty_message: ClassVar[str] = "nothing detected"
    index_rows: ClassVar[bool] = True
    # Slow probes are started by the pre-warm executor when multithreading is on
    slow: ClassVar[bool] = False

    def __init__(self, context: ModuleContext):
        self.context = context
        self.config = context.config
        self.printer = context.printer

    @property
    def cache_key(self) -> str:
        return self.option_name or self.name.lower()

    @property
    def args(self) -> ModuleArgs:
        if self.option_name is None:
            return ModuleArgs()
        return self.config.module_args(self.option_name)

    @abstractmethod
    def detect(self) -> Any:
        """
        Run the probe.

        Returns:
            A result record, or a list of them for multi-row modules

        Raises:
            DetectionError: the probe could not produce data
        """
        pass

    @abstractmethod
    def format_values(self, result: Any) -> List[FormatArg]:
        """Positional values passed to the format engine, in documented order."""
        pass

    def default_output(self, result: Any) -> str:
        return render_format(self.default_format, self.format_values(result))

    def key_name(self, result: Any) -> str:
        return self.name

    def detect_cached(self) -> Any:
        return self.context.cache.get(self.cache_key, self.detect)

    def print(self) -> None:
        """Detect and print this module's row(s). Never raises for probe failures."""
        try:
            result = self.detect_cached()
        except DetectionError as e:
            self.print_error(str(e))
            return
        except Exception as e:
            logger.opt(exception=True).debug(f"{self.name} probe raised")
            logger.warning(f"{self.name} detection failed: {e}")
            self.print_error(f"detection failed: {e}")
            return

        if isinstance(result, list):
            if not result:
                self.print_error(self.empty_message)
                return
            self.print_results(result)
        else:
            self.print_result(result, 0)

    def print_results(self, results: List[Any]) -> None:
        """Rows of a multi-row module, numbered when there is more than one."""
        for index, item in enumerate(results, start=1):
            self.print_result(item, index if self.index_rows and len(results) > 1 else 0)

    def print_result(self, result: Any, index: int) -> None:
        args = self.args
        name = self.key_name(result)
        if not args.output_format:
            self.printer.print_row(name, index, args.key, self.default_output(result))
        else:
            self.printer.print_format(name, index, args, self.format_values(result))

    def print_error(self, message: str, index: int = 0) -> None:
        self.printer.print_error(self.name, index, self.args, message)


class UnsupportedModule(BaseModule):
    """Registered module whose probe is not available in this build."""

    def detect(self) -> Any:
        raise DetectionError("not supported on this platform")

    def format_values(self, result: Any) -> List[FormatArg]:
        return []
