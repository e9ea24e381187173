"""
Row output: keys, values, error rows and the built-in pseudo-rows.
"""

import sys
from typing import Optional, Sequence, TextIO

from hostfetch.core.config import Configuration, ModuleArgs
from hostfetch.core.format import FormatArg, render_format

ESC = "\033["
RESET = f"{ESC}0m"
BOLD = f"{ESC}1m"
RED = f"{ESC}31m"


class RowPrinter:
    """Write rows to the output stream, one complete line per row."""

    def __init__(self, config: Configuration, out: Optional[TextIO] = None):
        self.config = config
        self._out = out

    @property
    def out(self) -> TextIO:
        # Resolved lazily so a swapped sys.stdout is honoured
        return self._out if self._out is not None else sys.stdout

    def start(self) -> None:
        if not self.config.pipe:
            if self.config.hide_cursor:
                self.out.write(f"{ESC}?25l")
            if self.config.disable_linewrap:
                self.out.write(f"{ESC}?7l")
        self.out.write("\n" * self.config.logo.padding_top)

    def finish(self) -> None:
        if not self.config.pipe:
            if self.config.hide_cursor:
                self.out.write(f"{ESC}?25h")
            if self.config.disable_linewrap:
                self.out.write(f"{ESC}?7h")
        self.out.flush()

    def _style(self, color: str) -> str:
        if self.config.pipe:
            return ""
        return BOLD + (f"{ESC}{color}m" if color else "")

    def _reset(self) -> str:
        return "" if self.config.pipe else RESET

    def _end_row(self) -> None:
        self.out.write("\n")
        self.out.flush()

    def _indent(self) -> None:
        self.out.write(" " * self.config.logo.padding_left)

    def print_key(self, name: str, index: int = 0, key_override: str = "") -> None:
        """Write indentation, the styled key and the separator."""
        if key_override:
            key = render_format(key_override, [index])
        else:
            key = f"{name} {index}" if index > 0 else name
        self._indent()
        self.out.write(self._style(self.config.color_keys) + key + self._reset())
        self.out.write(self.config.separator)

    def print_row(self, name: str, index: int, key_override: str, text: str) -> None:
        self.print_key(name, index, key_override)
        self.out.write(text)
        self._end_row()

    def print_format(
        self, name: str, index: int, module_args: ModuleArgs, args: Sequence[FormatArg]
    ) -> None:
        """Render the module's output template with its values."""
        self.print_row(name, index, module_args.key, render_format(module_args.output_format, args))

    def print_error(
        self, name: str, index: int, module_args: Optional[ModuleArgs], message: str
    ) -> None:
        """Error row: the error template, or the plain message."""
        if not self.config.show_errors:
            return
        key_override = module_args.key if module_args is not None else ""
        self.print_key(name, index, key_override)
        if module_args is not None and module_args.error_format:
            self.out.write(render_format(module_args.error_format, [message]))
        elif self.config.pipe:
            self.out.write(message)
        else:
            self.out.write(RED + message + RESET)
        self._end_row()

    def print_custom(self, key: Optional[str], value: str) -> None:
        """A --set row; ``key`` is None for --set-keyless."""
        if key is None:
            self._indent()
        else:
            self.print_key(key)
        self.out.write(value)
        self._end_row()

    def print_title(self, user_name: str, host_name: str) -> None:
        style = self._style(self.config.color_title)
        self._indent()
        self.out.write(f"{style}{user_name}{self._reset()}@{style}{host_name}{self._reset()}")
        self._end_row()

    def print_separator(self, length: int) -> None:
        pattern = self.config.separator_string or "-"
        repeats = -(-length // len(pattern))
        self._indent()
        self.out.write((pattern * repeats)[:length])
        self._end_row()

    def print_break(self) -> None:
        self._end_row()

    def print_timing(self, elapsed_ms: int) -> None:
        """Annotate the row just printed with its duration."""
        text = f"{elapsed_ms}ms"
        if self.config.pipe:
            self.out.write(text + "\n")
        else:
            # Save, up one line, far right, back by len, print, restore
            self.out.write(f"{ESC}s{ESC}1A{ESC}9999999C{ESC}{len(text)}D{text}{ESC}u")
        self.out.flush()
