"""
Modules that print without a system probe: color blocks and user commands.
"""

import platform
from typing import List, Optional

from pydantic import BaseModel

from hostfetch.core.errors import DetectionError
from hostfetch.core.format import FormatArg
from hostfetch.modules.base import BaseModule

ESC = "\033["


def color_blocks(bright: bool, width: int = 3) -> str:
    """One line of the eight background colors."""
    base = 100 if bright else 40
    blocks = "".join(f"{ESC}{base + code}m{' ' * width}" for code in range(8))
    return blocks + f"{ESC}0m"


class ColorsModule(BaseModule):
    name = "Colors"
    tokens = ("colors",)
    description = "Terminal color palette"

    def detect(self) -> None:
        return None

    def format_values(self, result: None) -> List[FormatArg]:
        return []

    def print(self) -> None:
        # Escape codes are all this row consists of
        if self.config.pipe:
            return
        self.printer.print_break()
        self.printer.print_custom(None, color_blocks(bright=False))
        self.printer.print_custom(None, color_blocks(bright=True))


class CommandOutput(BaseModel):
    key: str
    output: str = ""
    error: Optional[str] = None


class CommandModule(BaseModule):
    """One row per --command-text, labelled by the matching --command-key."""

    name = "Command"
    tokens = ("command",)
    description = "Output of user supplied shell commands"
    format_args = ("Command output",)
    default_format = "{1}"

    def _shell(self) -> List[str]:
        if self.config.command_shell:
            return [self.config.command_shell, "-c"]
        if platform.system() == "Windows":
            return ["cmd.exe", "/c"]
        return ["/bin/sh", "-c"]

    def detect(self) -> List[CommandOutput]:
        texts = self.config.command_texts
        if not texts:
            raise DetectionError("no command text specified, use --command-text")
        keys = self.config.command_keys
        shell = self._shell()
        outputs = []
        for index, text in enumerate(texts):
            key = keys[index] if index < len(keys) else self.name
            result = self.context.runner.run_command(shell + [text])
            output = result.stdout.strip()
            if result.success and output:
                outputs.append(CommandOutput(key=key, output=output))
            elif result.success:
                outputs.append(CommandOutput(key=key, error="command printed nothing"))
            else:
                message = result.stderr.strip().splitlines()
                outputs.append(
                    CommandOutput(key=key, error=message[-1] if message else f"exit code {result.return_code}")
                )
        return outputs

    def key_name(self, result: CommandOutput) -> str:
        return result.key

    def format_values(self, result: CommandOutput) -> List[FormatArg]:
        return [result.output]

    def print_result(self, result: CommandOutput, index: int) -> None:
        if result.error is not None:
            self.printer.print_error(result.key, 0, self.args, result.error)
            return
        super().print_result(result, 0)
