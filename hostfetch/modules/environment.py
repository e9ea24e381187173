"""
Session environment probes: shell, terminal, desktop environment and editor.

Shell and Terminal are detected together by walking the parent processes of
hostfetch, so both modules share one cached detector.
"""

import os
import platform
import re
from typing import List, Optional

import psutil
from loguru import logger
from pydantic import BaseModel

from hostfetch.core.errors import DetectionError
from hostfetch.core.executor import CommandRunner
from hostfetch.core.format import FormatArg
from hostfetch.modules.base import BaseModule

KNOWN_SHELLS = frozenset(
    {
        "sh",
        "bash",
        "zsh",
        "fish",
        "dash",
        "ksh",
        "mksh",
        "oksh",
        "tcsh",
        "csh",
        "nu",
        "xonsh",
        "elvish",
        "ion",
        "pwsh",
        "powershell",
        "cmd",
    }
)

# Processes between hostfetch and the shell, or between the shell and the terminal
WRAPPER_PROCESSES = frozenset(
    {
        "hostfetch",
        "sudo",
        "doas",
        "su",
        "login",
        "sshd",
        "strace",
        "ltrace",
        "gdb",
        "time",
        "env",
        "uv",
        "pipx",
        "poetry",
        "tmux",
        "screen",
    }
)

# Shells whose --version output carries a parsable version number
VERSION_FLAG_SHELLS = frozenset({"bash", "zsh", "fish", "tcsh", "nu", "xonsh", "elvish", "pwsh"})

TERM_PROGRAM_NAMES = {
    "apple_terminal": "Apple Terminal",
    "iterm.app": "iTerm2",
    "vscode": "Visual Studio Code",
    "wezterm": "WezTerm",
    "hyper": "Hyper",
    "tabby": "Tabby",
    "warpterminal": "Warp",
    "ghostty": "Ghostty",
}

_VERSION = re.compile(r"\d+(?:\.\d+)+")


def _process_name(process: psutil.Process) -> str:
    name = process.name()
    if name.lower().endswith(".exe"):
        name = name[: -len(".exe")]
    # Login shells show up as "-bash"
    return name.lstrip("-")


def _is_wrapper(name: str) -> bool:
    lowered = name.lower()
    return lowered in WRAPPER_PROCESSES or lowered.startswith("python")


def parse_version(text: str) -> str:
    match = _VERSION.search(text)
    return match.group(0) if match else ""


class TerminalShellResult(BaseModel):
    shell_process_name: str = ""
    shell_exe: str = ""
    shell_exe_name: str = ""
    shell_version: str = ""
    user_shell: str = ""
    terminal_process_name: str = ""
    terminal_exe: str = ""
    terminal_pretty_name: str = ""
    terminal_version: str = ""


def _shell_version(runner: CommandRunner, exe: str, name: str) -> str:
    if name.lower() not in VERSION_FLAG_SHELLS:
        return ""
    result = runner.run_command([exe or name, "--version"])
    if not result.success:
        return ""
    return parse_version(result.first_line())


def detect_terminal_shell(
    runner: CommandRunner,
    with_shell_version: bool = True,
    with_terminal_version: bool = True,
    pid: Optional[int] = None,
) -> TerminalShellResult:
    """Walk up the process tree: the first shell found, then the process running it."""
    result = TerminalShellResult(user_shell=os.environ.get("SHELL", ""))

    try:
        process = psutil.Process(pid if pid is not None else os.getppid())
        shell = None
        while process is not None and process.pid > 1:
            name = _process_name(process)
            if name.lower() in KNOWN_SHELLS:
                shell = process
                break
            if not _is_wrapper(name):
                logger.debug(f"Parent process {name} is neither a shell nor a wrapper")
            process = process.parent()

        if shell is not None:
            result.shell_process_name = _process_name(shell)
            try:
                result.shell_exe = shell.exe()
            except psutil.Error:
                result.shell_exe = ""
            result.shell_exe_name = os.path.basename(result.shell_exe) or result.shell_process_name

            terminal = shell.parent()
            while terminal is not None and terminal.pid > 1:
                name = _process_name(terminal)
                if name.lower() not in KNOWN_SHELLS and not _is_wrapper(name):
                    break
                terminal = terminal.parent()
            if terminal is not None and terminal.pid > 1:
                result.terminal_process_name = _process_name(terminal)
                try:
                    result.terminal_exe = terminal.exe()
                except psutil.Error:
                    result.terminal_exe = ""
    except psutil.Error as e:
        logger.debug(f"Process tree walk stopped: {e}")

    if not result.shell_exe_name and result.user_shell:
        result.shell_exe = result.user_shell
        result.shell_exe_name = os.path.basename(result.user_shell)
        result.shell_process_name = result.shell_exe_name

    if with_shell_version and result.shell_exe_name:
        result.shell_version = _shell_version(runner, result.shell_exe, result.shell_exe_name)

    term_program = os.environ.get("TERM_PROGRAM", "")
    if term_program:
        result.terminal_pretty_name = TERM_PROGRAM_NAMES.get(term_program.lower(), term_program)
        if with_terminal_version:
            result.terminal_version = os.environ.get("TERM_PROGRAM_VERSION", "")
    elif result.terminal_process_name:
        result.terminal_pretty_name = result.terminal_process_name
    elif platform.system() == "Windows" and os.environ.get("WT_SESSION"):
        result.terminal_pretty_name = "Windows Terminal"
    else:
        result.terminal_pretty_name = os.environ.get("TERM", "")

    return result


class _TerminalShellModule(BaseModule):
    @property
    def cache_key(self) -> str:
        return "terminalshell"

    def detect(self) -> TerminalShellResult:
        return detect_terminal_shell(
            self.context.runner,
            with_shell_version=self.config.shell_version,
            with_terminal_version=self.config.terminal_version,
        )


class ShellModule(_TerminalShellModule):
    name = "Shell"
    option_name = "shell"
    tokens = ("shell",)
    description = "Shell running hostfetch"
    format_args = (
        "Shell process name",
        "Shell path with exe name",
        "Shell exe name",
        "Shell version",
        "User shell path ($SHELL)",
    )
    default_format = "{3}{?4}[ {4}]{?}"

    def format_values(self, result: TerminalShellResult) -> List[FormatArg]:
        return [
            result.shell_process_name,
            result.shell_exe,
            result.shell_exe_name,
            result.shell_version,
            result.user_shell,
        ]

    def print_result(self, result: TerminalShellResult, index: int) -> None:
        if not result.shell_exe_name:
            self.print_error("couldn't detect the shell", index)
            return
        super().print_result(result, index)


class TerminalModule(_TerminalShellModule):
    name = "Terminal"
    option_name = "terminal"
    tokens = ("terminal",)
    description = "Terminal emulator hostfetch runs in"
    format_args = ("Terminal process name", "Terminal path with exe name", "Terminal name", "Terminal version")
    default_format = "{3}{?4}[ {4}]{?}"

    def format_values(self, result: TerminalShellResult) -> List[FormatArg]:
        return [
            result.terminal_process_name,
            result.terminal_exe,
            result.terminal_pretty_name,
            result.terminal_version,
        ]

    def print_result(self, result: TerminalShellResult, index: int) -> None:
        if not result.terminal_pretty_name:
            self.print_error("couldn't detect the terminal", index)
            return
        super().print_result(result, index)


class DEResult(BaseModel):
    name: str = ""
    session_type: str = ""


class DEModule(BaseModule):
    name = "DE"
    option_name = "de"
    tokens = ("de", "desktopenvironment")
    description = "Desktop environment"
    format_args = ("Desktop environment name", "Session type")
    default_format = "{1}{?2}[ ({2})]{?}"

    def detect(self) -> DEResult:
        system = platform.system()
        if system == "Darwin":
            return DEResult(name="Aqua")
        if system == "Windows":
            return DEResult(name="Fluent")

        name = ""
        for variable in ("XDG_CURRENT_DESKTOP", "XDG_SESSION_DESKTOP", "DESKTOP_SESSION"):
            value = os.environ.get(variable, "")
            if value:
                # XDG_CURRENT_DESKTOP may be a list like "ubuntu:GNOME"
                name = value.split(":")[-1]
                break
        if not name:
            raise DetectionError("no desktop environment found")
        return DEResult(name=name, session_type=os.environ.get("XDG_SESSION_TYPE", ""))

    def format_values(self, result: DEResult) -> List[FormatArg]:
        return [result.name, result.session_type]


class EditorResult(BaseModel):
    visual_name: str = ""
    editor_name: str = ""


class EditorModule(BaseModule):
    name = "Editor"
    option_name = "editor"
    tokens = ("editor",)
    description = "Default editor ($VISUAL or $EDITOR)"
    format_args = ("Visual name", "Editor name")

    def _editor_name(self, command: str) -> str:
        """First line of ``<editor> --version``, or the executable name if that fails."""
        if not command:
            return ""
        result = self.context.runner.run_command([command, "--version"])
        line = result.first_line() if result.success else ""
        return line or os.path.basename(command)

    def detect(self) -> EditorResult:
        visual = os.environ.get("VISUAL", "")
        editor = os.environ.get("EDITOR", "")
        if not visual and not editor:
            raise DetectionError("neither $VISUAL nor $EDITOR is set.")
        return EditorResult(visual_name=self._editor_name(visual), editor_name=self._editor_name(editor))

    def format_values(self, result: EditorResult) -> List[FormatArg]:
        return [result.visual_name, result.editor_name]

    def default_output(self, result: EditorResult) -> str:
        return result.visual_name or result.editor_name
