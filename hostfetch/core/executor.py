"""
Command execution for probes that ask other programs.
"""

import subprocess
import time
from typing import List, Optional

from loguru import logger
from pydantic import BaseModel


class CommandResult(BaseModel):
    """Result of a command execution."""

    command: str
    return_code: int
    stdout: str
    stderr: str
    duration: float
    success: bool

    def first_line(self) -> str:
        """First non-empty line of stdout, stripped."""
        for line in self.stdout.splitlines():
            if line.strip():
                return line.strip()
        return ""


class CommandRunner:
    """Run external commands with a timeout and log what happened."""

    def __init__(self, timeout: Optional[float] = 5.0):
        self.timeout = timeout

    def run_command(
        self,
        command: List[str],
        timeout: Optional[float] = None,
    ) -> CommandResult:
        """
        Execute a command and capture its output.

        Args:
            command: Command and arguments as a list
            timeout: Timeout in seconds, defaults to the runner's timeout

        Returns:
            CommandResult object; failures to start are reported, not raised
        """
        timeout = self.timeout if timeout is None else timeout
        start_time = time.monotonic()
        cmd_str = " ".join(command)

        logger.debug(f"Executing command: {cmd_str}")

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=timeout,
                stdin=subprocess.DEVNULL,
            )
        except subprocess.TimeoutExpired:
            duration = time.monotonic() - start_time
            logger.warning(f"Command timed out after {timeout}s: {cmd_str}")
            return CommandResult(
                command=cmd_str,
                return_code=-1,
                stdout="",
                stderr=f"Command timed out after {timeout} seconds",
                duration=duration,
                success=False,
            )
        except OSError as e:
            duration = time.monotonic() - start_time
            logger.debug(f"Command failed to start: {cmd_str} - {e}")
            return CommandResult(
                command=cmd_str,
                return_code=-1,
                stdout="",
                stderr=str(e),
                duration=duration,
                success=False,
            )

        duration = time.monotonic() - start_time
        logger.debug(
            f"Command completed: {cmd_str} "
            f"(return code: {result.returncode}, duration: {duration:.2f}s)"
        )
        return CommandResult(
            command=cmd_str,
            return_code=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
            duration=duration,
            success=(result.returncode == 0),
        )
