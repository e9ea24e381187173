"""Tests for the command runner (with mocked subprocess)."""
import subprocess
from unittest.mock import MagicMock, patch

from hostfetch.core.executor import CommandResult


def test_run_command_success(runner):
    """run_command returns CommandResult with success=True when process returns 0."""
    with patch("hostfetch.core.executor.subprocess.run") as m_run:
        m_run.return_value = MagicMock(
            returncode=0,
            stdout="GNU bash, version 5.2.15(1)-release\n",
            stderr="",
        )
        result = runner.run_command(["bash", "--version"])
    assert isinstance(result, CommandResult)
    assert result.success is True
    assert result.return_code == 0
    assert result.command == "bash --version"
    assert result.first_line() == "GNU bash, version 5.2.15(1)-release"


def test_run_command_failure(runner):
    """run_command returns success=False when process returns non-zero."""
    with patch("hostfetch.core.executor.subprocess.run") as m_run:
        m_run.return_value = MagicMock(
            returncode=2,
            stdout="",
            stderr="rpm: no database",
        )
        result = runner.run_command(["rpm", "-qa"])
    assert result.success is False
    assert result.return_code == 2
    assert "no database" in result.stderr


def test_run_command_timeout(runner):
    with patch("hostfetch.core.executor.subprocess.run") as m_run:
        m_run.side_effect = subprocess.TimeoutExpired(cmd=["sleep", "10"], timeout=5.0)
        result = runner.run_command(["sleep", "10"])
    assert result.success is False
    assert result.return_code == -1
    assert "timed out" in result.stderr


def test_run_command_missing_executable(runner):
    with patch("hostfetch.core.executor.subprocess.run") as m_run:
        m_run.side_effect = FileNotFoundError("No such file or directory: 'nvim'")
        result = runner.run_command(["nvim", "--version"])
    assert result.success is False
    assert "No such file" in result.stderr


def test_run_command_passes_timeout(runner):
    with patch("hostfetch.core.executor.subprocess.run") as m_run:
        m_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
        runner.run_command(["true"], timeout=1.5)
    assert m_run.call_args.kwargs["timeout"] == 1.5
    assert m_run.call_args.kwargs["stdin"] is subprocess.DEVNULL


def test_first_line_skips_blank_lines():
    result = CommandResult(
        command="x", return_code=0, stdout="\n\n  first \nsecond\n", stderr="", duration=0.0, success=True
    )
    assert result.first_line() == "first"
