"""
Exceptions shared by the configuration pipeline and the probes.
"""

from typing import Optional


class FetchExit(Exception):
    """Request to terminate the process with a specific exit status."""

    def __init__(self, status: int, message: Optional[str] = None):
        super().__init__(message or "")
        self.status = status
        self.message = message


class InformativeExit(FetchExit):
    """An informative command (help, version, list) finished its output."""

    def __init__(self):
        super().__init__(0)


class ConfigurationError(FetchExit):
    """Fatal configuration error: malformed option, unknown key, missing config."""

    def __init__(self, status: int, message: str):
        super().__init__(status, message)


class DetectionError(Exception):
    """A probe could not produce data. Rendered as an error row, never fatal."""
