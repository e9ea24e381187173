"""
Core functionality components.
"""

from hostfetch.core.config import Configuration, EnvironmentSettings, ModuleArgs
from hostfetch.core.detector import DetectionCache
from hostfetch.core.errors import ConfigurationError, DetectionError, FetchExit, InformativeExit
from hostfetch.core.executor import CommandResult, CommandRunner
from hostfetch.core.format import render_format
from hostfetch.core.valuestore import CustomValue, ValueStore

__all__ = [
    "Configuration",
    "EnvironmentSettings",
    "ModuleArgs",
    "DetectionCache",
    "ConfigurationError",
    "DetectionError",
    "FetchExit",
    "InformativeExit",
    "CommandResult",
    "CommandRunner",
    "render_format",
    "CustomValue",
    "ValueStore",
]
