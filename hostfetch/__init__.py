"""
hostfetch - System Information Display Tool
"""

from hostfetch.__version__ import __author__, __version__
from hostfetch.core.config import Configuration
from hostfetch.core.format import render_format

__all__ = [
    "Configuration",
    "render_format",
    "__author__",
    "__version__",
]
