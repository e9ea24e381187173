"""
Command line interface.
"""

from hostfetch.cli.main import app, run

__all__ = [
    "app",
    "run",
]
