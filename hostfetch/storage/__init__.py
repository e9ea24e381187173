"""
Logging components.
"""

from hostfetch.storage.logger import setup_logging

__all__ = [
    "setup_logging",
]
