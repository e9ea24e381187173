"""
Utility functions.
"""

from hostfetch.utils.paths import PlatformPaths

__all__ = [
    "PlatformPaths",
]
