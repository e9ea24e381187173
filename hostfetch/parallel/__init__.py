"""
Background execution of slow probes.
"""

from hostfetch.parallel.executor import PrewarmConfig, PrewarmExecutor

__all__ = [
    "PrewarmConfig",
    "PrewarmExecutor",
]
