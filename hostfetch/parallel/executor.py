"""
Pre-warm execution.
Starts slow probes on worker threads before the structure runs, so their
rows only wait for whatever is left of the work.
"""

from __future__ import annotations

import concurrent.futures
from dataclasses import dataclass
from typing import Iterable, List, Optional

from loguru import logger

from hostfetch.core.detector import DetectionCache
from hostfetch.modules.base import BaseModule


@dataclass
class PrewarmConfig:
    """Configuration for pre-warm execution."""
    max_workers: int = 4
    thread_name_prefix: str = "hostfetch-prewarm"


class PrewarmExecutor:
    """
    Submit slow module detectors to a thread pool.

    Results land in the shared DetectionCache, so the module's own print
    call blocks on the same future instead of probing twice.
    """

    def __init__(self, cache: DetectionCache, config: Optional[PrewarmConfig] = None):
        """
        Initialize pre-warm executor.

        Args:
            cache: Detection cache shared with the structure dispatcher
            config: Pool configuration
        """
        self.cache = cache
        self.config = config or PrewarmConfig()
        self._pool: Optional[concurrent.futures.ThreadPoolExecutor] = None

    def _executor(self) -> concurrent.futures.ThreadPoolExecutor:
        if self._pool is None:
            self._pool = concurrent.futures.ThreadPoolExecutor(
                max_workers=self.config.max_workers,
                thread_name_prefix=self.config.thread_name_prefix,
            )
        return self._pool

    def prewarm(self, modules: Iterable[BaseModule], multithreading: bool) -> List[str]:
        """
        Prepare the given modules.

        Modules with a ``prepare`` hook (CPU usage baseline) always run it on
        the calling thread. Slow modules are submitted only when
        ``multithreading`` is on.

        Returns:
            Cache keys submitted to the pool
        """
        submitted = []
        for module in modules:
            prepare = getattr(module, "prepare", None)
            if callable(prepare):
                logger.debug(f"Preparing {module.name}")
                prepare()
            if module.slow and multithreading:
                if self.cache.prepare(module.cache_key, module.detect, self._executor()):
                    logger.debug(f"Pre-warming {module.name} in the background")
                    submitted.append(module.cache_key)
        return submitted

    def shutdown(self) -> None:
        """Release the pool without waiting for unfinished probes."""
        if self._pool is not None:
            self._pool.shutdown(wait=False)
            self._pool = None

    def __enter__(self) -> PrewarmExecutor:
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()
