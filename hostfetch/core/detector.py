"""
At-most-once detection.

Every probe result is computed once per run and shared by all callers, even
when a pre-warm thread and the main thread ask for it at the same time.
"""

import threading
from concurrent.futures import Executor, Future
from typing import Callable, Dict, Hashable, TypeVar

from loguru import logger

T = TypeVar("T")


class DetectionCache:
    """Results of detectors, keyed by detector identity."""

    def __init__(self):
        self._lock = threading.Lock()
        self._futures: Dict[Hashable, Future] = {}

    def _claim(self, key: Hashable):
        """Return (future, owner). Only the owner runs the detector."""
        with self._lock:
            future = self._futures.get(key)
            if future is not None:
                return future, False
            future = Future()
            self._futures[key] = future
            return future, True

    @staticmethod
    def _run(key: Hashable, future: Future, detect: Callable[[], T]) -> None:
        if not future.set_running_or_notify_cancel():
            return
        logger.debug(f"Running detector: {key}")
        try:
            result = detect()
        except BaseException as e:
            future.set_exception(e)
            if not isinstance(e, Exception):
                raise
        else:
            future.set_result(result)

    def get(self, key: Hashable, detect: Callable[[], T]) -> T:
        """
        Return the result of ``detect``, running it only if nobody has.

        Blocks while another thread computes the same key. A detector that
        raised raises the same exception for every caller.
        """
        future, owner = self._claim(key)
        if owner:
            self._run(key, future, detect)
        return future.result()

    def prepare(self, key: Hashable, detect: Callable[[], T], executor: Executor) -> bool:
        """Start ``detect`` on ``executor`` unless it already ran or is running."""
        future, owner = self._claim(key)
        if not owner:
            return False
        try:
            submitted = executor.submit(self._run, key, future, detect)
        except RuntimeError:
            with self._lock:
                del self._futures[key]
            raise
        # A task cancelled before it started must not leave callers waiting
        submitted.add_done_callback(lambda done: done.cancelled() and future.cancel())
        return True

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._futures
