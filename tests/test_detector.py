"""Tests for the at-most-once detection cache."""
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from hostfetch.core.detector import DetectionCache
from hostfetch.core.errors import DetectionError


class Counter:
    """Detector that counts its calls."""

    def __init__(self, result="value", delay_event=None):
        self.calls = 0
        self.result = result
        self.delay_event = delay_event
        self._lock = threading.Lock()

    def __call__(self):
        with self._lock:
            self.calls += 1
        if self.delay_event is not None:
            self.delay_event.wait(timeout=5)
        return self.result


def test_detector_runs_once():
    cache = DetectionCache()
    detect = Counter(result=["shared"])
    first = cache.get("cpu", detect)
    second = cache.get("cpu", detect)
    assert detect.calls == 1
    assert first is second


def test_keys_are_independent():
    cache = DetectionCache()
    detect = Counter()
    cache.get("a", detect)
    cache.get("b", detect)
    assert detect.calls == 2


def test_failure_is_cached():
    cache = DetectionCache()
    calls = []

    def failing():
        calls.append(1)
        raise DetectionError("no battery")

    for _ in range(2):
        with pytest.raises(DetectionError, match="no battery"):
            cache.get("battery", failing)
    assert len(calls) == 1


def test_concurrent_callers_share_one_run():
    cache = DetectionCache()
    release = threading.Event()
    detect = Counter(result=object(), delay_event=release)
    results = []

    def worker():
        results.append(cache.get("slow", detect))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    release.set()
    for thread in threads:
        thread.join(timeout=5)

    assert detect.calls == 1
    assert len(results) == 8
    assert all(result is results[0] for result in results)


def test_prepare_runs_in_background():
    cache = DetectionCache()
    detect = Counter(result="ip")
    with ThreadPoolExecutor(max_workers=2) as executor:
        assert cache.prepare("public-ip", detect, executor) is True
        assert cache.prepare("public-ip", detect, executor) is False
        assert cache.get("public-ip", detect) == "ip"
    assert detect.calls == 1
    assert "public-ip" in cache


def test_prepare_after_get_does_nothing():
    cache = DetectionCache()
    detect = Counter()
    cache.get("weather", detect)
    with ThreadPoolExecutor(max_workers=1) as executor:
        assert cache.prepare("weather", detect, executor) is False
    assert detect.calls == 1


def test_prepare_on_closed_executor_releases_claim():
    cache = DetectionCache()
    executor = ThreadPoolExecutor(max_workers=1)
    executor.shutdown()
    with pytest.raises(RuntimeError):
        cache.prepare("weather", Counter(), executor)
    assert "weather" not in cache
    assert cache.get("weather", Counter(result="sunny")) == "sunny"
