"""Tests for pre-warm execution of slow modules."""
import threading
import time

from hostfetch.modules.base import BaseModule
from hostfetch.parallel.executor import PrewarmConfig, PrewarmExecutor


class SlowModule(BaseModule):
    name = "Slow"
    tokens = ("slow",)
    default_format = "{1}"
    slow = True

    def __init__(self, context, release=None):
        super().__init__(context)
        self.calls = 0
        self.release = release

    def detect(self):
        self.calls += 1
        if self.release is not None:
            self.release.wait(timeout=5)
        return "done"

    def format_values(self, result):
        return [result]


class FastModule(SlowModule):
    name = "Fast"
    tokens = ("fast",)
    slow = False


class PreparedModule(FastModule):
    name = "Prepared"
    tokens = ("prepared",)

    def prepare(self):
        self.prepared = True


class TestPrewarmConfig:
    def test_default_config(self):
        config = PrewarmConfig()
        assert config.max_workers == 4
        assert config.thread_name_prefix == "hostfetch-prewarm"


class TestPrewarmExecutor:
    def test_slow_modules_submitted_when_multithreading(self, context):
        slow = SlowModule(context)
        fast = FastModule(context)
        with PrewarmExecutor(context.cache) as prewarm:
            submitted = prewarm.prewarm([slow, fast], multithreading=True)
            assert submitted == ["slow"]
            assert context.cache.get("slow", slow.detect) == "done"
        assert slow.calls == 1
        assert fast.calls == 0

    def test_nothing_submitted_without_multithreading(self, context):
        slow = SlowModule(context)
        with PrewarmExecutor(context.cache) as prewarm:
            assert prewarm.prewarm([slow], multithreading=False) == []
        assert "slow" not in context.cache

    def test_prepare_hook_always_runs(self, context):
        module = PreparedModule(context)
        with PrewarmExecutor(context.cache) as prewarm:
            prewarm.prewarm([module], multithreading=False)
        assert module.prepared is True

    def test_shutdown_does_not_wait(self, context):
        release = threading.Event()
        slow = SlowModule(context, release=release)
        prewarm = PrewarmExecutor(context.cache)
        prewarm.prewarm([slow], multithreading=True)

        start = time.monotonic()
        prewarm.shutdown()
        elapsed = time.monotonic() - start
        release.set()

        assert elapsed < 1.0

    def test_module_print_uses_prewarmed_result(self, context, output):
        slow = SlowModule(context)
        with PrewarmExecutor(context.cache) as prewarm:
            prewarm.prewarm([slow], multithreading=True)
            slow.print()
        assert slow.calls == 1
        assert output.getvalue() == "Slow: done\n"
