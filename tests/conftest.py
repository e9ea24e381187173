"""Shared fixtures."""
import io

import pytest
from loguru import logger
from rich.console import Console

from hostfetch.core.config import Configuration
from hostfetch.core.detector import DetectionCache
from hostfetch.core.executor import CommandRunner
from hostfetch.core.options import OptionParser, ParseSession
from hostfetch.core.printing import RowPrinter
from hostfetch.modules.base import ModuleContext
from hostfetch.modules.registry import ModuleRegistry
from hostfetch.utils.paths import PlatformPaths


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop sinks bound to streams that pytest or CliRunner close."""
    yield
    logger.remove()


@pytest.fixture
def config():
    return Configuration(pipe=True)


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def printer(config, output):
    return RowPrinter(config, out=output)


@pytest.fixture
def runner():
    return CommandRunner(timeout=5.0)


@pytest.fixture
def context(config, printer, runner):
    return ModuleContext(config=config, printer=printer, cache=DetectionCache(), runner=runner)


@pytest.fixture
def registry():
    return ModuleRegistry()


@pytest.fixture
def paths(tmp_path):
    """User dir first, system dir second, one data dir."""
    return PlatformPaths(
        config_dirs=[tmp_path / "user" / "hostfetch", tmp_path / "system" / "hostfetch"],
        data_dirs=[tmp_path / "data" / "hostfetch"],
    )


@pytest.fixture
def session():
    return ParseSession()


@pytest.fixture
def parser(config, session, registry, paths):
    return OptionParser(
        config,
        session,
        registry,
        paths,
        console=Console(file=io.StringIO(), width=200, highlight=False, soft_wrap=True),
        err_console=Console(file=io.StringIO(), width=200, highlight=False, soft_wrap=True),
    )
