"""
Main CLI application using Typer.

hostfetch has its own option grammar (values follow their option, booleans
may omit the value, config files use the same keys), so Typer only collects
the raw arguments and hands them to the OptionParser.
"""

from __future__ import annotations

from typing import Optional, Sequence

import typer
from loguru import logger
from rich.console import Console

from hostfetch.core.config import Configuration, EnvironmentSettings
from hostfetch.core.detector import DetectionCache
from hostfetch.core.dispatcher import StructureDispatcher, split_structure
from hostfetch.core.errors import FetchExit
from hostfetch.core.executor import CommandRunner
from hostfetch.core.help_content import DEFAULT_STRUCTURE
from hostfetch.core.options import OptionParser, ParseSession
from hostfetch.core.printing import RowPrinter
from hostfetch.modules.base import ModuleContext
from hostfetch.modules.registry import ModuleRegistry
from hostfetch.parallel.executor import PrewarmExecutor
from hostfetch.storage.logger import setup_logging
from hostfetch.utils.paths import PlatformPaths

app = typer.Typer(
    name="hostfetch",
    help="Display information about this system",
    add_completion=False,
)

console = Console(highlight=False, emoji=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)


def resolve_configuration(
    argv: Sequence[str],
    settings: EnvironmentSettings,
    paths: PlatformPaths,
    registry: ModuleRegistry,
) -> tuple:
    """
    Build the run's Configuration: defaults, then config files, then argv.

    Returns:
        (Configuration, ParseSession)

    Raises:
        FetchExit: informative command finished, or fatal configuration error
    """
    config = Configuration()
    session = ParseSession()
    parser = OptionParser(config, session, registry, paths, console=console, err_console=err_console)

    if settings.load_user_config:
        parser.cascade.load_user_configs(session)
    else:
        logger.debug("NO_CONFIG is set, skipping config files")
    parser.parse_arguments(argv)

    return config, session


def execute_structure(
    config: Configuration,
    session: ParseSession,
    registry: ModuleRegistry,
    printer: Optional[RowPrinter] = None,
) -> None:
    """Pre-warm slow modules, then print every structure token in order."""
    structure = session.structure or DEFAULT_STRUCTURE
    tokens = split_structure(structure)
    logger.debug(f"Structure: {':'.join(tokens)}")

    cache = DetectionCache()
    context = ModuleContext(
        config=config,
        printer=printer or RowPrinter(config),
        cache=cache,
        runner=CommandRunner(),
    )
    dispatcher = StructureDispatcher(config, session.values, registry, context)

    with PrewarmExecutor(cache) as prewarm:
        prewarm.prewarm(dispatcher.referenced_modules(tokens), config.multithreading)
        context.printer.start()
        try:
            dispatcher.run(tokens)
        finally:
            context.printer.finish()


def run(argv: Sequence[str]) -> int:
    """
    Run hostfetch with raw command line arguments.

    Returns:
        Process exit status
    """
    settings = EnvironmentSettings()
    setup_logging(settings.log_level.value)

    registry = ModuleRegistry()
    paths = PlatformPaths.detect()

    try:
        config, session = resolve_configuration(argv, settings, paths, registry)
    except FetchExit as e:
        if e.message:
            err_console.print(e.message, markup=False, emoji=False, highlight=False)
        logger.debug(f"Exiting with status {e.status}")
        return e.status

    if config.log_level is not None or config.log_file:
        level = config.log_level.value if config.log_level is not None else settings.log_level.value
        setup_logging(level, config.log_file or None)

    execute_structure(config, session, registry)
    return 0


@app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
    add_help_option=False,
)
def fetch(ctx: typer.Context):
    """
    Display information about this system.
    Run `hostfetch --help` for the full list of options.
    """
    status = run(ctx.args)
    if status:
        raise typer.Exit(code=status)
