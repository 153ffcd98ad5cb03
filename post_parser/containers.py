"""Dependency injection containers for the post-parser application."""

from __future__ import annotations

from pathlib import Path

from dependency_injector import containers, providers

from post_parser.archive.builder import ArchiveBuilder
from post_parser.archive.cache import ArchiveCache
from post_parser.config import Settings
from post_parser.helpers import init_logger
from post_parser.parsing.definition_store import DefinitionStore
from post_parser.parsing.registry import ReaderRegistry
from post_parser.services.input_reader import InputReader
from post_parser.services.time_series import TimeSeriesAssembler


class AppContainer(containers.DeclarativeContainer):
    """Main application container."""

    config = providers.Singleton(Settings)
    logger = providers.Singleton(
        init_logger,
        "post_parser",
        config.provided.verbosity,
        config.provided.log_format,
    )

    definition_store = providers.Singleton(
        DefinitionStore,
        base_dirs=providers.Callable(
            lambda cfg: [Path(p) for p in cfg.definitions_dirs], config
        ),
    )

    # Decoded archives live as long as the container; clear with
    # archive_cache().clear().
    archive_builder = providers.Factory(ArchiveBuilder, logger=logger)
    archive_cache = providers.Singleton(
        ArchiveCache,
        builder=archive_builder,
        logger=logger,
        enabled=config.provided.archive_cache_enabled,
    )

    reader_registry = providers.Singleton(ReaderRegistry, logger=logger)

    time_series_assembler = providers.Factory(
        TimeSeriesAssembler,
        reader_registry=reader_registry,
        logger=logger,
        archive_cache=archive_cache,
        default_time_name=config.provided.default_time_name,
    )

    input_reader = providers.Factory(
        InputReader,
        reader_registry=reader_registry,
        time_series_assembler=time_series_assembler,
        archive_cache=archive_cache,
        logger=logger,
    )
