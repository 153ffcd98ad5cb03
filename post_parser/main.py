"""Simulation output post-processing input reader."""
import sys
from argparse import Namespace
from pathlib import Path

import pandas as pd
from dependency_injector.wiring import Provide, inject
from verboselogs import VerboseLogger

from post_parser.archive.cache import ArchiveCache
from post_parser.containers import AppContainer
from post_parser.errors import PostParserError
from post_parser.helpers import dump_to_file, parse_options, verbosity_level
from post_parser.parsing.definition_store import DefinitionStore
from post_parser.services.input_reader import InputReader


@inject
def main(
    args: Namespace,
    input_reader: InputReader = Provide[AppContainer.input_reader],
    definition_store: DefinitionStore = Provide[AppContainer.definition_store],
    archive_cache: ArchiveCache = Provide[AppContainer.archive_cache],
    logger: VerboseLogger = Provide[AppContainer.logger],
) -> int:
    """Program's entrypoint.

    Returns
    -------
    int
        The process exit code.

    """
    tables: list[pd.DataFrame] = []

    try:
        for spec in definition_store.load(args.config):
            logger.info(f"Reading {spec.tag} input ...")
            tables.append(input_reader.read(spec))

    except (FileNotFoundError, OSError, PermissionError) as err:
        logger.error(f"Failed reading {args.config}: {err}")
        return 1

    except PostParserError as err:
        logger.error(f"Failed processing {args.config}: {err}")
        return 1

    finally:
        archive_cache.clear()

    for df in tables:
        logger.info(f"Read table with {len(df)} rows and columns {list(df.columns)}.")

    if not args.output:
        return 0
    for i, df in enumerate(tables):
        # one output file per definition: out.csv, out_1.csv, ...
        output = Path(args.output)
        if i:
            output = output.with_name(f"{output.stem}_{i}{output.suffix}")
        if not dump_to_file(logger, str(output), df):
            return 1
    return 0


def run() -> None:
    """Console script entrypoint."""
    args: Namespace = parse_options("Assemble tables from simulation output.")

    app_container = AppContainer()
    app_container.config().verbosity = verbosity_level(args.verbose)
    app_container.wire(modules=[__name__])
    app_container.init_resources()
    try:
        status = main(args)
    finally:
        app_container.shutdown_resources()
        app_container.unwire()
    sys.exit(status)


if __name__ == "__main__":
    run()
