"""Helper functions."""
from argparse import ArgumentParser, Namespace
from pathlib import Path

import coloredlogs
import pandas as pd
from verboselogs import VerboseLogger

LEVELS: list[str] = ["INFO", "VERBOSE", "DEBUG", "SPAM"]


def dump_to_file(logger: VerboseLogger, filename: str, df: pd.DataFrame) -> bool:
    """Save a table to a local CSV file.

    Parameters
    ----------
    logger : verboselogs.VerboseLogger
        The program's logger.
    filename : str
        The file to write to.
    df : pandas.DataFrame
        The table to write.

    Returns
    -------
    bool
        Whether the file was written.

    """
    filepath = Path(filename)

    try:
        if not filepath.parent.exists():
            filepath.parent.mkdir(parents=True)

        df.to_csv(filepath, index=False)

    except (FileNotFoundError, OSError, PermissionError, ValueError) as err:
        logger.error(f"Failed to write file to '{str(filepath)}': {err}")
        return False

    logger.info(f"Successfully wrote '{str(filepath)}'.")
    return True


def parse_options(description: str) -> Namespace:
    """Parse command-line arguments.

    Parameters
    ----------
    description : str
        The program's description.

    Returns
    -------
    argparse.Namespace
        Parsed command-line arguments as an object.

    """
    parser = ArgumentParser(description=description)

    parser.add_argument(
        "config",
        type=str,
        help="the run configuration describing the input (.yml, .yaml, .json)",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="FILENAME.csv",
        type=str,
        default=None,
        help="write the resulting table to a CSV file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="increase logs output verbosity (default: info, -v: verbose, "
        "-vv: debug, -vvv: spam)",
    )

    return parser.parse_args()


def verbosity_level(count: int) -> str:
    """Map a number of -v flags to a log level name."""
    return LEVELS[min(max(count, 0), len(LEVELS) - 1)]


def init_logger(
    name: str,
    verbosity_level: str,
    formatting: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
) -> VerboseLogger:
    """Initialize the program's logger.

    Parameters
    ----------
    name : str
        The logger's name.
    verbosity_level : str
        Verbosity log level, one of INFO, VERBOSE, DEBUG, SPAM.
    formatting : str, optional
        The log format.

    Returns
    -------
    verboselogs.VerboseLogger
        The logger.

    """
    level = verbosity_level.upper() if verbosity_level.upper() in LEVELS else "INFO"
    logger = VerboseLogger(name)

    coloredlogs.install(
        logger=logger,
        level=level,
        fmt=formatting,
        isatty=True,
    )

    return logger
