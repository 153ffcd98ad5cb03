"""Time-series assembly component.

A time series is a directory tree of the following form::

    .
    ├── 0.1
    │   ├── data.csv
    │   └── ...
    ├── 0.2
    │   ├── data.csv
    │   └── ...
    └── ...

where each directory is named by the time at which the files beneath it
were written. Every file named like the configured target is decoded, tagged
with its time and appended to one table, which is finally sorted by time.
"""
from __future__ import annotations

import pandas as pd
from verboselogs import VerboseLogger

from post_parser.archive.cache import ArchiveCache
from post_parser.errors import (
    ConfigurationError,
    PostParserError,
    RowCountMismatchError,
    StructuralError,
    TimeDirectoryError,
)
from post_parser.models import vpath
from post_parser.models.directory_wrapper import DirectoryFileSystem
from post_parser.models.file_entry import FileInfo
from post_parser.models.filesystem import (
    CONTINUE,
    FileSystem,
    WalkResult,
    abort,
)
from post_parser.parsing.definitions import TimeSeriesOptions
from post_parser.parsing.registry import ReaderRegistry


def parse_time(name: str) -> float | None:
    """Return the time a directory name stands for, or None."""
    try:
        return float(name)
    except ValueError:
        return None


class _Assembly:
    """State of one walk over a time-series tree."""

    def __init__(
        self,
        fsys: FileSystem,
        root: str,
        options: TimeSeriesOptions,
        registry: ReaderRegistry,
        logger: VerboseLogger,
        time_name: str,
    ) -> None:
        self.fsys = fsys
        self.root = root
        self.options = options
        self.registry = registry
        self.logger = logger
        self.time_name = time_name
        self.time: float | None = None
        self.steps: list[pd.DataFrame] = []

    def visit(self, path: str, info: FileInfo) -> WalkResult:
        # the walk root is never a time directory
        if path == self.root:
            return CONTINUE
        # the directory name is the current time
        if info.is_dir:
            time = parse_time(info.name)
            if time is None:
                return abort(TimeDirectoryError(path))
            self.time = time
            return CONTINUE
        # only process the specified files
        if info.name != self.options.file:
            return CONTINUE
        # no time directory entered yet
        if self.time is None:
            return abort(TimeDirectoryError(vpath.parent(path)))

        try:
            self.steps.append(self.read_step(path, self.time))
        except (PostParserError, OSError) as err:
            return abort(err)
        return CONTINUE

    def read_step(self, path: str, time: float) -> pd.DataFrame:
        with self.fsys.open(path) as stream:
            step = self.registry.read_table(stream, self.options.format_spec, path)

        time_name = self.time_name
        if time_name in step.columns:
            raise StructuralError(
                f"Column {time_name!r} already exists: in file: {path}"
            )
        if self.steps:
            first = self.steps[0]
            if len(step) != len(first):
                raise RowCountMismatchError(path, len(first), len(step))
            if list(step.columns) != list(first.columns[1:]):
                raise StructuralError(
                    f"Column mismatch: expected {list(first.columns[1:])}, "
                    f"got {list(step.columns)}: in file: {path}"
                )

        step.insert(
            0,
            time_name,
            pd.Series([time] * len(step), index=step.index, dtype="float64"),
        )
        self.logger.spam(f"Read {len(step)} rows at time {time} from '{path}'")
        return step

    def result(self) -> pd.DataFrame:
        if not self.steps:
            return pd.DataFrame()
        df = pd.concat(self.steps, ignore_index=True)
        self.logger.debug(f"Sorting {len(self.steps)} time steps by time.")
        return df.sort_values(self.time_name, kind="stable", ignore_index=True)


class TimeSeriesAssembler:
    """Merges per-time-step tables into one table sorted by time."""

    def __init__(
        self,
        reader_registry: ReaderRegistry,
        logger: VerboseLogger,
        archive_cache: ArchiveCache | None = None,
        default_time_name: str = "time",
    ):
        self.reader_registry = reader_registry
        self.logger = logger
        self.archive_cache = archive_cache
        self.default_time_name = default_time_name

    def assemble(self, options: TimeSeriesOptions) -> pd.DataFrame:
        """Read the time series described by ``options``.

        With ``options.archive`` set, ``options.directory`` is a path inside
        the archive; otherwise it is a directory on disk.
        """
        if options.archive:
            if self.archive_cache is None:
                raise ConfigurationError("No archive cache to read archives with")
            fsys = self.archive_cache.filesystem(options.archive)
            return self.assemble_from(fsys, options, vpath.clean(options.directory))

        with DirectoryFileSystem(options.directory, self.logger) as fsys:
            return self.assemble_from(fsys, options)

    def assemble_from(
        self, fsys: FileSystem, options: TimeSeriesOptions, root: str = vpath.ROOT
    ) -> pd.DataFrame:
        """Walk ``fsys`` from ``root`` and assemble every step found.

        Returns
        -------
        pandas.DataFrame
            The time column followed by the step columns, sorted by time.
            Empty if no step file was found.

        Raises
        ------
        post_parser.errors.PostParserError, OSError
            On the first step which can't be read or merged; nothing is
            returned in that case.

        """
        self.logger.info(
            f"Assembling time series '{options.file}' under "
            f"'{fsys.filename}/{root}' ..."
        )
        assembly = _Assembly(
            fsys,
            root,
            options,
            self.reader_registry,
            self.logger,
            options.time_name or self.default_time_name,
        )
        fsys.walk(root, assembly.visit)

        df = assembly.result()
        self.logger.verbose(
            f"Assembled {len(assembly.steps)} time steps ({len(df)} rows)."
        )
        return df
