"""Input processing component."""
from __future__ import annotations

from typing import Callable, Dict, Type, TypeVar

import pandas as pd
from pydantic import BaseModel, ValidationError
from verboselogs import VerboseLogger

from post_parser.archive.cache import ArchiveCache
from post_parser.errors import ConfigurationError, StructuralError, UnknownFormatError
from post_parser.models import vpath
from post_parser.models.filesystem import FileSystem
from post_parser.parsing.definitions import (
    ArchiveOptions,
    FormatSpec,
    MultipleOptions,
    TimeSeriesOptions,
)
from post_parser.parsing.registry import ReaderRegistry, set_names
from post_parser.services.time_series import TimeSeriesAssembler

TIME_SERIES = "time-series"
ARCHIVE = "archive"
MULTIPLE = "multiple"

M = TypeVar("M", bound=BaseModel)


def validate(model: Type[M], spec: FormatSpec) -> M:
    try:
        return model.model_validate(spec.type_spec)
    except ValidationError as err:
        raise ConfigurationError(f"{spec.tag}: {err}") from err


class InputReader:
    """Reads one table from the input described by a ``FormatSpec``.

    Handled input types are the registered table formats (read from a file
    on disk), ``time-series``, ``archive`` and ``multiple``.
    """

    def __init__(
        self,
        reader_registry: ReaderRegistry,
        time_series_assembler: TimeSeriesAssembler,
        archive_cache: ArchiveCache,
        logger: VerboseLogger,
    ):
        self.reader_registry = reader_registry
        self.time_series_assembler = time_series_assembler
        self.archive_cache = archive_cache
        self.logger = logger
        self._inputs: Dict[str, Callable[[FormatSpec], pd.DataFrame]] = {
            TIME_SERIES: self._read_time_series,
            ARCHIVE: self._read_archive,
            MULTIPLE: self._read_multiple,
        }

    @property
    def types(self) -> list[str]:
        return sorted(set(self._inputs) | set(self.reader_registry.tags))

    def read(self, spec: FormatSpec) -> pd.DataFrame:
        """Read the input described by ``spec``, columns renamed to its fields."""
        handler = self._inputs.get(spec.tag)
        if handler is not None:
            return handler(spec)
        if spec.tag in self.reader_registry:
            return self._read_file(spec)
        raise UnknownFormatError(spec.type, self.types)

    @staticmethod
    def _file_of(spec: FormatSpec) -> str:
        file = spec.type_spec.get("file")
        if not file:
            raise ConfigurationError(f"{spec.tag}: field unset: 'file'")
        return str(file)

    def _read_file(self, spec: FormatSpec) -> pd.DataFrame:
        file = self._file_of(spec)
        self.logger.verbose(f"Reading '{file}' as {spec.tag} ...")
        with open(file, "rb") as stream:
            return self.reader_registry.read_table(stream, spec, file)

    def _read_time_series(self, spec: FormatSpec) -> pd.DataFrame:
        options = validate(TimeSeriesOptions, spec)
        return set_names(self.time_series_assembler.assemble(options), spec.fields)

    def _read_archive(self, spec: FormatSpec) -> pd.DataFrame:
        options = validate(ArchiveOptions, spec)
        try:
            fsys = self.archive_cache.filesystem(options.file)
            df = self._read_from(fsys, options.format_spec)
        finally:
            if options.clear_after_read:
                self.archive_cache.clear()
        return set_names(df, spec.fields)

    def _read_multiple(self, spec: FormatSpec) -> pd.DataFrame:
        options = validate(MultipleOptions, spec)
        tables = [self.read(inner) for inner in options.format_specs]

        rows = len(tables[0])
        for i, df in enumerate(tables[1:], start=1):
            if len(df) != rows:
                raise StructuralError(
                    f"multiple: input {i} ({options.format_specs[i].tag}) has "
                    f"{len(df)} rows, expected {rows}"
                )
        self.logger.verbose(f"Joining {len(tables)} tables column-wise.")
        df = pd.concat([t.reset_index(drop=True) for t in tables], axis=1)
        return set_names(df, spec.fields)

    def _read_from(self, fsys: FileSystem, spec: FormatSpec) -> pd.DataFrame:
        if spec.tag == TIME_SERIES:
            options = validate(TimeSeriesOptions, spec)
            df = self.time_series_assembler.assemble_from(
                fsys, options, vpath.clean(options.directory)
            )
            return set_names(df, spec.fields)
        if spec.tag not in self.reader_registry:
            raise UnknownFormatError(
                spec.type, [TIME_SERIES, *self.reader_registry.tags]
            )

        path = vpath.clean(self._file_of(spec))
        with fsys.open(path) as stream:
            return self.reader_registry.read_table(stream, spec, path)
