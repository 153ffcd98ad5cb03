"""Reader plugin system for decoding different table formats."""
import inspect
import pkgutil
from typing import BinaryIO, Dict, List, Optional, Type

import pandas as pd
from pydantic import ValidationError
from verboselogs import VerboseLogger

from post_parser.errors import (
    ConfigurationError,
    PostParserError,
    TableDecodeError,
    UnknownFormatError,
)

from . import readers
from .definitions import FormatSpec
from .reader import TableReader


def set_names(df: pd.DataFrame, names: List[str]) -> pd.DataFrame:
    """Rename the columns of ``df`` positionally, if ``names`` is not empty."""
    if not names or df.columns.empty:
        return df
    if len(names) != len(df.columns):
        raise ConfigurationError(
            f"Cannot set {len(names)} field names on {len(df.columns)} columns"
        )
    df.columns = list(names)
    return df


class ReaderRegistry:
    """Registry mapping format tags to table reader classes."""

    def __init__(self, logger: VerboseLogger):
        self.logger = logger
        self._readers: Dict[str, Type[TableReader]] = self._discover_readers()

    def _discover_readers(self) -> Dict[str, Type[TableReader]]:
        """Discover all reader classes in the 'readers' module."""
        discovered: Dict[str, Type[TableReader]] = {}
        for _, name, _ in pkgutil.iter_modules(readers.__path__):
            module = __import__(f"{readers.__name__}.{name}", fromlist=[""])
            for _, cls in inspect.getmembers(module, inspect.isclass):
                if issubclass(cls, TableReader) and cls is not TableReader and cls.tag:
                    discovered[cls.tag.lower()] = cls
        return discovered

    def register(self, reader_cls: Type[TableReader]) -> None:
        self._readers[reader_cls.tag.lower()] = reader_cls

    @property
    def tags(self) -> List[str]:
        return sorted(self._readers)

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and tag.lower() in self._readers

    def create(self, spec: FormatSpec) -> TableReader:
        """
        Instantiate the reader for ``spec`` with validated options.
        """
        reader_cls = self._readers.get(spec.tag)
        if reader_cls is None:
            raise UnknownFormatError(spec.type, self.tags)
        try:
            options = reader_cls.options_model.model_validate(spec.type_spec)
        except ValidationError as err:
            raise ConfigurationError(f"{spec.tag}: {err}") from err
        return reader_cls(logger=self.logger, options=options)

    def read_table(
        self, stream: BinaryIO, spec: FormatSpec, path: Optional[str] = None
    ) -> pd.DataFrame:
        """Decode ``stream`` with the reader selected by ``spec.type``.

        Decoder failures are raised as ``TableDecodeError`` naming ``path``.
        """
        reader = self.create(spec)
        try:
            df = reader.read(stream)
        except PostParserError as err:
            if isinstance(err, TableDecodeError) and err.path is None and path:
                raise TableDecodeError(err, path) from err
            raise
        except ValueError as err:  # pandas parser errors included
            raise TableDecodeError(f"{spec.tag}: {err}", path) from err

        self.logger.spam(f"Read {df.shape} table with {reader.__class__.__name__}")
        return set_names(df, spec.fields)
