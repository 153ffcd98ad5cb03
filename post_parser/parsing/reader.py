"""Base class for table readers."""
from abc import ABC, abstractmethod
from typing import BinaryIO, ClassVar, Type

import pandas as pd
from verboselogs import VerboseLogger

from post_parser.parsing.definitions import ReaderOptions


class TableReader(ABC):
    """
    Abstract base class for a decoder turning a byte stream into a table.

    Subclasses set ``tag`` (the format name used in run configurations) and
    ``options_model`` (the pydantic model validating their ``type_spec``).
    Readers must consume the stream sequentially; they may rewind it with
    ``seek(0)`` but must not keep it after returning.
    """

    tag: ClassVar[str] = ""
    options_model: ClassVar[Type[ReaderOptions]] = ReaderOptions

    def __init__(self, logger: VerboseLogger, options: ReaderOptions):
        self._logger = logger
        self.options = options

    @abstractmethod
    def read(self, stream: BinaryIO) -> pd.DataFrame:
        """Decode the whole stream into a table."""
        raise NotImplementedError

    @staticmethod
    def default_names(count: int) -> list[str]:
        """Column names used when the input carries no header."""
        return [f"X{i}" for i in range(count)]
