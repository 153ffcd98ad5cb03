"""Reader for delimited text tables."""
import io
from typing import BinaryIO

import pandas as pd

from post_parser.parsing.definitions import CsvOptions
from post_parser.parsing.reader import TableReader


class CsvReader(TableReader):
    tag = "csv"
    options_model = CsvOptions

    options: CsvOptions

    def read(self, stream: BinaryIO) -> pd.DataFrame:
        try:
            return self._read(stream, engine="c")
        except pd.errors.ParserError as err:
            # the python engine copes with some inputs the C parser rejects
            self._logger.debug(f"csv: retrying with the python parser: {err}")
            stream.seek(0)
            return self._read(stream, engine="python")

    def _text(self, stream: BinaryIO) -> io.StringIO:
        """Return the stream's content without its comment lines.

        Only lines starting with the comment character are comments; the
        character is kept inside fields.
        """
        text = stream.read().decode("utf-8")
        comment = self.options.comment
        if comment:
            text = "".join(
                line
                for line in text.splitlines(keepends=True)
                if not line.startswith(comment)
            )
        return io.StringIO(text)

    def _read(self, stream: BinaryIO, engine: str) -> pd.DataFrame:
        df = pd.read_csv(
            self._text(stream),
            sep=self.options.delimiter,
            header=0 if self.options.header else None,
            engine=engine,
        )
        if not self.options.header:
            df.columns = self.default_names(len(df.columns))
        return df
