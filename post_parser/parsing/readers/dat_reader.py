"""Reader for whitespace-delimited DAT tables.

DAT files hold one record per line, fields separated by any amount of
whitespace. Lines starting with the comment character and blank lines are
ignored, and all parentheses are dropped, so that vector and tensor values
such as ``(1 2 3)`` yield one field per component.
"""
from typing import BinaryIO

import pandas as pd

from post_parser.errors import TableDecodeError
from post_parser.parsing.definitions import DatOptions
from post_parser.parsing.reader import TableReader

PARENTHESES = str.maketrans("", "", "()")


class DatReader(TableReader):
    tag = "dat"
    options_model = DatOptions

    options: DatOptions

    def records(self, text: str) -> list[list[str]]:
        comment = self.options.comment
        records: list[list[str]] = []
        for line in text.splitlines():
            if comment and line.startswith(comment):
                continue
            fields = line.translate(PARENTHESES).split()
            if fields:
                records.append(fields)
        return records

    def read(self, stream: BinaryIO) -> pd.DataFrame:
        records = self.records(stream.read().decode("utf-8"))
        if not records:
            return pd.DataFrame()

        width = len(records[0])
        for lineno, record in enumerate(records, start=1):
            if len(record) != width:
                raise TableDecodeError(
                    f"dat: record {lineno} has {len(record)} fields, expected {width}"
                )

        df = pd.DataFrame(records, columns=self.default_names(width))
        return df.apply(pd.to_numeric)
