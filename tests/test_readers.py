import io
import textwrap

import pandas as pd
import pytest

from post_parser.errors import ConfigurationError, TableDecodeError, UnknownFormatError
from post_parser.parsing.definitions import FormatSpec


def _stream(text: str) -> io.BytesIO:
    return io.BytesIO(textwrap.dedent(text).lstrip().encode())


def test_registry_discovers_readers(registry):
    assert registry.tags == ["csv", "dat"]
    assert "CSV" in registry


def test_unknown_tag_lists_available(registry):
    with pytest.raises(UnknownFormatError) as excinfo:
        registry.read_table(_stream("x\n1\n"), FormatSpec(type="parquet"))
    assert excinfo.value.available == ["csv", "dat"]
    assert "csv" in str(excinfo.value)


def test_csv_with_header(registry):
    df = registry.read_table(
        _stream(
            """
            # a comment
            x,y
            0,0
            1,1.5
            """
        ),
        FormatSpec(type="CSV"),
    )
    assert list(df.columns) == ["x", "y"]
    assert df["x"].tolist() == [0, 1]
    assert df["y"].tolist() == [0.0, 1.5]


def test_csv_without_header_custom_delimiter(registry):
    spec = FormatSpec(type="csv", type_spec={"header": False, "delimiter": ";"})
    df = registry.read_table(_stream("1;2\n3;4\n"), spec)
    assert list(df.columns) == ["X0", "X1"]
    assert df.values.tolist() == [[1, 2], [3, 4]]


def test_csv_field_names(registry):
    spec = FormatSpec(type="csv", fields=["a", "b"])
    df = registry.read_table(_stream("x,y\n1,2\n"), spec)
    assert list(df.columns) == ["a", "b"]


def test_field_names_length_mismatch(registry):
    spec = FormatSpec(type="csv", fields=["a"])
    with pytest.raises(ConfigurationError):
        registry.read_table(_stream("x,y\n1,2\n"), spec)


def test_csv_bad_options(registry):
    with pytest.raises(ConfigurationError):
        registry.read_table(_stream("x\n"), FormatSpec(type="csv", type_spec={"delimiter": ",,"}))
    with pytest.raises(ConfigurationError):
        registry.read_table(_stream("x\n"), FormatSpec(type="csv", type_spec={"bogus": 1}))


def test_csv_empty_input_is_decode_error(registry):
    with pytest.raises(TableDecodeError) as excinfo:
        registry.read_table(io.BytesIO(b""), FormatSpec(type="csv"), "0.1/data.csv")
    assert "0.1/data.csv" in str(excinfo.value)


def test_dat_reader(registry):
    df = registry.read_table(
        _stream(
            """
            # Probe 0 (0 0 0)
            # Time  p  U
            0.1  1.5  (1 2 3)

            0.2  2.5  (4 5 6)
            """
        ),
        FormatSpec(type="dat"),
    )
    assert list(df.columns) == ["X0", "X1", "X2", "X3", "X4"]
    assert df["X0"].tolist() == [0.1, 0.2]
    assert df["X4"].tolist() == [3, 6]


def test_dat_windows_line_endings(registry):
    df = registry.read_table(io.BytesIO(b"1 2\r\n3 4\r\n"), FormatSpec(type="dat"))
    assert df.values.tolist() == [[1, 2], [3, 4]]


def test_dat_ragged_rows(registry):
    with pytest.raises(TableDecodeError) as excinfo:
        registry.read_table(_stream("1 2\n3\n"), FormatSpec(type="dat"), "0.1/data.dat")
    assert "0.1/data.dat" in str(excinfo.value)


def test_dat_non_numeric(registry):
    with pytest.raises(TableDecodeError):
        registry.read_table(_stream("1 abc\n"), FormatSpec(type="dat"))


def test_dat_empty(registry):
    df = registry.read_table(_stream("# nothing\n"), FormatSpec(type="dat"))
    assert isinstance(df, pd.DataFrame)
    assert df.empty


def test_register_custom_reader(registry):
    from post_parser.parsing.reader import TableReader

    class LinesReader(TableReader):
        tag = "lines"

        def read(self, stream):
            return pd.DataFrame({"line": stream.read().decode().splitlines()})

    registry.register(LinesReader)
    assert "lines" in registry
    df = registry.read_table(io.BytesIO(b"a\nb\n"), FormatSpec(type="Lines", fields=["text"]))
    assert df["text"].tolist() == ["a", "b"]


def test_csv_comment_character_inside_field(registry):
    df = registry.read_table(
        _stream(
            """
            # a comment
            name,value
            sensor#1,1
            # another comment
            sensor#2,2
            """
        ),
        FormatSpec(type="csv"),
    )
    assert df["name"].tolist() == ["sensor#1", "sensor#2"]
    assert df["value"].tolist() == [1, 2]


def test_csv_without_comments(registry):
    spec = FormatSpec(type="csv", type_spec={"comment": None})
    df = registry.read_table(_stream("#x,y\n1,2\n"), spec)
    assert list(df.columns) == ["#x", "y"]
