from pathlib import Path

import pytest
from pandas.testing import assert_frame_equal

from post_parser.errors import (
    ConfigurationError,
    EntryNotFoundError,
    StructuralError,
    UnknownFormatError,
)
from post_parser.parsing.definitions import FormatSpec
from post_parser.services.input_reader import InputReader

from conftest import pack_tar, pack_zip


@pytest.fixture
def input_reader(registry, assembler, cache, logger):
    return InputReader(
        reader_registry=registry,
        time_series_assembler=assembler,
        archive_cache=cache,
        logger=logger,
    )


def _series_spec(directory, **extra) -> FormatSpec:
    return FormatSpec(
        type="time-series",
        type_spec={
            "file": "data.csv",
            "directory": str(directory),
            "format_spec": {"type": "csv"},
            **extra,
        },
    )


def test_types(input_reader):
    assert input_reader.types == ["archive", "csv", "dat", "multiple", "time-series"]


def test_read_csv_file(input_reader, series_dir):
    spec = FormatSpec(
        type="csv",
        fields=["a", "b"],
        type_spec={"file": str(series_dir / "0.1" / "data.csv")},
    )
    df = input_reader.read(spec)
    assert list(df.columns) == ["a", "b"]
    assert len(df) == 6


def test_read_dat_file(input_reader, series_dir):
    spec = FormatSpec(type="dat", type_spec={"file": str(series_dir / "0.2" / "data.dat")})
    df = input_reader.read(spec)
    assert list(df.columns) == ["X0", "X1"]


def test_file_unset(input_reader):
    with pytest.raises(ConfigurationError, match="file"):
        input_reader.read(FormatSpec(type="csv"))


def test_missing_file(input_reader, tmp_path):
    spec = FormatSpec(type="csv", type_spec={"file": str(tmp_path / "nope.csv")})
    with pytest.raises(FileNotFoundError):
        input_reader.read(spec)


def test_unknown_type(input_reader):
    with pytest.raises(UnknownFormatError) as excinfo:
        input_reader.read(FormatSpec(type="ram"))
    assert "time-series" in excinfo.value.available


def test_time_series(input_reader, series_dir):
    df = input_reader.read(_series_spec(series_dir))
    assert list(df.columns) == ["time", "x", "y"]
    assert len(df) == 18


def test_time_series_fields(input_reader, series_dir):
    spec = _series_spec(series_dir, time_name="t")
    spec.fields = ["T", "X", "Y"]
    df = input_reader.read(spec)
    assert list(df.columns) == ["T", "X", "Y"]


def test_time_series_bad_options(input_reader, series_dir):
    spec = FormatSpec(type="time-series", type_spec={"file": "data.csv"})
    with pytest.raises(ConfigurationError):
        input_reader.read(spec)


def test_time_series_in_archive_option(input_reader, series_dir, tmp_path):
    archive = pack_tar(series_dir, tmp_path / "run.tar.xz", "w:xz")
    expected = input_reader.read(_series_spec(series_dir))
    df = input_reader.read(_series_spec(".", archive=str(archive)))
    assert_frame_equal(df, expected)


def test_archive_with_inner_time_series(input_reader, series_dir, tmp_path):
    archive = pack_zip(series_dir, tmp_path / "run.zip")
    spec = FormatSpec(
        type="archive",
        fields=["t", "a", "b"],
        type_spec={
            "file": str(archive),
            "format_spec": {
                "type": "time-series",
                "type_spec": {
                    "file": "data.dat",
                    "directory": ".",
                    "format_spec": {"type": "dat"},
                },
            },
        },
    )
    df = input_reader.read(spec)
    assert list(df.columns) == ["t", "a", "b"]
    assert df["t"].tolist()[:6] == [0.1] * 6
    assert len(df) == 18


def test_archive_with_inner_file(input_reader, series_dir, tmp_path):
    archive = pack_tar(series_dir, tmp_path / "run.tgz", "w:gz")
    spec = FormatSpec(
        type="archive",
        type_spec={
            "file": str(archive),
            "format_spec": {"type": "csv", "type_spec": {"file": "0.3/data.csv"}},
        },
    )
    df = input_reader.read(spec)
    assert list(df.columns) == ["x", "y"]
    assert df["y"].tolist() == [0, 1, 2, 2, 1, 0]


def test_archive_missing_inner_file(input_reader, series_dir, tmp_path):
    archive = pack_zip(series_dir, tmp_path / "run.zip")
    spec = FormatSpec(
        type="archive",
        type_spec={
            "file": str(archive),
            "format_spec": {"type": "csv", "type_spec": {"file": "0.4/data.csv"}},
        },
    )
    with pytest.raises(EntryNotFoundError):
        input_reader.read(spec)


def test_archive_unknown_inner_type(input_reader, series_dir, tmp_path):
    archive = pack_zip(series_dir, tmp_path / "run.zip")
    spec = FormatSpec(
        type="archive",
        type_spec={"file": str(archive), "format_spec": {"type": "archive"}},
    )
    with pytest.raises(UnknownFormatError):
        input_reader.read(spec)


@pytest.mark.parametrize("clear_after_read", [True, False])
def test_archive_clear_after_read(input_reader, cache, series_dir, tmp_path, clear_after_read):
    archive = pack_zip(series_dir, tmp_path / "run.zip")
    spec = FormatSpec(
        type="archive",
        type_spec={
            "file": str(archive),
            "clear_after_read": clear_after_read,
            "format_spec": {"type": "csv", "type_spec": {"file": "0.1/data.csv"}},
        },
    )
    input_reader.read(spec)
    assert (Path(archive) in cache) is not clear_after_read


def test_archive_cleared_after_failure(input_reader, cache, series_dir, tmp_path):
    archive = pack_zip(series_dir, tmp_path / "run.zip")
    spec = FormatSpec(
        type="archive",
        type_spec={
            "file": str(archive),
            "clear_after_read": True,
            "format_spec": {"type": "csv", "type_spec": {"file": "missing.csv"}},
        },
    )
    with pytest.raises(EntryNotFoundError):
        input_reader.read(spec)
    assert len(cache) == 0


def test_multiple_joins_columns(input_reader, series_dir):
    spec = FormatSpec(
        type="multiple",
        type_spec={
            "format_specs": [
                {"type": "csv", "type_spec": {"file": str(series_dir / "0.1" / "data.csv")}},
                {
                    "type": "dat",
                    "fields": ["u", "v"],
                    "type_spec": {"file": str(series_dir / "0.2" / "data.dat")},
                },
            ]
        },
    )
    df = input_reader.read(spec)
    assert list(df.columns) == ["x", "y", "u", "v"]
    assert len(df) == 6
    assert df["v"].tolist() == df["y"].tolist()


def test_multiple_with_time_series_and_fields(input_reader, series_dir):
    spec = FormatSpec(
        type="multiple",
        fields=["t", "x", "y", "t2", "a", "b"],
        type_spec={
            "format_specs": [
                _series_spec(series_dir).model_dump(),
                {
                    "type": "time-series",
                    "type_spec": {
                        "file": "data.dat",
                        "directory": str(series_dir),
                        "format_spec": {"type": "dat"},
                    },
                },
            ]
        },
    )
    df = input_reader.read(spec)
    assert list(df.columns) == ["t", "x", "y", "t2", "a", "b"]
    assert df["t"].tolist() == df["t2"].tolist()


def test_multiple_row_count_mismatch(input_reader, series_dir, tmp_path):
    short = tmp_path / "short.csv"
    short.write_text("z\n1\n")
    spec = FormatSpec(
        type="multiple",
        type_spec={
            "format_specs": [
                {"type": "csv", "type_spec": {"file": str(series_dir / "0.1" / "data.csv")}},
                {"type": "csv", "type_spec": {"file": str(short)}},
            ]
        },
    )
    with pytest.raises(StructuralError, match="1 rows, expected 6"):
        input_reader.read(spec)


def test_multiple_without_inputs(input_reader):
    with pytest.raises(ConfigurationError):
        input_reader.read(FormatSpec(type="multiple", type_spec={"format_specs": []}))
    with pytest.raises(ConfigurationError):
        input_reader.read(FormatSpec(type="multiple"))
