import tarfile
import zipfile
from pathlib import Path

import pytest

from post_parser.archive.builder import ArchiveBuilder
from post_parser.archive.cache import ArchiveCache
from post_parser.helpers import init_logger
from post_parser.parsing.registry import ReaderRegistry
from post_parser.services.time_series import TimeSeriesAssembler

TIMES = ["0.1", "0.2", "0.3"]
XS = [0, 1, 2, 3, 4, 5]
YS = [0, 1, 2, 2, 1, 0]


def write_series(root: Path, times=TIMES, rows: int = 6) -> Path:
    """Write a time series with data.csv and data.dat in every time directory."""
    for t in times:
        d = root / t
        d.mkdir(parents=True)
        csv_lines = ["x,y"] + [f"{x},{y}" for x, y in zip(XS[:rows], YS[:rows])]
        (d / "data.csv").write_text("\n".join(csv_lines) + "\n")
        dat_lines = ["# x y"] + [f"{x} {y}" for x, y in zip(XS[:rows], YS[:rows])]
        (d / "data.dat").write_text("\n".join(dat_lines) + "\n")
    return root


def pack_tar(src: Path, archive: Path, mode: str = "w") -> Path:
    with tarfile.open(archive, mode) as tf:
        for p in sorted(src.rglob("*")):
            tf.add(p, arcname=p.relative_to(src).as_posix(), recursive=False)
    return archive


def pack_zip(src: Path, archive: Path) -> Path:
    # only regular files: parent directories are implicit
    with zipfile.ZipFile(archive, "w") as zf:
        for p in sorted(src.rglob("*")):
            if p.is_file():
                zf.write(p, arcname=p.relative_to(src).as_posix())
    return archive


@pytest.fixture
def logger():
    return init_logger("test", "INFO")


@pytest.fixture
def registry(logger):
    return ReaderRegistry(logger=logger)


@pytest.fixture
def cache(logger):
    return ArchiveCache(builder=ArchiveBuilder(logger), logger=logger)


@pytest.fixture
def assembler(registry, logger, cache):
    return TimeSeriesAssembler(reader_registry=registry, logger=logger, archive_cache=cache)


@pytest.fixture
def series_dir(tmp_path: Path) -> Path:
    return write_series(tmp_path / "series")
